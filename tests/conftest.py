from __future__ import annotations

import os
from typing import Iterator

import pytest

OPTION_VARIABLES = tuple(
    f"TENSORFLOW_{name}" for name in ("MODEL", "MODEL_FETCH", "EXPRESSION", "MODE", "OUTPUT_NAME")
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep a developer's TENSORFLOW_* variables out of the run."""
    for name in OPTION_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    yield
    # load_dotenv writes straight into os.environ
    for name in OPTION_VARIABLES:
        os.environ.pop(name, None)
