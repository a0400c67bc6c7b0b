from __future__ import annotations

from enum import Enum

from model_processor.errors import SettingsError

ORIGINAL_INPUT_KEY = "original.input.data"


class OutputMode(str, Enum):
    """How model output is attached to the outbound message.

    ``payload`` replaces the payload and discards the input. ``header`` stores
    the output in the ``output_name`` header and passes the input through.
    ``tuple`` stores the output under ``output_name`` in a keyed payload and
    keeps the input under :data:`ORIGINAL_INPUT_KEY`.
    """

    PAYLOAD = "payload"
    HEADER = "header"
    TUPLE = "tuple"

    @classmethod
    def parse(cls, text: str) -> "OutputMode":
        normalized = text.strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        allowed = ", ".join(mode.value for mode in cls)
        raise SettingsError(f"Invalid mode '{text}'. Use one of: {allowed}")

    @property
    def passes_input_through(self) -> bool:
        return self is not OutputMode.PAYLOAD

    def __str__(self) -> str:
        return self.value
