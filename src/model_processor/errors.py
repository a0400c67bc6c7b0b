from __future__ import annotations

from typing import Iterable


class SettingsError(RuntimeError):
    """Raised when processor settings are malformed."""


class MissingRequiredFieldError(SettingsError):
    """Raised when a required option is unset at validation time."""

    def __init__(self, fields: Iterable[str]):
        self.fields = tuple(fields)
        names = ", ".join(self.fields)
        super().__init__(f"Missing required option(s): {names}")
