from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from model_processor.errors import MissingRequiredFieldError, SettingsError
from model_processor.expression import NO_EXPRESSION, InputExpression
from model_processor.locator import ModelLocator
from model_processor.modes import OutputMode

__all__ = [
    "DEFAULT_OUTPUT_NAME",
    "MissingRequiredFieldError",
    "ModelProcessorConfig",
    "SettingsError",
    "ValidationResult",
    "validate",
]

DEFAULT_OUTPUT_NAME = "result"

# Option names as exposed under the ``tensorflow`` prefix, keyed by attribute.
OPTION_NAMES = {
    "model": "model",
    "model_fetch": "model-fetch",
    "expression": "expression",
    "mode": "mode",
    "output_name": "output-name",
}
REQUIRED_FIELDS = ("model", "mode")


@dataclass
class ModelProcessorConfig:
    """Settings read by the model processor pipeline.

    Populated once at startup and treated as read-only afterwards; callers that
    reassign fields later are responsible for their own synchronization.
    """

    model: ModelLocator | None = None
    model_fetch: list[str] | None = None
    expression: InputExpression = NO_EXPRESSION
    mode: OutputMode | None = OutputMode.PAYLOAD
    output_name: str = DEFAULT_OUTPUT_NAME

    def validate(self) -> "ValidationResult":
        return validate(self)

    def require_valid(self) -> "ModelProcessorConfig":
        validate(self).raise_for_missing()
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": str(self.model) if self.model is not None else None,
            "model-fetch": list(self.model_fetch) if self.model_fetch is not None else None,
            "expression": self.expression.source,
            "mode": self.mode.value if self.mode is not None else None,
            "output-name": self.output_name,
        }


@dataclass(frozen=True)
class ValidationResult:
    missing: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.missing

    def raise_for_missing(self) -> None:
        if self.missing:
            raise MissingRequiredFieldError(self.missing)


def validate(config: ModelProcessorConfig) -> ValidationResult:
    """Report every required option that is unset, in declaration order."""
    missing = tuple(
        OPTION_NAMES[name] for name in REQUIRED_FIELDS if getattr(config, name) is None
    )
    return ValidationResult(missing=missing)
