"""Settings for a stream processor that feeds messages to a pre-trained model."""

from __future__ import annotations

from model_processor.config import DEFAULT_OUTPUT_NAME, ModelProcessorConfig, ValidationResult, validate
from model_processor.errors import MissingRequiredFieldError, SettingsError
from model_processor.expression import (
    NO_EXPRESSION,
    CompiledExpression,
    DeferredExpression,
    ExpressionParser,
    InputExpression,
    NoExpression,
    parse_expression,
)
from model_processor.locator import MODEL_FILE_EXTENSION, ModelLocator
from model_processor.modes import ORIGINAL_INPUT_KEY, OutputMode
from model_processor.settings import build_config, load_config

__all__ = [
    "CompiledExpression",
    "DEFAULT_OUTPUT_NAME",
    "DeferredExpression",
    "ExpressionParser",
    "InputExpression",
    "MODEL_FILE_EXTENSION",
    "MissingRequiredFieldError",
    "ModelLocator",
    "ModelProcessorConfig",
    "NO_EXPRESSION",
    "NoExpression",
    "ORIGINAL_INPUT_KEY",
    "OutputMode",
    "SettingsError",
    "ValidationResult",
    "build_config",
    "load_config",
    "parse_expression",
    "validate",
]
