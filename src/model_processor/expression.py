from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Union

from model_processor.errors import SettingsError

LOGGER = logging.getLogger(__name__)

Evaluator = Callable[[Any], Any]


class ExpressionParser(Protocol):
    """Compiles expression text into a callable evaluated against a message."""

    def parse(self, source: str) -> Evaluator:
        ...


@dataclass(frozen=True)
class NoExpression:
    """No expression configured: the raw message payload is the model input."""

    @property
    def source(self) -> None:
        return None

    def __bool__(self) -> bool:
        return False


NO_EXPRESSION = NoExpression()


@dataclass(frozen=True)
class DeferredExpression:
    """Expression text recorded for the pipeline to compile later."""

    source: str


@dataclass(frozen=True)
class CompiledExpression:
    source: str
    compiled: Evaluator

    def evaluate(self, message: Any) -> Any:
        return self.compiled(message)


InputExpression = Union[NoExpression, DeferredExpression, CompiledExpression]


def parse_expression(text: str | None, parser: ExpressionParser | None = None) -> InputExpression:
    """Turn configured expression text into an input expression handle."""
    if text is None or not text.strip():
        return NO_EXPRESSION
    source = text.strip()
    if parser is None:
        return DeferredExpression(source=source)
    try:
        compiled = parser.parse(source)
    except Exception as exc:
        raise SettingsError(f"Invalid expression '{source}': {exc}") from exc
    LOGGER.debug("Compiled input expression %s", source)
    return CompiledExpression(source=source, compiled=compiled)
