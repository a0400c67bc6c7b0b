from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Annotated, Any, Mapping

from pydantic import ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from model_processor.config import DEFAULT_OUTPUT_NAME, ModelProcessorConfig
from model_processor.errors import SettingsError
from model_processor.expression import ExpressionParser, parse_expression
from model_processor.locator import ModelLocator
from model_processor.modes import OutputMode

LOGGER = logging.getLogger(__name__)

PREFIX = "tensorflow"
ENV_PREFIX = "TENSORFLOW_"

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def split_fetch(text: str) -> list[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


def normalize_option(key: str) -> str:
    """Map ``model-fetch``, ``modelFetch`` and ``tensorflow.model-fetch`` to ``model_fetch``."""
    name = key.strip()
    if name.lower().startswith(PREFIX + "."):
        name = name[len(PREFIX) + 1 :]
    return _CAMEL_RE.sub(r"_\1", name).replace("-", "_").lower()


def _normalize_section(section: Mapping[str, Any], path: Path) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    spellings: dict[str, str] = {}
    for key, value in section.items():
        name = normalize_option(str(key))
        if name in normalized:
            raise SettingsError(f"Option '{key}' in {path} duplicates '{spellings[name]}'")
        normalized[name] = value
        spellings[name] = str(key)
    return normalized


class SettingsFileSource(JsonConfigSettingsSource):
    """JSON settings file, flat or nested under ``tensorflow``, with relaxed option names."""

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SettingsError(f"Settings file {file_path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise SettingsError(f"Settings file {file_path} must contain a JSON object")
        section = raw.get(PREFIX, raw)
        if not isinstance(section, dict):
            raise SettingsError(f"'{PREFIX}' in {file_path} must be a JSON object")
        values = _normalize_section(section, file_path)
        LOGGER.debug("Loaded %s option(s) from %s", len(values), file_path)
        return values


class SettingsDocument(BaseSettings):
    """Raw option values; CLI overrides beat ``TENSORFLOW_*`` variables, which beat the file."""

    model: str | None = None
    model_fetch: Annotated[list[str] | None, NoDecode] = None
    expression: str | None = None
    mode: str | None = OutputMode.PAYLOAD.value
    output_name: str = DEFAULT_OUTPUT_NAME

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="forbid",
        protected_namespaces=(),
    )

    @field_validator("model_fetch", mode="before")
    @classmethod
    def _split_fetch(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_fetch(value)
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, SettingsFileSource(settings_cls))

    def to_config(self, parser: ExpressionParser | None = None) -> ModelProcessorConfig:
        """Blank or null ``model``/``mode`` stay ``None`` so validation reports them."""
        model = (self.model or "").strip()
        mode = (self.mode or "").strip()
        return ModelProcessorConfig(
            model=ModelLocator.parse(model) if model else None,
            model_fetch=list(self.model_fetch) if self.model_fetch is not None else None,
            expression=parse_expression(self.expression, parser),
            mode=OutputMode.parse(mode) if mode else None,
            output_name=self.output_name,
        )


def _document_class(settings_file: Path | None) -> type[SettingsDocument]:
    if settings_file is None:
        return SettingsDocument

    class FileSettingsDocument(SettingsDocument):
        model_config = SettingsConfigDict(json_file=settings_file)

    return FileSettingsDocument


def build_config(
    *,
    settings_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    parser: ExpressionParser | None = None,
) -> ModelProcessorConfig:
    """Merge defaults, settings file, environment and overrides, without validating."""
    if settings_file is not None:
        settings_file = settings_file.expanduser()
        if not settings_file.is_file():
            raise SettingsError(f"Settings file not found: {settings_file}")
    init_values = {
        key: str(value) if isinstance(value, (OutputMode, ModelLocator)) else value
        for key, value in (overrides or {}).items()
    }
    try:
        document = _document_class(settings_file)(**init_values)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings: {exc}") from exc
    return document.to_config(parser)


def load_config(
    *,
    settings_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    parser: ExpressionParser | None = None,
) -> ModelProcessorConfig:
    """Build the configuration and fail fast when a required option is missing."""
    config = build_config(settings_file=settings_file, overrides=overrides, parser=parser)
    return config.require_valid()
