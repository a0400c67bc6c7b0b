from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from dotenv import load_dotenv

from model_processor.config import ModelProcessorConfig
from model_processor.errors import MissingRequiredFieldError, SettingsError
from model_processor.settings import build_config

app = typer.Typer(help="Model processor settings")
LOGGER = logging.getLogger(__name__)


def main() -> None:
    """Allow `python -m model_processor` execution."""
    app()


@app.command("show")
def show(
    settings_file: Optional[Path] = typer.Option(None, "--settings-file", "-f", help="JSON settings file."),
    model: Optional[str] = typer.Option(None, "--model", help="Model location (file, http(s) or classpath)."),
    model_fetch: Optional[list[str]] = typer.Option(
        None,
        "--model-fetch",
        help="Model output to fetch; repeat or comma separate.",
    ),
    expression: Optional[str] = typer.Option(None, "--expression", help="Expression deriving the model input."),
    mode: Optional[str] = typer.Option(None, "--mode", help="Output mode: payload, header or tuple."),
    output_name: Optional[str] = typer.Option(None, "--output-name", help="Output key for header/tuple modes."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print JSON output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Print the resolved settings as JSON."""
    _configure_logging(verbose)
    config = _resolve(settings_file, model, model_fetch, expression, mode, output_name)
    result = config.validate()
    if not result.ok:
        typer.secho(
            f"Missing required option(s): {', '.join(result.missing)}",
            fg=typer.colors.YELLOW,
            err=True,
        )
    typer.echo(json.dumps(config.to_dict(), indent=2 if pretty else None))


@app.command("validate")
def validate_command(
    settings_file: Optional[Path] = typer.Option(None, "--settings-file", "-f", help="JSON settings file."),
    model: Optional[str] = typer.Option(None, "--model", help="Model location (file, http(s) or classpath)."),
    model_fetch: Optional[list[str]] = typer.Option(
        None,
        "--model-fetch",
        help="Model output to fetch; repeat or comma separate.",
    ),
    expression: Optional[str] = typer.Option(None, "--expression", help="Expression deriving the model input."),
    mode: Optional[str] = typer.Option(None, "--mode", help="Output mode: payload, header or tuple."),
    output_name: Optional[str] = typer.Option(None, "--output-name", help="Output key for header/tuple modes."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Fail with exit code 1 when a required option is missing."""
    _configure_logging(verbose)
    config = _resolve(settings_file, model, model_fetch, expression, mode, output_name)
    try:
        config.require_valid()
    except MissingRequiredFieldError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo("Configuration OK")


def _resolve(
    settings_file: Optional[Path],
    model: Optional[str],
    model_fetch: Optional[list[str]],
    expression: Optional[str],
    mode: Optional[str],
    output_name: Optional[str],
) -> ModelProcessorConfig:
    load_dotenv(dotenv_path=".env")
    overrides: dict[str, Any] = {}
    if model is not None:
        overrides["model"] = model
    if model_fetch:
        overrides["model_fetch"] = ",".join(model_fetch)
    if expression is not None:
        overrides["expression"] = expression
    if mode is not None:
        overrides["mode"] = mode
    if output_name is not None:
        overrides["output_name"] = output_name
    try:
        return build_config(settings_file=settings_file, overrides=overrides)
    except SettingsError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
