"""Configuration management commands."""

import os
from typing import Optional

import typer
from pydantic import ValidationError

from taskman_cli.config import ENDPOINT_ENV_VAR, get_config_manager
from taskman_cli.ui.formatters import format_info, format_success
from taskman_cli.utils.console import get_console
from taskman_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskman_cli.utils.typer_helpers import SuggestingGroup

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the current configuration."""
    config_manager = get_config_manager()
    for section, values in config_manager.config.model_dump().items():
        for key, value in values.items():
            console.print(f"[cyan]{section}.{key}[/cyan] = {value}")
    console.print(f"[dim]tasks url: {config_manager.tasks_url}[/dim]")
    console.print(f"[dim]config file: {config_manager.config_file}[/dim]")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., api.endpoint)"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager().get(key)
    if value is None:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_INVALID_ARGS
        )
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., api.endpoint)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_manager().set(key, value)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_INVALID_ARGS
        ) from e
    except ValidationError as e:
        raise AppError(
            f"Invalid value for '{key}': {value}", exit_code=ERROR_INVALID_ARGS
        ) from e

    format_success(f"Configuration '{key}' set to '{value}'")
    if key == "api.endpoint" and os.environ.get(ENDPOINT_ENV_VAR):
        format_info(f"{ENDPOINT_ENV_VAR} is set and takes precedence")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_info("Cancelled")
            return

    try:
        get_config_manager().reset(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_INVALID_ARGS
        ) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
