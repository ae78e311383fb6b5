"""Config commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from dataplatform_sdk import InvalidParameterError, validation

console = Console()

OUTPUT_FORMATS = ("table", "json")

# Keys checked with the same gate the SDK applies before each request
IDENTITY_CHECKS: dict[str, Callable[[str], None]] = {
    "user_id": lambda value: validation.validate_user_id(value, "config set"),
    "integrator_guid": lambda value: validation.validate_guid(value, "integrator_guid", "config set"),
    "integrator_name": lambda value: validation.validate_name(value, "integrator_name", "config set"),
    "server_name": lambda value: validation.validate_name(value, "server_name", "config set"),
}


def _display(key: str, value: Any) -> str:
    if key == "api_key" and value:
        return f"{value[:8]}...{value[-4:]}" if len(value) > 12 else "***"
    return str(value)


@click.group()
def config() -> None:
    """Manage CLI configuration."""


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value.

    Server, user and integrator identities are checked before they are saved,
    so later commands never send an unusable path segment.

    Example:
        dataplatform config set platform_url https://localhost:9443
        dataplatform config set integrator_guid 7e3d4a1f-9b62-4c8e-a5d0-2f1b6c9e8a47
    """
    config_manager = ctx.obj["config_manager"]

    try:
        if key in IDENTITY_CHECKS:
            IDENTITY_CHECKS[key](value)
        if key == "output_format" and value not in OUTPUT_FORMATS:
            raise InvalidParameterError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        config_manager.set(key, value)
    except KeyError:
        console.print(f"[red]✗[/red] Unknown configuration key '{key}'")
        raise SystemExit(1) from None
    except InvalidParameterError as e:
        console.print(f"[red]✗[/red] Invalid value for {key}: {e}")
        raise SystemExit(1) from None
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid value for {key}: {e.errors()[0]['msg']}")
        raise SystemExit(1) from None
    console.print(f"[green]✓[/green] Set {key} = {_display(key, value)}")


@config.command("get")
@click.argument("key")
@click.pass_context
def config_get(ctx: click.Context, key: str) -> None:
    """Get a configuration value.

    Example:
        dataplatform config get server_name
    """
    value = ctx.obj["config_manager"].get(key)

    if value is None:
        console.print(f"[yellow]Configuration key '{key}' not set[/yellow]")
    else:
        console.print(f"{key} = {_display(key, value)}")


@config.command("list")
@click.pass_context
def config_list(ctx: click.Context) -> None:
    """List all configuration values; the API key is masked."""
    current = ctx.obj["config_manager"].load()

    table = Table(title="Data Platform Configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in current.model_dump(exclude_none=True).items():
        table.add_row(key, _display(key, value))

    console.print(table)


@config.command("delete")
@click.argument("key")
@click.pass_context
def config_delete(ctx: click.Context, key: str) -> None:
    """Reset a configuration value to its default.

    Example:
        dataplatform config delete integrator_guid
    """
    ctx.obj["config_manager"].delete(key)
    console.print(f"[green]✓[/green] Deleted {key}")
