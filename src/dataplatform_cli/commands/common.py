"""Helpers shared by the element and key commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.table import Table

from dataplatform_cli.config import CLIConfig
from dataplatform_sdk import DataPlatformClient, DataPlatformError, models
from dataplatform_sdk.addressing import DATABASE_DERIVED_COLUMN, RESOURCE_KINDS, ResourceKind
from dataplatform_sdk.models import ElementProperties, MetadataElement

console = Console()

T = TypeVar("T")

# CLI kind name ("database", "schema", ...) -> (resource kind, properties model).
# Derived columns are written through the column manager.
KINDS: dict[str, tuple[ResourceKind, type[ElementProperties]]] = {
    kind.segments[-1].removesuffix("s"): (kind, getattr(models, f"{kind.type_name}Properties"))
    for kind in RESOURCE_KINDS.values()
    if kind is not DATABASE_DERIVED_COLUMN
}

KIND_CHOICE = click.Choice(list(KINDS), case_sensitive=False)


def load_config(ctx: click.Context) -> CLIConfig:
    return ctx.obj["config_manager"].load()


def integrator_of(config: CLIConfig) -> tuple[str, str]:
    """Integrator identity for mutating commands."""
    if not config.integrator_guid or not config.integrator_name:
        console.print(
            "[red]✗[/red] Set integrator_guid and integrator_name first "
            "(dataplatform config set integrator_guid ...)"
        )
        raise SystemExit(1)
    return config.integrator_guid, config.integrator_name


def run_with_client(config: CLIConfig, call: Callable[[DataPlatformClient], Awaitable[T]]) -> T:
    """Open a client from the CLI configuration, run one call and report SDK errors."""

    async def _run() -> T:
        async with DataPlatformClient(
            config.platform_url,
            config.server_name,
            api_key=config.api_key,
            timeout=config.timeout,
            max_page_size=config.max_page_size,
        ) as client:
            return await call(client)

    try:
        return asyncio.run(_run())
    except DataPlatformError as e:
        console.print(f"[red]✗[/red] {type(e).__name__}: {e}")
        raise SystemExit(1) from None


def resource_of(client: DataPlatformClient, kind: str) -> Any:
    resource_kind = KINDS[kind.lower()][0]
    return getattr(client, resource_kind.segments[-1])


def print_elements(elements: list[MetadataElement], title: str, output_format: str) -> None:
    if output_format == "json":
        console.print_json(data=[e.model_dump(mode="json", by_alias=True) for e in elements])
        return

    table = Table(title=title)
    table.add_column("GUID", style="cyan")
    table.add_column("Qualified Name", style="white")
    table.add_column("Display Name", style="blue")
    table.add_column("Zones", style="yellow")

    for element in elements:
        properties = element.properties  # type: ignore[attr-defined]
        table.add_row(
            element.guid,
            properties.qualified_name or "",
            properties.display_name or "",
            ", ".join(element.element_header.zone_membership),
        )

    console.print(table)
    console.print(f"\nShowing {len(elements)} elements")


def print_element(element: MetadataElement, output_format: str) -> None:
    if output_format == "json":
        console.print_json(data=element.model_dump(mode="json", by_alias=True))
        return

    header = element.element_header
    console.print(f"\n[bold]{header.type.type_name if header.type else 'Element'} {element.guid}[/bold]\n")
    properties = element.properties.model_dump(exclude_none=True)  # type: ignore[attr-defined]
    for key, value in properties.items():
        console.print(f"{key + ':':<24} {value}")
    if header.zone_membership:
        console.print(f"{'zones:':<24} {', '.join(header.zone_membership)}")
