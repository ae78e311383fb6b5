"""Primary and foreign key commands."""

from __future__ import annotations

import click

from dataplatform_cli.commands.common import console, integrator_of, load_config, run_with_client
from dataplatform_sdk import DatabaseForeignKeyProperties, DatabasePrimaryKeyProperties, KeyPattern


@click.group("primary-key")
def primary_key() -> None:
    """Manage primary key classifications of columns."""


@primary_key.command("set")
@click.argument("column_guid")
@click.option("--name", help="Name of the primary key")
@click.option(
    "--key-pattern",
    type=click.Choice([p.value for p in KeyPattern]),
    default=KeyPattern.LOCAL_KEY.value,
    show_default=True,
)
@click.pass_context
def primary_key_set(ctx: click.Context, column_guid: str, name: str | None, key_pattern: str) -> None:
    """Mark a column as the primary key of its table."""
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    properties = DatabasePrimaryKeyProperties(name=name, key_pattern=KeyPattern(key_pattern))
    run_with_client(
        config,
        lambda client: client.columns.set_primary_key(
            config.user_id, integrator_guid, integrator_name, column_guid, properties
        ),
    )
    console.print(f"[green]✓[/green] Column {column_guid} is now a primary key")


@primary_key.command("remove")
@click.argument("column_guid")
@click.pass_context
def primary_key_remove(ctx: click.Context, column_guid: str) -> None:
    """Remove the primary key classification from a column."""
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    run_with_client(
        config,
        lambda client: client.columns.remove_primary_key(config.user_id, integrator_guid, integrator_name, column_guid),
    )
    console.print(f"[green]✓[/green] Primary key removed from column {column_guid}")


@click.group("foreign-key")
def foreign_key() -> None:
    """Manage foreign key relationships between columns."""


@foreign_key.command("add")
@click.argument("primary_key_column_guid")
@click.argument("foreign_key_column_guid")
@click.option("--name", help="Name of the relationship")
@click.option("--description", help="Description of the relationship")
@click.option("--confidence", type=int, help="Confidence level (0-100)")
@click.pass_context
def foreign_key_add(
    ctx: click.Context,
    primary_key_column_guid: str,
    foreign_key_column_guid: str,
    name: str | None,
    description: str | None,
    confidence: int | None,
) -> None:
    """Link a foreign key column to the primary key it refers to."""
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    properties = DatabaseForeignKeyProperties(name=name, description=description, confidence=confidence)
    run_with_client(
        config,
        lambda client: client.columns.add_foreign_key(
            config.user_id,
            integrator_guid,
            integrator_name,
            primary_key_column_guid,
            foreign_key_column_guid,
            properties,
        ),
    )
    console.print(f"[green]✓[/green] Foreign key {foreign_key_column_guid} → {primary_key_column_guid} added")


@foreign_key.command("remove")
@click.argument("primary_key_column_guid")
@click.argument("foreign_key_column_guid")
@click.pass_context
def foreign_key_remove(ctx: click.Context, primary_key_column_guid: str, foreign_key_column_guid: str) -> None:
    """Remove the foreign key relationship between two columns."""
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    run_with_client(
        config,
        lambda client: client.columns.remove_foreign_key(
            config.user_id, integrator_guid, integrator_name, primary_key_column_guid, foreign_key_column_guid
        ),
    )
    console.print(f"[green]✓[/green] Foreign key {foreign_key_column_guid} → {primary_key_column_guid} removed")
