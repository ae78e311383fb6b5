"""Element commands, one set for every kind of database asset."""

from __future__ import annotations

import click

from dataplatform_cli.commands.common import (
    KIND_CHOICE,
    KINDS,
    console,
    integrator_of,
    load_config,
    print_element,
    print_elements,
    resource_of,
    run_with_client,
)

paging = [
    click.option("--start-from", default=0, show_default=True, help="Paging start point"),
    click.option("--page-size", default=50, show_default=True, help="Max results"),
]


def with_paging(f):
    for option in reversed(paging):
        f = option(f)
    return f


@click.command("find")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("search_string")
@with_paging
@click.pass_context
def find(ctx: click.Context, kind: str, search_string: str, start_from: int, page_size: int) -> None:
    """Find elements whose properties match a regular expression.

    Example:
        dataplatform find column "order.*" --page-size 10
    """
    config = load_config(ctx)
    elements = run_with_client(
        config,
        lambda client: resource_of(client, kind).find(config.user_id, search_string, start_from, page_size),
    )
    print_elements(elements, f"{kind.capitalize()} search: {search_string}", config.output_format)


@click.command("by-name")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("name")
@with_paging
@click.pass_context
def by_name(ctx: click.Context, kind: str, name: str, start_from: int, page_size: int) -> None:
    """List elements with exactly this qualified or display name."""
    config = load_config(ctx)
    elements = run_with_client(
        config,
        lambda client: resource_of(client, kind).get_by_name(config.user_id, name, start_from, page_size),
    )
    print_elements(elements, f"{kind.capitalize()} named {name}", config.output_format)


@click.command("children")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("parent_guid")
@with_paging
@click.pass_context
def children(ctx: click.Context, kind: str, parent_guid: str, start_from: int, page_size: int) -> None:
    """List the elements of KIND that belong to a parent element.

    Example:
        dataplatform children schema 5f2c...   # schemas of a database
    """
    config = load_config(ctx)
    elements = run_with_client(
        config,
        lambda client: resource_of(client, kind).list_for_parent(config.user_id, parent_guid, start_from, page_size),
    )
    print_elements(elements, f"{kind.capitalize()} elements of {parent_guid}", config.output_format)


@click.command("for-integrator")
@with_paging
@click.pass_context
def for_integrator(ctx: click.Context, start_from: int, page_size: int) -> None:
    """List the databases attributed to the configured integrator."""
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    elements = run_with_client(
        config,
        lambda client: client.databases.list_for_integrator(
            config.user_id, integrator_guid, integrator_name, start_from, page_size
        ),
    )
    print_elements(elements, f"Databases of {integrator_name}", config.output_format)


@click.command("get")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("guid")
@click.pass_context
def get(ctx: click.Context, kind: str, guid: str) -> None:
    """Show one element."""
    config = load_config(ctx)
    element = run_with_client(config, lambda client: resource_of(client, kind).get_by_guid(config.user_id, guid))
    print_element(element, config.output_format)


@click.command("create")
@click.argument("kind", type=KIND_CHOICE)
@click.option("--qualified-name", required=True, help="Unique name of the new element")
@click.option("--display-name", help="Display name")
@click.option("--description", help="Description")
@click.option("--parent", "parent_guid", help="GUID of the parent element (all kinds except database)")
@click.option("--template", "template_guid", help="GUID of an element to copy properties from")
@click.pass_context
def create(
    ctx: click.Context,
    kind: str,
    qualified_name: str,
    display_name: str | None,
    description: str | None,
    parent_guid: str | None,
    template_guid: str | None,
) -> None:
    """Create an element, optionally from a template.

    Example:
        dataplatform create table --parent 5f2c... --qualified-name SalesDB.public.orders
    """
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    properties = KINDS[kind.lower()][1](
        qualified_name=qualified_name,
        display_name=display_name,
        description=description,
    )

    def _create(client):
        resource = resource_of(client, kind)
        if template_guid:
            return resource.create_from_template(
                config.user_id, integrator_guid, integrator_name, template_guid, properties, parent_guid
            )
        return resource.create(config.user_id, integrator_guid, integrator_name, properties, parent_guid)

    guid = run_with_client(config, _create)
    console.print(f"[green]✓[/green] {kind.capitalize()} created: {guid}")


@click.command("publish")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("guid")
@click.pass_context
def publish(ctx: click.Context, kind: str, guid: str) -> None:
    """Make an element visible to consumers."""
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    run_with_client(
        config,
        lambda client: resource_of(client, kind).publish(config.user_id, integrator_guid, integrator_name, guid),
    )
    console.print(f"[green]✓[/green] Published {kind} {guid}")


@click.command("withdraw")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("guid")
@click.pass_context
def withdraw(ctx: click.Context, kind: str, guid: str) -> None:
    """Hide an element from consumers."""
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    run_with_client(
        config,
        lambda client: resource_of(client, kind).withdraw(config.user_id, integrator_guid, integrator_name, guid),
    )
    console.print(f"[green]✓[/green] Withdrew {kind} {guid}")


@click.command("remove")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("guid")
@click.argument("qualified_name")
@click.pass_context
def remove(ctx: click.Context, kind: str, guid: str, qualified_name: str) -> None:
    """Remove an element. QUALIFIED_NAME must match the element's current name."""
    config = load_config(ctx)
    integrator_guid, integrator_name = integrator_of(config)
    run_with_client(
        config,
        lambda client: resource_of(client, kind).remove(
            config.user_id, integrator_guid, integrator_name, guid, qualified_name
        ),
    )
    console.print(f"[green]✓[/green] Removed {kind} {guid}")


COMMANDS = [find, by_name, children, for_integrator, get, create, publish, withdraw, remove]
