"""Data platform CLI main entry point."""

from __future__ import annotations

import logging

import click

from dataplatform_cli import __version__
from dataplatform_cli.commands import config as config_cmd
from dataplatform_cli.commands import elements as elements_cmd
from dataplatform_cli.commands import keys as keys_cmd
from dataplatform_cli.config import ConfigManager


@click.group()
@click.version_option(version=__version__, prog_name="dataplatform")
@click.option("-v", "--verbose", is_flag=True, help="Log requests sent to the metadata server")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Data platform command-line interface.

    Catalog databases, schemas, tables, views and columns on a metadata server.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    if "config_manager" not in ctx.obj:
        ctx.obj["config_manager"] = ConfigManager()


cli.add_command(config_cmd.config)
for command in elements_cmd.COMMANDS:
    cli.add_command(command)
cli.add_command(keys_cmd.primary_key)
cli.add_command(keys_cmd.foreign_key)


if __name__ == "__main__":
    cli()
