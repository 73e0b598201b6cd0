"""Config commands - inspect the effective resolution configuration."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from ..config import CONFIG_ENV_VAR
from ..config import load_config
from ..console import console
from ..console import err_console
from ..errors import ConfigError
from ..module_resolution import create_plugin
from ..ui import display_error


@click.group("config", invoke_without_command=True)
@click.pass_context
def config_group(ctx: click.Context):
    """Inspect resolution configuration."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@config_group.command("show")
@click.option(
    "--config",
    "-c",
    "config_path",
    envvar=CONFIG_ENV_VAR,
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Resolution config (YAML/JSON); defaults to ${CONFIG_ENV_VAR}",
)
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory root_dir is relative to (default: current directory)",
)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of tables")
def config_show(config_path: Path, base_dir: Path | None, as_json: bool):
    """Show the effective configuration and generic resolver options."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        display_error(err_console, e)
        sys.exit(1)

    plugin = create_plugin(config, base_dir)
    generic_options = plugin.generic_resolver_options()

    if as_json:
        click.echo(json.dumps({"config": config.to_dict(), "generic_resolver": generic_options}, indent=2))
        return

    console.print(f"[bold]Config:[/bold] {escape(str(config_path))}")
    console.print(f"  Workspace:          {escape(config.workspace_name)}")
    console.print(f"  Root dir:           {escape(config.root_dir)}")
    console.print(f"  Base dir:           {escape(generic_options['jail'])}")
    console.print(f"  Node modules root:  {escape(config.node_modules_root)}")
    console.print()

    if not config.module_mappings:
        console.print("[dim]No module mappings configured[/dim]")
    else:
        table = Table(title="Module Mappings (in precedence order)", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Prefix", style="green")
        table.add_column("Target")
        for position, (prefix, target) in enumerate(config.module_mappings, start=1):
            table.add_row(str(position), escape(prefix), escape(target))
        console.print(table)

    console.print()
    console.print(f"[dim]Deferred specifiers: main fields {', '.join(generic_options['main_fields'])}[/dim]")
