"""Resolve command - run specifiers through the bundle resolver."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from ..config import CONFIG_ENV_VAR
from ..config import load_config
from ..console import console
from ..console import err_console
from ..errors import BundleResolverError
from ..module_resolution import BundlePathResolver
from ..module_resolution import CachingResolver
from ..ui import display_error

logger = logging.getLogger(__name__)


@click.command("resolve")
@click.argument("specifiers", nargs=-1, required=True)
@click.option(
    "--config",
    "-c",
    "config_path",
    envvar=CONFIG_ENV_VAR,
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Resolution config (YAML/JSON); defaults to ${CONFIG_ENV_VAR}",
)
@click.option("--importer", "-i", default=None, help="Absolute path of the importing file")
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory root_dir is relative to (default: current directory)",
)
@click.option("--json", "as_json", is_flag=True, help="Output JSON instead of a table")
def resolve_cmd(
    specifiers: tuple[str, ...],
    config_path: Path,
    importer: str | None,
    base_dir: Path | None,
    as_json: bool,
):
    """Resolve import SPECIFIERS to files under the configured root.

    Specifiers no rule can place are reported as deferred: the bundler's
    generic resolution handles them.

    Examples:

        \b
        bundle-resolver resolve @angular/core -c rollup-paths.yaml
        bundle-resolver resolve ./sibling -i $PWD/bin/pkg/mod.js -c rollup-paths.yaml
    """
    try:
        config = load_config(config_path)
        resolver = CachingResolver(BundlePathResolver(config, base_dir))
        logger.debug(
            f"running with\n"
            f"  cwd: {resolver.base_dir}\n"
            f"  workspaceName: {config.workspace_name}\n"
            f"  rootDir: {config.root_dir}\n"
            f"  moduleMappings: {json.dumps(config.mapping_dict())}\n"
            f"  nodeModulesRoot: {config.node_modules_root}"
        )
        results = [(spec, *resolver.resolve_with_layer(spec, importer)) for spec in specifiers]
    except BundleResolverError as e:
        display_error(err_console, e)
        sys.exit(1)

    if as_json:
        payload = [{"specifier": spec, "layer": layer, "resolved": resolved} for spec, resolved, layer in results]
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title="Resolution", show_header=True, header_style="bold cyan")
    table.add_column("Specifier", style="green")
    table.add_column("Rule", style="yellow")
    table.add_column("Resolved")

    for spec, resolved, layer in results:
        if resolved is None:
            table.add_row(escape(spec), "[dim]-[/dim]", "[dim]deferred to generic resolution[/dim]")
        else:
            table.add_row(escape(spec), layer, escape(resolved))

    console.print(table)
