"""bundle-resolver CLI - bundle-time module path mapping."""

import click

from . import __version__
from .commands import config_group
from .commands import logs_cmd
from .commands import resolve_cmd
from .logging_setup import init_console_logging
from .logging_setup import init_json_logging
from .logging_setup import verbose_from_env


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bundle-resolver")
@click.option("--verbose", "-v", is_flag=True, help="Trace every resolution decision to stderr (also: VERBOSE_LOGS=1)")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append structured JSONL logs to this file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_file: str | None):
    """Resolve import specifiers the way the compiler's path mapping did."""
    init_console_logging(verbose or verbose_from_env())
    if log_file:
        init_json_logging(log_file, "DEBUG")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


cli.add_command(resolve_cmd)
cli.add_command(config_group)
cli.add_command(logs_cmd)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
