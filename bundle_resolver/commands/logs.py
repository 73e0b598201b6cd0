import json
import time
from pathlib import Path

import click

from ..logging_setup import DEFAULT_PATH


def _matches(line: str, filter_text: str | None, specifier: str | None) -> bool:
    if filter_text and filter_text not in line:
        return False
    if specifier:
        try:
            record = json.loads(line)
        except ValueError:
            return False
        return isinstance(record, dict) and record.get("specifier") == specifier
    return True


@click.command("logs")
@click.option("--path", default=DEFAULT_PATH, help="Path to JSONL log file")
@click.option("--follow/--no-follow", default=False, help="Tail the log")
@click.option("--filter", "filter_text", default=None, help="Substring to filter lines")
@click.option("--specifier", default=None, help="Only show decisions for this specifier")
def logs_cmd(path: str, follow: bool, filter_text: str | None, specifier: str | None):
    """Show the JSONL resolution log."""
    p = Path(path)
    if not p.exists():
        click.echo(f"No log file at {p}")
        return

    with p.open("r", encoding="utf-8") as f:
        if follow:
            # seek to end
            f.seek(0, 2)
            while True:
                line = f.readline()
                if not line:
                    time.sleep(0.25)
                    continue
                if _matches(line, filter_text, specifier):
                    click.echo(line.rstrip())
        else:
            for line in f:
                if _matches(line, filter_text, specifier):
                    click.echo(line.rstrip())
