"""Shared Rich console instances for CLI output."""

from rich.console import Console

console = Console()

# Diagnostics and error panels go to stderr so resolved paths stay pipeable
err_console = Console(stderr=True)

__all__ = ["console", "err_console"]
