"""CLI commands for bundle-resolver."""

from .config import config_group
from .logs import logs_cmd
from .resolve import resolve_cmd

__all__ = ["config_group", "logs_cmd", "resolve_cmd"]
