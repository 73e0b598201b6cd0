"""Terminal display helpers for the resolver CLI."""

from .error_display import display_error

__all__ = ["display_error"]
