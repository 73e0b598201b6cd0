"""Clean error display for resolution and configuration errors."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..errors import BundleResolverError
from ..errors import ConfigError
from ..errors import RelativeImportWithoutImporterError


def _hint_for(error: BundleResolverError) -> str | None:
    if isinstance(error, RelativeImportWithoutImporterError):
        return "Pass the importing file with --importer so the relative path can be rebased."
    if isinstance(error, ConfigError):
        return "Check --config or the BUNDLE_RESOLVER_CONFIG environment variable."
    return None


def display_error(console: Console, error: BundleResolverError) -> None:
    """Render a bundle-resolver error as a red panel.

    Args:
        console: Rich console to print to
        error: The error to display
    """
    content = Text()
    content.append(str(error) or type(error).__name__)

    if hint := _hint_for(error):
        content.append("\n\n")
        content.append(hint, style="dim")

    title = escape(type(error).__name__)
    console.print(Panel(content, title=f"[bold red]{title}[/bold red]", border_style="red", expand=False))
