"""Error types raised by bundle-resolver.

Only two situations are errors:
- A relative specifier arrives with no importing file to rebase it on.
- The resolution configuration cannot be loaded or validated.

Everything else (unmatched prefixes, missing mapping targets, missing
workspace files) is a normal miss and yields the unresolved sentinel.
"""

from pathlib import Path


class BundleResolverError(Exception):
    """Base class for all bundle-resolver errors."""


class ResolutionError(BundleResolverError):
    """Raised when a specifier cannot be resolved for a structural reason."""

    def __init__(self, specifier: str, message: str):
        self.specifier = specifier
        self.message = message
        super().__init__(message)


class RelativeImportWithoutImporterError(ResolutionError):
    """Raised when a ./ or ../ specifier has no importing file."""

    def __init__(self, specifier: str):
        super().__init__(specifier, f"cannot resolve relative paths without an importer: '{specifier}'")


class ConfigError(BundleResolverError):
    """Raised when a resolution configuration file is missing or invalid."""

    def __init__(self, path: Path | str | None, message: str):
        self.path = Path(path) if path is not None else None
        self.message = message
        location = f"{self.path}: " if self.path is not None else ""
        super().__init__(f"{location}{message}")
