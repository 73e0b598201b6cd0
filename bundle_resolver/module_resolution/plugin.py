"""Bundler plugin hook around the path mapping resolver.

The hosting bundler calls ``resolve_id`` for every import it encounters. A
returned path is used as the module identity; None tells the bundler to run
its own generic (package directory based) resolution, configured with
``generic_resolver_options``.
"""

import logging
from pathlib import Path
from typing import Any

from ..config import ResolutionConfig
from .resolvers import BundlePathResolver
from .resolvers import CachingResolver

logger = logging.getLogger(__name__)

PLUGIN_NAME = "resolveBazel"

# Entry-point fields the generic resolver tries, most modern build first
GENERIC_MAIN_FIELDS = ("es2020", "es2015", "module", "browser")


class ResolverPlugin:
    """Bundler plugin exposing the ``resolve_id`` hook."""

    name = PLUGIN_NAME

    def __init__(self, resolver: BundlePathResolver | CachingResolver):
        self.resolver = resolver

    @property
    def config(self) -> ResolutionConfig:
        return self.resolver.config

    def resolve_id(self, specifier: str, importer: str | None = None) -> str | None:
        """Resolve hook: a path, or None to defer to generic resolution.

        Raises:
            RelativeImportWithoutImporterError: ./ or ../ specifier with no importer
        """
        return self.resolver.resolve(specifier, importer)

    def generic_resolver_options(self) -> dict[str, Any]:
        """Options for the generic resolver that handles deferred specifiers."""
        return {
            "main_fields": list(GENERIC_MAIN_FIELDS),
            "jail": self.resolver.base_dir,
            "module_directory": self.config.node_modules_root,
        }

    def __repr__(self) -> str:
        return f"ResolverPlugin({self.name}, {self.resolver!r})"


def create_plugin(
    config: ResolutionConfig,
    base_dir: Path | str | None = None,
    *,
    cache: bool = False,
) -> ResolverPlugin:
    """Build the resolver plugin for one bundling run.

    Args:
        config: Resolution configuration
        base_dir: Directory root_dir is relative to (default: current working directory)
        cache: Memoize results; only safe when files do not change mid-build

    Returns:
        ResolverPlugin ready to be registered with the bundler
    """
    resolver: BundlePathResolver | CachingResolver = BundlePathResolver(config, base_dir)
    if cache:
        resolver = CachingResolver(resolver)
    logger.debug(f"Created {PLUGIN_NAME} plugin with {resolver!r}")
    return ResolverPlugin(resolver)
