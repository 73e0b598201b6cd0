"""bundle-resolver - bundle-time module path mapping."""

from .config import ResolutionConfig
from .config import load_config
from .errors import BundleResolverError
from .errors import ConfigError
from .errors import RelativeImportWithoutImporterError
from .errors import ResolutionError
from .module_resolution import BundlePathResolver
from .module_resolution import CachingResolver
from .module_resolution import ResolverPlugin
from .module_resolution import create_plugin

__version__ = "0.1.0"

__all__ = [
    "BundlePathResolver",
    "BundleResolverError",
    "CachingResolver",
    "ConfigError",
    "RelativeImportWithoutImporterError",
    "ResolutionConfig",
    "ResolutionError",
    "ResolverPlugin",
    "create_plugin",
    "load_config",
]
