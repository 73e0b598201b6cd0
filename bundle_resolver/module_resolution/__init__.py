"""Module resolution for bundle-time path mapping.

This package maps import specifiers to files under a rooted build layout,
applying the same logical-name-to-physical-path table the compiler used.
"""

from .plugin import ResolverPlugin
from .plugin import create_plugin
from .resolvers import BundlePathResolver
from .resolvers import CachingResolver

__all__ = [
    "BundlePathResolver",
    "CachingResolver",
    "ResolverPlugin",
    "create_plugin",
]
