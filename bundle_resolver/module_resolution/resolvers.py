"""Bundle-time path mapping resolvers.

Concrete resolvers used by the bundler plugin:
- BundlePathResolver: 4-rule resolution mirroring compile-time path mapping
- CachingResolver: memoizing wrapper for builds where the tree is frozen
"""

import logging
import posixpath
from pathlib import Path

from ..config import ResolutionConfig
from ..errors import RelativeImportWithoutImporterError
from .lookup import escapes_upward
from .lookup import file_exists
from .lookup import join_path
from .lookup import prefer_module_variant
from .lookup import relative_path
from .lookup import resolve_in_root
from .lookup import strip_declaration_suffix
from .lookup import to_posix

logger = logging.getLogger(__name__)

# Layer names reported by resolve_with_layer
LAYER_LITERAL = "literal"
LAYER_RELATIVE = "relative"
LAYER_MAPPING = "mapping"
LAYER_WORKSPACE = "workspace"


def is_relative_specifier(specifier: str) -> bool:
    """Check for ./ or ../ after separator normalization."""
    normalized = to_posix(specifier)
    return normalized.startswith("./") or normalized.startswith("../")


class BundlePathResolver:
    """Resolves import specifiers against a rooted, path-mapped build layout.

    Resolution order (first match wins):
    1. Literal file (specifier names an existing file as written)
    2. Relative specifier (./x, ../x) rebased under root_dir - final either way
    3. Module mappings, in declared order, falling through on missing targets
    4. Workspace-relative specifier (<workspace_name>/path)

    A None result is the unresolved sentinel: the bundler should apply its
    generic resolution instead. The resolver holds no mutable state.
    """

    def __init__(self, config: ResolutionConfig, base_dir: Path | str | None = None):
        """Initialize resolver.

        Args:
            config: Resolution configuration
            base_dir: Directory root_dir is relative to (default: current working directory)
        """
        self.config = config
        self.base_dir = to_posix(Path(base_dir).absolute() if base_dir is not None else Path.cwd())

    @property
    def root_path(self) -> str:
        """Absolute path of the configured root directory."""
        return join_path(self.base_dir, self.config.root_dir)

    def resolve(self, specifier: str, importer: str | None = None) -> str | None:
        """Resolve a specifier to a file path, or None to defer."""
        resolved, _layer = self.resolve_with_layer(specifier, importer)
        return resolved

    def resolve_with_layer(self, specifier: str, importer: str | None = None) -> tuple[str | None, str | None]:
        """Resolve a specifier and report which rule produced the result.

        Returns:
            Tuple of (resolved_path, layer_name); both None when unresolved.
            layer_name is one of: literal, relative, mapping, workspace

        Raises:
            RelativeImportWithoutImporterError: ./ or ../ specifier with no importer
        """
        logger.debug(f"resolving '{specifier}' from {importer}")
        normalized = to_posix(specifier)

        # Rule 1: fully qualified specifier
        if self._literal_exists(specifier):
            logger.debug(
                f"resolved fully qualified '{specifier}'",
                extra={"event": "resolve", "specifier": specifier, "layer": LAYER_LITERAL},
            )
            return (specifier, LAYER_LITERAL)

        # Rule 2: relative specifier, never falls through
        if is_relative_specifier(normalized):
            if not importer:
                raise RelativeImportWithoutImporterError(specifier)
            resolved = self._resolve_relative(normalized, importer)
            return self._finish(specifier, resolved, LAYER_RELATIVE)

        # Rule 3: module mappings
        if resolved := self._resolve_mapped(normalized):
            return self._finish(specifier, resolved, LAYER_MAPPING)

        # Rule 4: workspace-relative
        resolved = self._resolve_workspace(normalized)
        return self._finish(specifier, resolved, LAYER_WORKSPACE)

    def _literal_exists(self, specifier: str) -> bool:
        if to_posix(specifier).endswith("/"):
            return False
        if Path(specifier).is_absolute():
            return file_exists(specifier)
        return file_exists(Path(self.base_dir) / specifier)

    def _resolve_relative(self, specifier: str, importer: str) -> str | None:
        """Rebase the importer's directory under root_dir, then look up."""
        importer_dir = posixpath.dirname(to_posix(importer))
        if not posixpath.isabs(importer_dir):
            importer_dir = join_path(self.base_dir, importer_dir)

        root_relative = relative_path(importer_dir, self.base_dir, self.root_path)
        rebased_dir = importer_dir if escapes_upward(root_relative) else root_relative

        return resolve_in_root(join_path(rebased_dir, specifier), self.base_dir, self.config.root_dir)

    def _resolve_mapped(self, specifier: str) -> str | None:
        """Scan module mappings in order; first target that resolves wins."""
        for prefix, target in self.config.module_mappings:
            if specifier != prefix and not specifier.startswith(prefix + "/"):
                continue

            for mapped in self._mapped_candidates(target, specifier[len(prefix) + 1 :]):
                logger.debug(f"module mapped '{specifier}' to '{mapped}'")
                if resolved := resolve_in_root(mapped, self.base_dir, self.config.root_dir):
                    return resolved
        return None

    @staticmethod
    def _mapped_candidates(target: str, remainder: str) -> list[str]:
        """Candidate paths for a matched mapping entry.

        Mapping targets may point at type declarations (index.d.ts); the
        runtime file is the same path without the suffix. A subpath under a
        declaration-file target is also tried beside that file.
        """
        runtime_target = strip_declaration_suffix(target)
        candidates = [join_path(runtime_target, remainder)]
        if remainder and runtime_target != target:
            candidates.append(join_path(posixpath.dirname(runtime_target), remainder))
        return candidates

    def _resolve_workspace(self, specifier: str) -> str | None:
        """Strip the workspace name; keep the specifier when that escapes upward."""
        workspace_relative = relative_path(specifier, self.base_dir, self.config.workspace_name)
        candidate = specifier if escapes_upward(workspace_relative) else workspace_relative
        return resolve_in_root(candidate, self.base_dir, self.config.root_dir)

    def _finish(self, specifier: str, resolved: str | None, layer: str) -> tuple[str | None, str | None]:
        if resolved is None:
            logger.debug(
                f"allowing generic resolution of '{specifier}'",
                extra={"event": "resolve", "specifier": specifier, "layer": None},
            )
            return (None, None)

        resolved = prefer_module_variant(resolved)
        logger.debug(
            f"resolved '{specifier}' to {resolved}",
            extra={"event": "resolve", "specifier": specifier, "layer": layer},
        )
        return (resolved, layer)

    def __repr__(self) -> str:
        return f"BundlePathResolver(root={self.root_path}, mappings={len(self.config.module_mappings)})"


class CachingResolver:
    """Memoizing wrapper keyed by (specifier, importer).

    Only valid while the filesystem under root_dir does not change. Errors
    are never cached.
    """

    def __init__(self, resolver: BundlePathResolver):
        self.resolver = resolver
        self._cache: dict[tuple[str, str | None], tuple[str | None, str | None]] = {}

    @property
    def config(self) -> ResolutionConfig:
        return self.resolver.config

    @property
    def base_dir(self) -> str:
        return self.resolver.base_dir

    def resolve(self, specifier: str, importer: str | None = None) -> str | None:
        resolved, _layer = self.resolve_with_layer(specifier, importer)
        return resolved

    def resolve_with_layer(self, specifier: str, importer: str | None = None) -> tuple[str | None, str | None]:
        key = (specifier, importer)
        if key not in self._cache:
            self._cache[key] = self.resolver.resolve_with_layer(specifier, importer)
        return self._cache[key]

    def cache_clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        return f"CachingResolver({self.resolver!r}, entries={len(self._cache)})"
