"""Filesystem lookup helpers for module resolution.

Implements the file/directory probing a module loader performs for an
absolute candidate path:

1. The candidate itself, if it is a file
2. The candidate plus each script extension (.js, .json, .node)
3. The candidate as a directory: package.json "main", then index files

Paths are handled as POSIX strings. Joining concatenates segments and
collapses ``..`` lexically, so an absolute fragment joined under a root
stays under that root.
"""

import json
import logging
import os
import posixpath
from pathlib import Path

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = (".js", ".json", ".node")
INDEX_FILES = tuple(f"index{ext}" for ext in SCRIPT_EXTENSIONS)

LEGACY_EXTENSION = ".js"
MODULE_VARIANT_EXTENSION = ".mjs"
DECLARATION_SUFFIX = ".d.ts"


def to_posix(path: str | Path) -> str:
    """Normalize path separators to forward slashes."""
    return str(path).replace("\\", "/")


def join_path(*segments: str) -> str:
    """Join path segments and normalize the result.

    Empty segments are skipped. Unlike os.path.join, an absolute segment does
    not discard what precedes it. A trailing slash on the last segment is
    kept, so the result still names a directory.

    Examples:
        >>> join_path("/work", "src", "/abs/file")
        '/work/src/abs/file'
        >>> join_path("pkg", "../other")
        'other'
        >>> join_path("lib", "util/")
        'lib/util/'
    """
    joined = "/".join(to_posix(s) for s in segments if s)
    if not joined:
        return "."
    normalized = posixpath.normpath(joined)
    if joined.endswith("/") and not normalized.endswith("/"):
        normalized += "/"
    return normalized


def relative_path(to: str, base_dir: str, start: str) -> str:
    """Relative path from ``start`` to ``to``, both taken against ``base_dir``.

    Returns "" when both name the same directory.
    """
    to_abs = _absolute(to, base_dir)
    start_abs = _absolute(start, base_dir)
    rel = posixpath.relpath(to_abs, start_abs)
    return "" if rel == "." else rel


def escapes_upward(rel: str) -> bool:
    """Check whether a relative path climbs above its starting directory."""
    return rel == ".." or rel.startswith("../")


def file_exists(path: str | Path) -> bool:
    """Check that path names an existing regular file."""
    try:
        return Path(path).is_file()
    except (OSError, ValueError):
        return False


def strip_declaration_suffix(target: str) -> str:
    """Drop a trailing .d.ts so the mapping target names the runtime file."""
    if target.endswith(DECLARATION_SUFFIX):
        return target[: -len(DECLARATION_SUFFIX)]
    return target


def prefer_module_variant(resolved: str) -> str:
    """Swap a .js result for its .mjs sibling when the sibling exists."""
    if posixpath.splitext(resolved)[1] != LEGACY_EXTENSION:
        return resolved

    module_variant = resolved[: -len(LEGACY_EXTENSION)] + MODULE_VARIANT_EXTENSION
    if file_exists(module_variant):
        logger.debug(f"preferring module variant {module_variant}")
        return module_variant
    return resolved


def resolve_file(candidate: str) -> str | None:
    """Resolve an absolute candidate the way a module loader does.

    A candidate ending in "/" names a directory and is never probed as a file.

    Args:
        candidate: Absolute POSIX path, with or without extension

    Returns:
        Real path of the file found, or None
    """
    try:
        if candidate.endswith("/"):
            found = _load_as_directory(candidate)
        else:
            found = _load_as_file(candidate) or _load_as_directory(candidate)
    except (OSError, ValueError) as e:
        logger.debug(f"lookup of '{candidate}' failed: {e}")
        return None

    if found is None:
        return None
    return to_posix(os.path.realpath(found))


def resolve_in_root(fragment: str, base_dir: str, root_dir: str) -> str | None:
    """Rooted file lookup: resolve ``fragment`` under ``<base_dir>/<root_dir>``."""
    candidate = join_path(base_dir, root_dir, fragment)
    logger.debug(f"try to resolve '{fragment}' at '{candidate}'")
    return resolve_file(candidate)


def _absolute(path: str, base_dir: str) -> str:
    path = to_posix(path)
    if posixpath.isabs(path):
        return posixpath.normpath(path)
    return join_path(base_dir, path)


def _load_as_file(candidate: str) -> str | None:
    if file_exists(candidate):
        return candidate
    for ext in SCRIPT_EXTENSIONS:
        if file_exists(candidate + ext):
            return candidate + ext
    return None


def _load_index(directory: str) -> str | None:
    for index_file in INDEX_FILES:
        index_path = posixpath.join(directory, index_file)
        if file_exists(index_path):
            return index_path
    return None


def _load_as_directory(candidate: str) -> str | None:
    if not os.path.isdir(candidate):
        return None

    package_json = posixpath.join(candidate, "package.json")
    if file_exists(package_json):
        with open(package_json, encoding="utf-8") as f:
            manifest = json.load(f)
        main = manifest.get("main") if isinstance(manifest, dict) else None
        if isinstance(main, str) and main:
            main_path = join_path(candidate, main)
            if found := _load_as_file(main_path) or _load_index(main_path):
                return found

    return _load_index(candidate)
