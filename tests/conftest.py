"""Pytest configuration for bundle-resolver tests."""

import logging
from pathlib import Path

import pytest

from bundle_resolver.logging_setup import JsonlHandler


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def touch():
    """Create a file (and its parents) with the given content."""
    return _touch


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Build directory with the physical module layout rooted at ./bin."""
    base = tmp_path / "execroot"
    (base / "bin").mkdir(parents=True)
    return base


@pytest.fixture
def root(base_dir: Path) -> Path:
    return base_dir / "bin"


@pytest.fixture(autouse=True)
def _reset_logging_handlers():
    """Drop handlers installed by the CLI so captured streams are not reused."""
    yield
    package_logger = logging.getLogger("bundle_resolver")
    for h in list(package_logger.handlers):
        package_logger.removeHandler(h)
    root_logger = logging.getLogger()
    for h in list(root_logger.handlers):
        if isinstance(h, JsonlHandler):
            root_logger.removeHandler(h)
