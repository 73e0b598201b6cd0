"""
Logging bootstrap for the resolver CLI.
Installs an optional JSONL file sink and a stderr handler for verbose tracing.
"""

import json
import logging
import os
import sys
from datetime import UTC
from datetime import datetime
from pathlib import Path

DEFAULT_PATH = os.environ.get("BUNDLE_RESOLVER_LOG_PATH", "./bundle-resolver.log.jsonl")
DEFAULT_LEVEL = os.environ.get("BUNDLE_RESOLVER_LOG_LEVEL", "INFO").upper()

# Set by the build tooling to trace every resolution decision
VERBOSE_ENV_VAR = "VERBOSE_LOGS"

# LogRecord attributes that are not user-supplied extras
_RECORD_ATTRS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
    }
)


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            base = {
                "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "logger": record.name,
                "event": getattr(record, "event", None),
                "message": record.getMessage(),
            }
            for k, v in record.__dict__.items():
                if k in _RECORD_ATTRS:
                    continue
                base.setdefault(k, v)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(base, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


def verbose_from_env() -> bool:
    """True when VERBOSE_LOGS is set to a non-empty value."""
    return bool(os.environ.get(VERBOSE_ENV_VAR))


def init_json_logging(path: str | Path | None = None, level: str | None = None) -> JsonlHandler:
    path = path or DEFAULT_PATH
    level = (level or DEFAULT_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
    handler = JsonlHandler(path)
    handler.setLevel(getattr(logging, level, logging.INFO))
    root.addHandler(handler)
    return handler


def init_console_logging(verbose: bool = False) -> logging.Handler:
    """Attach a stderr handler to the package logger.

    Verbose mode logs every resolution decision at DEBUG, prefixed the way
    the build tooling expects (``[bundle_resolver] ...``).
    """
    package_logger = logging.getLogger("bundle_resolver")
    for h in list(package_logger.handlers):
        if getattr(h, "_bundle_resolver_console", False):
            package_logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler._bundle_resolver_console = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter("[bundle_resolver] %(message)s"))
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)

    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler
