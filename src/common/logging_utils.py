"""Centralized logging setup and small helpers for structured DEBUG traces.

Every module logs through ``logging.getLogger(__name__)``; this module owns
the root configuration so the CLI only has to call ``configure_logging()``.
"""

from __future__ import annotations

import logging
import os
import time
import urllib.parse
from typing import Any, Dict, List, Optional

from constants import Constants

_installed_handlers: List[logging.Handler] = []

def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    quiet: bool = False,
) -> None:
    """Configure the root logger.

    Args:
        level: Level name; falls back to RELROUTE_LOG_LEVEL, then INFO.
        log_file: Optional path of an additional file handler.
        quiet: Only report errors on the console.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    root = logging.getLogger()
    # Only replace handlers installed by a previous call
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level_value)

    formatter = logging.Formatter(Constants.LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    if quiet:
        console.setLevel(logging.ERROR)
    root.addHandler(console)
    _installed_handlers.append(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        _installed_handlers.append(file_handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {key: value for key, value in kwargs.items() if value is not None}


def safe_url(url: str) -> str:
    """Strip credentials, query string and fragment from a URL before logging it."""
    try:
        parts = urllib.parse.urlsplit(url)
    except ValueError:
        return "<invalid url>"
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urllib.parse.urlunsplit((parts.scheme, host, parts.path, "", ""))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds, measured up to now while still inside the block."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
