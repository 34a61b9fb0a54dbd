"""Centralized logging helpers.

Keeps handler setup in one place and provides small utilities for structured
DEBUG traces (``extra_context``), redacting URLs before they reach a log line
(``safe_url``) and timing blocks of work (``Timer``).
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_PARAMS = {"token", "access_token", "auth", "key", "api_key", "password", "secret"}
_REDACTED = "REDACTED"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stderr handler on the root logger.

    The level comes from ``level`` when given, otherwise from the
    TAGMATRIX_LOG_LEVEL environment variable, defaulting to INFO. Calling this
    more than once does not stack handlers.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL, "INFO")).upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not any(getattr(h, "_tagmatrix", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        handler._tagmatrix = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records for ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped so formatters only see populated fields.
    """
    return {k: v for k, v in fields.items() if v is not None}


def safe_url(url: Optional[str]) -> Optional[str]:
    """Return ``url`` with userinfo removed and sensitive query values redacted."""
    if not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    query = [
        (k, _REDACTED if k.lower() in _SENSITIVE_PARAMS else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit((parts.scheme, netloc, parts.path, urlencode(query), parts.fragment))


class Timer:
    """Context manager measuring wall-clock time of a block."""

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds; while still inside the block, time so far."""
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000, 2)
