"""Logging helpers shared by the CLI, catalog fetchers and the Hangar client.

Log records carry structured fields through ``extra=extra_context(...)``;
the default formatter ignores them, a file handler or JSON formatter can
pick them up.
"""
from __future__ import annotations

import logging
import os
import re
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

_SENSITIVE_QUERY = re.compile(r"(?i)((?:apikey|api_key|token|key)=)[^&#]+")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for console output.

    Args:
        level: Level name; defaults to $HANGAR_UPLOAD_LOG_LEVEL or INFO.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not any(getattr(h, "_hangar_upload", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        handler._hangar_upload = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by logger."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping, dropping fields whose value is None."""
    return {k: v for k, v in fields.items() if v is not None}


def redact(text: str) -> str:
    """Mask credential-looking query values inside text."""
    if not text:
        return text
    return _SENSITIVE_QUERY.sub(r"\1***", text)


def safe_url(url: str) -> str:
    """Return url suitable for logs (credentials masked)."""
    return redact(url)


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds, measured up to now while still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
