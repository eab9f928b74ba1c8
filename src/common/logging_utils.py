"""Centralized logging helpers.

Provides a single ``configure_logging`` entry point plus small helpers for
structured DEBUG events: ``extra_context`` builds the ``extra=`` payload and
``Timer`` measures durations for git invocations.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _level_from_env(default: int = logging.INFO) -> int:
    name = str(os.environ.get(Constants.ENV_LOG_LEVEL, "")).strip().upper()
    if name in _LEVELS:
        return getattr(logging, name)
    return default


def configure_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Args:
        level: Explicit level name; falls back to WEBVERSIONS_LOG_LEVEL, then INFO.
        logfile: Optional path; when given, records go to the file instead of stderr.
    """
    if level and str(level).upper() in _LEVELS:
        level_value = getattr(logging, str(level).upper())
    else:
        level_value = _level_from_env()

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if logfile:
        handler: logging.Handler = logging.FileHandler(logfile, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping, dropping fields whose value is None."""
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)
