"""Logging setup for syllabus-cal.

All output goes to stderr in a pipe-separated format with ISO 8601
timestamps, so stdout stays free for reports and ``--json`` output.
"""

from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Marks the handler installed here so repeated setup calls reuse it.
_HANDLER_ATTR = "_syllabus_cal_log_handler"

# pdfminer (under pdfplumber) and dateparser emit one DEBUG record per
# token or per parse attempt; they are capped regardless of our level.
_NOISY_LOGGERS = ("pdfminer", "pdfplumber", "dateparser", "tzlocal")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger for the CLI.

    Installs a single stderr handler on the root logger (re-running only
    updates its level) and caps chatty third-party loggers at
    ``WARNING``.

    Args:
        level: A standard logging level name, case-insensitive.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    existing = [h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)]
    if existing:
        existing[0].setLevel(numeric_level)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger called *name* (usually the caller's ``__name__``)."""
    return logging.getLogger(name)
