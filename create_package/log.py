"""
log.py

Responsibility: Console logging for create-package.

Headline records (`extra={"headline": True}`) are shown bold with a blue marker, detail
records as plain indented lines, warnings and errors with their level name.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

LOGGER_NAME = "create_package"
MARKER = "▶︎ "


def _bold(s: str) -> str:
    return f"\x1b[1m{s}\x1b[22m"


def _blue(s: str) -> str:
    return f"\x1b[34m{s}\x1b[39m"


def highlight(s: str, *, color: bool = True) -> str:
    """Prefix `s` with the marker, styled when `color` is set."""
    if not color:
        return MARKER + s
    return _bold(_blue(MARKER) + s)


class _ConsoleFormatter(logging.Formatter):
    def __init__(self, *, color: bool) -> None:
        super().__init__()
        self._color = color

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if record.exc_info and record.exc_info[1]:
            msg = f"{msg}: {record.exc_info[1]}"
        if record.levelno >= logging.WARNING:
            return f"  {record.levelname.lower()}: {msg}"
        if getattr(record, "headline", False):
            return highlight(msg, color=self._color)
        return msg


def setup_logging(level: int | str = logging.INFO, stream: IO[str] | None = None) -> logging.Logger:
    """Attach a console handler to the package logger. Safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    stream = stream if stream is not None else sys.stdout
    color = bool(getattr(stream, "isatty", lambda: False)())

    for h in logger.handlers[:]:
        if getattr(h, "_create_package_console", False):
            logger.removeHandler(h)
            h.close()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(_ConsoleFormatter(color=color))
    handler._create_package_console = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
