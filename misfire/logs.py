"""
misfire.logs — Log Formatting for Console and systemd-journald
===============================================================

Two styles, picked by ``log_format`` in ``config.yaml``:

- ``console`` — human-friendly ``HH:MM:SS │ LEVEL │ logger │ message``.
- ``journal`` — each line starts with an RFC 5424 severity in angle
  brackets (``<6>misfire.bot.core: Ready.``) so journald records the right
  priority.  Only ``misfire.*`` loggers get through below WARNING; library
  chatter (discord.py gateway, HTTP) is held back to warnings and up.
"""

from __future__ import annotations

import logging
import sys

__all__ = [
    "CONSOLE_FORMAT",
    "JournalFormatter",
    "ProjectFilter",
    "configure_logging",
    "severity_for",
]

PROJECT_LOGGER = "misfire"

CONSOLE_FORMAT = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"


def severity_for(levelno: int) -> int:
    """Map a :mod:`logging` level number to an RFC 5424 severity."""
    if levelno >= logging.CRITICAL:
        return 2
    if levelno >= logging.ERROR:
        return 3
    if levelno >= logging.WARNING:
        return 4
    if levelno >= logging.INFO:
        return 6
    return 7


class JournalFormatter(logging.Formatter):
    """``<severity>logger.name: message`` (plus traceback, if any)."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"<{severity_for(record.levelno)}>{record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class ProjectFilter(logging.Filter):
    """Pass our own records at *level*; everyone else's only at WARNING+."""

    def __init__(self, level: int = logging.INFO, project: str = PROJECT_LOGGER) -> None:
        super().__init__()
        self.level = level
        self.project = project

    def _is_ours(self, name: str) -> bool:
        return name == self.project or name.startswith(self.project + ".")

    def filter(self, record: logging.LogRecord) -> bool:
        if self._is_ours(record.name):
            return record.levelno >= self.level
        return record.levelno >= logging.WARNING


def configure_logging(fmt: str = "console", level: str | int = logging.INFO) -> None:
    """Install the root handler for *fmt*.  Safe to call more than once."""
    numeric = logging.getLevelName(level) if isinstance(level, str) else level

    if fmt == "journal":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JournalFormatter())
        handler.addFilter(ProjectFilter(level=numeric))
        root = logging.getLogger()
        for old in list(root.handlers):
            root.removeHandler(old)
        root.addHandler(handler)
        root.setLevel(min(numeric, logging.WARNING))
        return

    logging.basicConfig(
        level=numeric,
        format=CONSOLE_FORMAT,
        datefmt=CONSOLE_DATEFMT,
        force=True,
    )
