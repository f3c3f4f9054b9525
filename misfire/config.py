"""
misfire.config — YAML Configuration Loader
===========================================

**Why this file exists:**
This module reads ``config.yaml`` for the bot's soft settings (UI strings,
status-dump limit, logging style).  Secrets such as ``DISCORD_TOKEN`` stay
in ``.env`` and are read by the entry point, never from here.

Every key is optional; an empty file gives the defaults.

Usage::

    from misfire.config import load_config

    cfg = load_config()          # reads ./config.yaml by default
    print(cfg.warning_text)
    print(cfg.status_char_limit) # 2000
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from misfire.constants import (
    DEFAULT_ACTIVITY_TEXT,
    DEFAULT_DISMISS_LABEL,
    DEFAULT_PURGE_DENIED_TEXT,
    DEFAULT_PURGE_LABEL,
    DEFAULT_WARNING_TEXT,
    DISCORD_MESSAGE_LIMIT,
)

LOG_FORMATS = ("console", "journal")


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MisfireConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Presence
    activity_text: str = DEFAULT_ACTIVITY_TEXT

    # Warning message + buttons
    warning_text: str = DEFAULT_WARNING_TEXT
    dismiss_label: str = DEFAULT_DISMISS_LABEL
    purge_label: str = DEFAULT_PURGE_LABEL
    purge_denied_text: str = DEFAULT_PURGE_DENIED_TEXT
    ignore_bots: bool = True

    # /misfire status
    status_char_limit: int = DISCORD_MESSAGE_LIMIT

    # Explicit voice/text pairing (extension point, does nothing yet)
    associations_enabled: bool = False

    # Logging
    log_format: str = "console"  # "console" or "journal"
    log_level: str = "INFO"


def _value(raw: dict, key: str, default):
    """``raw[key]``, or *default* when the key is missing or left blank."""
    value = raw.get(key)
    return default if value is None else value


def _flag(raw: dict, key: str, default: bool) -> bool:
    value = _value(raw, key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> MisfireConfig:
    """Read *path* and return a :class:`MisfireConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    ValueError
        If a value is out of range or not recognised.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    defaults = MisfireConfig()

    status_char_limit = _value(raw, "status_char_limit", defaults.status_char_limit)
    if isinstance(status_char_limit, bool) or not isinstance(status_char_limit, int):
        raise ValueError(f"status_char_limit must be an integer, got {status_char_limit!r}")
    if status_char_limit <= 0:
        raise ValueError(f"status_char_limit must be positive, got {status_char_limit}")

    log_format = str(_value(raw, "log_format", defaults.log_format)).lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"log_format must be one of {LOG_FORMATS}, got {log_format!r}")

    log_level = str(_value(raw, "log_level", defaults.log_level)).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log_level: {log_level!r}")

    return MisfireConfig(
        activity_text=str(_value(raw, "activity_text", defaults.activity_text)),
        warning_text=str(_value(raw, "warning_text", defaults.warning_text)),
        dismiss_label=str(_value(raw, "dismiss_label", defaults.dismiss_label)),
        purge_label=str(_value(raw, "purge_label", defaults.purge_label)),
        purge_denied_text=str(_value(raw, "purge_denied_text", defaults.purge_denied_text)),
        ignore_bots=_flag(raw, "ignore_bots", defaults.ignore_bots),
        status_char_limit=status_char_limit,
        associations_enabled=_flag(raw, "associations_enabled", defaults.associations_enabled),
        log_format=log_format,
        log_level=log_level,
    )
