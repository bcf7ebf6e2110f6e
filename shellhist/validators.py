"""Validation of values given to configuration commands."""

from __future__ import annotations

import logging
from collections.abc import Iterable


class ConfigError(ValueError):
    """A configuration value is not acceptable."""


_LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def validate_color(color: str) -> str:
    """Return ``color`` if it looks like a hexadecimal color such as ``#663399``."""
    if not color.startswith("#") or len(color) != 7:
        raise ConfigError(
            f"color {color!r} is invalid, it should be a hexadecimal color like #663399"
        )
    return color


def parse_bool(value: str) -> bool:
    """Parse exactly ``true`` or ``false``."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConfigError(f"Unexpected config value {value}, must be one of: true, false")


def parse_log_level(value: str) -> int:
    """Map one of ``error``, ``warn``, ``info`` or ``debug`` to a :mod:`logging` level."""
    try:
        return _LOG_LEVELS[value]
    except KeyError:
        raise ConfigError(
            f"invalid log level: {value!r}, must be one of: {', '.join(_LOG_LEVELS)}"
        ) from None


def validate_default_search_columns(
    columns: Iterable[str],
    supported_columns: Iterable[str],
    custom_column_names: Iterable[str],
) -> list[str]:
    """Check that every column is a built-in or custom column; return them as a list."""
    allowed = set(supported_columns) | set(custom_column_names)
    checked = list(columns)
    for column in checked:
        if column not in allowed:
            raise ConfigError(f"column {column!r} is not a valid column name")
    return checked