"""Client settings and the operations behind the config get/set commands."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from shellhist.columns import CustomColumnDefinition
from shellhist.validators import (
    ConfigError,
    parse_bool,
    validate_color,
    validate_default_search_columns,
)


@dataclass(frozen=True)
class ColorScheme:
    """Colors used by the interactive search for the selected row and borders."""

    selected_text: str = ""
    selected_background: str = ""
    border_color: str = ""


@dataclass(frozen=True)
class Settings:
    """User-facing configuration options."""

    control_r_search_enabled: bool = False
    filter_duplicate_commands: bool = False
    beta_mode: bool = False
    highlight_matches: bool = False
    ai_completion: bool = False
    enable_presaving: bool = False
    force_compact_mode: bool = False
    full_screen_rendering: bool = False
    default_filter: str = ""
    timestamp_format: str = ""
    ai_completion_endpoint: str = ""
    log_level: int = logging.INFO
    displayed_columns: list[str] = field(default_factory=list)
    default_search_columns: list[str] = field(default_factory=list)
    custom_columns: list[CustomColumnDefinition] = field(default_factory=list)
    color_scheme: ColorScheme = field(default_factory=ColorScheme)


# Option name as given on the command line -> Settings attribute.
_BOOL_OPTIONS = {
    "enable-control-r": "control_r_search_enabled",
    "filter-duplicate-commands": "filter_duplicate_commands",
    "beta-mode": "beta_mode",
    "highlight-matches": "highlight_matches",
    "ai-completion": "ai_completion",
    "presaving": "enable_presaving",
    "compact-mode": "force_compact_mode",
    "full-screen": "full_screen_rendering",
}

# Color option name -> ColorScheme attribute, in display order.
_COLOR_FIELDS = {
    "selected-text": "selected_text",
    "selected-background": "selected_background",
    "border-color": "border_color",
}

_QUOTE_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def set_bool_option(settings: Settings, name: str, value: str) -> Settings:
    """Return a copy of ``settings`` with the boolean option ``name`` set from ``value``."""
    try:
        attribute = _BOOL_OPTIONS[name]
    except KeyError:
        raise ConfigError(f"unknown boolean option {name!r}") from None
    return dataclasses.replace(settings, **{attribute: parse_bool(value)})


def set_color(scheme: ColorScheme, field: str, color: str) -> ColorScheme:
    """Return a copy of ``scheme`` with ``field`` set to the hexadecimal ``color``."""
    try:
        attribute = _COLOR_FIELDS[field]
    except KeyError:
        raise ConfigError(f"unknown color scheme field {field!r}") from None
    return dataclasses.replace(scheme, **{attribute: validate_color(color)})


def set_default_search_columns(
    settings: Settings,
    columns: Iterable[str],
    supported_columns: Iterable[str],
    custom_column_names: Iterable[str],
) -> Settings:
    """Return a copy of ``settings`` searching ``columns`` by default; ``command`` is required."""
    chosen = list(columns)
    if "command" not in chosen:
        raise ConfigError("command is a required default search column")
    checked = validate_default_search_columns(chosen, supported_columns, custom_column_names)
    return dataclasses.replace(settings, default_search_columns=checked)


def _quote(text: str) -> str:
    parts = []
    for char in text:
        if char in _QUOTE_ESCAPES:
            parts.append(_QUOTE_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\x{ord(char):02x}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


def format_displayed_columns(columns: Iterable[str]) -> str:
    """Render column names separated by spaces, quoting those that contain a space."""
    rendered = "".join(f"{_quote(col) if ' ' in col else col} " for col in columns)
    return rendered + "\n"


def format_custom_columns(columns: Iterable[CustomColumnDefinition]) -> str:
    """Render one ``name:   command`` line per custom column."""
    return "".join(f"{col.column_name}:   {col.column_command}\n" for col in columns)


def format_color_scheme(scheme: ColorScheme) -> str:
    """Render the color scheme as one ``field: color`` line per field."""
    return "".join(
        f"{name}: {getattr(scheme, attribute)}\n" for name, attribute in _COLOR_FIELDS.items()
    )