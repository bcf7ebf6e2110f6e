"""Parsing of shell history lines, HISTTIMEFORMAT prefixes and start timestamps."""

from __future__ import annotations

import os
import re
from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_REGEX_SPECIALS = frozenset("\\.+*?()|[]{}^$")
_INTEGER = re.compile(r"[+-]?[0-9]+")

_TWO_DIGITS = "[0-9]{2}"
_FOUR_DIGITS = "[0-9]{4}"

# Directives that expand to a fixed regex fragment.
_SIMPLE_DIRECTIVES = {
    "t": "\t",
    "Y": _FOUR_DIGITS,
    "G": _FOUR_DIGITS,
    "g": _TWO_DIGITS,
    "C": _TWO_DIGITS,
    "u": "[0-9]",
    "w": "[0-9]",
    "m": _TWO_DIGITS,
    "d": _TWO_DIGITS,
    "H": _TWO_DIGITS,
    "I": _TWO_DIGITS,
    "U": _TWO_DIGITS,
    "V": _TWO_DIGITS,
    "W": _TWO_DIGITS,
    "y": _TWO_DIGITS,
    "M": _TWO_DIGITS,
    "j": "[0-9]{3}",
    "S": _TWO_DIGITS,
    # Day and month names are those of the POSIX locale.
    "a": "(Sun|Mon|Tue|Wed|Thu|Fri|Sat)",
    "b": "(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)",
    "h": "(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)",
    "e": "[0-9 ]{2}",
    "k": "[0-9 ]{2}",
    "l": "[0-9 ]{2}",
    "n": "\n",
    "p": "(AM|PM)",
    "P": "(am|pm)",
    "s": "\\d+",
    "z": "[+-][0-9]{4}",
}

# Directives that are shorthand for another format string.
_COMPOSITE_DIRECTIVES = {
    "F": "%Y-%m-%d",
    "D": "%m/%d/%y",
    "T": "%H:%M:%S",
    "c": "%a %b %e %H:%M:%S %Y",
    "r": "%I:%M:%S %p",
    "R": "%H:%M",
    "x": "%m/%d/%y",
    "X": "%H:%M:%S",
}


class HistoryLineError(ValueError):
    """A bash history line does not have the expected shape."""


class TimeFormatError(ValueError):
    """A HISTTIMEFORMAT value cannot be turned into a regex."""


def _quote_meta(char: str) -> str:
    return "\\" + char if char in _REGEX_SPECIALS else char


def _directive_regex(char: str) -> str:
    if char in _SIMPLE_DIRECTIVES:
        return _SIMPLE_DIRECTIVES[char]
    if char in _COMPOSITE_DIRECTIVES:
        return build_regex_from_time_format(_COMPOSITE_DIRECTIVES[char])
    raise TimeFormatError(f"time format directive %{char} is not supported")


def build_regex_from_time_format(time_format: str) -> str:
    """Return a regex matching text produced by the strftime-style ``time_format``."""
    parts: list[str] = []
    after_percent = False
    for char in time_format:
        if after_percent:
            after_percent = False
            if char == "%":
                parts.append(_quote_meta(char))
                continue
            parts.append(_directive_regex(char))
        elif char != "%":
            parts.append(_quote_meta(char))
        if char == "%":
            after_percent = True
    return "".join(parts)


def maybe_skip_bash_hist_time_prefix(cmd_line: str, time_format: str | None = None) -> str:
    """Strip a leading timestamp written according to ``time_format``.

    When ``time_format`` is None the HISTTIMEFORMAT environment variable is used.
    """
    if time_format is None:
        time_format = os.environ.get("HISTTIMEFORMAT", "")
    if not time_format:
        return cmd_line
    try:
        pattern = re.compile("^" + build_regex_from_time_format(time_format))
    except re.error as exc:
        raise TimeFormatError(f"failed to parse regex for HISTTIMEFORMAT variable: {exc}") from exc
    return pattern.sub(lambda _match: "", cmd_line, count=1)


def parse_cross_platform_time(data: str) -> datetime:
    """Parse a Unix timestamp in seconds or nanoseconds into an aware UTC datetime.

    A trailing ``N`` (left by ``date`` implementations without ``%N``) is ignored.
    Values of 18 or more characters are taken as nanoseconds.
    """
    if data.endswith("N"):
        data = data[:-1]
    if not _INTEGER.fullmatch(data):
        raise ValueError(f"invalid timestamp {data!r}")
    value = int(data)
    if len(data) >= 18:
        return _EPOCH + timedelta(microseconds=value // 1000)
    return _EPOCH + timedelta(seconds=value)


def get_last_command(history: str) -> str:
    """Return the command from a ``history 1`` line such as ``'  33  ls'``."""
    if history == "":
        return ""
    parts = history.strip().split(" ", 1)
    if len(parts) <= 1:
        raise HistoryLineError(f"got unexpected bash history line: {history!r}")
    parts = parts[1].split(" ", 1)
    if len(parts) <= 1:
        raise HistoryLineError(f"got unexpected bash history line: {history!r}")
    return parts[1]


def trim_trailing_whitespace(s: str) -> str:
    """Drop one trailing newline and then one trailing space."""
    return s.removesuffix("\n").removesuffix(" ")