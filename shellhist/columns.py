"""Custom and displayed column configuration."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class DuplicateColumnError(ValueError):
    """A custom column with the same name already exists."""


@dataclass(frozen=True)
class CustomColumnDefinition:
    """A named column whose value is the output of a shell command."""

    column_name: str
    column_command: str


def add_custom_column(
    columns: Iterable[CustomColumnDefinition] | None, name: str, command: str
) -> list[CustomColumnDefinition]:
    """Return ``columns`` with a new column appended; names compare case-insensitively."""
    existing = list(columns or [])
    for column in existing:
        if column.column_name.casefold() == name.casefold():
            raise DuplicateColumnError(
                f"cannot create a column named {column.column_name!r} "
                f"since there is already one named {name!r}"
            )
    return [*existing, CustomColumnDefinition(column_name=name, column_command=command)]


def add_displayed_columns(columns: Iterable[str] | None, added: Iterable[str]) -> list[str]:
    """Return ``columns`` with ``added`` appended in order."""
    return [*(columns or []), *added]