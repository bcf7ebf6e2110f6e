"""Removing custom, displayed and default-search columns from the configuration."""

from __future__ import annotations

from collections.abc import Iterable

from shellhist.columns import CustomColumnDefinition


class ColumnNotFoundError(LookupError):
    """No custom column with the requested name exists."""


def delete_custom_column(
    columns: Iterable[CustomColumnDefinition] | None,
    displayed_columns: Iterable[str] | None,
    name: str,
) -> tuple[list[CustomColumnDefinition], list[str]]:
    """Remove the custom column ``name`` and drop it from the displayed columns.

    Returns the new custom columns and the new displayed columns.
    """
    existing = list(columns) if columns is not None else None
    if not existing:
        raise ColumnNotFoundError(
            f"did not find a column with name {name!r} to delete (current columns = {existing!r})"
        )
    remaining = [column for column in existing if column.column_name != name]
    if len(remaining) == len(existing):
        raise ColumnNotFoundError(
            f"did not find a column with name {name!r} to delete (current columns = {existing!r})"
        )
    displayed = [column for column in (displayed_columns or []) if column != name]
    return remaining, displayed


def remove_columns(columns: Iterable[str] | None, removed: Iterable[str]) -> list[str]:
    """Return ``columns`` without any of the names in ``removed``, order kept."""
    dropped = set(removed)
    return [column for column in (columns or []) if column not in dropped]


def remove_default_search_columns(columns: Iterable[str] | None, removed: Iterable[str]) -> list[str]:
    """Like :func:`remove_columns`, but ``command`` may never be removed."""
    dropped = list(removed)
    if "command" in dropped:
        raise ValueError("command is a required default search column")
    return remove_columns(columns, dropped)