"""Key bindings for the interactive search interface."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field


class UnknownActionError(ValueError):
    """The named action has no key binding."""


@dataclass
class KeyBindings:
    """Keys bound to each action of the interactive search."""

    up: list[str] = field(default_factory=list)
    down: list[str] = field(default_factory=list)
    page_up: list[str] = field(default_factory=list)
    page_down: list[str] = field(default_factory=list)
    select_entry: list[str] = field(default_factory=list)
    select_entry_and_change_dir: list[str] = field(default_factory=list)
    left: list[str] = field(default_factory=list)
    right: list[str] = field(default_factory=list)
    table_left: list[str] = field(default_factory=list)
    table_right: list[str] = field(default_factory=list)
    delete_entry: list[str] = field(default_factory=list)
    help: list[str] = field(default_factory=list)
    quit: list[str] = field(default_factory=list)
    jump_start_of_input: list[str] = field(default_factory=list)
    jump_end_of_input: list[str] = field(default_factory=list)
    word_left: list[str] = field(default_factory=list)
    word_right: list[str] = field(default_factory=list)


# Action name, attribute, and the label prefix used when listing bindings.
_ACTIONS = (
    ("up", "up", "up: \t\t\t"),
    ("down", "down", "down: \t\t\t"),
    ("page-up", "page_up", "page-up: \t\t"),
    ("page-down", "page_down", "page-down: \t\t"),
    ("select-entry", "select_entry", "select-entry: \t\t"),
    ("select-entry-and-cd", "select_entry_and_change_dir", "select-entry-and-cd: \t"),
    ("left", "left", "left: \t\t\t"),
    ("right", "right", "right: \t\t\t"),
    ("table-left", "table_left", "table-left: \t\t"),
    ("table-right", "table_right", "table-right: \t\t"),
    ("delete-entry", "delete_entry", "delete-entry: \t\t"),
    ("help", "help", "help: \t\t\t"),
    ("quit", "quit", "quit: \t\t\t"),
    ("jump-start-of-input", "jump_start_of_input", "jump-start-of-input: \t"),
    ("jump-end-of-input", "jump_end_of_input", "jump-end-of-input: \t"),
    ("word-left", "word_left", "word-left: \t\t"),
    ("word-right", "word_right", "word-right: \t\t"),
)
_ATTRIBUTE_BY_ACTION = {action: attribute for action, attribute, _ in _ACTIONS}


def set_key_binding(bindings: KeyBindings, action: str, keys: list[str]) -> KeyBindings:
    """Return a copy of ``bindings`` with ``action`` bound to ``keys``."""
    try:
        attribute = _ATTRIBUTE_BY_ACTION[action]
    except KeyError:
        raise UnknownActionError(
            f"unknown action {action!r}, run `config-get key-bindings` to see the "
            "list of currently configured key bindings"
        ) from None
    keys = list(keys)
    if not keys:
        raise ValueError(f"at least one key is required for action {action!r}")
    return dataclasses.replace(bindings, **{attribute: keys})


def format_key_bindings(bindings: KeyBindings) -> str:
    """Render the bindings as one ``action: keys`` line per action."""
    return "".join(
        f"{label}{' '.join(getattr(bindings, attribute))}\n" for _, attribute, label in _ACTIONS
    )