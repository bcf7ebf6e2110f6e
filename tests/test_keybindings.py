import pytest

from shellhist.keybindings import (
    KeyBindings,
    UnknownActionError,
    format_key_bindings,
    set_key_binding,
)

ACTION_NAMES = [
    "up",
    "down",
    "page-up",
    "page-down",
    "select-entry",
    "select-entry-and-cd",
    "left",
    "right",
    "table-left",
    "table-right",
    "delete-entry",
    "help",
    "quit",
    "jump-start-of-input",
    "jump-end-of-input",
    "word-left",
    "word-right",
]


def test_set_up_binding():
    result = set_key_binding(KeyBindings(), "up", ["up", "ctrl+p"])
    assert result.up == ["up", "ctrl+p"]


def test_set_select_entry_and_cd_binding():
    result = set_key_binding(KeyBindings(), "select-entry-and-cd", ["ctrl+x"])
    assert result.select_entry_and_change_dir == ["ctrl+x"]


def test_set_does_not_mutate_original():
    original = KeyBindings(down=["down"])
    result = set_key_binding(original, "down", ["ctrl+n"])
    assert original.down == ["down"]
    assert result.down == ["ctrl+n"]


def test_set_leaves_other_actions_alone():
    original = KeyBindings(quit=["esc"], help=["ctrl+h"])
    result = set_key_binding(original, "quit", ["ctrl+c"])
    assert result.help == ["ctrl+h"]


def test_unknown_action():
    with pytest.raises(UnknownActionError):
        set_key_binding(KeyBindings(), "keybindings", ["x"])


def test_empty_keys_rejected():
    with pytest.raises(ValueError):
        set_key_binding(KeyBindings(), "up", [])


def test_format_up_line():
    text = format_key_bindings(KeyBindings(up=["up", "ctrl+p"]))
    assert text.splitlines()[0] == "up: \t\t\tup ctrl+p"


def test_format_select_entry_and_cd_line():
    text = format_key_bindings(KeyBindings(select_entry_and_change_dir=["ctrl+x"]))
    assert "select-entry-and-cd: \tctrl+x\n" in text


def test_format_lists_every_action_in_order():
    lines = format_key_bindings(KeyBindings()).splitlines()
    assert [line.split(":")[0] for line in lines] == ACTION_NAMES


@pytest.mark.parametrize("action", ACTION_NAMES)
def test_set_then_format_roundtrip(action):
    keys = [f"key-for-{action}", "alt+z"]
    text = format_key_bindings(set_key_binding(KeyBindings(), action, keys))
    matching = [line for line in text.splitlines() if line.split(":")[0] == action]
    assert len(matching) == 1
    assert matching[0].endswith(" ".join(keys))