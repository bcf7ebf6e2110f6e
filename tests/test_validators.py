import logging

import pytest

from shellhist.validators import (
    ConfigError,
    parse_bool,
    parse_log_level,
    validate_color,
    validate_default_search_columns,
)

SUPPORTED = ["command", "current_working_directory", "hostname"]


def test_valid_color():
    assert validate_color("#663399") == "#663399"


@pytest.mark.parametrize("color", ["663399", "#66339", "#6633990", "", "red"])
def test_invalid_color(color):
    with pytest.raises(ConfigError):
        validate_color(color)


def test_parse_bool_values():
    assert parse_bool("true") is True
    assert parse_bool("false") is False


@pytest.mark.parametrize("value", ["True", "yes", "1", "", "false "])
def test_parse_bool_rejects_other_values(value):
    with pytest.raises(ConfigError):
        parse_bool(value)


@pytest.mark.parametrize(
    "value, level",
    [
        ("error", logging.ERROR),
        ("warn", logging.WARNING),
        ("info", logging.INFO),
        ("debug", logging.DEBUG),
    ],
)
def test_parse_log_level(value, level):
    assert parse_log_level(value) == level


@pytest.mark.parametrize("value", ["trace", "INFO", "verbose", ""])
def test_parse_log_level_rejects_unknown(value):
    with pytest.raises(ConfigError):
        parse_log_level(value)


def test_default_search_columns_builtin_and_custom():
    columns = ["command", "git_remote", "hostname"]
    assert validate_default_search_columns(columns, SUPPORTED, ["git_remote"]) == columns


def test_default_search_columns_accepts_generator():
    columns = ["command", "hostname"]
    assert validate_default_search_columns(iter(columns), SUPPORTED, []) == columns


def test_default_search_columns_rejects_unknown():
    with pytest.raises(ConfigError, match="not_a_column"):
        validate_default_search_columns(["command", "not_a_column"], SUPPORTED, ["git_remote"])