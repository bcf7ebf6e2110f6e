"""Building history entries from the arguments passed by the shell hooks."""

from __future__ import annotations

import getpass
import logging
import os
import socket
import subprocess
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from shellhist.columns import CustomColumnDefinition
from shellhist.histtime import (
    HistoryLineError,
    get_last_command,
    maybe_skip_bash_hist_time_prefix,
    parse_cross_platform_time,
    trim_trailing_whitespace,
)

_log = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class UnsupportedShellError(ValueError):
    """The shell that sent a history entry is not one that is supported."""


@dataclass
class CustomColumn:
    """The value a custom column command produced for one entry."""

    name: str
    val: str


@dataclass
class HistoryEntry:
    """One recorded shell command with its metadata."""

    local_username: str = ""
    hostname: str = ""
    command: str = ""
    current_working_directory: str = ""
    home_directory: str = ""
    exit_code: int = 0
    start_time: datetime = _EPOCH
    end_time: datetime = _EPOCH
    device_id: str = ""
    entry_id: str = ""
    custom_columns: list[CustomColumn] = field(default_factory=list)


def is_hidden_command(history_line: str, last_history_line: str) -> bool:
    """Whether ``history_line`` repeats the last saved line.

    Bash reports the previous history line again when a command was hidden
    from history (e.g. it started with a space), so a repeat is skipped.
    """
    return history_line == last_history_line


def extract_command(shell: str, arg: str, time_format: str | None = None) -> str:
    """Return the command the shell hook passed in ``arg``.

    An empty string means nothing should be recorded. For bash, ``arg`` is the
    output of ``history 1`` and any HISTTIMEFORMAT prefix is stripped;
    ``time_format`` of None reads the HISTTIMEFORMAT environment variable.
    """
    if shell == "bash":
        try:
            cmd = get_last_command(arg)
        except HistoryLineError:
            return ""
        if cmd == "" or cmd.startswith(" "):
            return ""
        return maybe_skip_bash_hist_time_prefix(cmd, time_format)
    if shell in ("zsh", "fish"):
        cmd = trim_trailing_whitespace(arg)
        if cmd.startswith(" "):
            return ""
        return cmd
    raise UnsupportedShellError(f"tried to save a history entry from an unsupported shell={shell!r}")


def build_custom_columns(columns: Iterable[CustomColumnDefinition]) -> list[CustomColumn]:
    """Run each column's command with bash and collect its trimmed output."""
    values: list[CustomColumn] = []
    for column in columns:
        try:
            result = subprocess.run(
                ["bash", "-c", column.column_command],
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise RuntimeError(f"failed to execute custom command named {column.column_name}: {exc}") from exc
        stdout = result.stdout.decode("utf-8", errors="replace")
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            _log.warning(
                "failed to execute custom command named %s (stdout=%r, stderr=%r)",
                column.column_name,
                stdout,
                stderr,
            )
        values.append(CustomColumn(name=column.column_name, val=stdout.strip()))
    return values


def _getcwd_without_substitution() -> str:
    try:
        return os.getcwd()
    except OSError:
        pwd = os.environ.get("PWD", "")
        if pwd.startswith("/"):
            return pwd
        raise


def get_cwd(homedir: str) -> tuple[str, str]:
    """Return the working directory, abbreviated with ``~`` under ``homedir``, and ``homedir``."""
    cwd = _getcwd_without_substitution()
    if cwd == homedir:
        return "~/", homedir
    if cwd.startswith(homedir):
        return cwd.replace(homedir, "~", 1), homedir
    return cwd, homedir


def build_history_entry(
    args: Sequence[str],
    homedir: str | None = None,
    device_id: str = "",
    time_format: str | None = None,
    custom_columns: Iterable[CustomColumnDefinition] = (),
) -> HistoryEntry | None:
    """Build an entry from the hook's argv: ``[prog, subcommand, shell, exit_code, command, start_time]``.

    Returns None when there are too few arguments or the command is empty.
    """
    if len(args) < 6:
        _log.warning("build_history_entry called with too few arguments: %r", list(args))
        return None
    shell = args[2]
    if homedir is None:
        homedir = str(Path.home())

    cwd, home = get_cwd(homedir)
    entry = HistoryEntry(
        local_username=getpass.getuser(),
        hostname=socket.gethostname(),
        current_working_directory=cwd,
        home_directory=home,
        device_id=device_id,
        entry_id=str(uuid.uuid4()),
        custom_columns=build_custom_columns(custom_columns),
    )
    entry.exit_code = int(args[3])
    entry.start_time = parse_cross_platform_time(args[5])
    entry.end_time = datetime.now(timezone.utc)
    entry.command = extract_command(shell, args[4], time_format)
    if entry.command.strip() == "":
        return None
    return entry