"""Locating shell rc files and wiring the hook scripts into them."""

from __future__ import annotations

import os
import posixpath
import sys
from pathlib import Path


def _join(*parts: str) -> str:
    return posixpath.normpath(posixpath.join(*parts))


def get_bash_config_path(homedir: str, hishtory_dir: str) -> str:
    """Path of the bash hook script that the bashrc sources."""
    return _join(homedir, hishtory_dir, "config.sh")


def get_zsh_config_path(homedir: str, hishtory_dir: str) -> str:
    """Path of the zsh hook script that the zshrc sources."""
    return _join(homedir, hishtory_dir, "config.zsh")


def get_fish_config_path(homedir: str, hishtory_dir: str) -> str:
    """Path of the fish hook script that the fish config sources."""
    return _join(homedir, hishtory_dir, "config.fish")


def get_zsh_rc_path(homedir: str) -> str:
    """Path of the user's ``.zshrc``, honouring ``ZDOTDIR`` when it is set."""
    zdotdir = os.environ.get("ZDOTDIR", "")
    if zdotdir:
        return _join(zdotdir, ".zshrc")
    return _join(homedir, ".zshrc")


def config_fragment(homedir: str, hishtory_dir: str, config_path: str) -> str:
    """The block appended to a shell rc file to put the tool on PATH and source ``config_path``."""
    return (
        "\n# Hishtory Config:\nexport PATH=\"$PATH:"
        + _join(homedir, hishtory_dir)
        + "\"\nsource "
        + config_path
        + "\n"
    )


def is_configured(rc_path: str | os.PathLike[str], fragment: str) -> bool:
    """Whether the file at ``rc_path`` exists and already contains ``fragment``."""
    path = Path(rc_path)
    if not path.exists():
        return False
    try:
        contents = path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise OSError(f"failed to read {rc_path}: {exc}") from exc
    return fragment in contents


def convert_to_relative_path(path: str) -> str:
    """Replace a leading home directory in ``path`` with ``~``."""
    try:
        homedir = str(Path.home())
    except (RuntimeError, KeyError):
        return path
    if path.startswith(homedir):
        return path.replace(homedir, "~", 1)
    return path


def add_to_shell_config(
    shell_config_path: str, config_fragment: str, skip_config_modification: bool
) -> None:
    """Append ``config_fragment`` to the rc file, or print instructions when skipping."""
    if skip_config_modification:
        print(
            f"Please edit {convert_to_relative_path(shell_config_path)!r} to add:\n\n"
            f"```\n{config_fragment.strip()}\n```\n"
        )
        return
    try:
        with open(shell_config_path, "a", encoding="utf-8") as handle:
            handle.write(config_fragment)
    except OSError as exc:
        raise OSError(f"failed to append to {shell_config_path}: {exc}") from exc


def does_bash_profile_need_config(homedir: str) -> bool:
    """Whether ``.bash_profile`` should also source the bash hook.

    Always on macOS; on Linux only when the file already exists; otherwise never.
    """
    if sys.platform == "darwin":
        return True
    if sys.platform.startswith("linux"):
        return Path(homedir, ".bash_profile").exists()
    return False