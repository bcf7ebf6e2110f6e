"""Downloading and checking release binaries for self-update."""

from __future__ import annotations

import logging
import os
import platform
import posixpath
import shutil
import subprocess
import urllib.error
import urllib.request
from collections.abc import Mapping
from pathlib import Path

_log = logging.getLogger(__name__)

_MAX_ALLOWED_DIFFERENCES = 5

# (system, machine) -> keys of the binary URL and its attestation URL in the update info.
_DOWNLOAD_KEYS = {
    ("linux", "amd64"): ("linux_amd64_url", "linux_amd64_attestation_url"),
    ("linux", "arm64"): ("linux_arm64_url", "linux_arm64_attestation_url"),
    ("linux", "arm"): ("linux_arm7_url", "linux_arm7_attestation_url"),
    ("darwin", "amd64"): ("darwin_amd64_url", "darwin_amd64_attestation_url"),
    ("darwin", "arm64"): ("darwin_arm64_url", "darwin_arm64_attestation_url"),
}

_MACHINE_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "arm": "arm",
}


class UpdateError(RuntimeError):
    """Downloading or verifying an update failed."""


def get_tmp_client_path() -> str:
    """Where a downloaded client binary is stored, under ``TMPDIR`` or ``/tmp/``."""
    tmp_dir = os.environ.get("TMPDIR", "") or "/tmp/"
    return posixpath.join(tmp_dir, "hishtory-client")


def get_possibly_overridden_version(version: str) -> str:
    """Return ``HISHTORY_FORCE_CLIENT_VERSION`` if set, else ``version``."""
    return os.environ.get("HISHTORY_FORCE_CLIENT_VERSION", "") or version


def select_download_urls(
    update_info: Mapping[str, str],
    system: str | None = None,
    machine: str | None = None,
) -> tuple[str, str]:
    """Return the binary URL and attestation URL for the given platform.

    ``system`` and ``machine`` default to the running platform. When
    ``HISHTORY_FORCE_CLIENT_VERSION`` is set, the advertised version in both
    URLs is replaced by the forced one.
    """
    system = (system if system is not None else platform.system()).lower()
    raw_machine = machine if machine is not None else platform.machine()
    arch = _MACHINE_ALIASES.get(raw_machine.lower(), raw_machine.lower())
    try:
        url_key, attestation_key = _DOWNLOAD_KEYS[(system, arch)]
    except KeyError:
        raise UpdateError(f"no update info found for GOOS={system}, GOARCH={arch}") from None
    client_url = update_info.get(url_key, "")
    provenance_url = update_info.get(attestation_key, "")
    forced = os.environ.get("HISHTORY_FORCE_CLIENT_VERSION", "")
    if forced:
        version = update_info.get("version", "")
        if version:
            client_url = client_url.replace(version, forced)
            provenance_url = provenance_url.replace(version, forced)
    return client_url, provenance_url


def assert_identical_binaries(
    bin1_path: str | os.PathLike[str], bin2_path: str | os.PathLike[str]
) -> list[str]:
    """Compare two binaries byte by byte, tolerating at most a handful of differences.

    Returns a description of each differing byte.
    """
    bin1 = Path(bin1_path).read_bytes()
    bin2 = Path(bin2_path).read_bytes()
    name1, name2 = os.fspath(bin1_path), os.fspath(bin2_path)
    if len(bin1) != len(bin2):
        raise UpdateError(
            f"unsigned binaries have different lengths "
            f"(len({name1})={len(bin1)}, len({name2})={len(bin2)})"
        )
    differences = [
        f"diff at index {i}: {name1}[{i}]={b1:x}, {name2}[{i}]={b2:x}"
        for i, (b1, b2) in enumerate(zip(bin1, bin2))
        if b1 != b2
    ]
    for difference in differences:
        _log.info("comparing binaries: %r", difference)
    if len(differences) > _MAX_ALLOWED_DIFFERENCES:
        raise UpdateError(f"found {len(differences)} differences in the binary")
    return differences


def strip_code_signature(in_path: str | os.PathLike[str], out_path: str | os.PathLike[str]) -> None:
    """Write ``in_path`` without its code signature to ``out_path`` using ``codesign_allocate``."""
    if shutil.which("codesign_allocate") is None:
        raise UpdateError(
            "your system is missing the codesign_allocate tool, so we can't verify the SLSA "
            "attestation (you can bypass this by setting "
            "`export HISHTORY_DISABLE_SLSA_ATTESTATION=true` in your shell)"
        )
    result = subprocess.run(
        ["codesign_allocate", "-i", os.fspath(in_path), "-o", os.fspath(out_path), "-r"],
        capture_output=True,
        check=False,
    )
    if result.returncode != 0:
        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        raise UpdateError(
            f"failed to use codesign_allocate to strip signatures on binary={os.fspath(in_path)} "
            f"(stdout={stdout!r}, stderr={stderr!r}): exit status {result.returncode}"
        )


def download_file(filename: str | os.PathLike[str], url: str) -> None:
    """Download ``url`` into ``filename``, replacing any existing file."""
    if os.environ.get("HISHTORY_SIMULATE_NETWORK_ERROR", ""):
        raise UpdateError("simulated network error: dial tcp: lookup api.hishtory.dev")
    target = Path(filename)
    try:
        with urllib.request.urlopen(url) as response:
            status = getattr(response, "status", None)
            if status is not None and status != 200:
                raise UpdateError(f"failed to download file at {url} due to resp_code={status}")
            if target.exists():
                try:
                    target.unlink()
                except OSError as exc:
                    raise UpdateError(
                        f"failed to delete file {target} when trying to download a new version"
                    ) from exc
            try:
                with open(target, "wb") as out:
                    shutil.copyfileobj(response, out)
            except OSError as exc:
                raise UpdateError(f"failed to save file to {target}: {exc}") from exc
    except urllib.error.HTTPError as exc:
        raise UpdateError(f"failed to download file at {url} due to resp_code={exc.code}") from exc
    except urllib.error.URLError as exc:
        raise UpdateError(f"failed to download file at {url} to {target}: {exc.reason}") from exc