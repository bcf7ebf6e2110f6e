import os

import pytest

from shellhist.update import (
    UpdateError,
    assert_identical_binaries,
    download_file,
    get_possibly_overridden_version,
    get_tmp_client_path,
    select_download_urls,
    strip_code_signature,
)


def _info():
    return {
        "version": "v0.100",
        "linux_amd64_url": "https://example.com/v0.100/linux-amd64",
        "linux_amd64_attestation_url": "https://example.com/v0.100/linux-amd64.intoto.jsonl",
        "linux_arm64_url": "https://example.com/v0.100/linux-arm64",
        "linux_arm64_attestation_url": "https://example.com/v0.100/linux-arm64.intoto.jsonl",
        "linux_arm7_url": "https://example.com/v0.100/linux-arm7",
        "linux_arm7_attestation_url": "https://example.com/v0.100/linux-arm7.intoto.jsonl",
        "darwin_amd64_url": "https://example.com/v0.100/darwin-amd64",
        "darwin_amd64_attestation_url": "https://example.com/v0.100/darwin-amd64.intoto.jsonl",
        "darwin_arm64_url": "https://example.com/v0.100/darwin-arm64",
        "darwin_arm64_attestation_url": "https://example.com/v0.100/darwin-arm64.intoto.jsonl",
    }


def test_tmp_client_path_uses_tmpdir(monkeypatch, tmp_path):
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    assert get_tmp_client_path() == os.path.join(str(tmp_path), "hishtory-client")


def test_tmp_client_path_default(monkeypatch):
    monkeypatch.delenv("TMPDIR", raising=False)
    assert get_tmp_client_path() == "/tmp/hishtory-client"


def test_version_not_overridden(monkeypatch):
    monkeypatch.delenv("HISHTORY_FORCE_CLIENT_VERSION", raising=False)
    assert get_possibly_overridden_version("v0.100") == "v0.100"


def test_version_overridden(monkeypatch):
    monkeypatch.setenv("HISHTORY_FORCE_CLIENT_VERSION", "v0.99")
    assert get_possibly_overridden_version("v0.100") == "v0.99"


@pytest.mark.parametrize(
    "system, machine, prefix",
    [
        ("Linux", "x86_64", "linux_amd64"),
        ("linux", "aarch64", "linux_arm64"),
        ("linux", "armv7l", "linux_arm7"),
        ("Darwin", "x86_64", "darwin_amd64"),
        ("darwin", "arm64", "darwin_arm64"),
    ],
)
def test_select_download_urls(monkeypatch, system, machine, prefix):
    monkeypatch.delenv("HISHTORY_FORCE_CLIENT_VERSION", raising=False)
    info = _info()
    assert select_download_urls(info, system, machine) == (
        info[f"{prefix}_url"],
        info[f"{prefix}_attestation_url"],
    )


def test_select_download_urls_forced_version(monkeypatch):
    monkeypatch.setenv("HISHTORY_FORCE_CLIENT_VERSION", "v0.99")
    url, attestation = select_download_urls(_info(), "linux", "amd64")
    assert url == "https://example.com/v0.99/linux-amd64"
    assert "v0.100" not in attestation
    assert attestation.endswith(".intoto.jsonl")


def test_select_download_urls_unsupported_platform():
    with pytest.raises(UpdateError):
        select_download_urls(_info(), "windows", "amd64")


def test_identical_binaries(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(b"\x00\x01\x02\x03")
    b.write_bytes(b"\x00\x01\x02\x03")
    assert assert_identical_binaries(a, b) == []


def test_binaries_of_different_length(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(b"\x00\x01\x02")
    b.write_bytes(b"\x00\x01")
    with pytest.raises(UpdateError):
        assert_identical_binaries(a, b)


def test_few_differences_are_tolerated(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(bytes(10))
    b.write_bytes(b"\x01\x01\x01" + bytes(7))
    differences = assert_identical_binaries(a, b)
    assert len(differences) == 3
    assert all(str(a) in d and str(b) in d for d in differences)


def test_many_differences_fail(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(bytes(10))
    b.write_bytes(b"\x01" * 6 + bytes(4))
    with pytest.raises(UpdateError):
        assert_identical_binaries(a, b)


def test_strip_code_signature_without_tool(monkeypatch, tmp_path):
    monkeypatch.setenv("PATH", str(tmp_path))
    with pytest.raises(UpdateError, match="codesign_allocate"):
        strip_code_signature(tmp_path / "in", tmp_path / "out")


def test_download_simulated_network_error(monkeypatch, tmp_path):
    monkeypatch.setenv("HISHTORY_SIMULATE_NETWORK_ERROR", "1")
    target = tmp_path / "out"
    with pytest.raises(UpdateError, match="simulated network error"):
        download_file(target, (tmp_path / "missing").as_uri())
    assert not target.exists()


def test_download_file_copies_contents(monkeypatch, tmp_path):
    monkeypatch.delenv("HISHTORY_SIMULATE_NETWORK_ERROR", raising=False)
    source = tmp_path / "source"
    source.write_bytes(b"binary contents")
    target = tmp_path / "target"
    target.write_bytes(b"old")
    download_file(target, source.as_uri())
    assert target.read_bytes() == source.read_bytes()


def test_download_missing_file_fails(monkeypatch, tmp_path):
    monkeypatch.delenv("HISHTORY_SIMULATE_NETWORK_ERROR", raising=False)
    with pytest.raises(UpdateError):
        download_file(tmp_path / "target", (tmp_path / "missing").as_uri())