# tests/test_cocoapods.py

import subprocess
from pathlib import Path

import pytest

from podweave.ios import cocoapods
from podweave.ios.cocoapods import CocoaPodsInstaller, ToolCheckResult, check_cocoapods
from podweave.ios.exceptions import CocoaPodsNotFoundError, PodInstallError, ToolVersionError

# --------------------------------------------------------------------------- #
# check_cocoapods
# --------------------------------------------------------------------------- #
def test_check_cocoapods_missing(monkeypatch):
    monkeypatch.setattr(cocoapods.shutil, "which", lambda name: None)
    result = check_cocoapods()
    assert not result.ok
    assert "cocoapods.org" in result.reason


@pytest.mark.parametrize("version, ok", [("1.15.2", True), ("1.8.0", True), ("1.7.5", False)])
def test_check_cocoapods_version(monkeypatch, version, ok):
    monkeypatch.setattr(cocoapods.shutil, "which", lambda name: f"/usr/local/bin/{name}")
    monkeypatch.setattr(cocoapods, "get_cocoapods_version", lambda cmd: version)

    result = check_cocoapods("bundle exec pod")
    assert result.ok is ok
    assert result.version == version
    assert result.tool == "bundle"


def test_check_cocoapods_version_failure(monkeypatch):
    def broken(cmd):
        raise ToolVersionError(cmd, "exit code 1")

    monkeypatch.setattr(cocoapods.shutil, "which", lambda name: "/usr/bin/pod")
    monkeypatch.setattr(cocoapods, "get_cocoapods_version", broken)

    result = check_cocoapods()
    assert not result.ok
    assert "exit code 1" in result.reason

# --------------------------------------------------------------------------- #
# CocoaPodsInstaller
# --------------------------------------------------------------------------- #
def ok_check() -> ToolCheckResult:
    return ToolCheckResult(tool="pod", ok=True, version="1.15.2")


def test_command(tmp_path: Path):
    assert CocoaPodsInstaller(tmp_path).command() == ["pod", "install"]
    assert CocoaPodsInstaller(tmp_path, "bundle exec pod", verbose=True).command() == [
        "bundle", "exec", "pod", "install", "--verbose"
    ]


def test_run(tmp_path: Path, monkeypatch, mock_console):
    calls = []

    def fake_run(args, **kwargs):
        calls.append((args, kwargs))
        return subprocess.CompletedProcess(args, 0, stderr="")

    monkeypatch.setattr(cocoapods.subprocess, "run", fake_run)
    CocoaPodsInstaller(tmp_path, console=mock_console).run(ok_check)

    assert len(calls) == 1
    args, kwargs = calls[0]
    assert args == ["pod", "install"]
    assert kwargs["cwd"] == tmp_path
    assert any("completed" in line for line in mock_console.prints)


def test_run_fails_when_tool_missing(tmp_path: Path, monkeypatch):
    def must_not_run(*args, **kwargs):
        raise AssertionError("pod install must not run")

    monkeypatch.setattr(cocoapods.subprocess, "run", must_not_run)
    with pytest.raises(CocoaPodsNotFoundError) as exc:
        CocoaPodsInstaller(tmp_path).run(lambda: ToolCheckResult(tool="pod", ok=False, reason="not found"))
    assert exc.value.reason == "not found"


def test_run_non_zero_exit(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(
        cocoapods.subprocess, "run",
        lambda args, **kwargs: subprocess.CompletedProcess(args, 1, stderr="[!] No `Podfile' found"),
    )
    with pytest.raises(PodInstallError) as exc:
        CocoaPodsInstaller(tmp_path).run(ok_check)
    assert exc.value.returncode == 1
    assert "No `Podfile' found" in exc.value.stderr
    assert "pod install" in str(exc.value)


def test_run_cannot_start(tmp_path: Path, monkeypatch):
    def missing(args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(cocoapods.subprocess, "run", missing)
    with pytest.raises(PodInstallError) as exc:
        CocoaPodsInstaller(tmp_path).run(ok_check)
    assert exc.value.returncode == -1
