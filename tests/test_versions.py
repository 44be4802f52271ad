# tests/test_versions.py

import subprocess

import pytest

from podweave.ios import versions
from podweave.ios.exceptions import ToolVersionError, UnknownToolError


def fake_run(stdout: str = "", returncode: int = 0, stderr: str = ""):
    calls = []

    def _run(args, **kwargs):
        calls.append(args)
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=stderr)

    _run.calls = calls
    return _run


@pytest.mark.parametrize("v1, v2, sign", [
    ("1.8.0", "1.8.0", 0),
    ("1.15.2", "1.8.0", 1),
    ("1.7.5", "1.8.0", -1),
    ("1.8", "1.8.0", 0),
    ("Xcode 15.2", "15.1.9", 1),
    ("2.0.0-beta.1", "2.0.0", -1),
])
def test_compare_versions(v1, v2, sign):
    result = versions.compare_versions(v1, v2)
    assert (result > 0) - (result < 0) == sign


def test_coerce_rejects_garbage():
    with pytest.raises(ValueError):
        versions.coerce("not a version")


def test_get_cocoapods_version(monkeypatch):
    run = fake_run(stdout="1.15.2\n")
    monkeypatch.setattr(versions.subprocess, "run", run)

    assert versions.get_cocoapods_version() == "1.15.2"
    assert run.calls == [["pod", "--version"]]


def test_get_apple_xcode_version(monkeypatch):
    monkeypatch.setattr(versions.subprocess, "run", fake_run(stdout="Xcode 15.2\nBuild version 15C500b\n"))
    assert versions.get_tool_version("xcodebuild") == "15.2"


def test_unexpected_xcodebuild_output(monkeypatch):
    monkeypatch.setattr(versions.subprocess, "run", fake_run(stdout="garbage"))
    with pytest.raises(ToolVersionError):
        versions.get_apple_xcode_version()


def test_tool_failure(monkeypatch):
    monkeypatch.setattr(versions.subprocess, "run", fake_run(returncode=1, stderr="boom"))
    with pytest.raises(ToolVersionError) as exc:
        versions.get_tool_version("pod")
    assert exc.value.tool == "pod"
    assert "boom" in exc.value.details


def test_tool_not_installed(monkeypatch):
    def missing(args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(versions.subprocess, "run", missing)
    with pytest.raises(ToolVersionError):
        versions.get_cocoapods_version()


def test_unknown_tool():
    with pytest.raises(UnknownToolError) as exc:
        versions.get_tool_version("carthage")
    assert "'xcodebuild', 'pod'" in str(exc.value)
