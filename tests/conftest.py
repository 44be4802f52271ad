# tests/conftest.py

from pathlib import Path
from typing import Optional

import pytest

from podweave.ios.cocoapods import CocoaPodsInstaller, ToolCheck
from podweave.ios.exceptions import PodInstallError


# --- MockConsole to capture output ---
class MockConsole:
    """
    A mock console that captures all output for testing purposes.
    Simulates the rich.Console interface.
    """
    def __init__(self):
        self.logs = []
        self.prints = []

    def log(self, *objects, **kwargs):
        self.logs.append(" ".join(map(str, objects)))

    def print(self, *objects, **kwargs):
        self.prints.append(" ".join(map(str, objects)))

    @property
    def output(self) -> str:
        return "\n".join(self.prints + self.logs)


class FakeInstaller(CocoaPodsInstaller):
    """Counts `pod install` runs instead of spawning CocoaPods."""

    def __init__(self, project_dir: Path, fail: bool = False):
        super().__init__(project_dir)
        self.calls = 0
        self.fail = fail

    def run(self, tool_check: Optional[ToolCheck] = None) -> None:
        self.calls += 1
        if self.fail:
            raise PodInstallError("pod install", 1, "[!] Unable to find a specification")


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """Keep the user's ~/.podweave and PODWEAVE_* variables out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("PODWEAVE_PROJECT_NAME", "PODWEAVE_DEPLOYMENT_TARGET",
                "PODWEAVE_POD_COMMAND", "PODWEAVE_PACKAGE_NAME"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    d = tmp_path / "platforms" / "ios"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def mock_console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def installer(project_dir: Path) -> FakeInstaller:
    return FakeInstaller(project_dir)
