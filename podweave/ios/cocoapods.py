# podweave/ios/cocoapods.py

"""
CocoaPods collaborators: the tool availability check and the
`pod install` runner.
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from rich.markup import escape

from podweave.core.console import Console, ConsoleAware
from podweave.ios.constants import (
    DEFAULT_POD_COMMAND,
    COCOAPODS_MIN_VERSION,
    COCOAPODS_NOT_FOUND_MESSAGE,
)
from podweave.ios.exceptions import (
    CocoaPodsNotFoundError,
    PodInstallError,
    ToolVersionError,
)
from podweave.ios.versions import get_cocoapods_version, compare_versions

# ==============================================================
# TOOL AVAILABILITY CHECK
# ==============================================================

@dataclass
class ToolCheckResult:
    """Outcome of a tool availability check."""
    tool: str
    ok: bool
    reason: Optional[str] = None
    version: Optional[str] = None


ToolCheck = Callable[[], ToolCheckResult]


def check_cocoapods(pod_command: str = DEFAULT_POD_COMMAND) -> ToolCheckResult:
    """
    Check that CocoaPods is on PATH and recent enough.

    Never raises; failures are reported through the result.
    """
    argv = shlex.split(pod_command)
    executable = argv[0] if argv else DEFAULT_POD_COMMAND

    if shutil.which(executable) is None:
        return ToolCheckResult(
            tool=executable,
            ok=False,
            reason=f"CocoaPods was not found. {COCOAPODS_NOT_FOUND_MESSAGE}",
        )

    try:
        version = get_cocoapods_version(pod_command)
    except ToolVersionError as e:
        return ToolCheckResult(tool=executable, ok=False, reason=str(e))

    try:
        too_old = compare_versions(version, COCOAPODS_MIN_VERSION) < 0
    except ValueError:
        return ToolCheckResult(
            tool=executable,
            ok=False,
            reason=f"Unrecognised CocoaPods version '{version}'",
            version=version,
        )

    if too_old:
        return ToolCheckResult(
            tool=executable,
            ok=False,
            reason=(
                f"CocoaPods version {version} is too old. "
                f"{COCOAPODS_NOT_FOUND_MESSAGE}"
            ),
            version=version,
        )

    return ToolCheckResult(tool=executable, ok=True, version=version)

# ==============================================================
# POD INSTALL RUNNER
# ==============================================================

class CocoaPodsInstaller(ConsoleAware):
    """Runs `pod install` in the project directory."""

    def __init__(
        self,
        project_dir: Path,
        pod_command: str = DEFAULT_POD_COMMAND,
        console: Optional[Console] = None,
        verbose: bool = False,
    ):
        super().__init__(console, verbose)
        self.project_dir: Path = Path(project_dir)
        self.pod_command: str = pod_command

    def default_tool_check(self) -> ToolCheckResult:
        return check_cocoapods(self.pod_command)

    def command(self) -> list[str]:
        argv = shlex.split(self.pod_command) or [DEFAULT_POD_COMMAND]
        argv.append("install")
        if self.verbose:
            argv.append("--verbose")
        return argv

    def run(self, tool_check: Optional[ToolCheck] = None) -> None:
        """
        Check for CocoaPods, then run `pod install` to completion.

        Standard output goes straight to the terminal; standard error is
        captured for the error report. There is no timeout.

        Raises:
            CocoaPodsNotFoundError: The tool check failed
            PodInstallError: `pod install` could not start or exited non-zero
        """
        check = tool_check or self.default_tool_check
        result = check()
        if not result.ok:
            raise CocoaPodsNotFoundError(result.tool, result.reason or "unknown reason")

        if result.version:
            self.log(f"[dim]CocoaPods[/] {result.version}")

        argv = self.command()
        command_str = " ".join(argv)
        self.print(f"📦 Running [bold]{command_str}[/] ...")

        try:
            completed = subprocess.run(
                argv,
                cwd=self.project_dir,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise PodInstallError(command_str, -1, str(e))

        if completed.returncode != 0:
            raise PodInstallError(command_str, completed.returncode, completed.stderr)

        if completed.stderr and completed.stderr.strip():
            self.log(f"[dim]{escape(completed.stderr.strip())}[/]")

        self.print(f"[green]✔[/] {command_str} completed")
