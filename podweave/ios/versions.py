# podweave/ios/versions.py

"""
Version probing for the external iOS tools podweave drives.
"""

import re
import shlex
import subprocess
from typing import List

import semver

from podweave.ios.constants import DEFAULT_POD_COMMAND
from podweave.ios.exceptions import ToolVersionError, UnknownToolError

KNOWN_TOOLS = ("xcodebuild", "pod")

_LOOSE_VERSION = re.compile(
    r"(?P<major>0|[1-9]\d*)"
    r"(?:\.(?P<minor>0|[1-9]\d*))?"
    r"(?:\.(?P<patch>0|[1-9]\d*))?"
)


def _run(cmd: str, args: List[str]) -> str:
    """Run a tool synchronously and return its stdout."""
    try:
        result = subprocess.run(
            [cmd, *args],
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
    except OSError as e:
        raise ToolVersionError(cmd, str(e))

    if result.returncode != 0:
        raise ToolVersionError(cmd, result.stderr.strip() or f"exit code {result.returncode}")

    return result.stdout


def get_cocoapods_version(pod_command: str = DEFAULT_POD_COMMAND) -> str:
    """Return the output of `pod --version`, stripped. The command may carry a prefix (`bundle exec pod`)."""
    argv = shlex.split(pod_command) or [DEFAULT_POD_COMMAND]
    return _run(argv[0], [*argv[1:], "--version"]).strip()


def get_apple_xcode_version() -> str:
    """Return the Xcode version reported by `xcodebuild -version`."""
    stdout = _run("xcodebuild", ["-version"])
    match = re.search(r"Xcode (.*)", stdout)
    if not match:
        raise ToolVersionError("xcodebuild", f"unexpected output:\n{stdout}")
    return match.group(1).strip()


def get_tool_version(tool_name: str) -> str:
    """Get the version of one of the known tools ('xcodebuild', 'pod')."""
    if tool_name == "xcodebuild":
        return get_apple_xcode_version()
    if tool_name == "pod":
        return get_cocoapods_version()
    raise UnknownToolError(tool_name, KNOWN_TOOLS)


def coerce(version: str) -> semver.Version:
    """
    Parse a version, coercing loose strings such as '1.15' or 'Xcode 15.2'
    to the first major[.minor[.patch]] found.

    Raises:
        ValueError: No version number in the string
    """
    version = version.strip()
    try:
        return semver.Version.parse(version)
    except ValueError:
        pass

    match = _LOOSE_VERSION.search(version)
    if not match:
        raise ValueError(f"Invalid Version: {version}")
    return semver.Version(
        major=int(match.group("major")),
        minor=int(match.group("minor") or 0),
        patch=int(match.group("patch") or 0),
    )


def compare_versions(version1: str, version2: str) -> int:
    """
    Compare two version strings.

    Returns:
        Negative if version1 < version2, positive if greater, 0 if equal
    """
    return coerce(version1).compare(coerce(version2))
