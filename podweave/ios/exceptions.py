# podweave/ios/exceptions.py

"""
iOS/CocoaPods-specific exceptions.

These exceptions are raised by the Podfile writer and the `pod install`
runner. The CLI layer catches them and translates into exit codes.
"""

from typing import Optional

from podweave.core.exceptions import PodweaveError

# ==============================================================
# PODFILE ERRORS
# ==============================================================

class PodfileError(PodweaveError):
    """Base exception for Podfile handling."""
    pass


class PodfileLoadError(PodfileError):
    """Raised when an existing Podfile cannot be read."""

    def __init__(self, path: str, details: str):
        self.path = path
        self.details = details
        super().__init__(f"Cannot read Podfile {path}: {details}")

# ==============================================================
# POD INSTALL ERRORS
# ==============================================================

class InstallError(PodweaveError):
    """Base exception for all `pod install` failures."""
    pass


class CocoaPodsNotFoundError(InstallError):
    """Raised when the CocoaPods tool check fails before `pod install`."""

    def __init__(self, tool: str, reason: str):
        self.tool = tool
        self.reason = reason
        super().__init__(f"CocoaPods ({tool}) is not available: {reason}")


class PodInstallError(InstallError):
    """Raised when `pod install` exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: Optional[str] = None):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""
        message = f"`{command}` failed with exit code {returncode}"
        if self.stderr.strip():
            message += f"\n{self.stderr.strip()}"
        super().__init__(message)


class ToolVersionError(InstallError):
    """Raised when a tool version cannot be determined."""

    def __init__(self, tool: str, details: str):
        self.tool = tool
        self.details = details
        super().__init__(f"Could not determine {tool} version: {details}")


class UnknownToolError(InstallError):
    """Raised when asking for the version of a tool podweave does not know."""

    def __init__(self, tool: str, known: tuple):
        self.tool = tool
        self.known = known
        super().__init__(
            f"{tool} is not a valid tool name. Valid names are: "
            f"{', '.join(repr(name) for name in known)}"
        )
