# podweave/ios/__init__.py

from .exceptions import (
    PodfileError,
    PodfileLoadError,
    InstallError,
    CocoaPodsNotFoundError,
    PodInstallError,
    ToolVersionError,
    UnknownToolError,
)

__all__ = [
    'PodfileError',
    'PodfileLoadError',
    'InstallError',
    'CocoaPodsNotFoundError',
    'PodInstallError',
    'ToolVersionError',
    'UnknownToolError',
]
