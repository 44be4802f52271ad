# podweave/ios/config.py
from typing import Optional, Any
from pathlib import Path
import os

"""
iOS-specific configuration options management.

This module resolves the Xcode project name, the minimum deployment target
written to the Podfile and the CocoaPods command used for `pod install`.
"""

from podweave.core.config import ProjectConfig
from podweave.core.global_config import get_global_default
from podweave.ios.constants import DEFAULT_POD_COMMAND

class IOSProjectConfig(ProjectConfig):
    """iOS-specific configuration options handler."""

    def __init__(self, project_path: Path):
        super().__init__(project_path)
        self.global_config_default: dict = get_global_default()

    def get_final(self, env_key: str, config_key: str, default: Optional[str]=None) -> Any:
        """Get configuration value from environment variable, config file, or default."""

        # Env has the highest priority
        v = os.environ.get(env_key, None)
        if v is not None:
            return v

        # Then project-specific config file
        v = self.get(config_key, None)
        if v is not None:
            return v

        # Finally global config or default value
        v = self.global_config_default.get(config_key, default)
        return v

    def get_project_name(self) -> Optional[str]:
        """
        Xcode project/target name for the Podfile target block.

        None when not configured: the name in an existing Podfile is kept,
        and a new Podfile uses DEFAULT_PROJECT_NAME.
        """
        v = self.get_final("PODWEAVE_PROJECT_NAME", "project-name")
        return str(v) if v is not None else None

    def set_project_name(self, name: str):
        self.save_if_changed("project-name", name)

    def get_deployment_target(self) -> Optional[str]:
        """Minimum iOS version for the Podfile `platform` line, or None when not configured."""
        v = self.get_final("PODWEAVE_DEPLOYMENT_TARGET", "deployment-target")
        return str(v) if v is not None else None

    def set_deployment_target(self, version: str):
        self.save_if_changed("deployment-target", str(version))

    def get_pod_command(self) -> str:
        """Executable used for `pod install` and `pod --version`."""
        return str(self.get_final("PODWEAVE_POD_COMMAND", "pod-command", DEFAULT_POD_COMMAND))

    def set_pod_command(self, command: str):
        self.save_if_changed("pod-command", command)

    def get_package_name(self) -> Optional[str]:
        """App bundle identifier, exposed to plugins as $PACKAGE_NAME."""
        v = self.get_final("PODWEAVE_PACKAGE_NAME", "package-name")
        return str(v) if v is not None else None

    def set_package_name(self, package_name: str):
        self.save_if_changed("package-name", package_name)
