# podweave/core/models.py

"""
Core models for podweave.

This module contains the pod declarations a plugin contributes to a
project and the per-call install options.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Dict, Any, List, Union

from pydantic import (
    BaseModel,
    Field,
    field_validator,
    ConfigDict,
)

# ==============================================================
# COMMON ENUMS
# ==============================================================

class DependencyKind(str, Enum):
    """
    Kinds of pod units tracked by the ledger.

    Values double as the top-level keys of pods.json.
    """
    DECLARATION = "declarations"
    SOURCE = "sources"
    LIBRARY = "libraries"

# Order in which units are reconciled and in which they appear in the Podfile
KIND_ORDER = (DependencyKind.DECLARATION, DependencyKind.SOURCE, DependencyKind.LIBRARY)

def is_true(value: Any) -> bool:
    """Check the value is True, 'true' (any case) or 1."""
    return (
        value is True or
        (isinstance(value, str) and value.lower() == "true") or
        (not isinstance(value, bool) and value == 1)
    )

# ==============================================================
# POD UNITS
# ==============================================================

# Pod names as accepted by CocoaPods, subspecs included (e.g. Firebase/Core)
POD_NAME_PATTERN = re.compile(r"^[\w\-\.\+]+(/[\w\-\.\+]+)*$")

# Library fields that may hold $VARIABLE placeholders
LIBRARY_VARIABLE_FIELDS = (
    "name", "spec", "git", "tag", "branch", "commit",
    "path", "configurations", "options", "swift_version",
)

class SourceSpec(BaseModel):
    """A spec repository the Podfile must list with `source`."""
    model_config = ConfigDict(extra="forbid")

    source: str = Field(..., min_length=1, description="Spec repository URL")

class LibrarySpec(BaseModel):
    """A single `pod` line requested by a plugin."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = Field(
        default=None,
        description="Pod name. Required, may be a $VARIABLE placeholder"
    )
    spec: Optional[str] = Field(default=None, description="Version requirement, e.g. '~> 4.0'")
    git: Optional[str] = Field(default=None, description="Git repository URL")
    tag: Optional[str] = Field(default=None, description="Git tag (with git)")
    branch: Optional[str] = Field(default=None, description="Git branch (with git)")
    commit: Optional[str] = Field(default=None, description="Git commit (with git)")
    path: Optional[str] = Field(default=None, description="Local pod path")
    configurations: Optional[str] = Field(
        default=None,
        description="Comma separated build configurations, e.g. 'Debug,Release'"
    )
    options: Optional[str] = Field(
        default=None,
        description="Raw Podfile options, replaces every generated option"
    )
    swift_version: Optional[str] = Field(
        default=None,
        alias="swift-version",
        description="Swift version the pod is built with"
    )
    nospm: Union[bool, str, int, None] = Field(
        default=None,
        description="Skip this pod when the plugin is installed as a Swift package"
    )

    @field_validator(*LIBRARY_VARIABLE_FIELDS, mode="before")
    @classmethod
    def coerce_to_str(cls, v: Any) -> Optional[str]:
        """Plugin descriptors written in YAML may give numbers for versions."""
        if v is None:
            return None
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def excluded_from_swift_package(self) -> bool:
        return is_true(self.nospm)

    def payload(self) -> Dict[str, str]:
        """Podfile-relevant fields, without unset values and packaging flags."""
        return {
            field: value
            for field in LIBRARY_VARIABLE_FIELDS
            if (value := getattr(self, field)) is not None
        }

class PodSpecGroup(BaseModel):
    """Pods declared by one <podspec> block of a plugin."""
    model_config = ConfigDict(extra="forbid")

    declarations: Dict[str, Union[bool, str, int]] = Field(
        default_factory=dict,
        description="Podfile declarations, e.g. {'use-frameworks': 'true'}"
    )
    sources: Dict[str, SourceSpec] = Field(
        default_factory=dict,
        description="Spec repositories keyed by identity"
    )
    libraries: Dict[str, LibrarySpec] = Field(
        default_factory=dict,
        description="Pods keyed by identity"
    )

    @field_validator("sources", mode="before")
    @classmethod
    def validate_sources(cls, v: Any) -> Any:
        """Accept a plain list of URLs as shorthand for {url: {source: url}}."""
        if v is None:
            return {}
        if isinstance(v, list):
            result = {}
            for item in v:
                if not isinstance(item, str):
                    raise ValueError("sources given as a list must contain URLs")
                result[item] = {"source": item}
            return result
        return v

    @field_validator("libraries", mode="before")
    @classmethod
    def validate_libraries(cls, v: Any) -> Any:
        """Accept `Name: '~> 1.0'` as shorthand for `Name: {name: Name, spec: '~> 1.0'}`."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("libraries must be a dictionary")
        result = {}
        for key, lib in v.items():
            if isinstance(lib, str):
                lib = {"name": key, "spec": lib}
            result[key] = lib
        return result

    def is_empty(self) -> bool:
        return not (self.declarations or self.sources or self.libraries)

# ==============================================================
# PLUGIN DESCRIPTOR
# ==============================================================

class PluginDescriptor(BaseModel):
    """
    Pods contributed by a plugin, as read from plugin.yaml / plugin.json.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(
        ...,
        min_length=1,
        max_length=214,
        pattern=r"^[\w\-\.@/]+$",
        description="Plugin identifier, e.g. cordova-plugin-camera"
    )

    swift_package: bool = Field(
        default=False,
        alias="swiftPackage",
        description="Plugin is distributed as a Swift package"
    )

    podspecs: List[PodSpecGroup] = Field(
        default_factory=list,
        description="<podspec> blocks declared by the plugin"
    )

# ==============================================================
# INSTALL OPTIONS
# ==============================================================

class InstallOptions(BaseModel):
    """Per-call options for add/remove. Never persisted."""
    model_config = ConfigDict(extra="forbid")

    variables: Dict[str, str] = Field(
        default_factory=dict,
        description="Values for $VARIABLE placeholders"
    )
    link: bool = Field(
        default=False,
        description=(
            "Plugin is linked rather than copied. Accepted for compatibility "
            "with plugin install options; it does not change how pods are handled"
        )
    )
    swift_package: bool = Field(
        default=False,
        description="Install under Swift Package Manager; pods flagged nospm are skipped"
    )

    @field_validator("variables", mode="before")
    @classmethod
    def validate_variables(cls, v: Any) -> Dict[str, str]:
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("variables must be a dictionary")
        return {str(k): str(val) for k, val in v.items()}
