# podweave/ios/podfile.py

"""
Podfile writer.

The Podfile is fully regenerated from its in-memory state: spec sources,
top-level declarations, the platform version and one `pod` line per active
library. Whether anything changed is decided by comparing the rendered text
with a snapshot taken when the file was loaded or last written.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from podweave.core.console import Console, ConsoleAware
from podweave.core.exceptions import PersistenceError
from podweave.core.file_reading import read_source_file_smart
from podweave.core.models import DependencyKind
from podweave.ios.constants import (
    PODFILE,
    DEFAULT_PROJECT_NAME,
    DEFAULT_DEPLOYMENT_TARGET,
    DECLARATION_PATTERNS,
)
from podweave.ios.exceptions import PodfileLoadError

HEADER = "# DO NOT MODIFY -- auto-generated by podweave"

_SOURCE_RE = re.compile(r"^\s*source\s+['\"](?P<url>[^'\"]*)['\"]\s*$")
_PLATFORM_RE = re.compile(r"^\s*platform\s+:ios\s*(?:,\s*['\"](?P<version>[^'\"]*)['\"])?\s*$")
_TARGET_RE = re.compile(r"^\s*target\s+['\"](?P<name>[^'\"]*)['\"]\s+do\s*$")
_PROJECT_RE = re.compile(r"^\s*project\s+['\"][^'\"]*['\"]\s*$")
_POD_RE = re.compile(r"^\s*pod\s+['\"](?P<name>[^'\"]*)['\"](?P<rest>.*)$")
_END_RE = re.compile(r"^\s*end\s*$")


def proof_declaration(declaration: str) -> str:
    """Normalise a declaration spelling, e.g. 'use-frameworks' → 'use_frameworks!'."""
    declaration = declaration.strip()
    for canonical, pattern in DECLARATION_PATTERNS.items():
        if re.match(pattern, declaration):
            return canonical
    return declaration


def render_pod_options(payload: Mapping[str, Optional[str]]) -> str:
    """
    Render everything after `pod 'Name'` for a library payload.

    A spec starting with ':' is emitted unquoted. A raw `options` string
    replaces all generated options (git/path/configurations).
    """
    parts: List[str] = []

    spec = payload.get("spec")
    if spec:
        parts.append(spec if spec.startswith(":") else f"'{spec}'")

    raw_options = payload.get("options")
    if raw_options:
        parts.append(raw_options)
    else:
        git = payload.get("git")
        path = payload.get("path")
        if git:
            parts.append(f":git => '{git}'")
            for ref in ("tag", "branch", "commit"):
                if payload.get(ref):
                    parts.append(f":{ref} => '{payload[ref]}'")
        elif path:
            parts.append(f":path => '{path}'")

        configurations = payload.get("configurations")
        if configurations:
            names = [c.strip() for c in configurations.split(",") if c.strip()]
            parts.append(":configurations => [" + ", ".join(f"'{c}'" for c in names) + "]")

    return "".join(f", {part}" for part in parts)

# ==============================================================
# PODFILE CLASS
# ==============================================================

class Podfile(ConsoleAware):
    """In-memory Podfile with snapshot-based change tracking."""

    def __init__(
        self,
        path: Path,
        project_name: Optional[str] = None,
        deployment_target: Optional[str] = None,
        console: Optional[Console] = None,
        verbose: bool = False,
    ):
        super().__init__(console, verbose)
        self.path: Path = Path(path)
        self.project_name: str = project_name or DEFAULT_PROJECT_NAME
        self.deployment_target: str = deployment_target or DEFAULT_DEPLOYMENT_TARGET
        self.sources: List[str] = []
        self.declarations: List[str] = []
        self.pods: Dict[str, str] = {}
        self._snapshot: str = ""

        self.load(project_name, deployment_target)

    @classmethod
    def in_project(cls, project_dir: Path, **kwargs) -> "Podfile":
        return cls(Path(project_dir) / PODFILE, **kwargs)

    def load(self, project_name: Optional[str] = None, deployment_target: Optional[str] = None) -> None:
        """
        Parse the Podfile on disk, if any, and take the change snapshot.

        Target name and platform version come from the file. The built-in
        defaults apply only when there is no file. An explicit project name
        or deployment target takes effect after the snapshot, so it shows up
        as a pending change when it differs from the file.
        """
        self.sources, self.declarations, self.pods = [], [], {}
        self.project_name = DEFAULT_PROJECT_NAME
        self.deployment_target = DEFAULT_DEPLOYMENT_TARGET

        if self.path.exists():
            try:
                text = read_source_file_smart(self.path)
            except OSError as e:
                raise PodfileLoadError(str(self.path), str(e))
            self._parse(text)
            self.log(f"[dim]loaded[/] {self.path.name}: {len(self.pods)} pod(s)")
        else:
            self.project_name = project_name or DEFAULT_PROJECT_NAME
            self.deployment_target = deployment_target or DEFAULT_DEPLOYMENT_TARGET

        self._snapshot = self.get_template()

        if project_name:
            self.project_name = project_name
        if deployment_target:
            self.deployment_target = deployment_target

    def _parse(self, text: str) -> None:
        in_target = False
        for line in text.split("\n"):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            if not in_target:
                if m := _TARGET_RE.match(line):
                    in_target = True
                    self.project_name = m.group("name")
                elif m := _SOURCE_RE.match(line):
                    self._append_unique(self.sources, m.group("url"))
                elif m := _PLATFORM_RE.match(line):
                    if m.group("version"):
                        self.deployment_target = m.group("version")
                else:
                    self._append_unique(self.declarations, stripped)
                continue

            if _END_RE.match(line):
                in_target = False
            elif m := _POD_RE.match(line):
                self.pods[m.group("name")] = m.group("rest").rstrip()
            elif _PROJECT_RE.match(line):
                continue
            else:
                self._append_unique(self.declarations, stripped)

    @staticmethod
    def _append_unique(items: List[str], value: str) -> None:
        if value not in items:
            items.append(value)

    # ----------------------------------------------------------
    # mutations
    # ----------------------------------------------------------

    def add_declaration(self, declaration: str) -> None:
        declaration = proof_declaration(declaration)
        self.log(f"[dim]Podfile[/] + declaration {declaration}")
        self._append_unique(self.declarations, declaration)

    def remove_declaration(self, declaration: str) -> None:
        declaration = proof_declaration(declaration)
        if declaration in self.declarations:
            self.log(f"[dim]Podfile[/] - declaration {declaration}")
            self.declarations.remove(declaration)

    def add_source(self, source: str) -> None:
        self.log(f"[dim]Podfile[/] + source {source}")
        self._append_unique(self.sources, source)

    def remove_source(self, source: str) -> None:
        if source in self.sources:
            self.log(f"[dim]Podfile[/] - source {source}")
            self.sources.remove(source)

    def add_spec(self, name: str, payload: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """Add or replace the `pod` line for a library."""
        self.pods[name] = render_pod_options(payload or {})
        self.log(f"[dim]Podfile[/] + pod '{name}'{self.pods[name]}")

    def remove_spec(self, name: str) -> None:
        if name in self.pods:
            self.log(f"[dim]Podfile[/] - pod '{name}'")
            del self.pods[name]

    def exists_pod(self, name: str) -> bool:
        return name in self.pods

    def contains(self, kind: DependencyKind, name: str) -> bool:
        """True if the Podfile has the declaration, source URL or pod `name`."""
        if kind == DependencyKind.DECLARATION:
            return proof_declaration(name) in self.declarations
        if kind == DependencyKind.SOURCE:
            return name in self.sources
        return self.exists_pod(name)

    # ----------------------------------------------------------
    # serialization
    # ----------------------------------------------------------

    def get_template(self) -> str:
        lines = [HEADER]
        lines.extend(f"source '{source}'" for source in self.sources)
        lines.append(f"platform :ios, '{self.deployment_target}'")
        lines.extend(self.declarations)
        lines.append(f"target '{self.project_name}' do")
        lines.append(f"\tproject '{self.project_name}.xcodeproj'")
        lines.extend(f"\tpod '{name}'{rest}" for name, rest in self.pods.items())
        lines.append("end")
        return "\n".join(lines) + "\n"

    def is_dirty(self) -> bool:
        """True iff the rendered Podfile differs from what was loaded or last written."""
        return self.get_template() != self._snapshot

    def write(self) -> None:
        content = self.get_template()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(str(self.path), str(e))
        self._snapshot = content
        self.log(f"[dim]wrote[/] {self.path}")
