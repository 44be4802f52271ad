from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from podweave.core.console import Console, ConsoleAware
from podweave.core.ledger import PodsLedger
from podweave.core.models import (
    DependencyKind,
    KIND_ORDER,
    InstallOptions,
    PluginDescriptor,
    PodSpecGroup,
    POD_NAME_PATTERN,
    is_true,
)
from podweave.core.variables import resolve_library
from podweave.core.exceptions import InvalidPodSpecError
from podweave.ios.config import IOSProjectConfig
from podweave.ios.podfile import Podfile, proof_declaration
from podweave.ios.cocoapods import CocoaPodsInstaller, ToolCheck

# ==============================================================
# TYPES
# ==============================================================

@dataclass
class PodUnit:
    """One resolved pod unit: the ledger identity plus what goes in the Podfile."""
    kind: DependencyKind
    key: str
    payload: Dict[str, Any]
    podfile_name: str


@dataclass
class ReconcileResult:
    """Outcome of one add/remove call."""
    plugin_id: str
    operation: str
    podfile_changed: bool = False
    installer_invoked: bool = False
    warnings: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

# ==============================================================
# POD MANAGER CLASS
# ==============================================================

class PodManager(ConsoleAware):
    """
    Reconciles a plugin's declared pods with pods.json and the Podfile.

    Every add/remove call loads both files, applies the plugin's units in
    order (declarations, sources, libraries), writes the ledger, then writes
    the Podfile and runs `pod install` only if the Podfile content changed.
    Callers must not run two calls against the same project concurrently.
    """

    def __init__(
        self,
        project_dir: Path,
        config: Optional[IOSProjectConfig] = None,
        installer: Optional[CocoaPodsInstaller] = None,
        tool_check: Optional[ToolCheck] = None,
        console: Optional[Console] = None,
        verbose: bool = False,
    ):
        super().__init__(console, verbose)
        self.project_dir: Path = Path(project_dir)
        self.config: IOSProjectConfig = config or IOSProjectConfig(self.project_dir)
        self.installer: CocoaPodsInstaller = installer or CocoaPodsInstaller(
            self.project_dir, self.config.get_pod_command(), console, verbose
        )
        self.tool_check: Optional[ToolCheck] = tool_check

    # ----------------------------------------------------------
    # public API
    # ----------------------------------------------------------

    def add_plugin(self, plugin: PluginDescriptor, options: Optional[InstallOptions] = None) -> ReconcileResult:
        """Add the pods of a plugin descriptor."""
        return self.add_pod_specs(plugin.id, plugin.podspecs, self._plugin_options(plugin, options))

    def remove_plugin(self, plugin: PluginDescriptor, options: Optional[InstallOptions] = None) -> ReconcileResult:
        """Remove the pods of a plugin descriptor."""
        return self.remove_pod_specs(plugin.id, plugin.podspecs, self._plugin_options(plugin, options))

    def add_pod_specs(
        self,
        plugin_id: str,
        pod_specs: Sequence[PodSpecGroup],
        options: Optional[InstallOptions] = None,
    ) -> ReconcileResult:
        """
        Register a plugin's pods and install them if the Podfile changed.

        Raises:
            InvalidPodSpecError / UnresolvedVariableError: before any mutation
            LedgerLoadError, PodfileLoadError, PersistenceError: I/O failures
            CocoaPodsNotFoundError, PodInstallError: `pod install` failed;
                pods.json and the Podfile are already written
        """
        self.warnings = []
        result = ReconcileResult(plugin_id=plugin_id, operation="add")
        if not any(not group.is_empty() for group in pod_specs):
            self.log(f"[dim]{plugin_id} declares no pods[/]")
            return result

        options = self._with_package_name(options)
        units = self._collect_units(plugin_id, pod_specs, options, strict=True, result=result)

        ledger = PodsLedger(self.project_dir)
        ledger.load()
        podfile = self._open_podfile(self.config.get_deployment_target())

        self.log(f"[bold blue]Adding pods[/] for {plugin_id} ({len(units)} unit(s))")
        for unit in units:
            registered = ledger.get(unit.kind, unit.key)
            if registered is None:
                ledger.set_entry(unit.kind, unit.key, unit.payload)
                self._add_to_podfile(podfile, unit.kind, unit.podfile_name, unit.payload)
                continue

            count = ledger.increment(unit.kind, unit.key)
            registered.pop("count", None)
            self.log(f"[dim]{unit.kind.value}[/] {unit.key} already registered → {count} reference(s)")

            if unit.kind == DependencyKind.LIBRARY and registered != unit.payload:
                self.warn(
                    f"{plugin_id} depends on {unit.podfile_name} ({self._describe(unit.payload)}), "
                    f"which conflicts with the installed {registered.get('name', unit.key)} "
                    f"({self._describe(registered)}). The installed pod was not overwritten."
                )

            name = self.podfile_name(unit.kind, unit.key, registered)
            if not podfile.contains(unit.kind, name):
                self.log(
                    f"[yellow]{unit.kind.value} '{unit.key}' is in pods.json but missing "
                    f"from the Podfile, restoring it[/]"
                )
                self._add_to_podfile(podfile, unit.kind, name, registered)

        ledger.write()
        return self._sync(podfile, result, "to install plugins")

    def remove_pod_specs(
        self,
        plugin_id: str,
        pod_specs: Sequence[PodSpecGroup],
        options: Optional[InstallOptions] = None,
    ) -> ReconcileResult:
        """
        Release a plugin's pods; pods no other plugin needs leave the Podfile.

        Units missing from pods.json are still removed from the Podfile.
        """
        self.warnings = []
        result = ReconcileResult(plugin_id=plugin_id, operation="remove")
        if not any(not group.is_empty() for group in pod_specs):
            self.log(f"[dim]{plugin_id} declares no pods[/]")
            return result

        options = self._with_package_name(options)
        units = self._collect_units(plugin_id, pod_specs, options, strict=False, result=result)

        ledger = PodsLedger(self.project_dir)
        ledger.load()
        podfile = self._open_podfile(None)

        self.log(f"[bold blue]Removing pods[/] for {plugin_id} ({len(units)} unit(s))")
        for unit in units:
            registered = ledger.get(unit.kind, unit.key)
            if registered is None:
                self.log(
                    f'plugin "{plugin_id}" {unit.kind.value} "{unit.key}" not found in pods.json, '
                    f"nothing to remove. Attempting removal from the Podfile anyway."
                )
                self._release(ledger, podfile, unit.kind, unit.podfile_name)
                continue

            remaining = ledger.decrement(unit.kind, unit.key)
            if remaining == 0:
                self._release(ledger, podfile, unit.kind, self.podfile_name(unit.kind, unit.key, registered))
            else:
                self.log(f"[dim]{unit.kind.value}[/] {unit.key} still used by {remaining} plugin(s)")

        ledger.write()
        return self._sync(podfile, result, "to uninstall pods")

    def run_pod_install(self) -> None:
        """Run only `pod install`, e.g. to retry after a failed add/remove."""
        self.installer.run(self.tool_check)

    # ----------------------------------------------------------
    # unit collection
    # ----------------------------------------------------------

    def _collect_units(
        self,
        plugin_id: str,
        pod_specs: Sequence[PodSpecGroup],
        options: InstallOptions,
        strict: bool,
        result: ReconcileResult,
    ) -> List[PodUnit]:
        """Resolve every declared unit; ordered by kind, then declaration order."""
        by_kind: Dict[DependencyKind, List[PodUnit]] = {kind: [] for kind in KIND_ORDER}

        for group in pod_specs:
            for key, value in group.declarations.items():
                if not is_true(value):
                    continue
                declaration = proof_declaration(key)
                by_kind[DependencyKind.DECLARATION].append(
                    PodUnit(DependencyKind.DECLARATION, declaration, {"declaration": declaration}, declaration)
                )

            for key, source in group.sources.items():
                by_kind[DependencyKind.SOURCE].append(
                    PodUnit(DependencyKind.SOURCE, key, {"source": source.source}, source.source)
                )

            for key, library in group.libraries.items():
                if options.swift_package and library.excluded_from_swift_package():
                    self.log(f"[dim]skipping[/] {key} (nospm, installed as Swift package)")
                    result.skipped.append(key)
                    continue

                resolved = resolve_library(key, library, options.variables, strict=strict)
                name = resolved.name
                if strict:
                    if not name:
                        raise InvalidPodSpecError(plugin_id, key, "missing required 'name'")
                    if not POD_NAME_PATTERN.match(name):
                        raise InvalidPodSpecError(plugin_id, key, f"invalid pod name '{name}'")
                by_kind[DependencyKind.LIBRARY].append(
                    PodUnit(DependencyKind.LIBRARY, key, resolved.payload(), name or key)
                )

        return [unit for kind in KIND_ORDER for unit in by_kind[kind]]

    def _with_package_name(self, options: Optional[InstallOptions]) -> InstallOptions:
        options = options.model_copy(deep=True) if options else InstallOptions()
        if "PACKAGE_NAME" not in options.variables:
            package_name = self.config.get_package_name()
            if package_name:
                options.variables["PACKAGE_NAME"] = package_name
        return options

    @staticmethod
    def _plugin_options(plugin: PluginDescriptor, options: Optional[InstallOptions]) -> InstallOptions:
        options = options.model_copy(deep=True) if options else InstallOptions()
        options.swift_package = options.swift_package or plugin.swift_package
        return options

    # ----------------------------------------------------------
    # Podfile helpers
    # ----------------------------------------------------------

    def _open_podfile(self, deployment_target: Optional[str]) -> Podfile:
        return Podfile.in_project(
            self.project_dir,
            project_name=self.config.get_project_name(),
            deployment_target=deployment_target,
            console=self.console,
            verbose=self.verbose,
        )

    @staticmethod
    def podfile_name(kind: DependencyKind, key: str, entry: Dict[str, Any]) -> str:
        """Podfile-side name of a ledger entry: declaration text, source URL or pod name."""
        if kind == DependencyKind.DECLARATION:
            return entry.get("declaration") or key
        if kind == DependencyKind.SOURCE:
            return entry.get("source") or key
        return entry.get("name") or key

    @staticmethod
    def _add_to_podfile(podfile: Podfile, kind: DependencyKind, name: str, payload: Dict[str, Any]) -> None:
        if kind == DependencyKind.DECLARATION:
            podfile.add_declaration(name)
        elif kind == DependencyKind.SOURCE:
            podfile.add_source(name)
        else:
            podfile.add_spec(name, payload)

    def _release(self, ledger: PodsLedger, podfile: Podfile, kind: DependencyKind, name: str) -> None:
        """Remove `name` from the Podfile unless another live entry renders the same line."""
        for key, entry in ledger.entries(kind):
            if self.podfile_name(kind, key, entry) == name:
                self.log(f"[dim]{kind.value}[/] {name} still registered as '{key}', keeping it in the Podfile")
                return
        self._remove_from_podfile(podfile, kind, name)

    @staticmethod
    def _remove_from_podfile(podfile: Podfile, kind: DependencyKind, name: str) -> None:
        if kind == DependencyKind.DECLARATION:
            podfile.remove_declaration(name)
        elif kind == DependencyKind.SOURCE:
            podfile.remove_source(name)
        else:
            podfile.remove_spec(name)

    @staticmethod
    def _describe(payload: Dict[str, Any]) -> str:
        pins = [
            f"{k}={payload[k]}"
            for k in ("spec", "git", "tag", "branch", "commit", "path")
            if payload.get(k)
        ]
        return ", ".join(pins) if pins else "no version pin"

    def _sync(self, podfile: Podfile, result: ReconcileResult, reason: str) -> ReconcileResult:
        """Write the Podfile and run `pod install` if it changed."""
        result.warnings = list(self.warnings)
        if not podfile.is_dirty():
            self.log("Podfile unchanged, skipping `pod install`")
            return result

        podfile.write()
        result.podfile_changed = True
        self.log(f"Running `pod install` ({reason})")
        self.installer.run(self.tool_check)
        result.installer_invoked = True
        return result
