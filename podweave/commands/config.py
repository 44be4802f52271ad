# podweave/commands/config.py

"""
podweave config command: manage podweave configuration settings.

Sets the Xcode project name, deployment target, CocoaPods command and app
package name, either for the project (.podweave/config.yaml) or as global
defaults (~/.podweave/config.yaml).
"""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from podweave.core.console import ConsoleAware
from podweave.core.global_config import set_global_default, global_config_path
from podweave.core.exceptions import PodweaveError
from podweave.ios.config import IOSProjectConfig
from podweave.ios.constants import DEFAULT_PROJECT_NAME, DEFAULT_DEPLOYMENT_TARGET
from podweave.ios.exceptions import InstallError
from podweave.ios.versions import KNOWN_TOOLS, get_tool_version

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

# option value attribute → (config key, setter name)
_SETTINGS = {
    "project_name": ("project-name", "set_project_name"),
    "deployment_target": ("deployment-target", "set_deployment_target"),
    "pod_command": ("pod-command", "set_pod_command"),
    "package_name": ("package-name", "set_package_name"),
}

def _or_default(value: Optional[str], default: str) -> str:
    if value is None:
        return f"[dim]Not set (Podfile value, or {default} for a new Podfile)[/]"
    return escape(value)

def config_command(
    project_dir: Optional[Path],
    values: dict,
    use_global: bool,
    list_all: bool,
    console: Console
):
    """Command wrapper for config command."""

    if project_dir is None:
        project_path = Path.cwd()
    else:
        project_path = Path(project_dir).resolve()

    console_awr = ConsoleAware(console=console, verbose=False)

    config: IOSProjectConfig = IOSProjectConfig(project_path)

    changed = False
    for attr, (key, setter) in _SETTINGS.items():
        value = values.get(attr)
        if value is None:
            continue
        changed = True
        if use_global:
            set_global_default(key, value)
            console_awr.print(f"🔧 [green]Global default {key} set[/green] → [cyan]{escape(value)}[/cyan]")
        else:
            getattr(config, setter)(value)
            console_awr.print(f"🔧 [green]{key} set[/green] → [cyan]{escape(value)}[/cyan]")

    # List all settings if requested or no settings were changed
    if not (list_all or not changed):
        return

    # Reload so that global defaults written above are visible
    config = IOSProjectConfig(project_path)

    console_awr.print("📋 [bold cyan]Configuration in use:[/]")
    console_awr.print("")
    console_awr.print(f"  project-name:       {_or_default(config.get_project_name(), DEFAULT_PROJECT_NAME)}")
    console_awr.print(f"  deployment-target:  {_or_default(config.get_deployment_target(), DEFAULT_DEPLOYMENT_TARGET)}")
    console_awr.print(f"  pod-command:        {escape(config.get_pod_command())}")
    console_awr.print(f"  package-name:       {escape(config.get_package_name() or '') or '[dim]Not set[/]'}")
    console_awr.print("")
    console_awr.print(f"  [dim]project config: {config.config_file}[/]")
    console_awr.print(f"  [dim]global config:  {global_config_path()}[/]")

    console_awr.print("")
    console_awr.print("🧰 [bold cyan]Tools:[/]")
    for tool in KNOWN_TOOLS:
        try:
            version = get_tool_version(tool)
            console_awr.print(f"  {tool}: [cyan]{escape(version)}[/cyan]")
        except InstallError as e:
            console_awr.print(f"  {tool}: [dim]not available[/] ({escape(str(e))})")

def register(app):
    """Register the config command with the Typer app."""

    @app.command()
    def config(
        project_dir: Optional[Path] = typer.Option(
            None,
            "--project-dir",
            "-d",
            help="Project directory (default: current directory)"
        ),
        project_name: Optional[str] = typer.Option(
            None,
            "--project-name",
            help="Set the Xcode project/target name used in the Podfile"
        ),
        deployment_target: Optional[str] = typer.Option(
            None,
            "--deployment-target",
            help="Set the minimum iOS version written to the Podfile (e.g. 13.0)"
        ),
        pod_command: Optional[str] = typer.Option(
            None,
            "--pod-command",
            help="Set the CocoaPods command (e.g. 'bundle exec pod')"
        ),
        package_name: Optional[str] = typer.Option(
            None,
            "--package-name",
            help="Set the app package name, available to plugins as $PACKAGE_NAME"
        ),
        use_global: Optional[bool] = typer.Option(
            False,
            "--global",
            "-g",
            help="Store the values as global defaults instead of in the project"
        ),
        list_all: Optional[bool] = typer.Option(
            False,
            "--list",
            "-l",
            help="List all configurations in use"
        )
    ):
        """
        Manage podweave configuration settings.
        """
        console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=False)

        try:
            console_awr.print("")
            config_command(
                project_dir,
                {
                    "project_name": project_name,
                    "deployment_target": deployment_target,
                    "pod_command": pod_command,
                    "package_name": package_name,
                },
                use_global or False,
                list_all or False,
                console
            )
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Config setting cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except PodweaveError as e:
            console_awr.print(f"\n[bold red]❌ Config setting failed:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)
