# podweave/commands/remove.py

from typing import List, Optional
from pathlib import Path
import typer
from rich.console import Console
from rich.markup import escape

from podweave.core.console import ConsoleAware
from podweave.core.file_reading import load_plugin_descriptor
from podweave.core.models import InstallOptions
from podweave.core.variables import parse_variable_assignments
from podweave.core.exceptions import PodweaveError
from podweave.ios.config import IOSProjectConfig
from podweave.ios.pod_manager import PodManager
from podweave.ios.exceptions import InstallError

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def remove_command(
    descriptor: Path,
    variables: List[str],
    swift_package: bool,
    project_dir: Path,
    console: Console,
    verbose: bool,
):
    """Command wrapper for remove command."""

    project_path = Path(project_dir).resolve()
    console_awr = ConsoleAware(console=console, verbose=verbose)

    plugin = load_plugin_descriptor(descriptor)
    options = InstallOptions(
        variables=parse_variable_assignments(variables),
        swift_package=swift_package,
    )

    manager = PodManager(project_path, IOSProjectConfig(project_path), console=console, verbose=verbose)
    result = manager.remove_plugin(plugin, options)

    if result.podfile_changed:
        console_awr.print(f"[bold green]✔ Pods for {plugin.id} removed[/]")
    else:
        console_awr.print(f"[bold green]✔ {plugin.id} released[/] [dim](pods still in use, Podfile unchanged)[/]")


def register(app):
    """Register the remove command with the main Typer app."""

    @app.command()
    def remove(
        descriptor: Path = typer.Argument(
            ...,
            help="Plugin descriptor (plugin.yaml/plugin.json) or the directory holding it"
        ),
        variables: Optional[List[str]] = typer.Option(
            None,
            "--var",
            help="Value for a $VARIABLE placeholder, as NAME=VALUE (repeatable)"
        ),
        swift_package: Optional[bool] = typer.Option(
            False,
            "--swift-package",
            help="The plugin was installed as a Swift package"
        ),
        project_dir: Optional[Path] = typer.Option(
            None,
            "--project-dir",
            "-d",
            help="iOS platform directory holding the Podfile (default: current directory)"
        ),
        verbose: Optional[bool] = typer.Option(
            False,
            "--verbose",
            help="Show detailed output"
        )
    ):
        """Remove a plugin's pods that no other plugin still needs."""

        console: Console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=True if verbose else False)

        try:
            console_awr.print("")
            project_dir = project_dir if project_dir is not None else Path.cwd()
            remove_command(descriptor, variables or [], bool(swift_package), project_dir,
                           console=console,
                           verbose=True if verbose else False)
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Remove cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except InstallError as e:
            console_awr.print(f"\n[bold red]❌ pod install failed:[/bold red] {escape(str(e))}")
            console_awr.print("[dim]pods.json and the Podfile were updated; run `podweave pod-install` to retry.[/]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except PodweaveError as e:
            console_awr.print(f"\n[bold red]❌ Remove failed:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)
