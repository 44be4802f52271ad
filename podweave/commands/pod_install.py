# podweave/commands/pod_install.py

from typing import Optional
from pathlib import Path
import typer
from rich.console import Console
from rich.markup import escape

from podweave.core.console import ConsoleAware
from podweave.core.exceptions import PodweaveError
from podweave.ios.config import IOSProjectConfig
from podweave.ios.pod_manager import PodManager
from podweave.ios.exceptions import InstallError, PodInstallError

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def pod_install_command(project_dir: Path, console: Console, verbose: bool):
    """Command wrapper for pod-install command."""
    project_path = Path(project_dir).resolve()
    manager = PodManager(project_path, IOSProjectConfig(project_path), console=console, verbose=verbose)
    manager.run_pod_install()


def register(app):
    """Register the pod-install command with the Typer app."""

    @app.command(name="pod-install")
    def pod_install(
        project_dir: Optional[Path] = typer.Option(
            None,
            "--project-dir",
            "-d",
            help="iOS platform directory holding the Podfile (default: current directory)"
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Show detailed output"
        )
    ):
        """Run `pod install` for the current Podfile (e.g. after a failed add/remove)."""
        console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=verbose)
        try:
            console_awr.print("")
            pod_install_command(project_dir if project_dir is not None else Path.cwd(), console, verbose)
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  pod install cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except PodInstallError as e:
            console_awr.print(f"\n[bold red]❌ pod install failed:[/bold red] exit code {e.returncode}")
            if e.stderr.strip():
                console_awr.print(f"[dim]{escape(e.stderr.strip())}[/]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except (InstallError, PodweaveError) as e:
            console_awr.print(f"\n[bold red]❌ pod install failed:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)
