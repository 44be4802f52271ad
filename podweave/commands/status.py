# podweave/commands/status.py

from typing import Optional
from pathlib import Path
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from podweave.core.console import ConsoleAware
from podweave.core.ledger import PodsLedger
from podweave.core.models import KIND_ORDER, DependencyKind
from podweave.core.exceptions import PodweaveError
from podweave.ios.config import IOSProjectConfig
from podweave.ios.podfile import Podfile
from podweave.ios.pod_manager import PodManager

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def _describe_entry(kind: DependencyKind, entry: dict) -> str:
    if kind == DependencyKind.DECLARATION:
        return entry.get("declaration", "")
    if kind == DependencyKind.SOURCE:
        return entry.get("source", "")
    details = [f"{k}: {v}" for k, v in entry.items() if k not in ("name", "count")]
    return ", ".join(details)


def status_command(project_dir: Path, console: Console, verbose: bool):
    """Command wrapper for status command."""
    project_path = Path(project_dir).resolve()
    console_awr = ConsoleAware(console=console, verbose=verbose)

    config = IOSProjectConfig(project_path)
    ledger = PodsLedger(project_path)
    ledger.load()
    podfile = Podfile.in_project(project_path, project_name=config.get_project_name(),
                                 console=console, verbose=verbose)

    console_awr.print("🔍 [bold cyan]Pods Status[/bold cyan]\n")
    console_awr.print(f"  Project: [cyan]{podfile.project_name}[/cyan]")
    console_awr.print(f"  Platform: [cyan]ios {podfile.deployment_target}[/cyan]")
    console_awr.print(f"  Ledger: [cyan]{ledger.ledger_path}[/cyan]")
    console_awr.print("")

    table = Table(title="Registered Pods", show_header=True, header_style="bold cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Name")
    table.add_column("Details")
    table.add_column("Refs", justify="right")
    table.add_column("Podfile", justify="center")

    total = 0
    missing = 0
    for kind in KIND_ORDER:
        for key, entry in ledger.entries(kind):
            total += 1
            present = podfile.contains(kind, PodManager.podfile_name(kind, key, entry))
            if not present:
                missing += 1
            table.add_row(
                kind.value,
                escape(entry.get("name") or key),
                escape(_describe_entry(kind, entry)),
                str(entry.get("count", 0)),
                "[green]✓[/]" if present else "[red]✗[/]",
            )

    if total == 0:
        console_awr.print("[dim]No pods registered.[/]")
        return

    console.print(table)
    if missing:
        console_awr.print(
            f"\n[yellow]⚠️  {missing} registered unit(s) missing from the Podfile. "
            f"Re-adding any plugin that declares them restores them.[/]"
        )


def register(app):
    """Register the status command with the Typer app."""

    @app.command()
    def status(
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
        """Show the pods registered in pods.json and whether the Podfile has them."""
        console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=verbose)
        try:
            console_awr.print("")
            status_command(project_dir if project_dir is not None else Path.cwd(), console, verbose)
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Status check cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except PodweaveError as e:
            console_awr.print(f"\n[bold red]❌ Status check failed:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {escape(str(e))}")
            console_awr.print("")
            raise typer.Exit(code=1)
