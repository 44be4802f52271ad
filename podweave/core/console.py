from typing import Optional, Protocol, Any, List

class Console(Protocol):
    """Abstract interface for console output."""
    def print(self, *objects: Any) -> None:
        ...

    def log(self, *objects: Any) -> None:
        ...

class ConsoleAware:
    """Base class for classes that need console output functionality."""
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console
        self.verbose = verbose
        self.warnings: List[str] = []

    def print(self, msg: str) -> None:
        if self.console:
            self.console.print(msg)

    def log(self, msg: str) -> None:
        if self.console and self.verbose:
            self.console.log(msg)

    def warn(self, msg: str) -> None:
        """Print a non-fatal warning and remember it for the caller."""
        self.warnings.append(msg)
        self.print(f"⚠️  [bold yellow]Warning:[/] {msg}")
