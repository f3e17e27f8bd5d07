"""CLI output utilities for consistent messaging."""

from pathlib import Path

from rich.console import Console

_console = Console()


def success(message: str) -> None:
    """Print a success message with green checkmark."""
    _console.print(f"[green]✓[/green] {message}")


def error(message: str) -> None:
    """Print an error message with red X."""
    _console.print(f"[red]✗[/red] {message}")


def warning(message: str) -> None:
    """Print a warning message with yellow exclamation."""
    _console.print(f"[yellow]![/yellow] {message}")


def step(message: str) -> None:
    """Print a progress line for a step that is about to run."""
    _console.print(f"[blue]{message}[/blue]")


def info(message: str) -> None:
    """Print an info message (no prefix)."""
    _console.print(message)


def dim(message: str) -> None:
    """Print a dimmed message (for secondary info)."""
    _console.print(f"[dim]{message}[/dim]")


def nice_path(path: Path, home: Path | None = None) -> str:
    """Render a path with the home directory shortened to ``~``."""
    base = home if home is not None else Path.home()
    try:
        return str(Path("~") / path.relative_to(base))
    except ValueError:
        return str(path)
