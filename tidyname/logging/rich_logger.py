"""Rich-based logging setup and progress reporters."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from ..core.models import RenameResult


def configure_logging(verbose: bool = False, quiet: bool = False, console: Optional[Console] = None) -> None:
    """Route the ``tidyname`` loggers to a RichHandler on stderr.

    Args:
        verbose: Show debug records.
        quiet: Show only errors.
        console: Console to write to (a stderr console by default).
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logger = logging.getLogger("tidyname")
    logger.setLevel(level)
    # Remove existing handlers to avoid duplicate messages
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False


class RichProgressReporter:
    """Progress reporter using Rich for terminal output.

    Implements the ProgressReporter protocol with Rich console output.
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
    ):
        """Initialize the reporter.

        Args:
            verbose: Enable verbose output.
            quiet: Suppress all non-essential output.
            console: Console to write to (stderr by default).
        """
        self._console = console or Console(stderr=True)
        self._stdout = Console()
        self._verbose = verbose
        self._quiet = quiet
        self._progress: Optional[Progress] = None
        self._current_task_id: Optional[TaskID] = None
        self._phase_name: str = ""

    # --- Phase Management ---

    def start_phase(self, name: str, total: int) -> None:
        """Start a new processing phase with progress bar."""
        self._phase_name = name

        if self._quiet:
            return

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("[cyan]•"),
            TimeElapsedColumn(),
            console=self._console,
            transient=False,
        )
        self._progress.start()
        self._current_task_id = self._progress.add_task(name, total=total)

    def advance_phase(self, amount: int = 1) -> None:
        """Advance the current phase by amount."""
        if self._progress and self._current_task_id is not None:
            self._progress.advance(self._current_task_id, amount)

    def end_phase(self) -> None:
        """End the current phase."""
        if self._progress:
            self._progress.stop()
            self._progress = None
            self._current_task_id = None

    # --- Logging Methods ---

    def info(self, message: str) -> None:
        if not self._quiet:
            self._console.print(f"[blue]ℹ[/blue] {message}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[red]✗[/red] {message}", style="red")

    def output(self, message: str) -> None:
        """Write a command result line to stdout, even in quiet mode."""
        self._stdout.print(message, markup=False, emoji=False, highlight=False, soft_wrap=True)

    # --- Specialized Output ---

    def print_header(self, title: str) -> None:
        if self._quiet:
            return

        text = Text(title, style="bold cyan")
        self._console.print(Panel(text, border_style="cyan"))

    def print_config(self, config_items: dict) -> None:
        """Print configuration as a table."""
        if self._quiet:
            return

        table = Table(title="Configuration", show_header=True, header_style="bold")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        for key, value in config_items.items():
            table.add_row(key, str(value))

        self._console.print(table)

    def print_result(self, result: RenameResult) -> None:
        """Print original -> new names for one target directory."""
        if self._quiet:
            return

        if not result.renamed:
            self._console.print(f"[dim]Nothing to rename in {result.directory}[/dim]")
            return

        table = Table(title=str(result.directory), show_header=True, header_style="bold")
        table.add_column("Original", style="white")
        table.add_column("Renamed to", style="green")

        for original, new in result.sorted_items():
            table.add_row(_relative(original, result), _relative(new, result))

        self._console.print(table)
        self._console.print(f"[green]✓[/green] {result.count} file(s) renamed")

    # --- Context Managers ---

    def __enter__(self) -> "RichProgressReporter":
        return self

    def __exit__(self, *args) -> None:
        self.end_phase()


def _relative(path, result: RenameResult) -> str:
    try:
        return str(path.relative_to(result.directory))
    except ValueError:
        return str(path)


class QuietProgressReporter:
    """Minimal progress reporter that only shows errors."""

    def __init__(self):
        self._stdout = Console()

    def start_phase(self, name: str, total: int) -> None:
        pass

    def advance_phase(self, amount: int = 1) -> None:
        pass

    def end_phase(self) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        print(f"ERROR: {message}", file=sys.stderr)

    def output(self, message: str) -> None:
        self._stdout.print(message, markup=False, emoji=False, highlight=False, soft_wrap=True)

    def print_header(self, title: str) -> None:
        pass

    def print_config(self, config_items: dict) -> None:
        pass

    def print_result(self, result: RenameResult) -> None:
        pass

    def __enter__(self) -> "QuietProgressReporter":
        return self

    def __exit__(self, *args) -> None:
        pass
