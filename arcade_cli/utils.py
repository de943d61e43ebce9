"""Terminal presentation helpers for the ARCADE CLI.

Provides the shared Rich console, the banner and usage screens, success /
error / warning printers, logging setup, and :class:`ProgressReporter`, the
spinner and progress-bar handle the scaffolder drives.  Presentation never
affects control flow: every rendering call made through the reporter is
guarded, and a failure is logged instead of raised.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
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
from rich.text import Text

from arcade_cli import __version__

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUCCESS_MESSAGES: tuple[str, ...] = (
    "Game on! {name} is ready to play.",
    "Level up! {name} has been created.",
    "Insert coin: {name} is ready.",
    "Player one ready: {name} is set up.",
    "High score! {name} was scaffolded successfully.",
)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route ``arcade_cli`` log records to stderr through Rich."""
    package_logger = logging.getLogger("arcade_cli")
    package_logger.handlers.clear()
    handler = RichHandler(console=err_console, show_path=False, show_time=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def show_banner(target: Console | None = None) -> None:
    """Print the ARCADE CLI title panel."""
    out = target or console
    try:
        title = Text("ARCADE CLI", style="bold cyan")
        title.append(f"  v{__version__}", style="dim")
        body = Text.assemble(title, "\n", ("Retro 2D Game Development with ARCADE Library", "magenta"))
        out.print(Panel(body, border_style="cyan", expand=False))
    except Exception:  # noqa: BLE001
        logger.warning("Error displaying banner", exc_info=True)


def show_usage(target: Console | None = None) -> None:
    """Print usage and options for the ``init`` command."""
    out = target or console
    try:
        out.print()
        out.print("[yellow]Usage:[/yellow]")
        out.print("[yellow]  arcade init \\[project-name] \\[options][/yellow]")
        out.print()
        out.print("[yellow]Options:[/yellow]")
        out.print("[yellow]  -b, --blank       Create a blank project (no demo game or audio)[/yellow]")
        out.print("[yellow]  --release <tag>   Use this ARCADE release instead of the latest[/yellow]")
        out.print("[yellow]  -y, --yes         Accept every default without prompting[/yellow]")
        out.print("[yellow]  -o, --output DIR  Create the project inside DIR (default: .)[/yellow]")
        out.print("[yellow]  -v, --verbose     Show debug logging[/yellow]")
        out.print("[yellow]  --version         Show the CLI version[/yellow]")
        out.print()
    except Exception:  # noqa: BLE001
        logger.warning("Error displaying usage", exc_info=True)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]")


def print_next_steps(project_name: str, source_file: str, blank: bool, target: Console | None = None) -> None:
    """Print what to do after a successful scaffold."""
    out = target or console
    try:
        out.print("[yellow]Next steps:[/yellow]")
        out.print(f"  cd {project_name}")
        if blank:
            out.print(f"  # write your game in {source_file}")
        out.print("  make          # Build the game")
        out.print("  make run      # Run the game")
    except Exception:  # noqa: BLE001
        logger.warning("Error displaying next steps", exc_info=True)


def pick_success_message(name: str, rng: random.Random | None = None) -> str:
    """Return one of the success messages, chosen uniformly at random."""
    chooser = rng or random
    template = SUCCESS_MESSAGES[chooser.randrange(len(SUCCESS_MESSAGES))]
    return template.format(name=name)


def create_progress(target: Console | None = None) -> Progress:
    """Create a Rich progress bar configured for asset downloads."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=target or console,
        transient=True,
    )


# ---------------------------------------------------------------------------
# Progress reporting
# ---------------------------------------------------------------------------


def _guarded(func: Callable[..., T], *args: Any, **kwargs: Any) -> T | None:
    """Call *func*; log and swallow any rendering error."""
    try:
        return func(*args, **kwargs)
    except Exception:  # noqa: BLE001
        logger.warning("Terminal rendering failed in %s", getattr(func, "__name__", func), exc_info=True)
        return None


class ProgressReporter:
    """Spinner and progress-bar handle passed through a scaffold run.

    ``status`` and ``track`` are context managers: the spinner or bar is
    started on entry and always stopped on exit, including when the body
    raises.  At most one live display is active at a time.
    """

    def __init__(self, target: Console | None = None) -> None:
        self.console = target or console
        self._live: tuple[Progress, TaskID] | None = None

    @contextmanager
    def status(self, label: str) -> Iterator[None]:
        """Show a spinner labelled *label* for the duration of the block."""
        spinner = _guarded(self.console.status, f"[cyan]{label}[/cyan]")
        if spinner is not None:
            _guarded(spinner.start)
        try:
            yield
        finally:
            if spinner is not None:
                _guarded(spinner.stop)

    @contextmanager
    def track(self, label: str, total: int) -> Iterator[Callable[[], None]]:
        """Show a progress bar for *total* units and yield an ``advance`` callable."""
        progress = _guarded(create_progress, self.console)
        task_id = None
        if progress is not None:
            _guarded(progress.start)
            task_id = _guarded(progress.add_task, label, total=total)
        if progress is not None and task_id is not None:
            self._live = (progress, task_id)
        completed = 0

        def advance() -> None:
            nonlocal completed
            completed += 1
            self.report_progress(label, completed, total)

        try:
            yield advance
        finally:
            self._live = None
            if progress is not None:
                _guarded(progress.stop)

    def report_progress(self, label: str, completed: int, total: int) -> None:
        """Record that *completed* of *total* units of *label* are done."""
        if self._live is not None:
            progress, task_id = self._live
            _guarded(progress.update, task_id, completed=completed)
        else:
            _guarded(self.console.print, f"[dim]{label} {completed}/{total}[/dim]")

    def report_success(self, message: str) -> None:
        _guarded(self.console.print, f"[bold green]✔[/bold green] [cyan]{escape(message)}[/cyan]")

    def report_failure(self, message: str) -> None:
        _guarded(self.console.print, f"[bold red]✖[/bold red] [magenta]{escape(message)}[/magenta]")

    def report_warning(self, message: str) -> None:
        _guarded(self.console.print, f"[bold yellow]![/bold yellow] {escape(message)}")
