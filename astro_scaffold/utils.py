"""Console output and logging helpers for astro-scaffold.

All user-facing output goes through a single Rich ``Console``.  The
``ScaffoldLogger`` wraps it with an optional ``[project]`` prefix and a
verbose switch so that debug chatter only appears when asked for.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()
error_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------


class ScaffoldLogger:
    """Project-aware logger writing through Rich.

    Messages are escaped before they are wrapped in markup, so user supplied
    names such as ``[slug]`` are printed literally.

    Args:
        project: Optional project name; prefixes every message as ``[name] ``.
        verbose: Enables ``debug``, ``verbose`` and ``log_resolved_path``.
        output: Console to write to.  Defaults to the module console.
    """

    def __init__(
        self,
        project: str | None = None,
        verbose: bool = False,
        output: Console | None = None,
    ) -> None:
        self.project = project
        self.is_verbose = verbose
        self._console = output if output is not None else console

    def for_project(self, project: str) -> "ScaffoldLogger":
        """Return a logger sharing this one's settings with a new project prefix."""
        return ScaffoldLogger(project=project, verbose=self.is_verbose, output=self._console)

    def _format(self, message: str) -> str:
        prefix = f"[{self.project}] " if self.project else ""
        return escape(f"{prefix}{message}")

    def info(self, message: str) -> None:
        self._console.print(self._format(message))

    def warn(self, message: str) -> None:
        self._console.print(f"[yellow]{self._format(message)}[/yellow]")

    def error(self, message: str, exc: BaseException | None = None) -> None:
        """Log an error; the exception detail is only shown in verbose mode."""
        text = self._format(message)
        if exc is not None and self.is_verbose:
            text = f"{text}\n{escape(repr(exc))}"
        self._console.print(f"[bold red]{text}[/bold red]")

    def debug(self, message: str) -> None:
        if self.is_verbose:
            self._console.print(f"[dim]{self._format(message)}[/dim]")

    def verbose(self, message: str) -> None:
        if self.is_verbose:
            self._console.print(f"[dim]\\[VERBOSE] {self._format(message)}[/dim]")

    def log_resolved_path(self, description: str, path: str) -> None:
        """Report a resolved path, e.g. ``Target file: apps/blog/src/pages/about.astro``."""
        self.verbose(f"{description}: {path}")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str) -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold bright_green] {escape(title)} [/bold bright_green]", style="bright_green"))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    error_console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
