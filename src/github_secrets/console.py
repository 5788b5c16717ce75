"""Rich console utilities for styled terminal output.

All user-facing output of github-secrets goes through this module. Secret
values must never be passed to these helpers; use :func:`mask` instead.
"""

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "highlight": "cyan bold",
        "muted": "dim",
    }
)

# Shared console instance
console = Console(theme=_THEME)


def info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[info]ℹ[/info] {message}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]✓[/success] {message}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[warning]⚠[/warning] {message}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[error]✗[/error] {message}")


def action(message: str) -> None:
    """Print an action/progress message."""
    console.print(f"[info]→[/info] {message}")


def step(message: str) -> None:
    """Print a sub-step message."""
    console.print(f"[muted]•[/muted] {message}")


def highlight(text: str) -> str:
    """Return text wrapped in highlight markup.

    Markup characters in ``text`` are escaped, so repository aliases and
    API error messages are printed literally.
    """
    return f"[highlight]{escape(text)}[/highlight]"


def mask(value: str) -> str:
    """Return a bullet string as long as ``value``."""
    return "•" * len(value)


def heading(title: str) -> None:
    """Print a horizontal rule with a title, used to separate repositories."""
    console.rule(f"[bold]{escape(title)}[/bold]")


def summary_panel(title: str, items: dict[str, str], *, border_style: str = "green") -> None:
    """Print a summary panel with key-value pairs.

    Args:
        title: Title for the panel.
        items: Dictionary of label -> value pairs to display.
        border_style: Rich style of the panel border.

    """
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column(style="cyan")

    for label, value in items.items():
        table.add_row(f"{label}:", value)

    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style=border_style))


def table(title: str, columns: list[str], rows: Iterable[Iterable[str]]) -> None:
    """Print a simple table.

    Args:
        title: Table title.
        columns: Column headers.
        rows: Row cell values, one iterable per row.

    """
    output = Table(title=title, title_justify="left", header_style="bold")
    for column in columns:
        output.add_column(column)
    for row in rows:
        output.add_row(*row)
    console.print(output)


def newline() -> None:
    """Print an empty line."""
    console.print()
