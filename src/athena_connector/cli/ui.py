"""Shared UI components for the athena-connector CLI."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from athena_connector.connectors import MappedOutput

theme = Theme(
    {
        "info": "dim cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "tip": "blue",
        "heading": "bold cyan",
    }
)

console = Console(theme=theme)
error_console = Console(theme=theme, stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr through Rich."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, rich_tracebacks=False, markup=False)],
        force=True,
    )
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _cell(value: Any) -> Text:
    if value is None:
        return Text("NULL", style="dim")
    if isinstance(value, datetime):
        return Text(value.isoformat(sep=" "))
    return Text(str(value))


def print_result(output: MappedOutput, *, title: str | None = None) -> None:
    """Print query rows as a table, with column types in the header."""
    table = Table(title=title, header_style="heading")
    for column in output.column_types:
        table.add_column(f"{escape(column.name)}\n[dim]{column.evidence_type.value}[/dim]")

    names = [column.name for column in output.column_types]
    for row in output.rows:
        table.add_row(*(_cell(row.get(name)) for name in names))

    console.print(table)
    console.print(f"[info]{output.expected_row_count} rows[/info]")


def print_json(payload: Any) -> None:
    """Print a JSON document; datetimes are rendered as ISO strings."""
    console.print_json(json.dumps(payload, default=_json_default))


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def print_error(title: str, message: str, tip: str | None = None) -> None:
    """Print a styled error message with an optional actionable tip."""
    content = Text()
    content.append(f"{message}\n", style="white")

    if tip:
        content.append("\nTip: ", style="bold blue")
        content.append(tip, style="blue")

    error_console.print(
        Panel(
            content,
            title=f"[bold red]Error: {title}[/bold red]",
            border_style="red",
            padding=(1, 1),
        )
    )


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/bold green] {message}")
