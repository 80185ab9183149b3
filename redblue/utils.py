"""Shared utility functions for the Red/Blue Generator.

Provides the Rich console and its message helpers, file-tree listing, and the
JSON I/O used for the generated project's manifest.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


def save_json(data: dict[str, Any] | list[Any], path: str | Path, indent: str | int = 2) -> None:
    """Write *data* as pretty-printed JSON with a trailing newline.

    Key order is preserved and non-ASCII text is written as-is.
    """
    content = json.dumps(data, indent=indent, ensure_ascii=False)
    Path(path).write_text(content + "\n", encoding="utf-8")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def list_files(root: str | Path) -> list[str]:
    """Return every file below *root* as sorted, posix-style relative paths.

    Returns an empty list when *root* does not exist.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        return []
    return sorted(
        p.relative_to(root_path).as_posix() for p in root_path.rglob("*") if p.is_file()
    )


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_banner() -> None:
    """Print the welcome banner."""
    console.print()
    console.print("[bold]💊 Welcome to Red/Blue Generator[/bold]")
    console.print()


def print_step(message: str) -> None:
    """Print a pipeline progress line preceded by a blank line."""
    console.print()
    console.print(escape(message))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
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
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
