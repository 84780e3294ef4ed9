# cloudsvc/cli/ui.py
"""
Shared UI helpers for CLI commands.

Usage:
    from cloudsvc.cli.ui import ui

    ui.success("Done!")
    ui.error("Role with name WebRole1 does not exist.")
"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


class UI:
    """Consistent styling for command output."""

    def success(self, msg: str) -> None:
        console.print(f"[green]✓[/green] {escape(msg)}")

    def error(self, msg: str) -> None:
        console.print(f"[red]✗[/red] {escape(msg)}")

    def info(self, msg: str) -> None:
        console.print(f"[dim]{escape(msg)}[/dim]")

    def table(self, title: str, columns: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        table = Table(title=title, show_header=True, header_style="bold")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(escape(str(cell)) for cell in row))
        console.print(table)


ui = UI()
