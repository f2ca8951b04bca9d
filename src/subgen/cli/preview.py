"""subgen preview command — show the entries of an SRT file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from subgen.utils.console import console


def preview(
    path: Annotated[Path, typer.Argument(help="SRT file to show.")],
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum number of entries to show (0 = all)."),
    ] = 20,
) -> None:
    """Show subtitle entries from an SRT file in a table."""
    from subgen.subtitles.converter import load_subtitles

    if not path.is_file():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1)

    document = load_subtitles(path)
    entries = document.entries if limit <= 0 else document.entries[:limit]

    table = Table(title=f"{path.name} ({len(document)} entries)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Start", no_wrap=True)
    table.add_column("End", no_wrap=True)
    table.add_column("Text")
    for entry in entries:
        table.add_row(str(entry.index), entry.start, entry.end, entry.text)

    console.print(table)
    if len(entries) < len(document):
        console.print(f"[dim]... and {len(document) - len(entries)} more entries[/dim]")
