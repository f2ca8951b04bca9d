"""subgen languages command — list recognition language choices."""

from __future__ import annotations

from rich.table import Table

from subgen.core.languages import LANGUAGE_OPTIONS
from subgen.utils.console import console


def languages() -> None:
    """List the languages that can be passed to --language."""
    table = Table(title=f"Languages ({len(LANGUAGE_OPTIONS)})")
    table.add_column("Option", style="bold cyan", width=8)
    table.add_column("Language", width=12)

    for option in LANGUAGE_OPTIONS:
        table.add_row(option.code or "auto", option.label)

    console.print(table)
    console.print("\n[dim]auto = detect the spoken language before transcribing.[/dim]")
