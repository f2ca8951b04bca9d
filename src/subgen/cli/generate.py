"""subgen generate command — video to SRT subtitles."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn

from subgen.core.config import load_config
from subgen.core.controller import Completed, Error, PipelineController
from subgen.core.errors import ExportError, UnsupportedVideoError
from subgen.core.events import PipelineEvent
from subgen.core.languages import option_for_code, validate_language
from subgen.utils.console import console

_POLL_INTERVAL = 0.2


def _make_progress() -> Progress:
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        console=console,
    )


def generate(
    video: Annotated[
        Path,
        typer.Argument(help="Video file (.mp4, .mov, .mkv, .flv)."),
    ],
    language: Annotated[
        Optional[str],
        typer.Option(
            "--language", "-l", help="Spoken language: auto, zh, ja, en, or a name like Japanese."
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output .srt path. Default: <video>.srt"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Whisper model (e.g. large-v3-turbo)."),
    ] = None,
    device: Annotated[
        Optional[str],
        typer.Option(help="Compute device: cpu, cuda, or auto."),
    ] = None,
) -> None:
    """Generate an SRT subtitle file for a video.

    Press Ctrl+C to cancel; the current step finishes first and the
    temporary audio file is removed.
    """
    config = load_config(**{"whisper.model": model, "whisper.device": device})

    if language is None:
        language = config.whisper.language
    try:
        language_code = validate_language(language)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not video.is_file():
        console.print(f"[red]File not found:[/red] {video}")
        raise typer.Exit(1)

    console.print(f"[bold]Language:[/bold] {option_for_code(language_code).label}")

    with _make_progress() as progress:
        task = progress.add_task("starting", total=1.0)

        def on_event(event: PipelineEvent) -> None:
            progress.update(task, completed=event.progress, description=event.message)

        controller = PipelineController(config, on_event=on_event)
        try:
            controller.select_file(video)
        except UnsupportedVideoError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

        worker = controller.start(language_code)
        try:
            while worker.is_alive():
                controller.wait(_POLL_INTERVAL)
        except KeyboardInterrupt:
            console.print("[yellow]Cancelling after the current step...[/yellow]")
            controller.cancel()
            controller.wait()

    state = controller.state
    if isinstance(state, Error):
        console.print(f"[red]{state.message}[/red]")
        raise typer.Exit(1)
    if not isinstance(state, Completed):
        raise typer.Exit(130)

    console.print(f"[bold]Subtitles:[/bold] {len(state.document)} entries")
    try:
        controller.save(output)
    except ExportError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
