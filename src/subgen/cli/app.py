"""subgen CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from subgen import __version__
from subgen.cli.generate import generate
from subgen.cli.languages import languages
from subgen.cli.preview import preview

app = typer.Typer(
    name="subgen",
    help="subgen — Generate SRT subtitles from video with offline speech recognition.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"subgen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """subgen — Generate SRT subtitles from video with offline speech recognition."""
    # Load .env for SUBGEN_* settings; shell exports take precedence
    load_dotenv(override=False)


app.command("generate")(generate)
app.command("languages")(languages)
app.command("preview")(preview)
