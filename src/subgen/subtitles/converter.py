"""Subtitle file I/O.

Writing uses the document's own SRT rendering so the output matches the
formatter byte for byte. Reading goes through pysubs2, which tolerates the
variations found in SRT files produced by other tools.
"""

from __future__ import annotations

from pathlib import Path

import pysubs2
from pysubs2.time import ms_to_times

from subgen.core.models import SubtitleDocument, SubtitleEntry


def save_subtitles(document: SubtitleDocument, path: Path) -> Path:
    """Write a subtitle document to an SRT file (UTF-8).

    Returns:
        The path the file was written to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.render(), encoding="utf-8")
    return path


def _format_ms(ms: int) -> str:
    t = ms_to_times(ms)
    return f"{t.h:02d}:{t.m:02d}:{t.s:02d},{t.ms:03d}"


def load_subtitles(path: Path) -> SubtitleDocument:
    """Load an SRT file into a SubtitleDocument, renumbering from 1."""
    subs = pysubs2.load(str(path), encoding="utf-8", format_="srt")
    events = [event for event in subs.events if not event.is_comment]
    return SubtitleDocument(
        entries=tuple(
            SubtitleEntry(
                index=i,
                start=_format_ms(event.start),
                end=_format_ms(event.end),
                text=event.plaintext,
            )
            for i, event in enumerate(events, 1)
        )
    )
