"""Turn transcription results into numbered SRT entries."""

from __future__ import annotations

import re

from subgen.core.models import SubtitleDocument, SubtitleEntry, TranscriptionResult
from subgen.subtitles.sanitize import clean_text
from subgen.subtitles.timecode import format_time, parse_time

_TIMING_LINE_RE = re.compile(r"^(\S+)\s+-->\s+(\S+)$")


def _srt_time(seconds: float) -> str:
    return format_time(seconds, always_include_hours=True, decimal_marker=",")


def format_entry(index: int, start: float, end: float, text: str) -> SubtitleEntry:
    """Build one subtitle entry from raw timing and engine text."""
    return SubtitleEntry(
        index=index,
        start=_srt_time(start),
        end=_srt_time(end),
        text=clean_text(text),
    )


def format_result(result: TranscriptionResult) -> SubtitleDocument:
    """Convert a transcription result into a subtitle document.

    Segments with word timings produce one entry per word; segments
    without produce a single entry spanning the segment. Numbering is
    contiguous from 1 across the whole document.
    """
    entries: list[SubtitleEntry] = []
    index = 1
    for segment in result.segments:
        if segment.words:
            for word in segment.words:
                entries.append(format_entry(index, word.start, word.end, word.word))
                index += 1
        else:
            entries.append(format_entry(index, segment.start, segment.end, segment.text))
            index += 1
    return SubtitleDocument(entries=tuple(entries))


def parse_document(text: str) -> SubtitleDocument:
    """Parse rendered SRT text back into entries.

    Expects blocks of index line, ``start --> end`` line, and text lines,
    separated by blank lines. Raises ValueError on a malformed block.
    """
    entries: list[SubtitleEntry] = []
    blocks = re.split(r"\n\s*\n", text.replace("\r\n", "\n").strip())
    for block in blocks:
        if not block.strip():
            continue
        lines = block.split("\n")
        if len(lines) < 2:
            raise ValueError(f"Malformed subtitle block: {block!r}")
        try:
            index = int(lines[0].strip())
        except ValueError:
            raise ValueError(f"Invalid subtitle index: {lines[0]!r}") from None
        match = _TIMING_LINE_RE.match(lines[1].strip())
        if not match:
            raise ValueError(f"Invalid timing line: {lines[1]!r}")
        for timestamp in match.groups():
            parse_time(timestamp)
        entries.append(
            SubtitleEntry(
                index=index,
                start=match.group(1),
                end=match.group(2),
                text="\n".join(lines[2:]),
            )
        )
    return SubtitleDocument(entries=tuple(entries))
