"""Shared data models for subgen."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass
class WordTiming:
    """A single recognized word with its own timing."""

    word: str
    start: float
    end: float


@dataclass
class TranscriptionSegment:
    """A contiguous span of recognized speech, optionally split into words."""

    text: str
    start: float  # seconds
    end: float  # seconds
    words: list[WordTiming] = field(default_factory=list)


@dataclass
class TranscriptionResult:
    """Output from the transcription engine."""

    segments: list[TranscriptionSegment]
    language: str | None
    audio_path: Path
    model_used: str = ""


@dataclass(frozen=True)
class SubtitleEntry:
    """One numbered caption block."""

    index: int
    start: str  # formatted timestamp, e.g. 00:00:01,500
    end: str
    text: str

    def render(self) -> str:
        return f"{self.index}\n{self.start} --> {self.end}\n{self.text}"


@dataclass(frozen=True)
class SubtitleDocument:
    """Ordered subtitle entries, the terminal artifact of a job."""

    entries: tuple[SubtitleEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SubtitleEntry]:
        return iter(self.entries)

    def render(self) -> str:
        """Render as SRT text: blocks separated by one blank line, no trailing separator."""
        return "\n\n".join(entry.render() for entry in self.entries)
