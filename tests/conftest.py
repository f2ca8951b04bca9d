"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from subgen.core.errors import PipelineCancelled
from subgen.core.models import TranscriptionResult, TranscriptionSegment, WordTiming


class FakeEngine:
    """Stand-in recognition engine with scripted progress and output."""

    model_name = "fake-model"

    def __init__(
        self,
        segments: list[TranscriptionSegment] | None = None,
        detected: str = "en",
        progress: list[tuple[str, float]] | None = None,
        error: Exception | None = None,
        empty: bool = False,
        on_transcribe: Callable[[], None] | None = None,
    ) -> None:
        self.segments = segments if segments is not None else [
            TranscriptionSegment(text="<|0.00|>Hello<|2.50|>", start=0.0, end=2.5)
        ]
        self.detected = detected
        self.progress = progress if progress is not None else [("", 0.5), ("", 1.0)]
        self.error = error
        self.empty = empty
        self.on_transcribe = on_transcribe
        self.detect_calls: list[Path] = []
        self.transcribe_calls: list[tuple[Path, str]] = []

    def detect_language(self, audio_path: Path) -> str:
        self.detect_calls.append(Path(audio_path))
        return self.detected

    def transcribe(self, audio_path, language, on_progress=None):
        self.transcribe_calls.append((Path(audio_path), language))
        if self.on_transcribe is not None:
            self.on_transcribe()
        for text, fraction in self.progress:
            if on_progress is not None and not on_progress(text, fraction):
                raise PipelineCancelled()
        if self.error is not None:
            raise self.error
        if self.empty:
            return []
        return [
            TranscriptionResult(
                segments=self.segments,
                language=language,
                audio_path=Path(audio_path),
                model_used=self.model_name,
            )
        ]


class FakeExtractor:
    """Records calls and writes a placeholder WAV like ffmpeg would."""

    def __init__(self, error: Exception | None = None, on_extract=None) -> None:
        self.error = error
        self.on_extract = on_extract
        self.calls: list[tuple[Path, Path]] = []

    def __call__(self, video_path: Path, output_path: Path) -> Path:
        self.calls.append((Path(video_path), Path(output_path)))
        if self.error is not None:
            raise self.error
        Path(output_path).write_bytes(b"RIFF....WAVE")
        if self.on_extract is not None:
            self.on_extract()
        return Path(output_path)


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def word_segments() -> list[TranscriptionSegment]:
    return [
        TranscriptionSegment(
            text=" Hello world",
            start=0.0,
            end=1.5,
            words=[
                WordTiming(word=" Hello", start=0.0, end=0.5),
                WordTiming(word=" world", start=0.75, end=1.5),
            ],
        ),
        TranscriptionSegment(text="<|2.00|> Goodbye<|3.25|>", start=2.0, end=3.25),
    ]
