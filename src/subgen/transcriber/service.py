"""Call contract around an opaque recognition engine.

The engine does the actual speech recognition. This module only decides
the language to use, picks the first result, and normalizes failures into
TranscriptionError subclasses.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol

from subgen.core.errors import EngineError, NoResultError, PipelineCancelled
from subgen.core.models import TranscriptionResult
from subgen.utils.console import console

ProgressCallback = Callable[[str, float], bool]
"""Called with (partial_text, fraction_done); returning False asks the engine to stop."""


class TranscriptionEngine(Protocol):
    model_name: str

    def detect_language(self, audio_path: Path) -> str: ...

    def transcribe(
        self,
        audio_path: Path,
        language: str,
        on_progress: ProgressCallback | None = None,
    ) -> list[TranscriptionResult]: ...


class TranscriptionService:
    def __init__(self, engine: TranscriptionEngine) -> None:
        self.engine = engine

    def transcribe(
        self,
        audio_path: Path,
        language: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> TranscriptionResult:
        """Transcribe a 16 kHz mono WAV file.

        Args:
            audio_path: Path to the waveform produced by extract_audio.
            language: Language code, or None to auto-detect first.
            on_progress: Optional callback receiving partial text and the
                fraction done; returning False stops the engine early.

        Returns:
            The first result produced by the engine.

        Raises:
            NoResultError: If the engine returns no results.
            EngineError: For any failure inside the engine.
            PipelineCancelled: If the engine stopped because on_progress
                returned False.
        """
        try:
            if language is None:
                language = self.engine.detect_language(audio_path)
                console.print(f"[dim]Detected language:[/dim] {language}")
            results = self.engine.transcribe(audio_path, language, on_progress)
        except PipelineCancelled:
            raise
        except Exception as e:
            raise EngineError(str(e) or type(e).__name__) from e

        if not results:
            raise NoResultError()
        return results[0]
