"""Recognition engine backed by stable-ts (Whisper with word timestamps)."""

from __future__ import annotations

import gc
from pathlib import Path

from subgen.core.config import WhisperConfig
from subgen.core.errors import PipelineCancelled
from subgen.core.models import TranscriptionResult, TranscriptionSegment, WordTiming
from subgen.transcriber.service import ProgressCallback
from subgen.utils.console import console


def _resolve_device(device: str) -> str:
    """Resolve the compute device string ("auto" picks CUDA when present)."""
    if device != "auto":
        return device

    try:
        import torch

        if torch.cuda.is_available():
            return "cuda"
    except ImportError:
        pass
    return "cpu"


def _to_segments(result) -> list[TranscriptionSegment]:
    """Convert a stable-ts WhisperResult into TranscriptionSegments."""
    segments = []
    for seg in result.segments:
        words = [
            WordTiming(word=w.word, start=float(w.start), end=float(w.end))
            for w in (seg.words or [])
        ]
        segments.append(
            TranscriptionSegment(
                text=seg.text,
                start=float(seg.start),
                end=float(seg.end),
                words=words,
            )
        )
    return segments


class StableTsEngine:
    """Loads a Whisper model once and serves detect/transcribe calls."""

    def __init__(self, config: WhisperConfig) -> None:
        self.config = config
        self.model_name = config.model
        self._model = None

    def _load_model(self):
        if self._model is not None:
            return self._model

        try:
            import stable_whisper
        except ImportError:
            raise ImportError(
                "stable-ts is not installed. Install with: pip install 'subgen[transcribe]'"
            )

        device = _resolve_device(self.config.device)
        console.print(f"[bold]Loading model:[/bold] {self.config.model} on {device}")
        self._model = stable_whisper.load_model(self.config.model, device=device)
        return self._model

    def detect_language(self, audio_path: Path) -> str:
        """Detect the spoken language from the first 30 seconds of audio."""
        import whisper

        model = self._load_model()
        audio = whisper.pad_or_trim(whisper.load_audio(str(audio_path)))
        mel = whisper.log_mel_spectrogram(audio, model.dims.n_mels).to(model.device)
        _, probs = model.detect_language(mel)
        return max(probs, key=probs.get)

    def transcribe(
        self,
        audio_path: Path,
        language: str,
        on_progress: ProgressCallback | None = None,
    ) -> list[TranscriptionResult]:
        model = self._load_model()

        def _progress(seek: float, total: float) -> None:
            if on_progress is None:
                return
            fraction = seek / total if total else 0.0
            if not on_progress("", fraction):
                raise PipelineCancelled()

        console.print("[bold]Transcribing...[/bold]")
        result = model.transcribe(
            str(audio_path),
            language=language,
            word_timestamps=self.config.word_timestamps,
            regroup=False,
            verbose=None,
            progress_callback=_progress,
        )
        if result is None:
            return []

        segments = _to_segments(result)
        console.print(f"[green]Transcription complete:[/green] {len(segments)} segments")
        del result
        gc.collect()

        return [
            TranscriptionResult(
                segments=segments,
                language=language,
                audio_path=Path(audio_path),
                model_used=self.model_name,
            )
        ]
