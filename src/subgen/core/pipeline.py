"""Pipeline: extract audio, transcribe, format subtitles."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable

from subgen.core.errors import (
    ExtractionError,
    FormattingError,
    PipelineCancelled,
    PipelineError,
)
from subgen.core.events import EventCallback, PipelineEvent
from subgen.core.models import SubtitleDocument
from subgen.subtitles.formatter import format_result
from subgen.subtitles.sanitize import clean_text
from subgen.transcriber.service import TranscriptionService
from subgen.utils.console import console
from subgen.utils.paths import scratch_wav_path

STAGE_CONVERT = "convert"
STAGE_TRANSCRIBE = "transcribe"
STAGE_FORMAT = "format"
STAGE_DONE = "done"

LABEL_CONVERT = "converting audio"
LABEL_TRANSCRIBE = "recognizing speech"
LABEL_FORMAT = "formatting subtitles"
LABEL_DONE = "done"

# Engine progress is mapped into this slice of the overall bar
_TRANSCRIBE_START = 0.4
_TRANSCRIBE_END = 0.8

Extractor = Callable[[Path, Path], object]


def _check_cancelled(cancel_event: threading.Event) -> None:
    if cancel_event.is_set():
        raise PipelineCancelled()


def _remove_scratch(path: Path) -> None:
    """Best-effort temp file removal; failures are reported, never raised."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        console.print(f"[yellow]Could not remove temp file {path}:[/yellow] {e}")


def run_pipeline(
    video_path: Path,
    language: str | None,
    *,
    extract: Extractor,
    service: TranscriptionService,
    cancel_event: threading.Event | None = None,
    scratch_dir: Path | None = None,
    on_event: EventCallback | None = None,
) -> SubtitleDocument:
    """Run one video through extraction, recognition, and formatting.

    Args:
        video_path: Input video file.
        language: Language code, or None to auto-detect.
        extract: Callable writing a 16 kHz mono WAV for (video, wav_path).
        service: Transcription service wrapping the engine.
        cancel_event: Cooperative cancellation flag, polled between stages.
        scratch_dir: Directory for the temp WAV; defaults to the system temp dir.
        on_event: Optional callback for progress events.

    Returns:
        The formatted subtitle document.

    Raises:
        PipelineCancelled: Cancellation was observed at a stage boundary.
        PipelineError: A stage failed; the subclass names the stage.
    """
    if cancel_event is None:
        cancel_event = threading.Event()

    def emit(stage: str, progress: float, message: str, data: dict | None = None) -> None:
        if on_event:
            on_event(PipelineEvent(stage=stage, progress=progress, message=message, data=data))

    def on_engine_progress(partial_text: str, fraction: float) -> bool:
        fraction = min(max(fraction, 0.0), 1.0)
        label = clean_text(partial_text) or LABEL_TRANSCRIBE
        progress = _TRANSCRIBE_START + (_TRANSCRIBE_END - _TRANSCRIBE_START) * fraction
        emit(STAGE_TRANSCRIBE, progress, label)
        return not cancel_event.is_set()

    video_path = Path(video_path)
    emit(STAGE_CONVERT, 0.1, LABEL_CONVERT)
    wav_path = scratch_wav_path(video_path, scratch_dir)

    try:
        _check_cancelled(cancel_event)
        try:
            extract(video_path, wav_path)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(str(e) or type(e).__name__) from e
        _check_cancelled(cancel_event)

        emit(STAGE_TRANSCRIBE, _TRANSCRIBE_START, LABEL_TRANSCRIBE)
        _check_cancelled(cancel_event)
        result = service.transcribe(wav_path, language, on_engine_progress)
        _check_cancelled(cancel_event)

        emit(
            STAGE_FORMAT,
            _TRANSCRIBE_END,
            LABEL_FORMAT,
            data={"language": result.language, "segments": len(result.segments)},
        )
        _check_cancelled(cancel_event)
        try:
            document = format_result(result)
        except Exception as e:
            raise FormattingError(str(e) or type(e).__name__) from e

        emit(STAGE_DONE, 1.0, LABEL_DONE, data={"entries": len(document)})
        return document
    except PipelineError:
        # A stage failing because the engine was told to stop is still a cancel
        if cancel_event.is_set():
            raise PipelineCancelled() from None
        raise
    finally:
        _remove_scratch(wav_path)
