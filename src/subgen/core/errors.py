"""Exception hierarchy for subgen.

Stage errors carry the name of the pipeline stage that failed so the
controller can surface a single stage-qualified message.
"""

from __future__ import annotations


class SubgenError(Exception):
    """Base error for subgen."""


class PipelineError(SubgenError):
    """A pipeline stage failed for a reason other than cancellation."""

    stage = "Pipeline"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.stage} failed: {self.detail}"


class ExtractionError(PipelineError):
    """ffmpeg could not produce the waveform file."""

    stage = "Audio extraction"

    def __init__(self, detail: str, exit_code: int | None = None, stderr: str = "") -> None:
        super().__init__(detail)
        self.exit_code = exit_code
        self.stderr = stderr


class FfmpegNotFoundError(ExtractionError):
    """The ffmpeg executable could not be located or launched."""


class TranscriptionError(PipelineError):
    """The recognition engine failed or produced nothing."""

    stage = "Transcription"


class NoResultError(TranscriptionError):
    """The engine returned an empty result set."""

    def __init__(self, detail: str = "engine returned no result") -> None:
        super().__init__(detail)


class EngineError(TranscriptionError):
    """Any underlying failure inside the recognition engine."""


class FormattingError(PipelineError):
    stage = "Subtitle formatting"


class PipelineCancelled(SubgenError):
    """Cooperative cancellation was observed. Not a failure."""


class ExportError(SubgenError):
    """Writing the subtitle file failed."""


class InvalidTransitionError(SubgenError):
    """The requested action is not allowed in the current job state."""


class UnsupportedVideoError(SubgenError, ValueError):
    """The selected file does not have an accepted video extension."""
