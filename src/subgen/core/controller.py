"""Job lifecycle controller.

Owns a single Job, runs the pipeline for it on a background thread, and
exposes the job state to the presentation layer. All job mutations happen
under one lock: the worker's event handler writes progress, and the user
actions (select, start, cancel, save, reset) write transitions.
"""

from __future__ import annotations

import dataclasses
import functools
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from subgen.core.config import SubgenConfig
from subgen.core.errors import (
    ExportError,
    InvalidTransitionError,
    PipelineCancelled,
    PipelineError,
    UnsupportedVideoError,
)
from subgen.core.events import EventCallback, PipelineEvent
from subgen.core.languages import validate_language
from subgen.core.models import SubtitleDocument
from subgen.core.pipeline import Extractor, run_pipeline
from subgen.subtitles.converter import save_subtitles
from subgen.transcriber.service import TranscriptionService
from subgen.utils.audio import extract_audio
from subgen.utils.console import console
from subgen.utils.paths import VIDEO_EXTENSIONS, default_subtitle_path, is_supported_video


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class FileSelected:
    path: Path


@dataclass(frozen=True)
class Processing:
    path: Path


@dataclass(frozen=True)
class Completed:
    path: Path
    document: SubtitleDocument


@dataclass(frozen=True)
class SaveSuccess:
    path: Path
    document: SubtitleDocument
    output_path: Path


@dataclass(frozen=True)
class Error:
    message: str
    path: Path | None = None
    document: SubtitleDocument | None = None  # kept when only the export failed


JobState = Union[Idle, FileSelected, Processing, Completed, SaveSuccess, Error]


@dataclass
class Job:
    """One conversion, from file selection to export."""

    source: Path | None = None
    language: str | None = None
    state: JobState = field(default_factory=Idle)
    progress: float = 0.0
    label: str = ""

    @property
    def document(self) -> SubtitleDocument | None:
        return getattr(self.state, "document", None)

    @property
    def error(self) -> str | None:
        if isinstance(self.state, Error):
            return self.state.message
        return None


class PipelineController:
    """Drives a single job through the pipeline state machine.

    Args:
        config: Application config; loaded defaults when omitted.
        extract: Audio extractor; defaults to ffmpeg via extract_audio.
        service: Transcription service; built lazily from config when omitted.
        on_event: Listener for pipeline events, called after the job is updated.
    """

    def __init__(
        self,
        config: SubgenConfig | None = None,
        extract: Extractor | None = None,
        service: TranscriptionService | None = None,
        on_event: EventCallback | None = None,
    ) -> None:
        self.config = config or SubgenConfig()
        self._extract = extract or functools.partial(
            extract_audio, ffmpeg=self.config.audio.ffmpeg_path
        )
        self._service = service
        self._on_event = on_event
        self._lock = threading.RLock()
        self._job = Job()
        self._cancel = threading.Event()
        self._worker: threading.Thread | None = None

    @property
    def state(self) -> JobState:
        with self._lock:
            return self._job.state

    @property
    def job(self) -> Job:
        """A snapshot copy of the current job."""
        with self._lock:
            return dataclasses.replace(self._job)

    def _require(self, *allowed: type, action: str) -> JobState:
        state = self._job.state
        if not isinstance(state, allowed):
            raise InvalidTransitionError(f"Cannot {action} while {type(state).__name__}")
        return state

    def _service_for_run(self) -> TranscriptionService:
        if self._service is None:
            from subgen.transcriber.stable_ts import StableTsEngine

            self._service = TranscriptionService(StableTsEngine(self.config.whisper))
        return self._service

    def select_file(self, path: Path) -> None:
        """Select a video, discarding any previous job."""
        path = Path(path)
        if not is_supported_video(path):
            raise UnsupportedVideoError(
                f"Unsupported video type '{path.suffix}'. "
                f"Accepted: {', '.join(VIDEO_EXTENSIONS)}"
            )
        with self._lock:
            self._require(Idle, FileSelected, Completed, SaveSuccess, Error, action="select a file")
            self._job = Job(source=path, state=FileSelected(path))

    def start(self, language: str | None = None) -> threading.Thread:
        """Start processing the selected file on a background thread."""
        language = validate_language(language)
        with self._lock:
            state = self._require(FileSelected, action="start")
            self._cancel = threading.Event()
            self._job.language = language
            self._job.state = Processing(state.path)
            self._job.progress = 0.0
            self._job.label = ""
            self._worker = threading.Thread(
                target=self._run,
                args=(state.path, language, self._cancel),
                name="subgen-pipeline",
                daemon=True,
            )
            self._worker.start()
            return self._worker

    def cancel(self) -> None:
        """Request cooperative cancellation of the running job."""
        with self._lock:
            if isinstance(self._job.state, Processing):
                self._cancel.set()

    def wait(self, timeout: float | None = None) -> JobState:
        """Block until the worker finishes (or the timeout elapses)."""
        worker = self._worker
        if worker is not None:
            worker.join(timeout)
        return self.state

    def save(self, output_path: Path | None = None) -> Path:
        """Export the finished document without re-running the pipeline.

        Raises:
            ExportError: If the file cannot be written. The job moves to
                Error but keeps its document so the export can be retried.
        """
        with self._lock:
            state = self._require(Completed, SaveSuccess, Error, action="save")
            if state.document is None or state.path is None:
                raise InvalidTransitionError("No subtitles to save")
            source, document = state.path, state.document
            target = Path(output_path) if output_path else default_subtitle_path(source)
            try:
                save_subtitles(document, target)
            except OSError as e:
                self._job.state = Error(f"Save failed: {e}", path=source, document=document)
                raise ExportError(f"Could not write {target}: {e}") from e
            self._job.state = SaveSuccess(source, document, target)
            console.print(f"[green]Saved:[/green] {target}")
            return target

    def reset(self) -> None:
        """Return to Idle, dropping the current job."""
        with self._lock:
            self._require(Idle, FileSelected, Completed, SaveSuccess, Error, action="reset")
            self._job = Job()

    def default_output_path(self) -> Path | None:
        with self._lock:
            source = self._job.source
        return default_subtitle_path(source) if source is not None else None

    def _handle_event(self, event: PipelineEvent) -> None:
        with self._lock:
            if not isinstance(self._job.state, Processing):
                return
            self._job.progress = min(max(event.progress, 0.0), 1.0)
            self._job.label = event.message
        if self._on_event:
            self._on_event(event)

    def _finish(self, state: JobState) -> None:
        with self._lock:
            if isinstance(state, Idle):
                self._job = Job()
            else:
                self._job.state = state

    def _run(self, path: Path, language: str | None, cancel_event: threading.Event) -> None:
        try:
            document = run_pipeline(
                path,
                language,
                extract=self._extract,
                service=self._service_for_run(),
                cancel_event=cancel_event,
                scratch_dir=self.config.scratch_dir,
                on_event=self._handle_event,
            )
        except PipelineCancelled:
            console.print("[yellow]Cancelled.[/yellow]")
            self._finish(Idle())
        except PipelineError as e:
            self._finish(Error(str(e), path=path))
        except Exception as e:
            if cancel_event.is_set():
                self._finish(Idle())
            else:
                self._finish(Error(f"Processing failed: {e}", path=path))
        else:
            self._finish(Completed(path, document))
