"""Path helpers for input videos, scratch audio, and subtitle output."""

from __future__ import annotations

import tempfile
from pathlib import Path

VIDEO_EXTENSIONS = (".mp4", ".mov", ".mkv", ".flv")
SUBTITLE_EXTENSION = ".srt"


def is_supported_video(path: Path) -> bool:
    """Check the file extension against the accepted container list."""
    return Path(path).suffix.lower() in VIDEO_EXTENSIONS


def scratch_dir(base: Path | None = None) -> Path:
    """Return the process-wide scratch directory, creating it if needed."""
    directory = Path(base) if base is not None else Path(tempfile.gettempdir())
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def scratch_wav_path(video_path: Path, base: Path | None = None) -> Path:
    """Temp WAV path for a video: ``<scratch>/<video stem>.wav``.

    Derived from the file stem only, so two videos with the same stem
    share a path. Only one job runs at a time.
    """
    return scratch_dir(base) / f"{Path(video_path).stem}.wav"


def default_subtitle_path(video_path: Path) -> Path:
    """Default export path: the video path with an .srt extension."""
    return Path(video_path).with_suffix(SUBTITLE_EXTENSION)
