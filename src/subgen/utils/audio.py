"""Audio extraction from video files using ffmpeg."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

from subgen.core.errors import ExtractionError, FfmpegNotFoundError

SAMPLE_RATE = 16000

_BUNDLED_DIR = Path(__file__).resolve().parent.parent / "bin"


def _bundled_ffmpeg() -> Path:
    name = "ffmpeg.exe" if os.name == "nt" else "ffmpeg"
    return _BUNDLED_DIR / name


def find_ffmpeg(configured: str | None = None) -> str:
    """Locate the ffmpeg executable.

    Order: explicitly configured path, binary bundled in ``subgen/bin``,
    then ``ffmpeg`` on PATH.

    Raises:
        FfmpegNotFoundError: If no candidate exists.
    """
    if configured:
        if Path(configured).is_file() or shutil.which(configured):
            return configured
        raise FfmpegNotFoundError(f"configured ffmpeg not found: {configured}")

    bundled = _bundled_ffmpeg()
    if bundled.is_file():
        return str(bundled)

    found = shutil.which("ffmpeg")
    if found is None:
        raise FfmpegNotFoundError("ffmpeg not found. Install it with: brew install ffmpeg")
    return found


def _detached_kwargs() -> dict:
    """Run ffmpeg outside the terminal's process group so Ctrl+C cannot interrupt it."""
    if os.name == "nt":
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


def build_ffmpeg_command(ffmpeg: str, video_path: Path, output_path: Path) -> list[str]:
    """Command line for a 16 kHz mono 16-bit PCM WAV extraction."""
    return [
        ffmpeg,
        "-i",
        str(video_path),
        "-vn",  # no video
        "-acodec",
        "pcm_s16le",  # 16-bit PCM
        "-ar",
        str(SAMPLE_RATE),
        "-ac",
        "1",  # mono
        "-y",  # overwrite
        str(output_path),
    ]


def extract_audio(video_path: Path, output_path: Path, ffmpeg: str | None = None) -> Path:
    """Extract the audio track of a video to a WAV file.

    Blocks until ffmpeg exits. A cancel requested meanwhile does not stop
    it, so the WAV is never left half-written. The caller owns
    ``output_path`` and is responsible for deleting it.

    Args:
        video_path: Path to the input video file.
        output_path: Path for the output WAV file.
        ffmpeg: Explicit ffmpeg executable, or None to search for one.

    Returns:
        Path to the extracted audio file.

    Raises:
        FfmpegNotFoundError: If ffmpeg cannot be located or launched.
        ExtractionError: If the video is missing or ffmpeg exits non-zero.
    """
    executable = find_ffmpeg(ffmpeg)

    video_path = Path(video_path)
    if not video_path.is_file():
        raise ExtractionError(f"video file not found: {video_path}")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = build_ffmpeg_command(executable, video_path, output_path)
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            **_detached_kwargs(),
        )
    except (FileNotFoundError, PermissionError) as e:
        raise FfmpegNotFoundError(f"could not launch {executable}: {e}") from e

    if result.returncode != 0:
        stderr_msg = result.stderr.decode(errors="replace").strip()
        raise ExtractionError(
            f"ffmpeg exited with code {result.returncode}",
            exit_code=result.returncode,
            stderr=stderr_msg,
        )
    return output_path
