"""Subtitle timestamp formatting."""

from __future__ import annotations

import math


def format_time(
    seconds: float,
    always_include_hours: bool = False,
    decimal_marker: str = ".",
) -> str:
    """Format seconds as ``HH:MM:SS<marker>mmm`` (or ``MM:SS<marker>mmm``).

    Milliseconds are truncated, never rounded, so a timestamp never moves
    past the instant it describes. Hours are shown when requested or when
    non-zero. SRT output uses ``always_include_hours=True`` and ``","``.
    """
    if seconds < 0:
        seconds = 0.0

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    millis = int((seconds - math.floor(seconds)) * 1000)

    if always_include_hours or hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}{decimal_marker}{millis:03d}"
    return f"{minutes:02d}:{secs:02d}{decimal_marker}{millis:03d}"


def parse_time(timestamp: str) -> float:
    """Parse ``[HH:]MM:SS[,.]mmm`` back into seconds."""
    clock, _, millis = timestamp.strip().replace(",", ".").rpartition(".")
    if not clock:
        raise ValueError(f"Invalid timestamp: {timestamp!r}")
    parts = [int(p) for p in clock.split(":")]
    if len(parts) == 2:
        parts.insert(0, 0)
    if len(parts) != 3:
        raise ValueError(f"Invalid timestamp: {timestamp!r}")
    hours, minutes, secs = parts
    return hours * 3600 + minutes * 60 + secs + int(millis) / 1000
