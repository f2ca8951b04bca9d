"""subgen — video to SRT subtitles."""

__version__ = "0.1.0"
