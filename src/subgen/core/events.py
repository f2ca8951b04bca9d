"""Pipeline event system for streaming progress to external consumers.

The pipeline emits events through a single callback. The controller consumes
them to update the job, then forwards them to its own listener (CLI progress
bar) without the pipeline knowing who is watching.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class PipelineEvent:
    """A progress event emitted during pipeline execution.

    Attributes:
        stage: Pipeline stage name (convert, transcribe, format, done).
        progress: Overall job progress, 0.0 to 1.0.
        message: Human-readable status label.
        data: Optional payload (e.g. detected language, entry count).
    """

    stage: str
    progress: float
    message: str
    data: dict | None = field(default=None)


EventCallback = Callable[[PipelineEvent], None]
