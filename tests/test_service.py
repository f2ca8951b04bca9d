"""Tests for the transcription service call contract."""

from pathlib import Path

import pytest
from conftest import FakeEngine

from subgen.core.errors import (
    EngineError,
    NoResultError,
    PipelineCancelled,
    TranscriptionError,
)
from subgen.core.models import TranscriptionResult
from subgen.transcriber.service import TranscriptionService

AUDIO = Path("/tmp/clip.wav")


def test_explicit_language_skips_detection():
    engine = FakeEngine()
    result = TranscriptionService(engine).transcribe(AUDIO, "ja")
    assert engine.detect_calls == []
    assert engine.transcribe_calls == [(AUDIO, "ja")]
    assert result.language == "ja"


def test_auto_detect_then_transcribe_with_detected_code():
    engine = FakeEngine(detected="zh")
    result = TranscriptionService(engine).transcribe(AUDIO, None)
    assert engine.detect_calls == [AUDIO]
    assert engine.transcribe_calls == [(AUDIO, "zh")]
    assert result.language == "zh"


def test_detection_repeats_every_call():
    engine = FakeEngine()
    service = TranscriptionService(engine)
    service.transcribe(AUDIO)
    service.transcribe(AUDIO)
    assert len(engine.detect_calls) == 2


def test_empty_result_set():
    with pytest.raises(NoResultError) as exc_info:
        TranscriptionService(FakeEngine(empty=True)).transcribe(AUDIO, "en")
    assert isinstance(exc_info.value, TranscriptionError)
    assert str(exc_info.value).startswith("Transcription failed")


def test_engine_failure_wrapped():
    boom = RuntimeError("CUDA out of memory")
    with pytest.raises(EngineError, match="CUDA out of memory") as exc_info:
        TranscriptionService(FakeEngine(error=boom)).transcribe(AUDIO, "en")
    assert exc_info.value.__cause__ is boom


def test_detection_failure_wrapped():
    class BrokenDetect(FakeEngine):
        def detect_language(self, audio_path):
            raise ValueError("audio too short")

    with pytest.raises(EngineError, match="audio too short"):
        TranscriptionService(BrokenDetect()).transcribe(AUDIO, None)


def test_cancellation_propagates_unwrapped():
    engine = FakeEngine(progress=[("", 0.3)])
    with pytest.raises(PipelineCancelled):
        TranscriptionService(engine).transcribe(AUDIO, "en", lambda text, frac: False)


def test_progress_forwarded():
    seen = []

    def on_progress(text, fraction):
        seen.append((text, fraction))
        return True

    engine = FakeEngine(progress=[("Hel", 0.25), ("Hello", 1.0)])
    TranscriptionService(engine).transcribe(AUDIO, "en", on_progress)
    assert seen == [("Hel", 0.25), ("Hello", 1.0)]


def test_first_result_used():
    class TwoResults(FakeEngine):
        def transcribe(self, audio_path, language, on_progress=None):
            return [
                TranscriptionResult(segments=[], language="en", audio_path=audio_path),
                TranscriptionResult(segments=[], language="fr", audio_path=audio_path),
            ]

    result = TranscriptionService(TwoResults()).transcribe(AUDIO, "en")
    assert result.language == "en"
