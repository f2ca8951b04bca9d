"""Tests for engine metadata stripping."""

import pytest

from subgen.subtitles.sanitize import clean_text


def test_strips_timestamp_tokens():
    assert clean_text("<|0.00|>hello<|1.20|> world") == "hello world"


def test_plain_text_unchanged():
    assert clean_text("plain text") == "plain text"


def test_non_greedy_keeps_text_between_tokens():
    assert clean_text("<|0.00|>keep me<|2.50|>") == "keep me"


def test_strips_special_tokens():
    assert clean_text("<|en|><|transcribe|> Bonjour<|endoftext|>") == "Bonjour"


def test_only_tokens_becomes_empty():
    assert clean_text("<|0.00|><|1.00|>") == ""


def test_unicode_text():
    assert clean_text("<|0.00|>你好，世界<|1.50|>") == "你好，世界"


@pytest.mark.parametrize(
    "raw",
    ["<|0.00|>hello<|1.20|> world", "plain text", " padded ", "<|a|>x<|b|>y<|c|>", ""],
)
def test_idempotent(raw):
    assert clean_text(clean_text(raw)) == clean_text(raw)
