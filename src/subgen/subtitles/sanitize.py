"""Strip recognition-engine metadata from transcribed text."""

from __future__ import annotations

import re

# Engine tokens such as <|0.00|>, <|en|>, <|endoftext|>
_META_TOKEN_RE = re.compile(r"<\|.*?\|>")


def clean_text(raw: str) -> str:
    """Remove all ``<|...|>`` tokens and surrounding whitespace.

    >>> clean_text("<|0.00|>hello<|1.20|> world")
    'hello world'
    """
    return _META_TOKEN_RE.sub("", raw).strip()
