"""Language choices offered for recognition.

A missing code means the engine auto-detects the spoken language.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageOption:
    label: str
    code: str | None


AUTO = LanguageOption("Auto", None)

LANGUAGE_OPTIONS: tuple[LanguageOption, ...] = (
    AUTO,
    LanguageOption("Chinese", "zh"),
    LanguageOption("Japanese", "ja"),
    LanguageOption("English", "en"),
)

SUPPORTED_CODES: frozenset[str] = frozenset(
    opt.code for opt in LANGUAGE_OPTIONS if opt.code is not None
)


def option_for_label(label: str) -> LanguageOption:
    """Look up an option by its display label (case-insensitive)."""
    for opt in LANGUAGE_OPTIONS:
        if opt.label.lower() == label.lower():
            return opt
    raise KeyError(label)


def option_for_code(code: str | None) -> LanguageOption:
    """Look up an option by language code; None maps to Auto."""
    for opt in LANGUAGE_OPTIONS:
        if opt.code == code:
            return opt
    raise KeyError(code)


def validate_language(code: str | None) -> str | None:
    """Validate a language hint and normalize it.

    Accepts None or "auto" (both mean auto-detect), the supported codes,
    and display labels such as "Japanese". Raises ValueError for anything else.
    """
    if code is None or code.lower() == "auto":
        return None
    code = code.lower()
    if code in SUPPORTED_CODES:
        return code
    try:
        return option_for_label(code).code
    except KeyError:
        supported = ", ".join(sorted(SUPPORTED_CODES))
        raise ValueError(
            f"Unsupported language: '{code}'. Use 'auto' or one of: {supported}. "
            "Run 'subgen languages' to see the options."
        ) from None
