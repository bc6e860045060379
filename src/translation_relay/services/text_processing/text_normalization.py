"""Text normalization utilities for consistent cache keying."""

import re
from typing import List, Optional, Sequence

NUMBER_PLACEHOLDER = "##NUMBER##"
DEFAULT_SOURCE_LANG = "auto"
DEFAULT_TARGET_LANG = "en"

_DIGIT_RUN = re.compile(r"\d+", re.ASCII)
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Normalize text for consistent cache keying.

    Rules:
    - Lowercase
    - Collapse runs of whitespace (spaces, tabs, newlines) to single spaces
    - Trim leading and trailing whitespace

    Args:
        text: Original text to normalize.

    Returns:
        Normalized text string.
    """
    text = text.lower()
    text = _WHITESPACE_RUN.sub(" ", text)
    return text.strip()


def _join_key(text: str, from_lang: Optional[str], to_lang: Optional[str]) -> str:
    return f"{text}|{from_lang or DEFAULT_SOURCE_LANG}|{to_lang or DEFAULT_TARGET_LANG}"


def cache_key(text: str, from_lang: Optional[str], to_lang: Optional[str]) -> str:
    """Exact-match key: normalized text plus the language pair."""
    return _join_key(normalize_text(text), from_lang, to_lang)


def pattern_key(text: str, from_lang: Optional[str], to_lang: Optional[str]) -> str:
    """Number-templated key: like cache_key with every digit run replaced."""
    return _join_key(template_numbers(normalize_text(text)), from_lang, to_lang)


def has_numbers(text: str) -> bool:
    return _DIGIT_RUN.search(text) is not None


def template_numbers(text: str) -> str:
    """Replace every digit run with the placeholder token."""
    return _DIGIT_RUN.sub(NUMBER_PLACEHOLDER, text)


def extract_numbers(text: str) -> List[str]:
    """Return the digit runs of text in left-to-right order."""
    return _DIGIT_RUN.findall(text)


def substitute_numbers(template: str, numbers: Sequence[str]) -> str:
    """
    Fill placeholders in template with numbers, left to right.

    Placeholders left over once numbers run out stay as literal text.
    """
    remaining = iter(numbers)

    def _next_number(match: "re.Match[str]") -> str:
        return next(remaining, match.group(0))

    return re.sub(re.escape(NUMBER_PLACEHOLDER), _next_number, template)
