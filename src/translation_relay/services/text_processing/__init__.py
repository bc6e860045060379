"""Text processing services - normalization and number templating for cache keys."""

from translation_relay.services.text_processing.text_normalization import (
    DEFAULT_SOURCE_LANG,
    DEFAULT_TARGET_LANG,
    NUMBER_PLACEHOLDER,
    cache_key,
    extract_numbers,
    has_numbers,
    normalize_text,
    pattern_key,
    substitute_numbers,
    template_numbers,
)

__all__ = [
    "DEFAULT_SOURCE_LANG",
    "DEFAULT_TARGET_LANG",
    "NUMBER_PLACEHOLDER",
    "cache_key",
    "extract_numbers",
    "has_numbers",
    "normalize_text",
    "pattern_key",
    "substitute_numbers",
    "template_numbers",
]
