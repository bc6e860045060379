"""
Translation Relay - cached, multi-provider text translation.

This package provides the translation core for screen-reader and clipboard
helpers:
- Persistent translation cache with number-pattern reuse
- Ordered provider fallback (Google, LibreTranslate, MyMemory, Lingva,
  Microsoft, DeepL, OpenAI, Argos, Gemini)
- A resolver that always returns a string
"""

__version__ = "0.1.0"

# Make key components available at package level
from translation_relay.core import CacheEntry, CacheStats
from translation_relay.services import TranslationCache, TranslationResolver, default_registry

__all__ = [
    "CacheEntry",
    "CacheStats",
    "TranslationCache",
    "TranslationResolver",
    "default_registry",
]
