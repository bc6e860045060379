"""Services layer - caching, translation providers and settings."""

from translation_relay.services.settings_manager import SettingsManager

# Text processing services
from translation_relay.services.text_processing import (
    cache_key,
    extract_numbers,
    normalize_text,
    pattern_key,
    substitute_numbers,
)

# Caching services
from translation_relay.services.caching import (
    CacheStorage,
    InMemoryCacheStorage,
    JsonFileCacheStorage,
    TranslationCache,
)

# Translation services
from translation_relay.services.translation import (
    ProviderInvoker,
    ProviderRegistry,
    TranslationProvider,
    default_registry,
)
from translation_relay.services.translation_resolver import TranslationResolver

__all__ = [
    "SettingsManager",
    "cache_key",
    "extract_numbers",
    "normalize_text",
    "pattern_key",
    "substitute_numbers",
    "CacheStorage",
    "InMemoryCacheStorage",
    "JsonFileCacheStorage",
    "TranslationCache",
    "ProviderInvoker",
    "ProviderRegistry",
    "TranslationProvider",
    "default_registry",
    "TranslationResolver",
]
