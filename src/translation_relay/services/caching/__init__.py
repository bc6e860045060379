"""Caching services - translation cache and its storage backends."""

from translation_relay.services.caching.cache_storage import (
    CacheStorage,
    InMemoryCacheStorage,
    JsonFileCacheStorage,
)
from translation_relay.services.caching.translation_cache import (
    DEFAULT_MAX_ENTRIES,
    TranslationCache,
)

__all__ = [
    "CacheStorage",
    "InMemoryCacheStorage",
    "JsonFileCacheStorage",
    "TranslationCache",
    "DEFAULT_MAX_ENTRIES",
]
