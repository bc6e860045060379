"""Domain layer - plain entities shared by the cache, settings and the resolver."""

from .cache_entry import CacheEntry
from .cache_stats import CacheStats
from .user_settings import UserSettings, system_language

__all__ = ["CacheEntry", "CacheStats", "UserSettings", "system_language"]
