"""Translation cache with number-pattern lookups and bounded, persisted storage."""

import logging
import time
from typing import Callable, Dict, Iterator, Optional

from translation_relay.core import CacheEntry, CacheStats
from translation_relay.services.caching.cache_storage import CacheStorage, InMemoryCacheStorage
from translation_relay.services.text_processing import (
    DEFAULT_SOURCE_LANG,
    DEFAULT_TARGET_LANG,
    cache_key,
    extract_numbers,
    has_numbers,
    pattern_key,
    substitute_numbers,
    template_numbers,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 10_000
DEFAULT_AUTOSAVE_INTERVAL = 300.0
FLUSH_EVERY = 10


class TranslationCache:
    """
    In-memory translation cache backed by a CacheStorage snapshot.

    Exact entries are keyed by normalized text plus language pair. When
    number substitution is on, texts containing digits also get a pattern
    entry so "I have 7 items" can be served from a cached "I have 3 items".

    The store is bounded by max_entries. Eviction happens on save and keeps
    the most recently *created* entries; access bumps do not protect an
    entry from eviction.
    """

    def __init__(
        self,
        storage: Optional[CacheStorage] = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        substitute_numbers: bool = True,
        autosave_interval: float = DEFAULT_AUTOSAVE_INTERVAL,
        clock: Callable[[], float] = time.time,
    ):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")

        self.storage = storage if storage is not None else InMemoryCacheStorage()
        self.max_entries = max_entries
        self.substitute_numbers = substitute_numbers
        self.autosave_interval = autosave_interval
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._last_saved_at = clock()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, text: str, from_lang: Optional[str], to_lang: Optional[str]) -> Optional[str]:
        """
        Look up a cached translation.

        Tries the exact key first, then (with number substitution on and
        digits in text) the pattern key, filling the cached template with the
        numbers of the current text.

        Returns:
            The translation, or None on a miss.
        """
        now = self._clock()

        entry = self._entries.get(cache_key(text, from_lang, to_lang))
        if entry is not None:
            entry.touch(now)
            logger.debug("Cache hit (exact) for: %r", text)
            return entry.translation

        if self.substitute_numbers and has_numbers(text):
            pattern = self._entries.get(pattern_key(text, from_lang, to_lang))
            if pattern is not None:
                pattern.touch(now)
                translation = substitute_numbers(pattern.translation, extract_numbers(text))
                logger.debug("Cache hit (number substitution) for: %r -> %r", text, translation)
                return translation

        return None

    def put(
        self,
        text: str,
        from_lang: Optional[str],
        to_lang: Optional[str],
        translation: str,
        provider: str,
    ) -> None:
        """Store a translation, plus its number pattern when applicable."""
        now = self._clock()

        self._entries[cache_key(text, from_lang, to_lang)] = CacheEntry(
            original_text=text,
            translation=translation,
            from_lang=from_lang or DEFAULT_SOURCE_LANG,
            to_lang=to_lang or DEFAULT_TARGET_LANG,
            provider=provider,
            created_at=now,
            last_accessed_at=now,
        )

        if self.substitute_numbers and has_numbers(text):
            pattern = CacheEntry(
                original_text=template_numbers(text),
                translation=template_numbers(translation),
                from_lang=from_lang or DEFAULT_SOURCE_LANG,
                to_lang=to_lang or DEFAULT_TARGET_LANG,
                provider=provider,
                created_at=now,
                last_accessed_at=now,
                is_pattern=True,
            )
            self._entries[pattern_key(text, from_lang, to_lang)] = pattern
            logger.debug("Cached number pattern: %r -> %r", pattern.original_text, pattern.translation)

        logger.debug("Cached translation: %r -> %r", text, translation)
        self.maybe_flush()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def maybe_flush(self) -> bool:
        """Save when the entry count has reached a multiple of FLUSH_EVERY."""
        count = len(self._entries)
        if count > 0 and count % FLUSH_EVERY == 0:
            self.save()
            return True
        return False

    def flush_if_due(self, now: Optional[float] = None) -> bool:
        """Save when autosave_interval has elapsed since the last save."""
        now = self._clock() if now is None else now
        if now - self._last_saved_at < self.autosave_interval:
            return False
        self.save()
        logger.info("Auto-saved translation cache")
        return True

    def load(self) -> None:
        """Replace the in-memory entries with the stored snapshot."""
        raw = self.storage.load()
        entries: Dict[str, CacheEntry] = {}
        for key, value in raw.items():
            entry = CacheEntry.from_dict(value) if isinstance(value, dict) else None
            if entry is None:
                logger.warning("Skipping malformed cache entry %r", key)
                continue
            entries[key] = entry

        self._entries = entries
        logger.info("Loaded translation cache with %d entries", len(entries))

    def save(self) -> None:
        """Evict down to capacity, then write the full snapshot."""
        self.evict_if_over_capacity()
        snapshot = {key: entry.to_dict() for key, entry in self._entries.items()}
        self._last_saved_at = self._clock()
        try:
            self.storage.save(snapshot)
        except OSError as e:
            logger.error("Failed to save translation cache: %s", e)
            return
        logger.info("Saved translation cache with %d entries", len(snapshot))

    def evict_if_over_capacity(self) -> int:
        """
        Keep only the max_entries newest entries by creation time.

        Ties are broken by key order so results are reproducible.

        Returns:
            Number of entries removed.
        """
        overflow = len(self._entries) - self.max_entries
        if overflow <= 0:
            return 0

        ranked = sorted(
            self._entries.items(),
            key=lambda item: (-item[1].created_at, item[0]),
        )
        self._entries = dict(ranked[: self.max_entries])
        logger.info("Trimmed translation cache to %d entries", self.max_entries)
        return overflow

    def clear(self) -> None:
        """Drop every entry and persist the empty cache immediately."""
        self._entries = {}
        self.save()
        logger.info("Translation cache cleared")

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def stats(self) -> CacheStats:
        """Entry count, total text size and creation time range."""
        created = [entry.created_at for entry in self._entries.values()]
        return CacheStats(
            entry_count=len(self._entries),
            total_character_size=sum(entry.character_size for entry in self._entries.values()),
            oldest_created_at=min(created) if created else None,
            newest_created_at=max(created) if created else None,
        )

    def entry(self, key: str) -> Optional[CacheEntry]:
        """Return the raw entry stored under key (exact or pattern)."""
        return self._entries.get(key)

    def keys(self) -> Iterator[str]:
        return iter(list(self._entries))

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
