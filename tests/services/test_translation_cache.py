"""Unit tests for TranslationCache."""

import json

import pytest

from translation_relay.services import InMemoryCacheStorage, JsonFileCacheStorage, TranslationCache
from translation_relay.services.text_processing import NUMBER_PLACEHOLDER, cache_key, pattern_key


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return InMemoryCacheStorage()


@pytest.fixture
def cache(storage, clock):
    """Provide a fresh cache instance for each test."""
    return TranslationCache(storage=storage, clock=clock)


class TestExactLookups:
    """Exact-key get/put behaviour."""

    def test_get_returns_none_for_missing_entry(self, cache):
        assert cache.get("hello", "auto", "es") is None

    def test_put_and_get_roundtrip(self, cache):
        """A stored translation comes back verbatim."""
        cache.put("Good morning", "auto", "es", "Buenos días", "Google Translate")
        assert cache.get("Good morning", "auto", "es") == "Buenos días"

    def test_lookup_ignores_case_and_spacing(self, cache):
        cache.put(" Hello  World ", "auto", "es", "Hola Mundo", "Google Translate")
        assert cache.get("hello world", "auto", "es") == "Hola Mundo"

    def test_language_pairs_are_isolated(self, cache):
        cache.put("hello", "auto", "es", "hola", "Google Translate")
        cache.put("hello", "auto", "fr", "bonjour", "Google Translate")
        assert cache.get("hello", "auto", "es") == "hola"
        assert cache.get("hello", "auto", "fr") == "bonjour"

    def test_put_overwrites_existing_entry(self, cache):
        cache.put("cat", "en", "es", "gato (old)", "MyMemory")
        cache.put("cat", "en", "es", "gato", "Lingva Translate")
        assert cache.get("cat", "en", "es") == "gato"
        assert len(cache) == 1

    def test_put_records_entry_fields(self, cache, clock):
        cache.put("Hello", "auto", "es", "Hola", "Google Translate")
        entry = cache.entry(cache_key("Hello", "auto", "es"))
        assert entry.original_text == "Hello"
        assert entry.provider == "Google Translate"
        assert entry.access_count == 1
        assert entry.created_at == entry.last_accessed_at == clock.now
        assert entry.is_pattern is False

    def test_hit_bumps_access_metadata(self, cache, clock):
        cache.put("Hello", "auto", "es", "Hola", "Google Translate")
        clock.advance(30)
        cache.get("Hello", "auto", "es")
        entry = cache.entry(cache_key("Hello", "auto", "es"))
        assert entry.access_count == 2
        assert entry.last_accessed_at == clock.now
        assert entry.created_at < entry.last_accessed_at

    def test_none_languages_default(self, cache):
        cache.put("hello", None, None, "hello", "MyMemory")
        assert cache.get("hello", "auto", "en") == "hello"
        entry = cache.entry("hello|auto|en")
        assert entry.from_lang == "auto"
        assert entry.to_lang == "en"


class TestNumberPatterns:
    """Number-substitution lookups."""

    def test_put_writes_pattern_entry(self, cache):
        cache.put("I have 3 items", "auto", "es", "Tengo 3 artículos", "Google Translate")
        pattern = cache.entry(pattern_key("I have 3 items", "auto", "es"))
        assert pattern is not None
        assert pattern.is_pattern is True
        assert pattern.original_text == f"I have {NUMBER_PLACEHOLDER} items"
        assert pattern.translation == f"Tengo {NUMBER_PLACEHOLDER} artículos"
        assert len(cache) == 2

    def test_pattern_hit_substitutes_current_numbers(self, cache):
        """A cached template is filled with the numbers of the new text."""
        cache.put("I have 3 items", "auto", "es", "Tengo 3 artículos", "Google Translate")
        assert cache.get("I have 7 items", "auto", "es") == "Tengo 7 artículos"

    def test_pattern_hit_bumps_pattern_entry(self, cache, clock):
        cache.put("Level 1", "auto", "de", "Stufe 1", "Google Translate")
        clock.advance(5)
        cache.get("Level 9", "auto", "de")
        pattern = cache.entry(pattern_key("Level 1", "auto", "de"))
        assert pattern.access_count == 2
        assert pattern.last_accessed_at == clock.now

    def test_exact_match_wins_over_pattern(self, cache):
        cache.put("Page 1", "auto", "fr", "Page 1", "Google Translate")
        cache.put("Page 2", "auto", "fr", "Deuxième page", "Google Translate")
        assert cache.get("Page 1", "auto", "fr") == "Page 1"

    def test_independent_templating_of_text_and_translation(self, cache):
        """Translation digits are templated on their own, not aligned to the source."""
        cache.put("3 of 10", "auto", "es", "10 de 3", "Google Translate")
        assert cache.get("4 of 20", "auto", "es") == "4 de 20"

    def test_fewer_numbers_than_placeholders(self, cache):
        cache.put("5 cats", "auto", "es", "5 gatos y 2 perros", "Google Translate")
        assert cache.get("8 cats", "auto", "es") == f"8 gatos y {NUMBER_PLACEHOLDER} perros"

    def test_disabled_substitution_skips_patterns(self, storage, clock):
        cache = TranslationCache(storage=storage, substitute_numbers=False, clock=clock)
        cache.put("I have 3 items", "auto", "es", "Tengo 3 artículos", "Google Translate")
        assert len(cache) == 1
        assert cache.get("I have 7 items", "auto", "es") is None

    def test_toggling_substitution_off_hides_existing_patterns(self, cache):
        cache.put("I have 3 items", "auto", "es", "Tengo 3 artículos", "Google Translate")
        cache.substitute_numbers = False
        assert cache.get("I have 7 items", "auto", "es") is None

    def test_text_without_digits_never_uses_patterns(self, cache):
        cache.put("hello", "auto", "es", "hola", "Google Translate")
        assert len(cache) == 1


class TestFlushAndEviction:
    """Persistence triggers and creation-time eviction."""

    def test_flush_on_every_tenth_entry(self, cache, storage, clock):
        for i in range(9):
            cache.put(f"word {chr(97 + i)}", "auto", "es", f"palabra {i}", "MyMemory")
            clock.advance()
        assert storage.save_count == 0

        cache.put("word j", "auto", "es", "palabra j", "MyMemory")
        assert storage.save_count == 1
        assert len(storage.data) == 10

    def test_pattern_entries_count_toward_flush(self, cache, storage):
        for i in range(4):
            cache.put(f"phrase {chr(97 + i)}", "auto", "es", "frase", "MyMemory")
        cache.put("item 5", "auto", "es", "artículo 5", "MyMemory")
        assert len(cache) == 6
        assert storage.save_count == 0

        for i in range(4):
            cache.put(f"other {chr(97 + i)}", "auto", "es", "otro", "MyMemory")
        assert len(cache) == 10
        assert storage.save_count == 1

    def test_eviction_keeps_newest_by_creation(self, storage, clock):
        cache = TranslationCache(storage=storage, max_entries=5, clock=clock)
        for i in range(8):
            cache.put(f"text {chr(97 + i)}", "auto", "es", f"texto {i}", "MyMemory")
            clock.advance()

        removed = cache.evict_if_over_capacity()

        assert removed == 3
        assert len(cache) == 5
        for i in range(3):
            assert cache.get(f"text {chr(97 + i)}", "auto", "es") is None
        for i in range(3, 8):
            assert cache.get(f"text {chr(97 + i)}", "auto", "es") == f"texto {i}"

    def test_access_does_not_protect_old_entries(self, storage, clock):
        """Eviction ranks by creation time, not by last access."""
        cache = TranslationCache(storage=storage, max_entries=2, clock=clock)
        cache.put("old", "auto", "es", "viejo", "MyMemory")
        clock.advance()
        cache.put("middle", "auto", "es", "medio", "MyMemory")
        clock.advance()
        cache.put("new", "auto", "es", "nuevo", "MyMemory")
        clock.advance()
        for _ in range(5):
            cache.get("old", "auto", "es")

        cache.save()

        assert "old|auto|es" not in cache
        assert "middle|auto|es" in cache
        assert "new|auto|es" in cache

    def test_eviction_ties_broken_by_key(self, storage, clock):
        cache = TranslationCache(storage=storage, max_entries=2, clock=clock)
        for word in ("charlie", "alpha", "bravo"):
            cache.put(word, "auto", "es", word.upper(), "MyMemory")

        cache.evict_if_over_capacity()

        assert sorted(cache.keys()) == ["alpha|auto|es", "bravo|auto|es"]

    def test_save_evicts_before_writing(self, storage, clock):
        cache = TranslationCache(storage=storage, max_entries=3, clock=clock)
        for i in range(5):
            cache.put(f"entry {chr(97 + i)}", "auto", "es", f"entrada {i}", "MyMemory")
            clock.advance()

        cache.save()

        assert len(storage.data) == 3

    def test_flush_if_due_waits_for_interval(self, storage, clock):
        cache = TranslationCache(storage=storage, autosave_interval=300, clock=clock)
        cache.put("hello", "auto", "es", "hola", "MyMemory")

        clock.advance(299)
        assert cache.flush_if_due() is False
        clock.advance(1)
        assert cache.flush_if_due() is True
        assert storage.save_count == 1
        assert cache.flush_if_due() is False

    def test_invalid_max_entries(self):
        with pytest.raises(ValueError):
            TranslationCache(max_entries=0)


class TestStatsAndClear:
    """Statistics and clearing."""

    def test_stats_on_empty_cache(self, cache):
        stats = cache.stats()
        assert stats.entry_count == 0
        assert stats.total_character_size == 0
        assert stats.oldest_created_at is None
        assert stats.newest_created_at is None

    def test_stats_summarize_entries(self, cache, clock):
        first = clock.now
        cache.put("hello", "auto", "es", "hola", "MyMemory")
        clock.advance(60)
        cache.put("cat", "auto", "es", "gato", "MyMemory")

        stats = cache.stats()

        assert stats.entry_count == 2
        assert stats.total_character_size == len("hello") + len("hola") + len("cat") + len("gato")
        assert stats.oldest_created_at == first
        assert stats.newest_created_at == first + 60

    def test_stats_summary_text(self, cache):
        assert "Entries: 0" in cache.stats().summary()
        assert "N/A" in cache.stats().summary()

    def test_clear_empties_and_persists(self, cache, storage):
        cache.put("hello", "auto", "es", "hola", "MyMemory")
        cache.clear()
        assert len(cache) == 0
        assert cache.get("hello", "auto", "es") is None
        assert storage.save_count == 1
        assert storage.data == {}


class TestFilePersistence:
    """Round trips through JsonFileCacheStorage."""

    def test_save_and_load_roundtrip(self, tmp_path, clock):
        path = tmp_path / "cache.json"
        cache = TranslationCache(storage=JsonFileCacheStorage(path), clock=clock)
        cache.put("Hello", "auto", "es", "Hola", "Google Translate")
        cache.put("Floor 3", "auto", "es", "Piso 3", "Google Translate")
        cache.save()

        reloaded = TranslationCache(storage=JsonFileCacheStorage(path), clock=clock)
        reloaded.load()

        assert len(reloaded) == 3
        assert reloaded.get("hello", "auto", "es") == "Hola"
        assert reloaded.get("Floor 12", "auto", "es") == "Piso 12"

    def test_file_uses_documented_field_names(self, tmp_path, clock):
        path = tmp_path / "cache.json"
        cache = TranslationCache(storage=JsonFileCacheStorage(path), clock=clock)
        cache.put("Room 4", "auto", "es", "Habitación 4", "MyMemory")
        cache.save()

        data = json.loads(path.read_text(encoding="utf-8"))
        exact = data["room 4|auto|es"]
        assert exact == {
            "originalText": "Room 4",
            "translation": "Habitación 4",
            "fromLang": "auto",
            "toLang": "es",
            "provider": "MyMemory",
            "timestamp": clock.now,
            "lastAccessed": clock.now,
            "accessCount": 1,
        }
        pattern = data[f"room {NUMBER_PLACEHOLDER}|auto|es"]
        assert pattern["isNumberPattern"] is True

    def test_load_missing_file_gives_empty_cache(self, tmp_path):
        cache = TranslationCache(storage=JsonFileCacheStorage(tmp_path / "absent.json"))
        cache.load()
        assert len(cache) == 0

    def test_load_corrupt_file_gives_empty_cache(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("{not json", encoding="utf-8")
        cache = TranslationCache(storage=JsonFileCacheStorage(path))
        cache.load()
        assert len(cache) == 0

    def test_load_skips_malformed_entries(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text(
            json.dumps(
                {
                    "hello|auto|es": {"originalText": "hello", "translation": "hola"},
                    "broken|auto|es": "not an object",
                    "missing|auto|es": {"originalText": "missing"},
                }
            ),
            encoding="utf-8",
        )
        cache = TranslationCache(storage=JsonFileCacheStorage(path))
        cache.load()

        assert list(cache.keys()) == ["hello|auto|es"]
        assert cache.get("hello", "auto", "es") == "hola"
        assert cache.entry("hello|auto|es").access_count == 1
