"""Cache storage backends - where the translation cache snapshot lives."""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class CacheStorage(ABC):
    """
    Abstract persistence for the translation cache snapshot.

    Implementations read and write the whole mapping of cache keys to
    serialized entries. Loading never raises: a missing or unreadable
    snapshot is reported as an empty mapping.
    """

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        """Return the stored mapping, or {} when nothing usable is stored."""
        pass

    @abstractmethod
    def save(self, data: Dict[str, Any]) -> None:
        """Replace the stored mapping with data."""
        pass


class InMemoryCacheStorage(CacheStorage):
    """
    Storage kept in process memory.

    Used for testing and session-level caching. No persistence.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})
        self.save_count = 0

    def load(self) -> Dict[str, Any]:
        return json.loads(json.dumps(self._data))

    def save(self, data: Dict[str, Any]) -> None:
        self._data = json.loads(json.dumps(data))
        self.save_count += 1

    @property
    def data(self) -> Dict[str, Any]:
        return self._data


class JsonFileCacheStorage(CacheStorage):
    """
    JSON file storage.

    The file holds a single object mapping cache keys to entry objects:
    {
        "hello world|auto|es": {
            "originalText": "Hello world",
            "translation": "Hola mundo",
            "fromLang": "auto",
            "toLang": "es",
            "provider": "Google Translate",
            "timestamp": 1760000000,
            "lastAccessed": 1760000000,
            "accessCount": 1
        }
    }

    Writes go to a temporary file in the same directory which then replaces
    the target, so readers never see a partial snapshot.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            logger.info("No translation cache file at %s, starting empty", self.path)
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Failed to read translation cache %s, starting empty: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Translation cache %s is not a JSON object, starting empty", self.path)
            return {}
        return data

    def save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=self.path.name, suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
