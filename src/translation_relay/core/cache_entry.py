"""Cache entry entity - one cached translation plus its bookkeeping."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class CacheEntry:
    """A cached translation, either exact or number-templated."""

    original_text: str
    translation: str
    from_lang: str
    to_lang: str
    provider: str
    created_at: float
    last_accessed_at: float
    access_count: int = 1
    is_pattern: bool = False

    def touch(self, now: float) -> None:
        """Record a cache hit."""
        self.last_accessed_at = max(now, self.created_at)
        self.access_count += 1

    @property
    def character_size(self) -> int:
        return len(self.original_text) + len(self.translation)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the on-disk field names."""
        data = {
            "originalText": self.original_text,
            "translation": self.translation,
            "fromLang": self.from_lang,
            "toLang": self.to_lang,
            "provider": self.provider,
            "timestamp": self.created_at,
            "lastAccessed": self.last_accessed_at,
            "accessCount": self.access_count,
        }
        if self.is_pattern:
            data["isNumberPattern"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["CacheEntry"]:
        """
        Build an entry from its stored form.

        Missing fields fall back to safe defaults; unknown fields are ignored.
        Returns None when the record has no usable translation.
        """
        translation = data.get("translation")
        if not isinstance(translation, str):
            return None

        created_at = _as_number(data.get("timestamp"))
        last_accessed = _as_number(data.get("lastAccessed"), default=created_at)
        access_count = data.get("accessCount", 0)
        if not isinstance(access_count, int) or isinstance(access_count, bool):
            access_count = 0

        return cls(
            original_text=str(data.get("originalText") or ""),
            translation=translation,
            from_lang=str(data.get("fromLang") or "auto"),
            to_lang=str(data.get("toLang") or "en"),
            provider=str(data.get("provider") or ""),
            created_at=created_at,
            last_accessed_at=max(last_accessed, created_at),
            access_count=access_count,
            is_pattern=bool(data.get("isNumberPattern", False)),
        )


def _as_number(value: Any, default: float = 0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value
