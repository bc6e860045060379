"""Cache statistics snapshot."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class CacheStats:
    """Summary of the translation cache contents."""

    entry_count: int
    total_character_size: int
    oldest_created_at: Optional[float]
    newest_created_at: Optional[float]

    def format_timestamp(self, value: Optional[float]) -> str:
        """Render a creation timestamp for display, or N/A when empty."""
        if value is None:
            return "N/A"
        return datetime.fromtimestamp(value).strftime("%Y-%m-%d %H:%M:%S")

    def summary(self) -> str:
        return (
            "Translation Cache Statistics:\n"
            f"Entries: {self.entry_count}\n"
            f"Total Size: {self.total_character_size} characters\n"
            f"Oldest: {self.format_timestamp(self.oldest_created_at)}\n"
            f"Newest: {self.format_timestamp(self.newest_created_at)}"
        )
