"""User-facing translation settings."""

import locale
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional


def system_language() -> str:
    """Language code of the current locale, e.g. "de" for de_DE; "en" if unknown."""
    try:
        name = locale.getlocale()[0]
    except ValueError:
        name = None
    if not name:
        return "en"
    return name.split("_")[0].split("-")[0].lower() or "en"


@dataclass
class UserSettings:
    source_language: str = "auto"
    destination_language: str = field(default_factory=system_language)
    preferred_provider: Optional[str] = None
    substitute_numbers: bool = True
    auto_translate: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserSettings":
        """Build settings from stored values, ignoring unknown or mistyped keys."""
        defaults = cls()
        values = {}
        for f in fields(cls):
            value = data.get(f.name, getattr(defaults, f.name))
            default = getattr(defaults, f.name)
            if default is not None and not isinstance(value, type(default)):
                value = default
            elif default is None and not isinstance(value, (str, type(None))):
                value = None
            values[f.name] = value
        return cls(**values)
