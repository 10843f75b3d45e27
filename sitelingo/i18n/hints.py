"""
Field name -> context hint table.

The table is plain data (see resources/context_hints.yaml), so the tree
walker never hard-codes field names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any


_URL_LIKE = re.compile(r"^(https?://|ftp://|mailto:|tel:|www\.|/|\./|\.\./|#)", re.IGNORECASE)
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
_MEDIA_FILE = re.compile(
    r"^\S+\.(jpe?g|png|gif|webp|avif|svg|ico|mp4|webm|mov|pdf)$",
    re.IGNORECASE,
)
_HAS_LETTER = re.compile(r"[^\W\d_]")


def looks_untranslatable(text: str) -> bool:
    """URLs, paths, e-mail addresses, media file names and letterless strings."""
    stripped = text.strip()
    if not stripped:
        return True
    return bool(
        _URL_LIKE.match(stripped)
        or _EMAIL.match(stripped)
        or _MEDIA_FILE.match(stripped)
        or not _HAS_LETTER.search(stripped)
    )


@dataclass
class ContextHints:
    """Declarative mapping from field names to provider context hints."""
    
    fields: dict[str, str] = field(default_factory=dict)
    passthrough: frozenset[str] = frozenset()
    
    def __post_init__(self):
        self.fields = {k.lower(): v for k, v in self.fields.items()}
        self.passthrough = frozenset(k.lower() for k in self.passthrough)
    
    def hint_for(self, key: str | None, default: str = "") -> str:
        """Hint for a field, or ``default`` if the field is unknown."""
        if key is None:
            return default
        return self.fields.get(str(key).lower(), default)
    
    def is_passthrough(self, key: str | None) -> bool:
        return key is not None and str(key).lower() in self.passthrough
    
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContextHints:
        return cls(
            fields={str(k): str(v) for k, v in (data.get("fields") or {}).items()},
            passthrough=frozenset(str(k) for k in (data.get("passthrough") or [])),
        )
    
    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": dict(self.fields),
            "passthrough": sorted(self.passthrough),
        }
