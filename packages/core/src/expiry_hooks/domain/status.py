"""Entity lifecycle status."""

from __future__ import annotations

from enum import Enum
from typing import Any

_ALIASES = {
    "publish": "published",
    "trashed": "trash",
    "deleted": "trash",
}


class EntityStatus(str, Enum):
    """Lifecycle status of an entity. Only ``PUBLISHED`` is schedulable."""

    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    FUTURE = "future"
    PUBLISHED = "published"
    TRASH = "trash"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: Any) -> EntityStatus:
        """Map a raw status (enum or string) onto a member, ``OTHER`` if unknown."""
        if isinstance(value, cls):
            return value
        raw = str(value).strip().lower()
        try:
            return cls(_ALIASES.get(raw, raw))
        except ValueError:
            return cls.OTHER

    @property
    def is_schedulable(self) -> bool:
        return self is EntityStatus.PUBLISHED
