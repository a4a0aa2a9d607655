"""InMemoryEntityStore — dict-backed fake for unit tests and simulations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from typing import Any

from expiry_hooks.domain.status import EntityStatus
from expiry_hooks.ports.entity_store import IEntityStore
from expiry_hooks.primitives.clock import Clock, system_clock
from expiry_hooks.primitives.exceptions import ConfigurationError
from expiry_hooks.primitives.timestamps import parse_end_timestamp


@dataclass
class StoredEntity:
    """Entity record held by :class:`InMemoryEntityStore`.

    ``has_ended`` is true once the parsed end timestamp is at or before the
    store's clock. A missing or malformed end timestamp never ends.
    """

    id: int
    status: EntityStatus = EntityStatus.DRAFT
    end_timestamp_raw: str | None = None
    kind: str = "gatherpress_event"
    metadata: dict[str, Any] = field(default_factory=dict)
    clock: Clock = field(default=system_clock, repr=False, compare=False)
    tz: tzinfo = field(default=timezone.utc, repr=False, compare=False)

    def has_ended(self) -> bool:
        ends_at = parse_end_timestamp(self.end_timestamp_raw, default_tz=self.tz)
        if ends_at is None:
            return False
        return ends_at <= self.clock()


class InMemoryEntityStore(IEntityStore):
    """In-memory implementation of :class:`IEntityStore`.

    Entities share the store's clock so that advancing a test clock also
    moves every ``has_ended()`` answer.

    ``tz`` is the zone naive end timestamps are read in. Left unset, it is
    bound to ``ExpiryHooksConfig.tz`` by :func:`bootstrap_expiry_hooks` so
    that the scheduler and ``has_ended()`` agree (UTC until then).
    """

    def __init__(
        self,
        *,
        clock: Clock = system_clock,
        tz: tzinfo | None = None,
        default_kind: str = "gatherpress_event",
    ) -> None:
        self._clock = clock
        self._tz = tz
        self._default_kind = default_kind
        self._entities: dict[int, StoredEntity] = {}

    async def get(self, entity_id: int) -> StoredEntity | None:
        return self._entities.get(entity_id)

    @property
    def tz(self) -> tzinfo:
        return self._tz or timezone.utc

    def bind_timezone(self, tz: tzinfo) -> None:
        """Adopt ``tz`` for naive end timestamps, including stored entities.

        Raises :class:`ConfigurationError` if the store was built with a
        different zone.
        """
        if self._tz is not None and self._tz != tz:
            raise ConfigurationError(
                f"Entity store reads end timestamps in {self._tz}, "
                f"configuration says {tz}"
            )
        self._tz = tz
        for entity in self._entities.values():
            entity.tz = tz

    # --- Test helpers ---

    def put(
        self,
        entity_id: int,
        *,
        status: EntityStatus | str = EntityStatus.DRAFT,
        end_timestamp_raw: str | None = None,
        kind: str | None = None,
    ) -> StoredEntity:
        entity = StoredEntity(
            id=entity_id,
            status=EntityStatus.coerce(status),
            end_timestamp_raw=end_timestamp_raw,
            kind=kind or self._default_kind,
            clock=self._clock,
            tz=self.tz,
        )
        self._entities[entity_id] = entity
        return entity

    def set_status(self, entity_id: int, status: EntityStatus | str) -> StoredEntity:
        entity = self._entities[entity_id]
        entity.status = EntityStatus.coerce(status)
        return entity

    def set_end_timestamp(self, entity_id: int, raw: str | None) -> StoredEntity:
        entity = self._entities[entity_id]
        entity.end_timestamp_raw = raw
        return entity

    def delete(self, entity_id: int) -> None:
        self._entities.pop(entity_id, None)

    def clear(self) -> None:
        self._entities.clear()

    def __len__(self) -> int:
        return len(self._entities)
