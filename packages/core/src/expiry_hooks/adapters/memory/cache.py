"""InMemoryCacheService — namespaced dict cache for tests and single-process hosts."""

from __future__ import annotations

from typing import Any

from expiry_hooks.ports.cache import ICacheService


class InMemoryCacheService(ICacheService):
    """Dict-of-dicts cache keyed by ``(namespace, key)``.

    Per-entity derived entries (the host's object cache) live in a
    separate map so :meth:`invalidate_entity` can drop them in one go.
    Every deletion is recorded for assertions.
    """

    def __init__(self) -> None:
        self._namespaces: dict[str, dict[str, Any]] = {}
        self._entity_entries: dict[int, dict[str, Any]] = {}
        self.deleted: list[tuple[str, str]] = []
        self.invalidated_entities: list[int] = []

    async def delete(self, key: str, namespace: str) -> None:
        self._namespaces.get(namespace, {}).pop(key, None)
        self.deleted.append((namespace, key))

    async def invalidate_entity(self, entity_id: int) -> None:
        self._entity_entries.pop(entity_id, None)
        self.invalidated_entities.append(entity_id)

    # --- Host/test helpers ---

    def set(self, key: str, value: Any, namespace: str) -> None:
        self._namespaces.setdefault(namespace, {})[key] = value

    def get(self, key: str, namespace: str) -> Any | None:
        return self._namespaces.get(namespace, {}).get(key)

    def set_entity_entry(self, entity_id: int, key: str, value: Any) -> None:
        self._entity_entries.setdefault(entity_id, {})[key] = value

    def get_entity_entries(self, entity_id: int) -> dict[str, Any]:
        return dict(self._entity_entries.get(entity_id, {}))

    def deleted_keys(self, namespace: str | None = None) -> list[str]:
        return [k for ns, k in self.deleted if namespace is None or ns == namespace]

    def clear(self) -> None:
        self._namespaces.clear()
        self._entity_entries.clear()
        self.deleted.clear()
        self.invalidated_entities.clear()
