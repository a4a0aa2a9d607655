"""FilterPipeline — ordered value transforms that extension code can hook into."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from ..primitives.exceptions import HandlerError

T = TypeVar("T")

Filter = Callable[..., Any]


class FilterPipeline(Generic[T]):
    """Folds a value through registered transform functions.

    Each filter receives the current value followed by the context passed
    to :meth:`apply` and returns the replacement value::

        keys = FilterPipeline[list[str]]("extend_cache_keys")
        keys.register(lambda keys, entity_id: [*keys, f"custom_{entity_id}"])
        keys.apply(["p_7"], 7)  # ["p_7", "custom_7"]

    Filters run in registration order and their results are passed on
    unchecked; interpreting an odd result is up to the caller.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._filters: list[Filter] = []

    def register(self, fn: Filter) -> Filter:
        """Append a filter. Usable as a decorator."""
        if not callable(fn):
            raise HandlerError(f"Filter for {self.name!r} must be callable")
        if fn not in self._filters:
            self._filters.append(fn)
        return fn

    def unregister(self, fn: Filter) -> None:
        if fn in self._filters:
            self._filters.remove(fn)

    def apply(self, value: T, *context: Any) -> T:
        for fn in self._filters:
            value = fn(value, *context)
        return value

    def __len__(self) -> int:
        return len(self._filters)

    def clear(self) -> None:
        self._filters.clear()
