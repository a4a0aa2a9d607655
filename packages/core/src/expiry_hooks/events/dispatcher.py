"""EventDispatcher — in-order observer for expiry-hooks domain events."""

from __future__ import annotations

import logging
from inspect import isawaitable
from typing import TYPE_CHECKING, Generic, TypeVar, cast

from ..correlation import get_correlation_id
from ..domain.events import DomainEvent

if TYPE_CHECKING:
    from ..ports.event_dispatcher import EventHandler

logger = logging.getLogger("expiry_hooks.events")

E = TypeVar("E", bound=DomainEvent)


class EventDispatcher(Generic[E]):
    """Local, synchronous-order execution engine for domain events.

    Handlers run one after another in registration order; none is started
    before the previous one finished. A handler may be a plain callable or
    an object with ``handle(event)``, and may return an awaitable.

    A failing handler is logged and its exception propagates, so the
    remaining handlers for that event do not run. Handlers are written to
    be idempotent, so the host can simply re-deliver.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[E], list[EventHandler[E]]] = {}

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        event_type: type[E],
        handler: EventHandler[E],
    ) -> None:
        """Append a handler for a specific event type (duplicates ignored)."""
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def unregister(
        self,
        event_type: type[E],
        handler: EventHandler[E],
    ) -> None:
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    # ── Dispatching ──────────────────────────────────────────────

    async def dispatch(self, event: DomainEvent) -> None:
        """Invoke every handler registered for ``type(event)``, in order."""
        event_type = type(event)
        handlers = list(self._handlers.get(cast("type[E]", event_type), []))
        if not handlers:
            logger.debug("No handlers registered for %s", event_type.__name__)
            return

        logger.debug(
            "Dispatching %s (entity_id=%s, correlation_id=%s) to %d handler(s)",
            event_type.__name__,
            getattr(event, "entity_id", None),
            event.correlation_id or get_correlation_id(),
            len(handlers),
        )
        for handler in handlers:
            await self._invoke(handler, event)

    async def _invoke(self, handler: EventHandler[E], event: DomainEvent) -> None:
        try:
            if hasattr(handler, "handle"):
                result = handler.handle(cast("E", event))
            elif callable(handler):
                result = handler(cast("E", event))
            else:
                raise TypeError("Handler must be a callable or have a handle() method")

            if isawaitable(result):
                await result
        except Exception:
            logger.exception(
                "Error executing handler %s for event %s",
                _handler_name(handler),
                type(event).__name__,
            )
            raise

    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[type[E], list[EventHandler[E]]]:
        """Return all registered handlers (debugging utility)."""
        return {k: list(v) for k, v in self._handlers.items()}

    def clear(self) -> None:
        """Remove all handler registrations (testing utility)."""
        self._handlers.clear()


def _handler_name(handler: object) -> str:
    name = getattr(handler, "__qualname__", None)
    return name if isinstance(name, str) else type(handler).__name__
