from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    Protocol,
    TypeAlias,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from ..domain.events import DomainEvent

E = TypeVar("E", bound="DomainEvent")
E_contra = TypeVar("E_contra", bound="DomainEvent", contravariant=True)


class EventHandlerProtocol(Protocol[E_contra]):
    """Handler object with a ``handle(event)`` method."""

    def handle(self, event: E_contra) -> Awaitable[None] | None:
        ...


class EventHandlerCallable(Protocol[E_contra]):
    def __call__(self, event: E_contra) -> Awaitable[None] | None:
        ...


EventHandler: TypeAlias = EventHandlerCallable[E] | EventHandlerProtocol[E]

FeatureFlag = Callable[[], bool]


@runtime_checkable
class IEventDispatcher(Protocol, Generic[E]):
    """Protocol for synchronous, in-order local event dispatching."""

    def register(self, event_type: type[E], handler: EventHandler[E]) -> None:
        """Append a handler for a specific event type."""
        ...

    def unregister(self, event_type: type[E], handler: EventHandler[E]) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        ...

    async def dispatch(self, event: DomainEvent) -> None:
        """Invoke every handler registered for the event's type, in order."""
        ...

    def clear(self) -> None:
        """Remove all handler registrations."""
        ...
