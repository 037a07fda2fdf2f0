"""Event bus and interaction events for the terminal clipboard bridge.

Host interactions (mount, key-down, copy, paste) are published as typed
events; the bridge subscribes handlers to them and publishes outcome events
the host can observe without direct dependencies.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Generic,
    TypeVar,
    TYPE_CHECKING,
)
from weakref import WeakMethod, ref

from .clipboard import ClipboardData
from .grid.model import ROOT_ID

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from typing import DefaultDict

    from .selection.resolver import Selection

logger = logging.getLogger(__name__)

# Type variable for event types
E = TypeVar("E", bound="Event")

# Handler type: a callable that takes an event and returns None
Handler = Callable[[E], None]


@dataclass(slots=True)
class Event:
    """Base class for all events published on the bus.

    Example::

        @dataclass(slots=True)
        class SelectionCopied(Event):
            text_length: int
    """

    pass


# High-frequency event types that should not log each publish
_QUIET_EVENT_TYPES: set[type] = set()


# =============================================================================
# Interaction Events
# =============================================================================


@dataclass(slots=True)
class InteractionEvent(Event):
    """An interaction dispatched by the host on one of the grid containers.

    Attributes:
        target: Identifier of the container the interaction was dispatched on.
        default_prevented: Set once a handler suppresses the default behavior.
    """

    target: str = ROOT_ID
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(slots=True)
class TerminalMounted(InteractionEvent):
    """Emitted once when the root container finishes mounting."""


@dataclass(slots=True)
class KeyPressed(InteractionEvent):
    """Emitted for every key-down inside the root or console container.

    Attributes:
        key: The key name as reported by the host (e.g. ``"Tab"``).
    """

    key: str = ""


_QUIET_EVENT_TYPES.add(KeyPressed)


@dataclass(slots=True)
class CopyRequested(InteractionEvent):
    """Emitted when the user copies inside the root container.

    Attributes:
        clipboard_data: Payload the handler writes the serialized text into.
        selection: Explicit selection; when omitted the context's selection
            provider supplies the live selection.
    """

    clipboard_data: ClipboardData = field(default_factory=ClipboardData)
    selection: Selection | None = None


@dataclass(slots=True)
class PasteRequested(InteractionEvent):
    """Emitted when the user pastes inside the root container.

    Attributes:
        clipboard_data: Payload holding the pasted content.
    """

    clipboard_data: ClipboardData = field(default_factory=ClipboardData)


# =============================================================================
# Outcome Events
# =============================================================================


@dataclass(slots=True)
class SelectionCopied(Event):
    """Emitted after a selection was written to a copy payload.

    Attributes:
        start: ``(row, col)`` of the first selected cell.
        end: ``(row, col)`` of the last selected cell.
        text_length: Number of characters written.
    """

    start: tuple[int, int]
    end: tuple[int, int]
    text_length: int


@dataclass(slots=True)
class CopyFailed(Event):
    """Emitted when a copy was aborted without writing a payload.

    Attributes:
        error_code: Machine-readable reason.
        message: Human-readable description.
    """

    error_code: str
    message: str


@dataclass(slots=True)
class PasteRelayed(Event):
    """Emitted after pasted text was handed to the relay element.

    Attributes:
        relay_id: Identifier of the relay element.
        text_length: Number of characters relayed.
    """

    relay_id: str
    text_length: int


@dataclass(slots=True)
class ScrollScheduled(Event):
    """Emitted when the post-mount scroll has been scheduled.

    Attributes:
        delay_ms: Delay before the scroll is applied.
        x: Horizontal scroll offset.
        y: Vertical scroll offset.
    """

    delay_ms: int
    x: int
    y: int


class EventBus(Generic[E]):
    """A typed publish-subscribe event bus for decoupled communication.

    Handlers are stored as weak references where possible to prevent memory
    leaks.

    Example::

        bus = EventBus()

        def on_copied(event: SelectionCopied) -> None:
            print(f"Copied {event.text_length} characters")

        bus.subscribe(SelectionCopied, on_copied)
        bus.publish(SelectionCopied(start=(1, 1), end=(1, 3), text_length=4))
        bus.unsubscribe(SelectionCopied, on_copied)

    Thread Safety:
        This implementation is NOT thread-safe. All operations should be
        performed from the thread that dispatches host interactions.

    Attributes:
        _handlers: Mapping from event type to list of handler references.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        """Initialize an empty event bus."""
        self._handlers: DefaultDict[type[Event], list[_HandlerRef]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Register a handler to receive events of the specified type.

        Handlers are stored as weak references where possible (for bound
        methods), allowing automatic cleanup when the handler's owner is
        garbage collected.

        Args:
            event_type: The class of events to subscribe to.
            handler: A callable that will be invoked with the event.

        Note:
            Subscribing the same handler multiple times will result in
            multiple invocations when an event is published.
        """
        handler_ref = _HandlerRef.create(handler)
        self._handlers[event_type].append(handler_ref)
        logger.debug(
            "Subscribed handler %s to event type %s",
            _handler_name(handler),
            event_type.__name__,
        )

    def unsubscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Remove a previously registered handler.

        If the handler was registered multiple times, only the first
        occurrence is removed. Safe to call for handlers that were never
        subscribed.
        """
        handlers = self._handlers.get(event_type)
        if handlers is None:
            return

        for i, handler_ref in enumerate(handlers):
            if handler_ref.matches(handler):
                handlers.pop(i)
                logger.debug(
                    "Unsubscribed handler %s from event type %s",
                    _handler_name(handler),
                    event_type.__name__,
                )
                return

    def publish(self, event: E) -> E:
        """Broadcast an event to all registered handlers.

        Handlers are invoked synchronously in the order they were
        registered. If a handler raises an exception, it is logged
        and remaining handlers continue to be invoked.

        Args:
            event: The event instance to publish.

        Returns:
            The published event, so callers can inspect ``default_prevented``
            or payloads written by handlers.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type)
        is_quiet = event_type in _QUIET_EVENT_TYPES

        if handlers is None:
            if not is_quiet:
                logger.debug("No handlers for event type %s", event_type.__name__)
            return event

        if not is_quiet:
            logger.debug(
                "Publishing %s to %d handler(s)",
                event_type.__name__,
                len(handlers),
            )

        dead_indices: list[int] = []

        for i, handler_ref in enumerate(list(handlers)):
            handler = handler_ref.resolve()
            if handler is None:
                dead_indices.append(i)
                continue

            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s raised exception for event %s",
                    _handler_name(handler),
                    event_type.__name__,
                )

        for i in reversed(dead_indices):
            if i < len(handlers) and handlers[i].resolve() is None:
                handlers.pop(i)
        return event

    def clear(self) -> None:
        """Remove all registered handlers."""
        self._handlers.clear()
        logger.debug("Cleared all event handlers")

    def handler_count(self, event_type: type[E] | None = None) -> int:
        """Return the number of registered handlers.

        Args:
            event_type: If provided, return count for that event type only.
                       If None, return total count across all event types.
        """
        if event_type is not None:
            return len(self._handlers.get(event_type, []))
        return sum(len(handlers) for handlers in self._handlers.values())


class _HandlerRef:
    """Wrapper for handler references supporting both weak and strong refs.

    Bound methods are held through ``WeakMethod``; plain functions and
    lambdas are held strongly.
    """

    __slots__ = ("_ref", "_is_weak")

    def __init__(self, handler_ref: WeakMethod | ref | Handler, is_weak: bool) -> None:
        self._ref = handler_ref
        self._is_weak = is_weak

    @classmethod
    def create(cls, handler: Handler) -> _HandlerRef:
        if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
            try:
                return cls(WeakMethod(handler), is_weak=True)
            except TypeError:
                # Some callables can't be weakly referenced
                pass

        return cls(handler, is_weak=False)

    def resolve(self) -> Handler | None:
        """Return the handler, or None if it was garbage collected."""
        if not self._is_weak:
            return self._ref  # type: ignore[return-value]
        return self._ref()  # type: ignore[operator]

    def matches(self, handler: Handler) -> bool:
        resolved = self.resolve()
        if resolved is None:
            return False
        return resolved == handler


def _handler_name(handler: Any) -> str:
    """Get a human-readable name for a handler for logging purposes."""
    if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
        cls_name = type(handler.__self__).__name__
        return f"{cls_name}.{handler.__func__.__name__}"
    if hasattr(handler, "__name__"):
        return handler.__name__
    return repr(handler)


__all__ = [
    # Core infrastructure
    "Event",
    "EventBus",
    "Handler",
    # Interaction events
    "InteractionEvent",
    "TerminalMounted",
    "KeyPressed",
    "CopyRequested",
    "PasteRequested",
    # Outcome events
    "SelectionCopied",
    "CopyFailed",
    "PasteRelayed",
    "ScrollScheduled",
]
