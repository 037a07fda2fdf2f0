"""Clipboard bridge between host interactions and the rendered grid.

The bridge replaces the host surface's native copy and paste: copies are
serialized from the grid's cells as plain text, and pastes are forwarded to
the relay element instead of being inserted into the grid. Every handler is
independent of previous interactions; the only long-lived object is the
:class:`TerminalContext` handed to the bridge at construction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from .clipboard import TEXT_PLAIN, ClipboardData, ClipboardPort
from .errors import IdentifierMissing
from .events import (
    CopyFailed,
    CopyRequested,
    Event,
    EventBus,
    KeyPressed,
    PasteRelayed,
    PasteRequested,
    ScrollScheduled,
    SelectionCopied,
    TerminalMounted,
)
from .grid.model import CellGrid, Element
from .relay import PasteRelay
from .scheduling import ManualScheduler, Scheduler
from .selection.resolver import Selection
from .selection.serializer import SelectionSerializer
from .settings import Settings

LOGGER = logging.getLogger(__name__)

SelectionProvider = Callable[[], Selection]
_RequestT = TypeVar("_RequestT", CopyRequested, PasteRequested)


def _no_selection() -> Selection:
    return Selection()


@dataclass(slots=True)
class TerminalContext:
    """Handles shared by every bridge handler.

    Attributes:
        grid: Live rendered grid queried on each copy.
        relay: Handoff point for pasted text.
        selection_provider: Returns the host's current selection.
        scheduler: Runs the post-mount scroll.
        settings: Identifiers and timings.
    """

    grid: CellGrid
    relay: PasteRelay
    selection_provider: SelectionProvider = _no_selection
    scheduler: Scheduler = field(default_factory=ManualScheduler)
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def create(
        cls,
        *,
        grid: CellGrid | None = None,
        settings: Settings | None = None,
        selection_provider: SelectionProvider | None = None,
        scheduler: Scheduler | None = None,
    ) -> TerminalContext:
        """Build a context whose relay wraps the grid's paste target."""

        settings = settings or Settings()
        grid = grid or CellGrid(cell_prefix=settings.cell_prefix)
        target = grid.get_element_by_id(settings.paste_target_id) or grid.paste_target
        return cls(
            grid=grid,
            relay=PasteRelay(target, attribute=settings.paste_attribute),
            selection_provider=selection_provider or _no_selection,
            scheduler=scheduler or ManualScheduler(),
            settings=settings,
        )

    @property
    def root(self) -> Element:
        return self.grid.get_element_by_id(self.settings.root_id) or self.grid.root


class ClipboardBridge:
    """Wire copy, paste, key-down, and mount interactions to the grid."""

    def __init__(self, context: TerminalContext) -> None:
        self.context = context
        self.serializer = SelectionSerializer(context.grid, prefix=context.settings.cell_prefix)
        self._bus: EventBus[Event] | None = None

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------
    def attach(self, bus: EventBus[Event]) -> None:
        if self._bus is not None:
            self.detach()
        bus.subscribe(TerminalMounted, self.on_mounted)
        bus.subscribe(KeyPressed, self.on_key_pressed)
        bus.subscribe(CopyRequested, self.on_copy)
        bus.subscribe(PasteRequested, self.on_paste)
        self._bus = bus

    def detach(self) -> None:
        bus = self._bus
        if bus is None:
            return
        bus.unsubscribe(TerminalMounted, self.on_mounted)
        bus.unsubscribe(KeyPressed, self.on_key_pressed)
        bus.unsubscribe(CopyRequested, self.on_copy)
        bus.unsubscribe(PasteRequested, self.on_paste)
        self._bus = None

    @property
    def attached(self) -> bool:
        return self._bus is not None

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def on_mounted(self, event: TerminalMounted) -> None:
        settings = self.context.settings
        if event.target != settings.root_id:
            return
        root = self.context.root
        x, y = settings.scroll_x, settings.scroll_y
        self.context.scheduler.call_later(settings.mount_scroll_delay_ms, lambda: root.scroll(x, y))
        self._emit(ScrollScheduled(delay_ms=settings.mount_scroll_delay_ms, x=x, y=y))

    def on_key_pressed(self, event: KeyPressed) -> None:
        if self._within_root(event.target):
            event.prevent_default()

    def on_copy(self, event: CopyRequested) -> None:
        if not self._within_root(event.target):
            return
        event.prevent_default()
        selection = event.selection or self.context.selection_provider()
        try:
            cell_range = self.serializer.resolve(selection.anchor, selection.focus)
        except IdentifierMissing as exc:
            LOGGER.warning("Copy aborted: %s", exc)
            self._emit(CopyFailed(error_code=exc.error_code, message=exc.message))
            return
        text = self.serializer.serialize_range(cell_range)
        event.clipboard_data.set_data(TEXT_PLAIN, text)
        LOGGER.debug("Copied %d character(s) from %s", len(text), cell_range.to_dict())
        self._emit(
            SelectionCopied(
                start=cell_range.start.to_tuple(),
                end=cell_range.end.to_tuple(),
                text_length=len(text),
            )
        )

    def on_paste(self, event: PasteRequested) -> None:
        if not self._within_root(event.target):
            return
        event.prevent_default()
        text = event.clipboard_data.get_data(TEXT_PLAIN)
        relay = self.context.relay
        relay.deliver(text)
        LOGGER.debug("Relayed %d pasted character(s) to %s", len(text), relay.element.id)
        self._emit(PasteRelayed(relay_id=relay.element.id, text_length=len(text)))

    # ------------------------------------------------------------------
    # System clipboard helpers
    # ------------------------------------------------------------------
    def copy_to_clipboard(self, port: ClipboardPort, selection: Selection | None = None) -> str | None:
        """Serialize the selection and write it to ``port``.

        Returns the copied text, or ``None`` when the copy was aborted and
        ``port`` was left untouched.
        """

        event = self._dispatch(CopyRequested(target=self.context.settings.root_id, selection=selection))
        if not event.clipboard_data.has_data(TEXT_PLAIN):
            return None
        text = event.clipboard_data.get_data(TEXT_PLAIN)
        port.write_text(text)
        return text

    def paste_from_clipboard(self, port: ClipboardPort) -> str:
        """Read plain text from ``port`` and relay it to the host."""

        text = port.read_text()
        self._dispatch(
            PasteRequested(
                target=self.context.settings.root_id,
                clipboard_data=ClipboardData.from_text(text),
            )
        )
        return text

    def _dispatch(self, event: _RequestT) -> _RequestT:
        if self._bus is not None:
            return self._bus.publish(event)
        if isinstance(event, CopyRequested):
            self.on_copy(event)
        elif isinstance(event, PasteRequested):
            self.on_paste(event)
        return event

    def _within_root(self, target: str) -> bool:
        # Interactions bubble: anything rendered under the root belongs to the terminal.
        return self.context.grid.is_within(target, self.context.root.id)

    def _emit(self, event: Event) -> None:
        if self._bus is not None:
            self._bus.publish(event)


__all__ = ["ClipboardBridge", "SelectionProvider", "TerminalContext"]
