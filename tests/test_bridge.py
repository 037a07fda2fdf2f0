"""Tests for :mod:`exterm.bridge`."""

from __future__ import annotations

import logging

import pytest

from exterm.bridge import ClipboardBridge, TerminalContext
from exterm.clipboard import TEXT_PLAIN, ClipboardData, InMemoryClipboard
from exterm.errors import ClipboardAccessDenied
from exterm.events import (
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
from exterm.grid.model import CONSOLE_ID, PASTE_TARGET_ID, ROOT_ID, CellGrid
from exterm.scheduling import ManualScheduler
from exterm.selection.resolver import Selection
from exterm.settings import Settings


@pytest.fixture
def grid() -> CellGrid:
    grid = CellGrid()
    grid.render_row(1, "ls -la", width=12)
    grid.render_row(2, "total 0", width=12)
    grid.render_row(5, "foo   !", width=12)
    return grid


@pytest.fixture
def selection_holder(grid: CellGrid) -> dict[str, Selection]:
    return {"current": Selection(anchor=grid.cell(1, 1), focus=grid.cell(2, 12))}


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def bus() -> EventBus[Event]:
    return EventBus()


@pytest.fixture
def bridge(grid, selection_holder, scheduler, bus) -> ClipboardBridge:
    context = TerminalContext.create(
        grid=grid,
        selection_provider=lambda: selection_holder["current"],
        scheduler=scheduler,
    )
    bridge = ClipboardBridge(context)
    bridge.attach(bus)
    return bridge


def _collect(bus: EventBus[Event], event_type: type[Event]) -> list:
    received: list = []
    bus.subscribe(event_type, received.append)
    return received


class TestCopy:
    def test_copy_writes_plain_text_and_suppresses_default(self, bridge, bus) -> None:
        copied = _collect(bus, SelectionCopied)

        event = bus.publish(CopyRequested())

        assert event.default_prevented
        assert event.clipboard_data.types == (TEXT_PLAIN,)
        assert event.clipboard_data.get_data(TEXT_PLAIN) == "ls -la\ntotal 0\n"
        assert copied == [SelectionCopied(start=(1, 1), end=(2, 12), text_length=15)]

    def test_backward_selection_copies_same_text(self, bridge, bus, grid, selection_holder) -> None:
        selection_holder["current"] = Selection(anchor=grid.cell(5, 7), focus=grid.cell(5, 1))

        event = bus.publish(CopyRequested())

        assert event.clipboard_data.get_data(TEXT_PLAIN) == "foo   !\n"

    def test_explicit_selection_overrides_provider(self, bridge, bus, grid) -> None:
        selection = Selection(anchor=grid.cell(2, 1).children[0], focus=grid.cell(2, 5))

        event = bus.publish(CopyRequested(selection=selection))

        assert event.clipboard_data.get_data(TEXT_PLAIN) == "total\n"

    def test_missing_identifier_aborts_without_payload(
        self, bridge, bus, grid, selection_holder, caplog
    ) -> None:
        failures = _collect(bus, CopyFailed)
        copied = _collect(bus, SelectionCopied)
        selection_holder["current"] = Selection(anchor=grid.console, focus=grid.cell(1, 1))

        with caplog.at_level(logging.WARNING, logger="exterm.bridge"):
            event = bus.publish(CopyRequested())

        assert event.default_prevented
        assert not event.clipboard_data.has_data(TEXT_PLAIN)
        assert copied == []
        assert [failure.error_code for failure in failures] == ["identifier_missing"]
        assert "Copy aborted" in caplog.text

    def test_empty_selection_aborts(self, bridge, bus, selection_holder) -> None:
        selection_holder["current"] = Selection()

        event = bus.publish(CopyRequested())

        assert event.clipboard_data.types == ()

    def test_failure_does_not_affect_next_copy(self, bridge, bus, grid, selection_holder) -> None:
        selection_holder["current"] = Selection()
        bus.publish(CopyRequested())

        selection_holder["current"] = Selection(anchor=grid.cell(1, 1), focus=grid.cell(1, 2))
        event = bus.publish(CopyRequested())

        assert event.clipboard_data.get_data(TEXT_PLAIN) == "ls\n"

    @pytest.mark.parametrize("target", [CONSOLE_ID, PASTE_TARGET_ID, "exterm-row-2", "exterm-cell-1-3"])
    def test_copy_bubbling_from_descendant_is_intercepted(self, bridge, bus, target) -> None:
        event = bus.publish(CopyRequested(target=target))

        assert event.default_prevented
        assert event.clipboard_data.get_data(TEXT_PLAIN) == "ls -la\ntotal 0\n"

    def test_copy_outside_terminal_is_ignored(self, bridge, bus) -> None:
        event = bus.publish(CopyRequested(target="sidebar"))

        assert not event.default_prevented
        assert event.clipboard_data.types == ()

    def test_copy_to_clipboard_writes_port(self, bridge) -> None:
        clipboard = InMemoryClipboard("previous")

        text = bridge.copy_to_clipboard(clipboard)

        assert text == "ls -la\ntotal 0\n"
        assert clipboard.read_text() == text

    def test_aborted_copy_leaves_port_untouched(self, bridge, selection_holder) -> None:
        clipboard = InMemoryClipboard("previous")
        selection_holder["current"] = Selection()

        assert bridge.copy_to_clipboard(clipboard) is None
        assert clipboard.read_text() == "previous"

    def test_denied_clipboard_write_propagates(self, bridge) -> None:
        with pytest.raises(ClipboardAccessDenied):
            bridge.copy_to_clipboard(InMemoryClipboard(deny_access=True))


class TestPaste:
    def test_paste_relays_exact_text_without_touching_grid(self, bridge, bus, grid) -> None:
        relay = bridge.context.relay
        seen_by_host: list[str] = []
        relay.add_listener(seen_by_host.append)
        relayed = _collect(bus, PasteRelayed)
        before = [grid.cell_text(1, col) for col in range(1, 13)]

        event = bus.publish(PasteRequested(clipboard_data=ClipboardData.from_text("hello\nworld")))

        assert event.default_prevented
        assert relay.value == "hello\nworld"
        assert relay.element.get_attribute("phx-value-paste") == "hello\nworld"
        assert seen_by_host == ["hello\nworld"]
        assert [grid.cell_text(1, col) for col in range(1, 13)] == before
        assert grid.row_numbers() == [1, 2, 5]
        assert relayed == [PasteRelayed(relay_id=PASTE_TARGET_ID, text_length=11)]

    def test_paste_ignores_rich_payloads(self, bridge, bus) -> None:
        payload = ClipboardData({"text/html": "<b>bold</b>"})

        bus.publish(PasteRequested(clipboard_data=payload))

        assert bridge.context.relay.value == ""

    def test_paste_from_clipboard_reads_port(self, bridge) -> None:
        seen: list[str] = []
        bridge.context.relay.add_listener(seen.append)

        text = bridge.paste_from_clipboard(InMemoryClipboard("echo hi\n"))

        assert text == "echo hi\n"
        assert seen == ["echo hi\n"]

    def test_denied_clipboard_read_relays_nothing(self, bridge) -> None:
        seen: list[str] = []
        bridge.context.relay.add_listener(seen.append)

        with pytest.raises(ClipboardAccessDenied):
            bridge.paste_from_clipboard(InMemoryClipboard(deny_access=True))

        assert seen == []

    def test_paste_bubbling_from_cell_is_relayed(self, bridge, bus) -> None:
        payload = ClipboardData.from_text("pwd\n")

        event = bus.publish(PasteRequested(target="exterm-cell-5-1", clipboard_data=payload))

        assert event.default_prevented
        assert bridge.context.relay.value == "pwd\n"

    def test_paste_outside_terminal_is_ignored(self, bridge, bus) -> None:
        payload = ClipboardData.from_text("pwd\n")

        event = bus.publish(PasteRequested(target="sidebar", clipboard_data=payload))

        assert not event.default_prevented
        assert bridge.context.relay.value is None


class TestKeysAndMount:
    @pytest.mark.parametrize(
        "target", [ROOT_ID, CONSOLE_ID, PASTE_TARGET_ID, "exterm-row-5", "exterm-cell-1-2"]
    )
    def test_keys_inside_terminal_are_always_suppressed(self, bridge, bus, target) -> None:
        for key in ("Tab", "a", "Backspace", "Enter"):
            assert bus.publish(KeyPressed(target=target, key=key)).default_prevented

    def test_keys_outside_terminal_are_left_alone(self, bridge, bus, grid) -> None:
        detached_row = grid.render_row(9, "gone")
        grid.clear_row(9)

        assert not bus.publish(KeyPressed(target="sidebar", key="a")).default_prevented
        assert not bus.publish(KeyPressed(target=detached_row.id, key="a")).default_prevented
        assert not bus.publish(KeyPressed(target="exterm-cell-9-1", key="a")).default_prevented

    def test_mount_schedules_scroll(self, bridge, bus, scheduler) -> None:
        scheduled = _collect(bus, ScrollScheduled)
        root = bridge.context.root

        bus.publish(TerminalMounted())

        assert root.scroll_position == (0, 0)
        assert [delay for delay, _ in scheduler.pending] == [100]
        assert scheduled == [ScrollScheduled(delay_ms=100, x=0, y=30)]

        assert scheduler.run_pending() == 1
        assert root.scroll_position == (0, 30)

    def test_mount_uses_configured_scroll(self, grid, bus) -> None:
        scheduler = ManualScheduler()
        settings = Settings(mount_scroll_delay_ms=5, scroll_x=2, scroll_y=7)
        bridge = ClipboardBridge(TerminalContext.create(grid=grid, settings=settings, scheduler=scheduler))
        bridge.attach(bus)

        bus.publish(TerminalMounted())
        scheduler.run_pending()

        assert grid.root.scroll_position == (2, 7)


class TestAttachment:
    def test_detach_unsubscribes_handlers(self, bridge, bus) -> None:
        assert bridge.attached

        bridge.detach()

        assert not bridge.attached
        assert bus.handler_count() == 0
        assert not bus.publish(KeyPressed(key="a")).default_prevented

    def test_reattach_moves_to_new_bus(self, bridge, bus) -> None:
        other: EventBus[Event] = EventBus()

        bridge.attach(other)

        assert bus.handler_count() == 0
        assert other.handler_count() == 4

    def test_unattached_bridge_still_copies(self, grid) -> None:
        selection = Selection(anchor=grid.cell(1, 1), focus=grid.cell(1, 6))
        bridge = ClipboardBridge(TerminalContext.create(grid=grid, selection_provider=lambda: selection))
        clipboard = InMemoryClipboard()

        assert bridge.copy_to_clipboard(clipboard) == "ls -la\n"
