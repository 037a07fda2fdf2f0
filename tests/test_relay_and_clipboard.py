"""Tests for the paste relay and clipboard payloads."""

from __future__ import annotations

import pytest

from exterm.clipboard import TEXT_PLAIN, ClipboardData, InMemoryClipboard
from exterm.errors import ClipboardAccessDenied
from exterm.grid.model import Element
from exterm.relay import PASTE_ATTRIBUTE, PasteRelay


def test_relay_carries_value_before_activation() -> None:
    element = Element(id="exterm-paste-target")
    relay = PasteRelay(element)
    observed: list[tuple[str | None, str]] = []
    relay.add_listener(lambda value: observed.append((element.get_attribute(PASTE_ATTRIBUTE), value)))

    relay.deliver("hello\nworld")

    assert observed == [("hello\nworld", "hello\nworld")]


def test_relay_activation_reuses_current_value() -> None:
    relay = PasteRelay(Element(id="target"), attribute="data-paste")
    seen: list[str] = []
    relay.add_listener(seen.append)
    relay.element.set_attribute("data-paste", "manual")

    relay.activate()

    assert seen == ["manual"]
    assert relay.value == "manual"


def test_relay_remove_listener() -> None:
    relay = PasteRelay(Element(id="target"))
    seen: list[str] = []
    relay.add_listener(seen.append)
    relay.remove_listener(seen.append)
    relay.remove_listener(seen.append)

    relay.deliver("x")

    assert seen == []


def test_clipboard_data_defaults_to_empty_text() -> None:
    payload = ClipboardData()

    assert payload.get_data(TEXT_PLAIN) == ""
    assert not payload.has_data(TEXT_PLAIN)

    payload.set_data(TEXT_PLAIN, "abc")
    assert payload.types == (TEXT_PLAIN,)
    assert "3" in repr(payload)

    payload.clear()
    assert payload.types == ()


def test_in_memory_clipboard_roundtrip() -> None:
    clipboard = InMemoryClipboard()

    clipboard.write_text("copied")

    assert clipboard.read_text() == "copied"


def test_in_memory_clipboard_denial() -> None:
    clipboard = InMemoryClipboard("kept", deny_access=True)

    with pytest.raises(ClipboardAccessDenied) as excinfo:
        clipboard.read_text()
    assert excinfo.value.to_dict()["details"] == {"operation": "read"}

    with pytest.raises(ClipboardAccessDenied):
        clipboard.write_text("new")

    clipboard.deny_access = False
    assert clipboard.read_text() == "kept"
