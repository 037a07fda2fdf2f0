"""Clipboard payloads and clipboard ports.

Copy and paste interactions carry a :class:`ClipboardData` payload keyed by
mime type. The bridge only ever produces and consumes ``text/plain``.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .errors import ClipboardAccessDenied

LOGGER = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain"


class ClipboardData:
    """Mime-keyed payload attached to a copy or paste interaction."""

    __slots__ = ("_items",)

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    @classmethod
    def from_text(cls, text: str) -> ClipboardData:
        return cls({TEXT_PLAIN: text})

    def set_data(self, mime_type: str, data: str) -> None:
        self._items[mime_type] = data

    def get_data(self, mime_type: str) -> str:
        """Return the payload for ``mime_type`` or ``""`` when absent."""
        return self._items.get(mime_type, "")

    def has_data(self, mime_type: str) -> bool:
        return mime_type in self._items

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __repr__(self) -> str:
        sizes = {mime: len(data) for mime, data in self._items.items()}
        return f"ClipboardData({sizes!r})"


class ClipboardPort(Protocol):
    """System clipboard access used to feed and drain interaction payloads."""

    def read_text(self) -> str:
        ...

    def write_text(self, text: str) -> None:
        ...


class InMemoryClipboard:
    """Process-local clipboard for headless hosts.

    ``deny_access`` simulates a platform permission failure.
    """

    name = "memory"

    def __init__(self, text: str = "", *, deny_access: bool = False) -> None:
        self._text = text
        self.deny_access = deny_access

    def read_text(self) -> str:
        if self.deny_access:
            raise ClipboardAccessDenied(operation="read")
        return self._text

    def write_text(self, text: str) -> None:
        if self.deny_access:
            raise ClipboardAccessDenied(operation="write")
        self._text = text
        LOGGER.debug("Wrote %d character(s) to in-memory clipboard", len(text))


__all__ = [
    "TEXT_PLAIN",
    "ClipboardData",
    "ClipboardPort",
    "InMemoryClipboard",
]
