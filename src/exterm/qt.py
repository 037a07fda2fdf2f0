"""PySide6 adapters connecting the bridge to a Qt host.

``QtClipboard`` exposes the system clipboard as a plain-text
:class:`~exterm.clipboard.ClipboardPort`, ``QtScheduler`` runs deferred work on
the Qt event loop, and ``TerminalKeyFilter`` turns key presses on a terminal
widget into bridge interactions.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QEvent, QMimeData, QObject, QTimer
from PySide6.QtGui import QGuiApplication, QKeySequence

from .bridge import ClipboardBridge
from .clipboard import TEXT_PLAIN, ClipboardData, ClipboardPort
from .errors import ClipboardAccessDenied
from .events import EventBus, KeyPressed

LOGGER = logging.getLogger(__name__)


def mime_data_from_payload(payload: ClipboardData) -> QMimeData:
    """Return a ``QMimeData`` carrying only the payload's plain text."""

    mime = QMimeData()
    if payload.has_data(TEXT_PLAIN):
        mime.setText(payload.get_data(TEXT_PLAIN))
    return mime


def payload_from_mime_data(mime: QMimeData | None) -> ClipboardData:
    """Return the plain-text part of ``mime``; rich formats are ignored."""

    payload = ClipboardData()
    if mime is not None and mime.hasText():
        payload.set_data(TEXT_PLAIN, mime.text())
    return payload


class QtClipboard:
    """Plain-text clipboard port backed by ``QGuiApplication.clipboard()``."""

    name = "qt"

    def _clipboard(self, operation: str) -> Any:
        if QGuiApplication.instance() is None:
            raise ClipboardAccessDenied(
                message="No Qt application is running", operation=operation
            )
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            raise ClipboardAccessDenied(operation=operation)
        return clipboard

    def read_text(self) -> str:
        clipboard = self._clipboard("read")
        return payload_from_mime_data(clipboard.mimeData()).get_data(TEXT_PLAIN)

    def write_text(self, text: str) -> None:
        clipboard = self._clipboard("write")
        clipboard.setMimeData(mime_data_from_payload(ClipboardData.from_text(text)))
        LOGGER.debug("Wrote %d character(s) to the Qt clipboard", len(text))


class QtScheduler:
    """Scheduler running callbacks through ``QTimer.singleShot``."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(max(0, int(delay_ms)), callback)


class TerminalKeyFilter(QObject):
    """Event filter routing a terminal widget's key presses to the bridge.

    Copy and paste shortcuts go through the system clipboard; every other key
    press is published as :class:`~exterm.events.KeyPressed` and swallowed
    when a handler prevents its default.
    """

    def __init__(
        self,
        bridge: ClipboardBridge,
        bus: EventBus,
        *,
        clipboard: ClipboardPort | None = None,
        target: str | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._bridge = bridge
        self._bus = bus
        self._clipboard = clipboard or QtClipboard()
        self._target = target or bridge.context.settings.console_id

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802 - Qt API
        if event.type() != QEvent.Type.KeyPress:
            return False
        try:
            if event.matches(QKeySequence.StandardKey.Copy):
                self._bridge.copy_to_clipboard(self._clipboard)
                return True
            if event.matches(QKeySequence.StandardKey.Paste):
                self._bridge.paste_from_clipboard(self._clipboard)
                return True
        except ClipboardAccessDenied as exc:
            # The shortcut stays consumed; native copy/paste must not run instead.
            LOGGER.warning("Clipboard shortcut dropped: %s", exc)
            return True
        published = self._bus.publish(KeyPressed(target=self._target, key=event.text()))
        return published.default_prevented


__all__ = [
    "QtClipboard",
    "QtScheduler",
    "TerminalKeyFilter",
    "mime_data_from_payload",
    "payload_from_mime_data",
]
