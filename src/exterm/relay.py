"""Out-of-band handoff of pasted text to the host."""

from __future__ import annotations

import logging
from typing import Callable

from .grid.model import Element

LOGGER = logging.getLogger(__name__)

PASTE_ATTRIBUTE = "phx-value-paste"

RelayListener = Callable[[str], None]


class PasteRelay:
    """Hidden relay element the host watches for pasted text.

    Delivery is two steps: the text is stored on the element under
    ``attribute`` and the element is then activated, which notifies every
    registered listener with the carried value.
    """

    def __init__(self, element: Element, *, attribute: str = PASTE_ATTRIBUTE) -> None:
        self.element = element
        self.attribute = attribute
        self._listeners: list[RelayListener] = []

    @property
    def value(self) -> str | None:
        """Return the text currently carried by the relay element."""

        return self.element.get_attribute(self.attribute)

    def add_listener(self, listener: RelayListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: RelayListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def deliver(self, text: str) -> None:
        self.element.set_attribute(self.attribute, text)
        self.activate()

    def activate(self) -> None:
        """Notify listeners with the relay's current value."""

        value = self.value or ""
        LOGGER.debug(
            "Activating paste relay %s with %d character(s) for %d listener(s)",
            self.element.id,
            len(value),
            len(self._listeners),
        )
        for listener in list(self._listeners):
            listener(value)


__all__ = ["PASTE_ATTRIBUTE", "PasteRelay", "RelayListener"]
