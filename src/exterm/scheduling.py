"""Deferred callbacks for fire-and-forget work such as the post-mount scroll."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol

LOGGER = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Runs ``callback`` once after ``delay_ms`` milliseconds."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        ...


@dataclass(slots=True)
class ManualScheduler:
    """Scheduler for headless hosts that advance time explicitly."""

    pending: list[tuple[int, Callable[[], None]]] = field(default_factory=list)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.pending.append((max(0, int(delay_ms)), callback))

    def run_pending(self) -> int:
        """Run every queued callback in delay order and return how many ran."""

        queued = sorted(self.pending, key=lambda item: item[0])
        self.pending.clear()
        for _delay, callback in queued:
            callback()
        LOGGER.debug("Ran %d scheduled callback(s)", len(queued))
        return len(queued)


__all__ = ["ManualScheduler", "Scheduler"]
