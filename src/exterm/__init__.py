"""Clipboard bridge for terminal grids rendered one element per character."""

from .bridge import ClipboardBridge, TerminalContext
from .clipboard import TEXT_PLAIN, ClipboardData, ClipboardPort, InMemoryClipboard
from .core import CellRange, Coordinate, cell_id, normalize_range, parse_cell_id
from .errors import ClipboardAccessDenied, ExtermError, IdentifierMissing
from .events import EventBus
from .grid import CellGrid
from .relay import PasteRelay
from .selection import Selection, SelectionSerializer, extract_line
from .settings import Settings, SettingsStore

__all__ = [
    "TEXT_PLAIN",
    "CellGrid",
    "CellRange",
    "ClipboardAccessDenied",
    "ClipboardBridge",
    "ClipboardData",
    "ClipboardPort",
    "Coordinate",
    "EventBus",
    "ExtermError",
    "IdentifierMissing",
    "InMemoryClipboard",
    "PasteRelay",
    "Selection",
    "SelectionSerializer",
    "Settings",
    "SettingsStore",
    "TerminalContext",
    "cell_id",
    "extract_line",
    "normalize_range",
    "parse_cell_id",
]
