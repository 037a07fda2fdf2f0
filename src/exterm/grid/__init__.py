"""Rendered grid model addressed by cell identifiers."""

from .model import CONSOLE_ID, PASTE_TARGET_ID, ROOT_ID, CellGrid, Element, Node, TextFragment

__all__ = [
    "CONSOLE_ID",
    "PASTE_TARGET_ID",
    "ROOT_ID",
    "CellGrid",
    "Element",
    "Node",
    "TextFragment",
]
