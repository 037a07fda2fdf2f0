"""Resolve selection endpoints to grid coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.identifiers import parse_cell_id
from ..core.ranges import Coordinate
from ..errors import IdentifierMissing
from ..grid.model import Element, TextFragment


@dataclass(slots=True, frozen=True)
class Selection:
    """Anchor and focus references of the current text selection.

    Either endpoint may be a :class:`TextFragment` or the cell element itself.
    """

    anchor: Any = None
    focus: Any = None

    @property
    def is_empty(self) -> bool:
        return self.anchor is None or self.focus is None


def owning_element(node: Any) -> Element | None:
    """Return the element that carries the identifier for ``node``."""

    if isinstance(node, TextFragment):
        return node.parent
    if isinstance(node, Element):
        return node
    return None


def resolve_coordinate(node: Any) -> Coordinate:
    """Return the coordinate of the cell referenced by ``node``.

    Cells that carry a structured coordinate are used directly; anything else
    falls back to parsing the element identifier.

    Raises:
        IdentifierMissing: ``node`` is not part of a rendered cell.
    """

    element = owning_element(node)
    if element is None:
        raise IdentifierMissing(message="Selection endpoint is not attached to a grid element")
    if element.coordinate is not None:
        return element.coordinate
    return parse_cell_id(element.id)


__all__ = ["Selection", "owning_element", "resolve_coordinate"]
