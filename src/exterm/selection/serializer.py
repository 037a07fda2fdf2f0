"""Reconstruct plain text from a selection over the rendered grid.

Each character occupies its own element, so concatenating every cell would
carry the blank padding of every row. The extractor instead buffers runs of
blank cells and only emits them when more content follows on the same row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from ..core.identifiers import CELL_ID_PREFIX, cell_id
from ..core.ranges import CellRange, Coordinate, normalize_range
from .resolver import Selection, resolve_coordinate

LOGGER = logging.getLogger(__name__)


class CellLookup(Protocol):
    """Anything that can return a rendered element by identifier."""

    def get_element_by_id(self, identifier: str) -> Any | None:
        ...


def extract_line(
    grid: CellLookup,
    row: int,
    cell_range: CellRange,
    *,
    prefix: str = CELL_ID_PREFIX,
) -> str:
    """Return the text of ``row`` inside ``cell_range`` with a trailing newline.

    Scanning stops at the first column without a rendered cell, or after the
    range's last cell when ``row`` is the final row.
    """

    col = cell_range.first_column(row)
    line: list[str] = []
    buffered_spaces = 0

    while True:
        element = grid.get_element_by_id(cell_id(row, col, prefix=prefix))
        if element is None:
            break

        content = element.text_content.strip()
        if content:
            line.append(" " * buffered_spaces)
            line.append(content)
            buffered_spaces = 0
        else:
            buffered_spaces += 1

        if cell_range.is_last_cell(row, col):
            break
        col += 1

    return "".join(line) + "\n"


def serialize_range(grid: CellLookup, cell_range: CellRange, *, prefix: str = CELL_ID_PREFIX) -> str:
    """Join the extracted lines of every row in ``cell_range``."""

    return "".join(extract_line(grid, row, cell_range, prefix=prefix) for row in cell_range.rows)


@dataclass(slots=True)
class SelectionSerializer:
    """Turn the anchor/focus of a selection into newline-framed plain text."""

    grid: CellLookup
    prefix: str = CELL_ID_PREFIX

    def resolve(self, anchor: Any, focus: Any) -> CellRange:
        """Resolve and normalize both endpoints.

        Raises:
            IdentifierMissing: Either endpoint lacks a cell identifier.
        """

        start, end = normalize_range(resolve_coordinate(anchor), resolve_coordinate(focus))
        return CellRange(start, end)

    def serialize(self, anchor: Any, focus: Any) -> str:
        cell_range = self.resolve(anchor, focus)
        text = self.serialize_range(cell_range)
        LOGGER.debug(
            "Serialized rows %s-%s into %d character(s)",
            cell_range.start.row,
            cell_range.end.row,
            len(text),
        )
        return text

    def serialize_selection(self, selection: Selection) -> str:
        return self.serialize(selection.anchor, selection.focus)

    def serialize_range(self, cell_range: CellRange) -> str:
        return serialize_range(self.grid, cell_range, prefix=self.prefix)

    def serialize_points(self, anchor: Coordinate | Any, focus: Coordinate | Any) -> str:
        """Serialize between two coordinates given in either order."""

        return self.serialize_range(CellRange.from_points(anchor, focus))


__all__ = [
    "CellLookup",
    "SelectionSerializer",
    "extract_line",
    "serialize_range",
]
