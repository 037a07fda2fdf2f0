"""Helpers for the ``exterm-cell-{row}-{col}`` identifier convention."""

from __future__ import annotations

from ..errors import IdentifierMissing
from .ranges import Coordinate

CELL_ID_PREFIX = "exterm-cell"
_MIN_SEGMENTS = 4


def cell_id(row: int, col: int, *, prefix: str = CELL_ID_PREFIX) -> str:
    """Return the identifier of the cell at ``(row, col)``."""

    return f"{prefix}-{int(row)}-{int(col)}"


def parse_cell_id(identifier: str | None) -> Coordinate:
    """Parse ``identifier`` into a :class:`Coordinate`.

    Only the last two dash-delimited segments are significant, so any prefix
    with at least two segments is accepted.

    Raises:
        IdentifierMissing: The identifier is absent, too short, or its row and
            column segments are not positive decimal integers.
    """

    if not identifier:
        raise IdentifierMissing(message="Selection endpoint has no cell identifier")
    segments = identifier.split("-")
    if len(segments) < _MIN_SEGMENTS:
        raise IdentifierMissing(
            message=f"Cell identifier {identifier!r} has too few segments",
            identifier=identifier,
        )
    row_text, col_text = segments[-2], segments[-1]
    if not (row_text.isdecimal() and col_text.isdecimal()):
        raise IdentifierMissing(
            message=f"Cell identifier {identifier!r} does not end in a row and column",
            identifier=identifier,
        )
    try:
        return Coordinate(int(row_text), int(col_text))
    except ValueError as exc:
        raise IdentifierMissing(
            message=f"Cell identifier {identifier!r} is out of range",
            identifier=identifier,
        ) from exc


__all__ = ["CELL_ID_PREFIX", "cell_id", "parse_cell_id"]
