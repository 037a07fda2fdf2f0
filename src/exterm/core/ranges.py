"""Structured helpers for representing cell coordinates and selection spans."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(slots=True, frozen=True, order=True)
class Coordinate(Sequence[int]):
    """One-based ``(row, col)`` address of a grid cell.

    Ordering is row-major: rows compare first, columns break ties.
    """

    row: int
    col: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "row", self._coerce_index(self.row, "row"))
        object.__setattr__(self, "col", self._coerce_index(self.col, "col"))

    @staticmethod
    def _coerce_index(value: Any, label: str) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Coordinate {label} must be an integer")
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Coordinate {label} must be an integer") from exc
        if number < 1:
            raise ValueError(f"Coordinate {label} must be >= 1, got {number}")
        return number

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.row
        if index == 1:
            return self.col
        raise IndexError("Coordinate index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.row
        yield self.col

    def to_tuple(self) -> tuple[int, int]:
        """Return the coordinate as a ``(row, col)`` tuple."""

        return (self.row, self.col)

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "col": self.col}

    @classmethod
    def from_value(cls, value: Any) -> Coordinate:
        """Coerce ``value`` into a :class:`Coordinate`.

        Accepts coordinates, ``{"row", "col"}`` mappings, two-item sequences,
        and ``"ROW:COL"`` strings.
        """

        if isinstance(value, Coordinate):
            return value
        if isinstance(value, str):
            row, sep, col = value.partition(":")
            if not sep:
                raise ValueError(f"Coordinate strings use ROW:COL, got {value!r}")
            return cls(row.strip(), col.strip())
        if isinstance(value, Mapping):
            if "row" not in value or "col" not in value:
                raise ValueError("Coordinate mappings require row and col keys")
            return cls(value["row"], value["col"])
        if isinstance(value, Sequence) and not isinstance(value, bytes):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("Coordinate sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        raise TypeError("Unsupported Coordinate input")


def normalize_range(anchor: Coordinate, focus: Coordinate) -> tuple[Coordinate, Coordinate]:
    """Order two selection endpoints so the first precedes the second.

    Drag direction decides which endpoint is the anchor; the result does not
    depend on it.
    """

    if (focus.row, focus.col) < (anchor.row, anchor.col):
        return focus, anchor
    return anchor, focus


@dataclass(slots=True, frozen=True)
class CellRange:
    """Inclusive selection span between two cells in row-major order."""

    start: Coordinate
    end: Coordinate

    def __post_init__(self) -> None:
        start, end = normalize_range(
            Coordinate.from_value(self.start), Coordinate.from_value(self.end)
        )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def from_points(cls, anchor: Any, focus: Any) -> CellRange:
        """Build a range from endpoints given in either drag direction."""

        return cls(Coordinate.from_value(anchor), Coordinate.from_value(focus))

    @property
    def rows(self) -> range:
        """Return the row numbers covered by the span (inclusive)."""

        return range(self.start.row, self.end.row + 1)

    @property
    def row_count(self) -> int:
        return self.end.row - self.start.row + 1

    def first_column(self, row: int) -> int:
        """Return the column at which ``row`` starts contributing text."""

        return self.start.col if row == self.start.row else 1

    def is_last_cell(self, row: int, col: int) -> bool:
        return row == self.end.row and col == self.end.col

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


__all__ = ["Coordinate", "CellRange", "normalize_range"]
