"""Core value types shared by the grid, selection, and bridge layers."""

from .identifiers import CELL_ID_PREFIX, cell_id, parse_cell_id
from .ranges import CellRange, Coordinate, normalize_range

__all__ = [
    "CELL_ID_PREFIX",
    "CellRange",
    "Coordinate",
    "cell_id",
    "normalize_range",
    "parse_cell_id",
]
