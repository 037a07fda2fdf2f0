"""Selection resolution and text serialization."""

from .resolver import Selection, owning_element, resolve_coordinate
from .serializer import CellLookup, SelectionSerializer, extract_line, serialize_range

__all__ = [
    "CellLookup",
    "Selection",
    "SelectionSerializer",
    "extract_line",
    "owning_element",
    "resolve_coordinate",
    "serialize_range",
]
