"""In-memory model of the rendered terminal grid.

The host renders terminal output as one element per character cell, each
carrying an ``exterm-cell-{row}-{col}`` identifier. This module keeps those
elements addressable by identifier so the selection serializer can query the
live render state without owning any of it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from ..core.identifiers import CELL_ID_PREFIX, cell_id
from ..core.ranges import Coordinate

LOGGER = logging.getLogger(__name__)

ROOT_ID = "exterm-terminal"
CONSOLE_ID = "exterm-console"
PASTE_TARGET_ID = "exterm-paste-target"


@dataclass(eq=False)
class Element:
    """Addressable node in the rendered grid."""

    id: str = ""
    parent: Element | None = field(default=None, repr=False)
    children: list[Node] = field(default_factory=list, repr=False)
    attributes: dict[str, str] = field(default_factory=dict)
    coordinate: Coordinate | None = None
    scroll_position: tuple[int, int] = (0, 0)

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.children)

    @text_content.setter
    def text_content(self, value: str) -> None:
        for child in self.children:
            child.parent = None
        self.children = [TextFragment(value, parent=self)] if value else []

    def append(self, child: Node) -> Node:
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: Node) -> None:
        self.children.remove(child)
        child.parent = None

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def scroll(self, x: int, y: int) -> None:
        self.scroll_position = (int(x), int(y))

    def iter_elements(self) -> Iterator[Element]:
        """Yield this element and every element below it, depth first."""

        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter_elements()


@dataclass(eq=False)
class TextFragment:
    """Character data owned by an element; never carries an identifier."""

    data: str = ""
    parent: Element | None = field(default=None, repr=False)

    @property
    def text_content(self) -> str:
        return self.data


Node = Element | TextFragment


class CellGrid:
    """Identifier-addressable store of rendered cells.

    The grid mirrors the structure the host renders: a root container holding
    the console region (which holds one row element per line and one cell
    element per column) and the hidden paste target.
    """

    def __init__(self, *, cell_prefix: str = CELL_ID_PREFIX) -> None:
        self._cell_prefix = cell_prefix
        self._index: dict[str, Element] = {}
        self.root = self._register(Element(id=ROOT_ID))
        self.console = self._register(self.root.append(Element(id=CONSOLE_ID)))
        self.paste_target = self._register(self.root.append(Element(id=PASTE_TARGET_ID)))
        self._rows: dict[int, Element] = {}

    @classmethod
    def from_lines(cls, lines: Iterable[str], **kwargs) -> CellGrid:
        """Render ``lines`` into a new grid, one cell per character."""

        grid = cls(**kwargs)
        for row, line in enumerate(lines, start=1):
            grid.render_row(row, line)
        return grid

    @classmethod
    def from_text(cls, text: str, **kwargs) -> CellGrid:
        return cls.from_lines(text.splitlines(), **kwargs)

    def get_element_by_id(self, identifier: str) -> Element | None:
        return self._index.get(identifier)

    def is_within(self, identifier: str, ancestor_id: str) -> bool:
        """Return True when ``identifier`` names ``ancestor_id`` or an element inside it."""

        element = self._index.get(identifier)
        while element is not None:
            if element.id == ancestor_id:
                return True
            element = element.parent
        return False

    def cell(self, row: int, col: int) -> Element | None:
        """Return the cell element at ``(row, col)`` if it is rendered."""

        return self._index.get(cell_id(row, col, prefix=self._cell_prefix))

    def cell_text(self, row: int, col: int) -> str | None:
        element = self.cell(row, col)
        if element is None:
            return None
        return element.text_content

    def render_row(self, row: int, text: str, *, width: int | None = None) -> Element:
        """Replace row ``row`` with one cell per character of ``text``.

        ``width`` pads the row with blank cells, the way a fixed-width terminal
        renders trailing columns.
        """

        self.clear_row(row)
        row_element = Element(id=f"exterm-row-{int(row)}")
        self._insert_row(row, row_element)
        cells = list(text)
        if width is not None and width > len(cells):
            cells.extend(" " * (width - len(cells)))
        for col, char in enumerate(cells, start=1):
            coordinate = Coordinate(row, col)
            element = Element(
                id=cell_id(row, col, prefix=self._cell_prefix),
                coordinate=coordinate,
            )
            element.text_content = char
            self._register(row_element.append(element))
        LOGGER.debug("Rendered row %s with %d cell(s)", row, len(cells))
        return row_element

    def set_cell(self, row: int, col: int, char: str) -> Element:
        """Update the content of an already rendered cell."""

        element = self.cell(row, col)
        if element is None:
            raise KeyError(cell_id(row, col, prefix=self._cell_prefix))
        element.text_content = char
        return element

    def clear_row(self, row: int) -> None:
        row_element = self._rows.pop(int(row), None)
        if row_element is None:
            return
        for element in row_element.iter_elements():
            self._index.pop(element.id, None)
        self.console.remove(row_element)

    def clear(self) -> None:
        for row in list(self._rows):
            self.clear_row(row)

    def row_numbers(self) -> list[int]:
        return sorted(self._rows)

    def row_width(self, row: int) -> int:
        row_element = self._rows.get(int(row))
        if row_element is None:
            return 0
        return len(row_element.children)

    def _insert_row(self, row: int, row_element: Element) -> None:
        self._rows[int(row)] = row_element
        ordered = [self._rows[number] for number in sorted(self._rows)]
        for child in list(self.console.children):
            child.parent = None
        self.console.children = []
        for child in ordered:
            self.console.append(child)
        self._register(row_element)

    def _register(self, element: Element) -> Element:
        if element.id:
            self._index[element.id] = element
        return element


__all__ = [
    "CONSOLE_ID",
    "PASTE_TARGET_ID",
    "ROOT_ID",
    "CellGrid",
    "Element",
    "Node",
    "TextFragment",
]
