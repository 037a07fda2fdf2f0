"""Shared pytest fixtures."""

from __future__ import annotations

import logging
import os
from typing import Callable

import pytest

from exterm.grid.model import CellGrid
from exterm.utils import logging as exterm_logging

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def _render(rows: dict[int, list[str]]) -> CellGrid:
    grid = CellGrid()
    for row, cells in rows.items():
        grid.render_row(row, "x" * len(cells))
        for col, char in enumerate(cells, start=1):
            grid.set_cell(row, col, char)
    return grid


@pytest.fixture
def render_cells() -> Callable[[dict[int, list[str]]], CellGrid]:
    """Render rows cell by cell; ``""`` marks a blank cell."""

    return _render


@pytest.fixture
def sample_grid() -> CellGrid:
    return CellGrid.from_lines(
        [
            "hello world",
            "second line   ",
            "x",
        ]
    )


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by ``setup_logging``."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("exterm.events").setLevel(logging.NOTSET)
    exterm_logging._CONFIGURED = False
    exterm_logging._LOG_PATH = None
