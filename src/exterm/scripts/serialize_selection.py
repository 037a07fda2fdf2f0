"""CLI helper that serializes a selection over text rendered into a grid."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from ..core.ranges import CellRange, Coordinate
from ..errors import IdentifierMissing
from ..grid.model import CellGrid
from ..selection.resolver import Selection
from ..selection.serializer import SelectionSerializer
from ..settings import Settings, SettingsStore
from ..utils.logging import setup_logging

LOGGER = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Render text one cell per character and print the text of a selection."
    )
    parser.add_argument("--anchor", required=True, help="Selection anchor as ROW:COL (1-based).")
    parser.add_argument("--focus", required=True, help="Selection focus as ROW:COL (1-based).")
    parser.add_argument(
        "--file",
        type=Path,
        help="File whose lines are rendered into the grid. Reads stdin when omitted.",
    )
    parser.add_argument(
        "--width",
        type=int,
        help="Pad every row with blank cells up to this many columns.",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        help="Settings JSON to load instead of ~/.exterm/settings.json.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level to stderr and the exterm log file.",
    )
    args = parser.parse_args(argv)

    settings = _load_settings(args.settings_path, debug=args.debug)
    if settings.debug_logging:
        log_path = setup_logging(logging.DEBUG, force=True)
        LOGGER.debug("Debug logging enabled (log file: %s)", log_path)

    try:
        anchor = Coordinate.from_value(args.anchor)
        focus = Coordinate.from_value(args.focus)
    except (TypeError, ValueError) as exc:
        print(f"Invalid coordinate: {exc}", file=sys.stderr)
        return 1

    try:
        text = _load_text(args.file)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read input: {exc}", file=sys.stderr)
        return 1

    grid = _render(text, width=args.width, cell_prefix=settings.cell_prefix)
    serializer = SelectionSerializer(grid, prefix=settings.cell_prefix)
    selection = Selection(anchor=grid.cell(*anchor), focus=grid.cell(*focus))
    try:
        copied = serializer.serialize_selection(selection)
    except IdentifierMissing as exc:
        span = CellRange(anchor, focus)
        print(f"No rendered cell at selection endpoint {span.to_dict()}: {exc}", file=sys.stderr)
        return 1

    LOGGER.debug("Serialized %d character(s) from %s", len(copied), CellRange(anchor, focus).to_dict())
    sys.stdout.write(copied)
    return 0


def _load_settings(path: Path | None, *, debug: bool) -> Settings:
    overrides = {"debug_logging": True} if debug else None
    return SettingsStore(path.expanduser() if path else None).load(overrides=overrides)


def _load_text(path: Path | None) -> str:
    if path:
        return path.read_text(encoding="utf-8")
    return sys.stdin.read()


def _render(text: str, *, width: int | None, cell_prefix: str) -> CellGrid:
    grid = CellGrid(cell_prefix=cell_prefix)
    for row, line in enumerate(text.splitlines(), start=1):
        grid.render_row(row, line, width=width)
    return grid


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
