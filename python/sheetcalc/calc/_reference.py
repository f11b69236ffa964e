"""Cell coordinates and ranges: label parsing and row-major expansion."""

from __future__ import annotations

import re
from dataclasses import dataclass

from sheetcalc._utils import column_letter
from sheetcalc.calc._errors import MalformedCoordinate, MalformedRange

_ROW_RE = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class CellCoordinate:
    """1-based (row, column) position of one cell. Column 1 is "A"."""

    row: int
    column: int

    def __str__(self) -> str:
        return format_coordinate(self)


@dataclass(frozen=True)
class CellRange:
    """Inclusive rectangular region.

    Bounds are stored as given. A reversed range (start after end on either
    axis) is not an error: it simply expands to no cells.
    """

    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @classmethod
    def from_corners(cls, start: CellCoordinate, end: CellCoordinate) -> CellRange:
        return cls(start.row, start.column, end.row, end.column)

    @property
    def start(self) -> CellCoordinate:
        return CellCoordinate(self.start_row, self.start_col)

    @property
    def end(self) -> CellCoordinate:
        return CellCoordinate(self.end_row, self.end_col)

    @property
    def n_rows(self) -> int:
        return max(0, self.end_row - self.start_row + 1)

    @property
    def n_cols(self) -> int:
        return max(0, self.end_col - self.start_col + 1)

    @property
    def is_empty(self) -> bool:
        return self.n_rows == 0 or self.n_cols == 0

    def __str__(self) -> str:
        return f"{self.start}:{self.end}"


# ---------------------------------------------------------------------------
# Label parsing
# ---------------------------------------------------------------------------


def parse_coordinate(label: str) -> CellCoordinate:
    """Parse a label like ``"B3"`` into ``CellCoordinate(row=3, column=2)``.

    Only single-letter columns (A-Z) are understood. The letter is
    case-insensitive; the remainder must be a positive base-10 integer.
    """
    text = label.strip()
    if len(text) < 2:
        raise MalformedCoordinate(f"Invalid cell label: {label!r}")
    letter, digits = text[0], text[1:]
    if not (letter.isascii() and letter.isalpha()):
        raise MalformedCoordinate(f"Invalid column in cell label: {label!r}")
    if not _ROW_RE.match(digits) or int(digits) < 1:
        raise MalformedCoordinate(f"Invalid row in cell label: {label!r}")
    return CellCoordinate(row=int(digits), column=ord(letter.upper()) - ord("A") + 1)


def format_coordinate(coord: CellCoordinate) -> str:
    """Inverse of :func:`parse_coordinate`: ``(3, 2)`` -> ``"B3"``."""
    return f"{column_letter(coord.column)}{coord.row}"


def parse_range(label: str) -> CellRange:
    """Parse ``"A1:B3"`` into a :class:`CellRange`.

    A label without ``:`` is a single-cell range.
    """
    parts = label.split(":")
    if len(parts) > 2:
        raise MalformedRange(f"Invalid range: {label!r}")
    try:
        start = parse_coordinate(parts[0])
        end = parse_coordinate(parts[-1])
    except MalformedCoordinate as exc:
        raise MalformedRange(f"Invalid range: {label!r}") from exc
    return CellRange.from_corners(start, end)


# ---------------------------------------------------------------------------
# Range expansion
# ---------------------------------------------------------------------------


def expand_range(rng: CellRange) -> list[CellCoordinate]:
    """Expand a range into coordinates, row-major.

    ``A1:B2`` gives A1, B1, A2, B2. Reversed bounds give an empty list.
    """
    return [
        CellCoordinate(r, c)
        for r in range(rng.start_row, rng.end_row + 1)
        for c in range(rng.start_col, rng.end_col + 1)
    ]
