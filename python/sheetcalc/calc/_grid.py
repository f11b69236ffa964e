"""GridAccessor: coordinate-based reads and writes over a GridProvider."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from sheetcalc.calc._reference import CellCoordinate, CellRange, expand_range

if TYPE_CHECKING:
    from sheetcalc.calc._protocol import GridProvider


def parse_number(text: str) -> float | None:
    """Parse trimmed *text* as a finite float, or return None.

    ``"nan"`` and ``"inf"`` spellings are not numbers here.
    """
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


class GridAccessor:
    """Engine-side view of a host grid.

    Reads, writes and row deletions go straight through to the provider, so
    a write is visible to the very next read. The accessor holds no cache:
    coordinates obtained before a :meth:`delete_row` may point at different
    cells afterwards.
    """

    __slots__ = ("_grid",)

    def __init__(self, grid: GridProvider) -> None:
        self._grid = grid

    @property
    def max_row(self) -> int:
        return self._grid.max_row

    @property
    def max_column(self) -> int:
        return self._grid.max_column

    # ------------------------------------------------------------------
    # Single cells
    # ------------------------------------------------------------------

    def read_text(self, coord: CellCoordinate) -> str:
        return self._grid.read_text(coord.row, coord.column) or ""

    def write_text(self, coord: CellCoordinate, text: str) -> None:
        self._grid.write_text(coord.row, coord.column, text)

    def read_numeric(self, coord: CellCoordinate) -> float:
        """Numeric value of a cell; empty or non-numeric text reads as 0."""
        value = parse_number(self.read_text(coord))
        return 0.0 if value is None else value

    def delete_row(self, row: int) -> None:
        self._grid.delete_row(row)

    # ------------------------------------------------------------------
    # Ranges (row-major)
    # ------------------------------------------------------------------

    def expand(self, rng: CellRange) -> list[CellCoordinate]:
        return expand_range(rng)

    def values(self, rng: CellRange) -> list[float]:
        return [self.read_numeric(c) for c in expand_range(rng)]

    def texts(self, rng: CellRange) -> list[str]:
        return [self.read_text(c) for c in expand_range(rng)]

    def row_texts(self, row: int, start_col: int, end_col: int) -> tuple[str, ...]:
        """Texts of one row across an inclusive column span."""
        return tuple(
            self.read_text(CellCoordinate(row, c))
            for c in range(start_col, end_col + 1)
        )
