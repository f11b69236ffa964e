"""Sheet: in-memory grid of text cells with ``ws['A1']`` access.

Implements the :class:`~sheetcalc.calc.GridProvider` protocol, so a Sheet can
be handed straight to a :class:`~sheetcalc.calc.FormulaEvaluator`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from sheetcalc._utils import a1_to_rowcol, column_letter


class Sheet:
    """A grid of text cells with an explicit row/column extent.

    The extent starts at ``rows`` x ``columns`` and only changes through
    :meth:`add_row`, :meth:`add_column`, :meth:`delete_row` or a write
    outside it. Unwritten cells read as ``""``.
    """

    __slots__ = ("_title", "_cells", "_n_rows", "_n_cols", "_next_append_row")

    def __init__(self, rows: int = 20, columns: int = 10, title: str = "Sheet1") -> None:
        if rows < 0 or columns < 0:
            raise ValueError(f"Sheet size must be non-negative, got {rows}x{columns}")
        self._title = title
        self._cells: dict[tuple[int, int], str] = {}
        self._n_rows = rows
        self._n_cols = columns
        self._next_append_row = 1

    @property
    def title(self) -> str:
        return self._title

    @property
    def max_row(self) -> int:
        return self._n_rows

    @property
    def max_column(self) -> int:
        return self._n_cols

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> str:
        """``ws['A1']`` -> cell text."""
        row, col = a1_to_rowcol(key)
        return self.read_text(row, col)

    def __setitem__(self, key: str, value: Any) -> None:
        """``ws['A1'] = 42`` stores ``str(value)``."""
        row, col = a1_to_rowcol(key)
        self.write_text(row, col, "" if value is None else str(value))

    def cell(self, row: int, column: int, value: Any = None) -> str:
        """Get (and optionally set) a cell's text by 1-based (row, column)."""
        if value is not None:
            self.write_text(row, column, str(value))
        return self.read_text(row, column)

    def read_text(self, row: int, col: int) -> str:
        self._check_index(row, col)
        return self._cells.get((row, col), "")

    def write_text(self, row: int, col: int, text: str) -> None:
        self._check_index(row, col)
        if text:
            self._cells[(row, col)] = text
        else:
            self._cells.pop((row, col), None)
        if row > self._n_rows:
            self._n_rows = row
        if col > self._n_cols:
            self._n_cols = col

    @staticmethod
    def _check_index(row: int, col: int) -> None:
        if row < 1 or col < 1:
            raise ValueError(f"Cell indices are 1-based, got ({row}, {col})")

    # ------------------------------------------------------------------
    # Bulk writes
    # ------------------------------------------------------------------

    def append(self, iterable: Iterable[Any]) -> None:
        """Write a row of values starting at column A.

        Successive calls fill successive rows, starting from row 1.
        """
        row = self._next_append_row
        for c, val in enumerate(iterable, start=1):
            if val is not None:
                self.write_text(row, c, str(val))
        if row > self._n_rows:
            self._n_rows = row
        self._next_append_row += 1

    def write_rows(
        self,
        rows: list[list[Any]],
        start_row: int = 1,
        start_col: int = 1,
    ) -> None:
        """Write a 2D grid of values with its top-left at (start_row, start_col)."""
        for ri, row in enumerate(rows):
            for ci, val in enumerate(row):
                if val is not None:
                    self.write_text(start_row + ri, start_col + ci, str(val))

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def add_row(self) -> int:
        """Grow the sheet by one empty row; returns the new row count."""
        self._n_rows += 1
        return self._n_rows

    def add_column(self) -> int:
        """Grow the sheet by one empty column; returns the new column count."""
        self._n_cols += 1
        return self._n_cols

    def delete_row(self, row: int) -> None:
        """Remove *row* and move every row below it up by one."""
        if row < 1:
            raise ValueError(f"Row index must be >= 1, got {row}")
        shifted: dict[tuple[int, int], str] = {}
        for (r, c), text in self._cells.items():
            if r < row:
                shifted[(r, c)] = text
            elif r > row:
                shifted[(r - 1, c)] = text
        self._cells = shifted
        if row <= self._n_rows:
            self._n_rows -= 1
        if self._next_append_row > row:
            self._next_append_row -= 1

    def column_labels(self) -> list[str]:
        """Header labels for the current columns: ``["A", "B", ...]``."""
        return [column_letter(c) for c in range(1, self._n_cols + 1)]

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def iter_rows(
        self,
        min_row: int | None = None,
        max_row: int | None = None,
        min_col: int | None = None,
        max_col: int | None = None,
    ) -> Iterator[tuple[str, ...]]:
        """Yield each row in the window as a tuple of texts."""
        r_min = min_row or 1
        r_max = max_row or self._n_rows
        c_min = min_col or 1
        c_max = max_col or self._n_cols

        for r in range(r_min, r_max + 1):
            yield tuple(self._cells.get((r, c), "") for c in range(c_min, c_max + 1))

    def __repr__(self) -> str:
        return f"<Sheet [{self._title}] {self._n_rows}x{self._n_cols}>"
