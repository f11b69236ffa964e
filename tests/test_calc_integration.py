"""Integration tests for sheetcalc.calc: GridAccessor and host-side providers."""

from __future__ import annotations

import pytest

import sheetcalc
from sheetcalc.calc import (
    CellCoordinate,
    FormulaEvaluator,
    GridAccessor,
    GridProvider,
    parse_range,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class ListGrid:
    """Host-style provider backed by a list of row lists.

    Mirrors a table widget: rows are physical objects, and deleting one
    removes it from the list.
    """

    def __init__(self, rows: list[list[str]]) -> None:
        self.rows = [list(r) for r in rows]
        self.deleted: list[int] = []

    @property
    def max_row(self) -> int:
        return len(self.rows)

    @property
    def max_column(self) -> int:
        return max((len(r) for r in self.rows), default=0)

    def read_text(self, row: int, col: int) -> str:
        if row > len(self.rows) or col > len(self.rows[row - 1]):
            return ""
        return self.rows[row - 1][col - 1]

    def write_text(self, row: int, col: int, text: str) -> None:
        cells = self.rows[row - 1]
        while len(cells) < col:
            cells.append("")
        cells[col - 1] = text

    def delete_row(self, row: int) -> None:
        self.deleted.append(row)
        del self.rows[row - 1]


def _build_contacts() -> sheetcalc.Sheet:
    """Name / city sheet with one repeated record and some numbers."""
    ws = sheetcalc.Sheet(rows=5, columns=4)
    ws.append(["Ann", "Paris", "3"])
    ws.append(["Bob", "Rome", "4"])
    ws.append(["Ann", "Paris", "5"])
    ws.append(["Ann", "Paris", "3"])
    ws.append(["Cid", "Oslo", "n/a"])
    return ws


# ---------------------------------------------------------------------------
# GridAccessor over an arbitrary provider
# ---------------------------------------------------------------------------


class TestGridAccessor:
    def test_list_grid_is_provider(self) -> None:
        assert isinstance(ListGrid([]), GridProvider)

    def test_read_write_visible_immediately(self) -> None:
        acc = GridAccessor(ListGrid([["a"]]))
        coord = CellCoordinate(1, 1)
        acc.write_text(coord, "b")
        assert acc.read_text(coord) == "b"

    def test_read_numeric(self) -> None:
        acc = GridAccessor(ListGrid([[" 2.5 ", "x", ""]]))
        assert acc.read_numeric(CellCoordinate(1, 1)) == 2.5
        assert acc.read_numeric(CellCoordinate(1, 2)) == 0.0
        assert acc.read_numeric(CellCoordinate(1, 3)) == 0.0

    def test_values_and_texts_row_major(self) -> None:
        acc = GridAccessor(ListGrid([["1", "2"], ["3", "x"]]))
        rng = parse_range("A1:B2")
        assert acc.values(rng) == [1.0, 2.0, 3.0, 0.0]
        assert acc.texts(rng) == ["1", "2", "3", "x"]
        assert [str(c) for c in acc.expand(rng)] == ["A1", "B1", "A2", "B2"]

    def test_row_texts(self) -> None:
        acc = GridAccessor(ListGrid([["a", "b", "c"]]))
        assert acc.row_texts(1, 2, 3) == ("b", "c")

    def test_delete_row(self) -> None:
        grid = ListGrid([["a"], ["b"]])
        GridAccessor(grid).delete_row(1)
        assert grid.rows == [["b"]]


class TestListGridEvaluation:
    def test_remove_duplicates_deletes_bottom_up(self) -> None:
        grid = ListGrid([["x", "1"], ["x", "1"], ["y", "2"], ["x", "1"]])
        FormulaEvaluator(grid).evaluate("REMOVE_DUPLICATES(A1:B4)", CellCoordinate(1, 3))
        assert grid.deleted == [4, 2]
        assert grid.rows == [["x", "1"], ["y", "2"]]

    def test_scalar_written_to_target(self) -> None:
        grid = ListGrid([["1", ""], ["2", ""]])
        FormulaEvaluator(grid).evaluate("SUM(A1:A2)", CellCoordinate(2, 2))
        assert grid.rows[1][1] == "3"


# ---------------------------------------------------------------------------
# A host session against the bundled Sheet
# ---------------------------------------------------------------------------


class TestHostSession:
    def test_clean_then_aggregate(self) -> None:
        ws = _build_contacts()
        ev = sheetcalc.FormulaEvaluator(ws)

        ev.evaluate("REMOVE_DUPLICATES(A1:C5)", "D1")
        assert [r[:3] for r in ws.iter_rows()] == [
            ("Ann", "Paris", "3"),
            ("Bob", "Rome", "4"),
            ("Ann", "Paris", "5"),
            ("Cid", "Oslo", "n/a"),
        ]

        ev.evaluate("FIND_AND_REPLACE(B1:B4, Paris, Lyon)", "D1")
        assert ws["B1"] == "Lyon"
        assert ws["B3"] == "Lyon"

        ev.evaluate("SUM(C1:C4)", "D1")
        ev.evaluate("COUNT(C1:C4)", "D2")
        ev.evaluate("AVERAGE(C1:C4)", "D3")
        assert (ws["D1"], ws["D2"], ws["D3"]) == ("12", "3", "3")

    def test_grown_sheet_is_addressable(self) -> None:
        ws = sheetcalc.Sheet(rows=1, columns=1)
        ws.add_row()
        ws.add_column()
        ws["B2"] = "9"
        sheetcalc.evaluate(ws, "MAX(A1:B2)", "A1")
        assert ws["A1"] == "9"

    def test_strict_module_helper(self) -> None:
        with pytest.raises(sheetcalc.FormulaError):
            sheetcalc.evaluate(sheetcalc.Sheet(), "NOT_A_FORMULA", "A1", strict=True)
