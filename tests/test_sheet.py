"""Tests for the in-memory Sheet grid and A1 helpers."""

from __future__ import annotations

import pytest

from sheetcalc import Sheet
from sheetcalc.calc import GridProvider


class TestUtils:
    """Coordinate conversion helpers."""

    def test_column_letter(self) -> None:
        from sheetcalc._utils import column_letter

        assert column_letter(1) == "A"
        assert column_letter(26) == "Z"
        assert column_letter(27) == "AA"
        assert column_letter(702) == "ZZ"

    def test_column_index(self) -> None:
        from sheetcalc._utils import column_index

        assert column_index("A") == 1
        assert column_index("z") == 26
        assert column_index("AA") == 27
        assert column_index("ZZ") == 702

    def test_a1_roundtrip(self) -> None:
        from sheetcalc._utils import a1_to_rowcol, rowcol_to_a1

        assert a1_to_rowcol("B3") == (3, 2)
        assert rowcol_to_a1(3, 2) == "B3"
        assert a1_to_rowcol("AA100") == (100, 27)
        assert rowcol_to_a1(100, 27) == "AA100"

    def test_invalid_a1_raises(self) -> None:
        from sheetcalc._utils import a1_to_rowcol

        with pytest.raises(ValueError, match="Invalid cell reference"):
            a1_to_rowcol("123")
        with pytest.raises(ValueError, match="Invalid cell reference"):
            a1_to_rowcol("A0")

    def test_column_letter_rejects_zero(self) -> None:
        from sheetcalc._utils import column_letter

        with pytest.raises(ValueError):
            column_letter(0)


class TestCellAccess:
    def test_default_extent(self) -> None:
        ws = Sheet()
        assert (ws.max_row, ws.max_column) == (20, 10)
        assert ws.column_labels() == list("ABCDEFGHIJ")

    def test_unwritten_cell_is_empty(self) -> None:
        assert Sheet()["C7"] == ""

    def test_set_and_get(self) -> None:
        ws = Sheet()
        ws["B2"] = 42
        assert ws["B2"] == "42"
        assert ws.read_text(2, 2) == "42"

    def test_cell_method(self) -> None:
        ws = Sheet()
        assert ws.cell(row=3, column=1, value="hi") == "hi"
        assert ws.cell(3, 1) == "hi"

    def test_clear_with_none(self) -> None:
        ws = Sheet()
        ws["A1"] = "x"
        ws["A1"] = None
        assert ws["A1"] == ""

    def test_write_outside_extent_grows_it(self) -> None:
        ws = Sheet(rows=2, columns=2)
        ws["D5"] = "x"
        assert (ws.max_row, ws.max_column) == (5, 4)

    def test_zero_index_rejected(self) -> None:
        ws = Sheet()
        with pytest.raises(ValueError, match="1-based"):
            ws.write_text(0, 1, "x")

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            Sheet(rows=-1)

    def test_is_grid_provider(self) -> None:
        assert isinstance(Sheet(), GridProvider)


class TestBulkWrites:
    def test_append_fills_successive_rows(self) -> None:
        ws = Sheet(rows=0, columns=0)
        ws.append(["a", 1])
        ws.append(["b", None, 2.5])
        assert ws.max_row == 2
        assert list(ws.iter_rows()) == [("a", "1", ""), ("b", "", "2.5")]

    def test_write_rows_offset(self) -> None:
        ws = Sheet(rows=3, columns=3)
        ws.write_rows([["1", "2"], ["3", "4"]], start_row=2, start_col=2)
        assert ws["B2"] == "1"
        assert ws["C3"] == "4"
        assert ws["A1"] == ""

    def test_iter_rows_window(self) -> None:
        ws = Sheet(rows=3, columns=3)
        ws.write_rows([["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"]])
        rows = list(ws.iter_rows(min_row=2, max_row=3, min_col=2, max_col=3))
        assert rows == [("e", "f"), ("h", "i")]


class TestStructure:
    def test_add_row_and_column(self) -> None:
        ws = Sheet(rows=2, columns=2)
        assert ws.add_row() == 3
        assert ws.add_column() == 3
        assert ws.column_labels() == ["A", "B", "C"]

    def test_delete_row_shifts_up(self) -> None:
        ws = Sheet(rows=3, columns=1)
        ws.append(["one"])
        ws.append(["two"])
        ws.append(["three"])
        ws.delete_row(2)
        assert list(ws.iter_rows()) == [("one",), ("three",)]
        assert ws.max_row == 2

    def test_append_after_delete_continues_compacted(self) -> None:
        ws = Sheet(rows=0, columns=1)
        ws.append(["one"])
        ws.append(["two"])
        ws.delete_row(1)
        ws.append(["three"])
        assert list(ws.iter_rows()) == [("two",), ("three",)]

    def test_delete_row_outside_extent_keeps_size(self) -> None:
        ws = Sheet(rows=2, columns=1)
        ws.delete_row(5)
        assert ws.max_row == 2

    def test_delete_row_rejects_zero(self) -> None:
        with pytest.raises(ValueError):
            Sheet().delete_row(0)

    def test_repr(self) -> None:
        assert repr(Sheet(rows=2, columns=3, title="Data")) == "<Sheet [Data] 2x3>"
