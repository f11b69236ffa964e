"""Boundary protocols between the formula engine and its host."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sheetcalc.calc._reference import CellCoordinate


@runtime_checkable
class GridProvider(Protocol):
    """A host-owned grid of text cells. All indices are 1-based."""

    @property
    def max_row(self) -> int:
        """Number of rows currently in the grid."""
        ...

    @property
    def max_column(self) -> int:
        """Number of columns currently in the grid."""
        ...

    def read_text(self, row: int, col: int) -> str:
        """Text of the cell, ``""`` if it was never written."""
        ...

    def write_text(self, row: int, col: int, text: str) -> None:
        """Overwrite the cell's text."""
        ...

    def delete_row(self, row: int) -> None:
        """Remove a row; every row below it moves up by one."""
        ...


@runtime_checkable
class FormulaEngine(Protocol):
    """Protocol for formula evaluators driven by a host's formula bar."""

    def evaluate(self, formula_text: str, target: CellCoordinate | str) -> None:
        """Evaluate one formula against *target*, mutating the grid."""
        ...
