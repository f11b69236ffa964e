"""sheetcalc: a small spreadsheet formula engine over text cells.

Usage::

    from sheetcalc import Sheet, evaluate

    ws = Sheet()
    ws.append(["3", "x"])
    ws.append(["4", "x"])

    # Scalar formulas write their result into the target cell
    evaluate(ws, "SUM(A1:A2)", "C1")
    print(ws["C1"])  # "7"

    # Mutation formulas change the grid in place
    evaluate(ws, "FIND_AND_REPLACE(B1:B2, x, y)", "C2")
"""

from sheetcalc._sheet import Sheet
from sheetcalc.calc import (
    CellCoordinate,
    CellRange,
    FormulaError,
    FormulaEvaluator,
    evaluate,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CellCoordinate",
    "CellRange",
    "FormulaError",
    "FormulaEvaluator",
    "Sheet",
    "evaluate",
]
