"""sheetcalc.calc - Formula evaluation engine for text-cell grids."""

from sheetcalc.calc._errors import (
    DivisionByEmptyRange,
    EmptyRangeForExtremum,
    FormulaError,
    InvalidPattern,
    MalformedCoordinate,
    MalformedRange,
    UnrecognizedFormula,
)
from sheetcalc.calc._evaluator import FormulaEvaluator, evaluate, format_scalar
from sheetcalc.calc._functions import (
    FUNCTION_SIGNATURES,
    FunctionName,
    FunctionRegistry,
    is_supported,
)
from sheetcalc.calc._grid import GridAccessor, parse_number
from sheetcalc.calc._parser import FormulaInvocation, FormulaParser, parse_formula, tokenize
from sheetcalc.calc._protocol import FormulaEngine, GridProvider
from sheetcalc.calc._reference import (
    CellCoordinate,
    CellRange,
    expand_range,
    format_coordinate,
    parse_coordinate,
    parse_range,
)

__all__ = [
    "CellCoordinate",
    "CellRange",
    "DivisionByEmptyRange",
    "EmptyRangeForExtremum",
    "FUNCTION_SIGNATURES",
    "FormulaEngine",
    "FormulaError",
    "FormulaEvaluator",
    "FormulaInvocation",
    "FormulaParser",
    "FunctionName",
    "FunctionRegistry",
    "GridAccessor",
    "GridProvider",
    "InvalidPattern",
    "MalformedCoordinate",
    "MalformedRange",
    "UnrecognizedFormula",
    "evaluate",
    "expand_range",
    "format_coordinate",
    "format_scalar",
    "is_supported",
    "parse_coordinate",
    "parse_formula",
    "parse_number",
    "parse_range",
    "tokenize",
]
