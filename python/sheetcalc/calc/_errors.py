"""Exceptions raised by the formula engine.

Each error carries a ``code`` that a host can display in the target cell,
using the same spellings Excel uses for the equivalent error values.
"""

from __future__ import annotations


class FormulaError(ValueError):
    """Base for all formula engine errors."""

    code: str = "#VALUE!"

    def __init__(self, message: str = "", code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class MalformedCoordinate(FormulaError):
    """A cell label is not a column letter followed by a row number."""

    code = "#REF!"


class MalformedRange(FormulaError):
    """A range label has a bad corner or too many ``:`` separators."""

    code = "#REF!"


class UnrecognizedFormula(FormulaError):
    """Formula text does not match any known function signature."""

    code = "#NAME?"


class DivisionByEmptyRange(FormulaError):
    """AVERAGE over a range with no cells."""

    code = "#DIV/0!"


class EmptyRangeForExtremum(FormulaError):
    """MAX or MIN over a range with no cells."""

    code = "#NUM!"


class InvalidPattern(FormulaError):
    """FIND_AND_REPLACE pattern is not a valid regular expression."""

    code = "#VALUE!"
