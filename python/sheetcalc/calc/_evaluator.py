"""FormulaEvaluator: parse, resolve and dispatch one formula against a grid.

Evaluation is split into a resolve phase and an apply phase. Everything
that can fail on bad input (parsing, range labels, the FIND_AND_REPLACE
pattern) happens while resolving, so a rejected formula never leaves a
partial write behind.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sheetcalc.calc._errors import UnrecognizedFormula
from sheetcalc.calc._functions import (
    AGGREGATE,
    TEXT,
    FunctionName,
    FunctionRegistry,
    compile_pattern,
)
from sheetcalc.calc._grid import GridAccessor
from sheetcalc.calc._parser import FormulaInvocation, FormulaParser
from sheetcalc.calc._reference import CellCoordinate, parse_coordinate, parse_range

if TYPE_CHECKING:
    from sheetcalc.calc._protocol import GridProvider

logger = logging.getLogger(__name__)


def format_scalar(value: Any) -> str:
    """Stringify a scalar result for writing into a cell.

    Integral floats lose their fractional part (``5.0`` -> ``"5"``).
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class FormulaEvaluator:
    """Evaluates formula text submitted against a target cell.

    Usage::

        sheet = Sheet()
        sheet["A1"] = "5"
        evaluator = FormulaEvaluator(sheet)
        evaluator.evaluate("SUM(A1:A1)", "B1")
        sheet["B1"]  # "5"

    Formulas that do not parse are ignored (logged at debug level) unless
    the evaluator was created with ``strict=True``.
    """

    def __init__(
        self,
        grid: GridProvider,
        *,
        strict: bool = False,
        registry: FunctionRegistry | None = None,
    ) -> None:
        self._grid = GridAccessor(grid)
        self._parser = FormulaParser()
        self._functions = registry if registry is not None else FunctionRegistry()
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def evaluate(self, formula_text: str, target: CellCoordinate | str) -> None:
        """Evaluate *formula_text* and apply its result to the grid.

        Scalar results are written to *target*; mutation-style functions
        change the grid in place and leave *target* alone.
        """
        if isinstance(target, str):
            target = parse_coordinate(target)

        try:
            invocation = self._parser.parse(formula_text)
        except UnrecognizedFormula:
            if self._strict:
                raise
            logger.debug("Ignoring unrecognized formula %r", formula_text)
            return

        logger.debug("Evaluating %s%s at %s", invocation.function.value,
                     invocation.args, target)
        result = self.compute(invocation)
        if result is not None:
            self._grid.write_text(target, format_scalar(result))

    def compute(self, invocation: FormulaInvocation) -> Any:
        """Dispatch a parsed invocation.

        Returns the scalar result, or None for mutation-style functions
        (which have already changed the grid when this returns).
        """
        func = self._functions.get(invocation.function.value)
        if func is None:
            raise UnrecognizedFormula(f"No implementation for {invocation.function.value}")

        if invocation.kind == AGGREGATE:
            return func(self._grid, parse_range(invocation.range_label))
        if invocation.kind == TEXT:
            return func(invocation.text)

        # Mutation: resolve every argument before the first write.
        rng = parse_range(invocation.range_label)
        if invocation.function is FunctionName.FIND_AND_REPLACE:
            pattern = compile_pattern(invocation.pattern)
            func(self._grid, rng, pattern, invocation.replacement)
        else:
            func(self._grid, rng)
        return None


def evaluate(
    grid: GridProvider,
    formula_text: str,
    target: CellCoordinate | str,
    *,
    strict: bool = False,
) -> None:
    """One-shot helper: ``FormulaEvaluator(grid).evaluate(...)``."""
    FormulaEvaluator(grid, strict=strict).evaluate(formula_text, target)
