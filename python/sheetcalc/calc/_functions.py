"""Function whitelist and builtin implementations for formula evaluation."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from sheetcalc.calc._errors import (
    DivisionByEmptyRange,
    EmptyRangeForExtremum,
    InvalidPattern,
)
from sheetcalc.calc._grid import parse_number

if TYPE_CHECKING:
    from sheetcalc.calc._grid import GridAccessor
    from sheetcalc.calc._reference import CellRange

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Whitelist: the only functions the parser accepts.
# name -> (category, arity)
# ---------------------------------------------------------------------------

AGGREGATE = "aggregate"
TEXT = "text"
MUTATION = "mutation"

FUNCTION_SIGNATURES: dict[str, tuple[str, int]] = {
    # Aggregates over one range (5)
    "SUM": (AGGREGATE, 1),
    "AVERAGE": (AGGREGATE, 1),
    "MAX": (AGGREGATE, 1),
    "MIN": (AGGREGATE, 1),
    "COUNT": (AGGREGATE, 1),
    # Text transforms of one literal (3)
    "TRIM": (TEXT, 1),
    "UPPER": (TEXT, 1),
    "LOWER": (TEXT, 1),
    # In-place grid mutations (2)
    "REMOVE_DUPLICATES": (MUTATION, 1),
    "FIND_AND_REPLACE": (MUTATION, 3),
}


class FunctionName(str, Enum):
    """Tag of a parsed formula invocation."""

    SUM = "SUM"
    AVERAGE = "AVERAGE"
    MAX = "MAX"
    MIN = "MIN"
    COUNT = "COUNT"
    TRIM = "TRIM"
    UPPER = "UPPER"
    LOWER = "LOWER"
    REMOVE_DUPLICATES = "REMOVE_DUPLICATES"
    FIND_AND_REPLACE = "FIND_AND_REPLACE"

    @property
    def kind(self) -> str:
        return FUNCTION_SIGNATURES[self.value][0]

    @property
    def arity(self) -> int:
        return FUNCTION_SIGNATURES[self.value][1]

    @property
    def mutates(self) -> bool:
        return self.kind == MUTATION


def is_supported(func_name: str) -> bool:
    """Check if a function name is in the whitelist (case-insensitive)."""
    return func_name.upper() in FUNCTION_SIGNATURES


# ---------------------------------------------------------------------------
# Aggregate builtins. Each reads its range through the GridAccessor.
# ---------------------------------------------------------------------------


def _builtin_sum(grid: GridAccessor, rng: CellRange) -> float:
    return sum(grid.values(rng))


def _builtin_average(grid: GridAccessor, rng: CellRange) -> float:
    nums = grid.values(rng)
    if not nums:
        raise DivisionByEmptyRange("AVERAGE: range has no cells")
    return sum(nums) / len(nums)


def _builtin_max(grid: GridAccessor, rng: CellRange) -> float:
    nums = grid.values(rng)
    if not nums:
        raise EmptyRangeForExtremum("MAX: range has no cells")
    return max(nums)


def _builtin_min(grid: GridAccessor, rng: CellRange) -> float:
    nums = grid.values(rng)
    if not nums:
        raise EmptyRangeForExtremum("MIN: range has no cells")
    return min(nums)


def _builtin_count(grid: GridAccessor, rng: CellRange) -> float:
    """COUNT - counts cells holding numeric text only."""
    return float(sum(1 for text in grid.texts(rng) if parse_number(text) is not None))


# ---------------------------------------------------------------------------
# Text builtins. The argument is the literal text, already trimmed.
# ---------------------------------------------------------------------------


def _builtin_trim(text: str) -> str:
    return text.strip()


def _builtin_upper(text: str) -> str:
    return text.upper()


def _builtin_lower(text: str) -> str:
    return text.lower()


# ---------------------------------------------------------------------------
# Mutation builtins. These write through the GridAccessor and return the
# number of rows / cells they changed; they produce no scalar result.
# ---------------------------------------------------------------------------


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a FIND_AND_REPLACE pattern (case-sensitive)."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPattern(f"Invalid pattern {pattern!r}: {exc}") from exc


def _builtin_remove_duplicates(grid: GridAccessor, rng: CellRange) -> int:
    """Delete every row of *rng* whose texts repeat an earlier row.

    Rows are compared across the range's column span only. Duplicates are
    collected first and then deleted bottom-up, so the indices collected in
    the first pass stay valid while deleting.
    """
    if rng.is_empty:
        return 0
    last_row = min(rng.end_row, grid.max_row)
    seen: set[tuple[str, ...]] = set()
    duplicates: list[int] = []
    for row in range(rng.start_row, last_row + 1):
        signature = grid.row_texts(row, rng.start_col, rng.end_col)
        if signature in seen:
            duplicates.append(row)
        else:
            seen.add(signature)

    for row in reversed(duplicates):
        grid.delete_row(row)
    if duplicates:
        logger.debug("REMOVE_DUPLICATES %s: deleted rows %s", rng, duplicates)
    return len(duplicates)


def _builtin_find_and_replace(
    grid: GridAccessor,
    rng: CellRange,
    pattern: re.Pattern[str],
    replacement: str,
) -> int:
    """Replace every match of *pattern* in each cell of *rng*, one pass.

    The replacement is inserted literally (no group references), so a
    replacement that itself matches the pattern is not substituted again.
    """
    changed = 0
    for coord in grid.expand(rng):
        text = grid.read_text(coord)
        new_text = pattern.sub(lambda _m: replacement, text)
        if new_text != text:
            grid.write_text(coord, new_text)
            changed += 1
    logger.debug("FIND_AND_REPLACE %s: %d cell(s) changed", rng, changed)
    return changed


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_BUILTINS: dict[str, Callable[..., Any]] = {
    "SUM": _builtin_sum,
    "AVERAGE": _builtin_average,
    "MAX": _builtin_max,
    "MIN": _builtin_min,
    "COUNT": _builtin_count,
    "TRIM": _builtin_trim,
    "UPPER": _builtin_upper,
    "LOWER": _builtin_lower,
    "REMOVE_DUPLICATES": _builtin_remove_duplicates,
    "FIND_AND_REPLACE": _builtin_find_and_replace,
}


class FunctionRegistry:
    """Registry of callable function implementations.

    Starts with builtins. Implementations can be replaced, but only for
    names the parser accepts, since nothing else can ever be dispatched.
    """

    def __init__(self) -> None:
        self._functions: dict[str, Callable[..., Any]] = dict(_BUILTINS)

    def register(self, name: str, func: Callable[..., Any]) -> None:
        if not is_supported(name):
            raise ValueError(f"Unknown function: {name!r}")
        self._functions[name.upper()] = func

    def get(self, name: str) -> Callable[..., Any] | None:
        return self._functions.get(name.upper())

    def has(self, name: str) -> bool:
        return name.upper() in self._functions

    @property
    def supported_functions(self) -> frozenset[str]:
        return frozenset(self._functions.keys())
