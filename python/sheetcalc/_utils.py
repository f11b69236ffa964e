"""A1-notation helpers shared by the sheet and the calc engine."""

from __future__ import annotations

import re

_A1_RE = re.compile(r"^([A-Za-z]{1,3})(\d+)$")


def column_index(letters: str) -> int:
    """A->1, B->2, ..., Z->26, AA->27."""
    n = 0
    for ch in letters.upper():
        n = n * 26 + (ord(ch) - ord("A") + 1)
    return n


def column_letter(index: int) -> str:
    """1->A, 2->B, ..., 26->Z, 27->AA."""
    if index < 1:
        raise ValueError(f"Column index must be >= 1, got {index}")
    result = ""
    while index > 0:
        index, rem = divmod(index - 1, 26)
        result = chr(rem + ord("A")) + result
    return result


def a1_to_rowcol(ref: str) -> tuple[int, int]:
    """Convert "B3" to (3, 2). Multi-letter columns are allowed here."""
    m = _A1_RE.match(ref.strip())
    if not m:
        raise ValueError(f"Invalid cell reference: {ref!r}")
    row = int(m.group(2))
    if row < 1:
        raise ValueError(f"Invalid cell reference: {ref!r}")
    return row, column_index(m.group(1))


def rowcol_to_a1(row: int, col: int) -> str:
    """Convert (3, 2) to "B3"."""
    if row < 1:
        raise ValueError(f"Row index must be >= 1, got {row}")
    return f"{column_letter(col)}{row}"
