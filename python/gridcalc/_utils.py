"""Cell id codec: ``"A1"`` identifiers <-> 0-based ``(row, col)`` coordinates.

Columns are a single letter (``A``..``Z``); rows are 1-based in the id.
"""

from __future__ import annotations

import re

from gridcalc._errors import MalformedId, OutOfRange

_A1_RE = re.compile(r"([A-Z])([1-9][0-9]*)")

MAX_COLS = 26


def rowcol_to_a1(row: int, col: int) -> str:
    """0-based ``(row, col)`` -> ``"A1"`` with no bounds beyond the codec's own."""
    if row < 0 or not 0 <= col < MAX_COLS:
        raise ValueError(f"Cannot encode ({row}, {col}) as a cell id")
    return f"{chr(ord('A') + col)}{row + 1}"


def a1_to_rowcol(cell_id: str) -> tuple[int, int]:
    """``"A1"`` -> 0-based ``(row, col)``. Raises MalformedId."""
    if not isinstance(cell_id, str):
        raise MalformedId(cell_id)
    m = _A1_RE.fullmatch(cell_id)
    if m is None:
        raise MalformedId(cell_id)
    return int(m.group(2)) - 1, ord(m.group(1)) - ord("A")


def is_cell_id(text: str) -> bool:
    """True when *text* is syntactically a cell id (bounds are not checked)."""
    return isinstance(text, str) and _A1_RE.fullmatch(text) is not None


def encode(row: int, col: int, rows: int, cols: int) -> str:
    """Encode in-bounds coordinates of a ``rows x cols`` grid.

    Raises OutOfRange when ``(row, col)`` falls outside the grid.
    """
    if not (0 <= row < rows and 0 <= col < cols):
        raise OutOfRange(row, col, rows, cols)
    return rowcol_to_a1(row, col)


def decode(cell_id: str) -> tuple[int, int]:
    """Decode a cell id into 0-based coordinates. Raises MalformedId."""
    return a1_to_rowcol(cell_id)
