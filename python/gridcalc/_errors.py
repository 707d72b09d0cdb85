"""Exception types raised by the grid and the recalculation engine.

Contract violations from the caller (bad ids, out-of-bounds access) are raised
and propagate. Formula mistakes are raised internally as :class:`FormulaError`
and turned into the ``"ERROR"`` value before they reach the caller.
"""

from __future__ import annotations

from collections.abc import Iterable

# Value stored in a cell whose formula cannot be evaluated.
ERROR = "ERROR"


class GridError(Exception):
    """Base class for all gridcalc errors."""


class MalformedId(GridError, ValueError):
    """A cell identifier does not look like ``<letter><row>``."""

    def __init__(self, cell_id: object) -> None:
        super().__init__(f"Malformed cell id: {cell_id!r}")
        self.cell_id = cell_id


class OutOfRange(GridError, IndexError):
    """Coordinates fall outside the grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Coordinates ({row}, {col}) outside {rows}x{cols} grid"
        )
        self.row = row
        self.col = col


class UnknownCell(OutOfRange, KeyError):
    """A well-formed cell id that does not name a cell of this grid."""

    def __init__(self, cell_id: str, row: int, col: int, rows: int, cols: int) -> None:
        GridError.__init__(self, f"Unknown cell {cell_id!r} for {rows}x{cols} grid")
        self.cell_id = cell_id
        self.row = row
        self.col = col

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class FormulaError(GridError):
    """A formula cannot be evaluated."""

    def __init__(self, cell_id: str, formula: str, reason: str) -> None:
        super().__init__(f"Cannot evaluate {formula!r} in {cell_id}: {reason}")
        self.cell_id = cell_id
        self.formula = formula
        self.reason = reason


class CircularReference(FormulaError):
    """Formula cells that depend on each other in a loop.

    ``cells`` holds the cells that could not be ordered; ``order`` holds the
    cells that could, in evaluation order.
    """

    def __init__(self, cells: Iterable[str], order: Iterable[str] = ()) -> None:
        self.cells = sorted(cells)
        self.order = list(order)
        GridError.__init__(
            self, f"Circular reference detected involving: {', '.join(self.cells)}"
        )
        self.cell_id = self.cells[0] if self.cells else ""
        self.formula = ""
        self.reason = "circular reference"
