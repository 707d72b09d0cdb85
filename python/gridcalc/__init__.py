"""gridcalc — in-memory cell store and recalculation engine for a spreadsheet widget.

Usage::

    from gridcalc import create_grid

    sheet = create_grid(rows=20, cols=10)
    sheet.update_cell("A1", "3")
    sheet.update_cell("A2", "4")
    sheet.update_cell("A3", "=A1+A2")
    print(sheet.get_cell("A3").evaluated_value)  # 7

    for cell_id, value in sheet.update_cell("A1", "10"):
        print(cell_id, value)  # A1 10, then A3 14
"""

from gridcalc._cell import Cell, CellValue, CellView
from gridcalc._errors import (
    ERROR,
    CircularReference,
    FormulaError,
    GridError,
    MalformedId,
    OutOfRange,
    UnknownCell,
)
from gridcalc._grid import DEFAULT_COLS, DEFAULT_ROWS, Grid
from gridcalc._utils import MAX_COLS, decode, encode
from gridcalc.calc import CellUpdate, RecalcEngine, SpreadsheetModel

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Cell",
    "CellUpdate",
    "CellValue",
    "CellView",
    "CircularReference",
    "DEFAULT_COLS",
    "DEFAULT_ROWS",
    "ERROR",
    "FormulaError",
    "Grid",
    "GridError",
    "MAX_COLS",
    "MalformedId",
    "OutOfRange",
    "RecalcEngine",
    "SpreadsheetModel",
    "UnknownCell",
    "create_grid",
    "decode",
    "encode",
]


def create_grid(rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> RecalcEngine:
    """Create a blank ``rows x cols`` sheet and the engine that edits it.

    ``cols`` may not exceed 26 since columns are single letters.
    """
    return RecalcEngine(Grid(rows, cols))
