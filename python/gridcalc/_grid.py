"""Grid: fixed-size ``rows x cols`` store of cells, addressed by ``"A1"`` ids."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from gridcalc._cell import Cell, CellValue, CellView
from gridcalc._errors import OutOfRange, UnknownCell
from gridcalc._utils import MAX_COLS, decode, encode

DEFAULT_ROWS = 20
DEFAULT_COLS = 10


class Grid:
    """Owns every cell of a rectangular sheet.

    Every in-bounds coordinate maps to exactly one :class:`Cell`; the
    dimensions are fixed at construction. Cells are only handed out as
    :class:`CellView` snapshots.
    """

    __slots__ = ("_rows", "_cols", "_cells")

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> None:
        if not isinstance(rows, int) or rows < 1:
            raise ValueError(f"rows must be a positive integer, got {rows!r}")
        if not isinstance(cols, int) or not 1 <= cols <= MAX_COLS:
            raise ValueError(f"cols must be between 1 and {MAX_COLS}, got {cols!r}")
        self._rows = rows
        self._cols = cols
        self._cells: list[list[Cell]] = []
        self._reset()

    def _reset(self) -> None:
        self._cells = [
            [Cell(r, c) for c in range(self._cols)] for r in range(self._rows)
        ]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def dimensions(self) -> tuple[int, int]:
        return self._rows, self._cols

    # ------------------------------------------------------------------
    # Addressing
    # ------------------------------------------------------------------

    def resolve(self, cell_id: str) -> tuple[int, int]:
        """Decode *cell_id* and check it is inside the grid.

        Raises MalformedId for text that is not an id, UnknownCell for an id
        outside the grid.
        """
        row, col = decode(cell_id)
        if row >= self._rows or col >= self._cols:
            raise UnknownCell(cell_id, row, col, self._rows, self._cols)
        return row, col

    def cell_id(self, row: int, col: int) -> str:
        """0-based coordinates -> id. Raises OutOfRange."""
        return encode(row, col, self._rows, self._cols)

    def contains(self, cell_id: str) -> bool:
        """True when *cell_id* names a cell of this grid. Never raises."""
        try:
            self.resolve(cell_id)
        except (ValueError, OutOfRange):
            return False
        return True

    def _cell(self, cell_id: str) -> Cell:
        row, col = self.resolve(cell_id)
        return self._cells[row][col]

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def get(self, cell_id: str) -> CellView:
        """Snapshot of the cell named *cell_id*."""
        return self._cell(cell_id).view()

    def __getitem__(self, cell_id: str) -> CellView:
        """``grid['A1']`` -> CellView."""
        return self.get(cell_id)

    def __contains__(self, cell_id: object) -> bool:
        return isinstance(cell_id, str) and self.contains(cell_id)

    def __len__(self) -> int:
        return self._rows * self._cols

    def set_raw(self, cell_id: str, text: str) -> None:
        """Store raw input. The evaluated value is left untouched."""
        self._cell(cell_id).raw_input = text

    def set_evaluated(self, cell_id: str, value: CellValue) -> None:
        self._cell(cell_id).evaluated_value = value

    def raw(self, cell_id: str) -> str:
        return self._cell(cell_id).raw_input

    def value(self, cell_id: str) -> CellValue:
        return self._cell(cell_id).evaluated_value

    def clear_all(self) -> None:
        """Replace every cell with a fresh blank one."""
        self._reset()

    # ------------------------------------------------------------------
    # Iteration (row-major)
    # ------------------------------------------------------------------

    def cell_ids(self) -> Iterator[str]:
        """All ids, row by row, left to right."""
        for r in range(self._rows):
            for c in range(self._cols):
                yield encode(r, c, self._rows, self._cols)

    def iter_cells(self) -> Iterator[tuple[str, CellView]]:
        """``(id, CellView)`` pairs in row-major order."""
        for row in self._cells:
            for cell in row:
                yield encode(cell.row, cell.col, self._rows, self._cols), cell.view()

    def for_each_cell(self, fn: Callable[[str, CellView], object]) -> None:
        """Call ``fn(id, view)`` for every cell in row-major order."""
        for cell_id, view in self.iter_cells():
            fn(cell_id, view)

    def values(self) -> dict[str, CellValue]:
        """Evaluated values of the non-blank cells, keyed by id."""
        return {
            cell_id: view.evaluated_value
            for cell_id, view in self.iter_cells()
            if not view.is_blank
        }

    def __repr__(self) -> str:
        return f"<Grid {self._rows}x{self._cols}>"
