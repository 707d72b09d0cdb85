"""SpreadsheetModel protocol and result dataclasses."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gridcalc._cell import CellValue, CellView


@dataclass(frozen=True)
class CellUpdate:
    """A cell to repaint after an edit, with its freshly committed value."""

    cell_id: str  # "A1"
    evaluated_value: CellValue

    def __iter__(self) -> Iterator[object]:
        # cell_id, value = update
        yield self.cell_id
        yield self.evaluated_value


@runtime_checkable
class SpreadsheetModel(Protocol):
    """What a UI needs from the model behind a spreadsheet widget."""

    def update_cell(self, cell_id: str, raw_value: str) -> list[CellUpdate]:
        """Store new input for *cell_id* and recalculate what depends on it.

        Returns the edited cell followed by every recalculated dependent.
        """
        ...

    def get_cell(self, cell_id: str) -> CellView:
        """Raw input and evaluated value of *cell_id*."""
        ...

    def clear_all(self) -> None:
        """Blank every cell."""
        ...
