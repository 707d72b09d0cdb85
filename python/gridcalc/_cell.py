"""Cell: one grid position's raw input and its evaluated value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

CellValue = Union[int, float, str]


class Cell:
    """Mutable cell owned by a :class:`~gridcalc._grid.Grid`.

    ``raw_input`` is what the user typed (``""`` when blank);
    ``evaluated_value`` is what gets displayed.
    """

    __slots__ = ("row", "col", "raw_input", "evaluated_value")

    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        self.raw_input: str = ""
        self.evaluated_value: CellValue = ""

    def view(self) -> CellView:
        return CellView(raw_input=self.raw_input, evaluated_value=self.evaluated_value)

    def __repr__(self) -> str:
        return (
            f"<Cell ({self.row}, {self.col}) raw={self.raw_input!r} "
            f"value={self.evaluated_value!r}>"
        )


@dataclass(frozen=True)
class CellView:
    """Read-only snapshot of a cell, handed out to callers."""

    raw_input: str
    evaluated_value: CellValue

    @property
    def is_blank(self) -> bool:
        return self.raw_input == ""
