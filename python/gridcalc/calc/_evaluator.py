"""FormulaEvaluator: evaluates ``=<ref>+<ref>`` formulas against a Grid.

Formula mistakes never escape as exceptions. They are raised internally as
:class:`~gridcalc._errors.FormulaError` and come back as the ``"ERROR"``
value, which the caller stores and displays like any other value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gridcalc._errors import ERROR, FormulaError, GridError
from gridcalc.calc._parser import is_formula, parse_literal, split_operands

if TYPE_CHECKING:
    from gridcalc._cell import CellValue
    from gridcalc._grid import Grid

logger = logging.getLogger(__name__)


def _as_number(value: Any) -> int | float:
    """Numeric operand value; blanks, text and errors count as zero."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


class FormulaEvaluator:
    """Evaluates cell input against the current state of a grid.

    Usage::

        evaluator = FormulaEvaluator(grid)
        evaluator.evaluate("A3", "=A1+A2")
    """

    def __init__(self, grid: Grid) -> None:
        self._grid = grid

    def evaluate_input(self, cell_id: str, raw: str) -> CellValue:
        """Value for any raw input: literal, formula result or ``"ERROR"``."""
        if is_formula(raw):
            return self.evaluate(cell_id, raw)
        return parse_literal(raw)

    def evaluate(self, cell_id: str, formula: str) -> CellValue:
        """Evaluate *formula* as the content of *cell_id*.

        Returns the sum, or ``"ERROR"`` when the formula cannot be evaluated.
        """
        try:
            return self.compute(cell_id, formula)
        except FormulaError as e:
            logger.debug("%s", e)
            return ERROR

    def compute(self, cell_id: str, formula: str) -> int | float:
        """Like :meth:`evaluate` but raises FormulaError instead."""
        operands = split_operands(formula)
        if len(operands) != 2:
            raise FormulaError(
                cell_id, formula, f"expected 2 operands, got {len(operands)}",
            )
        if cell_id in operands:
            raise FormulaError(cell_id, formula, "refers to itself")

        total: int | float = 0
        for ref in operands:
            try:
                value = self._grid.value(ref)
            except GridError as e:
                raise FormulaError(cell_id, formula, f"bad operand {ref!r}") from e
            total += _as_number(value)
        return total
