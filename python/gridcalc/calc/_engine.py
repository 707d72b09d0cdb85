"""RecalcEngine: applies cell edits and recalculates their dependents.

This is the object a UI talks to::

    engine = RecalcEngine(Grid(20, 10))
    engine.update_cell("A1", "3")
    engine.update_cell("A2", "4")
    for cell_id, value in engine.update_cell("A3", "=A1+A2"):
        paint(cell_id, value)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gridcalc._errors import ERROR, CircularReference
from gridcalc._grid import Grid
from gridcalc.calc._evaluator import FormulaEvaluator
from gridcalc.calc._graph import DependencyGraph
from gridcalc.calc._parser import is_formula, normalize_input, parse_literal
from gridcalc.calc._protocol import CellUpdate

if TYPE_CHECKING:
    from gridcalc._cell import CellValue, CellView

logger = logging.getLogger(__name__)


class RecalcEngine:
    """Single writer of a :class:`Grid`.

    Keeps the dependency graph in step with the grid's raw inputs. Not
    thread-safe: callers must not run ``update_cell`` concurrently.
    """

    def __init__(self, grid: Grid | None = None) -> None:
        self._grid = grid if grid is not None else Grid()
        self._graph = DependencyGraph.from_grid(self._grid)
        self._evaluator = FormulaEvaluator(self._grid)

    @property
    def grid(self) -> Grid:
        """The grid being edited.

        Read from it freely. Write only through :meth:`update_cell` and
        :meth:`clear_all`; a direct ``set_raw`` or ``clear_all`` on the grid
        is not seen by the dependency graph until :meth:`calculate` runs.
        """
        return self._grid

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    # ------------------------------------------------------------------
    # UI boundary
    # ------------------------------------------------------------------

    def update_cell(self, cell_id: str, raw_value: str) -> list[CellUpdate]:
        """Store *raw_value* in *cell_id* and recalculate its dependents.

        Returns the edited cell first, then every dependent in the order it
        was recalculated. When the edited cell's own formula fails, only the
        edited cell is returned and its dependents keep their values.

        Raises MalformedId or UnknownCell for an id that is not in the grid.
        """
        self._grid.resolve(cell_id)
        if not isinstance(raw_value, str):
            raise TypeError(f"raw_value must be str, got {type(raw_value).__name__}")

        raw = normalize_input(raw_value)
        formula = is_formula(raw)
        # Literals are parsed before anything is stored
        value = None if formula else parse_literal(raw)

        self._grid.set_raw(cell_id, raw)
        self._graph.update(cell_id, raw)

        if formula:
            value = self._evaluate_edited(cell_id, raw)
            if value == ERROR:
                self._grid.set_evaluated(cell_id, ERROR)
                return [CellUpdate(cell_id, ERROR)]

        self._grid.set_evaluated(cell_id, value)
        return [CellUpdate(cell_id, value), *self._propagate(cell_id)]

    def get_cell(self, cell_id: str) -> CellView:
        return self._grid.get(cell_id)

    def clear_all(self) -> None:
        """Blank every cell and forget every dependency."""
        self._grid.clear_all()
        self._graph.clear()

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    def find_dependents(self, cell_id: str) -> list[str]:
        """Cells that read from *cell_id*, directly or not, in discovery order."""
        self._grid.resolve(cell_id)
        return self._graph.find_dependents(cell_id)

    def values(self) -> dict[str, CellValue]:
        return self._grid.values()

    def calculate(self) -> dict[str, CellValue]:
        """Re-evaluate every non-blank cell from its raw input.

        Needed after handing in a grid whose evaluated values were not kept
        up to date. Returns id -> value for the non-blank cells.
        """
        self._graph = DependencyGraph.from_grid(self._grid)
        results: dict[str, CellValue] = {}
        for cell_id, view in self._grid.iter_cells():
            if not view.is_blank and not is_formula(view.raw_input):
                value = parse_literal(view.raw_input)
                self._grid.set_evaluated(cell_id, value)
                results[cell_id] = value

        try:
            order = self._graph.topological_order()
            stuck: list[str] = []
        except CircularReference as e:
            logger.debug("%s", e)
            order, stuck = e.order, e.cells

        for cell_id in order:
            value = self._evaluator.evaluate(cell_id, self._grid.raw(cell_id))
            self._grid.set_evaluated(cell_id, value)
            results[cell_id] = value
        for cell_id in stuck:
            self._grid.set_evaluated(cell_id, ERROR)
            results[cell_id] = ERROR
        return results

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _evaluate_edited(self, cell_id: str, formula: str) -> CellValue:
        if self._graph.would_cycle(cell_id):
            logger.debug("Circular reference through %s: %r", cell_id, formula)
            return ERROR
        return self._evaluator.evaluate(cell_id, formula)

    def _propagate(self, cell_id: str) -> list[CellUpdate]:
        """Re-evaluate everything downstream of *cell_id*, in dependency order.

        Dependents caught in (or fed by) a loop are set to ``"ERROR"``.
        """
        try:
            order = self._graph.affected_cells(cell_id)
            stuck: list[str] = []
        except CircularReference as e:
            logger.debug("%s", e)
            order, stuck = e.order, e.cells

        updates: list[CellUpdate] = []
        for dep in order:
            value = self._evaluator.evaluate_input(dep, self._grid.raw(dep))
            self._grid.set_evaluated(dep, value)
            updates.append(CellUpdate(dep, value))
        for dep in stuck:
            self._grid.set_evaluated(dep, ERROR)
            updates.append(CellUpdate(dep, ERROR))
        return updates
