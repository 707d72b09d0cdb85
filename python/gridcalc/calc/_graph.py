"""Dependency graph for formula cells with topological ordering."""

from __future__ import annotations

import heapq
import logging
from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

from gridcalc._errors import CircularReference
from gridcalc._utils import decode
from gridcalc.calc._parser import is_formula, parse_references

if TYPE_CHECKING:
    from gridcalc._grid import Grid

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Tracks which formula cells read from which cells.

    Both directions are kept and updated incrementally whenever a cell's
    input changes, so finding dependents never rescans the grid.
    """

    __slots__ = ("dependencies", "dependents")

    def __init__(self) -> None:
        # formula cell -> cells it reads from
        self.dependencies: dict[str, set[str]] = {}
        # cell -> formula cells that read from it (reverse edges)
        self.dependents: dict[str, set[str]] = {}

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def set_formula(self, cell_ref: str, refs: Iterable[str]) -> None:
        """Register *cell_ref* as a formula reading from *refs*.

        Replaces whatever *cell_ref* depended on before.
        """
        self.remove_formula(cell_ref)
        deps = set(refs)
        self.dependencies[cell_ref] = deps
        for ref in deps:
            self.dependents.setdefault(ref, set()).add(cell_ref)

    def remove_formula(self, cell_ref: str) -> None:
        """Forget the outgoing edges of *cell_ref*. Its dependents stay."""
        for ref in self.dependencies.pop(cell_ref, ()):
            readers = self.dependents.get(ref)
            if readers is None:
                continue
            readers.discard(cell_ref)
            if not readers:
                del self.dependents[ref]

    def update(self, cell_ref: str, raw: str) -> None:
        """Sync the edges of *cell_ref* with its new raw input."""
        if is_formula(raw):
            self.set_formula(cell_ref, parse_references(raw))
        else:
            self.remove_formula(cell_ref)

    def clear(self) -> None:
        self.dependencies.clear()
        self.dependents.clear()

    @property
    def formula_cells(self) -> set[str]:
        return set(self.dependencies)

    def dependencies_of(self, cell_ref: str) -> set[str]:
        return set(self.dependencies.get(cell_ref, ()))

    def dependents_of(self, cell_ref: str) -> list[str]:
        """Direct dependents in row-major grid order."""
        return sorted(self.dependents.get(cell_ref, ()), key=decode)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_dependents(self, cell_ref: str) -> list[str]:
        """All direct and transitive dependents, in order of discovery.

        Depth-first pre-order: each direct dependent (row-major order) is
        emitted, then everything that depends on it, before its next
        sibling. Every cell is emitted once; *cell_ref* itself never is.
        """
        order: list[str] = []
        visited: set[str] = {cell_ref}
        stack = [iter(self.dependents_of(cell_ref))]
        while stack:
            for dep in stack[-1]:
                if dep not in visited:
                    visited.add(dep)
                    order.append(dep)
                    stack.append(iter(self.dependents_of(dep)))
                    break
            else:
                stack.pop()
        return order

    def would_cycle(self, cell_ref: str) -> bool:
        """True when *cell_ref* (directly or not) depends on itself."""
        queue: deque[str] = deque(self.dependents.get(cell_ref, ()))
        seen: set[str] = set(queue)
        while queue:
            cell = queue.popleft()
            if cell == cell_ref:
                return True
            for dep in self.dependents.get(cell, ()):
                if dep not in seen:
                    seen.add(dep)
                    queue.append(dep)
        return False

    def affected_cells(self, cell_ref: str) -> list[str]:
        """Dependents of *cell_ref* in evaluation order (Kahn's algorithm).

        Each cell comes after every affected cell it reads from. Among cells
        that are ready at the same time, discovery order wins, so a plain
        chain comes out exactly as :meth:`find_dependents` lists it.

        Raises CircularReference if some dependents form a loop.
        """
        discovered = self.find_dependents(cell_ref)
        if not discovered:
            return []
        rank = {cell: i for i, cell in enumerate(discovered)}
        affected = set(discovered)

        # Only count deps that are themselves affected
        in_degree = {
            cell: len(self.dependencies.get(cell, set()) & affected)
            for cell in discovered
        }
        ready = [(rank[cell], cell) for cell in discovered if in_degree[cell] == 0]
        heapq.heapify(ready)

        order: list[str] = []
        while ready:
            _, cell = heapq.heappop(ready)
            order.append(cell)
            for dep in self.dependents.get(cell, ()):
                if dep in in_degree:
                    in_degree[dep] -= 1
                    if in_degree[dep] == 0:
                        heapq.heappush(ready, (rank[dep], dep))

        if len(order) != len(discovered):
            stuck = affected - set(order)
            logger.debug("Cycle among dependents of %s: %s", cell_ref, sorted(stuck))
            raise CircularReference(stuck, order)
        return order

    def topological_order(self) -> list[str]:
        """Every formula cell in evaluation order (row-major among equals).

        Raises CircularReference if a circular reference is detected.
        """
        formula_cells = sorted(self.dependencies, key=decode)
        if not formula_cells:
            return []
        rank = {cell: i for i, cell in enumerate(formula_cells)}
        formula_set = set(formula_cells)

        # Only count deps that are themselves formula cells
        in_degree = {
            cell: len(self.dependencies[cell] & formula_set) for cell in formula_cells
        }
        ready = [(rank[cell], cell) for cell in formula_cells if in_degree[cell] == 0]
        heapq.heapify(ready)

        order: list[str] = []
        while ready:
            _, cell = heapq.heappop(ready)
            order.append(cell)
            for dep in self.dependents.get(cell, ()):
                in_degree[dep] -= 1
                if in_degree[dep] == 0:
                    heapq.heappush(ready, (rank[dep], dep))

        if len(order) != len(formula_cells):
            raise CircularReference(formula_set - set(order), order)
        return order

    def max_depth(self, cell_ref: str) -> int:
        """Longest dependency chain hanging off *cell_ref*.

        Cells caught in a loop are left out.
        """
        try:
            order = self.affected_cells(cell_ref)
        except CircularReference as e:
            order = e.order
        depth: dict[str, int] = {cell_ref: 0}
        max_d = 0
        for cell in order:
            parents = [depth[p] for p in self.dependencies.get(cell, ()) if p in depth]
            depth[cell] = max(parents, default=0) + 1
            max_d = max(max_d, depth[cell])
        return max_d

    @classmethod
    def from_grid(cls, grid: Grid) -> DependencyGraph:
        """Build a graph by scanning a grid for formula cells."""
        graph = cls()
        for cell_ref, view in grid.iter_cells():
            if is_formula(view.raw_input):
                graph.set_formula(cell_ref, parse_references(view.raw_input))
        return graph
