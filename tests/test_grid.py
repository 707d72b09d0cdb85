"""Tests for gridcalc Grid."""

from __future__ import annotations

import pytest

from gridcalc._cell import CellView
from gridcalc._errors import MalformedId, UnknownCell
from gridcalc._grid import DEFAULT_COLS, DEFAULT_ROWS, Grid


class TestConstruction:
    def test_defaults(self) -> None:
        grid = Grid()
        assert grid.dimensions == (DEFAULT_ROWS, DEFAULT_COLS) == (20, 10)
        assert len(grid) == 200

    def test_every_cell_starts_blank(self) -> None:
        grid = Grid(3, 4)
        views = [view for _, view in grid.iter_cells()]
        assert len(views) == 12
        assert all(v == CellView("", "") for v in views)

    @pytest.mark.parametrize("rows, cols", [(0, 5), (5, 0), (5, 27), (-1, 3)])
    def test_bad_dimensions(self, rows: int, cols: int) -> None:
        with pytest.raises(ValueError):
            Grid(rows, cols)

    def test_twenty_six_columns_allowed(self) -> None:
        grid = Grid(1, 26)
        assert "Z1" in grid


class TestAccess:
    def test_get_unknown_cell(self) -> None:
        grid = Grid(2, 2)
        with pytest.raises(UnknownCell):
            grid.get("C1")
        with pytest.raises(UnknownCell):
            grid.get("A3")

    def test_unknown_cell_is_key_error(self) -> None:
        grid = Grid(2, 2)
        with pytest.raises(KeyError):
            grid["B3"]

    def test_get_malformed(self) -> None:
        grid = Grid(2, 2)
        with pytest.raises(MalformedId):
            grid.get("A-1")

    def test_set_raw_leaves_value(self) -> None:
        grid = Grid(2, 2)
        grid.set_raw("A1", "5")
        assert grid.get("A1") == CellView("5", "")

    def test_set_evaluated(self) -> None:
        grid = Grid(2, 2)
        grid.set_raw("A1", "5")
        grid.set_evaluated("A1", 5)
        assert grid["A1"].evaluated_value == 5
        assert grid.raw("A1") == "5"
        assert grid.value("A1") == 5

    def test_views_are_snapshots(self) -> None:
        grid = Grid(2, 2)
        view = grid.get("A1")
        grid.set_raw("A1", "x")
        assert view.raw_input == ""
        with pytest.raises(AttributeError):
            view.raw_input = "y"  # type: ignore[misc]

    def test_contains(self) -> None:
        grid = Grid(2, 2)
        assert "B2" in grid
        assert "C2" not in grid
        assert "nonsense" not in grid
        assert 5 not in grid

    def test_cell_id(self) -> None:
        grid = Grid(2, 2)
        assert grid.cell_id(1, 1) == "B2"


class TestClearAndIteration:
    def test_clear_all(self) -> None:
        grid = Grid(2, 2)
        grid.set_raw("B2", "hi")
        grid.set_evaluated("B2", "hi")
        grid.clear_all()
        assert grid.get("B2") == CellView("", "")
        assert grid.dimensions == (2, 2)

    def test_row_major_order(self) -> None:
        grid = Grid(2, 3)
        assert list(grid.cell_ids()) == ["A1", "B1", "C1", "A2", "B2", "C2"]

    def test_for_each_cell(self) -> None:
        grid = Grid(2, 2)
        seen: list[str] = []
        grid.for_each_cell(lambda cell_id, view: seen.append(cell_id))
        assert seen == ["A1", "B1", "A2", "B2"]

    def test_values_skips_blanks(self) -> None:
        grid = Grid(2, 2)
        grid.set_raw("B1", "7")
        grid.set_evaluated("B1", 7)
        assert grid.values() == {"B1": 7}
