"""Tests for the toroidal cell grid."""

from __future__ import annotations

import numpy as np
import pytest

from langtons_ant.model.errors import InvalidDimensionError
from langtons_ant.model.grid import Cell, CellGrid


class TestConstruction:
    @pytest.mark.parametrize("rows,columns", [(0, 5), (5, 0), (-1, 3), (0, 0)])
    def test_non_positive_dimensions_rejected(self, rows: int, columns: int) -> None:
        with pytest.raises(InvalidDimensionError):
            CellGrid(rows, columns)

    def test_invalid_dimension_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            CellGrid(0, 1)

    def test_starts_all_unmarked(self) -> None:
        grid = CellGrid(3, 5)
        assert grid.cells.shape == (3, 5)
        assert grid.marked_count() == 0

    def test_from_field_divides_by_cell_size(self) -> None:
        grid = CellGrid.from_field(width=40, height=24, cell_size=8)
        assert grid.columns == 5
        assert grid.rows == 3

    def test_from_field_reference_size(self) -> None:
        grid = CellGrid.from_field(720, 720, 8)
        assert (grid.rows, grid.columns) == (90, 90)

    def test_from_field_rejects_bad_cell_size(self) -> None:
        with pytest.raises(InvalidDimensionError):
            CellGrid.from_field(720, 720, 0)

    def test_from_field_smaller_than_one_cell(self) -> None:
        with pytest.raises(InvalidDimensionError):
            CellGrid.from_field(4, 4, 8)


class TestCells:
    def test_flip_returns_new_state(self) -> None:
        grid = CellGrid(4, 4)
        assert grid.flip(1, 2) is True
        assert grid.cell_at(1, 2) is Cell.MARKED
        assert grid.flip(1, 2) is False
        assert grid.cell_at(1, 2) is Cell.UNMARKED

    def test_api_is_x_y_array_is_y_x(self) -> None:
        grid = CellGrid(rows=2, columns=3)
        grid.set_marked(2, 1)
        assert grid.cells[1, 2]
        assert grid.is_marked(2, 1)
        assert grid.marked_count() == 1

    def test_clear(self) -> None:
        grid = CellGrid(4, 4)
        grid.cells.fill(True)
        grid.clear()
        assert grid.marked_count() == 0

    def test_copy_cells_is_detached(self) -> None:
        grid = CellGrid(2, 2)
        copy = grid.copy_cells()
        grid.flip(0, 0)
        assert not copy[0, 0]


class TestMarkRandom:
    def test_changed_cells_match_marked_count(self) -> None:
        grid = CellGrid(5, 5)
        changed = grid.mark_random(np.random.default_rng(3), samples=10)
        assert 0 < len(changed) <= 10
        assert len(set(changed)) == len(changed)
        assert grid.marked_count() == len(changed)

    def test_duplicate_picks_are_harmless(self) -> None:
        grid = CellGrid(1, 1)
        changed = grid.mark_random(np.random.default_rng(0), samples=5)
        assert changed == [(0, 0)]
        assert grid.marked_count() == 1

    def test_seeded_rng_is_reproducible(self) -> None:
        a = CellGrid(10, 10)
        b = CellGrid(10, 10)
        a.mark_random(np.random.default_rng(42), samples=20)
        b.mark_random(np.random.default_rng(42), samples=20)
        assert np.array_equal(a.cells, b.cells)

    def test_zero_samples(self) -> None:
        grid = CellGrid(3, 3)
        assert grid.mark_random(np.random.default_rng(0), samples=0) == []
