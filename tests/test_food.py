"""Tests for the FoodSpawner module."""

import numpy as np
import pytest

from canvas_snake.food import FoodSpawner
from canvas_snake.grid import Cell, Grid


def _all_cells_except(grid: Grid, *free: Cell) -> set[Cell]:
    return {
        Cell(x, y)
        for x in range(grid.cells)
        for y in range(grid.cells)
        if Cell(x, y) not in free
    }


class TestFoodSpawnerInit:
    def test_defaults(self):
        spawner = FoodSpawner(Grid(10))
        assert spawner.recent.maxlen == 5
        assert len(spawner.recent) == 0
        assert len(spawner.events) == 0

    def test_invalid_log_size(self):
        with pytest.raises(ValueError, match="at least 1"):
            FoodSpawner(Grid(10), log_size=0)

    def test_invalid_history_size(self):
        with pytest.raises(ValueError, match=">= 0"):
            FoodSpawner(Grid(10), history_size=-1)


class TestFoodSpawning:
    def test_avoids_occupied_cells(self):
        grid = Grid(10)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(3))
        occupied = {Cell(x, 4) for x in range(10)}
        for _ in range(100):
            assert spawner.spawn(occupied) not in occupied

    def test_only_free_cell_is_chosen(self):
        grid = Grid(4)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(0))
        occupied = _all_cells_except(grid, Cell(3, 3))
        assert spawner.spawn(occupied) == Cell(3, 3)

    def test_excluded_cells_are_skipped(self):
        grid = Grid(4)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(0))
        occupied = _all_cells_except(grid, Cell(3, 3), Cell(0, 0))
        assert spawner.spawn(occupied, excluded=[Cell(0, 0)]) == Cell(3, 3)

    def test_recent_positions_are_not_reused(self):
        grid = Grid(4)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(1))
        a, b = Cell(1, 2), Cell(2, 1)
        occupied = _all_cells_except(grid, a, b)
        first = spawner.spawn(occupied)
        second = spawner.spawn(occupied)
        assert {first, second} == {a, b}

    def test_never_repeats_within_last_five(self):
        grid = Grid(10)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(42))
        results = [spawner.spawn(set()) for _ in range(200)]
        for i, cell in enumerate(results):
            assert cell not in results[max(0, i - 5):i]

    def test_history_is_fifo_bounded(self):
        spawner = FoodSpawner(Grid(10), rng=np.random.default_rng(7))
        results = [spawner.spawn(set()) for _ in range(8)]
        assert list(spawner.recent) == results[-5:]

    def test_deterministic(self):
        """Same seed produces the same placements."""
        a = FoodSpawner(Grid(10), rng=np.random.default_rng(9))
        b = FoodSpawner(Grid(10), rng=np.random.default_rng(9))
        assert [a.spawn(set()) for _ in range(5)] == [
            b.spawn(set()) for _ in range(5)
        ]


class TestFoodEventLog:
    def test_log_is_bounded(self):
        spawner = FoodSpawner(
            Grid(10), rng=np.random.default_rng(0), log_size=3,
        )
        for _ in range(10):
            spawner.spawn(set())
        assert len(spawner.events) == 3

    def test_events_record_clock_and_cell(self):
        spawner = FoodSpawner(
            Grid(10), rng=np.random.default_rng(0), clock=lambda: 123.5,
        )
        cell = spawner.spawn(set())
        event = spawner.events[-1]
        assert event.timestamp == 123.5
        assert event.cell == cell
        assert event.to_dict() == {"timestamp": 123.5, "cell": list(cell)}

    def test_reset_clears_history(self):
        spawner = FoodSpawner(Grid(10), rng=np.random.default_rng(0))
        spawner.spawn(set())
        spawner.reset()
        assert len(spawner.recent) == 0
        assert len(spawner.events) == 0
        assert spawner.to_dict() == {"recent": [], "events": []}
