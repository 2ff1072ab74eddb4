import math

import pytest

from astar_live.costs import DIRS4, DIRS8, directions, heuristic, manhattan, octile, step_cost
from astar_live.grid_map import Cell


def test_step_cost_straight_and_diagonal():
    a = Cell(2, 2)
    assert step_cost(a, Cell(1, 2)) == 1.0
    assert step_cost(a, Cell(2, 3)) == 1.0
    assert step_cost(a, Cell(3, 3)) == pytest.approx(math.sqrt(2))
    assert step_cost(a, Cell(1, 1)) == pytest.approx(math.sqrt(2))


def test_manhattan_and_octile():
    a, b = Cell(0, 0), Cell(3, 5)
    assert manhattan(a, b) == 8
    # 3 diagonal steps + 2 straight
    assert octile(a, b) == pytest.approx(3 * math.sqrt(2) + 2)
    assert octile(b, a) == pytest.approx(octile(a, b))


def test_heuristic_selects_model():
    a, b = Cell(0, 0), Cell(2, 2)
    assert heuristic(a, b, diagonal=False) == 4
    assert heuristic(a, b, diagonal=True) == pytest.approx(2 * math.sqrt(2))
    assert heuristic(b, b, diagonal=True) == 0


@pytest.mark.parametrize("diagonal", [False, True])
def test_heuristic_consistent_along_every_move(diagonal):
    goal = Cell(4, 7)
    for r in range(-2, 9):
        for c in range(-2, 11):
            a = Cell(r, c)
            for dr, dc in directions(diagonal):
                b = a.offset(dr, dc)
                assert heuristic(a, goal, diagonal) <= step_cost(a, b) + heuristic(b, goal, diagonal) + 1e-9


def test_direction_sets():
    assert directions(False) == DIRS4
    assert len(DIRS4) == 4
    assert len(DIRS8) == 8
    assert set(DIRS4) < set(DIRS8)
    assert (0, 0) not in DIRS8
