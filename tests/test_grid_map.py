import numpy as np
import pytest

from astar_live.grid_map import Cell, GridMap, Score, new_grid


def test_new_grid_defaults():
    g = new_grid(4, 6)
    assert (g.rows, g.cols) == (4, 6)
    assert g.walls.shape == (4, 6)
    assert not g.walls.any()
    assert g.start == Cell(0, 0)
    assert g.goal == Cell(3, 5)
    assert g.open == set() and g.closed == set() and g.path == set()
    assert g.scores == {}
    assert g.last_cost == 0.0


@pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, 2)])
def test_new_grid_rejects_bad_dimensions(rows, cols):
    with pytest.raises(ValueError):
        new_grid(rows, cols)


def test_walls_must_be_2d():
    with pytest.raises(ValueError):
        GridMap(np.zeros(5))


def test_cell_is_a_value():
    a = Cell(1, 2)
    assert a == Cell(1, 2)
    assert hash(a) == hash(Cell(1, 2))
    assert {a, Cell(1, 2)} == {a}
    b = a.offset(1, -1)
    assert b == Cell(2, 1)
    assert a == Cell(1, 2)


def test_in_bounds_and_passable():
    g = new_grid(3, 3)
    g.set_wall(Cell(1, 1))
    assert g.in_bounds(Cell(2, 2))
    assert not g.in_bounds(Cell(3, 0))
    assert not g.in_bounds(Cell(0, -1))
    assert not g.passable(Cell(1, 1))
    assert g.passable(Cell(0, 1))
    # out of bounds is never passable and never indexes the array
    assert not g.passable(Cell(-1, 0))
    assert not g.passable(Cell(0, 3))


def test_mutators_reject_out_of_bounds():
    g = new_grid(3, 3)
    for bad in (Cell(3, 0), Cell(0, -1)):
        with pytest.raises(ValueError):
            g.set_wall(bad)
        with pytest.raises(ValueError):
            g.set_start(bad)
        with pytest.raises(ValueError):
            g.set_goal(bad)


def test_set_start_and_goal_clear_walls():
    g = new_grid(3, 3)
    g.set_wall(Cell(1, 2))
    g.set_wall(Cell(2, 0))
    g.set_start(Cell(1, 2))
    g.set_goal(Cell(2, 0))
    assert g.start == Cell(1, 2) and g.passable(Cell(1, 2))
    assert g.goal == Cell(2, 0) and g.passable(Cell(2, 0))


def test_clear_walls():
    g = new_grid(3, 4)
    g.set_wall(Cell(0, 1))
    g.set_wall(Cell(2, 3), True)
    g.set_wall(Cell(2, 3), False)
    assert int(g.walls.sum()) == 1
    g.clear_walls()
    assert not g.walls.any()
    assert g.free_count() == 12


def test_constructor_copies_walls():
    occ = np.zeros((2, 2), dtype=np.uint8)
    occ[0, 1] = 1
    g = GridMap(occ)
    occ[1, 0] = 1
    assert g.walls.dtype == bool
    assert g.walls[0, 1]
    assert not g.walls[1, 0]


def test_neighbors_respect_bounds_walls_and_model():
    g = new_grid(3, 3)
    assert set(g.neighbors(Cell(0, 0))) == {Cell(1, 0), Cell(0, 1)}
    assert set(g.neighbors(Cell(0, 0), diagonal=True)) == {Cell(1, 0), Cell(0, 1), Cell(1, 1)}
    g.set_wall(Cell(1, 1))
    assert len(g.neighbors(Cell(1, 0), diagonal=True)) == 4
    assert Cell(1, 1) not in g.neighbors(Cell(1, 0), diagonal=True)


def test_snapshot_is_a_copy():
    g = new_grid(2, 2)
    g.open.add(Cell(0, 1))
    g.scores[Cell(0, 1)] = Score(1.0, 1.0, 2.0)
    snap = g.snapshot()
    g.clear_search()
    assert snap.open == frozenset({Cell(0, 1)})
    assert snap.scores[Cell(0, 1)].f == 2.0
    assert g.open == set() and g.scores == {}


def test_from_binary_image(tmp_path):
    from PIL import Image

    arr = np.full((3, 4), 255, dtype=np.uint8)
    arr[1, 2] = 0
    path = tmp_path / "map.png"
    Image.fromarray(arr).save(path)

    g = GridMap.from_binary_image(str(path))
    assert (g.rows, g.cols) == (3, 4)
    assert g.walls[1, 2]
    assert int(g.walls.sum()) == 1

    inverted = GridMap.from_binary_image(str(path), wall_is_black=False)
    # start and goal corners are always cleared
    assert int(inverted.walls.sum()) == 12 - 1 - 2
