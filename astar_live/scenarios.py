from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import numpy as np
import random

from .grid_map import GridMap, Cell, new_grid


@dataclass
class Scenario:
    name: str
    grid: GridMap


def random_walls(grid: GridMap, density: float, seed: Optional[int] = None) -> GridMap:
    """
    Refill every cell as a wall with probability ``density``, move start/goal
    back to the opposite corners and keep both of them passable.
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError("density must be within [0, 1]")
    rng = random.Random(seed)
    for r in range(grid.rows):
        for c in range(grid.cols):
            grid.walls[r, c] = rng.random() < density

    grid.set_start(Cell(0, 0))
    grid.set_goal(Cell(grid.rows - 1, grid.cols - 1))
    grid.clear_search()
    return grid


def make_random_scenario(rows: int = 22, cols: int = 34, density: float = 0.22, seed: Optional[int] = None) -> Scenario:
    grid = random_walls(new_grid(rows, cols), density, seed=seed)
    return Scenario(name=f"random_seed_{seed}", grid=grid)


def make_corridor_scenario(rows: int = 12, cols: int = 20) -> Scenario:
    """
    Deterministic map: a vertical wall splits the grid, with a single gap
    near the bottom, so the search has to sweep most of the left half
    before it finds the way through.
    """
    if rows < 3 or cols < 3:
        raise ValueError("corridor scenario needs at least a 3x3 grid")
    walls = np.zeros((rows, cols), dtype=bool)
    wall_col = cols // 2
    walls[:, wall_col] = True
    walls[rows - 2, wall_col] = False  # gap
    grid = GridMap(walls, start=Cell(0, 0), goal=Cell(0, cols - 1))
    return Scenario(name="corridor", grid=grid)


def make_sealed_scenario(rows: int = 10, cols: int = 10) -> Scenario:
    """Goal enclosed by a ring of walls, so no path exists."""
    if rows < 4 or cols < 4:
        raise ValueError("sealed scenario needs at least a 4x4 grid")
    walls = np.zeros((rows, cols), dtype=bool)
    walls[rows - 3:, cols - 3] = True
    walls[rows - 3, cols - 3:] = True
    grid = GridMap(walls, start=Cell(0, 0), goal=Cell(rows - 1, cols - 1))
    return Scenario(name="sealed", grid=grid)
