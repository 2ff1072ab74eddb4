from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Set
import numpy as np

from .costs import directions


@dataclass(frozen=True, order=True)
class Cell:
    row: int
    col: int

    def offset(self, drow: int, dcol: int) -> "Cell":
        return Cell(self.row + drow, self.col + dcol)


@dataclass(frozen=True)
class Score:
    g: float
    h: float
    f: float


@dataclass(frozen=True)
class SearchSnapshot:
    open: FrozenSet[Cell]
    closed: FrozenSet[Cell]
    path: FrozenSet[Cell]
    scores: Dict[Cell, Score]
    last_cost: float


class GridMap:
    """
    Binary passability grid plus the state of the most recent search.

    Conventions:
    - walls[row, col] == True means impassable
    - cells are Cell(row, col), with 0 <= row < rows, 0 <= col < cols
    - row increases downward (array indexing convention)

    The open/closed/path/scores fields belong to the search that is currently
    running on this grid. Nothing else may write them until it finishes or is
    cancelled; readers (redraw callbacks) may look at them at any time.
    """
    def __init__(self, walls: np.ndarray, start: Optional[Cell] = None, goal: Optional[Cell] = None):
        walls = np.asarray(walls)
        if walls.ndim != 2:
            raise ValueError("walls must be a 2D array")
        if walls.shape[0] <= 0 or walls.shape[1] <= 0:
            raise ValueError("grid dimensions must be positive")
        self.walls = walls > 0
        self.rows, self.cols = self.walls.shape

        self.start = Cell(0, 0)
        self.goal = Cell(self.rows - 1, self.cols - 1)
        self.set_start(start if start is not None else self.start)
        self.set_goal(goal if goal is not None else self.goal)

        self.open: Set[Cell] = set()
        self.closed: Set[Cell] = set()
        self.path: Set[Cell] = set()
        self.scores: Dict[Cell, Score] = {}
        self.last_cost: float = 0.0

    @staticmethod
    def from_binary_image(path: str, wall_is_black: bool = True, threshold: int = 128) -> "GridMap":
        from PIL import Image
        img = Image.open(path).convert("L")
        arr = np.array(img)
        if wall_is_black:
            walls = arr < threshold
        else:
            walls = arr >= threshold
        return GridMap(walls)

    # -------------------- queries --------------------

    def in_bounds(self, c: Cell) -> bool:
        return 0 <= c.row < self.rows and 0 <= c.col < self.cols

    def passable(self, c: Cell) -> bool:
        return self.in_bounds(c) and not bool(self.walls[c.row, c.col])

    def neighbors(self, c: Cell, diagonal: bool = False) -> List[Cell]:
        """
        Passable neighbours of c, in the fixed order of costs.directions().
        """
        out: List[Cell] = []
        for dr, dc in directions(diagonal):
            nb = c.offset(dr, dc)
            if self.passable(nb):
                out.append(nb)
        return out

    def free_count(self) -> int:
        return int(np.count_nonzero(~self.walls))

    # -------------------- editor mutators --------------------

    def _check(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise ValueError(f"cell {c} is outside the {self.rows}x{self.cols} grid")

    def set_wall(self, c: Cell, value: bool = True) -> None:
        self._check(c)
        self.walls[c.row, c.col] = bool(value)

    def set_start(self, c: Cell) -> None:
        self._check(c)
        self.start = c
        self.walls[c.row, c.col] = False

    def set_goal(self, c: Cell) -> None:
        self._check(c)
        self.goal = c
        self.walls[c.row, c.col] = False

    def clear_walls(self) -> None:
        self.walls[:, :] = False

    def clear_search(self) -> None:
        self.open.clear()
        self.closed.clear()
        self.path.clear()
        self.scores.clear()

    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot(
            open=frozenset(self.open),
            closed=frozenset(self.closed),
            path=frozenset(self.path),
            scores=dict(self.scores),
            last_cost=self.last_cost,
        )


def new_grid(rows: int, cols: int) -> GridMap:
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive")
    return GridMap(np.zeros((rows, cols), dtype=bool))
