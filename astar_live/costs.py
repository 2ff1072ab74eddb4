from __future__ import annotations

from typing import List, Tuple
import math

Move = Tuple[int, int]  # (drow, dcol)

SQRT2 = math.sqrt(2.0)

# up, down, left, right
DIRS4: List[Move] = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIRS8: List[Move] = DIRS4 + [(-1, -1), (-1, 1), (1, -1), (1, 1)]


def directions(diagonal: bool) -> List[Move]:
    return DIRS8 if diagonal else DIRS4


def step_cost(a, b) -> float:
    """
    Cost of moving between two adjacent cells: sqrt(2) for a diagonal move,
    1.0 otherwise. Not meaningful for non-adjacent cells.
    """
    if a.row != b.row and a.col != b.col:
        return SQRT2
    return 1.0


def manhattan(a, b) -> float:
    return float(abs(a.row - b.row) + abs(a.col - b.col))


def octile(a, b) -> float:
    dr = abs(a.row - b.row)
    dc = abs(a.col - b.col)
    return (dr + dc) + (SQRT2 - 2.0) * min(dr, dc)


def heuristic(a, goal, diagonal: bool) -> float:
    """
    Admissible and consistent estimate for the matching movement model:
    Manhattan for 4-connected moves, octile for 8-connected moves.
    """
    if diagonal:
        return octile(a, goal)
    return manhattan(a, goal)
