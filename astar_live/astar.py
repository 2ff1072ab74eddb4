"""
Incremental A* over a GridMap.

AStarSearch performs one node expansion per step() and keeps the grid's
open/closed/path/scores fields in sync, so a redraw callback can show the
frontier as it grows. run_search() and run_search_async() are the drivers:
they own publishing, the inter-step delay and cancellation.

Equal-f frontier entries are expanded in insertion order (FIFO). This only
changes which of several equally good cells is expanded first; outcomes and
path costs do not depend on it.
"""

from __future__ import annotations

import asyncio
import heapq
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from .costs import heuristic, step_cost
from .grid_map import Cell, GridMap, Score

logger = logging.getLogger(__name__)


@dataclass
class Found:
    path: List[Cell]
    cost: float
    expanded: int = 0


@dataclass
class NotFound:
    expanded: int = 0


@dataclass
class Cancelled:
    pass


SearchOutcome = Union[Found, NotFound, Cancelled]


class CancellationToken:
    """Cooperative stop flag shared between a run and whoever may stop it."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; return True early if cancelled."""
        return self._event.wait(timeout)


class AStarSearch:
    def __init__(self, grid: GridMap, diagonal: bool = False):
        if not grid.in_bounds(grid.start):
            raise ValueError(f"start {grid.start} is outside the grid")
        if not grid.in_bounds(grid.goal):
            raise ValueError(f"goal {grid.goal} is outside the grid")

        self.grid = grid
        self.diagonal = diagonal
        self.goal = grid.goal
        self.expanded = 0
        self.outcome: Optional[SearchOutcome] = None

        self.open_heap: List[Tuple[float, int, float, Cell]] = []  # (f, seq, g, cell)
        self.counter = 0
        self.g: Dict[Cell, float] = {}
        self.came_from: Dict[Cell, Cell] = {}

        grid.clear_search()
        start = grid.start
        self.g[start] = 0.0
        h0 = self._h(start)
        heapq.heappush(self.open_heap, (h0, self.counter, 0.0, start))
        grid.open.add(start)
        grid.scores[start] = Score(0.0, h0, h0)

    def _h(self, c: Cell) -> float:
        return heuristic(c, self.goal, self.diagonal)

    def _pop_current(self) -> Optional[Cell]:
        while self.open_heap:
            _, _, g, cell = heapq.heappop(self.open_heap)
            # superseded by a cheaper push of the same cell
            if g > self.g[cell]:
                continue
            return cell
        return None

    def _reconstruct(self, current: Cell) -> List[Cell]:
        path = [current]
        while path[-1] in self.came_from:
            path.append(self.came_from[path[-1]])
        path.reverse()
        return path

    def step(self) -> Optional[SearchOutcome]:
        """
        Expand one node. Returns None while the search should continue,
        otherwise the terminal Found/NotFound outcome (repeated on later calls).
        """
        if self.outcome is not None:
            return self.outcome

        grid = self.grid
        current = self._pop_current()
        if current is None:
            self.outcome = NotFound(expanded=self.expanded)
            return self.outcome

        grid.open.discard(current)
        grid.closed.add(current)
        self.expanded += 1

        if current == self.goal:
            path = self._reconstruct(current)
            cost = self.g[current]
            grid.path = set(path)
            grid.last_cost = cost
            self.outcome = Found(path=path, cost=cost, expanded=self.expanded)
            return self.outcome

        g_cur = self.g[current]
        for nb in grid.neighbors(current, self.diagonal):
            tentative = g_cur + step_cost(current, nb)
            if nb not in self.g or tentative < self.g[nb]:
                self.g[nb] = tentative
                self.came_from[nb] = current
                h = self._h(nb)
                f = tentative + h
                self.counter += 1
                heapq.heappush(self.open_heap, (f, self.counter, tentative, nb))
                if nb not in grid.closed:
                    grid.open.add(nb)
                grid.scores[nb] = Score(tentative, h, f)
        return None


def _publish(on_step: Optional[Callable[[], None]]) -> None:
    if on_step is not None:
        on_step()


def run_search(
    grid: GridMap,
    diagonal: bool = False,
    animate: bool = False,
    delay_ms: float = 0,
    on_step: Optional[Callable[[], None]] = None,
    cancel: Optional[CancellationToken] = None,
) -> SearchOutcome:
    """
    Run A* to completion on the calling thread.

    on_step is called with no arguments whenever the grid's snapshot fields
    have changed: once after seeding, after every expansion when animating
    with a positive delay, and once at the end. Signalling ``cancel`` from
    another thread makes the run return Cancelled() at the next check.
    """
    if delay_ms < 0:
        raise ValueError("delay_ms must be >= 0")
    token = cancel or CancellationToken()
    search = AStarSearch(grid, diagonal=diagonal)
    pause = animate and delay_ms > 0
    logger.debug("search start=%s goal=%s diagonal=%s", grid.start, grid.goal, diagonal)

    _publish(on_step)
    while True:
        if token.cancelled:
            logger.debug("search cancelled after %d expansions", search.expanded)
            return Cancelled()
        outcome = search.step()
        if outcome is not None:
            _publish(on_step)
            logger.debug("search finished: %s", outcome)
            return outcome
        if pause:
            _publish(on_step)
            if token.wait(delay_ms / 1000.0):
                logger.debug("search cancelled after %d expansions", search.expanded)
                return Cancelled()


async def run_search_async(
    grid: GridMap,
    diagonal: bool = False,
    animate: bool = False,
    delay_ms: float = 0,
    on_step: Optional[Callable[[], None]] = None,
    cancel: Optional[CancellationToken] = None,
) -> SearchOutcome:
    """
    Same contract as run_search for asyncio callers. The delay is spent in
    token.wait on the loop's default executor, so a cancel from any thread
    ends it at once while the event loop stays free.
    """
    if delay_ms < 0:
        raise ValueError("delay_ms must be >= 0")
    token = cancel or CancellationToken()
    search = AStarSearch(grid, diagonal=diagonal)
    pause = animate and delay_ms > 0
    loop = asyncio.get_running_loop()
    logger.debug("search start=%s goal=%s diagonal=%s", grid.start, grid.goal, diagonal)

    _publish(on_step)
    while True:
        if token.cancelled:
            logger.debug("search cancelled after %d expansions", search.expanded)
            return Cancelled()
        outcome = search.step()
        if outcome is not None:
            _publish(on_step)
            logger.debug("search finished: %s", outcome)
            return outcome
        if pause:
            _publish(on_step)
            if await loop.run_in_executor(None, token.wait, delay_ms / 1000.0):
                logger.debug("search cancelled after %d expansions", search.expanded)
                return Cancelled()
