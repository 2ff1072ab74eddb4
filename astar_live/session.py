"""
Background runner that keeps at most one search active per grid.

Starting a new run, clearing or re-randomizing the walls all cancel the run
in flight first, so only one run's on_step callback can be delivering
snapshot updates at any moment.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from .astar import CancellationToken, SearchOutcome, run_search
from .config import SearchConfig
from .grid_map import Cell, GridMap
from .scenarios import random_walls

logger = logging.getLogger(__name__)


class SearchSession:
    def __init__(self, grid: GridMap, config: Optional[SearchConfig] = None):
        self.grid = grid
        self.config = config or SearchConfig()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="astar")
        self._token: Optional[CancellationToken] = None
        self._future: Optional[Future] = None

    def start(
        self,
        on_step: Optional[Callable[[], None]] = None,
        config: Optional[SearchConfig] = None,
    ) -> "Future[SearchOutcome]":
        """Cancel any active run and queue a fresh one on the worker thread."""
        self.stop()
        cfg = config or self.config
        token = CancellationToken()
        self._token = token
        self._future = self._executor.submit(
            run_search,
            self.grid,
            diagonal=cfg.diagonal,
            animate=cfg.animate,
            delay_ms=cfg.delay_ms,
            on_step=on_step,
            cancel=token,
        )
        return self._future

    def stop(self) -> None:
        if self._token is not None:
            self._token.cancel()

    def wait_idle(self) -> None:
        """Block until the most recently started run has returned."""
        if self._future is not None:
            self._future.result()

    @property
    def running(self) -> bool:
        return self._future is not None and not self._future.done()

    # -------------------- edits --------------------
    # Every edit stops the active run and waits for it to return before
    # touching the grid, then drops the now stale search state.

    def _halt(self) -> None:
        self.stop()
        self.wait_idle()

    def set_wall(self, cell: Cell, value: bool = True) -> None:
        """Paint or erase a wall; painting over start or goal is ignored."""
        self._halt()
        if value and cell in (self.grid.start, self.grid.goal):
            return
        self.grid.set_wall(cell, value)
        self.grid.clear_search()

    def set_start(self, cell: Cell) -> None:
        self._halt()
        self.grid.set_start(cell)
        self.grid.clear_search()

    def set_goal(self, cell: Cell) -> None:
        self._halt()
        self.grid.set_goal(cell)
        self.grid.clear_search()

    def clear_walls(self) -> None:
        self._halt()
        self.grid.clear_walls()
        self.grid.clear_search()

    def randomize(self, density: float, seed: Optional[int] = None) -> None:
        self._halt()
        random_walls(self.grid, density, seed=seed)
        logger.debug("randomized %dx%d grid, density=%.2f", self.grid.rows, self.grid.cols, density)

    def close(self) -> None:
        self.stop()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "SearchSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
