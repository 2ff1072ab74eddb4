from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb

from .grid_map import GridMap

WALL = "darkgray"
PATH = "gold"
CLOSED = ("slategray", 0.35)
OPEN = ("lightskyblue", 0.45)
START = "forestgreen"
GOAL = "indianred"


def _blend(color: str, alpha: float) -> Tuple[float, float, float]:
    r, g, b = to_rgb(color)
    return (alpha * r + (1 - alpha), alpha * g + (1 - alpha), alpha * b + (1 - alpha))


def render_snapshot(grid: GridMap) -> np.ndarray:
    """
    RGB image (rows x cols x 3, floats in [0, 1]) of the grid and its search state.
    Priority: start/goal, wall, path, closed, open, empty.
    """
    img = np.ones((grid.rows, grid.cols, 3), dtype=float)
    for c in grid.open:
        img[c.row, c.col] = _blend(*OPEN)
    for c in grid.closed:
        img[c.row, c.col] = _blend(*CLOSED)
    for c in grid.path:
        img[c.row, c.col] = to_rgb(PATH)
    img[grid.walls] = to_rgb(WALL)
    img[grid.start.row, grid.start.col] = to_rgb(START)
    img[grid.goal.row, grid.goal.col] = to_rgb(GOAL)
    return img


def plot_grid(grid: GridMap, ax: Optional[plt.Axes] = None, title: Optional[str] = None, show_scores: bool = False):
    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 7 * grid.rows / max(grid.cols, 1)))
    ax.imshow(render_snapshot(grid), origin="upper", interpolation="nearest")
    ax.set_xticks(np.arange(-0.5, grid.cols, 1), minor=True)
    ax.set_yticks(np.arange(-0.5, grid.rows, 1), minor=True)
    ax.grid(which="minor", color="black", linewidth=0.5)
    ax.tick_params(which="both", length=0, labelbottom=False, labelleft=False)
    ax.set_aspect("equal")
    if title:
        ax.set_title(title)
    if show_scores:
        for c, s in grid.scores.items():
            ax.text(c.col - 0.45, c.row - 0.45, f"f:{s.f:.1f}\ng:{s.g:.1f}\nh:{s.h:.1f}",
                    fontsize=5, va="top", ha="left")
    return ax


def save_fig(path: str):
    plt.tight_layout(pad=0.2)
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close()


class FrameRecorder:
    """
    on_step callback that writes one PNG per published snapshot.
    ``every`` keeps only every n-th frame; the final one is written by flush().
    """
    def __init__(self, grid: GridMap, outdir: str, every: int = 1, show_scores: bool = False):
        if every < 1:
            raise ValueError("every must be >= 1")
        self.grid = grid
        self.outdir = Path(outdir)
        self.outdir.mkdir(parents=True, exist_ok=True)
        self.every = every
        self.show_scores = show_scores
        self.calls = 0
        self.frames = []

    def _write(self) -> None:
        path = self.outdir / f"frame_{len(self.frames):05d}.png"
        plot_grid(self.grid, title=f"step {self.calls}", show_scores=self.show_scores)
        save_fig(str(path))
        self.frames.append(path)

    def __call__(self) -> None:
        self.calls += 1
        if (self.calls - 1) % self.every == 0:
            self._write()

    def flush(self) -> None:
        if self.calls and (self.calls - 1) % self.every != 0:
            self._write()
