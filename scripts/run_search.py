from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path as _Path
sys.path.append(str(_Path(__file__).resolve().parents[1]))
import json
from pathlib import Path

from astar_live.astar import Cancelled, CancellationToken, Found, run_search
from astar_live.config import load_config
from astar_live.grid_map import GridMap
from astar_live.scenarios import make_random_scenario
from astar_live import viz

logger = logging.getLogger("run_search")


def summarize(outcome, grid: GridMap) -> dict:
    summary = {
        "outcome": type(outcome).__name__,
        "rows": grid.rows,
        "cols": grid.cols,
        "start": [grid.start.row, grid.start.col],
        "goal": [grid.goal.row, grid.goal.col],
        "free_cells": grid.free_count(),
        "expanded": len(grid.closed),
        "steps": None,
        "cost": None,
    }
    if isinstance(outcome, Found):
        summary["steps"] = len(outcome.path) - 1
        summary["cost"] = round(outcome.cost, 3)
        summary["path"] = [[c.row, c.col] for c in outcome.path]
    return summary


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", type=str, default=None, help="YAML file with grid/search sections")
    ap.add_argument("--outdir", type=str, default="outputs")
    ap.add_argument("--image", type=str, default=None, help="binary image to load walls from")
    ap.add_argument("--rows", type=int, default=None)
    ap.add_argument("--cols", type=int, default=None)
    ap.add_argument("--density", type=float, default=None)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--diagonal", action="store_true", default=None)
    ap.add_argument("--delay_ms", type=float, default=None)
    ap.add_argument("--frames", action="store_true", help="write one PNG per published step")
    ap.add_argument("--every", type=int, default=1)
    ap.add_argument("--scores", action="store_true", help="draw f/g/h in each scored cell")
    ap.add_argument("--log-level", type=str, default="INFO")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config)
    rows = args.rows or cfg.grid.rows
    cols = args.cols or cfg.grid.cols
    density = args.density if args.density is not None else cfg.grid.wall_density
    seed = args.seed if args.seed is not None else cfg.grid.seed
    diagonal = args.diagonal if args.diagonal is not None else cfg.search.diagonal
    delay_ms = args.delay_ms if args.delay_ms is not None else cfg.search.delay_ms

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    if args.image:
        grid = GridMap.from_binary_image(args.image)
    else:
        grid = make_random_scenario(rows, cols, density=density, seed=seed).grid
    logger.info("grid %dx%d start=%s goal=%s diagonal=%s", grid.rows, grid.cols, grid.start, grid.goal, diagonal)

    recorder = viz.FrameRecorder(grid, str(outdir / "frames"), every=args.every, show_scores=args.scores) if args.frames else None
    token = CancellationToken()
    try:
        outcome = run_search(
            grid,
            diagonal=diagonal,
            # per-expansion publishing needs animate and a positive delay
            animate=recorder is not None or cfg.search.animate,
            delay_ms=max(delay_ms, 1.0) if recorder is not None else delay_ms,
            on_step=recorder,
            cancel=token,
        )
    except KeyboardInterrupt:
        token.cancel()
        outcome = Cancelled()
    if recorder is not None:
        recorder.flush()

    if isinstance(outcome, Found):
        logger.info("Steps: %d   g(n): %.3f   expanded: %d", len(outcome.path) - 1, outcome.cost, len(grid.closed))
    elif isinstance(outcome, Cancelled):
        logger.info("Stopped.")
    else:
        logger.info("No path found.")

    viz.plot_grid(grid, title=f"A* ({'8' if diagonal else '4'}-connected): {type(outcome).__name__}", show_scores=args.scores)
    viz.save_fig(str(outdir / "final.png"))

    summary = summarize(outcome, grid)
    (outdir / "summary.json").write_text(json.dumps(summary, indent=2))
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
