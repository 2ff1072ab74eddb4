from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path as _Path
sys.path.append(str(_Path(__file__).resolve().parents[1]))
import json
import time

import numpy as np

from astar_live.astar import Found, run_search
from astar_live.scenarios import make_random_scenario

logger = logging.getLogger("benchmark")


def bench(rows: int, cols: int, density: float, seeds: int, diagonal: bool) -> dict:
    expanded = []
    costs = []
    found = 0
    t0 = time.perf_counter()
    for seed in range(seeds):
        grid = make_random_scenario(rows, cols, density=density, seed=seed).grid
        outcome = run_search(grid, diagonal=diagonal)
        expanded.append(len(grid.closed))
        if isinstance(outcome, Found):
            found += 1
            costs.append(outcome.cost)
    elapsed = time.perf_counter() - t0
    return {
        "diagonal": diagonal,
        "runs": seeds,
        "found_rate": found / seeds if seeds else 0.0,
        "mean_expanded": float(np.mean(expanded)) if expanded else 0.0,
        "mean_cost": float(np.mean(costs)) if costs else None,
        "seconds": round(elapsed, 4),
    }


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--rows", type=int, default=22)
    ap.add_argument("--cols", type=int, default=34)
    ap.add_argument("--density", type=float, default=0.28)
    ap.add_argument("--seeds", type=int, default=100)
    ap.add_argument("--log-level", type=str, default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    results = [bench(args.rows, args.cols, args.density, args.seeds, diagonal) for diagonal in (False, True)]
    for r in results:
        logger.info("%s", r)
    print(json.dumps(results, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
