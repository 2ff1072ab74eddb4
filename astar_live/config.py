"""Run configuration: dataclasses plus an optional YAML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


@dataclass
class SearchConfig:
    diagonal: bool = False
    animate: bool = False
    delay_ms: float = 0.0  # 0 = run without pausing

    def __post_init__(self) -> None:
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")


@dataclass
class GridConfig:
    rows: int = 22
    cols: int = 34
    wall_density: float = 0.22
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("rows and cols must be positive")
        if not 0.0 <= self.wall_density <= 1.0:
            raise ValueError("wall_density must be within [0, 1]")


@dataclass
class AppConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    search: SearchConfig = field(default_factory=SearchConfig)


def _parse_config(data: Dict[str, Any]) -> AppConfig:
    grid_data = data.get("grid") or {}
    seed = grid_data.get("seed")
    grid = GridConfig(
        rows=int(grid_data.get("rows", 22)),
        cols=int(grid_data.get("cols", 34)),
        wall_density=float(grid_data.get("wall_density", 0.22)),
        seed=int(seed) if seed is not None else None,
    )

    search_data = data.get("search") or {}
    search = SearchConfig(
        diagonal=bool(search_data.get("diagonal", False)),
        animate=bool(search_data.get("animate", False)),
        delay_ms=float(search_data.get("delay_ms", 0)),
    )
    return AppConfig(grid=grid, search=search)


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load ``path`` if it exists, otherwise return the defaults."""

    if path is not None and Path(path).is_file():
        raw = yaml.safe_load(Path(path).read_text()) or {}
    else:
        raw = {}
    return _parse_config(raw)


__all__ = ["AppConfig", "GridConfig", "SearchConfig", "load_config"]
