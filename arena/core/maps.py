# arena/core/maps.py
#!/usr/bin/env python3
"""
JSON map files.

    {"size": 5, "start": [0, 0], "target": [4, 4],
     "cells": [[0, 1, 0, 0, 0], ...]}      # 1 = wall, 0 = open
"""

from pathlib import Path
from typing import Optional, Union
import json

from arena.core.errors import InvalidInputError
from arena.core.types import EMPTY, WALL, Grid, Position


def _position(value: object, label: str) -> Optional[Position]:
    if value is None:
        return None
    if (not isinstance(value, list) or len(value) != 2
            or any(isinstance(v, bool) or not isinstance(v, int) for v in value)):
        raise InvalidInputError(f"{label} must be a [row, col] pair of ints, got {value!r}")
    return (value[0], value[1])


def load_map(path: Union[str, Path]) -> Grid:
    try:
        with open(path, "r") as f:
            data = json.load(f)
        size = int(data["size"])
        cells = data["cells"]
        start = _position(data.get("start"), "start")
        target = _position(data.get("target"), "target")
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as ex:
        raise InvalidInputError(f"cannot load map {path}: {ex}") from ex

    if (size < 2 or not isinstance(cells, list) or len(cells) != size
            or any(not isinstance(r, list) or len(r) != size for r in cells)):
        raise InvalidInputError(f"{path}: cells must be a {size}x{size} matrix")
    if any(v not in (0, 1) or isinstance(v, bool) for row in cells for v in row):
        raise InvalidInputError(f"{path}: cells may only hold 0 (open) or 1 (wall)")
    grid = Grid(size, [[WALL if v == 1 else EMPTY for v in row] for row in cells])
    if start is not None:
        grid = grid.with_start(start)
    if target is not None:
        grid = grid.with_target(target)
    return grid


def save_map(grid: Grid, path: Union[str, Path]) -> None:
    data = {
        "size": grid.size,
        "start": list(grid.start) if grid.start is not None else None,
        "target": list(grid.target) if grid.target is not None else None,
        "cells": [[1 if k == WALL else 0 for k in row] for row in grid.cells],
    }
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
