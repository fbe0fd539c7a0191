# arena/core/features.py
#!/usr/bin/env python3
"""
Seven structural maze features, each scaled to roughly [0, 1].

Order matters: the predictor's weight vectors are indexed by FEATURE_NAMES.
"""

from typing import Optional, Tuple

from arena.core.errors import InvalidInputError
from arena.core.search import shortest_distance
from arena.core.types import Grid, MazeFeatures, Position, manhattan

# product sizes run 15..25
MAZE_SIZE_RANGE: Tuple[int, int] = (15, 25)
COMPLEXITY_CAP = 3.0


def _clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, x))


def extract(grid: Grid, start: Position, target: Position,
            grid_size: Optional[int] = None,
            size_range: Tuple[int, int] = MAZE_SIZE_RANGE) -> MazeFeatures:
    for label, p in (("start", start), ("target", target)):
        if p is None or not grid.in_bounds(p):
            raise InvalidInputError(f"{label} {p} is outside a {grid.size}x{grid.size} grid")
    if grid_size is None:
        grid_size = grid.size

    n = grid.size
    total = n * n
    if total == 0:
        return MazeFeatures(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    walls = 0
    open_cells = 0
    dead_ends = 0
    degree_sum = 0
    for p in grid.positions():
        if grid.is_wall(p):
            walls += 1
            continue
        degree = len(grid.neighbors4(p))
        open_cells += 1
        degree_sum += degree
        if degree == 1:
            dead_ends += 1

    branching = (degree_sum / open_cells) / 4 if open_cells else 0.0

    direct = manhattan(start, target)
    if direct == 0:
        complexity = 1.0 / COMPLEXITY_CAP
    else:
        steps = shortest_distance(grid, start, target)
        if steps is None:
            steps = direct + 2 * direct   # unreachable: pin to the cap
        complexity = min(steps / direct, COMPLEXITY_CAP) / COMPLEXITY_CAP

    lo, hi = size_range
    maze_size = _clamp((grid_size - lo) / (hi - lo)) if hi > lo else 0.0

    max_distance = (n - 1) + (n - 1)
    distance = direct / max_distance if max_distance > 0 else 0.0

    return MazeFeatures(
        wall_density=walls / total,
        dead_ends=dead_ends / total,
        branching_factor=branching,
        path_complexity=complexity,
        maze_size=maze_size,
        distance=distance,
        open_ratio=open_cells / total,
    )
