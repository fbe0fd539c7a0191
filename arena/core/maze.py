# arena/core/maze.py
#!/usr/bin/env python3
"""
Maze generation with a route that is never blocked.

Phases:
1. Greedy best-first walk from start to target on an open grid. Its cells
   form the protected corridor.
2. Randomized recursive backtracker from start, with the corridor already
   marked visited, to decide which cells feel "carved".
3. Walls on every unprotected cell the backtracker missed, plus a random
   share of the rest scaled by difficulty.
4. Reopen the cells around start and target (corridor cells always, others
   by a difficulty-scaled coin flip).
"""

from typing import Dict, List, Optional, Set
import heapq
import logging
import random

from arena.core.errors import InvalidInputError
from arena.core.search import reconstruct_path
from arena.core.types import DIRECTIONS, EMPTY, START, TARGET, WALL, Grid, Position, manhattan

logger = logging.getLogger(__name__)

DIFFICULTIES = ("easy", "medium", "hard")
WALL_DENSITY: Dict[str, float] = {"easy": 0.20, "medium": 0.30, "hard": 0.40}
CLEAR_PROBABILITY: Dict[str, float] = {"easy": 0.9, "medium": 0.7, "hard": 0.5}


def _in_bounds(size: int, p: Position) -> bool:
    return 0 <= p[0] < size and 0 <= p[1] < size


def _around(size: int, p: Position) -> List[Position]:
    r, c = p
    return [(r + dr, c + dc) for dr, dc in DIRECTIONS if _in_bounds(size, (r + dr, c + dc))]


def guaranteed_corridor(size: int, start: Position, target: Position) -> List[Position]:
    """Greedy best-first path on a wall-free size x size grid."""
    seq = 0
    heap = [(manhattan(start, target), seq, start)]
    parent: Dict[Position, Position] = {}
    seen = {start}
    while heap:
        _, _, u = heapq.heappop(heap)
        if u == target:
            break
        for v in _around(size, u):
            if v not in seen:
                seen.add(v)
                parent[v] = u
                seq += 1
                heapq.heappush(heap, (manhattan(v, target), seq, v))
    return reconstruct_path(parent, start, target)


def _carve(size: int, start: Position, visited: Set[Position], rng: random.Random) -> None:
    stack: List[Position] = [start]
    visited.add(start)
    while stack:
        candidates = [n for n in _around(size, stack[-1]) if n not in visited]
        if candidates:
            nxt = rng.choice(candidates)
            visited.add(nxt)
            stack.append(nxt)
        else:
            stack.pop()


def generate(base_grid: Grid, start: Position, target: Position, difficulty: str,
             rng: Optional[random.Random] = None) -> Grid:
    """Build a fresh maze of base_grid's size with start and target connected."""
    if difficulty not in WALL_DENSITY:
        raise InvalidInputError(f"unknown difficulty {difficulty!r}; expected one of {DIFFICULTIES}")
    size = base_grid.size
    for label, p in (("start", start), ("target", target)):
        if p is None or not _in_bounds(size, p):
            raise InvalidInputError(f"{label} {p} is outside a {size}x{size} grid")
    if start == target:
        raise InvalidInputError(f"start and target are the same cell {start}")
    rng = rng or random.Random()

    protected = set(guaranteed_corridor(size, start, target))
    visited = set(protected)
    _carve(size, start, visited, rng)

    density = WALL_DENSITY[difficulty]
    cells = [[EMPTY] * size for _ in range(size)]
    for r in range(size):
        for c in range(size):
            p = (r, c)
            if p in protected:
                continue
            if p not in visited or rng.random() < density:
                cells[r][c] = WALL
    cells[start[0]][start[1]] = START
    cells[target[0]][target[1]] = TARGET

    keep_open = CLEAR_PROBABILITY[difficulty]
    for anchor in (start, target):
        for n in _around(size, anchor):
            if n in (start, target):
                continue
            if n in protected or rng.random() < keep_open:
                cells[n[0]][n[1]] = EMPTY

    grid = Grid(size, cells, start, target)
    logger.debug("generated %dx%d %s maze: corridor=%d walls=%d",
                 size, size, difficulty, len(protected), grid.wall_count())
    return grid
