# arena/core/search.py
#!/usr/bin/env python3
"""
Grid search engine: A*, Dijkstra, BFS and DFS over one shared loop.

Every strategy walks cells through Unvisited -> Frontier -> Settled and
differs only in:
- the frontier ordering (heap / queue / stack),
- whether an already-discovered cell may be relaxed to a cheaper g,
- whether the heap priority adds the Manhattan heuristic.

The search stops when the target is popped, not when it is first pushed.
`visited` lists cells in the order they were settled, which is the order a
viewer replays them in.
"""

from collections import deque
from math import inf
from typing import Callable, Dict, List, NamedTuple, Optional
import logging

from arena.core.errors import InvalidInputError
from arena.core.frontier import FifoFrontier, LifoFrontier, PriorityFrontier
from arena.core.types import ALGORITHMS, Grid, Position, SearchResult, manhattan

logger = logging.getLogger(__name__)


class _Strategy(NamedTuple):
    frontier: Callable[[], object]
    relaxes: bool    # re-open a discovered cell when a cheaper g shows up
    informed: bool   # priority = g + h instead of g


STRATEGIES: Dict[str, _Strategy] = {
    "aStar": _Strategy(PriorityFrontier, relaxes=True, informed=True),
    "bfs": _Strategy(FifoFrontier, relaxes=False, informed=False),
    "dfs": _Strategy(LifoFrontier, relaxes=False, informed=False),
    "dijkstra": _Strategy(PriorityFrontier, relaxes=True, informed=False),
}


def validate_endpoints(grid: Grid, start: Optional[Position], target: Optional[Position]) -> None:
    """Raise InvalidInputError unless start/target are distinct open in-bounds cells."""
    if start is None or target is None:
        raise InvalidInputError("both start and target must be set")
    for label, p in (("start", start), ("target", target)):
        if not grid.in_bounds(p):
            raise InvalidInputError(f"{label} {p} is outside a {grid.size}x{grid.size} grid")
        if grid.is_wall(p):
            raise InvalidInputError(f"{label} {p} sits on a wall")
    if start == target:
        raise InvalidInputError(f"start and target are the same cell {start}")


def search(grid: Grid, start: Position, target: Position, algorithm: str) -> SearchResult:
    """Run one algorithm from start to target.

    A disconnected grid is not an error: the result simply has found=False.
    """
    strategy = STRATEGIES.get(algorithm)
    if strategy is None:
        raise InvalidInputError(f"unknown algorithm {algorithm!r}; expected one of {ALGORITHMS}")
    validate_endpoints(grid, start, target)

    frontier = strategy.frontier()
    g: Dict[Position, int] = {start: 0}
    parent: Dict[Position, Position] = {}
    settled = set()
    visited: List[Position] = []

    def priority(cell: Position) -> int:
        if strategy.informed:
            return g[cell] + manhattan(cell, target)
        return g[cell]

    frontier.push(start, priority(start))
    while len(frontier):
        u = frontier.pop()
        # stale heap entry for a cell settled through a cheaper route
        if u in settled:
            continue
        settled.add(u)
        visited.append(u)
        if u == target:
            break

        for v in grid.neighbors4(u):
            if v in settled:
                continue
            alt = g[u] + 1
            if strategy.relaxes:
                improved = alt < g.get(v, inf)
            else:
                improved = v not in g
            if improved:
                g[v] = alt
                parent[v] = u
                frontier.push(v, priority(v))

    path = reconstruct_path(parent, start, target) if target in settled else []
    result = SearchResult(algorithm=algorithm, found=bool(path), path=path, visited=visited)
    logger.debug("%s: settled=%d path_len=%d found=%s",
                 algorithm, result.visited_count, result.path_length, result.found)
    return result


def reconstruct_path(parent: Dict[Position, Position], start: Position, end: Position) -> List[Position]:
    """Follow parent links back from end; [] when the chain never reaches start."""
    path: List[Position] = [end]
    cur = end
    while cur != start:
        if cur not in parent:
            return []
        cur = parent[cur]
        path.append(cur)
    path.reverse()
    return path


def shortest_distance(grid: Grid, start: Position, target: Position) -> Optional[int]:
    """Unit-cost step count from start to target, or None when unreachable."""
    if start == target:
        return 0
    dist: Dict[Position, int] = {start: 0}
    q = deque([start])
    while q:
        u = q.popleft()
        for v in grid.neighbors4(u):
            if v not in dist:
                dist[v] = dist[u] + 1
                if v == target:
                    return dist[v]
                q.append(v)
    return None
