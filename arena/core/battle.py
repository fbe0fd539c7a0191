# arena/core/battle.py
#!/usr/bin/env python3
"""
Head-to-head runs of every algorithm on one grid, and the empirical winner.

The battle winner ranks algorithms by path length, then by how many cells
they settled. It is a different notion of "best" from the predictor's
argmax score; the two are kept apart on purpose and may disagree.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from arena.core.search import search
from arena.core.types import ALGORITHMS, Grid, Position, SearchResult


@dataclass
class AlgorithmPerformance:
    path_length: int
    visited_count: int
    found: bool = True

    def to_dict(self) -> Dict[str, int]:
        return {"pathLength": self.path_length, "visitedCount": self.visited_count}

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "AlgorithmPerformance":
        path_length = int(data["pathLength"])
        return cls(path_length, int(data["visitedCount"]), found=path_length > 0)


def run_battle(grid: Grid, start: Position, target: Position,
               algorithms: Iterable[str] = ALGORITHMS) -> Dict[str, SearchResult]:
    """Run each algorithm on its own marking-free copy of the grid."""
    base = grid.cleared_markings()
    return {name: search(base, start, target, name) for name in algorithms}


def performance(results: Dict[str, SearchResult]) -> Dict[str, AlgorithmPerformance]:
    return {
        name: AlgorithmPerformance(r.path_length, r.visited_count, r.found)
        for name, r in results.items()
    }


def battle_winner(performances: Dict[str, AlgorithmPerformance]) -> Optional[str]:
    """Shortest path first, fewest settled cells second, canonical order last."""
    order = {name: i for i, name in enumerate(ALGORITHMS)}
    contenders = [(name, p) for name, p in performances.items() if p.found]
    if not contenders:
        return None
    contenders.sort(key=lambda item: (item[1].path_length,
                                      item[1].visited_count,
                                      order.get(item[0], len(order))))
    return contenders[0][0]
