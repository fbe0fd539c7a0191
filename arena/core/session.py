# arena/core/session.py
#!/usr/bin/env python3
"""
Battle session: the state a front end keeps between clicks.

Holds the current grid, endpoints, difficulty and per-algorithm results,
and decides when the maze is rebuilt:
- the second endpoint is placed while the other one is already set,
- the difficulty changes (with both endpoints set),
- the grid size changes (endpoints that still fit are kept).
Any edit to the grid drops stored results.
"""

from typing import Dict, Optional
import logging
import random

from arena.core.battle import AlgorithmPerformance, battle_winner, performance
from arena.core.errors import InvalidInputError
from arena.core.features import extract
from arena.core.maze import WALL_DENSITY, generate
from arena.core.predictor import Predictor
from arena.core.samples import Sample, SampleSink, collect_sample
from arena.core.search import search
from arena.core.types import ALGORITHMS, Grid, MazeFeatures, Position, PredictionResult, SearchResult

logger = logging.getLogger(__name__)


class BattleSession:
    def __init__(self, grid_size: int = 20, difficulty: str = "medium",
                 predictor: Optional[Predictor] = None,
                 sink: Optional[SampleSink] = None,
                 rng: Optional[random.Random] = None):
        if difficulty not in WALL_DENSITY:
            raise InvalidInputError(f"unknown difficulty {difficulty!r}")
        self.grid_size = grid_size
        self.difficulty = difficulty
        self.grid = Grid.empty(grid_size)
        self._predictor = predictor
        self.sink = sink
        self.rng = rng or random.Random()
        self.results: Dict[str, SearchResult] = {}

    # -------------------- properties --------------------

    @property
    def predictor(self) -> Predictor:
        if self._predictor is None:
            self._predictor = Predictor()
        return self._predictor

    @property
    def start(self) -> Optional[Position]:
        return self.grid.start

    @property
    def target(self) -> Optional[Position]:
        return self.grid.target

    @property
    def ready(self) -> bool:
        return self.start is not None and self.target is not None

    # -------------------- edits --------------------

    def set_start(self, p: Position) -> None:
        had_target = self.target is not None and self.target != p
        self.grid = self.grid.with_start(p)
        self._edited()
        if had_target:
            self.regenerate()

    def set_target(self, p: Position) -> None:
        had_start = self.start is not None and self.start != p
        self.grid = self.grid.with_target(p)
        self._edited()
        if had_start:
            self.regenerate()

    def toggle_wall(self, p: Position) -> None:
        self.grid = self.grid.toggle_wall(p)
        self._edited()

    def set_difficulty(self, difficulty: str) -> None:
        if difficulty not in WALL_DENSITY:
            raise InvalidInputError(f"unknown difficulty {difficulty!r}")
        self.difficulty = difficulty
        if self.ready:
            self.regenerate()

    def set_grid_size(self, size: int) -> None:
        old = self.grid
        self.grid = Grid.empty(size)
        self.grid_size = size
        if old.start is not None and self.grid.in_bounds(old.start):
            self.grid = self.grid.with_start(old.start)
        if old.target is not None and self.grid.in_bounds(old.target):
            self.grid = self.grid.with_target(old.target)
        self._edited()
        if self.ready:
            self.regenerate()

    def clear(self) -> None:
        self.grid = Grid.empty(self.grid_size)
        self._edited()

    def regenerate(self) -> Grid:
        self.grid = generate(self.grid, self.start, self.target, self.difficulty, self.rng)
        self._edited()
        logger.debug("maze regenerated (%s, %d)", self.difficulty, self.grid_size)
        return self.grid

    def _edited(self) -> None:
        self.results = {}

    # -------------------- analysis --------------------

    def _require_endpoints(self) -> None:
        if not self.ready:
            raise InvalidInputError("set both start and target first")

    def features(self) -> MazeFeatures:
        self._require_endpoints()
        return extract(self.grid, self.start, self.target, self.grid_size)

    def predict(self) -> PredictionResult:
        return self.predictor.predict(self.features())

    def run(self, algorithm: str) -> SearchResult:
        self._require_endpoints()
        result = search(self.grid.cleared_markings(), self.start, self.target, algorithm)
        self.results[algorithm] = result
        return result

    def run_all(self) -> Dict[str, SearchResult]:
        for algo in ALGORITHMS:
            self.run(algo)
        return dict(self.results)

    def performances(self) -> Dict[str, AlgorithmPerformance]:
        return performance(self.results)

    def winner(self) -> Optional[str]:
        return battle_winner(self.performances())

    def marked_grid(self, algorithm: str) -> Grid:
        """Grid with one algorithm's trace painted on; the session grid stays clean."""
        if algorithm not in self.results:
            raise InvalidInputError(f"{algorithm!r} has not been run yet")
        return self.grid.with_markings(self.results[algorithm])

    def record_sample(self) -> Sample:
        missing = [a for a in ALGORITHMS if a not in self.results]
        if missing:
            raise InvalidInputError(f"run every algorithm before recording; missing {missing}")
        return collect_sample(self.features(), self.performances(),
                              self.difficulty, self.grid_size, self.sink)
