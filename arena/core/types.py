# arena/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from arena.core.errors import InvalidInputError

Position = Tuple[int, int]  # (row, col)

EMPTY = "empty"
WALL = "wall"
START = "start"
TARGET = "target"
VISITED = "visited"
PATH = "path"
KINDS = (EMPTY, WALL, START, TARGET, VISITED, PATH)

# canonical order, also the predictor's tie-break order
ALGORITHMS = ("aStar", "bfs", "dfs", "dijkstra")

DIRECTIONS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))  # up, down, left, right

_ASCII_TO_KIND = {".": EMPTY, "#": WALL, "S": START, "T": TARGET, "+": VISITED, "*": PATH}
_KIND_TO_ASCII = {v: k for k, v in _ASCII_TO_KIND.items()}


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class Grid:
    """Square grid of cell kinds.

    Treated as a value: every edit returns a new Grid and leaves the
    receiver untouched, so a caller can keep the obstacles of a maze while
    trying several algorithms on copies of it.
    """
    size: int
    cells: List[List[str]]             # [row][col]
    start: Optional[Position] = None
    target: Optional[Position] = None

    # -------------------- construction --------------------

    @classmethod
    def empty(cls, size: int) -> "Grid":
        if size < 2:
            raise InvalidInputError(f"grid size must be at least 2, got {size}")
        return cls(size, [[EMPTY] * size for _ in range(size)])

    @classmethod
    def from_ascii(cls, lines: Sequence[str]) -> "Grid":
        rows = [line.strip() for line in lines if line.strip()]
        size = len(rows)
        if size < 2 or any(len(r) != size for r in rows):
            raise InvalidInputError("ascii grid must be square and at least 2x2")
        cells: List[List[str]] = []
        start = target = None
        for r, line in enumerate(rows):
            row: List[str] = []
            for c, ch in enumerate(line):
                kind = _ASCII_TO_KIND.get(ch)
                if kind is None:
                    raise InvalidInputError(f"unknown cell character {ch!r} at {(r, c)}")
                if kind == START:
                    if start is not None:
                        raise InvalidInputError("more than one start cell")
                    start = (r, c)
                elif kind == TARGET:
                    if target is not None:
                        raise InvalidInputError("more than one target cell")
                    target = (r, c)
                row.append(kind)
            cells.append(row)
        return cls(size, cells, start, target)

    def copy(self) -> "Grid":
        return Grid(self.size, [list(row) for row in self.cells], self.start, self.target)

    # -------------------- queries --------------------

    def in_bounds(self, p: Position) -> bool:
        r, c = p
        return 0 <= r < self.size and 0 <= c < self.size

    def kind_at(self, p: Position) -> str:
        r, c = p
        return self.cells[r][c]

    def is_wall(self, p: Position) -> bool:
        return self.kind_at(p) == WALL

    def neighbors4(self, p: Position) -> List[Position]:
        """In-bounds, non-wall neighbors in up, down, left, right order."""
        r, c = p
        out: List[Position] = []
        for dr, dc in DIRECTIONS:
            n = (r + dr, c + dc)
            if self.in_bounds(n) and not self.is_wall(n):
                out.append(n)
        return out

    def positions(self) -> Iterable[Position]:
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def wall_count(self) -> int:
        return sum(row.count(WALL) for row in self.cells)

    def open_count(self) -> int:
        return self.size * self.size - self.wall_count()

    # -------------------- edits (copy-on-write) --------------------

    def with_start(self, p: Position) -> "Grid":
        return self._move_endpoint(p, START)

    def with_target(self, p: Position) -> "Grid":
        return self._move_endpoint(p, TARGET)

    def _move_endpoint(self, p: Position, kind: str) -> "Grid":
        if not self.in_bounds(p):
            raise InvalidInputError(f"{kind} {p} is outside a {self.size}x{self.size} grid")
        g = self.copy()
        old = g.start if kind == START else g.target
        if old is not None:
            g.cells[old[0]][old[1]] = EMPTY
        if p == g.start:
            g.start = None
        if p == g.target:
            g.target = None
        g.cells[p[0]][p[1]] = kind
        if kind == START:
            g.start = p
        else:
            g.target = p
        return g

    def toggle_wall(self, p: Position) -> "Grid":
        """Flip empty <-> wall. Endpoints and markings are left alone."""
        if not self.in_bounds(p):
            raise InvalidInputError(f"{p} is outside a {self.size}x{self.size} grid")
        g = self.copy()
        kind = g.kind_at(p)
        if kind == WALL:
            g.cells[p[0]][p[1]] = EMPTY
        elif kind == EMPTY:
            g.cells[p[0]][p[1]] = WALL
        return g

    def with_walls(self, walls: Iterable[Position]) -> "Grid":
        g = self.copy()
        for p in walls:
            if not g.in_bounds(p):
                raise InvalidInputError(f"wall {p} is outside the grid")
            if p in (g.start, g.target):
                continue
            g.cells[p[0]][p[1]] = WALL
        return g

    def cleared_markings(self) -> "Grid":
        g = self.copy()
        for row in g.cells:
            for c, kind in enumerate(row):
                if kind in (VISITED, PATH):
                    row[c] = EMPTY
        return g

    def with_markings(self, result: "SearchResult") -> "Grid":
        """Paint a search trace: visited cells first, then the path on top."""
        g = self.cleared_markings()
        for kind, cells in ((VISITED, result.visited), (PATH, result.path)):
            for r, c in cells:
                if g.cells[r][c] in (EMPTY, VISITED):
                    g.cells[r][c] = kind
        return g

    def to_ascii(self) -> str:
        return "\n".join("".join(_KIND_TO_ASCII[k] for k in row) for row in self.cells)


@dataclass
class SearchResult:
    algorithm: str
    found: bool
    path: List[Position] = field(default_factory=list)      # start -> target inclusive
    visited: List[Position] = field(default_factory=list)   # settle/expansion order

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def visited_count(self) -> int:
        return len(self.visited)


FEATURE_NAMES = (
    "wallDensity",
    "deadEnds",
    "branchingFactor",
    "pathComplexity",
    "mazeSize",
    "distance",
    "openRatio",
)


@dataclass
class MazeFeatures:
    wall_density: float
    dead_ends: float
    branching_factor: float
    path_complexity: float
    maze_size: float
    distance: float
    open_ratio: float

    def as_vector(self) -> List[float]:
        return [
            self.wall_density,
            self.dead_ends,
            self.branching_factor,
            self.path_complexity,
            self.maze_size,
            self.distance,
            self.open_ratio,
        ]

    def to_dict(self) -> Dict[str, float]:
        return dict(zip(FEATURE_NAMES, self.as_vector()))

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "MazeFeatures":
        try:
            return cls(*(float(data[name]) for name in FEATURE_NAMES))
        except (KeyError, TypeError, ValueError) as ex:
            raise InvalidInputError(f"malformed feature record: {ex}") from ex


@dataclass
class PredictionResult:
    winner: str
    confidence: int
    reason: str
    scores: Dict[str, float] = field(default_factory=dict)
