# tests/conftest.py
import random
from collections import deque

import pytest

from arena.core.types import Grid


def bfs_distance(grid, start, target):
    """Independent step count over open cells; None when unreachable."""
    rows = cols = grid.size
    seen = {start: 0}
    q = deque([start])
    while q:
        r, c = q.popleft()
        if (r, c) == target:
            return seen[(r, c)]
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and grid.cells[nr][nc] != "wall" and (nr, nc) not in seen:
                seen[(nr, nc)] = seen[(r, c)] + 1
                q.append((nr, nc))
    return None


@pytest.fixture
def open_5x5():
    return Grid.empty(5).with_start((0, 0)).with_target((4, 4))


@pytest.fixture
def rng():
    return random.Random(1234)
