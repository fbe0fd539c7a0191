# arena/core/frontier.py
#!/usr/bin/env python3
"""
Frontier containers shared by every search strategy.

All three expose the same push/pop/len surface so the engine loop does not
care which ordering policy it drives:
- FifoFrontier      -> BFS (queue)
- LifoFrontier      -> DFS (stack)
- PriorityFrontier  -> Dijkstra / A* (binary heap)

Heap entries are (priority, seq, cell): equal priorities come out in
insertion order because seq only ever grows.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Tuple
import heapq

from arena.core.types import Position


@dataclass
class FifoFrontier:
    items: Deque[Position] = field(default_factory=deque)

    def push(self, cell: Position, priority: float = 0) -> None:
        self.items.append(cell)

    def pop(self) -> Position:
        return self.items.popleft()

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class LifoFrontier:
    items: List[Position] = field(default_factory=list)

    def push(self, cell: Position, priority: float = 0) -> None:
        self.items.append(cell)

    def pop(self) -> Position:
        return self.items.pop()

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class PriorityFrontier:
    heap: List[Tuple[float, int, Position]] = field(default_factory=list)
    seq: int = 0  # monotonic counter for heap stability

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def push(self, cell: Position, priority: float = 0) -> None:
        heapq.heappush(self.heap, (priority, self._bump(), cell))

    def pop(self) -> Position:
        return heapq.heappop(self.heap)[2]

    def __len__(self) -> int:
        return len(self.heap)
