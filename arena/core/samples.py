# arena/core/samples.py
#!/usr/bin/env python3
"""
Historical run samples: one record per full battle, for later retraining.

A sink only appends, reads back everything, or wipes itself. Two sinks
ship here: an in-memory list and a JSON file holding a single array.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Union
import json
import logging
import time

from arena.core.battle import AlgorithmPerformance, battle_winner
from arena.core.errors import InvalidInputError
from arena.core.types import MazeFeatures

logger = logging.getLogger(__name__)


@dataclass
class Sample:
    features: MazeFeatures
    results: Dict[str, AlgorithmPerformance]
    actual_winner: Optional[str]
    difficulty: str
    grid_size: int
    timestamp: int = 0  # epoch milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "features": self.features.to_dict(),
            "results": {name: p.to_dict() for name, p in self.results.items()},
            "actualWinner": self.actual_winner,
            "difficulty": self.difficulty,
            "gridSize": self.grid_size,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sample":
        try:
            return cls(
                features=MazeFeatures.from_dict(data["features"]),
                results={name: AlgorithmPerformance.from_dict(p) for name, p in data["results"].items()},
                actual_winner=data.get("actualWinner"),
                difficulty=data["difficulty"],
                grid_size=int(data["gridSize"]),
                timestamp=int(data.get("timestamp", 0)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as ex:
            raise InvalidInputError(f"malformed sample record: {ex}") from ex


class SampleSink(Protocol):
    def record(self, sample: Sample) -> None: ...

    def read_all(self) -> List[Sample]: ...

    def clear(self) -> None: ...


@dataclass
class MemorySampleSink:
    samples: List[Sample] = field(default_factory=list)

    def record(self, sample: Sample) -> None:
        self.samples.append(sample)

    def read_all(self) -> List[Sample]:
        return list(self.samples)

    def clear(self) -> None:
        self.samples.clear()


class JsonFileSampleSink:
    """All samples as one JSON array on disk. A missing file reads as empty."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load_raw(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as ex:
                raise InvalidInputError(f"{self.path} is not valid JSON: {ex}") from ex
        if not isinstance(data, list):
            raise InvalidInputError(f"{self.path} must hold a JSON array of samples")
        return data

    def record(self, sample: Sample) -> None:
        data = self._load_raw()
        data.append(sample.to_dict())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def read_all(self) -> List[Sample]:
        return [Sample.from_dict(d) for d in self._load_raw()]

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
        logger.info("training samples cleared (%s)", self.path)


def collect_sample(features: MazeFeatures, results: Dict[str, AlgorithmPerformance],
                   difficulty: str, grid_size: int,
                   sink: Optional[SampleSink] = None,
                   clock: Callable[[], float] = time.time) -> Sample:
    sample = Sample(
        features=features,
        results=dict(results),
        actual_winner=battle_winner(results),
        difficulty=difficulty,
        grid_size=grid_size,
        timestamp=int(clock() * 1000),
    )
    if sink is not None:
        sink.record(sample)
        logger.info("sample collected: winner=%s difficulty=%s", sample.actual_winner, difficulty)
    return sample


def sample_stats(samples: List[Sample]) -> Dict[str, Any]:
    winners: Dict[str, int] = {}
    by_difficulty: Dict[str, int] = {}
    for s in samples:
        key = s.actual_winner or "none"
        winners[key] = winners.get(key, 0) + 1
        by_difficulty[s.difficulty] = by_difficulty.get(s.difficulty, 0) + 1
    return {"total_samples": len(samples), "winners": winners, "by_difficulty": by_difficulty}


def export_samples(sink: SampleSink) -> str:
    return json.dumps([s.to_dict() for s in sink.read_all()], indent=2)
