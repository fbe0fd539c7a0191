# arena/core/predictor.py
#!/usr/bin/env python3
"""
Linear winner predictor.

score(algo) = bias[algo] + dot(weights[algo], features)

Weights come from a JSON table (one 7-vector per algorithm, in
FEATURE_NAMES order) so they can be swapped without touching code. The
biases encode the prior that A* and Dijkstra usually come out ahead.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union
import json
import logging
import math

from arena.core.errors import WeightsConfigError
from arena.core.reasons import explain
from arena.core.types import ALGORITHMS, FEATURE_NAMES, MazeFeatures, PredictionResult

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS_PATH = Path(__file__).resolve().parents[1] / "data" / "model_weights.json"

DEFAULT_BIASES: Dict[str, float] = {
    "aStar": 0.50,
    "bfs": -0.40,
    "dfs": -0.45,
    "dijkstra": 0.35,
}

ModelWeights = Dict[str, List[float]]


def validate_weights(raw: Dict[str, object]) -> ModelWeights:
    if not isinstance(raw, dict):
        raise WeightsConfigError(f"weights must be a mapping keyed by algorithm, got {type(raw).__name__}")
    weights: ModelWeights = {}
    for algo in ALGORITHMS:
        vec = raw.get(algo)
        if not isinstance(vec, list) or len(vec) != len(FEATURE_NAMES):
            raise WeightsConfigError(
                f"weights for {algo!r} must be a list of {len(FEATURE_NAMES)} numbers")
        out: List[float] = []
        for v in vec:
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
                raise WeightsConfigError(f"weights for {algo!r} hold a non-finite or non-numeric value {v!r}")
            out.append(float(v))
        weights[algo] = out
    return weights


def load_weights(path: Optional[Union[str, Path]] = None) -> ModelWeights:
    path = Path(path) if path is not None else DEFAULT_WEIGHTS_PATH
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as ex:
        raise WeightsConfigError(f"cannot read weights from {path}: {ex}") from ex
    if not isinstance(data, dict):
        raise WeightsConfigError(f"{path} must hold a JSON object keyed by algorithm")
    return validate_weights(data)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class Predictor:
    def __init__(self, weights: Optional[ModelWeights] = None,
                 biases: Optional[Dict[str, float]] = None):
        self.weights = validate_weights(weights) if weights is not None else load_weights()
        self.biases = dict(DEFAULT_BIASES)
        if biases:
            self.biases.update(biases)

    @classmethod
    def from_file(cls, path: Union[str, Path], biases: Optional[Dict[str, float]] = None) -> "Predictor":
        return cls(load_weights(path), biases)

    def score(self, features: MazeFeatures) -> Dict[str, float]:
        x = features.as_vector()
        scores: Dict[str, float] = {}
        for algo in ALGORITHMS:
            s = self.biases[algo]
            for w, f in zip(self.weights[algo], x):
                s += w * f
            scores[algo] = s
        return scores

    def predict(self, features: MazeFeatures) -> PredictionResult:
        scores = self.score(features)

        # strict > keeps the earliest algorithm on ties
        winner = ALGORITHMS[0]
        for algo in ALGORITHMS[1:]:
            if scores[algo] > scores[winner]:
                winner = algo

        ranked = sorted(scores.values(), reverse=True)
        spread = ranked[0] - ranked[-1]
        if spread > 0:
            gap = (scores[winner] - ranked[1]) / spread
            confidence = _round_half_up(min(95.0, max(60.0, 60.0 + gap * 35.0)))
        else:
            confidence = 50

        reason = explain(features, winner, scores)
        logger.debug("predicted %s (%d%%): %s", winner, confidence, reason)
        return PredictionResult(winner=winner, confidence=confidence, reason=reason, scores=scores)
