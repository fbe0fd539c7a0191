# tests/test_predictor.py
import json
import random

import pytest

from arena.core.errors import WeightsConfigError
from arena.core.predictor import DEFAULT_BIASES, Predictor, load_weights
from arena.core.reasons import FALLBACK_REASON
from arena.core.types import ALGORITHMS, MazeFeatures

ZERO_WEIGHTS = {algo: [0.0] * 7 for algo in ALGORITHMS}


def _features(seed):
    rng = random.Random(seed)
    return MazeFeatures(*(rng.random() for _ in range(7)))


def test_default_weights_load():
    weights = load_weights()
    assert set(weights) == set(ALGORITHMS)
    assert all(len(v) == 7 for v in weights.values())


def test_scores_are_bias_plus_dot():
    weights = dict(ZERO_WEIGHTS)
    weights["bfs"] = [1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 2.0]
    p = Predictor(weights)
    f = MazeFeatures(0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.25)
    scores = p.score(f)
    assert scores["bfs"] == pytest.approx(-0.40 + 0.5 + 0.5)
    assert scores["aStar"] == pytest.approx(0.50)
    assert scores["dfs"] == pytest.approx(-0.45)
    assert scores["dijkstra"] == pytest.approx(0.35)


def test_zero_features_favor_astar():
    result = Predictor(ZERO_WEIGHTS).predict(MazeFeatures(0, 0, 0, 0, 0, 0, 0))
    assert result.winner == "aStar"
    # gap 0.15 over range 0.95
    assert result.confidence == round(60 + 35 * 0.15 / 0.95)
    assert result.scores == pytest.approx(DEFAULT_BIASES)


def test_tie_goes_to_astar():
    biases = {"aStar": 0.4, "bfs": -0.4, "dfs": -0.45, "dijkstra": 0.4}
    result = Predictor(ZERO_WEIGHTS, biases).predict(MazeFeatures(0.3, 0.1, 0.5, 0.4, 0.5, 0.6, 0.7))
    assert result.scores["aStar"] == result.scores["dijkstra"]
    assert result.winner == "aStar"
    assert result.confidence == 60


def test_later_algorithm_wins_only_when_strictly_higher():
    biases = {"aStar": 0.0, "bfs": 0.0, "dfs": 0.1, "dijkstra": 0.1}
    result = Predictor(ZERO_WEIGHTS, biases).predict(MazeFeatures(0, 0, 0, 0, 0, 0, 0))
    assert result.winner == "dfs"


def test_all_equal_scores_give_fifty():
    biases = {algo: 0.2 for algo in ALGORITHMS}
    result = Predictor(ZERO_WEIGHTS, biases).predict(MazeFeatures(0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7))
    assert result.confidence == 50
    assert result.winner == "aStar"


def test_runaway_winner_caps_at_95():
    weights = dict(ZERO_WEIGHTS)
    weights["dfs"] = [10.0] * 7
    biases = {"aStar": 0.0, "bfs": 0.0, "dfs": 0.0, "dijkstra": -0.01}
    result = Predictor(weights, biases).predict(MazeFeatures(1, 1, 1, 1, 1, 1, 1))
    assert result.winner == "dfs"
    assert result.confidence == 95


@pytest.mark.parametrize("seed", range(50))
def test_deterministic_and_bounded(seed):
    p = Predictor()
    f = _features(seed)
    a, b = p.predict(f), p.predict(f)
    assert (a.winner, a.confidence, a.reason) == (b.winner, b.confidence, b.reason)
    assert a.confidence == 50 or 60 <= a.confidence <= 95
    assert a.winner in ALGORITHMS
    assert a.reason and a.reason != FALLBACK_REASON


def test_from_file(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text(json.dumps({algo: [0.1] * 7 for algo in ALGORITHMS}))
    p = Predictor.from_file(path)
    assert p.weights["dfs"] == [0.1] * 7


@pytest.mark.parametrize("payload", [
    {"aStar": [0.1] * 7, "bfs": [0.1] * 7, "dfs": [0.1] * 7},
    {algo: [0.1] * 6 for algo in ALGORITHMS},
    {algo: [0.1] * 6 + ["x"] for algo in ALGORITHMS},
    {algo: [0.1] * 6 + [float("nan")] for algo in ALGORITHMS},
    [1, 2, 3],
])
def test_bad_weight_tables(tmp_path, payload):
    path = tmp_path / "weights.json"
    path.write_text(json.dumps(payload))
    with pytest.raises(WeightsConfigError):
        load_weights(path)


@pytest.mark.parametrize("weights", [[0.1] * 7, "aStar", (1, 2)])
def test_non_mapping_weights(weights):
    with pytest.raises(WeightsConfigError):
        Predictor(weights=weights)


def test_missing_weights_file(tmp_path):
    with pytest.raises(WeightsConfigError):
        load_weights(tmp_path / "nope.json")
