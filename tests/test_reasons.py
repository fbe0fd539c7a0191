# tests/test_reasons.py
import pytest

from arena.core.reasons import FALLBACK_REASON, explain
from arena.core.types import MazeFeatures


def feats(walls=0.3, dead_ends=0.05, branching=0.7, complexity=0.4):
    return MazeFeatures(walls, dead_ends, branching, complexity, 0.5, 0.5, 1 - walls)


@pytest.mark.parametrize("features,expected", [
    (feats(dead_ends=0.2, branching=0.5), "Low branching, high dead-ends favor A*"),
    (feats(dead_ends=0.2), "High dead-ends make A* heuristic efficient"),
    (feats(walls=0.4, complexity=0.7), "Complex maze structure favors A* heuristic"),
    (feats(branching=0.6), "Low branching factor favors A*"),
    (feats(), "A* optimal for this maze structure"),
])
def test_astar_rules(features, expected):
    assert explain(features, "aStar", {}) == expected


@pytest.mark.parametrize("features,expected", [
    (feats(walls=0.2, branching=0.6), "Open maze structure favors BFS"),
    (feats(walls=0.2), "Wide open areas favor BFS exploration"),
    (feats(branching=0.6), "Low branching factor suits BFS"),
    (feats(), "BFS optimal for this maze layout"),
])
def test_bfs_rules(features, expected):
    assert explain(features, "bfs", {}) == expected


@pytest.mark.parametrize("features,expected", [
    (feats(branching=0.8), "High branching factor favors DFS"),
    (feats(walls=0.4, branching=0.8), "High branching factor favors DFS"),
    (feats(complexity=0.55), "Maze structure suits DFS exploration"),
    (feats(), "DFS optimal for this maze pattern"),
])
def test_dfs_rules(features, expected):
    assert explain(features, "dfs", {}) == expected


@pytest.mark.parametrize("features,expected", [
    (feats(dead_ends=0.2, complexity=0.7), "Complex maze with dead-ends favors Dijkstra"),
    (feats(walls=0.4, complexity=0.7), "Dense maze structure favors Dijkstra"),
    (feats(complexity=0.7), "Path complexity makes Dijkstra efficient"),
    (feats(), "Dijkstra optimal for this maze configuration"),
])
def test_dijkstra_rules(features, expected):
    assert explain(features, "dijkstra", {}) == expected


def test_thresholds_are_strict():
    assert explain(feats(dead_ends=0.15), "aStar", {}) == "A* optimal for this maze structure"
    assert explain(feats(branching=0.625), "bfs", {}) == "BFS optimal for this maze layout"


def test_unknown_winner():
    assert explain(feats(), "greedy", {}) == FALLBACK_REASON
