# tests/test_cli.py
import csv
import json
import random

import pytest

from arena.app.cli import build_parser, main, parse_position, random_endpoints, resolve_log_level
from arena.core.errors import InvalidInputError
from arena.core.maps import save_map
from arena.core.types import Grid


def test_battle_prints_table(capsys, tmp_path):
    samples = tmp_path / "samples.json"
    code = main(["battle", "--size", "15", "--difficulty", "easy", "--seed", "3",
                 "--start", "0,0", "--target", "14,14", "--samples", str(samples), "--show", "aStar"])
    out = capsys.readouterr().out
    assert code == 0
    assert "A* (A-Star)" in out and "Dijkstra" in out
    assert "Predicted:" in out and "Actual:" in out
    assert "*" in out
    stored = json.loads(samples.read_text())
    assert len(stored) == 1
    assert stored[0]["gridSize"] == 15


def test_battle_from_map(capsys, tmp_path):
    path = tmp_path / "map.json"
    save_map(Grid.from_ascii(["S....", ".###.", ".....", ".###.", "....T"]), path)
    assert main(["battle", "--map", str(path)]) == 0
    assert "winner" in capsys.readouterr().out


def test_battle_map_without_endpoints(tmp_path):
    path = tmp_path / "map.json"
    save_map(Grid.empty(4), path)
    assert main(["battle", "--map", str(path)]) == 2


def test_invalid_endpoints_exit_code():
    assert main(["battle", "--size", "5", "--start", "1,1", "--target", "1,1"]) == 2


def test_bench_writes_csv(capsys, tmp_path):
    out_dir = tmp_path / "bench"
    samples = tmp_path / "samples.json"
    code = main(["bench", "--runs", "2", "--sizes", "15", "--difficulties", "easy", "hard",
                 "--seed", "1", "--out-dir", str(out_dir), "--samples", str(samples)])
    assert code == 0
    with open(out_dir / "raw_results.csv", newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    with open(out_dir / "summary.csv", newline="") as f:
        summary = list(csv.DictReader(f))
    assert {r["difficulty"] for r in summary} == {"easy", "hard"}
    assert len(json.loads(samples.read_text())) == 4
    assert "agreement=" in capsys.readouterr().out


def test_stats_export_clear(capsys, tmp_path):
    samples = tmp_path / "samples.json"
    main(["battle", "--size", "15", "--seed", "5", "--samples", str(samples)])
    capsys.readouterr()

    assert main(["stats", "--samples", str(samples)]) == 0
    assert "Total samples: 1" in capsys.readouterr().out

    assert main(["export", "--samples", str(samples)]) == 0
    assert len(json.loads(capsys.readouterr().out)) == 1

    assert main(["clear", "--samples", str(samples)]) == 0
    assert not samples.exists()


def test_parse_position():
    assert parse_position("3,4") == (3, 4)
    with pytest.raises(Exception):
        parse_position("3")


def test_log_level_resolution(monkeypatch):
    monkeypatch.setenv("ARENA_LOG_LEVEL", "debug")
    assert resolve_log_level(None) == "DEBUG"
    assert resolve_log_level("info") == "INFO"
    monkeypatch.delenv("ARENA_LOG_LEVEL")
    assert resolve_log_level(None) == "WARNING"


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


@pytest.mark.parametrize("size", ["0", "1", "ten"])
def test_bench_rejects_tiny_sizes(size, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["bench", "--runs", "1", "--sizes", size, "--difficulties", "easy"])
    assert exc.value.code == 2
    assert "grid size" in capsys.readouterr().err


def test_battle_rejects_tiny_size():
    with pytest.raises(SystemExit):
        main(["battle", "--size", "1"])


def test_random_endpoints_need_two_cells():
    with pytest.raises(InvalidInputError):
        random_endpoints(1, random.Random(0))


def test_battle_malformed_map_exit_code(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(json.dumps({"size": 2, "cells": [[0, 0], [0, 0]], "start": ["a", "b"], "target": [1, 1]}))
    assert main(["battle", "--map", str(path)]) == 2


def test_battle_from_map_records_custom_difficulty(tmp_path):
    path = tmp_path / "map.json"
    samples = tmp_path / "samples.json"
    save_map(Grid.from_ascii(["S....", ".###.", ".....", ".###.", "....T"]), path)
    assert main(["battle", "--map", str(path), "--difficulty", "hard", "--samples", str(samples)]) == 0
    stored = json.loads(samples.read_text())
    assert stored[0]["difficulty"] == "custom"
    assert stored[0]["gridSize"] == 5
