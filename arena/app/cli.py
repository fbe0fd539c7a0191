# arena/app/cli.py
#!/usr/bin/env python3
"""
Maze Battle Arena - command line front end

Commands:
    battle   build (or --map load) a maze, predict the winner, run all four
             algorithms and compare
    bench    repeated random battles per size x difficulty, CSV + optional plot
    stats    winner / difficulty counts of a samples file
    export   print a samples file as pretty JSON
    clear    delete a samples file

Logging:
- ENV: ARENA_LOG_LEVEL=DEBUG|INFO|WARNING
- CLI: --log-level=...
"""

from typing import Dict, List, Optional, Sequence, Tuple
import argparse
import csv
import logging
import os
import random
import sys

# Optional plotting
try:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    HAS_MPL = True
except Exception:
    HAS_MPL = False

from arena.core.battle import battle_winner, performance, run_battle
from arena.core.errors import ArenaError, InvalidInputError
from arena.core.features import extract
from arena.core.maps import load_map, save_map
from arena.core.maze import DIFFICULTIES, generate
from arena.core.predictor import Predictor
from arena.core.samples import JsonFileSampleSink, collect_sample, export_samples, sample_stats
from arena.core.types import ALGORITHMS, Grid, Position

logger = logging.getLogger("arena")

DISPLAY_NAMES = {
    "aStar": "A* (A-Star)",
    "bfs": "BFS (Breadth-First)",
    "dfs": "DFS (Depth-First)",
    "dijkstra": "Dijkstra",
}
GRID_SIZES = (15, 20, 25)
MAP_DIFFICULTY = "custom"  # recorded for hand-made maps loaded with --map


# ---------- logging ----------
def resolve_log_level(cli_value: Optional[str]) -> str:
    level = os.getenv("ARENA_LOG_LEVEL", "WARNING")
    if cli_value:
        level = cli_value
    return level.upper()


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")


# ---------- helpers ----------
def parse_position(text: str) -> Position:
    try:
        r, c = (int(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got {text!r}")
    return (r, c)


def grid_size(text: str) -> int:
    try:
        size = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer grid size, got {text!r}")
    if size < 2:
        raise argparse.ArgumentTypeError(f"grid size must be at least 2, got {size}")
    return size


def random_endpoints(size: int, rng: random.Random) -> Tuple[Position, Position]:
    if size < 2:
        raise InvalidInputError(f"grid size must be at least 2, got {size}")
    start = (rng.randrange(size), rng.randrange(size))
    while True:
        target = (rng.randrange(size), rng.randrange(size))
        if target != start:
            return start, target


def make_predictor(weights_path: Optional[str]) -> Predictor:
    return Predictor.from_file(weights_path) if weights_path else Predictor()


# ---------- commands ----------
def cmd_battle(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed)
    difficulty = args.difficulty
    if args.map:
        difficulty = MAP_DIFFICULTY
        grid = load_map(args.map)
        start, target = grid.start, grid.target
        if start is None or target is None:
            raise InvalidInputError(f"{args.map} has no start/target")
    else:
        start = args.start or (0, 0)
        target = args.target or (args.size - 1, args.size - 1)
        grid = generate(Grid.empty(args.size), start, target, args.difficulty, rng)
        if args.save_map:
            save_map(grid, args.save_map)

    predictor = make_predictor(args.weights)
    features = extract(grid, start, target, grid.size)
    prediction = predictor.predict(features)
    results = run_battle(grid, start, target)
    perf = performance(results)
    actual = battle_winner(perf)

    if args.show:
        shown = grid.with_markings(results[args.show]) if args.show in results else grid
        print(shown.to_ascii())
        print()

    print(f"{'Algorithm':<22}{'Path':>8}{'Visited':>10}")
    for algo in ALGORITHMS:
        p = perf[algo]
        path = f"{p.path_length}" if p.found else "-"
        mark = "  <- winner" if algo == actual else ""
        print(f"{DISPLAY_NAMES[algo]:<22}{path:>8}{p.visited_count:>10}{mark}")
    print()
    print(f"Predicted: {DISPLAY_NAMES[prediction.winner]} ({prediction.confidence}%) - {prediction.reason}")
    print(f"Actual:    {DISPLAY_NAMES.get(actual, 'no path')}")

    if args.samples:
        collect_sample(features, perf, difficulty, grid.size, JsonFileSampleSink(args.samples))
    return 0


def run_single(size: int, difficulty: str, predictor: Predictor, rng: random.Random) -> Dict[str, object]:
    start, target = random_endpoints(size, rng)
    grid = generate(Grid.empty(size), start, target, difficulty, rng)
    features = extract(grid, start, target, size)
    prediction = predictor.predict(features)
    perf = performance(run_battle(grid, start, target))
    actual = battle_winner(perf)
    row: Dict[str, object] = {
        "size": size,
        "difficulty": difficulty,
        "predicted": prediction.winner,
        "confidence": prediction.confidence,
        "actual": actual,
        "agree": prediction.winner == actual,
    }
    for algo in ALGORITHMS:
        row[f"{algo}_path"] = perf[algo].path_length
        row[f"{algo}_visited"] = perf[algo].visited_count
    row["_features"] = features
    row["_perf"] = perf
    return row


def aggregate_results(rows: List[Dict[str, object]]) -> List[Dict[str, object]]:
    grouped: Dict[Tuple[int, str], List[Dict[str, object]]] = {}
    for r in rows:
        grouped.setdefault((r["size"], r["difficulty"]), []).append(r)

    summary = []
    for (size, difficulty), items in grouped.items():
        entry: Dict[str, object] = {"size": size, "difficulty": difficulty, "count": len(items)}
        entry["agreement_rate"] = sum(1 for it in items if it["agree"]) / len(items)
        for algo in ALGORITHMS:
            entry[f"{algo}_wins"] = sum(1 for it in items if it["actual"] == algo)
            entry[f"{algo}_visited_avg"] = sum(it[f"{algo}_visited"] for it in items) / len(items)
        summary.append(entry)
    return summary


def write_csv(path: str, rows: List[Dict[str, object]]) -> None:
    if not rows:
        return
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        for r in rows:
            writer.writerow(r)


def plot_agreement(summary: List[Dict[str, object]], out_path: str) -> None:
    if not HAS_MPL:
        return
    labels = [f"{row['size']}\n({row['difficulty']})" for row in summary]
    values = [row["agreement_rate"] for row in summary]
    plt.figure(figsize=(max(8, len(labels) * 0.8), 5))
    plt.bar(range(len(values)), values)
    plt.xticks(range(len(values)), labels)
    plt.ylim(0, 1)
    plt.ylabel("predicted == actual")
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()


def cmd_bench(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed)
    predictor = make_predictor(args.weights)
    sink = JsonFileSampleSink(args.samples) if args.samples else None

    rows = []
    for size in args.sizes:
        for difficulty in args.difficulties:
            for _ in range(args.runs):
                row = run_single(size, difficulty, predictor, rng)
                if sink is not None:
                    collect_sample(row["_features"], row["_perf"], difficulty, size, sink)
                rows.append({k: v for k, v in row.items() if not k.startswith("_")})

    os.makedirs(args.out_dir, exist_ok=True)
    write_csv(os.path.join(args.out_dir, "raw_results.csv"), rows)
    summary = aggregate_results(rows)
    write_csv(os.path.join(args.out_dir, "summary.csv"), summary)
    if HAS_MPL:
        plot_agreement(summary, os.path.join(args.out_dir, "agreement.png"))

    for entry in summary:
        print(f"{entry['size']:>3} {entry['difficulty']:<7} runs={entry['count']:<4} "
              f"agreement={entry['agreement_rate']:.0%}")
    print(f"Wrote results to {args.out_dir}")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    stats = sample_stats(JsonFileSampleSink(args.samples).read_all())
    print(f"Total samples: {stats['total_samples']}")
    for name, count in sorted(stats["winners"].items()):
        print(f"  winner {name}: {count}")
    for name, count in sorted(stats["by_difficulty"].items()):
        print(f"  {name}: {count}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    print(export_samples(JsonFileSampleSink(args.samples)))
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    JsonFileSampleSink(args.samples).clear()
    return 0


# ---------- parser ----------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arena", description="Pathfinding battles with a winner predictor.")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default from ARENA_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("battle", help="Run one battle")
    p.add_argument("--size", type=grid_size, default=20)
    p.add_argument("--difficulty", choices=DIFFICULTIES, default="medium")
    p.add_argument("--start", type=parse_position, default=None, help="ROW,COL")
    p.add_argument("--target", type=parse_position, default=None, help="ROW,COL")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--map", default=None, help="Load a JSON map instead of generating")
    p.add_argument("--save-map", default=None, help="Write the generated maze as a JSON map")
    p.add_argument("--weights", default=None, help="JSON weight table for the predictor")
    p.add_argument("--samples", default=None, help="Append the run to this samples file")
    p.add_argument("--show", choices=ALGORITHMS, default=None, help="Print the maze with this trace")
    p.set_defaults(func=cmd_battle)

    p = sub.add_parser("bench", help="Repeated random battles")
    p.add_argument("--runs", type=int, default=10, help="Runs per (size, difficulty) pair")
    p.add_argument("--sizes", type=grid_size, nargs="*", default=list(GRID_SIZES))
    p.add_argument("--difficulties", nargs="*", choices=DIFFICULTIES, default=list(DIFFICULTIES))
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--weights", default=None)
    p.add_argument("--samples", default=None)
    p.add_argument("--out-dir", default="bench_output")
    p.set_defaults(func=cmd_bench)

    for name, func, text in (("stats", cmd_stats, "Summarize a samples file"),
                             ("export", cmd_export, "Print a samples file as JSON"),
                             ("clear", cmd_clear, "Delete a samples file")):
        p = sub.add_parser(name, help=text)
        p.add_argument("--samples", required=True)
        p.set_defaults(func=func)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(resolve_log_level(args.log_level))
    try:
        return args.func(args)
    except ArenaError as ex:
        logger.error("%s", ex)
        return 2


if __name__ == "__main__":
    sys.exit(main())
