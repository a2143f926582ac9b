#!/usr/bin/env python3

# This file performs multiple runs of dungeon generation, collecting and reporting metrics.
# Used for testing both performance of the algorithm and quality of resulting dungeons.

from __future__ import annotations

import argparse
import json
import math
import random
import statistics
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx

from dungeon import Dungeon
from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from dungeon_geometry import TilePos

DEFAULT_CONFIG_KWARGS: Dict[str, Any] = dict(
    width=80,
    height=50,
    min_room_side=5,
    max_room_side=16,
    room_spacing=3,
    min_room_entrances=1,
    max_room_entrances=3,
    enemy_chance=0.3,
    loot_chance=0.2,
    collect_metrics=True,
)

PERCENTILES = [5.0, 25.0, 50.0, 75.0, 95.0]

GraphNode = Tuple[str, Any]


def build_config(seed: int, **overrides: Any) -> DungeonConfig:
    kwargs = dict(DEFAULT_CONFIG_KWARGS)
    kwargs.update(overrides)
    return DungeonConfig(random_seed=seed, **kwargs)


@dataclass
class GenerationRunResult:
    seed: int
    duration: float
    total_rooms: int
    path_tiles: int
    total_entrances: int
    rooms_without_entrance: int
    rooms_connected: bool
    corridor_cycle_count: int
    dead_end_count: int
    phase_time: float
    phase_metrics: Dict[str, Dict[str, float | int]]


def build_corridor_graph(dungeon: Dungeon) -> nx.Graph:
    """Graph of path tiles (4-neighbour adjacency) plus one node per room, linked through its entrances."""
    graph = nx.Graph()
    path = dungeon.path
    for tile in path:
        graph.add_node(("tile", tile))
        for neighbor in tile.manhattan_neighbors():
            if neighbor in path:
                graph.add_edge(("tile", tile), ("tile", neighbor))

    for room_index, room in enumerate(dungeon.rooms):
        graph.add_node(("room", room_index))
        for entrance in room.entrances:
            for neighbor in entrance.manhattan_neighbors():
                if neighbor in path:
                    graph.add_edge(("room", room_index), ("tile", neighbor))
    return graph


def rooms_connected(graph: nx.Graph) -> bool:
    """True if every room node can reach every other room node."""
    room_nodes = [node for node in graph.nodes if node[0] == "room"]
    if len(room_nodes) <= 1:
        return True
    reachable = nx.node_connected_component(graph, room_nodes[0])
    return all(node in reachable for node in room_nodes)


def corridor_dead_ends(graph: nx.Graph) -> List[TilePos]:
    """Path tiles with a single neighbour that is itself a path tile."""
    dead_ends: List[TilePos] = []
    for node in graph.nodes:
        if node[0] != "tile":
            continue
        neighbors = list(graph.neighbors(node))
        if len(neighbors) == 1 and neighbors[0][0] == "tile":
            dead_ends.append(node[1])
    return dead_ends


def corridor_cycle_count(graph: nx.Graph) -> int:
    tiles_only = graph.subgraph(node for node in graph.nodes if node[0] == "tile")
    return len(nx.cycle_basis(tiles_only))


def run_single_generation(seed: int, **config_overrides: Any) -> GenerationRunResult:
    """Run one dungeon generation with the provided seed and collect metrics."""
    config = build_config(seed, **config_overrides)
    generator = DungeonGenerator(config)

    start = time.perf_counter()
    dungeon = generator.generate()
    end = time.perf_counter()

    graph = build_corridor_graph(dungeon)
    rooms = list(dungeon.rooms)
    return GenerationRunResult(
        seed=seed,
        duration=end - start,
        total_rooms=len(rooms),
        path_tiles=len(dungeon.path),
        total_entrances=sum(len(room.entrances) for room in rooms),
        rooms_without_entrance=sum(1 for room in rooms if not room.entrances),
        rooms_connected=rooms_connected(graph),
        corridor_cycle_count=corridor_cycle_count(graph),
        dead_end_count=len(corridor_dead_ends(graph)),
        phase_time=generator.metrics.total_time if generator.metrics else 0.0,
        phase_metrics=generator.metrics.snapshot() if generator.metrics else {},
    )


def run_benchmark(num_runs: int, seed: Optional[int], **config_overrides: Any) -> List[GenerationRunResult]:
    """Run the generator multiple times and collect run-level metrics."""
    rng = random.Random(seed)
    results: List[GenerationRunResult] = []
    for _ in range(num_runs):
        run_seed = rng.randint(0, 1_000_000)
        results.append(run_single_generation(run_seed, **config_overrides))
    return results


def percentile(values: List[float], pct: float) -> float:
    """Linearly interpolated percentile; ``pct`` is clamped to [0, 100]."""
    if not values:
        return math.nan
    ordered = sorted(values)
    position = min(max(pct, 0.0), 100.0) / 100.0 * (len(ordered) - 1)
    index = int(position)
    if index + 1 >= len(ordered):
        return ordered[-1]
    return ordered[index] + (ordered[index + 1] - ordered[index]) * (position - index)


# (scale, suffix, decimals), largest unit first.
_TIME_UNITS = ((1.0, "s", 3), (1e-3, "ms", 1), (1e-6, "us", 1))


def format_seconds(value: float) -> str:
    for scale, suffix, decimals in _TIME_UNITS:
        if value >= scale:
            break
    return f"{value / scale:.{decimals}f}{suffix}"


def summarize(results: List[GenerationRunResult]) -> Dict[str, Any]:
    if not results:
        return {"runs": 0}
    durations = [result.duration for result in results]
    rooms = [float(result.total_rooms) for result in results]
    return {
        "runs": len(results),
        "duration_mean": statistics.fmean(durations),
        "duration_percentiles": {pct: percentile(durations, pct) for pct in PERCENTILES},
        "rooms_mean": statistics.fmean(rooms),
        "rooms_percentiles": {pct: percentile(rooms, pct) for pct in PERCENTILES},
        "path_tiles_mean": statistics.fmean(float(result.path_tiles) for result in results),
        "connected_fraction": sum(1 for result in results if result.rooms_connected) / len(results),
        "cycles_mean": statistics.fmean(float(result.corridor_cycle_count) for result in results),
        "dead_ends_mean": statistics.fmean(float(result.dead_end_count) for result in results),
        "phase_time_means": phase_time_means(results),
    }


def phase_time_means(results: List[GenerationRunResult]) -> Dict[str, float]:
    """Mean time spent in each phase, over the runs that recorded it."""
    per_phase: Dict[str, List[float]] = {}
    for result in results:
        for name, phase in result.phase_metrics.items():
            per_phase.setdefault(name, []).append(float(phase["total_time"]))
    return {name: statistics.fmean(times) for name, times in per_phase.items()}


def print_summary(summary: Dict[str, Any]) -> None:
    if not summary.get("runs"):
        print("No runs performed.")
        return
    print(f"Runs: {summary['runs']}")
    print(f"Generation time: mean {format_seconds(summary['duration_mean'])}")
    for pct, value in summary["duration_percentiles"].items():
        print(f"  p{pct:g}: {format_seconds(value)}")
    for name, value in summary["phase_time_means"].items():
        print(f"  {name}: mean {format_seconds(value)}")
    print(f"Rooms: mean {summary['rooms_mean']:.1f}")
    print(f"Path tiles: mean {summary['path_tiles_mean']:.1f}")
    print(f"Fully connected: {summary['connected_fraction']:.1%}")
    print(f"Corridor cycles: mean {summary['cycles_mean']:.2f}")
    print(f"Dead ends: mean {summary['dead_ends_mean']:.2f}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark dungeon generation.")
    parser.add_argument("--runs", type=int, default=20, help="Number of dungeons to generate.")
    parser.add_argument("--seed", type=int, default=None, help="Master seed used to derive per-run seeds.")
    parser.add_argument("--width", type=int, default=DEFAULT_CONFIG_KWARGS["width"])
    parser.add_argument("--height", type=int, default=DEFAULT_CONFIG_KWARGS["height"])
    parser.add_argument("--json", dest="json_path", default=None, help="Write per-run results to this JSON file.")
    args = parser.parse_args()
    if args.runs <= 0:
        parser.error("--runs must be positive")

    results = run_benchmark(args.runs, args.seed, width=args.width, height=args.height)
    summary = summarize(results)
    print_summary(summary)

    if args.json_path:
        with open(args.json_path, "w", encoding="utf-8") as handle:
            json.dump(
                {"summary": summary, "runs": [asdict(result) for result in results]},
                handle,
                indent=2,
            )
        print(f"Wrote results to {args.json_path}")


if __name__ == "__main__":
    main()
