#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from dungeon_config import DungeonConfig
from dungeon_constants import (
    BORDER_THICKNESS,
    DEFAULT_ENEMY_CHANCE,
    DEFAULT_HEIGHT,
    DEFAULT_LOOT_CHANCE,
    DEFAULT_MAX_ROOM_ENTRANCES,
    DEFAULT_MAX_ROOM_SIDE,
    DEFAULT_MIN_ROOM_ENTRANCES,
    DEFAULT_MIN_ROOM_SIDE,
    DEFAULT_ROOM_SPACING,
    DEFAULT_WIDTH,
    RANDOM_SEED,
)
from dungeon_generator import DungeonGenerator
from grid_renderer import print_grid


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a dungeon and print it to the console.")
    parser.add_argument("-W", "--width", type=int, default=DEFAULT_WIDTH, help="The width of the generated dungeon.")
    parser.add_argument("-H", "--height", type=int, default=DEFAULT_HEIGHT, help="The height of the generated dungeon.")
    parser.add_argument("--min-room-side", type=int, default=DEFAULT_MIN_ROOM_SIDE, help="The minimum width/height a room can have.")
    parser.add_argument("--max-room-side", type=int, default=DEFAULT_MAX_ROOM_SIDE, help="The maximum width/height a room can have.")
    parser.add_argument(
        "--room-spacing",
        type=int,
        default=DEFAULT_ROOM_SPACING,
        help="The distance between rooms. Odd values keep corridors centred between rooms.",
    )
    parser.add_argument("--min-room-entrances", type=int, default=DEFAULT_MIN_ROOM_ENTRANCES, help="The minimum number of corridor links per room.")
    parser.add_argument(
        "--max-room-entrances",
        type=int,
        default=DEFAULT_MAX_ROOM_ENTRANCES,
        help="The (exclusive) maximum number of corridor links per room.",
    )
    parser.add_argument("--enemy-chance", type=float, default=DEFAULT_ENEMY_CHANCE, help="Chance for a room to hold enemies.")
    parser.add_argument("--loot-chance", type=float, default=DEFAULT_LOOT_CHANCE, help="Chance for a room to hold loot.")
    parser.add_argument("--seed", type=int, default=RANDOM_SEED, help="Seed for reproducible output.")
    parser.add_argument("--border", type=int, default=BORDER_THICKNESS, help="Wall border drawn around the dungeon.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log generation details.")
    args = parser.parse_args(argv)
    if args.border < 0:
        parser.error("--border cannot be negative")
    return args


def build_config(args: argparse.Namespace) -> DungeonConfig:
    return DungeonConfig(
        width=args.width,
        height=args.height,
        min_room_side=args.min_room_side,
        max_room_side=args.max_room_side,
        room_spacing=args.room_spacing,
        min_room_entrances=args.min_room_entrances,
        max_room_entrances=args.max_room_entrances,
        enemy_chance=args.enemy_chance,
        loot_chance=args.loot_chance,
        random_seed=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    seed = config.random_seed
    if seed is None:
        # Pick a random seed randomly and print it, so we can reproduce a dungeon by passing --seed next run.
        seed = random.randint(0, 1000000)
        config.random_seed = seed
    print(f"Using random seed {seed}")

    dungeon = DungeonGenerator(config).generate()
    print_grid(dungeon, border=args.border)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
