"""DungeonGenerator orchestrates the three generation phases."""

from __future__ import annotations

import logging
import random
from time import perf_counter
from typing import Callable, Optional, TypeVar

from dungeon import Dungeon
from dungeon_config import DungeonConfig
from dungeon_models import RoomCollection
from metrics import GenerationMetrics
from path_builder import PathBuilder
from room_layout_builder import RoomLayoutBuilder
from room_partitioner import RoomPartitioner

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DungeonGenerator:
    """Manages the overall process of generating a dungeon.

    The algorithm works as follows:
    (1) partition the area into rectangular rooms
    (2) connect the rooms via paths, registering the entrances on the rooms
    (3) decorate every room according to its entrances
    All three phases draw from the same random generator, in this order.
    """

    def __init__(self, config: DungeonConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.random_seed)
        self.metrics = GenerationMetrics() if config.collect_metrics else None
        self.partitioner = RoomPartitioner()
        self.path_builder = PathBuilder()
        self.layout_builder = RoomLayoutBuilder()

    def _run_phase(self, name: str, func: Callable[..., T], *args, **kwargs) -> T:
        if self.metrics is None:
            return func(*args, **kwargs)

        start = perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            self.metrics.record_phase(name, perf_counter() - start)

    def generate(self) -> Dungeon:
        """Generates the dungeon, running the phases in their fixed order."""
        config = self.config

        # Step 1: Split the whole area into rooms.
        rooms = self._run_phase(
            "partition",
            self.partitioner.partition,
            config.width,
            config.height,
            config.min_room_side,
            config.max_room_side,
            config.room_spacing,
            self.rng,
        )

        # Step 2: Build the corridors; this registers entrances on the rooms.
        path = self._run_phase(
            "path",
            self.path_builder.build,
            rooms,
            config.min_room_entrances,
            config.max_room_entrances,
            self.rng,
        )

        # Step 3: Decorate every room now that its entrances are final.
        self._run_phase("layout", self._build_layouts, rooms)

        logger.info(
            "Generated %dx%d dungeon with %d rooms and %d path tiles",
            config.width,
            config.height,
            len(rooms),
            len(path),
        )
        return Dungeon(rooms, path)

    def _build_layouts(self, rooms: RoomCollection) -> None:
        for room in rooms:
            room.set_layout(
                self.layout_builder.build(
                    room,
                    self.config.enemy_chance,
                    self.config.loot_chance,
                    self.rng,
                )
            )


def generate_dungeon(config: DungeonConfig, rng: Optional[random.Random] = None) -> Dungeon:
    """Convenience wrapper running a fresh generator once."""
    return DungeonGenerator(config, rng).generate()


__all__ = ["DungeonGenerator", "generate_dungeon"]
