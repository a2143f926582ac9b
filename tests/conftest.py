import random
import sys
from pathlib import Path
from typing import Callable, Iterable, Set

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from dungeon_config import DungeonConfig
from dungeon_geometry import TilePos
from dungeon_models import Room, RoomCollection


class ScriptedRandom(random.Random):
    """Random generator replaying fixed values for ``random()``; other draws pick the lowest option."""

    def __init__(self, values: Iterable[float] = ()) -> None:
        super().__init__(0)
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return 0.5

    def randrange(self, start, stop=None, step=1):
        return 0 if stop is None else start

    def randint(self, a, b):
        return a


@pytest.fixture
def scripted_random() -> Callable[..., ScriptedRandom]:
    def _make(*values: float) -> ScriptedRandom:
        return ScriptedRandom(values)

    return _make


@pytest.fixture
def dungeon_config() -> DungeonConfig:
    return DungeonConfig(
        width=60,
        height=40,
        min_room_side=5,
        max_room_side=14,
        room_spacing=3,
        min_room_entrances=1,
        max_room_entrances=3,
        enemy_chance=0.5,
        loot_chance=0.5,
        random_seed=1234,
    )


@pytest.fixture
def make_rooms() -> Callable[..., RoomCollection]:
    """Build a collection of the given size from ``(x, y, width, height)`` tuples."""

    def _make_rooms(width: int, height: int, *bounds) -> RoomCollection:
        rooms = RoomCollection(width, height)
        for x, y, w, h in bounds:
            rooms.add_room(Room(x, y, w, h))
        return rooms

    return _make_rooms


def flood_path(path, starts: Iterable[TilePos]) -> Set[TilePos]:
    """4-neighbour flood fill over path tiles."""
    frontier = [tile for tile in starts if tile in path]
    seen: Set[TilePos] = set(frontier)
    while frontier:
        tile = frontier.pop()
        for neighbor in tile.manhattan_neighbors():
            if neighbor in path and neighbor not in seen:
                seen.add(neighbor)
                frontier.append(neighbor)
    return seen


def entrance_attachments(room: Room, path) -> Set[TilePos]:
    """Path tiles directly outside the room's entrances."""
    return {
        neighbor
        for entrance in room.entrances
        for neighbor in entrance.manhattan_neighbors()
        if neighbor in path
    }
