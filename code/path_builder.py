"""Corridor synthesis: frontier classification, room linking and dead-end pruning."""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, Dict, List, Optional, Set, Tuple

from dungeon_geometry import DIAGONAL_DELTAS, MANHATTAN_DELTAS, TilePos
from dungeon_models import Room, RoomCollection
from dungeon_path import Path
from spatial_index import RoomIndex

logger = logging.getLogger(__name__)


def draw_connection_count(min_entrances: int, max_entrances: int, rng: random.Random) -> int:
    """Number of corridor links to attempt for one room.

    The upper bound is exclusive; equal bounds always yield exactly that count.
    """
    if min_entrances > max_entrances:
        raise ValueError(
            f"min_entrances ({min_entrances}) cannot exceed max_entrances ({max_entrances})"
        )
    if min_entrances == max_entrances:
        return min_entrances
    return rng.randrange(min_entrances, max_entrances)


class PathBuilder:
    """Builds the corridor network joining every room of a collection.

    The algorithm works as follows:
    (1) mark all tiles equidistant to more than one room as path
    (2) connect every room to the path with one or more corridors, registering entrances on the room
    (3) cut off dead ends that do not lead to an entrance
    """

    def __init__(self) -> None:
        self.anchor: Optional[TilePos] = None
        self._index: Optional[RoomIndex] = None

    def build(
        self,
        rooms: RoomCollection,
        min_entrances: int,
        max_entrances: int,
        rng: random.Random,
    ) -> Path:
        self._index = RoomIndex(rooms)
        self.anchor = None

        path = self.find_frontier()
        frontier_size = len(path)
        logger.debug("Frontier classification marked %d tiles", frontier_size)
        if not path:
            logger.debug("No frontier between rooms; leaving %d room(s) unconnected", len(rooms))
            return path

        for room in rooms:
            points = self.connect_room(path, room, draw_connection_count(min_entrances, max_entrances, rng), rng)
            if self.anchor is None and points:
                self.anchor = points[0]

        if self.anchor is not None:
            self.clear_dead_ends(path, self.anchor)
        logger.debug(
            "Path built: %d frontier tiles, %d after linking and pruning", frontier_size, len(path)
        )
        return path

    @property
    def index(self) -> RoomIndex:
        if self._index is None:
            raise RuntimeError("PathBuilder has no room index; call build() first")
        return self._index

    def use_rooms(self, rooms: RoomCollection) -> None:
        """Index ``rooms`` for the individual steps without running a full build."""
        self._index = RoomIndex(rooms)

    # Step 1 -----------------------------------------------------------------

    def find_frontier(self) -> Path:
        """Return a path holding every tile equidistant to two or more rooms."""
        index = self.index
        path = Path()
        for y in range(index.height):
            for x in range(index.width):
                if self.is_equidistant_to_multiple_rooms(x, y):
                    path.add(TilePos(x, y))
        return path

    def is_equidistant_to_multiple_rooms(self, x: int, y: int) -> bool:
        """Return True if the first rooms an 8-neighbour BFS from (x, y) meets are two or more distinct rooms.

        Example: T marks tiles that return True, F tiles that return False, "|.-'" outline rooms
        .--.  T  .--.
        |  |  TF | F|
        '--'  T F'--'
        """
        index = self.index
        if index.is_room(x, y):
            return False

        queue: Deque[Tuple[int, int, int]] = deque([(x, y, 0)])
        explored: Set[Tuple[int, int]] = {(x, y)}
        found_distance: Optional[int] = None
        reached: Set[int] = set()

        while queue:
            xc, yc, distance = queue.popleft()
            if found_distance is not None and distance >= found_distance:
                break
            for dx, dy in DIAGONAL_DELTAS:
                xn, yn = xc + dx, yc + dy
                if (xn, yn) in explored or not index.in_bounds(xn, yn):
                    continue
                room_index = index.room_index_at(xn, yn)
                if room_index < 0:
                    explored.add((xn, yn))
                    queue.append((xn, yn, distance + 1))
                else:
                    found_distance = distance + 1
                    reached.add(room_index)

        return len(reached) > 1

    # Step 2 -----------------------------------------------------------------

    @staticmethod
    def _interior_range(start: int, length: int) -> Tuple[int, int]:
        """Inclusive coordinate range excluding the outer ring, or the whole side if it is too short."""
        if length >= 3:
            return start + 1, start + length - 2
        return start, start + length - 1

    def connect_room(
        self, path: Path, room: Room, connections: int, rng: random.Random
    ) -> List[TilePos]:
        """Link ``room`` to the path ``connections`` times, returning the path tiles each link reached."""
        connection_points: List[TilePos] = []
        for _ in range(connections):
            x_low, x_high = self._interior_range(room.x, room.width)
            y_low, y_high = self._interior_range(room.y, room.height)
            start = TilePos(rng.randint(x_low, x_high), rng.randint(y_low, y_high))

            point = self._link_to_path(path, room, start)
            if point is None:
                logger.warning(
                    "Room %s could not reach the path from %s", room.boundary.to_tuple(), start
                )
                continue
            connection_points.append(point)
        return connection_points

    @staticmethod
    def _is_room_corner(room: Room, tile: TilePos) -> bool:
        """Corner tiles only touch the interior diagonally, so they never become entrances."""
        if room.width < 3 or room.height < 3:
            return False
        return tile.x in (room.x, room.max_x - 1) and tile.y in (room.y, room.max_y - 1)

    def _link_to_path(self, path: Path, room: Room, start: TilePos) -> Optional[TilePos]:
        """BFS from ``start`` to the nearest path tile, carve the way back and register the entrance."""
        index = self.index
        queue: Deque[TilePos] = deque([start])
        parents: Dict[TilePos, TilePos] = {start: start}

        while queue:
            current = queue.popleft()

            if current in path:
                tile = current
                while not room.contains(tile.x, tile.y):
                    path.add(tile)
                    tile = parents[tile]
                room.add_entrance(tile)
                return current

            for neighbor in current.manhattan_neighbors():
                if neighbor in parents or not index.in_bounds(neighbor.x, neighbor.y):
                    continue
                owner = index.room_at(neighbor.x, neighbor.y)
                if owner is not None and (owner is not room or self._is_room_corner(room, neighbor)):
                    continue
                parents[neighbor] = current
                queue.append(neighbor)

        return None

    # Step 3 -----------------------------------------------------------------

    def _attaches_to_entrance(self, tile: TilePos) -> bool:
        return any(self.index.is_entrance(neighbor) for neighbor in tile.manhattan_neighbors())

    @staticmethod
    def orient_path(path: Path, anchor: TilePos) -> Tuple[Dict[TilePos, List[TilePos]], List[TilePos]]:
        """Orient the anchor's path component away from the anchor by BFS.

        Returns the successor lists of every reached tile and the tiles without successors,
        in visiting order.
        """
        successors: Dict[TilePos, List[TilePos]] = {}
        discovered: Set[TilePos] = {anchor}
        queue: Deque[TilePos] = deque([anchor])
        dangling: List[TilePos] = []

        while queue:
            tile = queue.popleft()
            outgoing: List[TilePos] = []
            for neighbor in tile.manhattan_neighbors():
                if neighbor not in path:
                    continue
                # Each edge is oriented the first time it is seen; visited neighbours already point here.
                if neighbor not in successors:
                    outgoing.append(neighbor)
                if neighbor not in discovered:
                    discovered.add(neighbor)
                    queue.append(neighbor)
            successors[tile] = outgoing
            if not outgoing:
                dangling.append(tile)

        return successors, dangling

    def clear_dead_ends(self, path: Path, anchor: TilePos) -> None:
        """Strip dangling tiles, except those that lead to an entrance or hold a cycle together."""
        successors, initial_dangling = self.orient_path(path, anchor)
        dangling: Deque[TilePos] = deque(initial_dangling)
        removed = 0

        while dangling:
            tile = dangling.popleft()
            if self._attaches_to_entrance(tile):
                continue

            predecessors = [
                neighbor
                for neighbor in tile.manhattan_neighbors()
                if tile in successors.get(neighbor, ())
            ]
            if len(predecessors) != 1:
                continue

            predecessor = predecessors[0]
            path.remove(tile)
            removed += 1
            successors[predecessor].remove(tile)
            if not successors[predecessor]:
                dangling.append(predecessor)

        logger.debug("Pruned %d dead-end tiles", removed)
