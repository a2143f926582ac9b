"""Spatial index for tracking which room occupies each tile."""

from __future__ import annotations

from typing import List, Optional

from dungeon_geometry import TilePos
from dungeon_models import Room, RoomCollection


class RoomIndex:
    """Caches tile occupancy of a finished room collection to accelerate spatial lookups."""

    def __init__(self, rooms: RoomCollection) -> None:
        self.width = rooms.width
        self.height = rooms.height
        self.rooms: List[Room] = list(rooms)
        self._tile_to_room: List[List[int]] = [[-1] * self.width for _ in range(self.height)]
        for room_index, room in enumerate(self.rooms):
            for tile in room.boundary.iter_tiles():
                self._tile_to_room[tile.y][tile.x] = room_index

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def room_index_at(self, x: int, y: int) -> int:
        """Return the index of the room occupying the tile, or -1 for none / out of bounds."""
        if not self.in_bounds(x, y):
            return -1
        return self._tile_to_room[y][x]

    def room_at(self, x: int, y: int) -> Optional[Room]:
        room_index = self.room_index_at(x, y)
        if room_index < 0:
            return None
        return self.rooms[room_index]

    def is_room(self, x: int, y: int) -> bool:
        return self.room_index_at(x, y) >= 0

    def is_entrance(self, tile: TilePos) -> bool:
        room = self.room_at(tile.x, tile.y)
        return room is not None and tile in room.entrances
