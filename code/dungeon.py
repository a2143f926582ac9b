"""The finished dungeon: rooms and corridors combined into one tile grid."""

from __future__ import annotations

from dungeon_models import RoomCollection, Tile
from dungeon_path import Path


class Dungeon:
    """Read-only composition of a finished room collection and corridor path."""

    def __init__(self, rooms: RoomCollection, path: Path) -> None:
        self._rooms = rooms
        self._path = path

    @property
    def rooms(self) -> RoomCollection:
        return self._rooms

    @property
    def path(self) -> Path:
        return self._path

    @property
    def width(self) -> int:
        return self._rooms.width

    @property
    def height(self) -> int:
        return self._rooms.height

    def at(self, x: int, y: int) -> Tile:
        """Check whether the tile is a path first. If not, check rooms. Default to a wall."""
        tile = self._path.at(x, y)
        if tile is not Tile.NOTHING:
            return tile
        tile = self._rooms.at(x, y)
        if tile is not Tile.NOTHING:
            return tile
        return Tile.WALL
