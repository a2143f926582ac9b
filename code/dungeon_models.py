"""Core data types used by the dungeon generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from dungeon_geometry import Rect, TilePos


class Tile(Enum):
    """Every kind of tile the finished dungeon grid can report, keyed by display character."""

    AIR = " "
    WALL = "█"
    LU_WALL_CORNER = "▘"
    RU_WALL_CORNER = "▝"
    LD_WALL_CORNER = "▖"
    RD_WALL_CORNER = "▗"
    ENEMIES = "E"
    LOOT = "L"
    WATER = "~"
    COLUMN = "●"
    NOTHING = "?"  # Sub-lookups return this to mean "nothing here, ask someone else".

    @property
    def char(self) -> str:
        return self.value


RoomGrid = List[List[Tile]]


def split_side(length: int, cut: int, spacing: int) -> Tuple[int, int]:
    """Return the two child lengths when ``length`` is cut at ``cut`` with ``spacing`` tiles removed between them.

    The first child absorbs ``spacing // 2`` tiles, the second child the remainder.
    """
    first = cut - spacing // 2
    second = length - cut - (spacing - spacing // 2)
    return first, second


@dataclass
class Room:
    """A rectangular room, its entrances, and (once built) its tile layout."""

    x: int
    y: int
    width: int
    height: int
    entrances: List[TilePos] = field(default_factory=list)
    _layout: Optional[RoomGrid] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        # Rooms are never resized; a split replaces the room with two new ones.
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Room must have positive non-zero dimensions, got {self.width}x{self.height}"
            )

    @property
    def boundary(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def max_x(self) -> int:
        return self.x + self.width

    @property
    def max_y(self) -> int:
        return self.y + self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.max_x and self.y <= y < self.max_y

    def intersects(self, other: Room) -> bool:
        return self.boundary.overlaps(other.boundary)

    def add_entrance(self, tile: TilePos) -> bool:
        """Register ``tile`` as an entrance. Returns False if it was already registered."""
        if not self.boundary.contains(tile):
            raise ValueError(f"Entrance {tile} lies outside room {self.boundary.to_tuple()}")
        if tile in self.entrances:
            return False
        self.entrances.append(tile)
        return True

    def is_entrance(self, x: int, y: int) -> bool:
        return TilePos(x, y) in self.entrances

    def split_horizontally(self, fraction: float, spacing: int = 0) -> Optional[Tuple[Room, Room]]:
        """Split into a left and a right room, the left taking ``fraction`` of the width.

        Returns None when either child would be empty.
        """
        left_width, right_width = split_side(self.width, int(self.width * fraction), spacing)
        if left_width <= 0 or right_width <= 0:
            return None
        left = Room(self.x, self.y, left_width, self.height)
        right = Room(self.x + left_width + spacing, self.y, right_width, self.height)
        return left, right

    def split_vertically(self, fraction: float, spacing: int = 0) -> Optional[Tuple[Room, Room]]:
        """Split into a top and a bottom room, the top taking ``fraction`` of the height.

        Returns None when either child would be empty.
        """
        top_height, bottom_height = split_side(self.height, int(self.height * fraction), spacing)
        if top_height <= 0 or bottom_height <= 0:
            return None
        top = Room(self.x, self.y, self.width, top_height)
        bottom = Room(self.x, self.y + top_height + spacing, self.width, bottom_height)
        return top, bottom

    @property
    def layout(self) -> Optional[RoomGrid]:
        return self._layout

    @property
    def has_layout(self) -> bool:
        return self._layout is not None

    def set_layout(self, layout: RoomGrid) -> None:
        """Attach the decorated tile grid. May only be called once."""
        if self._layout is not None:
            raise RuntimeError(f"Room {self.boundary.to_tuple()} already has a layout")
        if len(layout) != self.height or any(len(row) != self.width for row in layout):
            raise ValueError(
                f"Layout does not match room size {self.width}x{self.height}"
            )
        self._layout = layout

    def at(self, x: int, y: int) -> Tile:
        """Return the tile at room-local coordinates."""
        if self._layout is None:
            return Tile.NOTHING
        return self._layout[y][x]


class RoomCollection:
    """All rooms of a dungeon plus the rectangle they have to stay within."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("RoomCollection width and height must be positive")
        self.boundary = Rect(0, 0, width, height)
        self.rooms: List[Room] = []

    @property
    def width(self) -> int:
        return self.boundary.width

    @property
    def height(self) -> int:
        return self.boundary.height

    def add_room(self, room: Room) -> None:
        if not self.boundary.contains_rect(room.boundary):
            raise ValueError(
                f"Room {room.boundary.to_tuple()} lies outside bounds {self.boundary.to_tuple()}"
            )
        self.rooms.append(room)

    def remove_room(self, room: Room) -> None:
        for index, existing in enumerate(self.rooms):
            if existing is room:
                del self.rooms[index]
                return
        raise ValueError(f"Room {room.boundary.to_tuple()} is not part of this collection")

    def __len__(self) -> int:
        return len(self.rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(self.rooms)

    def room_at(self, x: int, y: int) -> Optional[Room]:
        """Return the room covering the given tile, or None."""
        for room in self.rooms:
            if room.contains(x, y):
                return room
        return None

    def is_room(self, x: int, y: int) -> bool:
        return self.room_at(x, y) is not None

    def is_entrance(self, x: int, y: int) -> bool:
        room = self.room_at(x, y)
        return room is not None and room.is_entrance(x, y)

    def at(self, x: int, y: int) -> Tile:
        room = self.room_at(x, y)
        if room is None:
            return Tile.NOTHING
        return room.at(x - room.x, y - room.y)
