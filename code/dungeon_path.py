"""The corridor network connecting rooms."""

from __future__ import annotations

from typing import Iterable, Iterator, Set

from dungeon_geometry import TilePos
from dungeon_models import Tile


class Path:
    """A sparse, unordered set of corridor tiles."""

    def __init__(self, tiles: Iterable[TilePos] = ()) -> None:
        self._tiles: Set[TilePos] = set(tiles)

    def add(self, tile: TilePos) -> None:
        self._tiles.add(tile)

    def remove(self, tile: TilePos) -> None:
        self._tiles.discard(tile)

    def contains(self, x: int, y: int) -> bool:
        return TilePos(x, y) in self._tiles

    def __contains__(self, tile: object) -> bool:
        return tile in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[TilePos]:
        return iter(self._tiles)

    def at(self, x: int, y: int) -> Tile:
        """Corridor tiles are open floor; anything else is left for other lookups."""
        return Tile.AIR if TilePos(x, y) in self._tiles else Tile.NOTHING
