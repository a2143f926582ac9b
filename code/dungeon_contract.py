from __future__ import annotations

from typing import Protocol, runtime_checkable

from dungeon_models import Tile


@runtime_checkable
class TileSource(Protocol):
    """
    Defines the contract that anything renderable as a tile grid must fulfill.
    Renderers and analysis tools rely only on these members being present.
    """

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    def at(self, x: int, y: int) -> Tile:
        ...
