"""Geometry helpers for working with tile coordinates and rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

# Neighbourhood tables; order matters for reproducible BFS expansion.
MANHATTAN_DELTAS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (-1, 0), (0, -1))
DIAGONAL_DELTAS: Tuple[Tuple[int, int], ...] = MANHATTAN_DELTAS + ((-1, -1), (1, 1), (-1, 1), (1, -1))


@dataclass(frozen=True, order=True)
class TilePos:
    """Integer tile coordinate."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y

    def manhattan_neighbors(self) -> Iterator[TilePos]:
        for dx, dy in MANHATTAN_DELTAS:
            yield TilePos(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle using integer tile coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def max_x(self) -> int:
        """Right edge (exclusive)."""
        return self.x + self.width

    @property
    def max_y(self) -> int:
        """Bottom edge (exclusive)."""
        return self.y + self.height

    def overlaps(self, other: Rect) -> bool:
        """Return True when the interior of this rect intersects another rect."""
        if self.max_x <= other.x or other.max_x <= self.x:
            return False
        if self.max_y <= other.y or other.max_y <= self.y:
            return False
        return True

    def contains(self, point: TilePos) -> bool:
        return self.x <= point.x < self.max_x and self.y <= point.y < self.max_y

    def contains_rect(self, other: Rect) -> bool:
        """Return True if ``other`` lies fully inside this rect."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    def chebyshev_gap(self, other: Rect) -> int:
        """Number of empty tiles separating two rects under 8-neighbour distance.

        Touching or overlapping rects have a gap of 0.
        """
        gap_x = max(other.x - self.max_x, self.x - other.max_x, 0)
        gap_y = max(other.y - self.max_y, self.y - other.max_y, 0)
        return max(gap_x, gap_y)

    def iter_tiles(self) -> Iterator[TilePos]:
        """Yield every tile of the rect, row by row."""
        for ty in range(self.y, self.max_y):
            for tx in range(self.x, self.max_x):
                yield TilePos(tx, ty)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height
