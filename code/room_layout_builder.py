"""Decorates the interior of a single room once its entrances are known."""

from __future__ import annotations

import bisect
import itertools
import random
from collections import deque
from typing import Deque, Set, Tuple

from dungeon_constants import (
    COLUMN_OFFSET,
    FILL_OFFSET,
    LAKE_OFFSET,
    MAX_FILL_STEPS,
    MIN_FILL_STEPS,
    OMIT_COLUMN_CHANCE,
    OMIT_DIRECTION_STEP_CHANCE,
    ROOM_CORNERS_CHANCE,
    ROOM_LAYOUT_WEIGHTS,
    RoomLayout,
)
from dungeon_geometry import MANHATTAN_DELTAS
from dungeon_models import Room, RoomGrid, Tile

_LAYOUTS: Tuple[RoomLayout, ...] = tuple(layout for layout, _ in ROOM_LAYOUT_WEIGHTS)
_CUMULATIVE_WEIGHTS: Tuple[int, ...] = tuple(itertools.accumulate(weight for _, weight in ROOM_LAYOUT_WEIGHTS))


def pick_layout(rng: random.Random) -> RoomLayout:
    """Weighted choice of a layout variant using a single draw."""
    picked = rng.randrange(_CUMULATIVE_WEIGHTS[-1])
    return _LAYOUTS[bisect.bisect_right(_CUMULATIVE_WEIGHTS, picked)]


class RoomLayoutBuilder:
    """Produces the tile grid of one room.

    Examples of the variants (entrances omitted):

        REGULAR    LAKE       COLUMNS    FILLED
        ########   ########   ########   ##### ##
        #      #   #      #   #      #   ####   #
        #      #   # ~~~~ #   # o  o #   ##### ##
        #      #   # ~~~~ #   #      #   ########
        #      #   #      #   # o  o #   ######
        ########   ########   ########   ########
    """

    def build(
        self,
        room: Room,
        enemy_chance: float,
        loot_chance: float,
        rng: random.Random,
    ) -> RoomGrid:
        width, height = room.width, room.height
        layout: RoomGrid = [[Tile.AIR] * width for _ in range(height)]

        for x in range(width):
            layout[0][x] = Tile.WALL
            layout[-1][x] = Tile.WALL
        for y in range(height):
            layout[y][0] = Tile.WALL
            layout[y][-1] = Tile.WALL

        for entrance in room.entrances:
            layout[entrance.y - room.y][entrance.x - room.x] = Tile.AIR

        if rng.random() < ROOM_CORNERS_CHANCE:
            self._add_corners(layout, width, height)

        variant = pick_layout(rng)
        if variant is RoomLayout.LAKE:
            self._flood_lake(layout, width, height)
        elif variant is RoomLayout.COLUMNS:
            self._place_columns(layout, width, height, rng)
        elif variant is RoomLayout.FILLED:
            self._fill_and_carve(layout, room, rng)

        # Both chances are drawn for every variant.
        enemies = rng.random() < enemy_chance
        loot = rng.random() < loot_chance
        if variant in (RoomLayout.REGULAR, RoomLayout.COLUMNS):
            # Centre rounds towards the top-left.
            center_x, center_y = (width - 1) // 2, (height - 1) // 2
            if enemies and self._is_open_floor(layout, center_x, center_y):
                layout[center_y][center_x] = Tile.ENEMIES
                center_x += 1
            if loot and self._is_open_floor(layout, center_x, center_y):
                layout[center_y][center_x] = Tile.LOOT

        return layout

    @staticmethod
    def _is_interior(layout: RoomGrid, x: int, y: int) -> bool:
        return 1 <= x < len(layout[0]) - 1 and 1 <= y < len(layout) - 1

    def _is_open_floor(self, layout: RoomGrid, x: int, y: int) -> bool:
        return self._is_interior(layout, x, y) and layout[y][x] is Tile.AIR

    def _add_corners(self, layout: RoomGrid, width: int, height: int) -> None:
        """Round off inner corners whose outer corner is fully walled in."""
        if width < 3 or height < 3:
            return
        corners = (
            ((0, 0), (1, 1), Tile.LU_WALL_CORNER),
            ((0, height - 1), (1, height - 2), Tile.LD_WALL_CORNER),
            ((width - 1, 0), (width - 2, 1), Tile.RU_WALL_CORNER),
            ((width - 1, height - 1), (width - 2, height - 2), Tile.RD_WALL_CORNER),
        )
        for (x, y), (inner_x, inner_y), tile in corners:
            all_walls = True
            for dx, dy in MANHATTAN_DELTAS:
                xn, yn = x + dx, y + dy
                if 0 <= xn < width and 0 <= yn < height and layout[yn][xn] is not Tile.WALL:
                    all_walls = False
            if all_walls:
                layout[inner_y][inner_x] = tile

    @staticmethod
    def _flood_lake(layout: RoomGrid, width: int, height: int) -> None:
        for y in range(LAKE_OFFSET, height - LAKE_OFFSET):
            for x in range(LAKE_OFFSET, width - LAKE_OFFSET):
                layout[y][x] = Tile.WATER

    def _place_columns(self, layout: RoomGrid, width: int, height: int, rng: random.Random) -> None:
        near = COLUMN_OFFSET
        far_x = width - COLUMN_OFFSET - 1
        far_y = height - COLUMN_OFFSET - 1
        positions = []
        # In small rooms the columns would touch, so only one diagonal pair is kept.
        if not (width <= COLUMN_OFFSET * 2 + 2 or height <= COLUMN_OFFSET * 2 + 2):
            positions.extend(((near, near), (far_x, far_y)))
        positions.extend(((far_x, near), (near, far_y)))

        for x, y in positions:
            if rng.random() > OMIT_COLUMN_CHANCE and self._is_interior(layout, x, y):
                layout[y][x] = Tile.COLUMN

    @staticmethod
    def _fill_and_carve(layout: RoomGrid, room: Room, rng: random.Random) -> None:
        """Wall off the interior, then dig an irregular cavity in from every entrance."""
        width, height = room.width, room.height
        for y in range(FILL_OFFSET, height - FILL_OFFSET):
            for x in range(FILL_OFFSET, width - FILL_OFFSET):
                layout[y][x] = Tile.WALL

        def in_fill_area(x: int, y: int) -> bool:
            return FILL_OFFSET <= x < width - FILL_OFFSET and FILL_OFFSET <= y < height - FILL_OFFSET

        for entrance in room.entrances:
            start = (entrance.x - room.x, entrance.y - room.y)
            fill_steps = rng.randint(MIN_FILL_STEPS, MAX_FILL_STEPS)
            explored: Set[Tuple[int, int]] = {start}
            queue: Deque[Tuple[int, int, int]] = deque([(start[0], start[1], 0)])

            while queue:
                x, y, distance = queue.popleft()
                if distance > fill_steps:
                    break
                layout[y][x] = Tile.AIR

                for dx, dy in MANHATTAN_DELTAS:
                    xn, yn = x + dx, y + dy
                    if (xn, yn) in explored:
                        continue
                    explored.add((xn, yn))
                    # The first step behind an entrance is always dug and takes no omission draw,
                    # so the entrance never opens onto a wall.
                    if in_fill_area(xn, yn) and (distance == 0 or rng.random() > OMIT_DIRECTION_STEP_CHANCE):
                        queue.append((xn, yn, distance + 1))
