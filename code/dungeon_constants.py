"""Shared constants for the dungeon generator."""

from __future__ import annotations

from enum import Enum


class RoomLayout(Enum):
    """Interior decoration variants a room can be built with."""

    REGULAR = "regular"
    LAKE = "lake"
    COLUMNS = "columns"
    FILLED = "filled"


RANDOM_SEED = None  # Set to a number for reproducible behavior (for debugging); set to None to produce different dungeon on every run.

# Room partitioning.
ROOM_SPLIT_CHANCE = 0.9  # A room already small enough is only split further if a draw is at or below this.
ROOM_SPLIT_PORTION = 0.3  # The smaller child of a split gets at least this fraction of the parent side.

# Room layouts. Weights are relative, only their ratios matter.
ROOM_LAYOUT_WEIGHTS = (
    (RoomLayout.REGULAR, 6),
    (RoomLayout.LAKE, 1),
    (RoomLayout.COLUMNS, 2),
    (RoomLayout.FILLED, 2),
)
ROOM_CORNERS_CHANCE = 0.5
LAKE_OFFSET = 2  # Water keeps this many tiles away from the room edge, leaving a dry rim inside the walls.
COLUMN_OFFSET = 2
OMIT_COLUMN_CHANCE = 0.15
FILL_OFFSET = 1
MIN_FILL_STEPS = 2
MAX_FILL_STEPS = 5
OMIT_DIRECTION_STEP_CHANCE = 0.35

# Rendering.
BORDER_THICKNESS = 1

# Command-line defaults.
DEFAULT_WIDTH = 50
DEFAULT_HEIGHT = 50
DEFAULT_MIN_ROOM_SIDE = 5
DEFAULT_MAX_ROOM_SIDE = 20
DEFAULT_ROOM_SPACING = 3
DEFAULT_MIN_ROOM_ENTRANCES = 1
DEFAULT_MAX_ROOM_ENTRANCES = 3
DEFAULT_ENEMY_CHANCE = 0.3
DEFAULT_LOOT_CHANCE = 0.2
