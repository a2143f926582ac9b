"""Configuration container for dungeon generation."""

from __future__ import annotations

from dataclasses import dataclass

from dungeon_constants import (
    DEFAULT_ENEMY_CHANCE,
    DEFAULT_LOOT_CHANCE,
    DEFAULT_MAX_ROOM_ENTRANCES,
    DEFAULT_MAX_ROOM_SIDE,
    DEFAULT_MIN_ROOM_ENTRANCES,
    DEFAULT_MIN_ROOM_SIDE,
    DEFAULT_ROOM_SPACING,
)


@dataclass
class DungeonConfig:
    """Aggregates all tunable parameters for dungeon generation."""

    width: int
    height: int

    # Inclusive bounds for room sides; rooms are only split while both children stay within them.
    min_room_side: int = DEFAULT_MIN_ROOM_SIDE
    max_room_side: int = DEFAULT_MAX_ROOM_SIDE
    # Empty tiles left between two rooms when a room is split. Odd values put corridors in the middle of the gap.
    room_spacing: int = DEFAULT_ROOM_SPACING
    # Corridor links per room are drawn from [min, max); equal bounds give exactly that many.
    min_room_entrances: int = DEFAULT_MIN_ROOM_ENTRANCES
    max_room_entrances: int = DEFAULT_MAX_ROOM_ENTRANCES
    enemy_chance: float = DEFAULT_ENEMY_CHANCE
    loot_chance: float = DEFAULT_LOOT_CHANCE

    random_seed: int | None = None
    collect_metrics: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("DungeonConfig width and height must be positive")
        if self.min_room_side <= 0:
            raise ValueError("DungeonConfig min_room_side must be positive")
        if self.max_room_side <= 0:
            raise ValueError("DungeonConfig max_room_side must be positive")
        if self.min_room_side > self.max_room_side:
            raise ValueError("DungeonConfig min_room_side cannot exceed max_room_side")
        if self.room_spacing < 0:
            raise ValueError("DungeonConfig room_spacing cannot be negative")
        if self.min_room_entrances < 1:
            raise ValueError("DungeonConfig min_room_entrances must be at least 1")
        if self.min_room_entrances > self.max_room_entrances:
            raise ValueError("DungeonConfig min_room_entrances cannot exceed max_room_entrances")
        for name in ("enemy_chance", "loot_chance"):
            value = float(getattr(self, name))
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"DungeonConfig {name} must lie within [0, 1], got {value}")
            setattr(self, name, value)
