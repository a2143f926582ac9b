"""Recursive binary partitioning of the dungeon area into rooms."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterator, List, Optional, Tuple

from dungeon_constants import ROOM_SPLIT_CHANCE, ROOM_SPLIT_PORTION
from dungeon_models import Room, RoomCollection, split_side

logger = logging.getLogger(__name__)

# Exact copy of the split portion so reachable cut positions can be enumerated without float drift.
_SPLIT_PORTION = Fraction(ROOM_SPLIT_PORTION).limit_denominator(1000)


@dataclass(frozen=True)
class SplitRules:
    """Room side limits for one partitioning pass, plus which side lengths can still be turned into valid rooms."""

    min_side: int
    max_side: int
    spacing: int
    resolvable: Tuple[bool, ...]

    @classmethod
    def build(cls, limit: int, min_side: int, max_side: int, spacing: int) -> SplitRules:
        resolvable: List[bool] = [False] * (limit + 1)
        for length in range(1, limit + 1):
            if length < min_side:
                continue
            if length <= max_side:
                resolvable[length] = True
                continue
            resolvable[length] = any(
                resolvable[first] and resolvable[second]
                for first, second in cls._child_lengths(length, spacing)
            )
        return cls(min_side, max_side, spacing, tuple(resolvable))

    @staticmethod
    def _child_lengths(length: int, spacing: int) -> Iterator[Tuple[int, int]]:
        """Yield child lengths for every cut a split fraction in [portion, 1 - portion) can produce."""
        for cut in reachable_cuts(length):
            first, second = split_side(length, cut, spacing)
            if first > 0 and second > 0:
                yield first, second

    def is_valid_child(self, length: int) -> bool:
        return 0 < length < len(self.resolvable) and self.resolvable[length]

    def can_split(self, length: int) -> bool:
        """True if some reachable cut of ``length`` yields two valid children."""
        return any(
            self.is_valid_child(first) and self.is_valid_child(second)
            for first, second in self._child_lengths(length, self.spacing)
        )

    def can_cut(self, length: int, kept: int) -> bool:
        """True if ``length`` can be split while both children keep the uncut side ``kept``."""
        return kept >= self.min_side and self.can_split(length)


def reachable_cuts(length: int) -> range:
    """Cut positions ``int(length * f)`` for ``f`` in ``[portion, 1 - portion)``."""
    # cut + 1 > length * portion  and  cut < length * (1 - portion)
    low = int(length * _SPLIT_PORTION)
    high = length * (1 - _SPLIT_PORTION)
    high_cut = int(high) - 1 if high.denominator == 1 else int(high)
    return range(low, high_cut + 1)


class RoomPartitioner:
    """Splits a rectangle into rooms by randomized binary space partitioning."""

    def partition(
        self,
        width: int,
        height: int,
        min_side: int,
        max_side: int,
        spacing: int,
        rng: random.Random,
    ) -> RoomCollection:
        if min_side <= 0:
            raise ValueError(f"min_side must be positive, got {min_side}")
        if min_side > max_side:
            raise ValueError(f"min_side ({min_side}) cannot exceed max_side ({max_side})")
        if spacing < 0:
            raise ValueError(f"spacing cannot be negative, got {spacing}")

        rules = SplitRules.build(max(width, height), min_side, max_side, spacing)
        rooms = RoomCollection(width, height)
        root = Room(0, 0, width, height)
        rooms.add_room(root)

        # Depth-first: the first child (and its descendants) is finished before the second.
        pending: List[Room] = [root]
        while pending:
            current = pending.pop()
            children = self._split_room(current, rules, rng)
            if children is None:
                continue
            first, second = children
            rooms.remove_room(current)
            rooms.add_room(first)
            rooms.add_room(second)
            pending.append(second)
            pending.append(first)

        logger.debug("Partitioned %dx%d area into %d rooms", width, height, len(rooms))
        return rooms

    def _split_room(
        self, room: Room, rules: SplitRules, rng: random.Random
    ) -> Optional[Tuple[Room, Room]]:
        """Return the two children of ``room``, or None to keep it as a leaf."""
        if (
            room.width < rules.max_side
            and room.height < rules.max_side
            and rng.random() > ROOM_SPLIT_CHANCE
        ):
            return None

        oversized = room.width > rules.max_side or room.height > rules.max_side
        # Children inherit the side that is not cut, so that side must already be long enough.
        must_split = oversized and (
            rules.can_cut(room.width, room.height) or rules.can_cut(room.height, room.width)
        )

        while True:
            fraction = rng.random() * (1 - ROOM_SPLIT_PORTION * 2) + ROOM_SPLIT_PORTION
            if rng.random() < 0.5:
                pair = room.split_horizontally(fraction, rules.spacing)
                valid = (
                    pair is not None
                    and room.height >= rules.min_side
                    and all(rules.is_valid_child(child.width) for child in pair)
                )
            else:
                pair = room.split_vertically(fraction, rules.spacing)
                valid = (
                    pair is not None
                    and room.width >= rules.min_side
                    and all(rules.is_valid_child(child.height) for child in pair)
                )

            if valid:
                return pair
            if must_split:
                continue
            if oversized:
                logger.warning(
                    "Room %s exceeds max side %d but cannot be split further",
                    room.boundary.to_tuple(),
                    rules.max_side,
                )
            return None
