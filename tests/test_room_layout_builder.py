import random

import pytest

import room_layout_builder
from dungeon_constants import RoomLayout
from dungeon_geometry import TilePos
from dungeon_models import Room, Tile
from room_layout_builder import RoomLayoutBuilder, pick_layout


class FixedDraw:
    def __init__(self, value: int) -> None:
        self.value = value

    def randrange(self, stop: int) -> int:
        assert 0 <= self.value < stop
        return self.value


@pytest.fixture
def builder() -> RoomLayoutBuilder:
    return RoomLayoutBuilder()


@pytest.fixture
def force_layout(monkeypatch):
    def _force(layout: RoomLayout) -> None:
        monkeypatch.setattr(room_layout_builder, "pick_layout", lambda rng: layout)

    return _force


def tiles_of(grid, kind):
    return {(x, y) for y, row in enumerate(grid) for x, tile in enumerate(row) if tile is kind}


@pytest.mark.parametrize(
    "draw,expected",
    [
        (0, RoomLayout.REGULAR),
        (5, RoomLayout.REGULAR),
        (6, RoomLayout.LAKE),
        (7, RoomLayout.COLUMNS),
        (8, RoomLayout.COLUMNS),
        (9, RoomLayout.FILLED),
        (10, RoomLayout.FILLED),
    ],
)
def test_pick_layout_uses_cumulative_weights(draw, expected):
    assert pick_layout(FixedDraw(draw)) is expected


def test_regular_room_has_walls_entrances_and_centred_contents(builder, scripted_random, force_layout):
    force_layout(RoomLayout.REGULAR)
    room = Room(0, 0, 7, 5)
    room.add_entrance(TilePos(0, 2))

    # Corner draw fails, enemy and loot draws succeed.
    grid = builder.build(room, 0.5, 0.5, scripted_random(0.9, 0.1, 0.1))

    assert all(tile is Tile.WALL for tile in grid[0])
    assert all(tile is Tile.WALL for tile in grid[-1])
    assert grid[2][0] is Tile.AIR
    assert grid[1][0] is Tile.WALL
    assert grid[2][3] is Tile.ENEMIES
    assert grid[2][4] is Tile.LOOT
    assert tiles_of(grid, Tile.NOTHING) == set()


def test_loot_alone_goes_to_the_centre(builder, scripted_random, force_layout):
    force_layout(RoomLayout.REGULAR)
    room = Room(0, 0, 7, 5)

    grid = builder.build(room, 0.5, 0.5, scripted_random(0.9, 0.9, 0.1))

    assert tiles_of(grid, Tile.ENEMIES) == set()
    assert tiles_of(grid, Tile.LOOT) == {(3, 2)}


def test_corners_are_rounded_unless_an_entrance_breaks_the_wall(builder, scripted_random, force_layout):
    force_layout(RoomLayout.REGULAR)
    room = Room(10, 10, 7, 5)
    room.add_entrance(TilePos(11, 10))

    grid = builder.build(room, 0.0, 0.0, scripted_random(0.1))

    assert grid[1][1] is Tile.AIR
    assert grid[3][1] is Tile.LD_WALL_CORNER
    assert grid[1][5] is Tile.RU_WALL_CORNER
    assert grid[3][5] is Tile.RD_WALL_CORNER
    assert grid[0][1] is Tile.AIR


def test_lake_floods_the_middle_and_skips_contents(builder, scripted_random, force_layout):
    force_layout(RoomLayout.LAKE)
    room = Room(0, 0, 9, 7)

    rng = scripted_random(0.9, 0.0, 0.0)
    grid = builder.build(room, 1.0, 1.0, rng)

    assert tiles_of(grid, Tile.WATER) == {(x, y) for x in range(2, 7) for y in range(2, 5)}
    assert tiles_of(grid, Tile.ENEMIES) == set()
    assert tiles_of(grid, Tile.LOOT) == set()
    # Corner, enemy and loot draws all happen even though nothing is placed.
    assert rng.calls == 3


def test_columns_in_a_large_room(builder, scripted_random, force_layout):
    force_layout(RoomLayout.COLUMNS)
    room = Room(0, 0, 10, 10)

    grid = builder.build(room, 0.0, 0.0, scripted_random(0.9))

    assert tiles_of(grid, Tile.COLUMN) == {(2, 2), (7, 7), (7, 2), (2, 7)}


def test_columns_in_a_small_room_keep_one_diagonal(builder, scripted_random, force_layout):
    force_layout(RoomLayout.COLUMNS)
    room = Room(0, 0, 6, 6)

    grid = builder.build(room, 0.0, 0.0, scripted_random(0.9))

    assert tiles_of(grid, Tile.COLUMN) == {(3, 2), (2, 3)}


def test_columns_can_be_omitted(builder, scripted_random, force_layout):
    force_layout(RoomLayout.COLUMNS)
    room = Room(0, 0, 10, 10)

    grid = builder.build(room, 0.0, 0.0, scripted_random(0.9, 0.1, 0.5, 0.1, 0.5))

    assert tiles_of(grid, Tile.COLUMN) == {(7, 7), (2, 7)}


def test_filled_room_is_carved_from_its_entrance(builder, scripted_random, force_layout):
    force_layout(RoomLayout.FILLED)
    room = Room(0, 0, 9, 7)
    room.add_entrance(TilePos(0, 3))

    grid = builder.build(room, 1.0, 1.0, scripted_random(0.9))

    interior_air = {
        (x, y) for (x, y) in tiles_of(grid, Tile.AIR) if 1 <= x < 8 and 1 <= y < 6
    }
    assert interior_air == {(1, 2), (1, 3), (1, 4), (2, 3)}
    assert grid[3][0] is Tile.AIR
    assert tiles_of(grid, Tile.ENEMIES) == set()


@pytest.mark.parametrize("seed", range(6))
@pytest.mark.parametrize("width,height", [(1, 1), (2, 2), (3, 5), (8, 6), (14, 11)])
def test_every_tile_is_decided(builder, seed, width, height):
    room = Room(0, 0, width, height)
    if width >= 3 and height >= 3:
        room.add_entrance(TilePos(0, height // 2))

    grid = builder.build(room, 0.5, 0.5, random.Random(seed))

    assert len(grid) == height
    assert all(len(row) == width for row in grid)
    assert tiles_of(grid, Tile.NOTHING) == set()
    for entrance in room.entrances:
        assert grid[entrance.y][entrance.x] is Tile.AIR


def test_first_carve_step_is_dug_without_an_omission_draw(builder, scripted_random, force_layout):
    force_layout(RoomLayout.FILLED)
    room = Room(0, 0, 9, 7)
    room.add_entrance(TilePos(0, 3))

    # Corner draw fails; every omission draw after the first step skips its direction.
    rng = scripted_random(0.9, 0.0, 0.0, 0.0)
    grid = builder.build(room, 0.0, 0.0, rng)

    interior_air = {
        (x, y) for (x, y) in tiles_of(grid, Tile.AIR) if 1 <= x < 8 and 1 <= y < 6
    }
    assert interior_air == {(1, 3)}
    # Corner, three omission draws around (1, 3), enemy and loot.
    assert rng.calls == 6
