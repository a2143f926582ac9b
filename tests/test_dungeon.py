from dungeon import Dungeon
from dungeon_contract import TileSource
from dungeon_geometry import TilePos
from dungeon_models import Tile
from dungeon_path import Path


def test_dungeon_lookup_precedence(make_rooms):
    rooms = make_rooms(6, 4, (0, 0, 2, 2))
    rooms.rooms[0].set_layout([[Tile.WALL, Tile.WALL], [Tile.WALL, Tile.LOOT]])
    # A path tile on top of a room wins over the room layout.
    path = Path([TilePos(0, 0), TilePos(4, 3)])

    dungeon = Dungeon(rooms, path)

    assert dungeon.at(0, 0) is Tile.AIR
    assert dungeon.at(1, 1) is Tile.LOOT
    assert dungeon.at(4, 3) is Tile.AIR
    assert dungeon.at(5, 3) is Tile.WALL
    assert dungeon.at(-1, 0) is Tile.WALL
    assert dungeon.at(6, 0) is Tile.WALL


def test_dungeon_exposes_its_parts(make_rooms):
    rooms = make_rooms(9, 7)
    path = Path()

    dungeon = Dungeon(rooms, path)

    assert dungeon.rooms is rooms
    assert dungeon.path is path
    assert (dungeon.width, dungeon.height) == (9, 7)
    assert isinstance(dungeon, TileSource)
