from dungeon_geometry import TilePos
from dungeon_models import Tile
from dungeon_path import Path


def test_path_membership_and_lookup():
    path = Path([TilePos(1, 2)])
    path.add(TilePos(3, 4))

    assert len(path) == 2
    assert TilePos(3, 4) in path
    assert path.contains(1, 2)
    assert not path.contains(2, 1)
    assert path.at(1, 2) is Tile.AIR
    assert path.at(0, 0) is Tile.NOTHING


def test_path_remove_ignores_missing_tiles():
    path = Path([TilePos(0, 0), TilePos(1, 0)])

    path.remove(TilePos(0, 0))
    path.remove(TilePos(5, 5))

    assert set(path) == {TilePos(1, 0)}
