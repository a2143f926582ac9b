import pytest

from dungeon import Dungeon
from dungeon_geometry import TilePos
from dungeon_models import Tile
from dungeon_path import Path
from grid_renderer import print_grid, render, render_lines


@pytest.fixture
def tiny_dungeon(make_rooms) -> Dungeon:
    rooms = make_rooms(4, 2, (0, 0, 2, 2))
    rooms.rooms[0].set_layout([[Tile.WALL, Tile.WALL], [Tile.LOOT, Tile.WALL]])
    return Dungeon(rooms, Path([TilePos(3, 0)]))


def test_render_lines_without_border(tiny_dungeon):
    assert render_lines(tiny_dungeon, border=0) == ["███ ", "L███"]


def test_render_pads_with_border(tiny_dungeon):
    lines = render(tiny_dungeon, border=1).split("\n")

    assert len(lines) == 4
    assert all(len(line) == 6 for line in lines)
    assert lines[0] == "█" * 6
    assert lines[1] == "████ █"
    assert lines[2] == "█L████"


def test_negative_border_is_rejected(tiny_dungeon):
    with pytest.raises(ValueError):
        render_lines(tiny_dungeon, border=-1)


def test_print_grid_writes_each_row(tiny_dungeon, capsys):
    print_grid(tiny_dungeon, border=0)

    assert capsys.readouterr().out == "███ \nL███\n"
