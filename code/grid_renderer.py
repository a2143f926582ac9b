"""Render a finished dungeon to text."""

from __future__ import annotations

from typing import List

from dungeon_constants import BORDER_THICKNESS
from dungeon_contract import TileSource


def render_lines(source: TileSource, border: int = BORDER_THICKNESS) -> List[str]:
    """Return one string per row, padding the grid with ``border`` tiles of whatever lies outside it."""
    if border < 0:
        raise ValueError("Border thickness cannot be negative")
    return [
        "".join(source.at(x, y).char for x in range(-border, source.width + border))
        for y in range(-border, source.height + border)
    ]


def render(source: TileSource, border: int = BORDER_THICKNESS) -> str:
    return "\n".join(render_lines(source, border))


def print_grid(source: TileSource, border: int = BORDER_THICKNESS) -> None:
    """Prints the grid to the console."""
    for line in render_lines(source, border):
        print(line)
