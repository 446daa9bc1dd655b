"""Dungeon value and grid initialization.

A :class:`Dungeon` owns the tile grid (indexed ``tiles[y][x]``), the list of
placed rooms and the region counter. It is created once by
:func:`create_empty_dungeon` and handed from stage to stage; each stage
mutates it in place and returns it. Once :func:`app.dungeon.pipeline.generate`
returns, consumers (renderers, serializers, the HTTP layer) only read it.

Region ids are minted by :meth:`Dungeon.new_region`: strictly increasing,
never reused, never 0 (0 is reserved for walls).
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple

from .cells import Coord, Grid, Tile
from .rooms import Room
from .tiles import Material


class Dungeon:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.tiles: Grid = [[Tile() for _ in range(width)] for _ in range(height)]
        self.rooms: List[Room] = []
        self.num_regions = 0
        self.seed: Optional[int] = None
        self.metrics: Dict[str, Any] = {}

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def new_region(self) -> int:
        self.num_regions += 1
        return self.num_regions

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        return self.tiles[y][x]

    def material_at(self, x: int, y: int) -> Material:
        return self.tiles[y][x].material

    def coords(self) -> Iterator[Coord]:
        """Row-major iteration over every grid position."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def count(self, material: Material) -> int:
        return sum(1 for row in self.tiles for t in row if t.material == material)

    def material_grid(self) -> List[List[int]]:
        """Row-major copy of the materials as plain ints."""
        return [[int(t.material) for t in row] for row in self.tiles]

    def __repr__(self) -> str:
        return (
            f"Dungeon({self.width}x{self.height}, rooms={len(self.rooms)}, "
            f"regions={self.num_regions}, seed={self.seed})"
        )


def create_empty_dungeon(width: int, height: int) -> Dungeon:
    """Allocate a ``width`` x ``height`` grid of solid wall."""
    if width < 1 or height < 1:
        raise ValueError(f"dungeon size must be positive, got {width}x{height}")
    return Dungeon(width, height)


__all__ = ["Dungeon", "create_empty_dungeon"]
