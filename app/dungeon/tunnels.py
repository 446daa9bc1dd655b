"""Maze carving.

Every pocket of untouched wall large enough to hold a corridor gets its own
region and a branching maze grown by depth-first backtracking. Corridors
advance one tile at a time with a two-tile lookahead, so a corridor never
runs alongside another corridor or a room without a wall between them and a
single growth never closes a loop.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, List

from .cells import ORTHOGONAL, Coord
from .tiles import TUNNEL, WALL

if TYPE_CHECKING:
    from .dungeon import Dungeon


def _solid_block(dungeon: "Dungeon", x: int, y: int) -> bool:
    """True when (x, y) and its whole 3x3 neighborhood are wall."""
    tiles = dungeon.tiles
    for iy in (y - 1, y, y + 1):
        row = tiles[iy]
        for ix in (x - 1, x, x + 1):
            if row[ix].material != WALL:
                return False
    return True


def _can_extend(dungeon: "Dungeon", x: int, y: int, dx: int, dy: int) -> bool:
    # Next tile, both tiles flanking it, the tile beyond and both tiles flanking that one
    fx, fy = x + 2 * dx, y + 2 * dy
    if not dungeon.in_bounds(fx, fy):
        return False
    px, py = dy, dx  # perpendicular to travel
    tiles = dungeon.tiles
    for cx, cy in (
        (x + dx, y + dy),
        (x + dx + px, y + dy + py),
        (x + dx - px, y + dy - py),
        (fx, fy),
        (fx + px, fy + py),
        (fx - px, fy - py),
    ):
        if tiles[cy][cx].material != WALL:
            return False
    return True


def valid_extensions(dungeon: "Dungeon", x: int, y: int) -> List[Coord]:
    """Adjacent tiles a corridor at (x, y) may grow into, in left/right/up/down order."""
    return [(x + dx, y + dy) for dx, dy in ORTHOGONAL if _can_extend(dungeon, x, y, dx, dy)]


def grow_maze(dungeon: "Dungeon", x: int, y: int, region: int, rng) -> int:
    """Carve a branching maze outward from the already carved tile (x, y).

    The top of the stack is the tile being grown. When it has no room left
    it is popped and the tile it branched from is re-evaluated, so side
    branches sprout on the way back. Returns the number of tiles carved.
    """
    carved = 0
    stack: List[Coord] = [(x, y)]
    while stack:
        cx, cy = stack[-1]
        options = valid_extensions(dungeon, cx, cy)
        if not options:
            stack.pop()
            continue
        if len(options) > 1:
            nx, ny = options[rng.randrange(len(options))]
        else:
            nx, ny = options[0]
        dungeon.tiles[ny][nx].carve(TUNNEL, region)
        carved += 1
        stack.append((nx, ny))
    return carved


def carve_maze(dungeon: "Dungeon", rng=None):
    """Fill every remaining wall pocket with a corridor maze.

    Scans column by column; each tile whose 3x3 block is still solid seeds
    a new region.
    """
    if rng is None:
        rng = random
    mazes = 0
    carved = 0
    for x in range(1, dungeon.width - 1):
        for y in range(1, dungeon.height - 1):
            if not _solid_block(dungeon, x, y):
                continue
            region = dungeon.new_region()
            dungeon.tiles[y][x].carve(TUNNEL, region)
            carved += 1 + grow_maze(dungeon, x, y, region, rng)
            mazes += 1
    if dungeon.metrics:
        dungeon.metrics["maze_regions"] += mazes
        dungeon.metrics["tunnels_carved"] += carved
    return dungeon


__all__ = ["carve_maze", "grow_maze", "valid_extensions"]
