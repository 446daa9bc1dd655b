"""Dead-end pruning.

Maze carving leaves plenty of stubs and the connection passes leave doors
that open onto nothing. A corridor or door tile with three or more wall
neighbors is filled back in, and the fill follows the stub backward until it
reaches a junction.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from .cells import ORTHOGONAL, Coord
from .tiles import DOOR, TUNNEL, WALL

if TYPE_CHECKING:
    from .dungeon import Dungeon


def trim_dead_end(dungeon: "Dungeon", x: int, y: int) -> int:
    """Fill the dead end at (x, y), if it is one, and the stub behind it.

    Returns number of tiles reverted to wall.
    """
    tiles = dungeon.tiles
    trimmed = 0
    pos: Optional[Coord] = (x, y)
    while pos is not None:
        cx, cy = pos
        if not (0 < cx < dungeon.width - 1 and 0 < cy < dungeon.height - 1):
            break
        tile = tiles[cy][cx]
        if tile.material not in (TUNNEL, DOOR):
            break
        walls = 0
        following: Optional[Coord] = None
        for dx, dy in ORTHOGONAL:
            neighbor = tiles[cy + dy][cx + dx].material
            if neighbor == WALL:
                walls += 1
            elif neighbor in (TUNNEL, DOOR):
                following = (cx + dx, cy + dy)
        if walls < 3:
            break
        tile.fill()
        trimmed += 1
        pos = following
    return trimmed


def trim_tunnels(dungeon: "Dungeon"):
    """Remove every dead-end corridor and door from the interior of the grid."""
    trimmed = 0
    for x in range(1, dungeon.width - 1):
        for y in range(1, dungeon.height - 1):
            trimmed += trim_dead_end(dungeon, x, y)
    if dungeon.metrics:
        dungeon.metrics["tiles_trimmed"] += trimmed
    return dungeon


def find_dead_ends(dungeon: "Dungeon"):
    """List corridor/door tiles that still have three or more wall neighbors."""
    tiles = dungeon.tiles
    found = []
    for x in range(1, dungeon.width - 1):
        for y in range(1, dungeon.height - 1):
            if tiles[y][x].material not in (TUNNEL, DOOR):
                continue
            walls = sum(1 for dx, dy in ORTHOGONAL if tiles[y + dy][x + dx].material == WALL)
            if walls >= 3:
                found.append((x, y))
    return found


__all__ = ["trim_tunnels", "trim_dead_end", "find_dead_ends"]
