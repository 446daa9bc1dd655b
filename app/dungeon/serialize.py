"""Plain-data views of a finished dungeon.

Format strategy:
  - JSON grid: a list of rows (row-major, ``rows[y][x]``), one integer per
    tile holding its :class:`~app.dungeon.tiles.Material` value.
  - ASCII: a header line followed by one line per row, two characters per
    tile.

Region ids are not part of the JSON grid. :func:`from_json_grid` rebuilds
them as connected components so the wall <=> region 0 rule still holds.
"""

from __future__ import annotations

import json
from collections import deque
from typing import List, Sequence

from .cells import ORTHOGONAL
from .dungeon import Dungeon
from .tiles import OPEN, Material

ASCII_TOKENS = {
    Material.WALL: "0 ",
    Material.FLOOR: "= ",
    Material.DOOR: "| ",
    Material.TUNNEL: "- ",
}


def to_json_grid(dungeon: Dungeon) -> List[List[int]]:
    return dungeon.material_grid()


def dumps(dungeon: Dungeon) -> str:
    return json.dumps(to_json_grid(dungeon), separators=(",", ":"))


def from_json_grid(rows: Sequence[Sequence[int]]) -> Dungeon:
    """Rebuild a dungeon from an integer grid.

    Raises ``ValueError`` for anything that is not a non-empty list of equally
    long rows of known material integers.
    """
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise ValueError("tile grid must be a list of rows")
    if not rows or not rows[0]:
        raise ValueError("tile grid is empty")
    width = len(rows[0])
    dungeon = Dungeon(width, len(rows))
    for y, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"row {y} has {len(row)} tiles, expected {width}")
        for x, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"tile ({x},{y}) is not an integer: {value!r}")
            try:
                dungeon.tiles[y][x].material = Material(value)
            except ValueError:
                raise ValueError(f"tile ({x},{y}) has unknown material {value}") from None
    _label_regions(dungeon)
    return dungeon


def loads(text: str) -> Dungeon:
    return from_json_grid(json.loads(text))


def _label_regions(dungeon: Dungeon) -> None:
    tiles = dungeon.tiles
    for sx, sy in dungeon.coords():
        if tiles[sy][sx].material not in OPEN or tiles[sy][sx].region:
            continue
        region = dungeon.new_region()
        tiles[sy][sx].region = region
        q = deque([(sx, sy)])
        while q:
            cx, cy = q.popleft()
            for dx, dy in ORTHOGONAL:
                nx, ny = cx + dx, cy + dy
                if dungeon.in_bounds(nx, ny):
                    t = tiles[ny][nx]
                    if t.material in OPEN and not t.region:
                        t.region = region
                        q.append((nx, ny))


def render_ascii(dungeon: Dungeon) -> str:
    lines = [f"Dungeon: ({dungeon.width}, {dungeon.height}) Regions: {dungeon.num_regions}"]
    for row in dungeon.tiles:
        lines.append("".join(ASCII_TOKENS[t.material] for t in row).rstrip())
    return "\n".join(lines)


__all__ = ["to_json_grid", "dumps", "from_json_grid", "loads", "render_ascii", "ASCII_TOKENS"]
