import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from .cells import Coord
from .tiles import FLOOR, TUNNEL

if TYPE_CHECKING:
    from .dungeon import Dungeon

# Rooms keep this many tiles clear of every grid edge
ROOM_MARGIN = 3


@dataclass
class Room:
    x: int
    y: int
    w: int
    h: int
    edges: List[Coord] = field(default_factory=list)

    def cells(self):
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    def separated_from(self, other: "Room") -> bool:
        """True when at least one tile of wall lies between the two rooms on some axis."""
        return (
            self.x + self.w < other.x  # to the left
            or self.x > other.x + other.w  # to the right
            or self.y + self.h < other.y  # fully above
            or self.y > other.y + other.h  # fully below
        )


def place_rooms(dungeon: "Dungeon", min_size: int, max_size: int, attempts: int, rng=None):
    """Scatter up to ``attempts`` non-overlapping rooms and carve them as FLOOR.

    Each trial draws a size in ``[min_size, max_size)`` and a top-left corner
    keeping the room ``ROOM_MARGIN`` tiles inside the grid. A trial whose
    size cannot fit inside that margin is rejected before drawing a
    position. Accepted rooms get a fresh region each, in acceptance order.

    Returns the dungeon; ``dungeon.rooms`` holds the accepted rooms.
    """
    if rng is None:
        rng = random
    rooms: List[Room] = []
    for _ in range(attempts):
        w = rng.randrange(max_size - min_size) + min_size
        h = rng.randrange(max_size - min_size) + min_size
        span_x = dungeon.width - w - 2 - ROOM_MARGIN
        span_y = dungeon.height - h - 2 - ROOM_MARGIN
        if span_x <= 0 or span_y <= 0:
            continue
        x = rng.randrange(span_x) + ROOM_MARGIN
        y = rng.randrange(span_y) + ROOM_MARGIN
        candidate = Room(x, y, w, h)
        if all(candidate.separated_from(r) for r in rooms):
            rooms.append(candidate)
    for room in rooms:
        region = dungeon.new_region()
        for ix, iy in room.cells():
            dungeon.tiles[iy][ix].carve(FLOOR, region)
    dungeon.rooms = rooms
    if dungeon.metrics:
        dungeon.metrics["rooms_attempted"] += attempts
        dungeon.metrics["rooms_placed"] += len(rooms)
        dungeon.metrics["rooms_rejected"] += attempts - len(rooms)
    return dungeon


def _opens_outward(dungeon: "Dungeon", x: int, y: int) -> bool:
    return dungeon.tiles[y][x].material in (TUNNEL, FLOOR)


def identify_edges(dungeon: "Dungeon"):
    """Record door candidates on every room perimeter.

    A perimeter tile is an edge when the tile beyond it (two steps out from
    the room) is corridor or another room. Scan order: top row, bottom row,
    left column, right column.
    """
    found = 0
    for room in dungeon.rooms:
        x, y, w, h = room.x, room.y, room.w, room.h
        edges = room.edges
        for j in range(x, x + w):
            if _opens_outward(dungeon, j, y - 2):
                edges.append((j, y - 1))
        for j in range(x, x + w):
            if _opens_outward(dungeon, j, y + h + 1):
                edges.append((j, y + h))
        for k in range(y, y + h):
            if _opens_outward(dungeon, x - 2, k):
                edges.append((x - 1, k))
        for k in range(y, y + h):
            if _opens_outward(dungeon, x + w + 1, k):
                edges.append((x + w, k))
        found += len(edges)
    if dungeon.metrics:
        dungeon.metrics["edges_found"] += found
    return dungeon


__all__ = ["Room", "ROOM_MARGIN", "place_rooms", "identify_edges"]
