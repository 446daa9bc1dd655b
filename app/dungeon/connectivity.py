"""Region connection.

Rooms and maze pockets come out of carving as separate regions. Turning
selected room edges into doors links them up:

* Primary pass: every room opens one random edge and joins the region on
  the other side.
* Residual pass: rooms (and their edges) are revisited in random order and
  an edge separating two regions not yet linked in this pass becomes a door.
  A set of already linked regions stands in for a proper union-find, so in
  rare layouts some regions stay unreachable.
* Strict repair (opt-in): a union-find over the actual connected components
  opens further edges until every room edge that could bridge two
  components has done so.
"""

from __future__ import annotations

import random
from collections import deque
from typing import TYPE_CHECKING, Dict, List, Optional, Set

from .cells import ORTHOGONAL, SURROUNDING, Coord
from .tiles import DOOR, FLOOR, OPEN, TUNNEL, WALL

if TYPE_CHECKING:
    from .dungeon import Dungeon
    from .rooms import Room


def _room_region(dungeon: "Dungeon", room: "Room") -> int:
    return dungeon.tiles[room.y][room.x].region


def _join_region(dungeon: "Dungeon", room: "Room", region: int) -> None:
    for ix, iy in room.cells():
        dungeon.tiles[iy][ix].region = region


def connect_primary(dungeon: "Dungeon", rng) -> int:
    """Open one random edge per room onto a neighboring region. Returns doors made."""
    doors = 0
    tiles = dungeon.tiles
    for room in dungeon.rooms:
        if not room.edges:
            continue
        ex, ey = room.edges[rng.randrange(len(room.edges))]
        own = _room_region(dungeon, room)
        for dx, dy in SURROUNDING:
            neighbor = tiles[ey + dy][ex + dx]
            if neighbor.material in (FLOOR, TUNNEL) and neighbor.region != own:
                tiles[ey][ex].carve(DOOR, neighbor.region)
                _join_region(dungeon, room, neighbor.region)
                doors += 1
                break
    return doors


def connect_residual(dungeon: "Dungeon", rng) -> int:
    """Link regions the primary pass left apart. Returns doors made."""
    doors = 0
    tiles = dungeon.tiles
    rooms = dungeon.rooms
    connected: Set[int] = set()
    for ri in rng.sample(range(len(rooms)), len(rooms)):
        room = rooms[ri]
        for ei in rng.sample(range(len(room.edges)), len(room.edges)):
            x, y = room.edges[ei]
            current = -1
            opened = False
            for dx, dy in ORTHOGONAL:
                region = tiles[y + dy][x + dx].region
                if current == -1 and region != 0:
                    current = region
                elif region != current and region != 0 and region not in connected:
                    tiles[y][x].carve(DOOR, current)
                    connected.add(region)
                    connected.add(current)
                    doors += 1
                    opened = True
                    break
            if opened:
                break
    return doors


class _DisjointSet:
    def __init__(self, size: int):
        self.parent = list(range(size))

    def find(self, a: int) -> int:
        parent = self.parent
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def union(self, a: int, b: int) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        self.parent[rb] = ra
        return True


def label_components(dungeon: "Dungeon") -> Dict[Coord, int]:
    """Map every open tile to a 0-based id of its 4-connected component."""
    labels: Dict[Coord, int] = {}
    next_id = 0
    tiles = dungeon.tiles
    for sx, sy in dungeon.coords():
        if (sx, sy) in labels or tiles[sy][sx].material not in OPEN:
            continue
        labels[(sx, sy)] = next_id
        q = deque([(sx, sy)])
        while q:
            cx, cy = q.popleft()
            for dx, dy in ORTHOGONAL:
                nx, ny = cx + dx, cy + dy
                if dungeon.in_bounds(nx, ny) and (nx, ny) not in labels:
                    if tiles[ny][nx].material in OPEN:
                        labels[(nx, ny)] = next_id
                        q.append((nx, ny))
        next_id += 1
    return labels


def _outer_tile(room: "Room", edge: Coord) -> Optional[Coord]:
    """The tile on the far side of ``edge`` from the room."""
    ex, ey = edge
    if ey == room.y - 1:
        return (ex, ey - 1)
    if ey == room.y + room.h:
        return (ex, ey + 1)
    if ex == room.x - 1:
        return (ex - 1, ey)
    if ex == room.x + room.w:
        return (ex + 1, ey)
    return None


def repair_connectivity(dungeon: "Dungeon") -> int:
    """Open extra room edges until no edge can bridge two components.

    Deterministic: rooms and edges are walked in stored order and no random
    numbers are drawn. Returns doors made.
    """
    labels = label_components(dungeon)
    if not labels:
        return 0
    dsu = _DisjointSet(max(labels.values()) + 1)
    tiles = dungeon.tiles
    doors = 0
    for room in dungeon.rooms:
        inside = labels.get((room.x, room.y))
        if inside is None:
            continue
        for edge in room.edges:
            ex, ey = edge
            if tiles[ey][ex].material != WALL:
                continue
            outer = _outer_tile(room, edge)
            if outer is None or outer not in labels:
                continue
            if dsu.union(inside, labels[outer]):
                tiles[ey][ex].carve(DOOR, _room_region(dungeon, room))
                doors += 1
    return doors


def connect_regions(dungeon: "Dungeon", rng=None, strict: bool = False):
    """Turn room edges into doors so regions become reachable from each other."""
    if rng is None:
        rng = random
    primary = connect_primary(dungeon, rng)
    residual = connect_residual(dungeon, rng)
    repaired = repair_connectivity(dungeon) if strict else 0
    if dungeon.metrics:
        dungeon.metrics["doors_primary"] += primary
        dungeon.metrics["doors_residual"] += residual
        dungeon.metrics["doors_repair"] += repaired
    return dungeon


def count_components(dungeon: "Dungeon", floor_only: bool = False) -> int:
    """Number of 4-connected open components (only those holding FLOOR if ``floor_only``)."""
    labels = label_components(dungeon)
    if not floor_only:
        return len(set(labels.values()))
    return len({cid for (x, y), cid in labels.items() if dungeon.tiles[y][x].material == FLOOR})


def component_sizes(dungeon: "Dungeon") -> List[int]:
    labels = label_components(dungeon)
    sizes: Dict[int, int] = {}
    for cid in labels.values():
        sizes[cid] = sizes.get(cid, 0) + 1
    return [sizes[k] for k in sorted(sizes)]


__all__ = [
    "connect_regions",
    "connect_primary",
    "connect_residual",
    "repair_connectivity",
    "label_components",
    "count_components",
    "component_sizes",
]
