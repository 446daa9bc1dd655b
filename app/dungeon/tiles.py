"""Tile materials.

The integer values double as the serialized format (one int per cell in the
JSON grid), so they must never be renumbered.
"""

from enum import IntEnum


class Material(IntEnum):
    WALL = 0
    FLOOR = 1
    DOOR = 2
    TUNNEL = 3


# Module level aliases for the common `from .tiles import WALL` import style
WALL = Material.WALL
FLOOR = Material.FLOOR
DOOR = Material.DOOR
TUNNEL = Material.TUNNEL

# Materials a corridor or room can be walked through
OPEN = frozenset({FLOOR, DOOR, TUNNEL})

__all__ = ["Material", "WALL", "FLOOR", "DOOR", "TUNNEL", "OPEN"]
