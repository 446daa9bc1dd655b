"""Public dungeon package interface.

Generation pipeline plus the material constants and read-side helpers
(serializers, renderers) that consume a finished dungeon.
"""

from .config import DungeonConfig
from .dungeon import Dungeon, create_empty_dungeon
from .pipeline import generate, generate_from_config
from .rooms import Room
from .tiles import DOOR, FLOOR, TUNNEL, WALL, Material

__all__ = [
    "Dungeon",
    "DungeonConfig",
    "Room",
    "Material",
    "generate",
    "generate_from_config",
    "create_empty_dungeon",
    "WALL",
    "FLOOR",
    "DOOR",
    "TUNNEL",
]
