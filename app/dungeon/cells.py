from typing import List, Tuple

from .tiles import WALL, Material


class Tile:
    """Lightweight container for a dungeon grid cell."""

    __slots__ = ("material", "region")

    def __init__(self, material: Material = WALL, region: int = 0):
        self.material = material
        self.region = region

    def carve(self, material: Material, region: int) -> None:
        self.material = material
        self.region = region

    def fill(self) -> None:
        """Revert to solid wall (walls never keep a region)."""
        self.material = WALL
        self.region = 0

    def to_dict(self):
        return {"material": int(self.material), "region": self.region}

    def __repr__(self) -> str:
        return f"Tile({self.material.name}, region={self.region})"


Coord = Tuple[int, int]
Grid = List[List[Tile]]

# Orthogonal neighbor offsets in the scan order every stage relies on: left, right, up, down
ORTHOGONAL: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
# Eight neighbors, row above, same row, row below
SURROUNDING: Tuple[Coord, ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)
