"""Raster rendering of a dungeon to PNG using Pillow.

Every tile is a ``pixel_size`` square of its material color laid over a
white background through a shading mask: a lighter bevel along the top and
left, a darker one along the right and bottom.
"""

from __future__ import annotations

import io

from PIL import Image

from .dungeon import Dungeon
from .tiles import Material

TILE_COLORS = {
    Material.WALL: (0, 0, 0),
    Material.FLOOR: (128, 128, 128),
    Material.DOOR: (150, 100, 0),
    Material.TUNNEL: (200, 200, 200),
}
BACKGROUND = (255, 255, 255)

# Mask alpha levels
LIGHT = 120
MEDIUM = 180
DARK = 220


def tile_mask(size: int) -> Image.Image:
    """Build the per-tile shading mask (mode ``L``).

    The top row and left column (minus the far corners) get ``LIGHT``, the
    right column and bottom row get ``DARK``, the body ``MEDIUM``.
    """
    mask = Image.new("L", (size, size), MEDIUM)
    px = mask.load()
    for i in range(size - 1):
        px[i, 0] = LIGHT
    for j in range(1, size - 1):
        px[0, j] = LIGHT
        px[size - 1, j] = DARK
    for i in range(1, size):
        px[i, size - 1] = DARK
    return mask


def render_png(dungeon: Dungeon, pixel_size: int = 10) -> Image.Image:
    if pixel_size < 1:
        raise ValueError(f"pixel_size must be >= 1, got {pixel_size}")
    mask = tile_mask(pixel_size)
    canvas = Image.new("RGB", (dungeon.width * pixel_size, dungeon.height * pixel_size), BACKGROUND)
    for y, row in enumerate(dungeon.tiles):
        for x, tile in enumerate(row):
            box = (x * pixel_size, y * pixel_size, (x + 1) * pixel_size, (y + 1) * pixel_size)
            canvas.paste(TILE_COLORS[tile.material], box, mask)
    return canvas


def png_bytes(dungeon: Dungeon, pixel_size: int = 10) -> bytes:
    buf = io.BytesIO()
    render_png(dungeon, pixel_size).save(buf, format="PNG")
    return buf.getvalue()


__all__ = ["render_png", "png_bytes", "tile_mask", "TILE_COLORS"]
