import io

import pytest
from PIL import Image

from app.dungeon import generate
from app.dungeon.render import DARK, LIGHT, MEDIUM, TILE_COLORS, png_bytes, render_png, tile_mask

from dungeon_test_utils import grid_from_art


def _close(actual, expected, tol=1):
    return all(abs(a - e) <= tol for a, e in zip(actual, expected))


def test_tile_mask_layout():
    m = tile_mask(4).load()
    assert m[0, 0] == LIGHT and m[2, 0] == LIGHT
    assert m[0, 1] == LIGHT and m[0, 2] == LIGHT
    assert m[3, 1] == DARK and m[3, 2] == DARK
    assert m[1, 3] == DARK and m[3, 3] == DARK
    assert m[1, 1] == MEDIUM and m[2, 2] == MEDIUM
    # far corners keep the body value
    assert m[3, 0] == MEDIUM and m[0, 3] == MEDIUM


def test_wall_tile_shading():
    img = render_png(grid_from_art("0"), pixel_size=4)
    px = img.load()
    assert _close(px[1, 1], (75, 75, 75))
    assert _close(px[0, 0], (135, 135, 135))
    assert _close(px[3, 3], (35, 35, 35))


def test_material_colors_blend_over_white():
    img = render_png(grid_from_art("0123"), pixel_size=4)
    px = img.load()
    for i, material in enumerate((0, 1, 2, 3)):
        color = TILE_COLORS[material]
        expected = tuple(round(255 + (c - 255) * MEDIUM / 255) for c in color)
        assert _close(px[i * 4 + 1, 1], expected), material


def test_png_bytes_signature_and_size():
    d = generate(30, 20, 50, 4, 8, seed=2)
    data = png_bytes(d, pixel_size=3)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    img = Image.open(io.BytesIO(data))
    assert img.size == (90, 60)
    assert img.mode == "RGB"


def test_pixel_size_one():
    img = render_png(grid_from_art("01", "23"), pixel_size=1)
    assert img.size == (2, 2)


def test_pixel_size_must_be_positive():
    with pytest.raises(ValueError):
        render_png(grid_from_art("0"), pixel_size=0)
