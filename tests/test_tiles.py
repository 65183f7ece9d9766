import numpy as np
import pytest
from beamy.tiles import RenderTile, generate_tiles


@pytest.mark.parametrize("width,height,tile_size", [
    (64, 64, 32),
    (100, 70, 32),
    (31, 31, 32),
    (5, 3, 1),
    (33, 17, 8),
])
def test_tiles_cover_every_pixel_once(width, height, tile_size):
    counts = np.zeros((height, width), dtype=int)

    for tile in generate_tiles(width, height, tile_size):
        xs, ys = tile.pixels(width, height)
        np.add.at(counts, (ys, xs), 1)

    assert np.all(counts == 1)


def test_tiles_are_row_major_from_origin():
    tiles = generate_tiles(70, 40, 32)

    assert [(t.x, t.y) for t in tiles] == [(0, 0), (32, 0), (64, 0), (0, 32), (32, 32), (64, 32)]
    assert all(t.width == 32 and t.height == 32 for t in tiles)


def test_default_tile_size():
    tiles = generate_tiles(64, 32)
    assert len(tiles) == 2
    assert tiles[0].width == 32


def test_boundary_tile_skips_out_of_bounds_pixels():
    tile = RenderTile(x=96, y=64, width=32, height=32)
    xs, ys = tile.pixels(100, 70)

    assert xs.size == 4 * 6
    assert xs.min() == 96 and xs.max() == 99
    assert ys.min() == 64 and ys.max() == 69


def test_tile_outside_image_is_empty():
    xs, ys = RenderTile(x=200, y=0, width=32, height=32).pixels(100, 70)
    assert xs.size == 0 and ys.size == 0


def test_invalid_tile_size():
    with pytest.raises(ValueError):
        generate_tiles(10, 10, 0)
