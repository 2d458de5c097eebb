import numpy as np

from pagestitch.lib.s0_geometry import Point, Region, Size
from pagestitch.lib.s1_image import ImageBuffer, Tile, stitch_tiles

from conftest import make_page, png_bytes


def _tile(array, x, y):
    height, width = array.shape[:2]
    return Tile(Region(x, y, width, height), ImageBuffer(png_bytes(array)), Point(x, y))


def test_tiles_pasted_at_their_positions():
    page = make_page(60, 90)
    tiles = [
        _tile(page[0:40], 0, 0),
        _tile(page[40:80], 0, 40),
        _tile(page[50:90], 0, 50),
    ]

    result = stitch_tiles(Size(60, 90), tiles)

    assert result.size == Size(60, 90)
    assert np.array_equal(result.as_array(), page)


def test_later_tile_wins_on_overlap():
    red = np.zeros((10, 10, 3), dtype=np.uint8)
    red[..., 0] = 255
    blue = np.zeros((10, 10, 3), dtype=np.uint8)
    blue[..., 2] = 255

    result = stitch_tiles(Size(15, 10), [_tile(red, 0, 0), _tile(blue, 5, 0)]).as_array()

    assert tuple(result[0, 4]) == (255, 0, 0)
    assert tuple(result[0, 5]) == (0, 0, 255)
    assert tuple(result[9, 14]) == (0, 0, 255)


def test_uncovered_area_is_white_and_overflow_clipped():
    block = make_page(10, 10)

    result = stitch_tiles(Size(20, 15), [_tile(block, 15, 10)]).as_array()

    assert result.shape == (15, 20, 3)
    assert tuple(result[0, 0]) == (255, 255, 255)
    assert np.array_equal(result[10:15, 15:20], block[0:5, 0:5])
