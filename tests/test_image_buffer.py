import base64
import threading

import numpy as np
import pytest
from PIL import Image

from pagestitch.errors import DecodeError
from pagestitch.lib.s0_geometry import Point, Region, Size
from pagestitch.lib.s1_image import ImageBuffer, ImageConfig, decode_bytes

from conftest import make_page, png_bytes


@pytest.fixture
def page():
    return make_page(40, 30)


@pytest.fixture
def buffer(page):
    return ImageBuffer(png_bytes(page))


def test_size_read_from_header_without_decoding(buffer):
    assert buffer.size == Size(40, 30)
    assert not buffer.is_decoded
    assert buffer.stats["decodes"] == 0


def test_crop_returns_region_pixels(buffer, page):
    cropped = buffer.crop(Region(5, 10, 20, 8))

    assert cropped.size == Size(20, 8)
    assert np.array_equal(cropped.as_array(), page[10:18, 5:25])
    # Le buffer source reste intact.
    assert buffer.size == Size(40, 30)


def test_crop_is_clipped_to_image_bounds(buffer, page):
    cropped = buffer.crop(Region(30, 20, 50, 50))
    assert cropped.size == Size(10, 10)
    assert np.array_equal(cropped.as_array(), page[20:30, 30:40])


def test_crop_outside_image_rejected(buffer):
    with pytest.raises(ValueError):
        buffer.crop(Region(100, 100, 5, 5))


def test_identity_transforms_do_not_decode(buffer):
    original = buffer.to_bytes()

    scaled = buffer.scale(1)
    rotated = buffer.rotate(0)

    assert scaled.to_bytes() == original
    assert rotated.to_bytes() == original
    assert buffer.stats["decodes"] == 0
    assert scaled.stats["decodes"] == 0
    assert rotated.stats["decodes"] == 0


def test_scale_rounds_up(buffer):
    assert buffer.scale(0.5).size == Size(20, 15)
    assert buffer.scale(0.33).size == Size(14, 10)
    with pytest.raises(ValueError):
        buffer.scale(0)


def test_rotate_clockwise(buffer, page):
    rotated = buffer.rotate(90)

    assert rotated.size == Size(30, 40)
    # Rotation horaire : le coin haut-gauche passe en haut à droite.
    assert np.array_equal(rotated.as_array(), np.rot90(page, k=-1))
    assert buffer.rotate(180).size == Size(40, 30)
    assert buffer.rotate(-90).size == Size(30, 40)
    with pytest.raises(ValueError):
        buffer.rotate(45)


def test_concurrent_reads_decode_once(buffer):
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(buffer.image_data().size)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == [(40, 30)] * 8
    assert buffer.stats["decodes"] == 1


def test_encode_is_lazy_and_cached(page):
    buffer = ImageBuffer.from_image(Image.fromarray(page))
    assert buffer.stats["encodes"] == 0

    first = buffer.to_bytes()
    second = buffer.to_bytes()

    assert first is second
    assert buffer.stats["encodes"] == 1
    assert np.array_equal(np.array(decode_bytes(first)), page)


def test_invalid_bytes_raise_decode_error():
    buffer = ImageBuffer(b"definitely not a png")
    with pytest.raises(DecodeError):
        buffer.size
    with pytest.raises(DecodeError):
        buffer.image_data()


def test_transparency_flattened_on_white():
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    rgba[0, 0] = (10, 20, 30, 255)
    buffer = ImageBuffer(png_bytes(rgba))

    array = buffer.as_array()
    assert array.shape == (2, 2, 3)
    assert tuple(array[0, 0]) == (10, 20, 30)
    assert tuple(array[1, 1]) == (255, 255, 255)


def test_decode_disabled_keeps_bytes_untouched(page):
    data = png_bytes(page)
    buffer = ImageBuffer(data, config=ImageConfig(decode_enabled=False))

    assert buffer.size == Size(40, 30)
    assert buffer.crop(Region(0, 0, 5, 5)).to_bytes() == data
    assert buffer.scale(0.5).to_bytes() == data
    with pytest.raises(DecodeError):
        buffer.image_data()


def test_from_base64_accepts_data_url(page):
    encoded = base64.b64encode(png_bytes(page)).decode("ascii")

    assert ImageBuffer.from_base64(encoded).size == Size(40, 30)
    assert ImageBuffer.from_base64("data:image/png;base64," + encoded).size == Size(40, 30)


def test_coordinates_follow_derived_buffers(buffer):
    buffer.set_coordinates(Point(0, 150))
    assert buffer.crop(Region(0, 0, 10, 10)).coordinates == Point(0, 150)


def test_save_creates_parent_directories(buffer, tmp_path):
    target = tmp_path / "nested" / "dir" / "shot.png"
    path = buffer.save(target)
    assert target.exists()
    assert path == str(target)
