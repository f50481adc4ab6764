import numpy as np
import pytest
from numpy.testing import assert_array_equal

from PixelBuffer import from_samples, load_image, new_buffer, save_image, to_samples


def test_from_samples_is_row_major():
    samples = [(1, 2, 3), (4, 5, 6), (7, 8, 9), (10, 11, 12), (13, 14, 15), (16, 17, 18)]
    arr = from_samples(samples, width=3, height=2)
    assert arr.shape == (2, 3, 3)
    # (x, y) = (2, 1) is sample 1*3 + 2
    assert_array_equal(arr[1, 2], (16, 17, 18))
    assert arr.flags['C_CONTIGUOUS']


def test_from_samples_bgr_order():
    arr = from_samples([(30, 20, 10)], width=1, height=1, order='bgr')
    assert_array_equal(arr[0, 0], (10, 20, 30))
    assert_array_equal(to_samples(arr, order='bgr'), [(30, 20, 10)])


def test_from_samples_wrong_length():
    with pytest.raises(ValueError):
        from_samples([(0, 0, 0)] * 5, width=3, height=2)


@pytest.mark.parametrize("width,height", [(0, 3), (3, 0), (-1, 2)])
def test_invalid_dimensions(width, height):
    with pytest.raises(ValueError):
        new_buffer(width, height)
    with pytest.raises(ValueError):
        from_samples([], width, height)


def test_new_buffer_is_black():
    arr = new_buffer(4, 2)
    assert arr.shape == (2, 4, 3)
    assert arr.dtype == np.uint8
    assert arr.max() == 0


def test_bitmap_round_trip(tmp_path, random_image):
    path = tmp_path / "image.bmp"
    save_image(random_image, path)
    assert_array_equal(load_image(path), random_image)


def test_load_converts_to_rgb(tmp_path):
    from PIL import Image

    path = tmp_path / "grey.png"
    Image.new("L", (3, 2), color=77).save(path)
    arr = load_image(path)
    assert arr.shape == (2, 3, 3)
    assert_array_equal(arr, 77)


@pytest.mark.parametrize("bad", [256, -1, 1000])
def test_from_samples_rejects_out_of_range_values(bad):
    with pytest.raises(ValueError):
        from_samples([(0, 0, 0), (10, bad, 20)], width=2, height=1)


def test_from_samples_accepts_full_range():
    arr = from_samples([(0, 128, 255)], width=1, height=1)
    assert_array_equal(arr[0, 0], (0, 128, 255))
