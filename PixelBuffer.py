"""
Pixel buffer helpers: validation, sample-sequence conversion and image I/O.

A pixel buffer is a C-contiguous uint8 array of shape (height, width, 3)
holding red, green and blue. Sample (x, y) is img_arr[y, x], i.e. flat
index y*width + x of img_arr.reshape(-1, 3).
"""
import numpy as np
from PIL import Image

CHANNEL_ORDERS = {
    'rgb': [0, 1, 2],
    'bgr': [2, 1, 0],
}


def check_dimensions(width, height):
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")


def check_image(img_arr):
    """Reject anything that is not a non-empty (H, W, 3) uint8 array."""
    if not isinstance(img_arr, np.ndarray):
        raise ValueError(f"Expected a numpy array, got {type(img_arr).__name__}")
    if img_arr.ndim != 3 or img_arr.shape[2] != 3:
        raise ValueError(f"Expected shape (height, width, 3), got {img_arr.shape}")
    if img_arr.dtype != np.uint8:
        raise ValueError(f"Expected uint8 samples, got {img_arr.dtype}")
    h, w = img_arr.shape[0], img_arr.shape[1]
    check_dimensions(w, h)


def new_buffer(width, height):
    """Allocate a black buffer of the given size."""
    check_dimensions(width, height)
    return np.zeros((height, width, 3), dtype=np.uint8)


def from_samples(samples, width, height, order='rgb'):
    """
    Build a buffer from a row-major sequence of width*height 3-channel samples.

    order='bgr' accepts samples stored blue/green/red, as 24-bit bitmaps do.
    """
    check_dimensions(width, height)
    raw = np.asarray(samples)
    if raw.size and (raw.min() < 0 or raw.max() > 255):
        raise ValueError(f"Sample values must be in [0, 255], got range [{raw.min()}, {raw.max()}]")
    arr = raw.astype(np.uint8).reshape(-1, 3)
    if arr.shape[0] != width * height:
        raise ValueError(f"Expected {width * height} samples for {width}x{height}, got {arr.shape[0]}")
    arr = arr[:, CHANNEL_ORDERS[order]]
    return np.ascontiguousarray(arr.reshape(height, width, 3))


def to_samples(img_arr, order='rgb'):
    """Flatten a buffer back to a row-major (width*height, 3) sample array."""
    check_image(img_arr)
    return np.ascontiguousarray(img_arr.reshape(-1, 3)[:, CHANNEL_ORDERS[order]])


def load_image(input_path):
    # Load RGB image
    img = Image.open(input_path).convert("RGB")
    return np.ascontiguousarray(np.array(img))


def save_image(img_arr, output_path):
    check_image(img_arr)
    out_img = Image.fromarray(img_arr)
    out_img.save(output_path)
