"""
Per-pixel colour transforms. All of them modify the image in place.
"""
import numpy as np

from PixelBuffer import check_image

# Higher weight means more effect
SATURATE_WEIGHT = 0.5
DESATURATE_WEIGHT = 0.5
BRIGHTEN_WEIGHT = 50
DARKEN_WEIGHT = 50

MAX_COLOR = 255


def _store(img_arr, values):
    img_arr[...] = np.clip(values, 0, MAX_COLOR)


def invert(img_arr):
    check_image(img_arr)
    np.subtract(MAX_COLOR, img_arr, out=img_arr)


def _shift_from_average(img_arr, weight):
    check_image(img_arr)
    channels = img_arr.astype(np.int32)
    average = channels.sum(axis=2, keepdims=True) // 3
    # int() truncates toward zero
    delta = np.trunc(weight * (channels - average)).astype(np.int32)
    _store(img_arr, channels + delta)


def saturate(img_arr, weight=SATURATE_WEIGHT):
    """Push every channel away from the pixel's grey level."""
    _shift_from_average(img_arr, weight)


def desaturate(img_arr, weight=DESATURATE_WEIGHT):
    """Pull every channel toward the pixel's grey level."""
    _shift_from_average(img_arr, -weight)


def brighten(img_arr, amount=BRIGHTEN_WEIGHT):
    check_image(img_arr)
    _store(img_arr, img_arr.astype(np.int32) + amount)


def darken(img_arr, amount=DARKEN_WEIGHT):
    check_image(img_arr)
    _store(img_arr, img_arr.astype(np.int32) - amount)


def _keep_only(channel):
    def keep(img_arr):
        check_image(img_arr)
        for c in range(3):
            if c != channel:
                img_arr[:, :, c] = 0
    return keep


red_only = _keep_only(0)
green_only = _keep_only(1)
blue_only = _keep_only(2)


def _swap(a, b):
    def swap(img_arr):
        check_image(img_arr)
        img_arr[:, :, [a, b]] = img_arr[:, :, [b, a]]
    return swap


swap_r_and_g = _swap(0, 1)
swap_r_and_b = _swap(0, 2)
swap_g_and_b = _swap(1, 2)

TRANSFORMS = {
    'invert': invert,
    'saturate': saturate,
    'desaturate': desaturate,
    'brighten': brighten,
    'darken': darken,
    'red_only': red_only,
    'green_only': green_only,
    'blue_only': blue_only,
    'swap_r_and_g': swap_r_and_g,
    'swap_r_and_b': swap_r_and_b,
    'swap_g_and_b': swap_g_and_b,
}
