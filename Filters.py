"""
Filter pipeline: greyscale, thresholds and the convolution based filters.

Every filter takes the current image and returns the image to carry on with.
Convolution filters return a new array and leave their input alone;
greyscale and the thresholds work in place.
"""
import functools
import logging

import numpy as np
from joblib import Parallel, delayed

import ColorFilters
from ConvParallel import NUM_WORKERS, convolve
from Kernels import SOBEL_DIRECTIONS, get_kernel
from PixelBuffer import check_image

logger = logging.getLogger(__name__)

# Cutoffs for black_below / white_above
DIM_THRESHOLD = 60
BRIGHT_THRESHOLD = 200


def channel_average(img_arr):
    """Truncating (r + g + b) // 3 per pixel, summed in uint16 so it cannot wrap."""
    return img_arr.sum(axis=2, dtype=np.uint16) // 3


def greyscale(img_arr):
    check_image(img_arr)
    img_arr[...] = channel_average(img_arr)[..., np.newaxis]


def black_below(img_arr, threshold=DIM_THRESHOLD):
    """Set pixels whose average is below threshold to black (in place)."""
    check_image(img_arr)
    img_arr[channel_average(img_arr) < threshold] = 0


def white_above(img_arr, threshold=BRIGHT_THRESHOLD):
    """Set pixels whose average is above threshold to white (in place)."""
    check_image(img_arr)
    img_arr[channel_average(img_arr) > threshold] = 255


def apply_kernel(img_arr, name, n_workers=NUM_WORKERS):
    logger.debug("Applying %s kernel", name)
    return convolve(img_arr, get_kernel(name), n_workers=n_workers)


def identity(img_arr, n_workers=NUM_WORKERS):
    return apply_kernel(img_arr, 'identity', n_workers)


def box_blur(img_arr, n_workers=NUM_WORKERS):
    return apply_kernel(img_arr, 'box_blur', n_workers)


def gaussian_blur(img_arr, n_workers=NUM_WORKERS):
    return apply_kernel(img_arr, 'gaussian_blur', n_workers)


def sharpen(img_arr, n_workers=NUM_WORKERS):
    return apply_kernel(img_arr, 'sharpen', n_workers)


def emboss(img_arr, n_workers=NUM_WORKERS):
    return apply_kernel(img_arr, 'emboss', n_workers)


def simple_edge_detection(img_arr, n_workers=NUM_WORKERS, threshold=DIM_THRESHOLD):
    greyscale(img_arr)
    img_arr = gaussian_blur(img_arr, n_workers)
    img_arr = apply_kernel(img_arr, 'edge_detect', n_workers)
    black_below(img_arr, threshold)
    return img_arr


def combine_max(gradients):
    """Per-channel maximum over a list of same-shaped images."""
    combined = gradients[0].copy()
    for gradient in gradients[1:]:
        np.maximum(combined, gradient, out=combined)
    return combined


def directional_edge_detection(img_arr, n_workers=NUM_WORKERS, threshold=DIM_THRESHOLD):
    """
    Greyscale, blur, then take the strongest of the four sobel gradients.

    The four gradient convolutions only read the blurred image, so they run
    concurrently, each with its own set of row workers.
    """
    greyscale(img_arr)
    blurred = gaussian_blur(img_arr, n_workers)

    logger.debug("Computing %d directional gradients", len(SOBEL_DIRECTIONS))
    gradients = Parallel(n_jobs=len(SOBEL_DIRECTIONS), require="sharedmem")(
        delayed(apply_kernel)(blurred, name, n_workers)
        for name in SOBEL_DIRECTIONS
    )

    combined = combine_max(gradients)
    del gradients

    black_below(combined, threshold)
    return combined


# In-place filters are wrapped so that every entry returns the image to keep
def _in_place(transform):
    @functools.wraps(transform)
    def run(img_arr, n_workers=NUM_WORKERS, threshold=None):
        if threshold is None:
            transform(img_arr)
        else:
            transform(img_arr, threshold)
        return img_arr
    return run


def _convolution(filter_fn):
    @functools.wraps(filter_fn)
    def run(img_arr, n_workers=NUM_WORKERS, threshold=None):
        return filter_fn(img_arr, n_workers)
    return run


def _edge(filter_fn):
    @functools.wraps(filter_fn)
    def run(img_arr, n_workers=NUM_WORKERS, threshold=None):
        if threshold is None:
            threshold = DIM_THRESHOLD
        return filter_fn(img_arr, n_workers, threshold)
    return run


def _colour(transform):
    @functools.wraps(transform)
    def run(img_arr, n_workers=NUM_WORKERS, threshold=None):
        transform(img_arr)
        return img_arr
    return run


FILTERS = {
    'greyscale': _colour(greyscale),
    'black_below': _in_place(black_below),
    'white_above': _in_place(white_above),
    'identity': _convolution(identity),
    'box_blur': _convolution(box_blur),
    'gaussian_blur': _convolution(gaussian_blur),
    'sharpen': _convolution(sharpen),
    'emboss': _convolution(emboss),
    'simple_edge_detection': _edge(simple_edge_detection),
    'directional_edge_detection': _edge(directional_edge_detection),
}
FILTERS.update({name: _colour(fn) for name, fn in ColorFilters.TRANSFORMS.items()})


def apply_filter(img_arr, name, n_workers=NUM_WORKERS, threshold=None):
    """
    Run the named filter and return the image to continue with.

    threshold only affects black_below, white_above and the edge detectors;
    None means their default. Unknown names raise KeyError.
    """
    filter_fn = FILTERS[name]
    logger.debug("Running filter %s", name)
    return filter_fn(img_arr, n_workers=n_workers, threshold=threshold)
