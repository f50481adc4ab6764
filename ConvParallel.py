#!/usr/bin/env python3
"""
Parallel 3x3 image convolution using joblib.

Rows are split into a fixed number of contiguous partitions, one per worker.
Workers share the input image and the kernel read-only and write their own
rows of a shared output array, so the threads need no locking beyond the
join at the end of the Parallel call.
"""
import logging

import numpy as np
from PIL import Image
from joblib import Parallel, delayed

from Kernels import check_kernel, get_kernel
from PixelBuffer import check_image

logger = logging.getLogger(__name__)

NUM_WORKERS = 20


def partition_rows(height, n_workers=NUM_WORKERS):
    """
    Split [0, height) into n_workers contiguous half-open row ranges.

    Every range but the last has height // n_workers rows; the last one also
    takes the remainder. With fewer rows than workers the leading ranges are
    empty.
    """
    if n_workers < 1:
        raise ValueError(f"n_workers must be at least 1, got {n_workers}")
    step = height // n_workers
    partitions = [(step * i, step * (i + 1)) for i in range(n_workers - 1)]
    partitions.append((step * (n_workers - 1), height))
    return partitions


def reflect_indices(coords, size):
    """Mirror out-of-range coordinates back into [0, size) across the nearest edge."""
    coords = np.asarray(coords)
    if size == 1:
        # a single row/column reflects onto itself
        return np.zeros_like(coords)
    coords = np.abs(coords)
    return np.where(coords >= size, 2 * (size - 1) - coords, coords)


def convolve_rows(img_arr, kernel, out, start_y, end_y):
    """Compute output rows [start_y, end_y) of out for one worker."""
    if end_y <= start_y:
        return
    h, w = img_arr.shape[0], img_arr.shape[1]

    # Rows and columns of the 1-pixel reflected border around this block
    rows = reflect_indices(np.arange(start_y - 1, end_y + 1), h)
    cols = reflect_indices(np.arange(-1, w + 1), w)
    region = img_arr[np.ix_(rows, cols)].astype(float)

    # windows shape: (rows, w, 3, 3, 3) -> window[..., c, k, l] is the
    # neighbour at dy = k - 1, dx = l - 1 and gets kernel[k, l]
    windows = np.lib.stride_tricks.sliding_window_view(region, (3, 3), axis=(0, 1))
    block_result = np.einsum('ijckl,kl->ijc', windows, kernel)

    out[start_y:end_y] = np.clip(block_result, 0, 255).astype(np.uint8)


def apply_convolution(img_arr, kernel, n_workers=NUM_WORKERS):
    """
    Convolve an (H, W, 3) uint8 image with a 3x3 kernel.

    Returns a new array of the same shape; the input is never modified.
    """
    check_image(img_arr)
    kernel = check_kernel(kernel)
    h = img_arr.shape[0]

    partitions = partition_rows(h, n_workers)

    # Pre-allocate output array
    out = np.empty_like(img_arr)

    logger.debug("Convolving %dx%d image over %d partitions",
                 img_arr.shape[1], h, len(partitions))

    # Fresh set of threads for this call, joined before Parallel returns
    Parallel(n_jobs=n_workers, require="sharedmem")(
        delayed(convolve_rows)(img_arr, kernel, out, start_y, end_y)
        for start_y, end_y in partitions
    )

    return out


# Name used by the filter pipeline
convolve = apply_convolution


if __name__ == "__main__":
    # Configuration
    input_path = "example.bmp"
    output_path = "output_parallel.bmp"
    kernel = get_kernel('gaussian_blur')
    n_workers = NUM_WORKERS

    # Load RGB image
    img = Image.open(input_path).convert("RGB")
    arr = np.array(img)

    print(f"Processing image: {arr.shape[1]}x{arr.shape[0]} pixels")
    print(f"Parallelization: {n_workers} row partitions")

    result = apply_convolution(arr, kernel, n_workers=n_workers)

    # Save result
    out_img = Image.fromarray(result)
    out_img.save(output_path)
    print(f"Saved: {output_path}")
