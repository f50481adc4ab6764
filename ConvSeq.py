#!/usr/bin/env python3
"""
Simple image convolution script.

Classic nested loops over every output pixel and every kernel weight, with
the same reflective border and clamping as ConvParallel. Slow, but easy to
check by hand; the benchmark uses it as its baseline.
"""
import cProfile
import io
import pstats

import numpy as np
from PIL import Image

from Kernels import check_kernel, get_kernel
from PixelBuffer import check_image


def reflect(coord, size):
    if coord < 0:
        coord = -coord
    if coord >= size:
        coord = 2 * (size - 1) - coord
    # only reachable when size == 1
    if coord < 0 or coord >= size:
        coord = 0
    return coord


def apply_convolution(img_arr, kernel):
    check_image(img_arr)
    kernel = check_kernel(kernel)

    h, w = img_arr.shape[0], img_arr.shape[1]
    img_float = img_arr.astype(float)
    out = np.zeros((h, w, 3), dtype=np.uint8)

    for y in range(h):
        for x in range(w):
            acc = np.zeros(3, dtype=float)
            for dy in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    acc += img_float[reflect(y + dy, h), reflect(x + dx, w)] * kernel[dy + 1, dx + 1]
            out[y, x] = np.clip(acc, 0, 255).astype(np.uint8)

    return out


if __name__ == "__main__":
    # Configuration
    input_path = "example.bmp"
    output_path = "output_sequential.bmp"
    kernel = get_kernel('sharpen')

    # Load RGB image
    img = Image.open(input_path).convert("RGB")
    arr = np.array(img)

    # Profile the convolution
    profiler = cProfile.Profile()
    profiler.enable()

    result = apply_convolution(arr, kernel)

    profiler.disable()

    out_img = Image.fromarray(result)
    out_img.save(output_path)
    print(f"Saved: {output_path}")

    # Print profiling stats
    s = io.StringIO()
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumulative')
    stats.print_stats(20)  # Top 20 functions
    print("\n=== Profiling Results ===")
    print(s.getvalue())
