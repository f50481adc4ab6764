#!/usr/bin/env python3
"""
Run one or more filters over an image file and report how long each step took.
"""
import argparse
import cProfile
import io
import logging
import pstats
import sys
import time

import Filters
from ConvParallel import NUM_WORKERS
from PixelBuffer import load_image, save_image

DEFAULT_FILTER = 'directional_edge_detection'


def build_parser():
    parser = argparse.ArgumentParser(description="Apply 3x3 image filters in parallel")
    parser.add_argument("input", help="Input image (any format Pillow can read)")
    parser.add_argument("-o", "--output", default="out.bmp", help="Output image path")
    parser.add_argument("-f", "--filter", dest="filters", action="append",
                        choices=sorted(Filters.FILTERS),
                        help=f"Filter to apply, repeat to chain (default: {DEFAULT_FILTER})")
    parser.add_argument("--workers", type=int, default=NUM_WORKERS,
                        help="Row partitions per convolution")
    parser.add_argument("--threshold", type=int, default=None,
                        help="Cutoff for black_below, white_above and the edge detectors")
    parser.add_argument("--no-write", action="store_true",
                        help="Skip writing the output file (for timing runs)")
    parser.add_argument("--profile", action="store_true",
                        help="Profile the processing step with cProfile")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run_filters(arr, filters, n_workers=NUM_WORKERS, threshold=None):
    for name in filters:
        arr = Filters.apply_filter(arr, name, n_workers=n_workers, threshold=threshold)
    return arr


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.workers < 1:
        parser.error("--workers must be at least 1")
    filters = args.filters or [DEFAULT_FILTER]

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)-12s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        start = lap = time.perf_counter()

        arr = load_image(args.input)
        print(f"Image size (WxH): {arr.shape[1]}x{arr.shape[0]}.")
        end = time.perf_counter()
        print(f"Time to read file: \t{end - lap:.4f} seconds.")
        lap = end

        if args.profile:
            profiler = cProfile.Profile()
            profiler.enable()
        arr = run_filters(arr, filters, n_workers=args.workers, threshold=args.threshold)
        if args.profile:
            profiler.disable()
        end = time.perf_counter()
        print(f"Time for processing: \t{end - lap:.4f} seconds.")
        lap = end

        if not args.no_write:
            save_image(arr, args.output)
            end = time.perf_counter()
            print(f"Time to write file: \t{end - lap:.4f} seconds.")

        print(f"Total program time: \t{end - start:.4f} seconds.")
    except KeyboardInterrupt:
        print("\nProgram interrupted. It will now be terminated.")
        return 1

    if args.profile:
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumulative')
        stats.print_stats(20)  # Top 20 functions
        print("\n=== Profiling Results ===")
        print(s.getvalue())

    return 0


if __name__ == "__main__":
    sys.exit(main())
