#!/usr/bin/env python3
"""
Benchmark script to compare sequential vs parallel convolution.
"""
import argparse
import json
import multiprocessing
import time

import numpy as np

import ConvParallel
import ConvSeq
from Kernels import KERNELS, get_kernel
from PixelBuffer import load_image

DEFAULT_WORKER_COUNTS = (1, 2, 4, 8, 20)


def time_runs(fn, n_runs):
    times = []
    for i in range(n_runs):
        start = time.perf_counter()
        result = fn()
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        print(f"Run {i+1}: {elapsed:.4f} seconds")
    print(f"Average: {np.mean(times):.4f} ± {np.std(times):.4f} seconds")
    return result, float(np.mean(times))


def benchmark_convolution(arr, kernel_name, worker_counts=DEFAULT_WORKER_COUNTS, n_runs=3):
    """Time ConvSeq and ConvParallel at each worker count; return result records."""
    kernel = get_kernel(kernel_name)

    print(f"Image size: {arr.shape[1]}x{arr.shape[0]} pixels")
    print(f"Kernel: {kernel_name}")
    print(f"Number of runs: {n_runs}")
    print(f"CPU cores: {multiprocessing.cpu_count()}")
    print("=" * 70)

    records = []

    print("\nSEQUENTIAL VERSION")
    print("-" * 70)
    result_seq, avg_seq = time_runs(lambda: ConvSeq.apply_convolution(arr, kernel), n_runs)
    records.append({
        'py_module': 'ConvSeq',
        'n_workers': 1,
        'image_width': arr.shape[1],
        'image_height': arr.shape[0],
        'kernel': kernel_name,
        'python_seconds': avg_seq,
        'max_diff': 0,
    })

    for n_workers in worker_counts:
        print(f"\nPARALLEL VERSION ({n_workers} workers)")
        print("-" * 70)
        result_par, avg_par = time_runs(
            lambda: ConvParallel.apply_convolution(arr, kernel, n_workers=n_workers), n_runs)
        diff = int(np.abs(result_seq.astype(int) - result_par.astype(int)).max())
        print(f"Speedup: {avg_seq / avg_par:.2f}x")
        records.append({
            'py_module': 'ConvParallel',
            'n_workers': n_workers,
            'image_width': arr.shape[1],
            'image_height': arr.shape[0],
            'kernel': kernel_name,
            'python_seconds': avg_par,
            'max_diff': diff,
        })

    print_summary(records)
    return records


def print_summary(records):
    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)
    baseline = records[0]['python_seconds']
    for r in records:
        label = f"{r['py_module']} ({r['n_workers']} workers)"
        print(f"{label:30s}: {r['python_seconds']:.4f}s  ({baseline / r['python_seconds']:.2f}x)")

    print("\n" + "=" * 70)
    print("VERIFICATION")
    print("=" * 70)
    worst = max(r['max_diff'] for r in records)
    print(f"Max difference vs sequential: {worst}")
    if worst == 0:
        print("✓ All results are identical!")
    else:
        print("⚠ Results differ slightly (floating point precision)")


def synthetic_image(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Sequential vs parallel convolution benchmark")
    parser.add_argument("--image", help="Image to benchmark on (default: random image)")
    parser.add_argument("--size", type=int, default=256, help="Side of the random image")
    parser.add_argument("--kernel", default="gaussian_blur", choices=sorted(KERNELS))
    parser.add_argument("--workers", type=int, nargs="+", default=list(DEFAULT_WORKER_COUNTS))
    parser.add_argument("--runs", type=int, default=3)
    parser.add_argument("--json", dest="json_path", help="Write results to this JSON file")
    args = parser.parse_args(argv)

    arr = load_image(args.image) if args.image else synthetic_image(args.size, args.size)

    print("=" * 70)
    print("CONVOLUTION BENCHMARK: Sequential vs Parallel")
    print("=" * 70)

    records = benchmark_convolution(arr, args.kernel, args.workers, args.runs)

    if args.json_path:
        with open(args.json_path, 'w') as f:
            json.dump({'metadata': {'cpu_cores': multiprocessing.cpu_count(), 'runs': args.runs},
                       'results': records}, f, indent=2)
        print(f"\n✓ Results saved to {args.json_path}")


if __name__ == "__main__":
    main()
