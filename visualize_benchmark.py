#!/usr/bin/env python3
"""
Visualize benchmark results from benchmark_results.json
Creates bar charts of execution time and speedup per worker count.
"""

import json
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np


def load_results(json_path='benchmark_results.json'):
    """Load benchmark results from JSON file."""
    with open(json_path, 'r') as f:
        data = json.load(f)
    return data


def organize_data(data):
    """Group results by (image size, kernel) -> {label: time in ms}."""
    results = {}

    for entry in data['results']:
        key = (f"{entry['image_width']}x{entry['image_height']}", entry['kernel'])
        if entry['py_module'] == 'ConvSeq':
            label = 'ConvSeq'
        else:
            label = f"{entry['py_module']} x{entry['n_workers']}"

        # Convert to milliseconds for comparison
        results.setdefault(key, {})[label] = entry['python_seconds'] * 1000

    return results


def plot_benchmark_results(data, output_path='benchmark_plot.png', show=True):
    """Draw execution times (top row) and speedups vs ConvSeq (bottom row)."""
    results = organize_data(data)
    configs = sorted(results.keys())
    n_configs = len(configs)

    fig = plt.figure(figsize=(8 * n_configs, 12))
    gs = fig.add_gridspec(2, n_configs, hspace=0.3, wspace=0.25)
    fig.text(0.5, 0.96, 'Image Convolution Benchmark Results',
             ha='center', fontsize=16, fontweight='bold')

    for idx, config in enumerate(configs):
        times = results[config]
        labels = list(times.keys())
        x = np.arange(len(labels))
        image_size, kernel = config

        ax = fig.add_subplot(gs[0, idx])
        bars = ax.bar(x, [times[l] for l in labels], color='#2E86AB', alpha=0.8)
        for bar in bars:
            height = bar.get_height()
            if height > 0:
                ax.text(bar.get_x() + bar.get_width()/2., height, f'{height:.1f}',
                        ha='center', va='bottom', fontsize=7)
        ax.set_ylabel('Time (ms)', fontsize=11, fontweight='bold')
        ax.set_title(f'Execution Time - {image_size} ({kernel})', fontsize=12, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=30, ha='right')
        ax.grid(True, alpha=0.3, axis='y')
        ax.set_yscale('log')

        ax = fig.add_subplot(gs[1, idx])
        baseline = times.get('ConvSeq')
        if baseline:
            speedups = [baseline / times[l] if times[l] > 0 else 0 for l in labels]
            bars = ax.bar(x, speedups, color='#A23B72', alpha=0.8)
            for bar in bars:
                height = bar.get_height()
                if height > 0:
                    ax.text(bar.get_x() + bar.get_width()/2., height, f'{height:.1f}x',
                            ha='center', va='bottom', fontsize=7)
            ax.axhline(y=1.0, color='red', linestyle='--', linewidth=1, alpha=0.7,
                       label='Baseline (ConvSeq)')
            ax.legend(fontsize=8, loc='best')
        ax.set_ylabel('Speedup vs ConvSeq', fontsize=11, fontweight='bold')
        ax.set_title(f'Speedup - {image_size} ({kernel})', fontsize=12, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=30, ha='right')
        ax.grid(True, alpha=0.3, axis='y')

    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"✓ Execution times plot saved to: {output_path}")
    if show:
        plt.show()
    plt.close(fig)


def print_summary(data):
    """Print summary statistics."""
    results = organize_data(data)

    print("\n" + "="*80)
    print("BENCHMARK SUMMARY")
    print("="*80)

    for (image_size, kernel), times in sorted(results.items()):
        print(f"\nImage: {image_size} | Kernel: {kernel}")
        print("-" * 80)

        sorted_times = sorted(times.items(), key=lambda x: x[1])
        for impl, time_ms in sorted_times:
            print(f"  {impl:30s}: {time_ms:10.2f} ms")

        if 'ConvSeq' in times:
            baseline = times['ConvSeq']
            print(f"\n  Speedups vs ConvSeq:")
            for impl, time_ms in sorted_times:
                if impl != 'ConvSeq' and time_ms > 0:
                    print(f"    {impl:30s}: {baseline / time_ms:6.2f}x")


def main(json_path='benchmark_results.json'):
    json_path = Path(json_path)
    if not json_path.exists():
        print(f"Error: {json_path} not found!")
        print(f"Run 'python benchmark.py --json {json_path}' first to generate results.")
        return 1

    data = load_results(json_path)
    print_summary(data)

    print("\nGenerating plot...")
    plot_benchmark_results(data)

    print("\n✓ Visualization complete!")
    return 0


if __name__ == '__main__':
    sys.exit(main(*sys.argv[1:]))
