import os

# Headless plotting for visualize_benchmark
os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest


@pytest.fixture
def random_image():
    """Deterministic 13x17 RGB noise (height not divisible by most worker counts)."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(13, 17, 3), dtype=np.uint8)


@pytest.fixture
def step_image():
    """6 rows x 4 columns: top three rows at 200, bottom three black."""
    arr = np.zeros((6, 4, 3), dtype=np.uint8)
    arr[:3] = 200
    return arr


def uniform_image(width, height, value):
    return np.full((height, width, 3), value, dtype=np.uint8)
