"""Shared fixtures for Canny pipeline tests."""

import numpy as np
import pytest


@pytest.fixture
def flat_grid() -> np.ndarray:
    """A 16x16 grid of constant intensity."""
    return np.full((16, 16), 100, dtype=np.uint8)


@pytest.fixture
def step_grid() -> np.ndarray:
    """A 20x20 vertical step edge: columns 0-9 are 0, columns 10-19 are 255."""
    grid = np.zeros((20, 20), dtype=np.uint8)
    grid[:, 10:] = 255
    return grid
