"""
Sobel gradient stage of the Canny pipeline.

Sobel X responds to vertical edges (left/right intensity change),
Sobel Y responds to horizontal edges (top/bottom intensity change).
"""

import logging
from typing import Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


# Applied as correlation: positive response for dark -> bright to the right
SOBEL_X = np.array([
    [-1, 0, 1],
    [-2, 0, 2],
    [-1, 0, 1],
], dtype=np.float64)

# Positive response for dark -> bright downward
SOBEL_Y = np.array([
    [-1, -2, -1],
    [0, 0, 0],
    [1, 2, 1],
], dtype=np.float64)


def _correlate(grid: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    response = cv2.filter2D(grid, -1, kernel, borderType=cv2.BORDER_REPLICATE)
    # Integer input and integer weights, rint only removes float noise
    return np.rint(response).astype(np.int32)


def gradients(grid: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute horizontal and vertical Sobel gradients.

    Uses the same replicated-border policy as the Gaussian stage, so both
    outputs keep the input's H x W shape.

    Args:
        grid: H x W blurred intensity grid

    Returns:
        Tuple of (gx, gy), both H x W signed int32 grids
    """
    source = np.asarray(grid, dtype=np.float64)

    gx = _correlate(source, SOBEL_X)
    gy = _correlate(source, SOBEL_Y)

    logger.debug(f"Sobel gradients: gx range {gx.min()}-{gx.max()}, "
                 f"gy range {gy.min()}-{gy.max()}")

    return gx, gy
