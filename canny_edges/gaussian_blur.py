"""
Gaussian smoothing stage of the Canny pipeline.

Functions:
- build_gaussian_kernel: Sample and normalize a square 2-D Gaussian kernel
- blur: Convolve an intensity grid with the kernel (replicated borders)
"""

import logging

import cv2
import numpy as np

from canny_edges.canny_constants import (
    GAUSSIAN_RADIUS,
    GAUSSIAN_SIGMA,
    MIN_INTENSITY,
    MAX_INTENSITY,
)
from canny_edges.validation import validate_kernel_params

logger = logging.getLogger(__name__)


def build_gaussian_kernel(radius: int = GAUSSIAN_RADIUS, sigma: float = GAUSSIAN_SIGMA) -> np.ndarray:
    """
    Build a (2*radius+1) x (2*radius+1) Gaussian kernel.

    The 2-D Gaussian density is evaluated at integer offsets from the kernel
    center and the weights are normalized to sum to 1.

    Args:
        radius: Kernel radius in pixels (> 0)
        sigma: Standard deviation of the Gaussian (> 0)

    Returns:
        float64 kernel array
    """
    validate_kernel_params(radius, sigma)

    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    yy, xx = np.meshgrid(offsets, offsets, indexing="ij")

    density = np.exp(-(xx**2 + yy**2) / (2.0 * sigma**2)) / (2.0 * np.pi * sigma**2)

    return density / density.sum()


def blur(grid: np.ndarray, radius: int = GAUSSIAN_RADIUS, sigma: float = GAUSSIAN_SIGMA) -> np.ndarray:
    """
    Smooth an intensity grid with a Gaussian kernel.

    Samples falling outside the grid are replicated from the nearest edge
    pixel, so the output keeps the input's H x W shape. Results are rounded
    to the nearest integer and clamped to the valid intensity range.

    Args:
        grid: H x W integer intensity grid
        radius: Kernel radius in pixels
        sigma: Gaussian standard deviation

    Returns:
        H x W int32 blurred grid
    """
    kernel = build_gaussian_kernel(radius, sigma)

    # filter2D correlates; the kernel is symmetric so this is a convolution
    smoothed = cv2.filter2D(
        np.asarray(grid, dtype=np.float64), -1, kernel, borderType=cv2.BORDER_REPLICATE
    )
    blurred = np.clip(np.floor(smoothed + 0.5), MIN_INTENSITY, MAX_INTENSITY).astype(np.int32)

    logger.debug(f"Gaussian blur: radius={radius}, sigma={sigma}, "
                 f"output range {blurred.min()}-{blurred.max()}")

    return blurred
