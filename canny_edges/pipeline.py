"""
Canny edge detection pipeline.

Pipeline:
1. Gaussian blur (noise reduction)
2. Sobel gradients (Gx, Gy)
3. Gradient field (magnitude, direction buckets, mean, std dev)
4. Non-maximum suppression (ridge thinning)
5. Hysteresis thresholding (binary edge map)

Every invocation is independent: parameters are validated up front, each
stage is computed exactly once and intermediate grids are returned in a
frozen CannyResult rather than kept in shared state.
"""

import logging
from dataclasses import dataclass

import numpy as np

from canny_edges.canny_constants import (
    GAUSSIAN_RADIUS,
    GAUSSIAN_SIGMA,
    DEFAULT_SENSITIVITY,
    DEFAULT_THRESHOLD_RATIO,
    DEFAULT_SUPPRESSION_MODE,
    EDGE_VALUE,
)
from canny_edges.gaussian_blur import blur
from canny_edges.gradient_field import GradientField, analyze
from canny_edges.hysteresis import Thresholds, compute_thresholds, apply_hysteresis
from canny_edges.sobel import gradients
from canny_edges.suppression import suppress
from canny_edges.validation import (
    validate_grid,
    validate_kernel_params,
    validate_ratio,
    validate_sensitivity,
    validate_suppression_mode,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CannyResult:
    """All products of one pipeline invocation."""

    blurred: np.ndarray      # H x W int32
    gx: np.ndarray           # H x W int32
    gy: np.ndarray           # H x W int32
    field: GradientField
    suppressed: np.ndarray   # H x W float64
    thresholds: Thresholds
    edges: np.ndarray        # (H-2) x (W-2) uint8, 0 / 255

    @property
    def edge_pixels(self) -> int:
        return int(np.count_nonzero(self.edges == EDGE_VALUE))


def run_canny(
    grid,
    sensitivity: int = DEFAULT_SENSITIVITY,
    ratio: float = DEFAULT_THRESHOLD_RATIO,
    radius: int = GAUSSIAN_RADIUS,
    sigma: float = GAUSSIAN_SIGMA,
    suppression: str = DEFAULT_SUPPRESSION_MODE,
) -> CannyResult:
    """
    Run the full Canny pipeline and keep every intermediate grid.

    Args:
        grid: H x W integer intensity grid (0-255)
        sensitivity: High threshold = mean + sensitivity * std dev (typically 1-3)
        ratio: Low threshold as a fraction of the high threshold, in [0, 1]
        radius: Gaussian kernel radius
        sigma: Gaussian standard deviation
        suppression: "reference" or "canonical" non-maximum suppression

    Returns:
        CannyResult; `edges` has shape (H-2) x (W-2)

    Raises:
        InputValidationError: Before any stage runs, if a parameter or the
            grid is invalid
    """
    ratio = validate_ratio(ratio)
    sensitivity = validate_sensitivity(sensitivity)
    validate_kernel_params(radius, sigma)
    validate_suppression_mode(suppression)
    intensities = validate_grid(grid, radius)

    h, w = intensities.shape
    logger.debug(f"Starting Canny on {w}x{h} grid (sensitivity={sensitivity}, ratio={ratio})")

    blurred = blur(intensities, radius, sigma)
    gx, gy = gradients(blurred)
    field = analyze(gx, gy)
    suppressed = suppress(field, suppression)

    # Thresholds use the pre-suppression statistics
    thresholds = compute_thresholds(field.mean, field.std_dev, sensitivity, ratio)
    edges = apply_hysteresis(suppressed, thresholds)

    return CannyResult(
        blurred=blurred,
        gx=gx,
        gy=gy,
        field=field,
        suppressed=suppressed,
        thresholds=thresholds,
        edges=edges,
    )


def detect_edges(
    grid,
    sensitivity: int = DEFAULT_SENSITIVITY,
    ratio: float = DEFAULT_THRESHOLD_RATIO,
    radius: int = GAUSSIAN_RADIUS,
    sigma: float = GAUSSIAN_SIGMA,
    suppression: str = DEFAULT_SUPPRESSION_MODE,
) -> np.ndarray:
    """Return only the (H-2) x (W-2) binary edge map. See run_canny()."""
    return run_canny(grid, sensitivity, ratio, radius, sigma, suppression).edges
