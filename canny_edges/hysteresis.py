"""
Hysteresis thresholding stage of the Canny pipeline.

Thresholds are derived from the gradient magnitude statistics:
    high = mean + sensitivity * std_dev
    low  = high * ratio

A pixel is a definite edge at or above `high`, a definite non-edge below
`low`, and a weak candidate in between. Weak candidates become edges only
when a definite edge lies in their 3x3 neighbourhood. There is no
transitive linking: a chain of weak pixels is never followed beyond one step.
"""

import logging
from dataclasses import dataclass

import cv2
import numpy as np

from canny_edges.canny_constants import (
    EDGE_VALUE,
    NON_EDGE_VALUE,
    OUTPUT_BORDER_PX,
)
from canny_edges.gradient_field import GradientField
from canny_edges.validation import validate_ratio, validate_sensitivity

logger = logging.getLogger(__name__)

NEIGHBOURHOOD_KERNEL = np.ones((3, 3), dtype=np.uint8)


@dataclass(frozen=True)
class Thresholds:
    """Hysteresis thresholds for one pipeline invocation."""

    high: float
    low: float


def compute_thresholds(mean: int, std_dev: int, sensitivity: int, ratio: float) -> Thresholds:
    """
    Derive hysteresis thresholds from magnitude statistics.

    Args:
        mean: Rounded mean gradient magnitude
        std_dev: Truncated standard deviation of gradient magnitude
        sensitivity: Number of standard deviations above the mean for `high`
        ratio: Fraction of `high` used as `low`, in [0, 1]

    Returns:
        Thresholds with high >= low
    """
    sensitivity = validate_sensitivity(sensitivity)
    ratio = validate_ratio(ratio)

    high = float(mean + sensitivity * std_dev)
    low = high * ratio

    return Thresholds(high=high, low=low)


def apply_hysteresis(thinned: np.ndarray, thresholds: Thresholds) -> np.ndarray:
    """
    Classify a thinned magnitude grid into a binary edge map.

    Only pixels at least one pixel away from every border are classified;
    their 3x3 neighbourhood may reach into the border. A zero-magnitude pixel
    is never an edge, so a flat grid (where `high` is 0) produces no edges.

    Args:
        thinned: H x W magnitude grid after non-maximum suppression
        thresholds: Thresholds from compute_thresholds()

    Returns:
        (H-2) x (W-2) uint8 grid of 0 / 255
    """
    magnitude = np.asarray(thinned, dtype=np.float64)

    strong = (magnitude >= thresholds.high) & (magnitude > 0)
    weak = (magnitude >= thresholds.low) & (magnitude > 0) & ~strong

    # Any definite edge within the 3x3 window around each pixel
    near_strong = cv2.dilate(strong.astype(np.uint8), NEIGHBOURHOOD_KERNEL) > 0

    edges = strong | (weak & near_strong)

    b = OUTPUT_BORDER_PX
    interior = edges[b:-b, b:-b]

    logger.debug(f"Hysteresis: high={thresholds.high:.2f}, low={thresholds.low:.2f}, "
                 f"strong={int(strong[b:-b, b:-b].sum())}, edges={int(interior.sum())}")

    return np.where(interior, EDGE_VALUE, NON_EDGE_VALUE).astype(np.uint8)


def classify(thinned: np.ndarray, field: GradientField, sensitivity: int, ratio: float) -> np.ndarray:
    """
    Threshold a thinned magnitude grid using the field's pre-suppression statistics.

    Args:
        thinned: H x W suppressed magnitude grid
        field: Gradient field the grid was derived from
        sensitivity: Standard deviations above the mean for the high threshold
        ratio: Low threshold as a fraction of the high threshold

    Returns:
        (H-2) x (W-2) uint8 binary edge map
    """
    thresholds = compute_thresholds(field.mean, field.std_dev, sensitivity, ratio)
    return apply_hysteresis(thinned, thresholds)
