"""
Non-maximum suppression stage of the Canny pipeline.

Thins gradient ridges by zeroing pixels that are not local maxima along
their gradient direction bucket.
"""

import logging

import numpy as np

from canny_edges.canny_constants import (
    DIRECTION_HORIZONTAL,
    DIRECTION_DIAG_UP,
    DIRECTION_VERTICAL,
    DIRECTION_DIAG_DOWN,
    SUPPRESSION_REFERENCE,
    DEFAULT_SUPPRESSION_MODE,
)
from canny_edges.gradient_field import GradientField
from canny_edges.validation import validate_suppression_mode

logger = logging.getLogger(__name__)


def non_maximum_mask(magnitude: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """
    Find interior pixels that are strictly below both neighbours on their axis.

    Neighbour pairs per bucket:
    - HORIZONTAL: left and right
    - DIAG_UP: upper-right and lower-left
    - VERTICAL: top and bottom
    - DIAG_DOWN: upper-left and lower-right

    Args:
        magnitude: H x W gradient magnitude
        direction: H x W direction bucket codes

    Returns:
        (H-2) x (W-2) boolean mask over the interior, True = not a local maximum
    """
    center = magnitude[1:-1, 1:-1]
    bucket = direction[1:-1, 1:-1]

    left, right = magnitude[1:-1, :-2], magnitude[1:-1, 2:]
    top, bottom = magnitude[:-2, 1:-1], magnitude[2:, 1:-1]
    upper_left, lower_right = magnitude[:-2, :-2], magnitude[2:, 2:]
    upper_right, lower_left = magnitude[:-2, 2:], magnitude[2:, :-2]

    return np.select(
        [
            bucket == DIRECTION_HORIZONTAL,
            bucket == DIRECTION_DIAG_UP,
            bucket == DIRECTION_VERTICAL,
            bucket == DIRECTION_DIAG_DOWN,
        ],
        [
            (center < left) & (center < right),
            (center < upper_right) & (center < lower_left),
            (center < top) & (center < bottom),
            (center < upper_left) & (center < lower_right),
        ],
        default=False,
    )


def suppress(field: GradientField, mode: str = DEFAULT_SUPPRESSION_MODE) -> np.ndarray:
    """
    Apply non-maximum suppression to a gradient field.

    The outermost one-pixel border is never examined. Every comparison reads
    the unsuppressed magnitude. In "reference" mode a non-maximum at (r, c)
    zeroes (r-1, c-1), matching an in-place raster scan; in that scan no
    cell is written before its last read, so the single vectorized pass
    gives the same result as the sequential loop.
    In "canonical" mode the examined pixel itself is zeroed.

    Args:
        field: Gradient field from analyze()
        mode: "reference" or "canonical"

    Returns:
        H x W float64 thinned magnitude (a new array; the field is untouched)
    """
    validate_suppression_mode(mode)

    magnitude = field.magnitude
    thinned = magnitude.copy()

    h, w = magnitude.shape
    if h < 3 or w < 3:
        return thinned

    mask = non_maximum_mask(magnitude, field.direction)

    if mode == SUPPRESSION_REFERENCE:
        thinned[:-2, :-2][mask] = 0.0
    else:
        thinned[1:-1, 1:-1][mask] = 0.0

    logger.debug(f"Non-maximum suppression ({mode}): {int(mask.sum())} of "
                 f"{mask.size} interior pixels suppressed")

    return thinned
