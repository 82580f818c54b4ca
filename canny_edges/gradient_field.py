"""
Gradient field analysis: magnitude, direction buckets and global statistics.

The mean and standard deviation computed here feed the hysteresis
thresholds. They are taken over the full magnitude grid *before*
non-maximum suppression.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from canny_edges.canny_constants import (
    DIRECTION_HORIZONTAL,
    DIRECTION_DIAG_UP,
    DIRECTION_VERTICAL,
    DIRECTION_DIAG_DOWN,
    BUCKET_BOUNDARY_1,
    BUCKET_BOUNDARY_2,
    BUCKET_BOUNDARY_3,
    BUCKET_BOUNDARY_4,
    BUCKET_BOUNDARY_5,
    BUCKET_BOUNDARY_6,
    BUCKET_BOUNDARY_7,
    BUCKET_BOUNDARY_8,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradientField:
    """Per-pixel gradient magnitude and direction plus magnitude statistics."""

    magnitude: np.ndarray   # H x W float64
    direction: np.ndarray   # H x W int32 bucket codes (0, 45, 90, 135)
    mean: int               # Rounded mean magnitude
    std_dev: int            # Truncated standard deviation about `mean`

    @property
    def shape(self) -> Tuple[int, int]:
        return self.magnitude.shape


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def gradient_magnitude(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """Euclidean norm of (gx, gy) at every pixel."""
    gx = np.asarray(gx, dtype=np.float64)
    gy = np.asarray(gy, dtype=np.float64)
    return np.sqrt(gx * gx + gy * gy)


def magnitude_statistics(magnitude: np.ndarray) -> Tuple[int, int]:
    """
    Compute the integer mean and standard deviation of a magnitude grid.

    The mean is rounded half up. The standard deviation is the population
    variance about that *rounded* mean, square-rooted and truncated toward
    zero. The two use different integer conversions on purpose, and the
    truncation biases the high threshold slightly low.

    Args:
        magnitude: H x W non-negative magnitude grid

    Returns:
        Tuple of (mean, std_dev)
    """
    count = float(magnitude.size)

    mean = int(math.floor(float(magnitude.sum()) / count + 0.5))

    deviation = magnitude - mean
    variance = float((deviation * deviation).sum()) / count
    std_dev = int(math.sqrt(variance))

    return mean, std_dev


def bucket_angles(angle: np.ndarray) -> np.ndarray:
    """
    Bucket gradient angles (degrees, [0, 360)) into four neighbour axes.

    Ranges are inclusive at both ends, so a boundary angle matches more
    than one range; the first match in the order HORIZONTAL, DIAG_UP,
    VERTICAL, DIAG_DOWN wins.

    Args:
        angle: Array of angles in degrees

    Returns:
        int32 array of direction bucket codes
    """
    angle = np.asarray(angle, dtype=np.float64)

    horizontal = (
        (angle <= BUCKET_BOUNDARY_1)
        | ((angle >= BUCKET_BOUNDARY_4) & (angle <= BUCKET_BOUNDARY_5))
        | (angle >= BUCKET_BOUNDARY_8)
    )
    diag_up = (
        ((angle >= BUCKET_BOUNDARY_1) & (angle <= BUCKET_BOUNDARY_2))
        | ((angle >= BUCKET_BOUNDARY_5) & (angle <= BUCKET_BOUNDARY_6))
    )
    vertical = (
        ((angle >= BUCKET_BOUNDARY_2) & (angle <= BUCKET_BOUNDARY_3))
        | ((angle >= BUCKET_BOUNDARY_6) & (angle <= BUCKET_BOUNDARY_7))
    )

    # np.select picks the first true condition, matching the evaluation order
    return np.select(
        [horizontal, diag_up, vertical],
        [DIRECTION_HORIZONTAL, DIRECTION_DIAG_UP, DIRECTION_VERTICAL],
        default=DIRECTION_DIAG_DOWN,
    ).astype(np.int32)


def gradient_angle(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """atan2(gy, gx) in degrees, normalized to [0, 360)."""
    angle = np.degrees(np.arctan2(
        np.asarray(gy, dtype=np.float64), np.asarray(gx, dtype=np.float64)
    ))
    return np.where(angle < 0, angle + 360.0, angle)


def bucket_direction(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """Direction bucket for every pixel of a pair of gradient grids."""
    return bucket_angles(gradient_angle(gx, gy))


def analyze(gx: np.ndarray, gy: np.ndarray) -> GradientField:
    """
    Derive the gradient field from Sobel gradients.

    Args:
        gx: H x W horizontal gradient
        gy: H x W vertical gradient

    Returns:
        GradientField with read-only magnitude and direction grids
    """
    if np.shape(gx) != np.shape(gy):
        raise ValueError(f"Gradient shapes differ: {np.shape(gx)} vs {np.shape(gy)}")

    magnitude = gradient_magnitude(gx, gy)
    direction = bucket_direction(gx, gy)
    mean, std_dev = magnitude_statistics(magnitude)

    logger.debug(f"Gradient field: magnitude max={magnitude.max():.1f}, "
                 f"mean={mean}, std_dev={std_dev}")

    return GradientField(
        magnitude=_read_only(magnitude),
        direction=_read_only(direction),
        mean=mean,
        std_dev=std_dev,
    )
