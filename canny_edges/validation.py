"""
Input validation for the Canny pipeline.

Every check here runs before any stage touches the grid, so a rejected
call never produces partial output.
"""

import math
import numbers

import numpy as np

from canny_edges.canny_constants import (
    MIN_INTENSITY,
    MAX_INTENSITY,
    MIN_THRESHOLD_RATIO,
    MAX_THRESHOLD_RATIO,
    MIN_SIZE_MARGIN,
    VALID_SUPPRESSION_MODES,
)


class InputValidationError(ValueError):
    """Raised when a caller passes parameters or a grid the pipeline cannot use."""


def validate_ratio(ratio: float) -> float:
    if isinstance(ratio, bool) or not isinstance(ratio, numbers.Real):
        raise InputValidationError(f"Hysteresis threshold ratio must be a number, got {ratio!r}")
    if not math.isfinite(ratio) or ratio < MIN_THRESHOLD_RATIO or ratio > MAX_THRESHOLD_RATIO:
        raise InputValidationError(
            f"Hysteresis threshold ratio must be in range "
            f"{MIN_THRESHOLD_RATIO} - {MAX_THRESHOLD_RATIO}, got {ratio}"
        )
    return float(ratio)


def validate_sensitivity(sensitivity: int) -> int:
    if isinstance(sensitivity, bool) or not isinstance(sensitivity, numbers.Integral):
        raise InputValidationError(f"Sensitivity must be an integer, got {sensitivity!r}")
    if sensitivity <= 0:
        raise InputValidationError(f"Sensitivity must be positive, got {sensitivity}")
    return int(sensitivity)


def validate_kernel_params(radius: int, sigma: float) -> None:
    if isinstance(radius, bool) or not isinstance(radius, numbers.Integral) or radius <= 0:
        raise InputValidationError(f"Gaussian radius must be a positive integer, got {radius!r}")
    if isinstance(sigma, bool) or not isinstance(sigma, numbers.Real):
        raise InputValidationError(f"Gaussian sigma must be a number, got {sigma!r}")
    if not math.isfinite(sigma) or sigma <= 0:
        raise InputValidationError(f"Gaussian sigma must be positive, got {sigma}")


def validate_suppression_mode(mode: str) -> str:
    if mode not in VALID_SUPPRESSION_MODES:
        raise InputValidationError(
            f"Invalid suppression mode: {mode!r}. Use {VALID_SUPPRESSION_MODES}"
        )
    return mode


def validate_grid(grid, radius: int) -> np.ndarray:
    """
    Check an intensity grid and return it as a read-only numpy view.

    Args:
        grid: 2-D array-like of integer intensities
        radius: Gaussian radius the grid will be blurred with

    Returns:
        Read-only integer ndarray view of the grid
    """
    arr = np.asarray(grid)

    if arr.ndim != 2:
        raise InputValidationError(
            f"Intensity grid must be 2-D (single channel), got shape {arr.shape}"
        )
    if not np.issubdtype(arr.dtype, np.integer):
        raise InputValidationError(f"Intensity grid must hold integers, got dtype {arr.dtype}")

    h, w = arr.shape
    min_side = 2 * radius + MIN_SIZE_MARGIN
    if h < min_side or w < min_side:
        raise InputValidationError(
            f"Intensity grid too small: {w}x{h}, need at least {min_side}x{min_side} "
            f"for radius {radius}"
        )

    if arr.min() < MIN_INTENSITY or arr.max() > MAX_INTENSITY:
        raise InputValidationError(
            f"Intensity values must be in range {MIN_INTENSITY}-{MAX_INTENSITY}, "
            f"got {arr.min()}-{arr.max()}"
        )

    view = arr.view()
    view.flags.writeable = False
    return view
