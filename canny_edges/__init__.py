"""
Canny edge detection on single-channel intensity grids.
"""

from .gaussian_blur import blur, build_gaussian_kernel
from .gradient_field import GradientField, analyze, bucket_angles
from .hysteresis import Thresholds, apply_hysteresis, classify, compute_thresholds
from .pipeline import CannyResult, detect_edges, run_canny
from .sobel import gradients
from .suppression import suppress
from .validation import InputValidationError

__all__ = [
    "blur",
    "build_gaussian_kernel",
    "gradients",
    "GradientField",
    "analyze",
    "bucket_angles",
    "suppress",
    "Thresholds",
    "compute_thresholds",
    "apply_hysteresis",
    "classify",
    "CannyResult",
    "run_canny",
    "detect_edges",
    "InputValidationError",
]
