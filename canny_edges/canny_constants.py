"""
Constants for the Canny edge detection pipeline.

This module contains all configurable parameters and thresholds used
in the detection pipeline to make them easy to tune and maintain.
"""

# =============================================================================
# Gaussian Blur Constants
# =============================================================================

# Kernel radius in pixels (kernel side = 2 * radius + 1)
GAUSSIAN_RADIUS = 4

# Standard deviation of the Gaussian density
GAUSSIAN_SIGMA = 1.75


# =============================================================================
# Intensity Range Constants
# =============================================================================

MIN_INTENSITY = 0
MAX_INTENSITY = 255

# Value written for edge pixels in the binary map
EDGE_VALUE = 255
NON_EDGE_VALUE = 0


# =============================================================================
# Gradient Direction Buckets
# =============================================================================

# Bucket codes are the nominal angle of the neighbour axis in degrees
DIRECTION_HORIZONTAL = 0    # Compare left and right neighbours
DIRECTION_DIAG_UP = 45      # Compare upper-right and lower-left neighbours
DIRECTION_VERTICAL = 90     # Compare top and bottom neighbours
DIRECTION_DIAG_DOWN = 135   # Compare upper-left and lower-right neighbours

DIRECTION_BUCKETS = [
    DIRECTION_HORIZONTAL,
    DIRECTION_DIAG_UP,
    DIRECTION_VERTICAL,
    DIRECTION_DIAG_DOWN,
]

# Bucket boundaries (degrees), inclusive on both adjoining ranges
BUCKET_BOUNDARY_1 = 22.5
BUCKET_BOUNDARY_2 = 67.5
BUCKET_BOUNDARY_3 = 112.5
BUCKET_BOUNDARY_4 = 157.5
BUCKET_BOUNDARY_5 = 202.5
BUCKET_BOUNDARY_6 = 247.5
BUCKET_BOUNDARY_7 = 292.5
BUCKET_BOUNDARY_8 = 337.5


# =============================================================================
# Non-Maximum Suppression Constants
# =============================================================================

# "reference" zeroes the pixel up-left of the examined one (the classic
# in-place raster result), "canonical" zeroes the examined pixel itself
SUPPRESSION_REFERENCE = "reference"
SUPPRESSION_CANONICAL = "canonical"
VALID_SUPPRESSION_MODES = [SUPPRESSION_REFERENCE, SUPPRESSION_CANONICAL]
DEFAULT_SUPPRESSION_MODE = SUPPRESSION_REFERENCE


# =============================================================================
# Hysteresis Threshold Constants
# =============================================================================

# High threshold = mean + sensitivity * std_dev
#   1 std dev: ~68% of magnitudes fall below
#   2 std dev: ~95% of magnitudes fall below
#   3 std dev: ~99.7% of magnitudes fall below
DEFAULT_SENSITIVITY = 1

# Low threshold = high threshold * ratio (suggested range 0.2 - 0.4)
DEFAULT_THRESHOLD_RATIO = 0.2
MIN_THRESHOLD_RATIO = 0.0
MAX_THRESHOLD_RATIO = 1.0


# =============================================================================
# Grid Size Constants
# =============================================================================

# Rows/columns lost on each side by suppression + hysteresis
OUTPUT_BORDER_PX = 1

# Minimum grid side = 2 * radius + MIN_SIZE_MARGIN
MIN_SIZE_MARGIN = 5


# =============================================================================
# File I/O Constants
# =============================================================================

OUTPUT_SUFFIX = "_canny"
DEFAULT_OUTPUT_EXT = "png"
SUPPORTED_EXTENSIONS = [".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff"]
