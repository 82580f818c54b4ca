"""
Visualization constants for debug stage dumps.

Example usage:
    from canny_edges.viz_constants import Color, FontScale, FontThickness, FONT_FACE

    cv2.putText(img, "Title", (10, 20), FONT_FACE,
                FontScale.CAPTION, Color.WHITE,
                FontThickness.CAPTION_OUTLINE, cv2.LINE_AA)
"""

import cv2

# ============================================================================
# FONT SETTINGS
# ============================================================================

FONT_FACE = cv2.FONT_HERSHEY_SIMPLEX


class FontScale:
    """Font scales; stage images are usually small, so these stay modest."""
    CAPTION = 0.5


class FontThickness:
    """Stroke widths. Draw the OUTLINE variant first for outlined text."""
    CAPTION = 1
    CAPTION_OUTLINE = 3


# ============================================================================
# COLORS (BGR)
# ============================================================================

class Color:
    """
    Colors in OpenCV's BGR order.

    Example: (255, 255, 255) = White in BGR
    """
    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    RED = (0, 0, 255)
    GREEN = (0, 255, 0)
    BLUE = (255, 0, 0)
    CYAN = (255, 255, 0)
    YELLOW = (0, 255, 255)
    MAGENTA = (255, 0, 255)

    # Semantic colors
    EDGE = CYAN
    TEXT_PRIMARY = WHITE


class DirectionColor:
    """Color per gradient direction bucket in the direction stage image."""
    HORIZONTAL = Color.RED
    DIAG_UP = Color.GREEN
    VERTICAL = Color.BLUE
    DIAG_DOWN = Color.YELLOW


# ============================================================================
# LAYOUT
# ============================================================================

class Layout:
    """Text placement for captions."""
    CAPTION_X = 5
    CAPTION_Y = 15
    MAX_DIMENSION = 1920   # Larger stage images are downsampled before saving
    PNG_COMPRESSION = 6
