"""
Debug visualization observer for the Canny pipeline.

This module provides a non-intrusive way to capture and visualize intermediate
processing stages without polluting the pipeline stages themselves: the
pipeline returns its intermediate grids in a CannyResult and the observer
turns them into images.
"""

from pathlib import Path
from typing import Dict, Optional

import cv2
import numpy as np

from canny_edges.canny_constants import (
    DIRECTION_HORIZONTAL,
    DIRECTION_DIAG_UP,
    DIRECTION_VERTICAL,
    DIRECTION_DIAG_DOWN,
    OUTPUT_BORDER_PX,
)
from canny_edges.pipeline import CannyResult
from canny_edges.viz_constants import (
    FONT_FACE, FontScale, FontThickness, Color, DirectionColor, Layout
)


class DebugObserver:
    """
    Observer for capturing and saving intermediate processing stages.

    Stage images are written as PNG files into a debug directory. Saving the
    same stage name twice appends a counter (`name_1.png`, `name_2.png`, ...).
    """

    def __init__(self, debug_dir: str):
        """
        Initialize debug observer.

        Args:
            debug_dir: Directory where debug images will be saved
        """
        self.debug_dir = Path(debug_dir)
        self.debug_dir.mkdir(parents=True, exist_ok=True)
        self._stage_counter: Dict[str, int] = {}

    def save_stage(self, name: str, image: np.ndarray) -> Optional[Path]:
        """
        Save an intermediate processing stage image.

        Args:
            name: Stage name (used as filename prefix)
            image: Image to save

        Returns:
            Path written, or None for an empty image
        """
        if image is None or image.size == 0:
            return None

        if name in self._stage_counter:
            self._stage_counter[name] += 1
            filename = f"{name}_{self._stage_counter[name]}.png"
        else:
            self._stage_counter[name] = 0
            filename = f"{name}.png"

        return self._save_with_compression(image, filename)

    def save_canny_stages(self, prefix: str, gray: np.ndarray, result: CannyResult) -> None:
        """
        Save every stage of one pipeline run.

        Args:
            prefix: Filename prefix, usually the input image stem
            gray: The intensity grid the pipeline ran on
            result: CannyResult of that run
        """
        field = result.field

        self.save_stage(f"{prefix}_01_blurred", _caption(
            _to_bgr(result.blurred), "Gaussian blur"))
        self.save_stage(f"{prefix}_02_gradient_x", _caption(
            _to_bgr(np.abs(result.gx)), "|Gx|"))
        self.save_stage(f"{prefix}_03_gradient_y", _caption(
            _to_bgr(np.abs(result.gy)), "|Gy|"))
        self.save_stage(f"{prefix}_04_magnitude", _caption(
            _to_bgr(_normalize(field.magnitude)),
            f"Magnitude mean={field.mean} std={field.std_dev}"))
        self.save_stage(f"{prefix}_05_direction", _caption(
            draw_direction_buckets(field.direction, field.magnitude), "Direction"))
        self.save_stage(f"{prefix}_06_suppressed", _caption(
            _to_bgr(_normalize(result.suppressed)), "Non-max suppression"))
        self.save_stage(f"{prefix}_07_edges", _caption(
            draw_edge_overlay(gray, result.edges),
            f"Edges: {result.edge_pixels:,} px "
            f"(hi={result.thresholds.high:.1f}, lo={result.thresholds.low:.1f})"))

    def _save_with_compression(self, image: np.ndarray, filename: str) -> Path:
        """
        Save image with compression and optional downsampling.

        Args:
            image: Image to save
            filename: Output filename
        """
        output_path = self.debug_dir / filename

        # Downsample if too large
        h, w = image.shape[:2]
        max_dim = Layout.MAX_DIMENSION
        if max(h, w) > max_dim:
            scale = max_dim / max(h, w)
            new_w = int(w * scale)
            new_h = int(h * scale)
            image = cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_AREA)

        cv2.imwrite(str(output_path), image, [cv2.IMWRITE_PNG_COMPRESSION, Layout.PNG_COMPRESSION])
        return output_path


# =============================================================================
# Drawing Functions for Debug Visualization
# =============================================================================

def _normalize(grid: np.ndarray) -> np.ndarray:
    """Min-max scale a grid to 0-255 uint8 (flat grids map to 0)."""
    grid = np.asarray(grid, dtype=np.float64)
    return cv2.normalize(grid, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)


def _to_bgr(grid: np.ndarray) -> np.ndarray:
    gray = np.clip(grid, 0, 255).astype(np.uint8)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


def _caption(vis: np.ndarray, text: str) -> np.ndarray:
    """Draw outlined caption text in the top-left corner."""
    origin = (Layout.CAPTION_X, Layout.CAPTION_Y)
    cv2.putText(vis, text, origin, FONT_FACE, FontScale.CAPTION,
                Color.BLACK, FontThickness.CAPTION_OUTLINE, cv2.LINE_AA)
    cv2.putText(vis, text, origin, FONT_FACE, FontScale.CAPTION,
                Color.TEXT_PRIMARY, FontThickness.CAPTION, cv2.LINE_AA)
    return vis


def draw_direction_buckets(direction: np.ndarray, magnitude: np.ndarray) -> np.ndarray:
    """
    Color-code direction buckets, dimmed by normalized gradient magnitude.

    Pixels with zero magnitude stay black.
    """
    h, w = direction.shape
    vis = np.zeros((h, w, 3), dtype=np.float64)

    for code, color in (
        (DIRECTION_HORIZONTAL, DirectionColor.HORIZONTAL),
        (DIRECTION_DIAG_UP, DirectionColor.DIAG_UP),
        (DIRECTION_VERTICAL, DirectionColor.VERTICAL),
        (DIRECTION_DIAG_DOWN, DirectionColor.DIAG_DOWN),
    ):
        vis[direction == code] = color

    strength = _normalize(magnitude).astype(np.float64) / 255.0
    return (vis * strength[:, :, None]).astype(np.uint8)


def draw_edge_overlay(gray: np.ndarray, edges: np.ndarray) -> np.ndarray:
    """Overlay an (H-2) x (W-2) edge map on its H x W source image."""
    vis = _to_bgr(gray)
    b = OUTPUT_BORDER_PX
    interior = vis[b:-b, b:-b]
    interior[edges > 0] = Color.EDGE
    return vis
