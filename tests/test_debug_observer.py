"""Tests for canny_edges.debug_observer module."""

from pathlib import Path

import cv2
import numpy as np

from canny_edges.canny_constants import DIRECTION_HORIZONTAL, DIRECTION_VERTICAL
from canny_edges.debug_observer import DebugObserver, draw_direction_buckets, draw_edge_overlay
from canny_edges.pipeline import run_canny
from canny_edges.viz_constants import Color, DirectionColor


class TestDebugObserver:
    """Tests for DebugObserver class."""

    def test_repeated_stage_names_get_counter(self, tmp_path: Path) -> None:
        """Test the second save of a stage does not overwrite the first."""
        observer = DebugObserver(str(tmp_path / "debug"))
        image = np.zeros((4, 4), dtype=np.uint8)

        first = observer.save_stage("stage", image)
        second = observer.save_stage("stage", image)

        assert first.name == "stage.png"
        assert second.name == "stage_1.png"
        assert first.exists() and second.exists()

    def test_empty_image_is_skipped(self, tmp_path: Path) -> None:
        """Test empty images are not written."""
        observer = DebugObserver(str(tmp_path))
        assert observer.save_stage("empty", np.zeros((0, 0), dtype=np.uint8)) is None

    def test_save_canny_stages(self, tmp_path: Path, step_grid: np.ndarray) -> None:
        """Test all seven stage images are written."""
        observer = DebugObserver(str(tmp_path))
        observer.save_canny_stages("step", step_grid, run_canny(step_grid))

        names = sorted(p.name for p in tmp_path.iterdir())
        assert names == [
            "step_01_blurred.png",
            "step_02_gradient_x.png",
            "step_03_gradient_y.png",
            "step_04_magnitude.png",
            "step_05_direction.png",
            "step_06_suppressed.png",
            "step_07_edges.png",
        ]

    def test_large_images_are_downsampled(self, tmp_path: Path) -> None:
        """Test stage images are capped at the maximum dimension."""
        observer = DebugObserver(str(tmp_path))
        path = observer.save_stage("big", np.zeros((10, 2400), dtype=np.uint8))
        saved = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        assert saved.shape[1] == 1920


class TestDrawing:
    """Tests for drawing helpers."""

    def test_edge_overlay_is_offset_by_border(self) -> None:
        """Test edge (0, 0) lands on source pixel (1, 1)."""
        gray = np.zeros((5, 5), dtype=np.uint8)
        edges = np.zeros((3, 3), dtype=np.uint8)
        edges[0, 0] = 255

        vis = draw_edge_overlay(gray, edges)

        assert vis.shape == (5, 5, 3)
        assert tuple(vis[1, 1]) == Color.EDGE
        assert tuple(vis[0, 0]) == Color.BLACK

    def test_direction_colors_scale_with_magnitude(self) -> None:
        """Test bucket colors at full strength and black at zero magnitude."""
        direction = np.array([[DIRECTION_HORIZONTAL, DIRECTION_VERTICAL, DIRECTION_VERTICAL]])
        magnitude = np.array([[10.0, 10.0, 0.0]])

        vis = draw_direction_buckets(direction, magnitude)

        assert tuple(vis[0, 0]) == DirectionColor.HORIZONTAL
        assert tuple(vis[0, 1]) == DirectionColor.VERTICAL
        assert tuple(vis[0, 2]) == Color.BLACK
