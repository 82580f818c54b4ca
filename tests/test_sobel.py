"""Tests for canny_edges.sobel module."""

import numpy as np

from canny_edges.sobel import SOBEL_X, SOBEL_Y, gradients


class TestSobelKernels:
    """Tests for the fixed Sobel kernels."""

    def test_kernels_are_transposes(self) -> None:
        """Test the vertical kernel is the transposed horizontal kernel."""
        np.testing.assert_array_equal(SOBEL_Y, SOBEL_X.T)

    def test_kernels_sum_to_zero(self) -> None:
        """Test flat regions give zero response."""
        assert SOBEL_X.sum() == 0
        assert SOBEL_Y.sum() == 0


class TestGradients:
    """Tests for gradients function."""

    def test_flat_grid_has_zero_gradient(self, flat_grid: np.ndarray) -> None:
        """Test zero gradients everywhere, including borders."""
        gx, gy = gradients(flat_grid.astype(np.int32))
        assert gx.shape == gy.shape == flat_grid.shape
        assert not gx.any()
        assert not gy.any()

    def test_horizontal_ramp(self) -> None:
        """Test a left-to-right ramp gives positive gx and zero gy."""
        grid = np.tile(np.arange(10, dtype=np.int32) * 10, (8, 1))
        gx, gy = gradients(grid)

        assert gx.dtype == np.int32
        assert np.all(gx[:, 1:-1] == 80)
        # Replicated border: neighbours 0 and 10 around column 0
        assert np.all(gx[:, 0] == 40)
        assert np.all(gx[:, -1] == 40)
        assert not gy.any()

    def test_vertical_ramp(self) -> None:
        """Test a top-to-bottom ramp gives positive gy and zero gx."""
        grid = np.tile(np.arange(10, dtype=np.int32)[:, None] * 10, (1, 8))
        gx, gy = gradients(grid)

        assert np.all(gy[1:-1, :] == 80)
        assert np.all(gy[0, :] == 40)
        assert not gx.any()

    def test_dark_to_bright_leftward_is_negative(self) -> None:
        """Test sign convention for a decreasing ramp."""
        grid = np.tile(np.arange(9, -1, -1, dtype=np.int32) * 10, (5, 1))
        gx, _ = gradients(grid)
        assert np.all(gx[:, 1:-1] == -80)

    def test_single_bright_pixel(self) -> None:
        """Test the response pattern around an isolated pixel."""
        grid = np.zeros((5, 5), dtype=np.int32)
        grid[2, 2] = 1
        gx, gy = gradients(grid)

        expected_gx = np.zeros((5, 5), dtype=np.int32)
        expected_gx[1:4, 1] = [1, 2, 1]
        expected_gx[1:4, 3] = [-1, -2, -1]
        np.testing.assert_array_equal(gx, expected_gx)
        np.testing.assert_array_equal(gy, expected_gx.T)
