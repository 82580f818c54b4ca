"""Tests for canny_edges.hysteresis module."""

import numpy as np
import pytest

from canny_edges.gradient_field import GradientField
from canny_edges.hysteresis import Thresholds, apply_hysteresis, classify, compute_thresholds
from canny_edges.validation import InputValidationError


class TestComputeThresholds:
    """Tests for compute_thresholds function."""

    def test_formula(self) -> None:
        """Test high = mean + k * std and low = high * ratio."""
        thresholds = compute_thresholds(mean=10, std_dev=5, sensitivity=2, ratio=0.5)
        assert thresholds.high == 20.0
        assert thresholds.low == 10.0

    @pytest.mark.parametrize("ratio", [0.0, 0.2, 0.4, 0.75, 1.0])
    @pytest.mark.parametrize("sensitivity", [1, 2, 3])
    def test_low_never_exceeds_high(self, sensitivity: int, ratio: float) -> None:
        """Test low <= high across the valid parameter range."""
        thresholds = compute_thresholds(37, 21, sensitivity, ratio)
        assert thresholds.low <= thresholds.high

    @pytest.mark.parametrize("ratio", [1.5, -0.1, float("nan")])
    def test_invalid_ratio_raises(self, ratio: float) -> None:
        """Test ratio must lie in [0, 1]."""
        with pytest.raises(InputValidationError, match="ratio"):
            compute_thresholds(10, 5, 1, ratio)

    @pytest.mark.parametrize("sensitivity", [0, -1, 1.5])
    def test_invalid_sensitivity_raises(self, sensitivity) -> None:
        """Test sensitivity must be a positive integer."""
        with pytest.raises(InputValidationError, match="Sensitivity"):
            compute_thresholds(10, 5, sensitivity, 0.5)


class TestApplyHysteresis:
    """Tests for apply_hysteresis function."""

    @pytest.fixture
    def thresholds(self) -> Thresholds:
        return Thresholds(high=10.0, low=4.0)

    def test_output_shape_trims_one_pixel_per_side(self, thresholds: Thresholds) -> None:
        """Test an H x W grid gives (H-2) x (W-2)."""
        edges = apply_hysteresis(np.zeros((7, 9)), thresholds)
        assert edges.shape == (5, 7)
        assert edges.dtype == np.uint8

    def test_strong_and_rejected_pixels(self, thresholds: Thresholds) -> None:
        """Test definite edges and definite non-edges."""
        magnitude = np.zeros((5, 5))
        magnitude[1, 1] = 10.0   # exactly high -> edge
        magnitude[3, 3] = 3.9    # below low -> rejected
        edges = apply_hysteresis(magnitude, thresholds)
        assert edges[0, 0] == 255
        assert edges[2, 2] == 0

    def test_weak_pixel_next_to_strong_is_linked(self, thresholds: Thresholds) -> None:
        """Test a weak pixel inside the 3x3 window of a strong pixel becomes an edge."""
        magnitude = np.zeros((7, 7))
        magnitude[3, 3] = 10.0   # strong
        magnitude[3, 4] = 6.0    # weak, adjacent
        magnitude[1, 1] = 6.0    # weak, two cells away from the strong pixel

        edges = apply_hysteresis(magnitude, thresholds)

        assert edges[2, 2] == 255
        assert edges[2, 3] == 255
        assert edges[0, 0] == 0
        assert np.count_nonzero(edges) == 2

    def test_weak_pixel_at_low_threshold_is_candidate(self, thresholds: Thresholds) -> None:
        """Test magnitude equal to low is a weak candidate, not rejected."""
        magnitude = np.zeros((5, 5))
        magnitude[2, 2] = 10.0
        magnitude[1, 1] = 4.0
        edges = apply_hysteresis(magnitude, thresholds)
        assert edges[0, 0] == 255

    def test_no_transitive_linking(self, thresholds: Thresholds) -> None:
        """Test a chain of weak pixels is only linked one step from the strong pixel."""
        magnitude = np.zeros((7, 7))
        magnitude[3, 2] = 10.0
        magnitude[3, 3] = 6.0
        magnitude[3, 4] = 6.0
        magnitude[3, 5] = 6.0

        edges = apply_hysteresis(magnitude, thresholds)

        np.testing.assert_array_equal(edges[2], [0, 255, 255, 0, 0])

    def test_strong_pixel_in_border_links_weak_neighbour(self, thresholds: Thresholds) -> None:
        """Test the 3x3 window reaches into the unclassified border."""
        magnitude = np.zeros((5, 5))
        magnitude[0, 0] = 12.0
        magnitude[1, 1] = 6.0
        edges = apply_hysteresis(magnitude, thresholds)
        assert edges[0, 0] == 255

    def test_zero_thresholds_give_no_edges(self) -> None:
        """Test a flat field (high = low = 0) yields an empty edge map."""
        edges = apply_hysteresis(np.zeros((6, 6)), Thresholds(high=0.0, low=0.0))
        assert not edges.any()

    def test_zero_thresholds_skip_zero_magnitude_neighbours(self) -> None:
        """Test zero pixels around a nonzero one stay non-edges when high = low = 0."""
        magnitude = np.zeros((7, 7))
        magnitude[3, 3] = 2.0
        magnitude[3, 4] = 1.0

        edges = apply_hysteresis(magnitude, Thresholds(high=0.0, low=0.0))

        assert edges[2, 2] == 255
        assert edges[2, 3] == 255
        assert np.count_nonzero(edges) == 2

    def test_values_are_binary(self, thresholds: Thresholds) -> None:
        """Test output only holds 0 and 255."""
        rng = np.random.default_rng(3)
        edges = apply_hysteresis(rng.uniform(0, 15, size=(20, 20)), thresholds)
        assert set(np.unique(edges)) <= {0, 255}


class TestClassify:
    """Tests for classify function."""

    def test_uses_field_statistics(self) -> None:
        """Test thresholds come from the field's mean and std dev."""
        thinned = np.zeros((5, 5))
        thinned[2, 2] = 8.0
        thinned[2, 3] = 5.0
        field = GradientField(
            magnitude=thinned.copy(),
            direction=np.zeros((5, 5), dtype=np.int32),
            mean=2,
            std_dev=3,
        )

        # sensitivity 2: high = 8, low = 4
        edges = classify(thinned, field, sensitivity=2, ratio=0.5)
        assert edges[1, 1] == 255
        assert edges[1, 2] == 255

        # sensitivity 3: high = 11, nothing is strong
        edges = classify(thinned, field, sensitivity=3, ratio=0.5)
        assert not edges.any()
