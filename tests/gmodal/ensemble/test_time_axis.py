"""
Tests for the unified time axis.

Tests for gmodal/ensemble/time_axis.py
"""

from __future__ import annotations

import numpy as np
import pytest

from gmodal.ensemble import merge_time_axes, step_for_time, time_for_step


class TestMergeTimeAxes:
    """Test merge_time_axes."""

    def test_forward_different_lengths(self):
        """Test the longest forward series sets the axis end."""
        axis, start = merge_time_axes(
            [np.array([0.0, 1.0, 2.0]), np.array([0.0, 1.0, 2.0, 3.0, 4.0]), np.array([0.0])],
            [0, 0, 0],
        )

        np.testing.assert_array_equal(axis, [0.0, 1.0, 2.0, 3.0, 4.0])
        assert start == 0

    def test_backward_offsets(self):
        """Test series starting earlier on the grid extend the front."""
        axis, start = merge_time_axes(
            [
                np.array([-2.0, -1.0, 0.0]),
                np.array([-5.0, -4.0, -3.0, -2.0, -1.0, 0.0]),
                np.array([-6.0, -5.0, -4.0, -3.0, -2.0, -1.0, 0.0]),
            ],
            [4, 1, 0],
        )

        np.testing.assert_array_equal(axis, [-6.0, -5.0, -4.0, -3.0, -2.0, -1.0, 0.0])
        assert start == 0

    def test_gap_at_start(self):
        """Test axis start follows the smallest offset present."""
        axis, start = merge_time_axes(
            [np.array([3.0, 4.0]), np.array([2.0, 3.0, 4.0])], [3, 2]
        )

        np.testing.assert_array_equal(axis, [2.0, 3.0, 4.0])
        assert start == 2

    def test_skips_empty(self):
        """Test empty series contribute nothing."""
        axis, start = merge_time_axes([np.array([]), np.array([1.0, 2.0])], [0, 5])

        np.testing.assert_array_equal(axis, [1.0, 2.0])
        assert start == 5

    def test_all_empty(self):
        """Test no data gives an empty axis."""
        axis, start = merge_time_axes([], [])

        assert len(axis) == 0
        assert start == 0

    def test_length_mismatch(self):
        """Test series and offsets must pair up."""
        with pytest.raises(ValueError):
            merge_time_axes([np.array([0.0])], [0, 1])


class TestStepForTime:
    """Test step_for_time lookup."""

    @pytest.fixture
    def axis(self):
        return np.array([0.0, 0.5, 1.0, 1.5])

    def test_exact_match(self, axis):
        """Test exact times map to their index."""
        assert step_for_time(axis, 1.0) == 2

    def test_between_values(self, axis):
        """Test times between entries take the earlier step."""
        assert step_for_time(axis, 0.7) == 1

    def test_before_axis(self, axis):
        """Test times before the axis give -1."""
        assert step_for_time(axis, -0.1) == -1

    def test_after_axis(self, axis):
        """Test times after the axis give the last step."""
        assert step_for_time(axis, 10.0) == 3

    def test_start_shift(self, axis):
        """Test results are global steps."""
        assert step_for_time(axis, 1.0, start=4) == 6

    def test_empty_axis(self):
        """Test empty axis gives -1."""
        assert step_for_time(np.array([]), 0.0) == -1


class TestTimeForStep:
    """Test time_for_step lookup."""

    def test_inside(self):
        """Test steps on the axis."""
        assert time_for_step(np.array([1.0, 2.0]), 3, start=2) == 2.0

    @pytest.mark.parametrize("step", [1, 4])
    def test_outside(self, step):
        """Test steps off the axis give None."""
        assert time_for_step(np.array([1.0, 2.0]), step, start=2) is None
