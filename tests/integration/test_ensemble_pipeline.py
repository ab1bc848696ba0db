"""
Integration tests for the gmodal pipeline.

Tests that integrators, offsets, the time axis and windowed queries agree
with each other on a realistic truncated ensemble.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from gmodal import (
    BoxLimit,
    GMAMode,
    SamplingOptions,
    ellipse,
    linspace,
    summarize_ensemble,
    truncated_trajectories,
)


def saddle(t, pt):
    return [pt[0], -pt[1]]


@pytest.mark.integration
class TestSaddleEnsemble:
    """Backward saddle flow cut off by a box."""

    @pytest.fixture
    def curve(self):
        return linspace(0.0, 2 * math.pi, 24, ellipse(1.0, 1.0, 0.0))

    @pytest.fixture
    def mode(self, curve):
        return GMAMode(saddle, curve, t0=0.0, dt=-0.05, steps=100, limit=BoxLimit(3.0))

    def test_truncation_pattern(self, mode):
        """Test points starting on the stable axis survive, others are cut."""
        truncated = truncated_trajectories(mode)

        assert 0 not in truncated
        assert 23 not in truncated
        assert 6 in truncated
        assert summarize_ensemble(mode)['num_truncated'] == len(truncated)

    def test_offsets_match_lengths(self, mode):
        """Test backward offsets equal the number of missing points."""
        for trajectory in mode.trajectories:
            assert len(trajectory) <= mode.total_steps + 1
            assert trajectory.offset == mode.total_steps + 1 - len(trajectory)

    def test_every_point_inside_box(self, mode):
        """Test the limit held for every stored point."""
        for trajectory in mode.trajectories:
            _, points = trajectory.as_arrays()
            assert np.all(np.abs(points) <= 3.0)

    def test_trajectories_end_at_initial_curve(self, mode, curve):
        """Test each trajectory's last entry is its initial condition."""
        for trajectory, pt in zip(mode.trajectories, curve):
            assert trajectory.times[-1] == 0.0
            np.testing.assert_array_equal(trajectory.points[-1], pt)

    def test_contours_time_aligned(self, mode):
        """Test every contour shares one time value, matching the axis."""
        for step in range(0, mode.total_steps + 1, 5):
            contour = mode.get_contour(step)
            assert len(set(contour.parameter)) <= 1
            if contour.parameter:
                assert contour.parameter[0] == mode.get_time_for_step(step)

    def test_step_time_round_trip(self, mode):
        """Test time lookups invert step lookups on the axis."""
        assert len(mode.time_axis) == mode.total_steps + 1
        for step in range(mode.total_steps + 1):
            assert mode.get_step_for_time(mode.get_time_for_step(step)) == step

    def test_solution_matches_contour(self, mode):
        """Test a one-step solution window equals the contour entry."""
        step = 80
        contour = mode.get_contour(step)
        values = []
        for index in range(len(mode)):
            solution = mode.get_solution(index, step, step)
            if solution is not None:
                assert len(solution) == 1
                values.append(solution.points[0])

        assert len(values) == len(contour)
        np.testing.assert_array_equal(np.vstack(values), np.vstack(contour.points))

    def test_batches(self, mode):
        """Test contour and solution batches over the truncated ensemble."""
        contours = mode.get_contours(SamplingOptions(sample_count=5, offset=50))
        solutions = mode.get_solutions(SamplingOptions(sample_count=6))

        assert [c.step for c in contours] == [50, 60, 70, 80, 90]
        assert [len(c) for c in contours] == sorted(len(c) for c in contours)
        for solution in solutions:
            assert solution.first_step == 50
            assert solution.last_step == 90
            assert 1 <= len(solution) <= 41

    def test_forward_extension_keeps_offsets(self, mode):
        """Test extending forward only grows the unfinished trajectories."""
        before = [t.offset for t in mode.trajectories]
        mode.solve(20, 0.05)

        assert [t.offset for t in mode.trajectories] == before
        assert mode.total_steps == 120
        assert mode.t_max == pytest.approx(1.0)
