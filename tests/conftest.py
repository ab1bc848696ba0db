"""
Pytest configuration and shared fixtures for gmodal tests.

Provides vector fields with known behaviour, initial curves and common
test utilities.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import List

import numpy as np
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from gmodal import GMAMode, ellipse, linspace

# =============================================================================
# Vector Field Fixtures
# =============================================================================


@pytest.fixture
def harmonic_field():
    """Simple harmonic oscillator: x' = y, y' = -x."""

    def harmonic(t: float, pt: np.ndarray) -> List[float]:
        return [pt[1], -pt[0]]

    return harmonic


@pytest.fixture
def unit_drift_field():
    """1-D field dx/dt = 1; RK4 is exact, so x moves by exactly dt per step."""

    def drift(t: float, pt: np.ndarray) -> List[float]:
        return [1.0]

    return drift


@pytest.fixture
def blowup_field():
    """dx/dt = x^2, which leaves the floating point range in finite time."""

    def blowup(t: float, pt: np.ndarray) -> List[float]:
        return [pt[0] * pt[0]]

    return blowup


@pytest.fixture
def nonnegative_limit():
    """Accept points whose first coordinate is >= 0."""

    def limit(pt: np.ndarray) -> bool:
        return pt[0] >= 0.0

    return limit


# =============================================================================
# Curve Fixtures
# =============================================================================


@pytest.fixture
def unit_circle() -> List[np.ndarray]:
    """Twelve points on the unit circle."""
    return linspace(0.0, 2 * math.pi, 12, ellipse(1.0, 1.0, 0.0))


@pytest.fixture
def staggered_line() -> List[List[float]]:
    """1-D initial points at different distances from the x >= 0 boundary."""
    return [[2.0], [5.0], [10.0]]


# =============================================================================
# Ensemble Fixtures
# =============================================================================


@pytest.fixture
def truncated_mode(unit_drift_field, staggered_line, nonnegative_limit) -> GMAMode:
    """
    Backward ensemble (6 steps of dt=-1) where the limit cuts trajectories.

    Lengths are 3, 6 and 7 points, so offsets are 4, 1 and 0.
    """
    return GMAMode(
        unit_drift_field,
        staggered_line,
        t0=0.0,
        dt=-1.0,
        steps=6,
        limit=nonnegative_limit,
    )


@pytest.fixture
def circle_mode(harmonic_field, unit_circle) -> GMAMode:
    """Forward harmonic ensemble with 60 steps."""
    return GMAMode(harmonic_field, unit_circle, t0=0.0, dt=0.05, steps=60)


# =============================================================================
# Numpy Test Utilities
# =============================================================================


@pytest.fixture
def assert_array_close():
    """Fixture for array comparison with tolerance."""

    def _assert_close(actual, expected, rtol=1e-5, atol=1e-8):
        np.testing.assert_allclose(actual, expected, rtol=rtol, atol=atol)

    return _assert_close


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "requires_viz: marks tests that need matplotlib")
