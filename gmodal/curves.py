"""
Initial-curve helpers.

Parametrised closed curves are sampled with linspace(0, 2*pi, n, curve).
"""

from __future__ import annotations

import math
from typing import Callable, List, Sequence

import numpy as np

from gmodal.common import as_vector, scale


def ellipse(a: float, eccentricity: float, angle: float) -> Callable[[float], np.ndarray]:
    """
    Rotated ellipse parametrisation.

    Args:
        a: Semi-axis along x before rotation
        eccentricity: Ratio of the y semi-axis to a
        angle: Rotation angle in radians (clockwise)

    Returns:
        Function t -> point on the ellipse
    """
    c = math.cos(angle)
    s = math.sin(angle)

    def point(t: float) -> np.ndarray:
        x = a * math.cos(t)
        y = a * eccentricity * math.sin(t)
        return as_vector([x * c + y * s, -x * s + y * c])

    return point


def scaled_curve(points: Sequence, factor: float) -> List[np.ndarray]:
    """Every point of a curve multiplied by factor."""
    return [scale(factor, pt) for pt in points]
