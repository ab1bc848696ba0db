"""
Classic fourth-order Runge-Kutta integration.
"""

from __future__ import annotations

import numpy as np

from gmodal.common import VectorField, add, scale

from .base import AbstractIntegrator


def rk4_step(field: VectorField, t: float, pt: np.ndarray, dt: float) -> np.ndarray:
    """
    Take one fixed RK4 step.

    k1 = dt*V(t, pt)
    k2 = dt*V(t + dt/2, pt + k1/2)
    k3 = dt*V(t + dt/2, pt + k2/2)
    k4 = dt*V(t + dt, pt + k3)
    pt_next = pt + (k1 + 2*k2 + 2*k3 + k4)/6

    Args:
        field: Vector field V(t, pt)
        t: Current time
        pt: Current point
        dt: Step size

    Returns:
        Point at t + dt

    Raises:
        DimensionMismatchError: If the field returns a vector of the wrong length
    """
    half = 0.5 * dt
    k1 = scale(dt, field(t, pt))
    k2 = scale(dt, field(t + half, add(pt, scale(0.5, k1))))
    k3 = scale(dt, field(t + half, add(pt, scale(0.5, k2))))
    k4 = scale(dt, field(t + dt, add(pt, k3)))
    return add(pt, scale(1.0 / 6.0, add(k1, scale(2.0, add(k2, k3)), k4)))


class RK4Integrator(AbstractIntegrator):
    """
    Fixed-step RK4 integrator for a single trajectory.

    Example:
        >>> ode = RK4Integrator(lambda t, pt: [pt[1], -pt[0]])
        >>> times, points = ode.solve(100, 0.01, 0.0, [1.0, 0.0])
    """

    def advance(self, t: float, pt: np.ndarray, dt: float) -> np.ndarray:
        return rk4_step(self.field, t, pt, dt)
