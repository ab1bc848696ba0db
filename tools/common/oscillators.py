"""
Duffing and Van der Pol oscillator ensembles.

Ready-made vector fields and initial curves for the solve_modes tool.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from gmodal import (
    BoxLimit,
    GMAMode,
    RK4Integrator,
    SolveConfig,
    ellipse,
    linspace,
    scaled_curve,
)

# Point on the Van der Pol (c=0.2) limit cycle and the step count closing the loop
LIMIT_CYCLE_START = (2.0113107, 0.0509031224)
LIMIT_CYCLE_STEPS = 113
LIMIT_CYCLE_DT = 0.0673

# Small ellipse inside the limit cycle, integrated forward
INNER_RING = (0.1, 1.2, math.pi / 4.5)
INNER_RING_POINTS = 60


def duffing_field(eps: float, c: float):
    """Damped Duffing oscillator x'' + 2c x' + x + eps x^3 = 0."""

    def duffing(t: float, v: np.ndarray) -> List[float]:
        return [v[1], -2.0 * c * v[1] - v[0] - eps * v[0] ** 3]

    return duffing


def van_der_pol_field(c: float):
    """Van der Pol oscillator x'' - c (1 - x^2) x' + x = 0."""

    def van_der_pol(t: float, v: np.ndarray) -> List[float]:
        return [v[1], c * (1.0 - v[0] * v[0]) * v[1] - v[0]]

    return van_der_pol


@dataclass
class OscillatorModes:
    """Solved ensembles for one model plus reference curves for plotting."""

    name: str
    mode: GMAMode
    reference_curves: Dict[str, List[np.ndarray]] = field(default_factory=dict)
    extra_modes: Dict[str, GMAMode] = field(default_factory=dict)


def duffing_modes(
    config: Optional[SolveConfig] = None, curve_points: int = 60
) -> OscillatorModes:
    """
    Duffing ensemble started from a tilted ellipse, integrated backward.

    Args:
        config: Integration settings (default: 500 steps of dt=-0.05)
        curve_points: Number of points on the initial ellipse

    Returns:
        OscillatorModes with the solved ensemble
    """
    config = config or SolveConfig(steps=500, dt=-0.05, t0=0.0)
    curve = linspace(0.0, 2 * math.pi, curve_points, ellipse(0.5, 1.2, -math.pi / 4.5))
    mode = GMAMode.from_config(duffing_field(0.05, 0.2), curve, config)
    return OscillatorModes("duffing", mode, {"initial": curve})


def van_der_pol_limit_cycle(c: float = 0.2) -> List[np.ndarray]:
    """One loop of the Van der Pol limit cycle."""
    ode = RK4Integrator(van_der_pol_field(c))
    _, points = ode.solve(LIMIT_CYCLE_STEPS, LIMIT_CYCLE_DT, 1.0, LIMIT_CYCLE_START)
    return points


def van_der_pol_modes(
    config: Optional[SolveConfig] = None,
    curve_points: Optional[int] = None,
    bound: float = 50.0,
    inner_steps: Optional[int] = None,
) -> OscillatorModes:
    """
    Van der Pol ensembles on both sides of the limit cycle.

    The outer ring starts just outside the limit cycle and is integrated
    backward in time until points leave the box |x_i| <= bound. The inner
    ring starts on a small ellipse and is integrated forward, spiralling
    out towards the cycle.

    Args:
        config: Outer integration settings (default: 400 steps of dt=-0.05)
        curve_points: Points kept from the limit cycle (all when None)
        bound: Box limit on every coordinate
        inner_steps: Forward steps of the inner ring (default: config.steps)

    Returns:
        OscillatorModes with the outer ensemble as mode, the inner one under
        extra_modes["inner"], and the limit cycle
    """
    config = config or SolveConfig(steps=400, dt=-0.05, t0=0.0)
    limit_cycle = van_der_pol_limit_cycle()
    ring = limit_cycle
    if curve_points is not None and curve_points < len(limit_cycle):
        keep = np.linspace(0, len(limit_cycle) - 1, curve_points).astype(int)
        ring = [limit_cycle[i] for i in keep]
    ring = scaled_curve(ring, 1.01)
    mode = GMAMode.from_config(
        van_der_pol_field(0.2), ring, config, limit=BoxLimit(bound)
    )

    inner_config = SolveConfig(
        steps=inner_steps or config.steps, dt=abs(config.dt), t0=config.t0
    )
    inner_ring = linspace(0.0, 2 * math.pi, INNER_RING_POINTS, ellipse(*INNER_RING))
    inner = GMAMode.from_config(van_der_pol_field(0.2), inner_ring, inner_config)

    return OscillatorModes(
        "vanderpol",
        mode,
        {"limit_cycle": limit_cycle},
        extra_modes={"inner": inner},
    )


MODELS = {
    "duffing": duffing_modes,
    "vanderpol": van_der_pol_modes,
}


def build_modes(
    name: str, config: Optional[SolveConfig] = None, curve_points: int = 60
) -> OscillatorModes:
    """Build the named model's ensemble."""
    if name not in MODELS:
        raise ValueError(f"Unknown model: {name} (choose from {sorted(MODELS)})")
    return MODELS[name](config, curve_points)
