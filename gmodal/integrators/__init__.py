"""
Single-trajectory integration.

Fixed-step RK4 with optional domain limiting.
"""

from .base import AbstractIntegrator, IntegratorState
from .rk4 import RK4Integrator, rk4_step

__all__ = [
    'AbstractIntegrator',
    'IntegratorState',
    'RK4Integrator',
    'rk4_step',
]
