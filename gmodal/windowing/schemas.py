"""
Configuration and result records for ensemble queries.

- SolveConfig: integration settings for building an ensemble
- SamplingOptions: how many steps to sample, with what spacing and offset
- Contour: cross-section of every trajectory at one step
- Solution: one trajectory over a window of steps
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from gmodal.common import SchemaClass


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass
class SolveConfig(SchemaClass):
    """Integration settings for an ensemble."""

    steps: int = 100
    dt: float = 0.05
    t0: float = 0.0

    def __post_init__(self):
        super().__post_init__()
        if not _is_int(self.steps) or self.steps < 1:
            raise ValueError(f"steps must be a positive integer, got {self.steps!r}")
        if self.dt == 0 or not math.isfinite(self.dt):
            raise ValueError(f"dt must be finite and non-zero, got {self.dt!r}")
        if not math.isfinite(self.t0):
            raise ValueError(f"t0 must be finite, got {self.t0!r}")


@dataclass
class SamplingOptions(SchemaClass):
    """
    Step-sampling policy for contour and solution batches.

    Attributes:
        sample_count: Number of samples to take
        offset: First sampled index
        total_steps: Range being sampled (None means the ensemble's total)
    """

    sample_count: int = 6
    offset: int = 0
    total_steps: Optional[int] = None

    def __post_init__(self):
        super().__post_init__()
        if not _is_int(self.sample_count) or self.sample_count < 1:
            raise ValueError(
                f"sample_count must be a positive integer, got {self.sample_count!r}"
            )
        if not _is_int(self.offset) or self.offset < 0:
            raise ValueError(f"offset must be a non-negative integer, got {self.offset!r}")
        if self.total_steps is not None and (
            not _is_int(self.total_steps) or self.total_steps < 0
        ):
            raise ValueError(
                f"total_steps must be a non-negative integer, got {self.total_steps!r}"
            )

    def resolve(self, total_steps: int) -> SamplingOptions:
        """Copy with total_steps filled in when it was left unset."""
        if self.total_steps is not None:
            return replace(self)
        return replace(self, total_steps=total_steps)

    @property
    def stride(self) -> int:
        """Spacing between samples; < 1 means nothing can be sampled."""
        if self.total_steps is None:
            raise ValueError("stride needs total_steps; call resolve() first")
        return (self.total_steps - self.offset) // self.sample_count


def _points_to_lists(points: List[np.ndarray]) -> List[List[float]]:
    return [np.asarray(p).tolist() for p in points]


def _stack(parameter: List[float], points: List[np.ndarray]) -> Tuple[np.ndarray, np.ndarray]:
    if not points:
        return np.array([]), np.empty((0, 0))
    return np.array(parameter, dtype=float), np.vstack(points)


@dataclass
class Contour:
    """
    Snapshot of the ensemble at one step.

    Trajectories not present at the step contribute nothing, so
    len(contour) can be smaller than the number of trajectories.

    Attributes:
        step: Global step index
        parameter: Time value of each contributing trajectory
        points: Point of each contributing trajectory
    """

    step: int
    parameter: List[float] = field(default_factory=list)
    points: List[np.ndarray] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def is_empty(self) -> bool:
        return len(self.points) == 0

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        return _stack(self.parameter, self.points)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": int(self.step),
            "parameter": [float(t) for t in self.parameter],
            "points": _points_to_lists(self.points),
        }


@dataclass
class Solution:
    """
    One trajectory restricted to an inclusive window of global steps.

    Attributes:
        index: Trajectory index in the ensemble
        first_step: First global step of the requested window
        last_step: Last global step of the requested window
        parameter: Time values inside the window
        points: Points inside the window
    """

    index: int
    first_step: int
    last_step: int
    parameter: List[float] = field(default_factory=list)
    points: List[np.ndarray] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def is_empty(self) -> bool:
        return len(self.points) == 0

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        return _stack(self.parameter, self.points)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": int(self.index),
            "first_step": int(self.first_step),
            "last_step": int(self.last_step),
            "parameter": [float(t) for t in self.parameter],
            "points": _points_to_lists(self.points),
        }
