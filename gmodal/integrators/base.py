"""
Abstract base class for single-trajectory integrators.

Owns the time/point series of one trajectory and the bookkeeping shared by
every fixed-step scheme: leading edge selection, forward and backward
growth, rejection handling and the frozen state.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from itertools import islice
from typing import Deque, List, Optional, Tuple

import numpy as np

from gmodal.common import (
    LimitPredicate,
    UninitializedTrajectoryError,
    VectorField,
    as_vector,
)

logger = logging.getLogger(__name__)


class IntegratorState(str, Enum):
    """Lifecycle of a trajectory."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    FROZEN = "frozen"


def check_steps(steps: int, allow_zero: bool = True) -> int:
    """Validate a step count and return it as int."""
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
        raise TypeError(f"steps must be an integer, got {type(steps).__name__}")
    minimum = 0 if allow_zero else 1
    if steps < minimum:
        raise ValueError(f"steps must be >= {minimum}, got {steps}")
    return int(steps)


def check_dt(dt: float) -> float:
    """Validate a step size: finite and non-zero."""
    dt = float(dt)
    if dt == 0.0 or not math.isfinite(dt):
        raise ValueError(f"dt must be finite and non-zero, got {dt}")
    return dt


class AbstractIntegrator(ABC):
    """
    Abstract base class for fixed-step trajectory integrators.

    The series is always stored in increasing time order: forward steps
    (dt > 0) are appended, backward steps (dt < 0) are prepended. The
    leading edge is the last entry going forward and the first entry going
    backward.

    Attributes:
        limit: Optional predicate; a False result freezes the trajectory
        offset: Index shift relative to the ensemble's nominal step grid
        dt: Step size of the most recent solve call
    """

    def __init__(self, field: VectorField, limit: Optional[LimitPredicate] = None):
        """
        Initialize integrator.

        Args:
            field: Vector field V(t, pt)
            limit: Optional limit predicate
        """
        if not callable(field):
            raise TypeError(f"field must be callable, got {type(field)}")
        self._field = field
        self.limit = limit
        self.offset = 0
        self.dt: Optional[float] = None

        self._times: Deque[float] = deque()
        self._points: Deque[np.ndarray] = deque()
        self._origin_index = 0
        self._state = IntegratorState.UNINITIALIZED

    @abstractmethod
    def advance(self, t: float, pt: np.ndarray, dt: float) -> np.ndarray:
        """
        Compute the point one step of size dt after (t, pt).

        Args:
            t: Current time
            pt: Current point
            dt: Step size (negative for backward integration)

        Returns:
            Candidate next point
        """
        pass

    @property
    def field(self) -> VectorField:
        return self._field

    @property
    def state(self) -> IntegratorState:
        return self._state

    @property
    def is_frozen(self) -> bool:
        return self._state is IntegratorState.FROZEN

    @property
    def origin_index(self) -> int:
        """Index of the initial condition (number of accepted backward steps)."""
        return self._origin_index

    @property
    def times(self) -> np.ndarray:
        return np.fromiter(self._times, dtype=float, count=len(self._times))

    @property
    def points(self) -> List[np.ndarray]:
        return list(self._points)

    @property
    def initial_time(self) -> float:
        self._require_state()
        return self._times[self._origin_index]

    @property
    def initial_point(self) -> np.ndarray:
        self._require_state()
        return self._points[self._origin_index]

    def set_limit(self, limit: Optional[LimitPredicate]) -> None:
        """Attach (or clear, with None) the limit predicate."""
        self.limit = limit

    def leading_edge(self, dt: float) -> Tuple[float, np.ndarray]:
        """Return the (t, pt) that a step of size dt starts from."""
        self._require_state()
        index = 0 if dt < 0 else -1
        return self._times[index], self._points[index]

    def step(self, dt: float) -> bool:
        """
        Take one step of size dt from the leading edge.

        Returns:
            True if a point was recorded, False if the step was rejected or
            the trajectory cannot advance (frozen or uninitialized)
        """
        dt = check_dt(dt)
        if self._state is not IntegratorState.ACTIVE:
            return False

        t, pt = self.leading_edge(dt)
        with np.errstate(over="ignore", invalid="ignore"):
            pt_next = as_vector(self.advance(t, pt, dt))

        if not np.all(np.isfinite(pt_next)):
            self._freeze(f"non-finite point at t={t + dt:.6g}")
            return False
        if self.limit is not None and not self.limit(pt_next):
            self._freeze(f"limit rejected point at t={t + dt:.6g}")
            return False

        if dt < 0:
            self._times.appendleft(t + dt)
            self._points.appendleft(pt_next)
            self._origin_index += 1
        else:
            self._times.append(t + dt)
            self._points.append(pt_next)
        return True

    def solve(
        self,
        steps: int,
        dt: float,
        t0: Optional[float] = None,
        pt0=None,
    ) -> Tuple[np.ndarray, List[np.ndarray]]:
        """
        Integrate up to `steps` steps.

        With t0 and pt0 the trajectory restarts from that initial condition.
        Without them the existing solution is extended from its leading edge.
        Integration stops at the first rejected step.

        Args:
            steps: Number of steps to attempt
            dt: Step size (negative integrates backward in time)
            t0: Optional initial time
            pt0: Optional initial point

        Returns:
            Tuple of (times, points) for the whole accumulated trajectory

        Raises:
            UninitializedTrajectoryError: If no initial condition was ever given
        """
        steps = check_steps(steps)
        dt = check_dt(dt)

        if (t0 is None) != (pt0 is None):
            raise ValueError("t0 and pt0 must be given together")

        if t0 is not None:
            self._reset(float(t0), as_vector(pt0))
        elif self._state is IntegratorState.UNINITIALIZED:
            raise UninitializedTrajectoryError(
                "Initial conditions are needed for the first call to solve"
            )

        self.dt = dt
        for _ in range(steps):
            if not self.step(dt):
                break

        return self.times, self.points

    def push_step_value(
        self, step_index: int, out_times: List[float], out_points: List[np.ndarray]
    ) -> None:
        """Append the value at step_index to the outputs if it exists."""
        if 0 <= step_index < len(self._times):
            out_times.append(self._times[step_index])
            out_points.append(self._points[step_index])

    def window(self, start: int, stop: int) -> Tuple[List[float], List[np.ndarray]]:
        """Times and points for local indices [start, stop)."""
        return (
            list(islice(self._times, start, stop)),
            list(islice(self._points, start, stop)),
        )

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Get the trajectory as arrays.

        Returns:
            Tuple of (times, points) with points of shape (n, dim)
        """
        if not self._points:
            return np.array([]), np.empty((0, 0))
        return self.times, np.vstack(list(self._points))

    def _reset(self, t0: float, pt0: np.ndarray) -> None:
        self._times = deque([t0])
        self._points = deque([pt0])
        self._origin_index = 0
        self.offset = 0
        self._state = IntegratorState.ACTIVE

    def _freeze(self, reason: str) -> None:
        self._state = IntegratorState.FROZEN
        logger.debug(f"Trajectory frozen after {len(self._times)} points: {reason}")

    def _require_state(self) -> None:
        if self._state is IntegratorState.UNINITIALIZED:
            raise UninitializedTrajectoryError("Trajectory has no initial condition")

    def __len__(self) -> int:
        return len(self._times)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} points, {self._state.value})"
