"""
Generalized Modal Analysis (GMA) ensemble.

Integrates a curve of initial conditions point by point and answers
windowed queries over the evolving ensemble:
- contours: every trajectory at one step
- solutions: one trajectory over a range of steps

Trajectories stopped early by the limit predicate (or by non-finite
values) are shorter than the rest. Going backward in time the missing
steps sit at the front of the series, so each trajectory carries an
offset mapping the ensemble's global step grid onto its own indices.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, List, Optional, Sequence

import numpy as np

from gmodal.common import (
    DimensionMismatchError,
    LimitPredicate,
    UninitializedTrajectoryError,
    VectorField,
    as_vector,
)
from gmodal.integrators import RK4Integrator
from gmodal.integrators.base import check_dt, check_steps
from gmodal.windowing import (
    Contour,
    SamplingOptions,
    Solution,
    SolveConfig,
    StepIterator,
    get_step_iterator,
)

from .time_axis import merge_time_axes, step_for_time, time_for_step

logger = logging.getLogger(__name__)

# Factory signature: (mode, step_or_trajectory_index, record) -> anything
Factory = Callable[["GMAMode", int, Any], Any]


def default_factory(mode: GMAMode, index: int, record: Any) -> Any:
    """Identity factory: hands the record back unchanged."""
    return record


class GMAMode:
    """
    Ensemble of RK4 trajectories started from one initial curve.

    Attributes:
        trajectories: One integrator per curve point, in curve order
        total_steps: Nominal number of steps requested so far
        backward_steps: Nominal number of those taken with dt < 0
        t_min: Smallest time reached (also lowered by contour queries)
        t_max: Largest time reached
        time_axis: Unified increasing time axis
        time_axis_start: Global step of time_axis[0]
        first_index: First step of the window recorded by get_contours
        last_index: Last step of that window (None before any batch)
        contour_factory: Transform applied to every Contour
        solution_factory: Transform applied to every Solution
    """

    def __init__(
        self,
        field: VectorField,
        curve: Sequence,
        t0: float,
        dt: float,
        steps: int,
        limit: Optional[LimitPredicate] = None,
        contour_factory: Optional[Factory] = None,
        solution_factory: Optional[Factory] = None,
    ):
        """
        Initialize the ensemble and run the initial solve.

        Args:
            field: Vector field V(t, pt) shared by every trajectory
            curve: Initial points, one trajectory each
            t0: Initial time
            dt: Step size (negative integrates backward)
            steps: Number of steps per trajectory
            limit: Optional limit predicate for every trajectory
            contour_factory: Optional transform for contours
            solution_factory: Optional transform for solutions
        """
        if not callable(field):
            raise TypeError(f"field must be callable, got {type(field)}")

        self._field = field
        self.contour_factory: Factory = contour_factory or default_factory
        self.solution_factory: Factory = solution_factory or default_factory

        self.trajectories: List[RK4Integrator] = []
        self.total_steps = 0
        self.backward_steps = 0
        self.t_min: Optional[float] = None
        self.t_max: Optional[float] = None
        self.time_axis = np.array([])
        self.time_axis_start = 0

        self.first_index = 0
        self.last_index: Optional[int] = None
        self.contour_options: Optional[SamplingOptions] = None

        self.solve(steps, dt, t0, curve, limit)

    @classmethod
    def from_config(
        cls,
        field: VectorField,
        curve: Sequence,
        config: SolveConfig,
        limit: Optional[LimitPredicate] = None,
        contour_factory: Optional[Factory] = None,
        solution_factory: Optional[Factory] = None,
    ) -> GMAMode:
        """Build an ensemble from a SolveConfig."""
        return cls(
            field,
            curve,
            t0=config.t0,
            dt=config.dt,
            steps=config.steps,
            limit=limit,
            contour_factory=contour_factory,
            solution_factory=solution_factory,
        )

    @property
    def field(self) -> VectorField:
        return self._field

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------

    def solve(
        self,
        steps: int,
        dt: float,
        t0: Optional[float] = None,
        curve: Optional[Sequence] = None,
        limit: Optional[LimitPredicate] = None,
    ) -> None:
        """
        Start a new solution (t0 and curve given) or extend the current one.

        Args:
            steps: Steps to add to every trajectory
            dt: Step size
            t0: Initial time (new solution only)
            curve: Initial points (new solution only)
            limit: Limit predicate; when extending it replaces every
                trajectory's current limit

        Raises:
            UninitializedTrajectoryError: Extending before any initial solve
        """
        steps = check_steps(steps, allow_zero=False)
        dt = check_dt(dt)

        if (t0 is None) != (curve is None):
            raise ValueError("t0 and curve must be given together")

        try:
            if t0 is not None:
                self._start(steps, dt, float(t0), curve, limit)
            else:
                self._extend(steps, dt, limit)
        finally:
            # Trajectories already advanced must stay aligned if a later one raised
            if self.trajectories:
                self._update_offsets()
                self._update_time_bounds()
                self._rebuild_time_axis()

        truncated = sum(1 for traj in self.trajectories if len(traj) < self.total_steps + 1)
        logger.info(
            f"Solved {len(self.trajectories)} trajectories to {self.total_steps} steps "
            f"(dt={dt}), {truncated} truncated, t in [{self.t_min:.6g}, {self.t_max:.6g}]"
        )

    def _start(
        self,
        steps: int,
        dt: float,
        t0: float,
        curve: Sequence,
        limit: Optional[LimitPredicate],
    ) -> None:
        points = self._check_curve(curve)
        if not math.isfinite(t0):
            raise ValueError(f"t0 must be finite, got {t0}")

        self.total_steps = steps
        self.backward_steps = steps if dt < 0 else 0
        self.t_min = self.t_max = t0
        self.first_index = 0
        self.last_index = None
        self.contour_options = None

        self.trajectories = []
        for pt in points:
            trajectory = RK4Integrator(self._field, limit=limit)
            trajectory.solve(steps, dt, t0, pt)
            self.trajectories.append(trajectory)

    def _extend(self, steps: int, dt: float, limit: Optional[LimitPredicate]) -> None:
        if not self.trajectories:
            raise UninitializedTrajectoryError(
                "Initial conditions are needed for the first call to solve"
            )
        if limit is not None:
            self.set_limit(limit)

        self.total_steps += steps
        if dt < 0:
            self.backward_steps += steps

        for trajectory in self.trajectories:
            trajectory.solve(steps, dt)

    @staticmethod
    def _check_curve(curve: Sequence) -> List[np.ndarray]:
        points = [as_vector(pt) for pt in curve]
        if not points:
            raise ValueError("Initial curve must contain at least one point")
        dim = len(points[0])
        for pt in points[1:]:
            if len(pt) != dim:
                raise DimensionMismatchError(dim, len(pt), context="initial curve")
        return points

    def _update_offsets(self) -> None:
        for i, trajectory in enumerate(self.trajectories):
            trajectory.offset = self.backward_steps - trajectory.origin_index
            if len(trajectory) < self.total_steps + 1:
                logger.debug(
                    f"Trajectory {i} stopped at {len(trajectory)} of "
                    f"{self.total_steps + 1} points (offset {trajectory.offset})"
                )

    def _update_time_bounds(self) -> None:
        for trajectory in self.trajectories:
            times = trajectory.times
            self.t_min = min(self.t_min, float(times[0]))
            self.t_max = max(self.t_max, float(times[-1]))

    def _rebuild_time_axis(self) -> None:
        self.time_axis, self.time_axis_start = merge_time_axes(
            [trajectory.times for trajectory in self.trajectories],
            [trajectory.offset for trajectory in self.trajectories],
        )

    def set_limit(self, limit: Optional[LimitPredicate]) -> None:
        """Install a limit predicate on every trajectory."""
        for trajectory in self.trajectories:
            trajectory.set_limit(limit)

    # ------------------------------------------------------------------
    # Time axis queries
    # ------------------------------------------------------------------

    def get_step_for_time(self, t: float) -> int:
        """
        Global step of the last axis time <= t.

        Returns:
            -1 if t precedes the axis (or it is empty); the last step if t
            is at or beyond the end of the axis
        """
        return step_for_time(self.time_axis, t, self.time_axis_start)

    def get_time_for_step(self, step: int) -> Optional[float]:
        """Time of a global step on the unified axis, None outside it."""
        return time_for_step(self.time_axis, step, self.time_axis_start)

    # ------------------------------------------------------------------
    # Windowed queries
    # ------------------------------------------------------------------

    def get_step_iterator(self, options: Optional[SamplingOptions] = None) -> StepIterator:
        """Sampling iterator over [offset, total_steps) of this ensemble."""
        return get_step_iterator(options, self.total_steps)

    def get_contour(self, step: int) -> Any:
        """
        Cross-section of every trajectory at a global step.

        Trajectories that do not reach the step are left out.

        Returns:
            contour_factory(self, step, Contour)
        """
        parameter: List[float] = []
        points: List[np.ndarray] = []
        for trajectory in self.trajectories:
            local = step - trajectory.offset
            if local >= 0:
                trajectory.push_step_value(local, parameter, points)

        if parameter:
            self.t_min = min(self.t_min, min(parameter))

        return self.contour_factory(self, step, Contour(step, parameter, points))

    def get_contours(self, options: Optional[SamplingOptions] = None) -> List[Any]:
        """
        Contours at every sampled step.

        Also records the sampled range as the default window for
        get_solution.

        Args:
            options: Sampling options (total_steps defaults to the ensemble's)

        Returns:
            List of factory results, one per sampled step
        """
        iterator = self.get_step_iterator(options)
        contours = []
        last_step = None
        for _, step, _ in iterator:
            contours.append(self.get_contour(step))
            last_step = step

        self.contour_options = iterator.options
        if last_step is not None:
            self.first_index = iterator.options.offset
            self.last_index = last_step
        return contours

    def get_solution(
        self,
        index: int,
        first_step: Optional[int] = None,
        last_step: Optional[int] = None,
    ) -> Optional[Any]:
        """
        One trajectory over the inclusive global window [first_step, last_step].

        The offset is subtracted from both bounds, which are then clamped to
        the trajectory's own length.

        Args:
            index: Trajectory index
            first_step: First global step (defaults to the contour window)
            last_step: Last global step (defaults to the contour window, or
                total_steps before any contour batch)

        Returns:
            solution_factory(self, index, Solution), or None if the window
            holds no points of this trajectory
        """
        if not 0 <= index < len(self.trajectories):
            raise IndexError(
                f"Trajectory index {index} out of range for {len(self.trajectories)} trajectories"
            )

        if first_step is None:
            first_step = self.first_index
        if last_step is None:
            last_step = self.last_index if self.last_index is not None else self.total_steps

        trajectory = self.trajectories[index]
        start = max(0, first_step - trajectory.offset)
        stop = min(len(trajectory), last_step + 1 - trajectory.offset)
        if stop <= start:
            return None

        times, points = trajectory.window(start, stop)
        solution = Solution(index, first_step, last_step, times, points)
        return self.solution_factory(self, index, solution)

    def get_solutions(
        self,
        options: Optional[SamplingOptions] = None,
        first_step: Optional[int] = None,
        last_step: Optional[int] = None,
    ) -> List[Any]:
        """
        Solutions for trajectories sampled across the curve.

        The sampling policy runs over trajectory indices, so total_steps is
        always the number of trajectories here.

        Returns:
            List of factory results; empty windows are skipped
        """
        options = options if options is not None else SamplingOptions()
        options = SamplingOptions(
            sample_count=options.sample_count,
            offset=options.offset,
            total_steps=len(self.trajectories),
        )

        solutions = []
        for _, index, _ in get_step_iterator(options, len(self.trajectories)):
            solution = self.get_solution(index, first_step, last_step)
            if solution is not None:
                solutions.append(solution)
        return solutions

    def __len__(self) -> int:
        return len(self.trajectories)

    def __repr__(self) -> str:
        return (
            f"GMAMode({len(self.trajectories)} trajectories, "
            f"{self.total_steps} steps, t=[{self.t_min}, {self.t_max}])"
        )
