"""
Unified time axis across trajectories of different lengths.

Trajectory j holds global step g at local index g - offsets[j]. Merging
the series on that grid gives one increasing axis covering every step
any trajectory reached.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np


def merge_time_axes(
    series: Sequence[np.ndarray], offsets: Sequence[int]
) -> Tuple[np.ndarray, int]:
    """
    Merge per-trajectory time arrays into one axis.

    Starts from the first trajectory; a trajectory starting earlier on the
    global grid contributes its leading slice, one reaching further
    contributes its trailing slice.

    Args:
        series: Increasing time array per trajectory
        offsets: Global step of each array's first entry

    Returns:
        Tuple of (axis, start) where start is the global step of axis[0]
    """
    if len(series) != len(offsets):
        raise ValueError(
            f"Got {len(series)} time series but {len(offsets)} offsets"
        )

    populated = [(np.asarray(t, dtype=float), int(o)) for t, o in zip(series, offsets) if len(t)]
    if not populated:
        return np.array([]), 0

    axis, start = populated[0]
    for times, offset in populated[1:]:
        if offset < start:
            axis = np.concatenate([times[: start - offset], axis])
            start = offset
        end = start + len(axis)
        if offset + len(times) > end:
            axis = np.concatenate([axis, times[end - offset :]])

    return axis, start


def step_for_time(axis: np.ndarray, t: float, start: int = 0) -> int:
    """
    Global step whose axis time is the last one <= t.

    Returns -1 for an empty axis or t before the axis; the last step for t
    at or after the end of the axis.
    """
    if len(axis) == 0 or t < axis[0]:
        return -1
    index = int(np.searchsorted(axis, t, side="right")) - 1
    return start + index


def time_for_step(axis: np.ndarray, step: int, start: int = 0) -> Optional[float]:
    """Axis time at a global step, or None outside the axis."""
    index = step - start
    if 0 <= index < len(axis):
        return float(axis[index])
    return None
