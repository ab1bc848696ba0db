"""
Summaries of a solved ensemble.

How many trajectories were cut short, by how much, and over what time span
the ensemble was solved.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

import numpy as np

from .gma import GMAMode


def offset_rms(mode: GMAMode) -> int:
    """
    Root-mean-square truncation offset, floored.

    Normalised by the nominal trajectory length (total_steps + 1), so a
    fully solved ensemble scores 0.

    Args:
        mode: Solved ensemble

    Returns:
        floor(sqrt(sum(offset^2) / (total_steps + 1)))
    """
    squares = sum(trajectory.offset ** 2 for trajectory in mode.trajectories)
    return int(math.floor(math.sqrt(squares / (mode.total_steps + 1))))


def truncated_trajectories(mode: GMAMode) -> List[int]:
    """
    Indices of trajectories that stopped before the nominal length.

    Args:
        mode: Solved ensemble

    Returns:
        Sorted list of trajectory indices
    """
    expected = mode.total_steps + 1
    return [
        i
        for i, trajectory in enumerate(mode.trajectories)
        if trajectory.is_frozen or len(trajectory) < expected
    ]


def summarize_ensemble(mode: GMAMode) -> Dict[str, Any]:
    """
    Analyze a solved ensemble.

    Args:
        mode: Solved ensemble

    Returns:
        Dictionary with:
        - num_trajectories, total_steps
        - num_truncated, num_frozen
        - length_stats: min/max/mean trajectory length
        - max_offset, offset_rms
        - t_min, t_max, time_axis_length
    """
    lengths = np.array([len(trajectory) for trajectory in mode.trajectories])
    offsets = [trajectory.offset for trajectory in mode.trajectories]

    return {
        'num_trajectories': len(mode.trajectories),
        'total_steps': mode.total_steps,
        'num_truncated': len(truncated_trajectories(mode)),
        'num_frozen': sum(1 for trajectory in mode.trajectories if trajectory.is_frozen),
        'length_stats': {
            'min': int(lengths.min()),
            'max': int(lengths.max()),
            'mean': float(lengths.mean()),
        },
        'max_offset': int(max(offsets)),
        'offset_rms': offset_rms(mode),
        't_min': float(mode.t_min),
        't_max': float(mode.t_max),
        'time_axis_length': int(len(mode.time_axis)),
    }
