"""
GMA ensemble: many trajectories from one initial curve.
"""

from .analysis import offset_rms, summarize_ensemble, truncated_trajectories
from .gma import Factory, GMAMode, default_factory
from .time_axis import merge_time_axes, step_for_time, time_for_step

__all__ = [
    'Factory',
    'GMAMode',
    'default_factory',
    'merge_time_axes',
    'offset_rms',
    'step_for_time',
    'summarize_ensemble',
    'time_for_step',
    'truncated_trajectories',
]
