"""
Windowed queries over an ensemble: sampling policy and result records.
"""

from .sampling import StepConsumer, StepIterator, get_step_iterator
from .schemas import Contour, SamplingOptions, Solution, SolveConfig

__all__ = [
    "Contour",
    "SamplingOptions",
    "Solution",
    "SolveConfig",
    "StepConsumer",
    "StepIterator",
    "get_step_iterator",
]
