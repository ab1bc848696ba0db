"""
Elementary vector operations.

Vectors are 1-D float64 numpy arrays marked read-only. Every operation
returns a new vector and refuses to combine operands of different lengths.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Union

import numpy as np

from .errors import DimensionMismatchError

VectorLike = Union[Sequence[float], np.ndarray]


def as_vector(values: VectorLike) -> np.ndarray:
    """
    Convert values to an immutable 1-D float vector.

    Args:
        values: Sequence of numbers or 1-D array

    Returns:
        Read-only float64 copy of values
    """
    vector = np.array(values, dtype=float)
    if vector.ndim != 1:
        raise ValueError(f"Vector must be one-dimensional, got shape {vector.shape}")
    vector.flags.writeable = False
    return vector


def _check_same_length(reference: np.ndarray, other: np.ndarray) -> None:
    if len(other) != len(reference):
        raise DimensionMismatchError(len(reference), len(other))


def scale(s: float, v: VectorLike) -> np.ndarray:
    """Scalar times vector: s*v."""
    return as_vector(s * np.asarray(v, dtype=float))


def add_scalar(s: float, v: VectorLike) -> np.ndarray:
    """Scalar plus vector: v + s added to every element."""
    return as_vector(np.asarray(v, dtype=float) + s)


def add(v1: VectorLike, v2: VectorLike, *more: VectorLike) -> np.ndarray:
    """
    Element-wise sum of two or more vectors.

    Args:
        v1: First vector (its length is the reference dimension)
        v2: Second vector
        *more: Further vectors to add

    Returns:
        v1 + v2 + ...

    Raises:
        DimensionMismatchError: If any operand length differs from v1
    """
    total = np.array(v1, dtype=float)
    for operand in (v2,) + more:
        operand = np.asarray(operand, dtype=float)
        _check_same_length(total, operand)
        total = total + operand
    return as_vector(total)


def linspace(
    xmin: float,
    xmax: float,
    length: int,
    callback: Optional[Callable[[float], object]] = None,
) -> List:
    """
    Evenly spaced values from xmin to xmax (both included).

    When callback is given, each value x is replaced by callback(x). This is
    how initial curves are sampled from a parametrisation.

    Args:
        xmin: First value
        xmax: Last value
        length: Number of values (at least 2)
        callback: Optional map applied to each value

    Returns:
        List of values (or callback results)
    """
    if length < 2:
        raise ValueError(f"linspace needs at least 2 values, got {length}")

    values = np.linspace(xmin, xmax, length)
    if callback is None:
        return [float(x) for x in values]
    return [callback(float(x)) for x in values]
