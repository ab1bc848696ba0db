"""
Vector field and limit predicate interfaces.

A vector field V(t, pt) returns the derivative at time t and point pt.
A limit predicate returns True while a point is acceptable.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from .vector import as_vector

VectorField = Callable[[float, np.ndarray], Sequence[float]]
LimitPredicate = Callable[[np.ndarray], bool]


class FunctionalVectorField:
    """
    Vector field wrapping a plain function.

    Converts every derivative to a read-only vector so fields may return
    lists, tuples or arrays.
    """

    def __init__(self, fn: VectorField, name: str = "custom"):
        """
        Initialize FunctionalVectorField.

        Args:
            fn: Function (t, pt) -> derivative
            name: Field name used in reprs and logs
        """
        if not callable(fn):
            raise TypeError(f"Vector field must be callable, got {type(fn)}")
        self._fn = fn
        self.name = name

    def __call__(self, t: float, pt: np.ndarray) -> np.ndarray:
        return as_vector(self._fn(t, pt))

    def __repr__(self) -> str:
        return f"FunctionalVectorField(name='{self.name}')"


class BoxLimit:
    """
    Limit accepting points whose coordinates all satisfy |x_i| <= bound.
    """

    def __init__(self, bound: float):
        if bound <= 0:
            raise ValueError(f"BoxLimit bound must be positive, got {bound}")
        self.bound = float(bound)

    def __call__(self, pt: np.ndarray) -> bool:
        return bool(np.all(np.abs(pt) <= self.bound))

    def __repr__(self) -> str:
        return f"BoxLimit(bound={self.bound})"
