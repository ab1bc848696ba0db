"""
Leaf abstractions shared by every layer.

This module contains:
- Vector operations on immutable numpy vectors
- Vector field and limit predicate interfaces
- Error types
- Configuration schema base class
"""

from .errors import DimensionMismatchError, UninitializedTrajectoryError
from .field import BoxLimit, FunctionalVectorField, LimitPredicate, VectorField
from .schema_utils import SchemaClass
from .vector import add, add_scalar, as_vector, linspace, scale

__all__ = [
    "BoxLimit",
    "DimensionMismatchError",
    "FunctionalVectorField",
    "LimitPredicate",
    "SchemaClass",
    "UninitializedTrajectoryError",
    "VectorField",
    "add",
    "add_scalar",
    "as_vector",
    "linspace",
    "scale",
]
