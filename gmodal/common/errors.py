"""
Error types raised by the integration and ensemble layers.

Rejected steps (non-finite values, limit failures) are not errors: the
trajectory freezes and the truncation shows up in its length and offset.
"""

from __future__ import annotations


class UninitializedTrajectoryError(RuntimeError):
    """Raised when a solve is extended before any initial condition exists."""


class DimensionMismatchError(ValueError):
    """
    Raised when vectors of different lengths are combined.

    Attributes:
        expected: Length of the reference operand
        actual: Length of the offending operand
    """

    def __init__(self, expected: int, actual: int, context: str = "vector operation"):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Dimension mismatch in {context}: expected length {expected}, got {actual}"
        )
