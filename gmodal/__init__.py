"""
gmodal: Generalized Modal Analysis

Evolves a curve of initial conditions under a vector field by integrating
every point with fixed-step RK4, and exposes the ensemble as contours
(cross-sections at one step) and solutions (one trajectory over a window
of steps).
"""

__version__ = "0.1.0"

# Core abstractions
from .common import (
    BoxLimit,
    DimensionMismatchError,
    FunctionalVectorField,
    LimitPredicate,
    SchemaClass,
    UninitializedTrajectoryError,
    VectorField,
    add,
    add_scalar,
    as_vector,
    linspace,
    scale,
)

# Integrators
from .integrators import (
    AbstractIntegrator,
    IntegratorState,
    RK4Integrator,
    rk4_step,
)

# Windowing
from .windowing import (
    Contour,
    SamplingOptions,
    Solution,
    SolveConfig,
    StepIterator,
    get_step_iterator,
)

# Ensemble
from .ensemble import (
    GMAMode,
    default_factory,
    merge_time_axes,
    offset_rms,
    summarize_ensemble,
    truncated_trajectories,
)

# Curves
from .curves import ellipse, scaled_curve

__all__ = [
    # Core abstractions
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
    # Integrators
    "AbstractIntegrator",
    "IntegratorState",
    "RK4Integrator",
    "rk4_step",
    # Windowing
    "Contour",
    "SamplingOptions",
    "Solution",
    "SolveConfig",
    "StepIterator",
    "get_step_iterator",
    # Ensemble
    "GMAMode",
    "default_factory",
    "merge_time_axes",
    "offset_rms",
    "summarize_ensemble",
    "truncated_trajectories",
    # Curves
    "ellipse",
    "scaled_curve",
]
