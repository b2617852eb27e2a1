import logging
import math
from typing import Any

import numpy as np

from .exceptions import (
    ConfigurationError,
    DataIntegrityError,
    DimensionMismatchError,
    InvalidMeshError,
)
from .tl_types import FloatArray, NumericArrayLike
from .utils.constants import MESH_TOLERANCE, MINIMUM_TIME_INTERVAL


logger = logging.getLogger(__name__)


# ============================================================================
# CORE VALIDATION PRIMITIVES
# ============================================================================


def validate_positive_integer(value: Any, name: str, min_value: int = 1) -> None:
    """Single source for positive integer validation."""
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int | np.integer):
        raise ConfigurationError(f"{name} must be integer, got {type(value)}")
    if value < min_value:
        raise ConfigurationError(f"{name} must be >= {min_value}, got {value}")


def validate_finite_number(value: Any, name: str) -> None:
    """Single source for finite scalar validation."""
    if isinstance(value, bool) or not isinstance(value, int | float | np.floating | np.integer):
        raise ConfigurationError(f"{name} must be numeric, got {type(value)}")
    if math.isnan(value) or math.isinf(value):
        raise ConfigurationError(f"{name} cannot be NaN or infinite, got {value}")


# ============================================================================
# CONFIGURATION VALIDATION
# ============================================================================


def validate_polynomial_degree(degree: Any, context: str = "collocation degree") -> None:
    """SINGLE SOURCE for collocation degree validation."""
    validate_positive_integer(degree, context, min_value=1)


def validate_problem_dimensions(
    num_states: Any, num_controls: Any, num_multipliers: Any, context: str = "problem"
) -> None:
    """SINGLE SOURCE for problem dimension validation."""
    for count, name in [
        (num_states, "states"),
        (num_controls, "controls"),
        (num_multipliers, "multipliers"),
    ]:
        if isinstance(count, bool) or not isinstance(count, int | np.integer) or count < 0:
            raise ConfigurationError(
                f"Number of {name} must be non-negative integer, got {count}", context
            )


def validate_time_horizon(initial_time: Any, final_time: Any) -> None:
    validate_finite_number(initial_time, "initial time")
    validate_finite_number(final_time, "final time")
    if final_time - initial_time <= MINIMUM_TIME_INTERVAL:
        raise ConfigurationError(
            f"Final time ({final_time}) must be greater than initial time ({initial_time})",
            "time horizon",
        )


def validate_normalized_mesh(mesh_points: NumericArrayLike) -> FloatArray:
    """SINGLE SOURCE for normalized mesh validation.

    Returns the mesh as a read-only float64 array. The mesh needs at least two
    points, must start at 0, end at 1 and be strictly increasing.
    """
    try:
        mesh_array = np.array(mesh_points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Mesh points must be numeric: {e}", "mesh") from e

    if mesh_array.ndim != 1:
        raise ConfigurationError(
            f"Mesh points must be one-dimensional, got shape {mesh_array.shape}", "mesh"
        )
    if mesh_array.size < 2:
        raise ConfigurationError(
            f"Mesh needs at least 2 points, got {mesh_array.size}", "mesh"
        )
    if not np.all(np.isfinite(mesh_array)):
        raise ConfigurationError("Mesh points cannot be NaN or infinite", "mesh")

    if not np.isclose(mesh_array[0], 0.0, rtol=0.0, atol=MESH_TOLERANCE):
        raise ConfigurationError(f"First mesh point must be 0.0, got {mesh_array[0]}", "mesh")
    if not np.isclose(mesh_array[-1], 1.0, rtol=0.0, atol=MESH_TOLERANCE):
        raise ConfigurationError(f"Last mesh point must be 1.0, got {mesh_array[-1]}", "mesh")
    # Endpoints within tolerance are pinned so the grid spans the whole horizon
    mesh_array[0] = 0.0
    mesh_array[-1] = 1.0

    mesh_diffs = np.diff(mesh_array)
    for interval_index, spacing in enumerate(mesh_diffs):
        if spacing <= 0.0:
            raise InvalidMeshError(
                f"Mesh interval {interval_index} has non-positive duration {spacing} "
                f"([{mesh_array[interval_index]}, {mesh_array[interval_index + 1]}])",
                "mesh points must be strictly increasing",
            )

    mesh_array.flags.writeable = False
    return mesh_array


def validate_interval_durations(durations: FloatArray, context: str = "mesh") -> None:
    """SINGLE SOURCE for absolute interval length validation."""
    for interval_index, duration in enumerate(durations):
        if not duration > MINIMUM_TIME_INTERVAL:
            raise InvalidMeshError(
                f"Mesh interval {interval_index} has non-positive duration {duration}", context
            )


# ============================================================================
# TRIAL MATRIX VALIDATION
# ============================================================================


def validate_matrix_shape(
    matrix: Any, expected_shape: tuple[int, int], name: str, context: str = "evaluation"
) -> None:
    """Single source for trial matrix shape validation.

    Works for numpy arrays and CasADi matrices alike; both expose ``shape``.
    """
    shape = getattr(matrix, "shape", None)
    if shape is None:
        raise DimensionMismatchError(
            f"{name} must be a matrix, got {type(matrix)}", f"Shape mismatch in {context}"
        )
    if tuple(shape) != tuple(expected_shape):
        raise DimensionMismatchError(
            f"{name} has shape {tuple(shape)}, expected {tuple(expected_shape)}",
            f"Shape mismatch in {context}",
        )


def validate_column_range(start: int, stop: int, num_columns: int, name: str) -> None:
    """Bounds check for a half-open column range [start, stop)."""
    if start < 0 or stop > num_columns or start > stop:
        raise DataIntegrityError(
            f"Column range [{start}, {stop}) out of bounds for {name} with {num_columns} columns"
        )
