import logging
from typing import Any

import casadi as ca
import numpy as np

from ..exceptions import DataIntegrityError
from ..tl_types import FloatArray, TrialMatrix


logger = logging.getLogger(__name__)

_SYMBOLIC_TYPES: tuple[type, ...] = (ca.MX, ca.SX)


def symbolic_type(*matrices: Any) -> type | None:
    """Return ``ca.MX`` or ``ca.SX`` when any argument is symbolic, else None.

    Raises:
        DataIntegrityError: MX and SX matrices are mixed in one call
    """
    found: type | None = None
    for matrix in matrices:
        for kind in _SYMBOLIC_TYPES:
            if isinstance(matrix, kind):
                if found is not None and found is not kind:
                    raise DataIntegrityError(
                        "Cannot mix CasADi MX and SX trial matrices in one evaluation"
                    )
                found = kind
    return found


def as_trial_matrix(matrix: Any, kind: type | None) -> TrialMatrix:
    """Convert a caller-supplied matrix to numpy, or to ``kind`` when symbolic.

    Numeric inputs are copied into fresh float64 arrays; the caller's data is
    never written to.
    """
    if kind is not None:
        if isinstance(matrix, kind):
            return matrix
        if isinstance(matrix, _SYMBOLIC_TYPES):
            raise DataIntegrityError(
                "Cannot mix CasADi MX and SX trial matrices in one evaluation"
            )
        return kind(ca.DM(np.asarray(as_numeric(matrix), dtype=np.float64)))
    return as_numeric(matrix)


def as_numeric(matrix: Any) -> FloatArray:
    if isinstance(matrix, ca.DM):
        return np.array(matrix.full(), dtype=np.float64)
    try:
        return np.array(matrix, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise DataIntegrityError(
            f"Trial matrix of type {type(matrix)} is not numeric", "casadi conversion"
        ) from e


def allocate(kind: type | None, rows: int, cols: int) -> TrialMatrix:
    """Fresh zero matrix: structural zeros for CasADi, float64 zeros for numpy."""
    if kind is None:
        return np.zeros((rows, cols), dtype=np.float64)
    return kind(rows, cols)


def mtimes(left: TrialMatrix, right: FloatArray | TrialMatrix) -> TrialMatrix:
    if isinstance(left, _SYMBOLIC_TYPES):
        return ca.mtimes(left, ca.DM(right) if isinstance(right, np.ndarray) else right)
    return left @ right
