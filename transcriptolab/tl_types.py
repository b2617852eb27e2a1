# transcriptolab/tl_types.py
"""
Core type definitions for the TranscriptoLab collocation transcription.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias, runtime_checkable

import casadi as ca
import numpy as np
from numpy.typing import NDArray


# --- NUMERICAL SAFETY TYPES ---
FloatArray: TypeAlias = NDArray[np.float64]
NumericArrayLike: TypeAlias = (
    NDArray[np.floating[Any]]
    | NDArray[np.integer[Any]]
    | Sequence[float]
    | Sequence[int]
    | list[float]
    | list[int]
)

TrialMatrix: TypeAlias = FloatArray | ca.MX | ca.SX | ca.DM
"""
Trial variable matrix supplied by the surrounding solver.

Rows index variables (states, controls or multipliers), columns index grid
points or interval nodes. Numeric inputs yield numpy results, symbolic inputs
yield results of the same CasADi type.
"""


# --- EXTERNAL INTERFACE PROTOCOLS ---
@runtime_checkable
class ProblemProtocol(Protocol):
    """Variable counts the transcription needs from an optimal control problem."""

    @property
    def num_states(self) -> int: ...

    @property
    def num_controls(self) -> int: ...

    @property
    def num_multipliers(self) -> int: ...


@dataclass(frozen=True)
class ProblemDimensions:
    """Plain problem descriptor holding only variable counts."""

    num_states: int
    num_controls: int = 0
    num_multipliers: int = 0
