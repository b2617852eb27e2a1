# transcriptolab/transcription/base.py
"""
Interface shared by collocation transcription schemes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..exceptions import ConfigurationError
from ..input_validation import validate_problem_dimensions
from ..mesh import Mesh
from ..tl_types import (
    FloatArray,
    NumericArrayLike,
    ProblemDimensions,
    ProblemProtocol,
    TrialMatrix,
)
from ..utils.constants import DEFAULT_FINAL_TIME, DEFAULT_INITIAL_TIME


@runtime_checkable
class TranscriptionScheme(Protocol):
    """Operations a constraint-assembly layer needs from a transcription scheme.

    Every evaluation operation is a pure function of its arguments and the
    scheme's immutable configuration, and returns a freshly allocated result.
    """

    @property
    def num_grid_points(self) -> int: ...

    @property
    def num_mesh_intervals(self) -> int: ...

    @property
    def num_defects_per_mesh_interval(self) -> int: ...

    def create_grid(self) -> FloatArray: ...

    def create_quadrature_coefficients(self) -> FloatArray: ...

    def create_mesh_indices(self) -> FloatArray: ...

    def split_states(self, states: TrialMatrix) -> list[TrialMatrix]: ...

    def calc_defects(
        self, states: Sequence[TrialMatrix], derivatives: TrialMatrix
    ) -> TrialMatrix: ...

    def calc_interpolating_controls(self, controls: TrialMatrix | None) -> TrialMatrix: ...

    def calc_interpolating_multipliers(self, multipliers: TrialMatrix | None) -> TrialMatrix: ...


def resolve_problem_dimensions(problem: ProblemProtocol) -> ProblemDimensions:
    """Snapshot the variable counts of ``problem`` so later changes cannot leak in."""
    try:
        num_states = problem.num_states
        num_controls = problem.num_controls
        num_multipliers = problem.num_multipliers
    except AttributeError as e:
        raise ConfigurationError(
            f"Problem descriptor {type(problem).__name__} lacks variable counts: {e}",
            "problem",
        ) from e

    validate_problem_dimensions(num_states, num_controls, num_multipliers)
    return ProblemDimensions(int(num_states), int(num_controls), int(num_multipliers))


def resolve_mesh(
    mesh: Mesh | NumericArrayLike, initial_time: float | None, final_time: float | None
) -> Mesh:
    """Use a prebuilt Mesh as is, or build one from normalized points and a horizon.

    A prebuilt Mesh already carries its horizon, so passing times alongside it
    is rejected rather than silently ignored.
    """
    if isinstance(mesh, Mesh):
        if initial_time is not None or final_time is not None:
            raise ConfigurationError(
                "initial_time/final_time cannot be given with a prebuilt Mesh "
                f"(mesh horizon is [{mesh.initial_time}, {mesh.final_time}])",
                "time horizon",
            )
        return mesh
    return Mesh.from_points(
        mesh,
        DEFAULT_INITIAL_TIME if initial_time is None else initial_time,
        DEFAULT_FINAL_TIME if final_time is None else final_time,
    )
