# transcriptolab/transcription/trapezoidal.py
"""
Trapezoidal transcription: the grid is the mesh, one defect per interval.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from ..exceptions import DimensionMismatchError
from ..input_validation import validate_matrix_shape
from ..mesh import Mesh
from ..tl_types import FloatArray, NumericArrayLike, ProblemProtocol, TrialMatrix
from ..utils.casadi_utils import allocate, as_trial_matrix, symbolic_type
from .base import resolve_mesh, resolve_problem_dimensions


logger = logging.getLogger(__name__)


class Trapezoidal:
    """Trapezoidal-rule transcription on a fixed mesh.

    Grid points coincide with mesh points, so every grid point is a mesh
    boundary and there are no interior points to interpolate.
    """

    def __init__(
        self,
        problem: ProblemProtocol,
        mesh: Mesh | NumericArrayLike,
        initial_time: float | None = None,
        final_time: float | None = None,
    ) -> None:
        self._dimensions = resolve_problem_dimensions(problem)
        self._mesh = resolve_mesh(mesh, initial_time, final_time)
        logger.debug(
            "Trapezoidal transcription ready: intervals=%d, states=%d",
            self.num_mesh_intervals,
            self.num_states,
        )

    @property
    def mesh(self) -> Mesh:
        return self._mesh

    @property
    def num_states(self) -> int:
        return self._dimensions.num_states

    @property
    def num_mesh_intervals(self) -> int:
        return self._mesh.num_mesh_intervals

    @property
    def num_grid_points(self) -> int:
        return self._mesh.num_mesh_points

    @property
    def num_defects_per_mesh_interval(self) -> int:
        return self.num_states

    @property
    def grid_times(self) -> FloatArray:
        return self._mesh.times

    def create_grid(self) -> FloatArray:
        return self._mesh.points.copy()

    def create_mesh_indices(self) -> FloatArray:
        return np.ones(self.num_grid_points, dtype=np.float64)

    def create_quadrature_coefficients(self) -> FloatArray:
        durations = self._mesh.interval_durations
        quad_coeffs = np.zeros(self.num_grid_points, dtype=np.float64)
        quad_coeffs[:-1] += 0.5 * durations
        quad_coeffs[1:] += 0.5 * durations
        return quad_coeffs

    def split_states(self, states: TrialMatrix) -> list[TrialMatrix]:
        kind = symbolic_type(states)
        states = as_trial_matrix(states, kind)
        validate_matrix_shape(
            states, (self.num_states, self.num_grid_points), "states", "state splitting"
        )
        blocks = []
        for imesh in range(self.num_mesh_intervals):
            block = states[:, imesh : imesh + 2]
            blocks.append(block.copy() if kind is None else block)
        return blocks

    def calc_defects(
        self, states: Sequence[TrialMatrix], derivatives: TrialMatrix
    ) -> TrialMatrix:
        """``x[i+1] - x[i] - h/2 * (xdot[i] + xdot[i+1])`` for every interval."""
        ns = self.num_states
        if len(states) != self.num_mesh_intervals:
            raise DimensionMismatchError(
                f"Got state matrices for {len(states)} mesh intervals, "
                f"expected {self.num_mesh_intervals}",
                "Shape mismatch in defect calculation",
            )

        kind = symbolic_type(derivatives, *states)
        xdot = as_trial_matrix(derivatives, kind)
        validate_matrix_shape(
            xdot, (ns, self.num_grid_points), "state derivatives", "defect calculation"
        )

        durations = self._mesh.interval_durations
        defects = allocate(kind, ns, self.num_mesh_intervals)
        for imesh, block in enumerate(states):
            x_i = as_trial_matrix(block, kind)
            validate_matrix_shape(
                x_i, (ns, 2), f"states of mesh interval {imesh}", "defect calculation"
            )
            h = float(durations[imesh])
            defects[:, imesh] = (
                x_i[:, 1] - x_i[:, 0] - 0.5 * h * (xdot[:, imesh] + xdot[:, imesh + 1])
            )
        return defects

    def calc_interpolating_controls(self, controls: TrialMatrix | None) -> TrialMatrix:
        return allocate(symbolic_type(controls), self._dimensions.num_controls, 0)

    def calc_interpolating_multipliers(self, multipliers: TrialMatrix | None) -> TrialMatrix:
        return allocate(symbolic_type(multipliers), self._dimensions.num_multipliers, 0)
