# transcriptolab/transcription/legendre_gauss_radau.py
"""
Legendre-Gauss-Radau pseudospectral transcription.

Each mesh interval holds ``degree`` Radau collocation nodes, the last of which
coincides with the interval's right mesh point. The state is approximated by
the polynomial through the interval's left mesh point and its collocation
nodes; the defects require that polynomial's derivative to match the supplied
dynamics at every collocation node.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from ..exceptions import DimensionMismatchError
from ..input_validation import validate_column_range, validate_matrix_shape
from ..mesh import GridIndexer, Mesh
from ..radau import RadauBasisComponents, compute_radau_collocation_components
from ..tl_types import FloatArray, NumericArrayLike, ProblemProtocol, TrialMatrix
from ..utils.casadi_utils import allocate, as_trial_matrix, mtimes, symbolic_type
from ..utils.constants import (
    DEFAULT_INTERPOLATE_CONTROL_MIDPOINTS,
    DEFAULT_INTERPOLATE_MULTIPLIER_MIDPOINTS,
)
from .base import resolve_mesh, resolve_problem_dimensions


logger = logging.getLogger(__name__)


class LegendreGaussRadau:
    """LGR transcription of a fixed mesh with uniform collocation degree.

    The basis table, mesh and grid are computed once here and are read-only
    afterwards, so one instance may serve concurrent evaluation calls.

    Args:
        problem: Descriptor exposing ``num_states``, ``num_controls`` and
            ``num_multipliers``
        mesh: Normalized mesh points (0 first, 1 last, strictly increasing) or a
            prebuilt :class:`~transcriptolab.mesh.Mesh`
        degree: Collocation nodes per mesh interval, at least 1
        initial_time: Absolute horizon start (default 0); must be omitted when
            ``mesh`` is a Mesh
        final_time: Absolute horizon end (default 1); must be omitted when
            ``mesh`` is a Mesh
        interpolate_control_midpoints: Compute control interpolation residuals
        interpolate_multiplier_midpoints: Compute multiplier interpolation residuals

    Raises:
        ConfigurationError: invalid degree, mesh, horizon or problem counts
        InvalidMeshError: a mesh interval with non-positive duration
        BasisConstructionError: the Radau basis could not be computed
    """

    def __init__(
        self,
        problem: ProblemProtocol,
        mesh: Mesh | NumericArrayLike,
        degree: int,
        initial_time: float | None = None,
        final_time: float | None = None,
        interpolate_control_midpoints: bool = DEFAULT_INTERPOLATE_CONTROL_MIDPOINTS,
        interpolate_multiplier_midpoints: bool = DEFAULT_INTERPOLATE_MULTIPLIER_MIDPOINTS,
    ) -> None:
        self._dimensions = resolve_problem_dimensions(problem)
        self._basis: RadauBasisComponents = compute_radau_collocation_components(degree)
        self._mesh = resolve_mesh(mesh, initial_time, final_time)
        self._indexer = GridIndexer(self._mesh.num_mesh_intervals, self._basis.degree)
        self._interpolate_controls = bool(interpolate_control_midpoints)
        self._interpolate_multipliers = bool(interpolate_multiplier_midpoints)

        grid = self._build_grid()
        grid.flags.writeable = False
        self._grid = grid
        times = self._mesh.initial_time + self._mesh.duration * grid
        times.flags.writeable = False
        self._times = times

        logger.debug(
            "LGR transcription ready: degree=%d, intervals=%d, grid points=%d, states=%d",
            self.degree,
            self.num_mesh_intervals,
            self.num_grid_points,
            self._dimensions.num_states,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def basis(self) -> RadauBasisComponents:
        return self._basis

    @property
    def mesh(self) -> Mesh:
        return self._mesh

    @property
    def indexer(self) -> GridIndexer:
        return self._indexer

    @property
    def degree(self) -> int:
        return self._basis.degree

    @property
    def num_states(self) -> int:
        return self._dimensions.num_states

    @property
    def num_controls(self) -> int:
        return self._dimensions.num_controls

    @property
    def num_multipliers(self) -> int:
        return self._dimensions.num_multipliers

    @property
    def num_mesh_points(self) -> int:
        return self._mesh.num_mesh_points

    @property
    def num_mesh_intervals(self) -> int:
        return self._mesh.num_mesh_intervals

    @property
    def num_grid_points(self) -> int:
        return self._indexer.num_grid_points

    @property
    def num_defects_per_mesh_interval(self) -> int:
        return self.degree * self.num_states

    @property
    def num_interpolating_points_per_mesh_interval(self) -> int:
        return self.degree - 1

    @property
    def interpolate_control_midpoints(self) -> bool:
        return self._interpolate_controls

    @property
    def interpolate_multiplier_midpoints(self) -> bool:
        return self._interpolate_multipliers

    @property
    def grid_times(self) -> FloatArray:
        """Absolute times of every grid point (read-only)."""
        return self._times

    def _build_grid(self) -> FloatArray:
        points = self._mesh.points
        grid = np.empty(self.num_grid_points, dtype=np.float64)
        for imesh in range(self.num_mesh_intervals):
            igrid = imesh * self.degree
            start = points[imesh]
            grid[igrid] = start
            grid[igrid + 1 : igrid + self.degree + 1] = (
                start + (points[imesh + 1] - start) * self._basis.collocation_nodes
            )
        # Radau's last node lands on the mesh point up to rounding; pin it exactly
        grid[:: self.degree] = points
        return grid

    # ------------------------------------------------------------------
    # Grid quantities
    # ------------------------------------------------------------------

    def create_grid(self) -> FloatArray:
        """Normalized time of every grid point."""
        return self._grid.copy()

    def create_mesh_indices(self) -> FloatArray:
        """1 at every mesh-interval left endpoint and at the final grid point, else 0."""
        indices = np.zeros(self.num_grid_points, dtype=np.float64)
        for imesh in range(self.num_mesh_intervals):
            indices[imesh * self.degree] = 1.0
        indices[self.num_grid_points - 1] = 1.0
        return indices

    def create_quadrature_coefficients(self) -> FloatArray:
        """Weights approximating the integral over the horizon as a sum over grid points.

        The coefficients sum to the horizon duration; left mesh points of
        intervals carry no weight since they are not Radau nodes.
        """
        weights = self._basis.quadrature_weights
        interval_durations = self._mesh.interval_durations

        quad_coeffs = np.zeros(self.num_grid_points, dtype=np.float64)
        for imesh in range(self.num_mesh_intervals):
            igrid = imesh * self.degree
            for d in range(self.degree):
                quad_coeffs[igrid + d + 1] += weights[d] * interval_durations[imesh]
        return quad_coeffs

    # ------------------------------------------------------------------
    # Residuals
    # ------------------------------------------------------------------

    def split_states(self, states: TrialMatrix) -> list[TrialMatrix]:
        """Split a ``num_states x num_grid_points`` matrix into per-interval blocks.

        Adjacent blocks share the mesh-point column between them.
        """
        kind = symbolic_type(states)
        states = as_trial_matrix(states, kind)
        validate_matrix_shape(
            states, (self.num_states, self.num_grid_points), "states", "state splitting"
        )
        blocks = []
        for imesh in range(self.num_mesh_intervals):
            columns = self._indexer.interval_slice(imesh)
            block = states[:, columns]
            blocks.append(block.copy() if kind is None else block)
        return blocks

    def calc_defects(
        self, states: Sequence[TrialMatrix], derivatives: TrialMatrix
    ) -> TrialMatrix:
        """Dynamics defects for every mesh interval.

        Args:
            states: One ``num_states x (degree + 1)`` matrix per mesh interval
                holding the state at the interval's left mesh point followed by
                its collocation nodes
            derivatives: ``num_states x num_grid_points`` state derivatives from
                the dynamics; the column at grid index 0 is ignored

        Returns:
            ``(degree * num_states) x num_mesh_intervals`` matrix whose row block
            ``d`` of column ``i`` is the residual at collocation node ``d`` of
            interval ``i``. Numeric inputs give a numpy array, CasADi inputs a
            matrix of the same CasADi type.

        Raises:
            DimensionMismatchError: wrong interval count or matrix shapes
        """
        ns = self.num_states
        degree = self.degree

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
        state_blocks = []
        for imesh, block in enumerate(states):
            x_i = as_trial_matrix(block, kind)
            validate_matrix_shape(
                x_i, (ns, degree + 1), f"states of mesh interval {imesh}", "defect calculation"
            )
            state_blocks.append(x_i)

        diff_matrix = self._basis.differentiation_matrix
        defects = allocate(kind, degree * ns, self.num_mesh_intervals)
        for imesh, x_i in enumerate(state_blocks):
            igrid = imesh * degree
            h = float(self._times[igrid + degree] - self._times[igrid])
            colloc = self._indexer.collocation_slice(imesh)
            validate_column_range(colloc.start, colloc.stop, self.num_grid_points, "derivatives")
            xdot_i = xdot[:, colloc]

            residual = h * xdot_i - mtimes(x_i, diff_matrix)
            for d in range(degree):
                defects[d * ns : (d + 1) * ns, imesh] = residual[:, d]
        return defects

    def _calc_interpolating_variables(
        self, variables: TrialMatrix | None, num_variables: int, name: str
    ) -> TrialMatrix:
        if variables is None:
            raise DimensionMismatchError(
                f"{name} are required, expected shape {(num_variables, self.num_grid_points)}",
                "Shape mismatch in interpolation residuals",
            )
        kind = symbolic_type(variables)
        variables = as_trial_matrix(variables, kind)
        validate_matrix_shape(
            variables, (num_variables, self.num_grid_points), name, "interpolation residuals"
        )

        num_interior = self.num_interpolating_points_per_mesh_interval
        roots = [float(root) for root in self._basis.legendre_roots]
        interp = allocate(kind, num_variables, self.num_mesh_intervals * num_interior)
        for imesh in range(self.num_mesh_intervals):
            igrid = imesh * self.degree
            x_i = variables[:, igrid]
            x_ip1 = variables[:, igrid + self.degree]
            for d in range(num_interior):
                x_t = variables[:, igrid + d + 1]
                interp[:, imesh * num_interior + d] = x_t - (roots[d] * (x_ip1 - x_i) + x_i)
        return interp

    def _empty_interpolation(
        self, variables: TrialMatrix | None, num_variables: int
    ) -> TrialMatrix:
        return allocate(symbolic_type(variables), num_variables, 0)

    def calc_interpolating_controls(self, controls: TrialMatrix | None) -> TrialMatrix:
        """Deviation of interior control values from linear interpolation of the endpoints.

        Column ``i * (degree - 1) + d`` compares the control at the interval's
        ``d``-th interior grid point with the straight line between the
        interval's mesh points evaluated at the ``d``-th Legendre root. Empty
        (zero columns) when disabled or when the problem has no controls.
        """
        if not (self.num_controls and self._interpolate_controls):
            return self._empty_interpolation(controls, self.num_controls)
        return self._calc_interpolating_variables(controls, self.num_controls, "controls")

    def calc_interpolating_multipliers(self, multipliers: TrialMatrix | None) -> TrialMatrix:
        """Multiplier counterpart of :meth:`calc_interpolating_controls`."""
        if not (self.num_multipliers and self._interpolate_multipliers):
            return self._empty_interpolation(multipliers, self.num_multipliers)
        return self._calc_interpolating_variables(
            multipliers, self.num_multipliers, "multipliers"
        )
