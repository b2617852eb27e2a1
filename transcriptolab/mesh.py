# transcriptolab/mesh.py
"""
Mesh and grid bookkeeping for fixed-degree collocation transcriptions.

A mesh is immutable once built; mesh refinement constructs a new one.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from .exceptions import DataIntegrityError
from .input_validation import (
    validate_interval_durations,
    validate_normalized_mesh,
    validate_polynomial_degree,
    validate_positive_integer,
    validate_time_horizon,
)
from .tl_types import FloatArray, NumericArrayLike
from .utils.constants import DEFAULT_FINAL_TIME, DEFAULT_INITIAL_TIME
from .utils.coordinates import normalized_to_time


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Mesh:
    """Normalized mesh points in [0, 1] plus the absolute time horizon."""

    points: FloatArray
    initial_time: float = DEFAULT_INITIAL_TIME
    final_time: float = DEFAULT_FINAL_TIME
    interval_durations: FloatArray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        points = validate_normalized_mesh(self.points)
        validate_time_horizon(self.initial_time, self.final_time)

        durations = np.diff(points) * (self.final_time - self.initial_time)
        validate_interval_durations(durations)
        durations.flags.writeable = False

        object.__setattr__(self, "points", points)
        object.__setattr__(self, "initial_time", float(self.initial_time))
        object.__setattr__(self, "final_time", float(self.final_time))
        object.__setattr__(self, "interval_durations", durations)

        logger.debug(
            "Mesh built: %d intervals over [%g, %g]",
            self.num_mesh_intervals,
            self.initial_time,
            self.final_time,
        )

    @classmethod
    def from_points(
        cls,
        points: NumericArrayLike,
        initial_time: float = DEFAULT_INITIAL_TIME,
        final_time: float = DEFAULT_FINAL_TIME,
    ) -> "Mesh":
        return cls(np.asarray(points, dtype=np.float64), initial_time, final_time)

    @classmethod
    def uniform(
        cls,
        num_intervals: int,
        initial_time: float = DEFAULT_INITIAL_TIME,
        final_time: float = DEFAULT_FINAL_TIME,
    ) -> "Mesh":
        validate_positive_integer(num_intervals, "number of mesh intervals")
        return cls(np.linspace(0.0, 1.0, num_intervals + 1), initial_time, final_time)

    @property
    def num_mesh_points(self) -> int:
        return len(self.points)

    @property
    def num_mesh_intervals(self) -> int:
        return len(self.points) - 1

    @property
    def duration(self) -> float:
        return self.final_time - self.initial_time

    @property
    def times(self) -> FloatArray:
        """Absolute times of the mesh points."""
        return np.asarray(
            normalized_to_time(self.points, self.initial_time, self.final_time), dtype=np.float64
        )


@dataclass(frozen=True)
class GridIndexer:
    """Maps (mesh interval, node) pairs to flat grid indices.

    Every interval holds ``degree`` collocation nodes after its left endpoint,
    so ``grid_index = interval * degree + node`` and the last node of an
    interval is the first node of the next one.
    """

    num_mesh_intervals: int
    degree: int

    def __post_init__(self) -> None:
        validate_positive_integer(self.num_mesh_intervals, "number of mesh intervals")
        validate_polynomial_degree(self.degree)

    @property
    def num_grid_points(self) -> int:
        return self.num_mesh_intervals * self.degree + 1

    def _check_interval(self, interval: int) -> None:
        if not 0 <= interval < self.num_mesh_intervals:
            raise DataIntegrityError(
                f"Mesh interval {interval} out of range [0, {self.num_mesh_intervals})"
            )

    def grid_index(self, interval: int, node: int) -> int:
        """Flat grid index of ``node`` (0 = left endpoint) within ``interval``."""
        self._check_interval(interval)
        if not 0 <= node <= self.degree:
            raise DataIntegrityError(f"Node {node} out of range [0, {self.degree}]")
        return interval * self.degree + node

    def interval_slice(self, interval: int) -> slice:
        """Left endpoint plus the interval's collocation nodes."""
        start = self.grid_index(interval, 0)
        return slice(start, start + self.degree + 1)

    def collocation_slice(self, interval: int) -> slice:
        """The interval's collocation nodes, excluding its left endpoint."""
        start = self.grid_index(interval, 0)
        return slice(start + 1, start + self.degree + 1)

    def is_mesh_boundary(self, index: int) -> bool:
        if not 0 <= index < self.num_grid_points:
            raise DataIntegrityError(
                f"Grid index {index} out of range [0, {self.num_grid_points})"
            )
        return index % self.degree == 0
