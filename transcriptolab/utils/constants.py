from typing import TypeAlias


_Tolerance: TypeAlias = float
_Duration: TypeAlias = float

ZERO_TOLERANCE: _Tolerance = 1e-14
"""Tolerance for considering floating point values as zero."""

MESH_TOLERANCE: _Tolerance = 1e-12
"""Tolerance on the normalized mesh end points 0 and 1."""

BASIS_TOLERANCE: _Tolerance = 1e-10
"""Allowed deviation of the unit-interval quadrature weight sum from one."""

MINIMUM_TIME_INTERVAL: _Duration = 0.0
"""Mesh intervals must be strictly longer than this in absolute time."""

# Engine defaults
DEFAULT_INITIAL_TIME: float = 0.0
DEFAULT_FINAL_TIME: float = 1.0
DEFAULT_INTERPOLATE_CONTROL_MIDPOINTS: bool = True
DEFAULT_INTERPOLATE_MULTIPLIER_MIDPOINTS: bool = True
