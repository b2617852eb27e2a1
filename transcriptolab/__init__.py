"""
TranscriptoLab: direct-collocation transcription for optimal control

This package turns a continuous-time optimal control problem on a fixed mesh
into the algebraic quantities a nonlinear programming solver assembles:
quadrature coefficients for running costs, mesh-boundary indicators, dynamics
defects and interpolation residuals. The Legendre-Gauss-Radau pseudospectral
scheme is the primary transcription; a trapezoidal scheme shares its interface.

Quick Start:
    >>> import numpy as np
    >>> import transcriptolab as tlab
    >>> problem = tlab.ProblemDimensions(num_states=1, num_controls=1)
    >>> lgr = tlab.LegendreGaussRadau(problem, [0.0, 0.5, 1.0], degree=3, final_time=2.0)
    >>> lgr.create_mesh_indices()
    array([1., 0., 0., 1., 0., 0., 1.])

Logging:
    import logging
    logging.getLogger('transcriptolab').setLevel(logging.DEBUG)  # Detailed debugging
"""

import logging

from transcriptolab.exceptions import (
    BasisConstructionError,
    ConfigurationError,
    DataIntegrityError,
    DimensionMismatchError,
    InvalidMeshError,
    TranscriptoLabBaseError,
)
from transcriptolab.mesh import GridIndexer, Mesh
from transcriptolab.radau import RadauBasisComponents, compute_radau_collocation_components
from transcriptolab.tl_types import ProblemDimensions, ProblemProtocol
from transcriptolab.transcription import LegendreGaussRadau, TranscriptionScheme, Trapezoidal


__all__ = [
    "BasisConstructionError",
    "ConfigurationError",
    "DataIntegrityError",
    "DimensionMismatchError",
    "GridIndexer",
    "InvalidMeshError",
    "LegendreGaussRadau",
    "Mesh",
    "ProblemDimensions",
    "ProblemProtocol",
    "RadauBasisComponents",
    "TranscriptionScheme",
    "TranscriptoLabBaseError",
    "Trapezoidal",
    "compute_radau_collocation_components",
]

__version__ = "0.1.0"

# No handlers - user controls output
logging.getLogger(__name__).addHandler(logging.NullHandler())
