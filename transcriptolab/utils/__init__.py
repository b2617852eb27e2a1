# transcriptolab/utils/__init__.py
"""
Utility functions for TranscriptoLab.
"""

from .casadi_utils import allocate, as_trial_matrix, mtimes, symbolic_type
from .coordinates import normalized_to_time


__all__ = [
    "allocate",
    "as_trial_matrix",
    "mtimes",
    "normalized_to_time",
    "symbolic_type",
]
