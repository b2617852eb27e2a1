# transcriptolab/utils/coordinates.py
"""
Coordinate transformation from normalized [0, 1] coordinates to physical time.
"""

from ..tl_types import FloatArray


def normalized_to_time(
    normalized: float | FloatArray,
    time_start: float,
    time_end: float,
) -> float | FloatArray:
    """
    Convert normalized coordinate(s) in [0, 1] to physical time.

    Math: time = time_start + (time_end - time_start) * normalized

    Args:
        normalized: Normalized coordinate(s), 0 at the horizon start, 1 at its end
        time_start: Physical start time
        time_end: Physical end time

    Returns:
        Physical time(s) corresponding to the normalized coordinate(s)
    """
    return time_start + (time_end - time_start) * normalized
