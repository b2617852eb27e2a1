import logging


# Library logger - no configuration, user controls output
logger = logging.getLogger(__name__)


class TranscriptoLabBaseError(Exception):
    """
    Base class for all TranscriptoLab-specific errors.

    All TranscriptoLab exceptions inherit from this class, allowing users to catch
    any TranscriptoLab-specific error with a single except clause.

    Args:
        message: The error message describing what went wrong
        context: Optional additional context about where the error occurred
    """

    def __init__(self, message: str, context: str | None = None) -> None:
        self.message = message
        self.context = context

        # Library logs at DEBUG level - user can promote if needed
        logger.debug("TranscriptoLab exception: %s", self._format_message())
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with optional context."""
        if self.context:
            return f"{self.message} (Context: {self.context})"
        return self.message


class ConfigurationError(TranscriptoLabBaseError):
    """
    Raised when a transcription is configured with invalid parameters.

    Detected while constructing a basis table, mesh or engine; the engine is
    never created.

    Examples:
        - Collocation degree below one or not an integer
        - Empty, unsorted or non-normalized mesh
        - Final time not after initial time
        - Negative variable counts in the problem descriptor
    """

    pass


class InvalidMeshError(ConfigurationError):
    """
    Raised when a mesh interval has non-positive duration.

    The message names the offending interval so the mesh can be rebuilt.
    """

    pass


class BasisConstructionError(TranscriptoLabBaseError):
    """
    Raised when the collocation basis for a degree cannot be computed.

    Root finding produced non-finite, unsorted or out-of-range nodes, or the
    resulting quadrature does not integrate the unit interval. Fatal at setup.
    """

    pass


class DataIntegrityError(TranscriptoLabBaseError):
    """
    Raised when internal data corruption or inconsistency is detected.

    Examples:
        - NaN or infinite values in computed basis quantities
        - Out-of-range grid indices
    """

    pass


class DimensionMismatchError(DataIntegrityError):
    """
    Raised when a trial matrix does not have the shape the transcription expects.

    The whole evaluation call is aborted; inputs are never truncated or padded.
    """

    pass
