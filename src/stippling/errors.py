"""
Exceptions raised by the stippling core
"""


class StippleError(Exception):
    """Base class for all stippling errors"""


class InvalidInputError(StippleError, ValueError):
    """Raised before a run starts when the image or settings are unusable"""


class PartitionError(StippleError):
    """Raised by a partition provider when the Voronoi diagram cannot be built"""


class RelaxationError(StippleError):
    """Raised when a relaxation step is aborted by a collaborator failure"""
