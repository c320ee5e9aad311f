"""Weighted Voronoi stippling: seeded placement and density-weighted Lloyd relaxation"""

from .density_field import DensityField, Polarity
from .errors import InvalidInputError, PartitionError, RelaxationError, StippleError
from .initializer import initialize_points
from .partition import VoronoiPartition
from .relaxation import AnimatedRun, RelaxationDriver, RunState, StaticRun
from .seeded_stream import Mulberry32
from .settings import StippleSettings

__all__ = [
    'DensityField', 'Polarity', 'StippleSettings', 'Mulberry32', 'initialize_points',
    'VoronoiPartition', 'RelaxationDriver', 'StaticRun', 'AnimatedRun', 'RunState',
    'StippleError', 'InvalidInputError', 'PartitionError', 'RelaxationError',
]
