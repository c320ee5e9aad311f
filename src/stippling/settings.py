"""
Immutable run settings for one stippling run
"""

from dataclasses import dataclass, replace

from config import Config

from .density_field import Polarity
from .errors import InvalidInputError


@dataclass(frozen=True)
class StippleSettings:
    """
    Parameters fixed for the duration of one run

    Args:
        desired_count: Number of stipples (constant for the whole run)
        iterations: Number of relaxation steps in static mode
        sample_count: Monte Carlo samples per centroid estimate
        white_cutoff: Candidates with weight <= cutoff are rejected during initialization
        polarity: Which luminance extreme attracts stipples
        seed: Seed for the initial placement stream
        budget_factor: Multiple of the expected candidate count tried before uniform fill
        max_candidates: Hard ceiling on rejection candidates
        frame_interval: Minimum seconds between animated steps
    """
    desired_count: int = Config.STIPPLE_COUNT
    iterations: int = Config.ITERATIONS
    sample_count: int = Config.SAMPLE_COUNT
    white_cutoff: float = Config.WHITE_CUTOFF
    polarity: Polarity = Polarity(Config.POLARITY)
    seed: int = Config.SEED
    budget_factor: float = Config.BUDGET_FACTOR
    max_candidates: int = Config.MAX_CANDIDATES
    frame_interval: float = Config.FRAME_INTERVAL

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'polarity', Polarity.parse(self.polarity))
        self.validate()

    @classmethod
    def from_config(cls, config=Config, **overrides):
        """Build settings from a Config class, with keyword overrides"""
        values = dict(
            desired_count=config.STIPPLE_COUNT,
            iterations=config.ITERATIONS,
            sample_count=config.SAMPLE_COUNT,
            white_cutoff=config.WHITE_CUTOFF,
            polarity=config.POLARITY,
            seed=config.SEED,
            budget_factor=config.BUDGET_FACTOR,
            max_candidates=config.MAX_CANDIDATES,
            frame_interval=config.FRAME_INTERVAL,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_changes(self, **changes):
        return replace(self, **changes)

    def validate(self):
        if self.desired_count <= 0:
            raise InvalidInputError(f"desired_count must be positive, got {self.desired_count}")
        if self.iterations <= 0:
            raise InvalidInputError(f"iterations must be positive, got {self.iterations}")
        if self.sample_count <= 0:
            raise InvalidInputError(f"sample_count must be positive, got {self.sample_count}")
        if not 0.0 <= self.white_cutoff <= 1.0:
            raise InvalidInputError(f"white_cutoff must be in [0, 1], got {self.white_cutoff}")
        if self.budget_factor <= 0:
            raise InvalidInputError(f"budget_factor must be positive, got {self.budget_factor}")
        if self.max_candidates <= 0:
            raise InvalidInputError(f"max_candidates must be positive, got {self.max_candidates}")
        if self.frame_interval < 0:
            raise InvalidInputError(f"frame_interval must be non-negative, got {self.frame_interval}")
