"""
Configuration file for weighted Voronoi stippling
"""

import os


class Config:
    """Base configuration"""

    # Stipple placement
    STIPPLE_COUNT = 5000
    WHITE_CUTOFF = 0.0
    POLARITY = 'dark_on_light'  # 'dark_on_light' or 'light_on_dark'
    SEED = 42
    BUDGET_FACTOR = 10  # Rejection candidates allowed, as a multiple of the expected count
    MAX_CANDIDATES = 10_000_000  # Hard ceiling on rejection candidates per run

    # Relaxation
    ITERATIONS = 30
    SAMPLE_COUNT = 200  # Monte Carlo samples per centroid estimate

    # Animation
    FRAME_INTERVAL = 0.08  # Minimum seconds between two animated steps

    # Rendering parameters
    MIN_DOT_SIZE = 0.5
    DOT_SIZE_RANGE = 1.5
    COLORIZE = False
    COLOR_SAMPLES = 10
    RENDER_METHOD = 'solid'  # 'solid' or 'gaussian'
    LIGHT_BACKGROUND = '#ffffff'
    DARK_BACKGROUND = '#333333'

    # Output
    OUTPUT_DIR = 'outputs'

    @classmethod
    def create_directories(cls, *paths):
        """Create the given directories, or OUTPUT_DIR when none are given"""
        for path in paths or (cls.OUTPUT_DIR,):
            if path:
                os.makedirs(path, exist_ok=True)


class StaticConfig(Config):
    """Configuration for bounded (static) runs"""
    pass


class AnimatedConfig(Config):
    """Configuration for the live animated view"""
    STIPPLE_COUNT = 2000
    SAMPLE_COUNT = 100
