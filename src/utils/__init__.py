"""Utility functions for image loading, rendering and logging"""

from .image_processing import load_image, load_field, image_to_field, save_image
from .rendering import create_stipple_image, compute_dots, save_svg, stipples_to_svg
from .logging_setup import setup_logging

__all__ = [
    'load_image', 'load_field', 'image_to_field', 'save_image',
    'create_stipple_image', 'compute_dots', 'save_svg', 'stipples_to_svg',
    'setup_logging',
]
