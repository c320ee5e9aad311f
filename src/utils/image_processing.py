"""
Image processing utilities for loading images and building density fields
"""

import os

import numpy as np
from PIL import Image

from src.stippling.density_field import DensityField
from src.stippling.errors import InvalidInputError


def load_image(image_path, size=None):
    """
    Load an image from file

    Args:
        image_path: Path to the image file
        size: Optional tuple (width, height) to resize the image

    Returns:
        PIL Image object in RGBA mode
    """
    if not os.path.isfile(image_path):
        raise InvalidInputError(f"Input image file not found: {image_path}")

    try:
        img = Image.open(image_path).convert('RGBA')
    except OSError as e:
        raise InvalidInputError(f"Invalid image file '{image_path}': {e}") from e

    if size is not None:
        img = img.resize(size, Image.BILINEAR)

    return img


def fit_to_max_side(image, max_side):
    """
    Downscale an image so its longest edge is at most max_side

    Args:
        image: PIL Image
        max_side: Maximum edge length in pixels (0 or None keeps the size)

    Returns:
        PIL Image
    """
    if not max_side:
        return image

    w, h = image.size
    if max(w, h) <= max_side:
        return image

    # Calculate new size maintaining aspect ratio
    if w > h:
        new_w = max_side
        new_h = max(1, int(h * max_side / w))
    else:
        new_h = max_side
        new_w = max(1, int(w * max_side / h))

    return image.resize((new_w, new_h), Image.BILINEAR)


def image_to_field(image):
    """
    Build a density field from a PIL Image or numpy array

    Args:
        image: PIL Image (any mode) or uint8 array [H, W, 3|4]

    Returns:
        DensityField
    """
    if isinstance(image, Image.Image):
        image = np.asarray(image.convert('RGBA'))
    return DensityField(image)


def load_field(image_path, max_side=None):
    """Load an image file straight into a DensityField"""
    image = fit_to_max_side(load_image(image_path), max_side)
    return image_to_field(image)


def save_image(image, save_path):
    """
    Save an image to file

    Args:
        image: PIL Image or numpy array
        save_path: Path where to save the image
    """
    if isinstance(image, np.ndarray):
        if image.ndim == 3 and image.shape[2] == 1:
            image = image.squeeze(2)
        image = Image.fromarray(image)

    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    image.save(save_path)
