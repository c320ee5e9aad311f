"""
Read-only density field over decoded RGBA pixel data
"""

from enum import Enum

import numpy as np

from .errors import InvalidInputError


LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)
_SNAP = 1e-9


class Polarity(Enum):
    """Which luminance extreme attracts stipples"""
    DARK_ON_LIGHT = 'dark_on_light'  # dark dots on a light background, dark pixels are dense
    LIGHT_ON_DARK = 'light_on_dark'  # light dots on a dark background, bright pixels are dense

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            names = ', '.join(p.value for p in cls)
            raise InvalidInputError(f"Unknown polarity {value!r}, expected one of: {names}")


def luminance_to_weight(luminance, polarity):
    """
    Map luminance in [0, 255] to a density weight in [0, 1]

    Works on scalars and numpy arrays alike.
    """
    normalized = luminance / 255.0
    if polarity is Polarity.DARK_ON_LIGHT:
        weight = 1.0 - normalized
    else:
        weight = normalized
    weight = np.clip(weight, 0.0, 1.0)
    # The smallest non-zero weight is 0.0722 / 255; anything within SNAP of an
    # end is rounding error from the luma sum, which need not hit 255 exactly
    weight = np.where(weight < _SNAP, 0.0, weight)
    return np.where(weight > 1.0 - _SNAP, 1.0, weight)


class DensityField:
    """
    Immutable view over a width x height RGBA image

    Scalar accessors truncate continuous coordinates to the containing pixel
    and perform no bounds checking; callers keep coordinates inside
    [0, width) x [0, height).

    Args:
        pixels: uint8 array [H, W, 4] (RGBA) or [H, W, 3] (RGB)
    """

    def __init__(self, pixels):
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise InvalidInputError(f"Expected pixel array of shape [H, W, 3|4], got {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise InvalidInputError("Image has no pixels")

        if pixels.shape[2] == 3:
            alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels.astype(np.uint8), alpha], axis=2)

        self._pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
        self._pixels.flags.writeable = False

        rgb = self._pixels[:, :, :3].astype(np.float64)
        r_w, g_w, b_w = LUMA_WEIGHTS
        self._luminance = r_w * rgb[:, :, 0] + g_w * rgb[:, :, 1] + b_w * rgb[:, :, 2]
        self._luminance.flags.writeable = False
        self._weights = {}

    @classmethod
    def from_buffer(cls, width, height, data):
        """
        Build a field from a flat RGBA buffer (4 samples per pixel, row-major)

        Args:
            width: Image width in pixels
            height: Image height in pixels
            data: Sequence of width * height * 4 values in [0, 255]
        """
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            raise InvalidInputError(f"Invalid image size {width}x{height}")
        buffer = np.asarray(data, dtype=np.uint8).ravel()
        if buffer.size != width * height * 4:
            raise InvalidInputError(
                f"Pixel buffer has {buffer.size} samples, expected {width * height * 4}"
            )
        return cls(buffer.reshape(height, width, 4))

    @property
    def width(self):
        return self._pixels.shape[1]

    @property
    def height(self):
        return self._pixels.shape[0]

    @property
    def size(self):
        return self.width, self.height

    @property
    def pixels(self):
        return self._pixels

    def luminance(self, x, y):
        return float(self._luminance[int(y), int(x)])

    def color(self, x, y):
        r, g, b = self._pixels[int(y), int(x), :3]
        return int(r), int(g), int(b)

    def weight(self, x, y, polarity):
        return float(self.weights(polarity)[int(y), int(x)])

    def weights(self, polarity):
        """
        Weight map [H, W] for the given polarity, computed once and cached
        """
        polarity = Polarity.parse(polarity)
        weights = self._weights.get(polarity)
        if weights is None:
            weights = luminance_to_weight(self._luminance, polarity)
            weights.flags.writeable = False
            self._weights[polarity] = weights
        return weights

    def __repr__(self):
        return f"DensityField({self.width}x{self.height})"
