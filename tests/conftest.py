"""Shared fixtures: small synthetic density fields"""

import numpy as np
import pytest

from src.stippling.density_field import DensityField


WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def make_field(width, height, color=WHITE):
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = color
    pixels[:, :, 3] = 255
    return pixels


@pytest.fixture
def white_field():
    return DensityField(make_field(16, 16, WHITE))


@pytest.fixture
def black_field():
    return DensityField(make_field(16, 16, BLACK))


@pytest.fixture
def dot_field():
    """16x16 white image with a single black pixel at column 7, row 3"""
    pixels = make_field(16, 16, WHITE)
    pixels[3, 7, :3] = BLACK
    return DensityField(pixels)


@pytest.fixture
def split_field():
    """20x10 image, left half black, right half white"""
    pixels = make_field(20, 10, WHITE)
    pixels[:, :10, :3] = BLACK
    return DensityField(pixels)


@pytest.fixture
def gradient_field():
    """64x32 horizontal gradient from black to white"""
    ramp = np.linspace(0, 255, 64).astype(np.uint8)
    pixels = make_field(64, 32, WHITE)
    pixels[:, :, 0] = ramp
    pixels[:, :, 1] = ramp
    pixels[:, :, 2] = ramp
    return DensityField(pixels)


class RecordingSink:
    def __init__(self):
        self.steps = []
        self.finished = []

    def on_step(self, points, progress):
        self.steps.append((np.array(points), progress))

    def on_finish(self, state, points):
        self.finished.append((state, np.array(points)))


@pytest.fixture
def sink():
    return RecordingSink()
