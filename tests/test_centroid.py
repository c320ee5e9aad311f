import numpy as np
import pytest

from src.stippling.centroid import polygon_bounds, weighted_centroid
from src.stippling.density_field import Polarity


SQUARE = np.array([[2.0, 2.0], [10.0, 2.0], [10.0, 10.0], [2.0, 10.0]])


def test_polygon_bounds():
    assert polygon_bounds(SQUARE) == (2.0, 2.0, 10.0, 10.0)


def test_uniform_density_gives_geometric_centroid(black_field):
    rng = np.random.default_rng(0)
    x, y = weighted_centroid(SQUARE, black_field, 20000, Polarity.DARK_ON_LIGHT, rng=rng)
    assert x == pytest.approx(6.0, abs=0.1)
    assert y == pytest.approx(6.0, abs=0.1)


def test_triangle_centroid(black_field):
    triangle = np.array([[0.0, 0.0], [15.0, 0.0], [0.0, 15.0]])
    rng = np.random.default_rng(1)
    x, y = weighted_centroid(triangle, black_field, 40000, Polarity.DARK_ON_LIGHT, rng=rng)
    assert x == pytest.approx(5.0, abs=0.15)
    assert y == pytest.approx(5.0, abs=0.15)


def test_centroid_pulled_towards_dense_side(split_field):
    rect = np.array([[0.0, 0.0], [20.0, 0.0], [20.0, 10.0], [0.0, 10.0]])
    rng = np.random.default_rng(2)

    x, _ = weighted_centroid(rect, split_field, 20000, Polarity.DARK_ON_LIGHT, rng=rng)
    assert x == pytest.approx(5.0, abs=0.2)

    x, _ = weighted_centroid(rect, split_field, 20000, Polarity.LIGHT_ON_DARK, rng=rng)
    assert x == pytest.approx(15.0, abs=0.2)


def test_zero_weight_region_returns_first_vertex(black_field):
    # A black region has no weight when light stipples are wanted
    x, y = weighted_centroid(SQUARE, black_field, 500, Polarity.LIGHT_ON_DARK)
    assert (x, y) == (2.0, 2.0)
    assert not np.isnan([x, y]).any()


def test_no_samples_inside_returns_first_vertex(black_field):
    class EdgeRng:
        """Puts every sample on the bounding box corner opposite the triangle"""

        def random(self, n):
            return np.ones(n) * 0.999

    triangle = np.array([[1.0, 1.0], [9.0, 1.0], [1.0, 9.0]])
    assert weighted_centroid(triangle, black_field, 10, Polarity.DARK_ON_LIGHT, rng=EdgeRng()) == (1.0, 1.0)


def test_result_stays_inside_polygon_box(gradient_field):
    cell = np.array([[60.0, 0.0], [64.0, 0.0], [64.0, 32.0], [60.0, 32.0]])
    for seed in range(5):
        x, y = weighted_centroid(cell, gradient_field, 200, Polarity.LIGHT_ON_DARK,
                                 rng=np.random.default_rng(seed))
        assert 60.0 <= x < 64.0
        assert 0.0 <= y < 32.0
