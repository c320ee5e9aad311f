import numpy as np
import pytest

from src.stippling.density_field import DensityField, Polarity, luminance_to_weight
from src.stippling.errors import InvalidInputError

from conftest import make_field


def test_luminance_uses_rec709_weights():
    pixels = make_field(3, 1)
    pixels[0, 0, :3] = (255, 0, 0)
    pixels[0, 1, :3] = (0, 255, 0)
    pixels[0, 2, :3] = (0, 0, 255)
    field = DensityField(pixels)

    assert field.luminance(0, 0) == pytest.approx(0.2126 * 255)
    assert field.luminance(1, 0) == pytest.approx(0.7152 * 255)
    assert field.luminance(2, 0) == pytest.approx(0.0722 * 255)


def test_coordinates_truncate_to_pixel():
    pixels = make_field(2, 2)
    pixels[1, 0, :3] = (10, 20, 30)
    field = DensityField(pixels)

    assert field.color(0.99, 1.5) == (10, 20, 30)
    assert field.color(1.0, 0.0) == (255, 255, 255)
    assert field.luminance(0.5, 1.999) == field.luminance(0, 1)


def test_color_returns_python_ints():
    field = DensityField(make_field(1, 1, (1, 2, 3)))
    r, g, b = field.color(0, 0)
    assert (r, g, b) == (1, 2, 3)
    assert all(type(c) is int for c in (r, g, b))


@pytest.mark.parametrize('polarity, black, white', [
    (Polarity.DARK_ON_LIGHT, 1.0, 0.0),
    (Polarity.LIGHT_ON_DARK, 0.0, 1.0),
])
def test_weight_follows_polarity(polarity, black, white):
    pixels = make_field(2, 1)
    pixels[0, 0, :3] = 0
    field = DensityField(pixels)

    assert field.weight(0, 0, polarity) == pytest.approx(black, abs=1e-9)
    assert field.weight(1, 0, polarity) == pytest.approx(white, abs=1e-9)


def test_weights_stay_in_unit_interval(gradient_field):
    for polarity in Polarity:
        weights = gradient_field.weights(polarity)
        assert weights.shape == (32, 64)
        assert weights.min() >= 0.0
        assert weights.max() <= 1.0


def test_weights_are_cached_and_read_only(gradient_field):
    weights = gradient_field.weights('dark_on_light')
    assert weights is gradient_field.weights(Polarity.DARK_ON_LIGHT)
    with pytest.raises(ValueError):
        weights[0, 0] = 0.5


def test_luminance_to_weight_on_arrays():
    lum = np.array([0.0, 127.5, 255.0])
    np.testing.assert_allclose(luminance_to_weight(lum, Polarity.DARK_ON_LIGHT), [1.0, 0.5, 0.0])
    np.testing.assert_allclose(luminance_to_weight(lum, Polarity.LIGHT_ON_DARK), [0.0, 0.5, 1.0])


def test_rgb_input_gets_opaque_alpha():
    field = DensityField(np.zeros((4, 5, 3), dtype=np.uint8))
    assert field.size == (5, 4)
    assert field.pixels.shape == (4, 5, 4)
    assert (field.pixels[:, :, 3] == 255).all()


def test_from_buffer_is_row_major():
    data = [0, 0, 0, 255] * 3 + [255, 255, 255, 255] * 3
    field = DensityField.from_buffer(3, 2, data)
    assert field.width == 3 and field.height == 2
    assert field.color(2, 0) == (0, 0, 0)
    assert field.color(0, 1) == (255, 255, 255)


@pytest.mark.parametrize('width, height, n', [(2, 2, 15), (0, 2, 0), (2, -1, 8)])
def test_from_buffer_rejects_bad_sizes(width, height, n):
    with pytest.raises(InvalidInputError):
        DensityField.from_buffer(width, height, [0] * n)


@pytest.mark.parametrize('shape', [(4, 4), (4, 4, 2), (0, 4, 4)])
def test_rejects_bad_pixel_arrays(shape):
    with pytest.raises(InvalidInputError):
        DensityField(np.zeros(shape, dtype=np.uint8))


def test_polarity_parse():
    assert Polarity.parse('LIGHT_ON_DARK') is Polarity.LIGHT_ON_DARK
    assert Polarity.parse(Polarity.DARK_ON_LIGHT) is Polarity.DARK_ON_LIGHT
    with pytest.raises(InvalidInputError):
        Polarity.parse('sepia')
