"""
Rendering utilities for drawing stipples as dots and exporting them to SVG
"""

import math
import os
from collections import namedtuple

import cv2
import numpy as np
from PIL import Image, ImageColor, ImageDraw

from config import Config
from src.stippling.density_field import Polarity
from src.stippling.errors import InvalidInputError


Dot = namedtuple('Dot', ['x', 'y', 'radius', 'fill'])


def dot_color(polarity):
    """Plain dot colour for a polarity as an (r, g, b) tuple"""
    if Polarity.parse(polarity) is Polarity.DARK_ON_LIGHT:
        return (0, 0, 0)
    return (255, 255, 255)


def background_color(polarity):
    """Canvas colour for a polarity as an (r, g, b) tuple"""
    if Polarity.parse(polarity) is Polarity.DARK_ON_LIGHT:
        return ImageColor.getrgb(Config.LIGHT_BACKGROUND)
    return ImageColor.getrgb(Config.DARK_BACKGROUND)


def fit_transform(image_size, canvas_size):
    """
    Scale and offsets that fit an image into a canvas, centred

    Args:
        image_size: (width, height) of the source image
        canvas_size: (width, height) of the target canvas

    Returns:
        (scale, offset_x, offset_y)
    """
    iw, ih = image_size
    cw, ch = canvas_size
    scale = min(cw / iw, ch / ih)
    offset_x = (cw - iw * scale) / 2
    offset_y = (ch - ih * scale) / 2
    return scale, offset_x, offset_y


def _average_color(field, x, y, radius, samples, rng):
    """Mean colour of random in-bounds samples within radius of (x, y), or None"""
    angles = rng.random(samples) * 2 * math.pi
    dists = rng.random(samples) * radius
    xs = x + dists * np.cos(angles)
    ys = y + dists * np.sin(angles)
    inside = (xs >= 0) & (xs < field.width) & (ys >= 0) & (ys < field.height)
    if not inside.any():
        return None

    colors = field.pixels[ys[inside].astype(np.intp), xs[inside].astype(np.intp), :3]
    mean = colors.astype(np.float64).mean(axis=0)
    return tuple(int(math.floor(c + 0.5)) for c in mean)


def compute_dots(points, field, polarity, canvas_size=None,
                 min_dot_size=Config.MIN_DOT_SIZE, dot_size_range=Config.DOT_SIZE_RANGE,
                 colorize=Config.COLORIZE, color_samples=Config.COLOR_SAMPLES, rng=None):
    """
    Turn stipple positions into styled dots in canvas coordinates

    Dot radius grows with the density weight under the pixel. With colorize,
    each dot takes the average colour of the image under it.

    Args:
        points: Array [N, 2] of (x, y) in image coordinates
        field: DensityField the stipples were relaxed against
        polarity: Polarity of the run
        canvas_size: Optional (width, height); defaults to the image size
        min_dot_size: Radius of a zero-weight dot, in canvas pixels
        dot_size_range: Extra radius of a full-weight dot, in canvas pixels
        colorize: Sample dot colours from the image
        color_samples: Number of colour samples per dot
        rng: Optional numpy Generator for colour sampling

    Returns:
        List of Dot
    """
    polarity = Polarity.parse(polarity)
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if canvas_size is None:
        canvas_size = field.size
    if rng is None:
        rng = np.random.default_rng()

    scale, offset_x, offset_y = fit_transform(field.size, canvas_size)
    weights = field.weights(polarity)
    plain = dot_color(polarity)

    dots = []
    for x, y in points:
        norm = weights[int(y), int(x)]
        radius = min_dot_size + norm * dot_size_range
        fill = plain
        if colorize:
            fill = _average_color(field, x, y, radius / scale, color_samples, rng) or plain
        dots.append(Dot(offset_x + x * scale, offset_y + y * scale, float(radius), fill))
    return dots


def render_stipples(dots, canvas_size, background=(255, 255, 255)):
    """
    Render dots as filled circles

    Args:
        dots: List of Dot in canvas coordinates
        canvas_size: (width, height) of the output image
        background: Background (r, g, b)

    Returns:
        PIL Image (RGB)
    """
    img = Image.new('RGB', tuple(int(s) for s in canvas_size), color=tuple(background))
    draw = ImageDraw.Draw(img)

    for x, y, radius, fill in dots:
        draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=tuple(fill))

    return img


def render_stipples_gaussian(dots, canvas_size, background=(255, 255, 255)):
    """
    Render dots with Gaussian falloff for a softer appearance

    Args:
        dots: List of Dot in canvas coordinates
        canvas_size: (width, height) of the output image
        background: Background (r, g, b)

    Returns:
        PIL Image (RGB)
    """
    w, h = (int(s) for s in canvas_size)
    img = np.empty((h, w, 3), dtype=np.float32)
    img[:] = background

    for x, y, radius, fill in dots:
        # Odd kernel covering about three radii
        size = max(3, int(math.ceil(radius * 3)))
        if size % 2 == 0:
            size += 1

        kernel = cv2.getGaussianKernel(size, max(radius / 2, 0.3))
        kernel = kernel @ kernel.T
        kernel = (kernel / kernel.max()).astype(np.float32)

        cx, cy = int(round(x)), int(round(y))
        half = size // 2
        y_start = max(0, cy - half)
        y_end = min(h, cy + half + 1)
        x_start = max(0, cx - half)
        x_end = min(w, cx + half + 1)
        if y_end <= y_start or x_end <= x_start:
            continue

        k_y_start = y_start - (cy - half)
        k_x_start = x_start - (cx - half)
        alpha = kernel[k_y_start:k_y_start + (y_end - y_start), k_x_start:k_x_start + (x_end - x_start)]
        alpha = alpha[:, :, None]

        region = img[y_start:y_end, x_start:x_end]
        img[y_start:y_end, x_start:x_end] = region * (1 - alpha) + np.asarray(fill, dtype=np.float32) * alpha

    img = np.clip(img, 0, 255).astype(np.uint8)
    return Image.fromarray(img)


def create_stipple_image(points, field, polarity, canvas_size=None, method=Config.RENDER_METHOD, **kwargs):
    """
    Main function to render a stipple set to an image

    Args:
        points: Array [N, 2] of stipple positions in image coordinates
        field: DensityField the stipples were relaxed against
        polarity: Polarity of the run
        canvas_size: Optional (width, height) of the output; defaults to the image size
        method: Rendering method ('solid' or 'gaussian')
        **kwargs: Dot styling options for compute_dots

    Returns:
        PIL Image of the stippled result
    """
    if points is None or len(points) == 0:
        raise InvalidInputError("No stipple art generated to render")
    if canvas_size is None:
        canvas_size = field.size

    dots = compute_dots(points, field, polarity, canvas_size=canvas_size, **kwargs)
    background = background_color(polarity)

    if method == 'gaussian':
        return render_stipples_gaussian(dots, canvas_size, background)
    if method == 'solid':
        return render_stipples(dots, canvas_size, background)
    raise InvalidInputError(f"Unknown rendering method {method!r}")


def _hex(color):
    return '#{:02x}{:02x}{:02x}'.format(*color)


def stipples_to_svg(dots, canvas_size, background=(255, 255, 255)):
    """
    Serialize dots to an SVG document

    Args:
        dots: List of Dot in canvas coordinates
        canvas_size: (width, height) of the SVG viewport
        background: Background (r, g, b)

    Returns:
        SVG document as a string
    """
    if not dots:
        raise InvalidInputError("No stipple art generated to export")

    w, h = canvas_size
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">',
        f'<rect width="100%" height="100%" fill="{_hex(background)}"/>',
    ]
    for x, y, radius, fill in dots:
        parts.append(f'<circle cx="{x:.3f}" cy="{y:.3f}" r="{radius:.3f}" fill="{_hex(fill)}"/>')
    parts.append('</svg>')
    return '\n'.join(parts)


def save_svg(points, field, polarity, save_path, canvas_size=None, **kwargs):
    """
    Style a stipple set and write it as an SVG file

    Returns:
        Path of the written file
    """
    if points is None or len(points) == 0:
        raise InvalidInputError("No stipple art generated to export")
    if canvas_size is None:
        canvas_size = field.size

    dots = compute_dots(points, field, polarity, canvas_size=canvas_size, **kwargs)
    svg = stipples_to_svg(dots, canvas_size, background_color(polarity))

    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(save_path, 'w', encoding='utf-8') as f:
        f.write(svg)
    return save_path
