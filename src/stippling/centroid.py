"""
Monte Carlo estimation of density-weighted polygon centroids
"""

import numpy as np
from matplotlib.path import Path


def polygon_bounds(polygon):
    """Axis-aligned bounding box (min_x, min_y, max_x, max_y)"""
    polygon = np.asarray(polygon, dtype=np.float64)
    min_x, min_y = polygon.min(axis=0)
    max_x, max_y = polygon.max(axis=0)
    return float(min_x), float(min_y), float(max_x), float(max_y)


def weighted_centroid(polygon, field, sample_count, polarity, rng=None):
    """
    Estimate the density-weighted centroid of a polygon

    Samples are drawn uniformly in the polygon's bounding box; those inside the
    polygon contribute their position weighted by the field's weight at that
    pixel. The sampler is unseeded unless a generator is passed in, so only
    the initial placement of a run is reproducible.

    Args:
        polygon: Array [M, 2] of vertices in image coordinates
        field: DensityField to integrate against
        sample_count: Number of Monte Carlo samples
        polarity: Polarity used to derive weights from luminance
        rng: Optional numpy Generator

    Returns:
        (x, y) tuple. The polygon's first vertex when no sample carried weight.
    """
    polygon = np.asarray(polygon, dtype=np.float64)
    if rng is None:
        rng = np.random.default_rng()

    min_x, min_y, max_x, max_y = polygon_bounds(polygon)
    xs = min_x + rng.random(sample_count) * (max_x - min_x)
    ys = min_y + rng.random(sample_count) * (max_y - min_y)

    inside = Path(polygon).contains_points(np.column_stack([xs, ys]))
    xs = xs[inside]
    ys = ys[inside]

    weights = field.weights(polarity)
    cols = np.clip(xs.astype(np.intp), 0, field.width - 1)
    rows = np.clip(ys.astype(np.intp), 0, field.height - 1)
    w = weights[rows, cols]

    total = w.sum()
    if total == 0:
        return float(polygon[0, 0]), float(polygon[0, 1])
    return float((xs * w).sum() / total), float((ys * w).sum() / total)
