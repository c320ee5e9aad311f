"""
Voronoi partition of the stipple set, clipped to the image rectangle
"""

from typing import List, Optional, Protocol, Sequence, Tuple

import numpy as np
from scipy.spatial import QhullError, Voronoi

from .errors import PartitionError

Bounds = Tuple[float, float, float, float]


class PartitionProvider(Protocol):
    """One polygon (or None) per input point, in input order"""

    def partition(self, points: np.ndarray, bounds: Bounds) -> Sequence[Optional[np.ndarray]]:
        ...


def _order_vertices(vertices: np.ndarray) -> np.ndarray:
    # Cells are convex, so sorting by angle around the mean gives a simple ring
    center = vertices.mean(axis=0)
    angles = np.arctan2(vertices[:, 1] - center[1], vertices[:, 0] - center[0])
    return vertices[np.argsort(angles)]


class VoronoiPartition:
    """
    Bounded Voronoi cells via scipy.spatial.Voronoi

    The points are reflected across the four edges of the bounding rectangle
    before triangulation. Every original point strictly inside the rectangle
    then owns a finite cell whose edges on the rectangle coincide with the
    rectangle's sides. Points lying on an edge get no cell.
    """

    def __init__(self, qhull_options=None):
        self.qhull_options = qhull_options

    def partition(self, points: np.ndarray, bounds: Bounds) -> List[Optional[np.ndarray]]:
        points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        n = len(points)
        if n == 0:
            return []

        x0, y0, x1, y1 = bounds
        # Points lying on an edge would be their own reflection across it
        left = points[points[:, 0] > x0].copy()
        left[:, 0] = 2 * x0 - left[:, 0]
        right = points[points[:, 0] < x1].copy()
        right[:, 0] = 2 * x1 - right[:, 0]
        top = points[points[:, 1] > y0].copy()
        top[:, 1] = 2 * y0 - top[:, 1]
        bottom = points[points[:, 1] < y1].copy()
        bottom[:, 1] = 2 * y1 - bottom[:, 1]
        mirrored = np.concatenate([points, left, right, top, bottom])

        try:
            vor = Voronoi(mirrored, qhull_options=self.qhull_options)
        except (QhullError, ValueError) as e:
            raise PartitionError(f"Voronoi diagram failed for {n} points: {e}") from e

        point_region = vor.point_region[:n]
        region_ids, counts = np.unique(point_region, return_counts=True)
        shared = set(region_ids[counts > 1].tolist())

        # Coincident points get no cell, whichever of them Qhull kept
        _, inverse, dup_counts = np.unique(points, axis=0, return_inverse=True, return_counts=True)
        coincident = dup_counts[np.ravel(inverse)] > 1

        cells: List[Optional[np.ndarray]] = []
        for i, region_idx in enumerate(point_region):
            region_idx = int(region_idx)
            if coincident[i] or region_idx < 0 or region_idx in shared:
                cells.append(None)
                continue
            region = vor.regions[region_idx]
            if len(region) < 3 or -1 in region:
                cells.append(None)
                continue
            vertices = vor.vertices[region]
            vertices[:, 0] = np.clip(vertices[:, 0], x0, x1)
            vertices[:, 1] = np.clip(vertices[:, 1], y0, y1)
            cells.append(_order_vertices(vertices))
        return cells
