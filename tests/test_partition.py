import numpy as np
import pytest
from matplotlib.path import Path
from scipy.spatial import QhullError

from src.stippling import partition as partition_module
from src.stippling.errors import PartitionError
from src.stippling.partition import VoronoiPartition


BOUNDS = (0.0, 0.0, 10.0, 10.0)


def area(polygon):
    x, y = polygon[:, 0], polygon[:, 1]
    return 0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


def test_grid_points_split_rectangle_evenly():
    points = np.array([[2.5, 2.5], [7.5, 2.5], [2.5, 7.5], [7.5, 7.5]])
    cells = VoronoiPartition().partition(points, BOUNDS)

    assert len(cells) == 4
    for point, cell in zip(points, cells):
        assert cell is not None
        assert area(cell) == pytest.approx(25.0)
        assert Path(cell).contains_point(point)


def test_single_point_owns_whole_rectangle():
    cells = VoronoiPartition().partition(np.array([[3.0, 4.0]]), BOUNDS)
    assert area(cells[0]) == pytest.approx(100.0)


def test_cells_tile_rectangle_and_keep_order():
    rng = np.random.default_rng(0)
    points = rng.random((50, 2)) * 10
    cells = VoronoiPartition().partition(points, BOUNDS)

    assert sum(area(c) for c in cells) == pytest.approx(100.0)
    for point, cell in zip(points, cells):
        assert Path(cell).contains_point(point)
        assert (cell >= 0).all() and (cell <= 10).all()


def test_coincident_points_have_no_cell():
    points = np.array([[2.0, 2.0], [2.0, 2.0], [8.0, 8.0], [8.0, 2.0]])
    cells = VoronoiPartition().partition(points, BOUNDS)

    assert cells[0] is None
    assert cells[1] is None
    assert cells[2] is not None
    assert cells[3] is not None


def test_empty_input():
    assert VoronoiPartition().partition(np.empty((0, 2)), BOUNDS) == []


def test_qhull_failure_raises_partition_error(monkeypatch):
    def broken(*args, **kwargs):
        raise QhullError("QH6154 initial simplex is flat")

    monkeypatch.setattr(partition_module, 'Voronoi', broken)
    with pytest.raises(PartitionError):
        VoronoiPartition().partition(np.array([[1.0, 1.0], [2.0, 2.0]]), BOUNDS)
