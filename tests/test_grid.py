import math

import pytest

from bluenoise.common import Point
from bluenoise.errors import OutOfBoundsError, PoissonDiscError
from bluenoise.grid import Grid


@pytest.fixture
def grid():
    return Grid(10.0, 10.0, 2.0)


def test_shape_follows_cell_size(grid):
    assert grid.cell_size == pytest.approx(2.0 / math.sqrt(2))
    assert grid.shape == (8, 8)
    assert len(grid) == 0


def test_cell_of(grid):
    assert grid.cell_of(Point(0.0, 0.0)) == (0, 0)
    assert grid.cell_of(Point(1.5, 3.0)) == (1, 2)
    assert grid.cell_of(Point(9.99, 9.99)) == (7, 7)


@pytest.mark.parametrize("p", [
    Point(-0.1, 1.0),
    Point(1.0, -0.1),
    Point(10.0, 1.0),
    Point(1.0, 10.0),
    Point(math.inf, math.inf),
    Point(math.nan, 1.0),
])
def test_cell_of_rejects_points_outside_region(grid, p):
    with pytest.raises(OutOfBoundsError) as exc:
        grid.cell_of(p)
    assert exc.value.point is p
    assert isinstance(exc.value, IndexError)
    assert isinstance(exc.value, PoissonDiscError)


def test_cell_of_clamps_rounding_at_upper_edge():
    g = Grid(4.0, 4.0, math.sqrt(2))
    ix, iy = g.cell_of(Point(math.nextafter(4.0, 0.0), math.nextafter(4.0, 0.0)))
    assert ix == g.cols - 1
    assert iy == g.rows - 1


def test_insert_and_get(grid):
    p = Point(5.0, 5.0)
    grid.insert(p)
    ix, iy = grid.cell_of(p)
    assert grid.get(ix, iy) == p
    assert grid.get(0, 0) is None
    assert len(grid) == 1
    assert list(grid) == [p]


@pytest.mark.parametrize("ix, iy", [(-1, 0), (0, -1), (8, 0), (0, 8)])
def test_get_is_bounds_checked(grid, ix, iy):
    with pytest.raises(IndexError):
        grid.get(ix, iy)


def test_occupied_cell_is_too_close(grid):
    grid.insert(Point(5.0, 5.0))
    assert grid.is_too_close(Point(5.5, 5.0))


@pytest.mark.parametrize("p, expected", [
    (Point(6.9, 5.0), True),
    (Point(7.1, 5.0), False),
    (Point(6.3, 6.3), True),
    (Point(6.5, 6.5), False),
    (Point(3.1, 5.0), True),
    (Point(2.9, 5.0), False),
    (Point(5.0, 2.9), False),
])
def test_is_too_close_scans_neighbourhood(grid, p, expected):
    grid.insert(Point(5.0, 5.0))
    assert grid.is_too_close(p) is expected


def test_neighbourhood_is_clamped_at_edges(grid):
    grid.insert(Point(0.5, 0.5))
    assert grid.is_too_close(Point(1.9, 0.5))
    assert not grid.is_too_close(Point(9.9, 9.9))
    assert not grid.is_too_close(Point(0.0, 3.0))
