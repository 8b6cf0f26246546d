import math

import numpy as np
import pytest

from bluenoise.areas import rectangle
from bluenoise.nearest_neighbors import NearestNeighbors
from bluenoise.poisson import PoissonDiscConfig, poisson_disc_array
from bluenoise.sources import uniform_source


@pytest.fixture
def sampled():
    cfg = PoissonDiscConfig(width=30, height=20, min_distance=2.0)
    return cfg, poisson_disc_array(cfg, uniform_source(21), rectangle(30, 20))


def test_delaunay_matches_brute_force(sampled):
    _, xy = sampled
    nn = NearestNeighbors(xy)
    assert nn.sol is not None
    np.testing.assert_allclose(nn.nearest_distances(), nn._brute_force_distances())


def test_sampled_points_have_no_gaps(sampled):
    cfg, xy = sampled
    stats = NearestNeighbors(xy).stats()
    assert stats.count == len(xy)
    assert stats.min >= cfg.min_distance - 1e-9
    assert stats.max < 2 * cfg.min_distance
    assert stats.min <= stats.mean <= stats.max


def test_collinear_points_fall_back_to_pairwise():
    nn = NearestNeighbors([(0, 0), (1, 0), (3, 0)])
    assert nn.sol is None
    np.testing.assert_allclose(nn.nearest_distances(), [1.0, 1.0, 2.0])
    assert nn.min_spacing() == 1.0
    assert nn.max_gap() == 2.0


def test_two_points():
    nn = NearestNeighbors([(0, 0), (3, 4)])
    np.testing.assert_allclose(nn.nearest_distances(), [5.0, 5.0])
    assert nn.distance(0, 1) == 5.0


def test_single_and_empty():
    one = NearestNeighbors([(1, 1)])
    assert one.stats().count == 1
    assert one.min_spacing() == math.inf
    assert one.max_gap() == 0.0

    empty = NearestNeighbors(np.empty((0, 2)))
    assert len(empty) == 0
    with pytest.raises(ValueError):
        empty.nearest_vertex((0, 0))


def test_nearest_vertex():
    nn = NearestNeighbors([(0, 0), (10, 0), (0, 10), (10, 10)])
    assert nn.nearest_vertex((9, 1)) == 1
    assert nn.nearest_vertex((1, 8)) == 2
