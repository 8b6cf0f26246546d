import numpy as np

from bluenoise.areas import rectangle
from bluenoise.common import Point
from bluenoise.poisson import PoissonDiscConfig
from bluenoise.viewer import PoissonScene


def switchable_area(width, height):
    inside = rectangle(width, height)
    state = {"open": True}

    def in_area(p):
        return state["open"] and inside(p)

    return in_area, state


def test_scene_samples_on_creation():
    cfg = PoissonDiscConfig(width=10, height=10, min_distance=2)
    scene = PoissonScene(cfg, rectangle(10, 10), seed=1)
    assert scene.error is None
    assert scene.seed == 1
    assert len(scene.points) > 5
    assert scene.stats.count == len(scene.points)
    assert scene.stats.min >= 2 - 1e-9


def test_failed_resample_keeps_previous_points():
    cfg = PoissonDiscConfig(width=10, height=10, min_distance=2, max_seed_attempts=20)
    in_area, state = switchable_area(10, 10)
    scene = PoissonScene(cfg, in_area, seed=1)
    before = scene.points

    state["open"] = False
    assert scene.resample(2) is False
    assert scene.points is before
    assert scene.seed == 1
    assert "seed 2" in scene.error
    assert "could not seed" in scene.error

    state["open"] = True
    assert scene.resample(3) is True
    assert scene.error is None
    assert scene.seed == 3


def test_failed_first_run_leaves_scene_empty():
    cfg = PoissonDiscConfig(width=10, height=10, min_distance=2, max_seed_attempts=5)
    scene = PoissonScene(cfg, lambda p: False)
    assert scene.points.shape == (0, 2)
    assert scene.stats.count == 0
    assert scene.error is not None
    assert scene.hovered((5.0, 5.0)) is None


def test_hovered_point():
    cfg = PoissonDiscConfig(width=10, height=10, min_distance=2, max_attempts=0, start=Point(5, 5))
    scene = PoissonScene(cfg, rectangle(10, 10))
    np.testing.assert_array_equal(scene.points, [[5.0, 5.0]])
    assert scene.hovered((5.5, 5.0)) == Point(5.0, 5.0)
    assert scene.hovered((8.0, 8.0)) is None
