import logging
import math
import numbers
from dataclasses import dataclass

import numpy as np

from bluenoise.areas import rectangle
from bluenoise.common import AreaFn, Bounds, OutputFn, Point, RandomFn, Vec2
from bluenoise.errors import InvalidConfigError, OutOfBoundsError, SeedingError
from bluenoise.grid import Grid
from bluenoise.sources import uniform_source

logger = logging.getLogger(__name__)


# numpy scalars pass, bool does not
def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_count(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass
class PoissonDiscConfig:
    """
    width, height     : sampling region, points lie in [0, width) x [0, height)
    min_distance      : no two points closer than this; every point is also
                        less than twice this from the point that spawned it
    max_attempts      : candidates tried around each active point
    start             : first point, or None to pick one at random
    max_seed_attempts : random draws allowed when picking the first point
    """
    width: float = 1.0
    height: float = 1.0
    min_distance: float = 0.05
    max_attempts: int = 30
    start: Point | None = None
    max_seed_attempts: int = 10_000

    @property
    def cell_size(self) -> float:
        return self.min_distance / math.sqrt(2)

    def validate(self) -> None:
        for name in ("width", "height", "min_distance"):
            value = getattr(self, name)
            if not _is_real(value) or not math.isfinite(value) or value <= 0:
                raise InvalidConfigError(f"{name} must be a positive finite number, got {value!r}")
        if not _is_count(self.max_attempts) or self.max_attempts < 0:
            raise InvalidConfigError(f"max_attempts must be a non-negative integer, got {self.max_attempts!r}")
        if not _is_count(self.max_seed_attempts) or self.max_seed_attempts <= 0:
            raise InvalidConfigError(f"max_seed_attempts must be positive, got {self.max_seed_attempts!r}")

        s = self.start
        if s is not None and not (0 <= s.x < self.width and 0 <= s.y < self.height):
            raise OutOfBoundsError(s, self.width, self.height)


def point_around(p: Point, min_distance: float, random: RandomFn) -> Point:
    """Random point in the annulus [min_distance, 2 * min_distance) around p."""
    radius = min_distance * math.sqrt(random(3) + 1)
    angle = random(2 * math.pi)
    return Point(p.x + math.cos(angle) * radius, p.y + math.sin(angle) * radius)


def _seed_point(cfg: PoissonDiscConfig, random: RandomFn, in_area: AreaFn) -> Point:
    for _ in range(cfg.max_seed_attempts):
        p = Point(random(cfg.width), random(cfg.height))
        if in_area(p):
            return p
    raise SeedingError(cfg.max_seed_attempts)


def poisson_disc_distribution(
    cfg: PoissonDiscConfig,
    random: RandomFn,
    in_area: AreaFn,
    output: OutputFn,
) -> int:
    """
    Poisson disc sampling in 2D using Bridson's algorithm.

    cfg     : region, spacing and attempt limits
    random  : random(limit) -> float in [0, limit)
    in_area : in_area(point) -> bool, must reject anything outside
              [0, width) x [0, height); may carve out any other shape
    output  : called once per accepted point, in acceptance order

    returns: number of points passed to output

    Raises InvalidConfigError for a degenerate config, OutOfBoundsError when
    a start point or a candidate accepted by in_area lies outside the region,
    and SeedingError when no random start point is accepted by in_area.
    """
    cfg.validate()

    grid = Grid(cfg.width, cfg.height, cfg.min_distance)
    active: list[Point] = []

    def add(p: Point) -> None:
        output(p)
        grid.insert(p)
        active.append(p)

    start = cfg.start if cfg.start is not None else _seed_point(cfg, random, in_area)
    logger.debug("sampling %gx%g, min_distance=%g, grid %dx%d, start=(%g, %g)",
                 cfg.width, cfg.height, cfg.min_distance, grid.cols, grid.rows, start.x, start.y)
    add(start)

    while active:
        base = active.pop()
        for _ in range(cfg.max_attempts):
            p = point_around(base, cfg.min_distance, random)
            if in_area(p) and not grid.is_too_close(p):
                add(p)

    logger.debug("sampling finished with %d points", len(grid))
    return len(grid)


def poisson_disc_array(cfg: PoissonDiscConfig, random: RandomFn, in_area: AreaFn) -> np.ndarray:
    """Same as poisson_disc_distribution, collected into an (n, 2) array."""
    points: list[Vec2] = []
    poisson_disc_distribution(cfg, random, in_area, lambda p: points.append(p.as_tuple()))
    return np.array(points, dtype=np.float64).reshape(-1, 2)


def poisson_disc_2d(
    bounds: Bounds,
    radius: float,
    k: int = 30,
    seed: int | None = None,
) -> list[Vec2]:
    """
    Poisson disc sampling of an axis aligned rectangle.

    bounds : (xmin, ymin, xmax, ymax)
    radius : minimum distance between points
    k      : attempts per active point
    seed   : RNG seed (optional)

    returns: list of (x, y)
    """
    xmin, ymin, xmax, ymax = bounds
    cfg = PoissonDiscConfig(width=xmax - xmin, height=ymax - ymin, min_distance=radius, max_attempts=k)

    points: list[Vec2] = []
    poisson_disc_distribution(
        cfg,
        uniform_source(seed),
        rectangle(cfg.width, cfg.height),
        lambda p: points.append((p.x + xmin, p.y + ymin)),
    )
    return points
