import numpy as np
import numpy.typing as npt

from bluenoise.common import AreaFn, Point


def in_bounds(p: Point, width: float, height: float) -> bool:
    return 0 <= p.x < width and 0 <= p.y < height


def rectangle(width: float, height: float) -> AreaFn:
    def inside(p: Point) -> bool:
        return in_bounds(p, width, height)

    return inside


def circle(cx: float, cy: float, radius: float, width: float, height: float) -> AreaFn:
    r2 = radius * radius

    def inside(p: Point) -> bool:
        dx = p.x - cx
        dy = p.y - cy
        return in_bounds(p, width, height) and dx * dx + dy * dy < r2

    return inside


def mask(image: npt.ArrayLike, width: float, height: float) -> AreaFn:
    """
    Region given by a boolean image stretched over [0, width) x [0, height).
    image[row][col] is indexed as image[y][x].
    """
    m = np.asarray(image, dtype=bool)
    if m.ndim != 2 or m.size == 0:
        raise ValueError(f"mask must be a non-empty 2D array, got shape {m.shape}")
    rows, cols = m.shape
    sx = cols / width
    sy = rows / height

    def inside(p: Point) -> bool:
        if not in_bounds(p, width, height):
            return False
        col = min(int(p.x * sx), cols - 1)
        row = min(int(p.y * sy), rows - 1)
        return bool(m[row, col])

    return inside


def intersect(*areas: AreaFn) -> AreaFn:
    def inside(p: Point) -> bool:
        return all(area(p) for area in areas)

    return inside
