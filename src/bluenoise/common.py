from dataclasses import dataclass
from typing import Callable, TypeAlias

Vec2: TypeAlias = tuple[float, float]
GVec2: TypeAlias = tuple[int, int]
Bounds: TypeAlias = tuple[float, float, float, float]  # xmin, ymin, xmax, ymax
Color: TypeAlias = tuple[int, int, int]


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def as_tuple(self) -> Vec2:
        return self.x, self.y


RandomFn: TypeAlias = Callable[[float], float]
AreaFn: TypeAlias = Callable[[Point], bool]
OutputFn: TypeAlias = Callable[[Point], None]


def squared_distance(a: Point, b: Point) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy
