import math
from typing import Iterator

from bluenoise.common import GVec2, Point, squared_distance
from bluenoise.errors import OutOfBoundsError

# Cells within two steps of a point's own cell cover its whole min_distance disc.
NEIGHBOURHOOD = 2


class Grid:
    """
    Background grid for Poisson disc sampling.

    Cells are min_distance / sqrt(2) wide, so a cell can hold at most one
    accepted point. Points are only ever added, the grid never shrinks.
    """

    def __init__(self, width: float, height: float, min_distance: float):
        self.width = width
        self.height = height
        self.min_distance = min_distance
        self.cell_size = min_distance / math.sqrt(2)
        self.cols = int(math.ceil(width / self.cell_size))
        self.rows = int(math.ceil(height / self.cell_size))

        self._cells: list[list[Point | None]] = [
            [None] * self.rows for _ in range(self.cols)
        ]
        self._count = 0

    @property
    def shape(self) -> GVec2:
        return self.cols, self.rows

    def cell_of(self, p: Point) -> GVec2:
        if not (0 <= p.x < self.width and 0 <= p.y < self.height):
            raise OutOfBoundsError(p, self.width, self.height)

        # x just below width can round up to cols
        ix = min(int(math.floor(p.x / self.cell_size)), self.cols - 1)
        iy = min(int(math.floor(p.y / self.cell_size)), self.rows - 1)
        return ix, iy

    def get(self, ix: int, iy: int) -> Point | None:
        if not (0 <= ix < self.cols and 0 <= iy < self.rows):
            raise IndexError(f"cell ({ix}, {iy}) outside grid of shape {self.shape}")
        return self._cells[ix][iy]

    def insert(self, p: Point) -> None:
        ix, iy = self.cell_of(p)
        self._cells[ix][iy] = p
        self._count += 1

    def is_too_close(self, p: Point) -> bool:
        gx, gy = self.cell_of(p)
        if self._cells[gx][gy] is not None:
            return True

        r2 = self.min_distance * self.min_distance
        for i in range(max(0, gx - NEIGHBOURHOOD), min(self.cols, gx + NEIGHBOURHOOD + 1)):
            column = self._cells[i]
            for j in range(max(0, gy - NEIGHBOURHOOD), min(self.rows, gy + NEIGHBOURHOOD + 1)):
                q = column[j]
                if q is not None and squared_distance(p, q) < r2:
                    return True
        return False

    def __iter__(self) -> Iterator[Point]:
        for column in self._cells:
            for q in column:
                if q is not None:
                    yield q

    def __len__(self) -> int:
        return self._count
