from bluenoise.common import Point

POINT_CHAR = "."
EMPTY_CHAR = " "


class AsciiMap:
    """Character buffer with one cell per unit square of the sampling region."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells = [[EMPTY_CHAR] * width for _ in range(height)]

    def plot(self, p: Point) -> None:
        self.cells[int(p.y)][int(p.x)] = POINT_CHAR

    def render(self) -> str:
        return "\n".join("".join(row) for row in self.cells)
