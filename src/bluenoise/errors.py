from bluenoise.common import Point


class PoissonDiscError(Exception):
    pass


class InvalidConfigError(PoissonDiscError, ValueError):
    pass


class OutOfBoundsError(PoissonDiscError, IndexError):
    def __init__(self, point: Point, width: float, height: float):
        super().__init__(
            f"point ({point.x}, {point.y}) is outside the sampling region "
            f"[0, {width}) x [0, {height})"
        )
        self.point = point
        self.width = width
        self.height = height


class SeedingError(PoissonDiscError, RuntimeError):
    def __init__(self, attempts: int):
        super().__init__(f"could not seed: in_area rejected {attempts} random start points")
        self.attempts = attempts
