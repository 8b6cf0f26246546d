import itertools
import random
from typing import Iterable

import numpy as np

from bluenoise.common import RandomFn


def uniform_source(seed: int | None = None) -> RandomFn:
    rng = random.Random(seed)

    def draw(limit: float) -> float:
        return rng.random() * limit

    return draw


def numpy_source(seed: int | None = None) -> RandomFn:
    rng = np.random.default_rng(seed)

    def draw(limit: float) -> float:
        return float(rng.random()) * limit

    return draw


def scripted_source(values: Iterable[float]) -> RandomFn:
    """
    Replays a fixed sequence of unit values, scaled by each call's limit.
    The sequence repeats once exhausted.
    """
    values = list(values)
    if not values:
        raise ValueError("scripted_source needs at least one value")
    for v in values:
        if not 0.0 <= v < 1.0:
            raise ValueError(f"scripted values must lie in [0, 1), got {v!r}")

    it = itertools.cycle(values)

    def draw(limit: float) -> float:
        return next(it) * limit

    return draw
