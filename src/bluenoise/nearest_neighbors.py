from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
from scipy.spatial import Delaunay, QhullError

from bluenoise.common import Vec2


@dataclass(frozen=True)
class SpacingStats:
    count: int
    min: float
    max: float
    mean: float


class NearestNeighbors:
    """
    Nearest neighbour queries over a finished point set.

    A point's nearest neighbour is always one of its Delaunay neighbours, so
    only triangulation edges are measured. Sets too small or too degenerate
    to triangulate are measured pairwise instead.
    """

    def __init__(self, points: npt.ArrayLike):
        self.points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        self.sol: Delaunay | None = None
        if len(self.points) >= 3:
            try:
                self.sol = Delaunay(self.points)
            except QhullError:
                self.sol = None

    def nearest_vertex(self, point: Vec2) -> int:
        if len(self.points) == 0:
            raise ValueError("no points")
        return int(np.argmin(np.linalg.norm(self.points - np.asarray(point), axis=1)))

    def distance(self, i, j) -> float:
        return float(np.linalg.norm(self.points[i] - self.points[j]))

    def nearest_distances(self) -> np.ndarray:
        n = len(self.points)
        if n < 2:
            return np.empty(0, dtype=np.float64)
        if self.sol is None:
            return self._brute_force_distances()

        indices, neighbors = self.sol.vertex_neighbor_vertices
        out = np.empty(n, dtype=np.float64)
        for i in range(n):
            around = neighbors[indices[i]:indices[i + 1]]
            out[i] = np.min(np.linalg.norm(self.points[around] - self.points[i], axis=1))
        return out

    def min_spacing(self) -> float:
        d = self.nearest_distances()
        return float(d.min()) if d.size else float("inf")

    def max_gap(self) -> float:
        d = self.nearest_distances()
        return float(d.max()) if d.size else 0.0

    def stats(self) -> SpacingStats:
        d = self.nearest_distances()
        if not d.size:
            return SpacingStats(count=len(self.points), min=float("inf"), max=0.0, mean=0.0)
        return SpacingStats(count=len(self.points), min=float(d.min()), max=float(d.max()), mean=float(d.mean()))

    def _brute_force_distances(self) -> np.ndarray:
        diff = self.points[:, None, :] - self.points[None, :, :]
        d = np.linalg.norm(diff, axis=2)
        np.fill_diagonal(d, np.inf)
        return d.min(axis=1)

    def __len__(self):
        return len(self.points)
