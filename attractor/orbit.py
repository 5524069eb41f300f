import math
from dataclasses import dataclass

import numpy as np
from numba import njit


@njit
def compute_orbit(a, b, c, d, x, y, n_points):
    """
    Iterate x' = sin(a*x) + c*sin(a*y), y' = sin(b*y) + d*sin(b*x) from (x, y).
    The seed itself is not part of the output.
    """
    points = np.empty((n_points, 2), dtype=np.float64)

    for i in range(n_points):
        x, y = math.sin(a * x) + c * math.sin(a * y), math.sin(b * y) + d * math.sin(b * x)
        points[i, 0] = x
        points[i, 1] = y

    return points


@dataclass(frozen=True)
class Attractor:
    a: float
    b: float
    c: float
    d: float

    def step(self, point):
        x, y = point
        return (
            math.sin(self.a * x) + self.c * math.sin(self.a * y),
            math.sin(self.b * y) + self.d * math.sin(self.b * x),
        )

    def orbit(self, seed):
        """Endless forward orbit of seed, one point per request."""
        point = seed
        while True:
            point = self.step(point)
            yield point

    def take(self, seed, n_points):
        """First n_points of the orbit as an (n_points, 2) array."""
        if n_points < 0:
            raise ValueError(f"Number of points must not be negative, got {n_points}")
        return compute_orbit(
            float(self.a), float(self.b), float(self.c), float(self.d),
            float(seed[0]), float(seed[1]), int(n_points),
        )

    def batches(self, seed, total, batch_size):
        """
        Stream the first `total` points of the orbit in arrays of at most batch_size rows.
        Each batch picks up where the previous one stopped.
        """
        if batch_size <= 0:
            raise ValueError(f"Batch size must be positive, got {batch_size}")

        point = seed
        remaining = total
        while remaining > 0:
            points = self.take(point, min(batch_size, remaining))
            point = (points[-1, 0], points[-1, 1])
            remaining -= len(points)
            yield points

    def bounds(self):
        """Bounds on |x| and |y| for every point after the seed (sin stays in [-1, 1])."""
        return 1.0 + abs(self.c), 1.0 + abs(self.d)
