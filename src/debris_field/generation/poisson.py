"""Blue-noise point sets via Bridson's Poisson-disk sampling."""

from __future__ import annotations

import logging
import math
import random

from ..config import ConfigError
from .spatial import Point, SpatialGrid

logger = logging.getLogger(__name__)


class BlueNoiseSampler:
    """
    Grid-accelerated Poisson-disk sampler.

    Produces a maximal point set over [0, width) x [0, height) in which no two
    points are closer than the minimum distance.
    """

    def __init__(self, rng: random.Random):
        """
        Initialize the sampler.

        Args:
            rng: Random source shared with the rest of the generation pass
        """
        self.rng = rng

    def sample(
        self,
        width: float,
        height: float,
        min_distance: float,
        max_attempts: int = 30,
    ) -> list[Point]:
        """
        Sample a blue-noise point set.

        Args:
            width: Domain width
            height: Domain height
            min_distance: Minimum distance between any two points
            max_attempts: Candidates tried around an active point before retiring it

        Returns:
            Points in acceptance order
        """
        if width <= 0 or height <= 0:
            raise ConfigError(f"sampling domain must have positive extent, got {width}x{height}")
        if min_distance <= 0:
            raise ConfigError(f"min_distance must be positive, got {min_distance}")
        if max_attempts < 1:
            raise ConfigError(f"max_attempts must be at least 1, got {max_attempts}")

        rng = self.rng
        cell_size = min_distance / math.sqrt(2)
        grid = SpatialGrid(width, height, cell_size)
        min_distance_sq = min_distance * min_distance

        first = (rng.uniform(0, width), rng.uniform(0, height))
        samples: list[Point] = [first]
        grid.insert(0, first)
        active: list[int] = [0]

        while active:
            slot = rng.randrange(len(active))
            origin_x, origin_y = samples[active[slot]]
            found = False

            for _ in range(max_attempts):
                # Candidate in the annulus [r, 2r)
                theta = rng.uniform(0, 2 * math.pi)
                dist = rng.uniform(min_distance, 2 * min_distance)
                candidate = (origin_x + dist * math.cos(theta), origin_y + dist * math.sin(theta))

                if not (0 <= candidate[0] < width and 0 <= candidate[1] < height):
                    continue

                if self._is_far_enough(candidate, samples, grid, min_distance, min_distance_sq):
                    index = len(samples)
                    samples.append(candidate)
                    grid.insert(index, candidate)
                    active.append(index)
                    found = True
                    break

            if not found:
                # Swap and pop
                active[slot] = active[-1]
                active.pop()

        logger.debug(
            "Poisson-disk sampling produced %d points over %.1fx%.1f (r=%.2f, k=%d)",
            len(samples), width, height, min_distance, max_attempts,
        )
        return samples

    @staticmethod
    def _is_far_enough(
        candidate: Point,
        samples: list[Point],
        grid: SpatialGrid,
        min_distance: float,
        min_distance_sq: float,
    ) -> bool:
        cx, cy = candidate
        for index in grid.neighbors_within(candidate, min_distance):
            sx, sy = samples[index]
            dx = sx - cx
            dy = sy - cy
            if dx * dx + dy * dy < min_distance_sq:
                return False
        return True
