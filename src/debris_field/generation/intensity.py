"""Shoreline acceptance gradient and power-law intensity transform."""

from __future__ import annotations

import random

from ..config import IntensityConfig, TerrainConfig
from .debris import DebrisCategory


def lerp(lo: float, hi: float, t: float) -> float:
    """Linearly interpolate between lo and hi."""
    return lo + (hi - lo) * t


class ClusterIntensityModel:
    """
    Probability and size shaping shared by the cluster and scatter strategies.

    The same u ** k transform drives both macro scale (cluster extent and
    population) and micro scale (individual object size).
    """

    def __init__(self, terrain: TerrainConfig, config: IntensityConfig):
        """
        Initialize the model.

        Args:
            terrain: Terrain configuration (size and shoreline position)
            config: Acceptance gradient and category thresholds
        """
        self.terrain = terrain
        self.config = config
        self.falloff_distance = config.falloff_fraction * terrain.size

    def shore_distance(self, y: float) -> float:
        """Inland distance from the shoreline; negative seaward."""
        return self.terrain.shoreline_y - y

    def acceptance_probability(self, x: float, y: float) -> float:
        """
        Get the probability of keeping a candidate at this position.

        Full acceptance at the shoreline, tapering linearly to the minimum
        probability at the falloff distance inland.
        """
        d = max(0.0, min(self.shore_distance(y), self.falloff_distance))
        t = d / self.falloff_distance
        return lerp(self.config.max_probability, self.config.min_probability, t)

    def accept(self, x: float, y: float, rng: random.Random) -> bool:
        """Draw once against the acceptance probability."""
        return rng.random() < self.acceptance_probability(x, y)

    @staticmethod
    def intensity(u: float, exponent: float) -> float:
        """Power-law transform of a uniform draw, skewed toward zero."""
        return u ** exponent

    def draw_intensity(self, rng: random.Random, exponent: float) -> float:
        return self.intensity(rng.random(), exponent)

    def categorize(self, intensity: float) -> DebrisCategory:
        """Classify an intensity value into a debris category."""
        if intensity >= self.config.rock_threshold:
            return DebrisCategory.ROCK
        if intensity >= self.config.log_threshold:
            return DebrisCategory.LOG
        if intensity >= self.config.towel_threshold:
            return DebrisCategory.TOWEL
        return DebrisCategory.SMALL_DEBRIS
