"""Terrain fields - shoreline height and surface normals."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

import numpy as np
from noise import snoise2

from ..config import TerrainConfig

# Noise origins are drawn from this span so coordinates stay small enough for
# single precision inside the noise library
_NOISE_OFFSET_SPAN = 1024.0


@dataclass(frozen=True)
class NoiseLayer:
    """A single layer of coherent noise at a fixed frequency and amplitude."""

    frequency: float
    amplitude: float
    offset_x: float = 0.0
    offset_y: float = 0.0

    def sample(self, x: float, y: float) -> float:
        """Sample the layer, remapped from [-1, 1] to [0, amplitude]."""
        value = snoise2(
            x * self.frequency + self.offset_x,
            y * self.frequency + self.offset_y,
        )
        return (value + 1) / 2 * self.amplitude


class HeightField:
    """
    Continuous shoreline terrain.

    Height is a linear slope that rises inland from the shoreline, plus a
    large-scale "wave" layer and a small-scale detail layer of simplex noise.
    The field holds no state besides its layer parameters, so repeated
    evaluation at the same coordinate always gives the same height.
    """

    def __init__(self, config: TerrainConfig, seed: int = 0):
        """
        Initialize the height field.

        Args:
            config: Terrain configuration
            seed: Seed that shifts the noise origin of each layer
        """
        self.config = config
        self.size = config.size
        self.shoreline_y = config.shoreline_y
        self.seed = seed

        rng = random.Random(seed)
        self.layers = (
            NoiseLayer(
                config.wave_frequency,
                config.wave_amplitude,
                rng.uniform(0, _NOISE_OFFSET_SPAN),
                rng.uniform(0, _NOISE_OFFSET_SPAN),
            ),
            NoiseLayer(
                config.detail_frequency,
                config.detail_amplitude,
                rng.uniform(0, _NOISE_OFFSET_SPAN),
                rng.uniform(0, _NOISE_OFFSET_SPAN),
            ),
        )

    def slope(self, y: float) -> float:
        """Gentle rise inland, slightly negative seaward of the shoreline."""
        return (self.shoreline_y - y) / self.size * self.config.slope_gain

    def height(self, x: float, y: float) -> float:
        """Get terrain height at world coordinates."""
        z = self.slope(y)
        for layer in self.layers:
            z += layer.sample(x, y)
        return z

    def is_seaward(self, y: float) -> bool:
        """Check if a row lies beyond the shoreline."""
        return y > self.shoreline_y

    def sample_grid(self, resolution: int) -> np.ndarray:
        """
        Evaluate the field on a regular grid.

        Args:
            resolution: Number of cells per side

        Returns:
            Array of shape (resolution + 1, resolution + 1), rows are y and
            columns are x, sampled at i * size / resolution.
        """
        if resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {resolution}")

        step = self.size / resolution
        grid = np.zeros((resolution + 1, resolution + 1), dtype=np.float64)
        for iy in range(resolution + 1):
            for ix in range(resolution + 1):
                grid[iy, ix] = self.height(ix * step, iy * step)
        return grid


class NormalField:
    """Surface normals of a height field via central differences."""

    UP = (0.0, 0.0, 1.0)

    def __init__(self, height_field: HeightField, epsilon: float = 1.0):
        self.height_field = height_field
        self.epsilon = epsilon

    def normal(self, x: float, y: float) -> tuple[float, float, float]:
        """
        Get the unit surface normal at world coordinates.

        Builds tangents (2e, 0, dz_x) and (0, 2e, dz_y) and returns their
        normalized cross product. The cross product is divided through by 4e^2
        first, so its length does not shrink with a small epsilon. Falls back
        to vertical when the result has no usable length.
        """
        eps = self.epsilon
        height = self.height_field.height
        dz_x = height(x + eps, y) - height(x - eps, y)
        dz_y = height(x, y + eps) - height(x, y - eps)

        # (2e, 0, dz_x) x (0, 2e, dz_y) / 4e^2
        nx = -dz_x / (2 * eps)
        ny = -dz_y / (2 * eps)
        nz = 1.0

        length = math.sqrt(nx * nx + ny * ny + nz * nz)
        if not math.isfinite(length):
            return self.UP
        return (nx / length, ny / length, nz / length)

    def slope_angle(self, x: float, y: float) -> float:
        """Angle between the surface normal and vertical, in radians."""
        nz = self.normal(x, y)[2]
        return math.acos(max(-1.0, min(1.0, nz)))
