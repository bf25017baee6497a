"""Shared fixtures for generation tests."""

from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from debris_field.config import Config, TerrainConfig


@pytest.fixture
def config() -> Config:
    return Config.default()


@pytest.fixture
def small_config() -> Config:
    """Default configuration with reduced counts so passes stay quick."""
    base = Config.default()
    return replace(
        base,
        power_law=replace(base.power_law, candidates=3000),
        matern=replace(base.matern, num_centers=20, member_count=20),
        hybrid=replace(base.hybrid, num_centers=60, max_count=120),
    )


@pytest.fixture
def flat_terrain() -> TerrainConfig:
    return TerrainConfig(slope_gain=0.0, wave_amplitude=0.0, detail_amplitude=0.0)


def min_pairwise_distance(points: list[tuple[float, float]], chunk: int = 512) -> float:
    """Smallest distance between any two distinct points."""
    pts = np.asarray(points, dtype=np.float64)
    best = np.inf
    for start in range(0, len(pts), chunk):
        block = pts[start : start + chunk]
        diff = block[:, None, :] - pts[None, :, :]
        dist = np.sqrt((diff**2).sum(axis=2))
        # Ignore each point's distance to itself
        rows = np.arange(len(block))
        dist[rows, rows + start] = np.inf
        best = min(best, float(dist.min()))
    return best
