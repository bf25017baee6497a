"""Tests for the height and normal fields."""

import math

import pytest

from debris_field.config import TerrainConfig
from debris_field.generation.terrain import HeightField, NormalField


def test_height_is_idempotent() -> None:
    field = HeightField(TerrainConfig(), seed=42)
    for x, y in [(0.0, 0.0), (123.4, 567.8), (800.0, 720.0), (-50.0, 1200.0)]:
        assert field.height(x, y) == field.height(x, y)


def test_same_seed_gives_same_field() -> None:
    a = HeightField(TerrainConfig(), seed=7)
    b = HeightField(TerrainConfig(), seed=7)
    assert a.height(310.0, 402.5) == b.height(310.0, 402.5)


def test_different_seeds_shift_the_noise() -> None:
    a = HeightField(TerrainConfig(), seed=1)
    b = HeightField(TerrainConfig(), seed=2)
    samples = [(x * 37.0, x * 53.0) for x in range(10)]
    assert any(a.height(x, y) != b.height(x, y) for x, y in samples)


def test_slope_rises_inland() -> None:
    config = TerrainConfig(wave_amplitude=0.0, detail_amplitude=0.0)
    field = HeightField(config)
    assert field.height(400.0, config.shoreline_y) == pytest.approx(0.0)
    assert field.height(400.0, 100.0) > field.height(400.0, 500.0) > 0.0
    assert field.height(400.0, 790.0) < 0.0


def test_noise_layers_stay_within_amplitude() -> None:
    config = TerrainConfig(slope_gain=0.0)
    field = HeightField(config, seed=3)
    max_height = config.wave_amplitude + config.detail_amplitude
    for i in range(50):
        z = field.height(i * 16.0, i * 11.0)
        # Simplex output can overshoot [-1, 1] slightly
        assert -0.5 <= z <= max_height + 0.5


def test_is_seaward() -> None:
    field = HeightField(TerrainConfig())
    assert field.is_seaward(750.0)
    assert not field.is_seaward(700.0)


def test_sample_grid_matches_height() -> None:
    field = HeightField(TerrainConfig(), seed=11)
    grid = field.sample_grid(8)
    assert grid.shape == (9, 9)
    step = field.size / 8
    assert grid[3, 5] == pytest.approx(field.height(5 * step, 3 * step))


def test_sample_grid_rejects_zero_resolution() -> None:
    with pytest.raises(ValueError):
        HeightField(TerrainConfig()).sample_grid(0)


class TestNormalField:
    """Tests for NormalField."""

    def test_flat_terrain_points_up(self, flat_terrain: TerrainConfig) -> None:
        normals = NormalField(HeightField(flat_terrain))
        assert normals.normal(100.0, 100.0) == pytest.approx((0.0, 0.0, 1.0))

    def test_flat_terrain_with_tiny_epsilon_is_vertical(self, flat_terrain: TerrainConfig) -> None:
        normals = NormalField(HeightField(flat_terrain), epsilon=1e-7)
        n = normals.normal(250.0, 250.0)
        assert n == NormalField.UP
        assert not any(math.isnan(c) for c in n)

    def test_unusable_difference_falls_back_to_vertical(self) -> None:
        class Cliff:
            def height(self, x: float, y: float) -> float:
                return 1e308 if x > 0 else -1e308

        # The height difference overflows to infinity
        assert NormalField(Cliff(), epsilon=1.0).normal(0.0, 0.0) == NormalField.UP

    @pytest.mark.parametrize("epsilon", [1e-3, 1e-7])
    def test_small_epsilon_keeps_the_slope(self, epsilon: float) -> None:
        config = TerrainConfig(slope_gain=400.0, wave_amplitude=0.0, detail_amplitude=0.0)
        field = HeightField(config)
        coarse = NormalField(field, epsilon=1.0).normal(400.0, 400.0)
        fine = NormalField(field, epsilon=epsilon).normal(400.0, 400.0)
        assert fine[1] > 0.1
        assert fine == pytest.approx(coarse, abs=1e-4)

    def test_normals_are_unit_length(self) -> None:
        normals = NormalField(HeightField(TerrainConfig(), seed=5))
        for i in range(20):
            nx, ny, nz = normals.normal(i * 37.0, i * 29.0)
            assert math.sqrt(nx * nx + ny * ny + nz * nz) == pytest.approx(1.0)
            assert nz > 0

    def test_inland_slope_tilts_toward_sea(self) -> None:
        config = TerrainConfig(wave_amplitude=0.0, detail_amplitude=0.0)
        nx, ny, nz = NormalField(HeightField(config)).normal(400.0, 400.0)
        assert nx == pytest.approx(0.0)
        # Height falls toward larger y, so the normal leans that way
        assert ny > 0
        assert nz > ny

    def test_normal_is_idempotent(self) -> None:
        normals = NormalField(HeightField(TerrainConfig(), seed=9))
        assert normals.normal(321.0, 123.0) == normals.normal(321.0, 123.0)

    def test_slope_angle(self, flat_terrain: TerrainConfig) -> None:
        assert NormalField(HeightField(flat_terrain)).slope_angle(10.0, 10.0) == pytest.approx(0.0)
