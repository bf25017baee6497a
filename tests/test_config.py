"""Tests for configuration validation."""

from dataclasses import replace

import pytest

from debris_field.config import (
    BlueNoiseConfig,
    CategoryConfig,
    Config,
    ConfigError,
    HybridConfig,
    InsetBounds,
    IntensityConfig,
    PowerLawConfig,
    TerrainConfig,
)


def test_default_config_is_valid() -> None:
    config = Config.default()
    config.validate()
    assert config.terrain.size == 800.0
    assert config.terrain.shoreline_y == 720.0


@pytest.mark.parametrize("min_distance", [0.0, -1.0])
def test_blue_noise_rejects_non_positive_distance(min_distance: float) -> None:
    with pytest.raises(ConfigError):
        BlueNoiseConfig(min_distance=min_distance)


def test_blue_noise_rejects_zero_attempts() -> None:
    with pytest.raises(ConfigError):
        BlueNoiseConfig(max_attempts=0)


def test_inverted_ranges_fail_fast() -> None:
    with pytest.raises(ConfigError, match="radius"):
        HybridConfig(min_radius=100.0, max_radius=20.0)
    with pytest.raises(ConfigError, match="count"):
        HybridConfig(min_count=400, max_count=10)
    with pytest.raises(ConfigError, match="size"):
        PowerLawConfig(min_size=10.0, max_size=2.0)
    with pytest.raises(ConfigError, match="towel radius"):
        CategoryConfig(min_towel_radius=3.0, max_towel_radius=2.0)


def test_shoreline_must_lie_on_terrain() -> None:
    with pytest.raises(ConfigError):
        TerrainConfig(size=800.0, shoreline_y=900.0)


def test_exponent_must_be_positive() -> None:
    with pytest.raises(ConfigError):
        PowerLawConfig(exponent=0.0)


def test_probabilities_must_be_in_unit_interval() -> None:
    with pytest.raises(ConfigError):
        IntensityConfig(min_probability=-0.1)
    with pytest.raises(ConfigError):
        IntensityConfig(max_probability=1.5)


def test_inverted_probability_gradient_is_rejected() -> None:
    with pytest.raises(ConfigError, match="probability"):
        IntensityConfig(max_probability=0.2, min_probability=0.9)
    flat = IntensityConfig(max_probability=0.5, min_probability=0.5)
    assert flat.max_probability == flat.min_probability


def test_inset_bounds_leaving_no_area_are_rejected() -> None:
    base = Config.default()
    squeezed = replace(base.power_law, bounds=InsetBounds(left=500.0, right=400.0))
    with pytest.raises(ConfigError, match="no area"):
        replace(base, power_law=squeezed)


def test_mutated_section_is_caught_by_validate() -> None:
    config = Config.default()
    config.hybrid.min_radius = 500.0
    with pytest.raises(ConfigError):
        config.validate()


class TestInsetBounds:
    """Tests for InsetBounds."""

    def test_limits(self) -> None:
        bounds = InsetBounds(left=5.0, right=15.0, top=5.0, max_y_fraction=0.91)
        assert bounds.limits(800.0) == pytest.approx((5.0, 785.0, 5.0, 728.0))

    def test_contains_is_inclusive(self) -> None:
        bounds = InsetBounds(left=5.0, right=5.0, top=5.0, max_y_fraction=0.5)
        assert bounds.contains(5.0, 5.0, 100.0)
        assert bounds.contains(95.0, 50.0, 100.0)
        assert not bounds.contains(4.9, 20.0, 100.0)
        assert not bounds.contains(20.0, 50.1, 100.0)
