"""Tests for renderer color lookups."""

from debris_field.generation.debris import DebrisCategory
from debris_field.renderer import colors


def test_every_category_has_a_color() -> None:
    for category in DebrisCategory:
        assert category in colors.DEBRIS_COLORS


def test_lerp_color_clamps() -> None:
    assert colors.lerp_color((0, 0, 0), (100, 200, 50), 0.5) == (50, 100, 25)
    assert colors.lerp_color((0, 0, 0), (100, 200, 50), 2.0) == (100, 200, 50)
    assert colors.lerp_color((0, 0, 0), (100, 200, 50), -1.0) == (0, 0, 0)


def test_ground_color_splits_at_shoreline() -> None:
    assert colors.get_ground_color(0.0, True, 0.0, 1.0) == colors.SEA_DEEP
    assert colors.get_ground_color(1.0, False, 0.0, 1.0) == colors.SAND_HIGH


def test_debris_color_is_shaded_by_normal() -> None:
    base = colors.DEBRIS_COLORS[DebrisCategory.ROCK]
    assert colors.get_debris_color(DebrisCategory.ROCK, None) == base
    lit = colors.get_debris_color(DebrisCategory.ROCK, (-0.4, -0.4, 0.82))
    shadowed = colors.get_debris_color(DebrisCategory.ROCK, (0.7, 0.7, 0.1))
    assert sum(lit) > sum(shadowed)
