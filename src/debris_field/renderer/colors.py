"""Color definitions for the renderer."""

from ..generation.debris import DebrisCategory

# Background
BG_DARK = (28, 28, 32)
BG_SIDEBAR = (38, 38, 45)

# Terrain
SEA_COLOR = (0, 0, 128)  # Navy
SEA_DEEP = (0, 0, 80)
SAND_LOW = (190, 150, 100)
SAND_HIGH = (244, 164, 96)  # Sandy brown
SHORELINE = (230, 230, 210)

# Debris, by category
DEBRIS_COLORS: dict[DebrisCategory, tuple[int, int, int]] = {
    DebrisCategory.ROCK: (110, 110, 115),
    DebrisCategory.LOG: (120, 72, 36),
    DebrisCategory.TOWEL: (220, 60, 90),
    DebrisCategory.SMALL_DEBRIS: (200, 30, 30),
}

NORMAL_COLOR = (255, 255, 255)

# UI
TEXT_PRIMARY = (240, 240, 245)
TEXT_SECONDARY = (160, 160, 170)
TEXT_ACCENT = (100, 200, 255)
DIVIDER = (60, 60, 70)


def lerp_color(
    color1: tuple[int, int, int],
    color2: tuple[int, int, int],
    t: float,
) -> tuple[int, int, int]:
    """Linearly interpolate between two colors."""
    t = max(0.0, min(1.0, t))
    return (
        int(color1[0] + (color2[0] - color1[0]) * t),
        int(color1[1] + (color2[1] - color1[1]) * t),
        int(color1[2] + (color2[2] - color1[2]) * t),
    )


def get_ground_color(height: float, seaward: bool, min_height: float, max_height: float) -> tuple[int, int, int]:
    """
    Get ground color based on elevation.

    Args:
        height: Terrain height
        seaward: Whether the point lies beyond the shoreline
        min_height: Lowest height on the terrain
        max_height: Highest height on the terrain

    Returns:
        RGB color tuple for the ground at this elevation
    """
    span = max_height - min_height
    t = (height - min_height) / span if span > 0 else 0.5
    if seaward:
        return lerp_color(SEA_DEEP, SEA_COLOR, t)
    return lerp_color(SAND_LOW, SAND_HIGH, t)


def get_debris_color(
    category: DebrisCategory,
    normal: tuple[float, float, float] | None,
) -> tuple[int, int, int]:
    """Get the color for a debris object, shaded by its surface tilt."""
    base = DEBRIS_COLORS[category]
    if normal is None:
        return base

    # Light from the upper left
    light = (-0.4, -0.4, 0.82)
    shade = max(0.0, normal[0] * light[0] + normal[1] * light[1] + normal[2] * light[2])
    return lerp_color((0, 0, 0), base, 0.6 + 0.4 * shade)
