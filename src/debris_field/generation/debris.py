"""Debris objects - the output of every placement strategy."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto


class DebrisCategory(Enum):
    """Visual and size classes of debris."""

    ROCK = auto()
    LOG = auto()
    TOWEL = auto()
    SMALL_DEBRIS = auto()


# (width, height) of each category as a fraction of its length
CATEGORY_PROPORTIONS: dict[DebrisCategory, tuple[float, float]] = {
    DebrisCategory.ROCK: (0.8, 0.6),
    DebrisCategory.LOG: (0.25, 0.25),
    DebrisCategory.TOWEL: (0.7, 0.05),
    DebrisCategory.SMALL_DEBRIS: (0.6, 0.3),
}


def extent_for(category: DebrisCategory, length: float) -> tuple[float, float, float]:
    """Get the 3D (length, width, height) extent of an object of this category."""
    width_ratio, height_ratio = CATEGORY_PROPORTIONS[category]
    return (length, length * width_ratio, length * height_ratio)


def extent_for_radius(category: DebrisCategory, radius: float) -> tuple[float, float, float]:
    """Get the extent of an object whose footprint radius is known."""
    return extent_for(category, radius * 2)


@dataclass
class DebrisObject:
    """
    A single placed piece of debris.

    Objects are created during one generation pass and never mutated
    afterwards; regenerating replaces the whole list.
    """

    x: float
    y: float
    z: float
    category: DebrisCategory
    footprint_radius: float
    size: tuple[float, float, float]
    spin_angle: float
    surface_normal: tuple[float, float, float] | None = None
    cluster_id: int | None = None
    intensity: float | None = None

    @property
    def length(self) -> float:
        return self.size[0]

    def distance_to(self, other: DebrisObject) -> float:
        """Horizontal distance between two objects."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class ClusterCenter:
    """A parent point of a Matérn cluster, alive only during one generation pass."""

    x: float
    y: float
    intensity: float
    radius: float
    member_count: int
    # Members that survived bounds rejection
    placed: int = 0
