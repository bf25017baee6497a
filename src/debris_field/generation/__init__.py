"""Generation module - pure placement logic, no rendering."""

from .debris import ClusterCenter, DebrisCategory, DebrisObject
from .intensity import ClusterIntensityModel
from .placement import DebrisPlacementEngine, GenerationContext, GenerationStats, Strategy, generate
from .poisson import BlueNoiseSampler
from .spatial import SpatialGrid
from .terrain import HeightField, NormalField

__all__ = [
    "BlueNoiseSampler",
    "ClusterCenter",
    "ClusterIntensityModel",
    "DebrisCategory",
    "DebrisObject",
    "DebrisPlacementEngine",
    "GenerationContext",
    "GenerationStats",
    "HeightField",
    "NormalField",
    "SpatialGrid",
    "Strategy",
    "generate",
]
