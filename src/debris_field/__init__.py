"""Procedural debris scattering over shoreline terrain."""

from .config import Config, ConfigError
from .generation import DebrisCategory, DebrisObject, GenerationContext, Strategy, generate

__all__ = [
    "Config",
    "ConfigError",
    "DebrisCategory",
    "DebrisObject",
    "GenerationContext",
    "Strategy",
    "generate",
]
