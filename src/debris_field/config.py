"""Centralized configuration for debris generation."""

from __future__ import annotations

from dataclasses import dataclass, field


class ConfigError(ValueError):
    """Raised when a configuration value cannot produce a valid generation pass."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _require_range(name: str, lo: float, hi: float) -> None:
    _require(lo <= hi, f"{name} range is inverted: ({lo}, {hi})")


@dataclass
class TerrainConfig:
    """Shape of the shoreline terrain."""

    size: float = 800.0
    # Shore near higher y; everything above this line is sea
    shoreline_y: float = 720.0
    slope_gain: float = 20.0
    # Large waves
    wave_frequency: float = 0.005
    wave_amplitude: float = 10.0
    # Small details
    detail_frequency: float = 0.02
    detail_amplitude: float = 5.0
    # Central difference step for normals
    normal_epsilon: float = 1.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require(self.size > 0, f"terrain size must be positive, got {self.size}")
        _require(
            0 <= self.shoreline_y <= self.size,
            f"shoreline_y {self.shoreline_y} lies outside the terrain [0, {self.size}]",
        )
        _require(self.wave_frequency > 0, "wave_frequency must be positive")
        _require(self.detail_frequency > 0, "detail_frequency must be positive")
        _require(self.normal_epsilon > 0, "normal_epsilon must be positive")


@dataclass
class InsetBounds:
    """
    Domain bounds shrunk inward by a margin.

    Accepts left <= x <= size - right and top <= y <= max_y_fraction * size.
    """

    left: float = 5.0
    right: float = 5.0
    top: float = 5.0
    max_y_fraction: float = 0.95

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require(
            min(self.left, self.right, self.top) >= 0,
            "inset margins must not be negative",
        )
        _require(0 < self.max_y_fraction <= 1, "max_y_fraction must be in (0, 1]")

    def limits(self, size: float) -> tuple[float, float, float, float]:
        """Return (min_x, max_x, min_y, max_y) for a square domain of the given size."""
        return (self.left, size - self.right, self.top, self.max_y_fraction * size)

    def contains(self, x: float, y: float, size: float) -> bool:
        min_x, max_x, min_y, max_y = self.limits(size)
        return min_x <= x <= max_x and min_y <= y <= max_y

    def check_area(self, size: float) -> None:
        """Fail if the bounds leave no room inside a domain of this size."""
        min_x, max_x, min_y, max_y = self.limits(size)
        _require(
            min_x < max_x and min_y < max_y,
            f"inset bounds {self} leave no area inside a {size}x{size} terrain",
        )


@dataclass
class BlueNoiseConfig:
    """Poisson-disk sampling parameters."""

    min_distance: float = 10.0
    max_attempts: int = 30
    # Sample only up to shoreline_y * shoreline_clamp when clamping
    clamp_to_shoreline: bool = True
    shoreline_clamp: float = 0.85

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require(self.min_distance > 0, f"min_distance must be positive, got {self.min_distance}")
        _require(self.max_attempts >= 1, f"max_attempts must be at least 1, got {self.max_attempts}")
        _require(0 < self.shoreline_clamp <= 1, "shoreline_clamp must be in (0, 1]")


@dataclass
class IntensityConfig:
    """Shoreline acceptance gradient and category thresholds."""

    # Inland distance (as a fraction of terrain size) over which acceptance tapers
    falloff_fraction: float = 0.85
    max_probability: float = 1.0
    min_probability: float = 0.2
    # Intensity thresholds for categorization (checked from largest to smallest)
    rock_threshold: float = 0.6
    log_threshold: float = 0.3
    towel_threshold: float = 0.1

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require(self.falloff_fraction > 0, "falloff_fraction must be positive")
        for name in ("max_probability", "min_probability"):
            value = getattr(self, name)
            _require(0 <= value <= 1, f"{name} must be in [0, 1], got {value}")
        _require_range("probability", self.min_probability, self.max_probability)
        _require(
            self.towel_threshold <= self.log_threshold <= self.rock_threshold,
            "category thresholds must satisfy towel <= log <= rock",
        )


@dataclass
class PowerLawConfig:
    """Independent power-law scatter."""

    candidates: int = 20000
    exponent: float = 4.0
    min_size: float = 1.0
    max_size: float = 14.0
    bounds: InsetBounds = field(default_factory=lambda: InsetBounds(5.0, 5.0, 5.0, 0.85))

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require(self.candidates >= 0, "candidates must not be negative")
        _require(self.exponent > 0, "exponent must be positive")
        _require(self.min_size > 0, "min_size must be positive")
        _require_range("size", self.min_size, self.max_size)


@dataclass
class MaternConfig:
    """Matérn cluster process with fixed cluster radius and population."""

    num_centers: int = 60
    radius: float = 40.0
    member_count: int = 30
    min_size: float = 2.0
    max_size: float = 6.0
    bounds: InsetBounds = field(default_factory=lambda: InsetBounds(5.0, 5.0, 5.0, 0.95))

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require(self.num_centers >= 0, "num_centers must not be negative")
        _require(self.radius > 0, "radius must be positive")
        _require(self.member_count >= 0, "member_count must not be negative")
        _require(self.min_size > 0, "min_size must be positive")
        _require_range("size", self.min_size, self.max_size)


@dataclass
class HybridConfig:
    """Matérn clusters whose extent, population and member sizes follow power laws."""

    num_centers: int = 400
    cluster_exponent: float = 4.0
    min_radius: float = 20.0
    max_radius: float = 100.0
    min_count: int = 10
    max_count: int = 400
    size_exponent: float = 5.0
    min_size: float = 1.0
    max_size: float = 12.0
    bounds: InsetBounds = field(default_factory=lambda: InsetBounds(5.0, 15.0, 5.0, 0.91))

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require(self.num_centers >= 0, "num_centers must not be negative")
        _require(self.cluster_exponent > 0, "cluster_exponent must be positive")
        _require(self.size_exponent > 0, "size_exponent must be positive")
        _require(self.min_radius > 0, "min_radius must be positive")
        _require(self.min_count >= 0, "min_count must not be negative")
        _require(self.min_size > 0, "min_size must be positive")
        _require_range("radius", self.min_radius, self.max_radius)
        _require_range("count", self.min_count, self.max_count)
        _require_range("size", self.min_size, self.max_size)


@dataclass
class CategoryConfig:
    """Rock/log/towel placement with pairwise overlap rejection."""

    target_rocks: int = 40
    rock_attempts: int = 2000
    min_rock_radius: float = 8.0
    max_rock_radius: float = 15.0
    target_logs: int = 30
    log_attempts: int = 3000
    min_log_radius: float = 6.0
    max_log_radius: float = 12.0
    # Half-width of the central flow channel as a fraction of terrain size
    channel_half_width: float = 0.25
    # How strongly distance from shore suppresses logs (0 = ignore shore)
    log_shore_weight: float = 0.5
    min_towels_per_rock: int = 2
    max_towels_per_rock: int = 5
    towel_attempts: int = 10
    min_towel_radius: float = 2.0
    max_towel_radius: float = 3.0
    # Gap between a rock's edge and the ring where towels snag
    min_snag_gap: float = 1.0
    max_snag_gap: float = 8.0
    # Small objects may overlap neighbours by this much
    reduction_factor: float = 2.0
    small_radius_threshold: float = 3.0
    use_grid: bool = True
    bounds: InsetBounds = field(default_factory=lambda: InsetBounds(10.0, 10.0, 10.0, 0.95))

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("target_rocks", "target_logs"):
            _require(getattr(self, name) >= 0, f"{name} must not be negative")
        for name in ("rock_attempts", "log_attempts", "towel_attempts"):
            _require(getattr(self, name) >= 1, f"{name} must be at least 1")
        for name in ("min_rock_radius", "min_log_radius", "min_towel_radius"):
            _require(getattr(self, name) > 0, f"{name} must be positive")
        _require_range("rock radius", self.min_rock_radius, self.max_rock_radius)
        _require_range("log radius", self.min_log_radius, self.max_log_radius)
        _require_range("towel radius", self.min_towel_radius, self.max_towel_radius)
        _require_range("towels per rock", self.min_towels_per_rock, self.max_towels_per_rock)
        _require(self.min_towels_per_rock >= 0, "min_towels_per_rock must not be negative")
        _require_range("snag gap", self.min_snag_gap, self.max_snag_gap)
        _require(self.channel_half_width > 0, "channel_half_width must be positive")
        _require(0 <= self.log_shore_weight <= 1, "log_shore_weight must be in [0, 1]")
        _require(self.reduction_factor >= 0, "reduction_factor must not be negative")


@dataclass
class SnagConfig:
    """Optional post-process that snags light debris on large anchors."""

    enabled: bool = False
    # Objects at least this long act as anchors
    anchor_min_length: float = 8.0
    max_anchors: int = 60
    min_per_anchor: int = 2
    max_per_anchor: int = 5
    attempts: int = 10
    min_radius: float = 2.0
    max_radius: float = 3.0
    min_gap: float = 1.0
    max_gap: float = 8.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        _require(self.anchor_min_length > 0, "anchor_min_length must be positive")
        _require(self.max_anchors >= 0, "max_anchors must not be negative")
        _require(self.attempts >= 1, "attempts must be at least 1")
        _require(self.min_per_anchor >= 0, "min_per_anchor must not be negative")
        _require(self.min_radius > 0, "min_radius must be positive")
        _require_range("per anchor", self.min_per_anchor, self.max_per_anchor)
        _require_range("snag radius", self.min_radius, self.max_radius)
        _require_range("snag gap", self.min_gap, self.max_gap)


@dataclass
class PlacementConfig:
    """Settings shared by every placement strategy."""

    # Lift objects slightly above the surface
    surface_offset: float = 0.5
    # Tilt objects flush with the local slope
    conform_to_surface: bool = True
    # Random seed for reproducibility (None = random seed)
    seed: int | None = None


@dataclass
class RendererConfig:
    """Configuration for the Pygame preview."""

    window_width: int = 1080
    window_height: int = 800
    sidebar_width: int = 280
    target_fps: int = 30
    # Terrain shading resolution (cells per side)
    terrain_resolution: int = 160
    show_normals: bool = False


@dataclass
class Config:
    """Main configuration container."""

    terrain: TerrainConfig
    blue_noise: BlueNoiseConfig
    intensity: IntensityConfig
    power_law: PowerLawConfig
    matern: MaternConfig
    hybrid: HybridConfig
    category: CategoryConfig
    snag: SnagConfig
    placement: PlacementConfig
    renderer: RendererConfig

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Re-validate every section, then the constraints that depend on the terrain size."""
        for section in (
            self.terrain,
            self.blue_noise,
            self.intensity,
            self.power_law,
            self.matern,
            self.hybrid,
            self.category,
            self.snag,
        ):
            section.validate()

        size = self.terrain.size
        for section in (self.power_law, self.matern, self.hybrid, self.category):
            section.bounds.validate()
            section.bounds.check_area(size)

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        return cls(
            terrain=TerrainConfig(),
            blue_noise=BlueNoiseConfig(),
            intensity=IntensityConfig(),
            power_law=PowerLawConfig(),
            matern=MaternConfig(),
            hybrid=HybridConfig(),
            category=CategoryConfig(),
            snag=SnagConfig(),
            placement=PlacementConfig(),
            renderer=RendererConfig(),
        )
