"""Debris placement - one generation pass per strategy."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum

from ..config import Config, InsetBounds
from .debris import ClusterCenter, DebrisCategory, DebrisObject, extent_for, extent_for_radius
from .intensity import ClusterIntensityModel, lerp
from .poisson import BlueNoiseSampler
from .spatial import SpatialGrid
from .terrain import HeightField, NormalField

logger = logging.getLogger(__name__)


class Strategy(Enum):
    """Available placement strategies."""

    BLUE_NOISE = "blue_noise"
    POWER_LAW = "power_law"
    MATERN = "matern"
    HYBRID = "hybrid"
    CATEGORY = "category"


@dataclass
class GenerationStats:
    """Counters for the most recent generation pass."""

    candidates: int = 0
    rejected_shore: int = 0
    rejected_bounds: int = 0
    rejected_overlap: int = 0
    clusters_tried: int = 0
    clusters_accepted: int = 0
    snagged: int = 0


class GenerationContext:
    """
    Everything one generation pass needs.

    Owns the configuration, the single random source, the terrain fields and
    the output sequence. Every pass starts from reset(), so the same seed and
    strategy always produce the same objects.
    """

    def __init__(self, config: Config, seed: int | None = None):
        """
        Initialize the context.

        Args:
            config: Full configuration (validated here)
            seed: Overrides config.placement.seed; None with no configured seed
                draws a random one
        """
        config.validate()
        self.config = config
        self.objects: list[DebrisObject] = []
        self.clusters: list[ClusterCenter] = []
        self.stats = GenerationStats()
        self.reseed(seed if seed is not None else config.placement.seed)

    def reseed(self, seed: int | None = None) -> None:
        """Switch to a new seed, rebuilding the terrain fields."""
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.height_field = HeightField(self.config.terrain, seed)
        self.normal_field = NormalField(self.height_field, self.config.terrain.normal_epsilon)
        self.intensity = ClusterIntensityModel(self.config.terrain, self.config.intensity)

    def reset(self) -> None:
        """Discard the previous output and rewind the random source."""
        self.objects = []
        self.clusters = []
        self.stats = GenerationStats()
        self.rng = random.Random(self.seed)

    @property
    def size(self) -> float:
        return self.config.terrain.size

    def place(
        self,
        x: float,
        y: float,
        category: DebrisCategory,
        footprint_radius: float,
        size: tuple[float, float, float],
        cluster_id: int | None = None,
        intensity: float | None = None,
    ) -> DebrisObject:
        """Create an object resting on the terrain and append it to the output."""
        placement = self.config.placement
        z = self.height_field.height(x, y) + placement.surface_offset
        normal = self.normal_field.normal(x, y) if placement.conform_to_surface else None

        obj = DebrisObject(
            x=x,
            y=y,
            z=z,
            category=category,
            footprint_radius=footprint_radius,
            size=size,
            spin_angle=self.rng.uniform(0, 2 * math.pi),
            surface_normal=normal,
            cluster_id=cluster_id,
            intensity=intensity,
        )
        self.objects.append(obj)
        return obj


class OverlapIndex:
    """
    Footprint overlap rejection.

    A candidate at p with radius r fits if, for every placed object d,
    distance(p, d) >= r + d.radius - reduction, where the reduction only
    applies when r is at most the small-radius threshold.
    """

    def __init__(
        self,
        size: float,
        reduction_factor: float,
        small_radius_threshold: float,
        use_grid: bool = True,
        cell_size: float = 16.0,
    ):
        self.reduction_factor = reduction_factor
        self.small_radius_threshold = small_radius_threshold
        self.grid = SpatialGrid(size, size, cell_size) if use_grid else None
        self.circles: list[tuple[float, float, float]] = []
        self.max_radius = 0.0

    def reduction(self, radius: float) -> float:
        return self.reduction_factor if radius <= self.small_radius_threshold else 0.0

    def fits(self, x: float, y: float, radius: float) -> bool:
        reduction = self.reduction(radius)
        if self.grid is not None:
            candidates = self.grid.neighbors_within((x, y), radius + self.max_radius)
        else:
            candidates = range(len(self.circles))

        for index in candidates:
            ox, oy, other_radius = self.circles[index]
            if math.hypot(x - ox, y - oy) < radius + other_radius - reduction:
                return False
        return True

    def add(self, x: float, y: float, radius: float) -> None:
        if self.grid is not None:
            self.grid.insert(len(self.circles), (x, y))
        self.circles.append((x, y, radius))
        self.max_radius = max(self.max_radius, radius)

    def add_object(self, obj: DebrisObject) -> None:
        self.add(obj.x, obj.y, obj.footprint_radius)


class DebrisPlacementEngine:
    """
    Runs placement strategies against a generation context.

    Strategies:
    - BLUE_NOISE: Poisson-disk points as small debris
    - POWER_LAW: independent candidates, shoreline acceptance, power-law sizes
    - MATERN: accepted parents filled with fixed-size uniform disks
    - HYBRID: Matérn clusters whose radius, population and member sizes follow power laws
    - CATEGORY: rocks, then flow-channel logs, then towels snagged around rocks,
      with pairwise overlap rejection
    """

    def __init__(self, context: GenerationContext):
        self.context = context
        self._strategies = {
            Strategy.BLUE_NOISE: self.place_blue_noise,
            Strategy.POWER_LAW: self.place_power_law,
            Strategy.MATERN: self.place_matern,
            Strategy.HYBRID: self.place_hybrid,
            Strategy.CATEGORY: self.place_categories,
        }

    def run(self, strategy: Strategy) -> list[DebrisObject]:
        """
        Run one full generation pass.

        Returns:
            The freshly built object list (also held by the context)
        """
        ctx = self.context
        ctx.reset()
        self._strategies[strategy]()

        if ctx.config.snag.enabled and strategy is not Strategy.CATEGORY:
            self.snag_on_anchors(self.bounds_for(strategy))

        logger.info(
            "Generated %d objects with %s (seed=%d, clusters=%d/%d)",
            len(ctx.objects), strategy.value, ctx.seed,
            ctx.stats.clusters_accepted, ctx.stats.clusters_tried,
        )
        logger.debug("Generation stats: %s", ctx.stats)
        return ctx.objects

    def bounds_for(self, strategy: Strategy) -> InsetBounds:
        """Get the inset bounds every object of this strategy must respect."""
        config = self.context.config
        if strategy is Strategy.BLUE_NOISE:
            return InsetBounds(0.0, 0.0, 0.0, self._blue_noise_height() / self.context.size)
        return {
            Strategy.POWER_LAW: config.power_law.bounds,
            Strategy.MATERN: config.matern.bounds,
            Strategy.HYBRID: config.hybrid.bounds,
            Strategy.CATEGORY: config.category.bounds,
        }[strategy]

    def _blue_noise_height(self) -> float:
        config = self.context.config
        if config.blue_noise.clamp_to_shoreline:
            return config.terrain.shoreline_y * config.blue_noise.shoreline_clamp
        return config.terrain.size

    def place_blue_noise(self) -> None:
        """Scatter small debris on a Poisson-disk point set."""
        ctx = self.context
        cfg = ctx.config.blue_noise
        sampler = BlueNoiseSampler(ctx.rng)
        points = sampler.sample(ctx.size, self._blue_noise_height(), cfg.min_distance, cfg.max_attempts)

        length = cfg.min_distance / 2
        for x, y in points:
            ctx.place(
                x, y,
                DebrisCategory.SMALL_DEBRIS,
                footprint_radius=length / 2,
                size=extent_for(DebrisCategory.SMALL_DEBRIS, length),
            )

    def place_power_law(self) -> None:
        """Independent candidates thinned by the shoreline gradient."""
        ctx = self.context
        cfg = ctx.config.power_law
        rng = ctx.rng
        model = ctx.intensity

        for _ in range(cfg.candidates):
            ctx.stats.candidates += 1
            x = rng.uniform(0, ctx.size)
            y = rng.uniform(0, ctx.size)

            if not model.accept(x, y, rng):
                ctx.stats.rejected_shore += 1
                continue
            if not cfg.bounds.contains(x, y, ctx.size):
                ctx.stats.rejected_bounds += 1
                continue

            intensity = model.draw_intensity(rng, cfg.exponent)
            length = lerp(cfg.min_size, cfg.max_size, intensity)
            category = model.categorize(intensity)
            ctx.place(
                x, y, category,
                footprint_radius=length / 2,
                size=extent_for(category, length),
                intensity=intensity,
            )

    def _accept_center(self) -> tuple[float, float] | None:
        """Draw one candidate parent; return it if the shoreline gradient keeps it."""
        ctx = self.context
        ctx.stats.clusters_tried += 1
        x = ctx.rng.uniform(0, ctx.size)
        y = ctx.rng.uniform(0, ctx.size)
        if not ctx.intensity.accept(x, y, ctx.rng):
            ctx.stats.rejected_shore += 1
            return None
        return (x, y)

    def _scatter_members(self, cluster: ClusterCenter, bounds: InsetBounds, make_member) -> None:
        """
        Fill a cluster's disk uniformly.

        make_member(x, y, cluster_id) places one object.
        """
        ctx = self.context
        rng = ctx.rng
        cluster_id = len(ctx.clusters)
        ctx.clusters.append(cluster)
        ctx.stats.clusters_accepted += 1

        for _ in range(cluster.member_count):
            ctx.stats.candidates += 1
            # sqrt keeps areal density uniform inside the disk
            r = math.sqrt(rng.random()) * cluster.radius
            theta = rng.uniform(0, 2 * math.pi)
            x = cluster.x + r * math.cos(theta)
            y = cluster.y + r * math.sin(theta)

            if not bounds.contains(x, y, ctx.size):
                ctx.stats.rejected_bounds += 1
                continue

            make_member(x, y, cluster_id)
            cluster.placed += 1

    def place_matern(self) -> None:
        """Matérn cluster process with fixed radius and member count."""
        ctx = self.context
        cfg = ctx.config.matern
        model = ctx.intensity
        span = cfg.max_size - cfg.min_size

        def make_member(x: float, y: float, cluster_id: int) -> None:
            length = ctx.rng.uniform(cfg.min_size, cfg.max_size)
            category = model.categorize((length - cfg.min_size) / span if span > 0 else 0.0)
            ctx.place(
                x, y, category,
                footprint_radius=length / 2,
                size=extent_for(category, length),
                cluster_id=cluster_id,
            )

        for _ in range(cfg.num_centers):
            center = self._accept_center()
            if center is None:
                continue
            # Fixed clusters run at full intensity
            cluster = ClusterCenter(center[0], center[1], 1.0, cfg.radius, cfg.member_count)
            self._scatter_members(cluster, cfg.bounds, make_member)

    def place_hybrid(self) -> None:
        """Matérn clusters with power-law extent, population and member size."""
        ctx = self.context
        cfg = ctx.config.hybrid
        model = ctx.intensity

        def make_member(x: float, y: float, cluster_id: int) -> None:
            intensity = model.draw_intensity(ctx.rng, cfg.size_exponent)
            length = lerp(cfg.min_size, cfg.max_size, intensity)
            category = model.categorize(intensity)
            ctx.place(
                x, y, category,
                footprint_radius=length / 2,
                size=extent_for(category, length),
                cluster_id=cluster_id,
                intensity=intensity,
            )

        for _ in range(cfg.num_centers):
            center = self._accept_center()
            if center is None:
                continue
            intensity = model.draw_intensity(ctx.rng, cfg.cluster_exponent)
            cluster = ClusterCenter(
                x=center[0],
                y=center[1],
                intensity=intensity,
                radius=lerp(cfg.min_radius, cfg.max_radius, intensity),
                member_count=round(lerp(cfg.min_count, cfg.max_count, intensity)),
            )
            self._scatter_members(cluster, cfg.bounds, make_member)

    def _try_place(
        self,
        overlap: OverlapIndex,
        bounds: InsetBounds,
        x: float,
        y: float,
        radius: float,
        category: DebrisCategory,
    ) -> DebrisObject | None:
        ctx = self.context
        ctx.stats.candidates += 1
        if not bounds.contains(x, y, ctx.size):
            ctx.stats.rejected_bounds += 1
            return None
        if not overlap.fits(x, y, radius):
            ctx.stats.rejected_overlap += 1
            return None

        obj = ctx.place(x, y, category, footprint_radius=radius, size=extent_for_radius(category, radius))
        overlap.add_object(obj)
        return obj

    def _log_probability(self, x: float, y: float) -> float:
        """Logs favour the central flow channel and, weighted, the shore."""
        ctx = self.context
        cfg = ctx.config.category
        half_width = cfg.channel_half_width * ctx.size
        channel = max(0.0, 1.0 - abs(x - ctx.size / 2) / half_width)
        shore = (1.0 - cfg.log_shore_weight) + cfg.log_shore_weight * ctx.intensity.acceptance_probability(x, y)
        return channel * shore

    def place_categories(self) -> None:
        """Rocks, then logs, then towels snagged on rocks, without overlaps."""
        ctx = self.context
        cfg = ctx.config.category
        rng = ctx.rng
        bounds = cfg.bounds
        min_x, max_x, min_y, max_y = bounds.limits(ctx.size)
        overlap = OverlapIndex(
            ctx.size,
            cfg.reduction_factor,
            cfg.small_radius_threshold,
            use_grid=cfg.use_grid,
            cell_size=cfg.max_rock_radius,
        )

        rocks: list[DebrisObject] = []
        for _ in range(cfg.rock_attempts):
            if len(rocks) >= cfg.target_rocks:
                break
            x = rng.uniform(min_x, max_x)
            y = rng.uniform(min_y, max_y)
            radius = rng.uniform(cfg.min_rock_radius, cfg.max_rock_radius)
            rock = self._try_place(overlap, bounds, x, y, radius, DebrisCategory.ROCK)
            if rock is not None:
                rocks.append(rock)

        logs = 0
        for _ in range(cfg.log_attempts):
            if logs >= cfg.target_logs:
                break
            x = rng.uniform(min_x, max_x)
            y = rng.uniform(min_y, max_y)
            if rng.random() >= self._log_probability(x, y):
                ctx.stats.rejected_shore += 1
                continue
            radius = rng.uniform(cfg.min_log_radius, cfg.max_log_radius)
            if self._try_place(overlap, bounds, x, y, radius, DebrisCategory.LOG) is not None:
                logs += 1

        for rock in rocks:
            self._snag_around(
                rock,
                overlap,
                bounds,
                count=rng.randint(cfg.min_towels_per_rock, cfg.max_towels_per_rock),
                attempts=cfg.towel_attempts,
                radius_range=(cfg.min_towel_radius, cfg.max_towel_radius),
                gap_range=(cfg.min_snag_gap, cfg.max_snag_gap),
            )

        if len(rocks) < cfg.target_rocks:
            logger.debug("Placed %d of %d requested rocks", len(rocks), cfg.target_rocks)

    def _snag_around(
        self,
        anchor: DebrisObject,
        overlap: OverlapIndex,
        bounds: InsetBounds,
        count: int,
        attempts: int,
        radius_range: tuple[float, float],
        gap_range: tuple[float, float],
    ) -> int:
        """Place towels in a ring just outside an anchor. Returns how many landed."""
        rng = self.context.rng
        placed = 0
        for _ in range(count):
            for _ in range(attempts):
                radius = rng.uniform(*radius_range)
                dist = anchor.footprint_radius + radius + rng.uniform(*gap_range)
                angle = rng.uniform(0, 2 * math.pi)
                x = anchor.x + dist * math.cos(angle)
                y = anchor.y + dist * math.sin(angle)
                if self._try_place(overlap, bounds, x, y, radius, DebrisCategory.TOWEL) is not None:
                    placed += 1
                    break
        return placed

    def select_anchors(self) -> list[DebrisObject]:
        """The up to max_anchors longest objects that reach anchor_min_length."""
        cfg = self.context.config.snag
        candidates = [obj for obj in self.context.objects if obj.length >= cfg.anchor_min_length]
        # Stable sort keeps placement order among equal lengths
        candidates.sort(key=lambda obj: obj.length, reverse=True)
        return candidates[: cfg.max_anchors]

    def snag_on_anchors(self, bounds: InsetBounds) -> None:
        """Post-process: snag light debris around the largest placed objects."""
        ctx = self.context
        cfg = ctx.config.snag
        overlap = OverlapIndex(
            ctx.size,
            ctx.config.category.reduction_factor,
            ctx.config.category.small_radius_threshold,
            use_grid=True,
            cell_size=max(cfg.anchor_min_length, 1.0),
        )
        for obj in ctx.objects:
            overlap.add_object(obj)

        for anchor in self.select_anchors():
            ctx.stats.snagged += self._snag_around(
                anchor,
                overlap,
                bounds,
                count=ctx.rng.randint(cfg.min_per_anchor, cfg.max_per_anchor),
                attempts=cfg.attempts,
                radius_range=(cfg.min_radius, cfg.max_radius),
                gap_range=(cfg.min_gap, cfg.max_gap),
            )


def generate(strategy: Strategy | str, config: Config, seed: int | None = None) -> list[DebrisObject]:
    """
    Run one generation pass with a fresh context.

    Args:
        strategy: Strategy (or its value, e.g. "hybrid")
        config: Full configuration
        seed: Random seed (None falls back to config.placement.seed)

    Returns:
        The generated objects in placement order
    """
    context = GenerationContext(config, seed)
    return DebrisPlacementEngine(context).run(Strategy(strategy))
