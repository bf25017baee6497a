"""Pygame-CE renderer for previewing generated debris fields."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import replace
from typing import TYPE_CHECKING

import pygame

from ..config import RendererConfig
from ..generation.debris import DebrisCategory, DebrisObject
from ..generation.placement import Strategy
from . import colors

if TYPE_CHECKING:
    from ..generation.placement import GenerationContext

STRATEGY_KEYS = {
    pygame.K_1: Strategy.BLUE_NOISE,
    pygame.K_2: Strategy.POWER_LAW,
    pygame.K_3: Strategy.MATERN,
    pygame.K_4: Strategy.HYBRID,
    pygame.K_5: Strategy.CATEGORY,
}


class PygameRenderer:
    """
    Top-down preview of the terrain and the generated debris.

    Renders:
    - Terrain shaded by elevation (navy seaward of the shoreline, sand inland)
    - Debris shapes colored by category and tilted by surface normal
    - Sidebar with the active strategy, seed and per-category counts
    """

    def __init__(self, config: RendererConfig, strategy: Strategy = Strategy.HYBRID):
        """
        Initialize the renderer.

        Args:
            config: Renderer configuration
            strategy: Strategy shown first
        """
        self.config = config
        self.window_width = config.window_width
        self.window_height = config.window_height
        self.sidebar_width = config.sidebar_width
        self.view_width = config.window_width - config.sidebar_width
        self.view_height = config.window_height

        self.strategy = strategy
        self.show_normals = config.show_normals
        self.needs_regeneration = False

        # Initialize Pygame
        pygame.init()
        pygame.display.set_caption("Debris Field")

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()

        # Fonts
        self.font_large = pygame.font.Font(None, 28)
        self.font_small = pygame.font.Font(None, 18)

        self._view_surface = pygame.Surface((self.view_width, self.view_height))
        self._sidebar_surface = pygame.Surface((self.sidebar_width, self.window_height))
        # Terrain is cached per seed; it only changes when the context is reseeded
        self._terrain_surface: pygame.Surface | None = None
        self._terrain_seed: int | None = None

    def set_context(self, context: GenerationContext) -> None:
        """Build the terrain backdrop for a context."""
        self._terrain_surface = self._build_terrain_surface(context)
        self._terrain_seed = context.seed

    def handle_events(self, context: GenerationContext) -> bool:
        """
        Handle Pygame events.

        Args:
            context: Generation context (reseeded or reconfigured by key presses)

        Returns:
            False if the window should close, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue

            if event.key == pygame.K_ESCAPE:
                return False
            if event.key in STRATEGY_KEYS:
                self.strategy = STRATEGY_KEYS[event.key]
                self.needs_regeneration = True
            elif event.key == pygame.K_r:
                context.reseed()
                self.needs_regeneration = True
            elif event.key == pygame.K_s:
                snag = context.config.snag
                context.config.snag = replace(snag, enabled=not snag.enabled)
                self.needs_regeneration = True
            elif event.key == pygame.K_n:
                self.show_normals = not self.show_normals

        return True

    def render(self, context: GenerationContext) -> None:
        """
        Render the current generation pass.

        Args:
            context: Generation context holding the terrain and objects
        """
        if self._terrain_seed != context.seed:
            self.set_context(context)

        self.screen.fill(colors.BG_DARK)
        self._render_view(context)
        self._render_sidebar(context)

        self.screen.blit(self._view_surface, (self.sidebar_width, 0))
        self.screen.blit(self._sidebar_surface, (0, 0))
        pygame.display.flip()

    def _build_terrain_surface(self, context: GenerationContext) -> pygame.Surface:
        """Shade the sampled height grid into a surface the size of the view."""
        resolution = self.config.terrain_resolution
        field = context.height_field
        grid = field.sample_grid(resolution)
        min_height = float(grid.min())
        max_height = float(grid.max())
        step = field.size / resolution

        surface = pygame.Surface((resolution + 1, resolution + 1))
        for iy in range(resolution + 1):
            seaward = field.is_seaward(iy * step)
            for ix in range(resolution + 1):
                color = colors.get_ground_color(float(grid[iy, ix]), seaward, min_height, max_height)
                surface.set_at((ix, iy), color)

        return pygame.transform.smoothscale(surface, (self.view_width, self.view_height))

    def _render_view(self, context: GenerationContext) -> None:
        """Render the terrain backdrop, shoreline and debris."""
        scale_x = self.view_width / context.size
        scale_y = self.view_height / context.size

        if self._terrain_surface is not None:
            self._view_surface.blit(self._terrain_surface, (0, 0))
        else:
            self._view_surface.fill(colors.SAND_LOW)

        shore_y = int(context.height_field.shoreline_y * scale_y)
        pygame.draw.line(self._view_surface, colors.SHORELINE, (0, shore_y), (self.view_width, shore_y), 1)

        for obj in context.objects:
            self._draw_debris(obj, scale_x, scale_y)

    def _draw_debris(self, obj: DebrisObject, scale_x: float, scale_y: float) -> None:
        """Draw one object as a category-specific shape."""
        color = colors.get_debris_color(obj.category, obj.surface_normal)
        cx = obj.x * scale_x
        cy = obj.y * scale_y
        length = obj.size[0] * scale_x
        width = obj.size[1] * scale_y

        if obj.category is DebrisCategory.ROCK:
            pygame.draw.circle(self._view_surface, color, (int(cx), int(cy)), max(1, int(length / 2)))
        elif obj.category is DebrisCategory.SMALL_DEBRIS and length < 3:
            pygame.draw.circle(self._view_surface, color, (int(cx), int(cy)), 1)
        else:
            self._draw_rotated_rect(color, cx, cy, length, max(1.0, width), obj.spin_angle)

        if self.show_normals and obj.surface_normal is not None:
            nx, ny, _ = obj.surface_normal
            tip = (cx + nx * 40 * scale_x, cy + ny * 40 * scale_y)
            pygame.draw.line(self._view_surface, colors.NORMAL_COLOR, (cx, cy), tip, 1)

    def _draw_rotated_rect(
        self,
        color: tuple[int, int, int],
        cx: float,
        cy: float,
        length: float,
        width: float,
        angle: float,
    ) -> None:
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        half_l = length / 2
        half_w = width / 2
        corners = [
            (cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a)
            for dx, dy in ((-half_l, -half_w), (half_l, -half_w), (half_l, half_w), (-half_l, half_w))
        ]
        pygame.draw.polygon(self._view_surface, color, corners)

    def _render_sidebar(self, context: GenerationContext) -> None:
        """Render strategy, seed and counts."""
        self._sidebar_surface.fill(colors.BG_SIDEBAR)
        padding = 15
        y = padding

        title = self.font_large.render("Debris Field", True, colors.TEXT_PRIMARY)
        self._sidebar_surface.blit(title, (padding, y))
        y += 34

        lines = [
            (f"Strategy: {self.strategy.value}", colors.TEXT_ACCENT),
            (f"Seed: {context.seed}", colors.TEXT_SECONDARY),
            (f"Objects: {len(context.objects)}", colors.TEXT_SECONDARY),
            (f"Snagging: {'on' if context.config.snag.enabled else 'off'}", colors.TEXT_SECONDARY),
        ]
        if context.stats.clusters_tried:
            lines.append(
                (f"Clusters: {context.stats.clusters_accepted}/{context.stats.clusters_tried}", colors.TEXT_SECONDARY)
            )
        for text, color in lines:
            self._sidebar_surface.blit(self.font_small.render(text, True, color), (padding, y))
            y += 20

        y += 6
        pygame.draw.line(self._sidebar_surface, colors.DIVIDER, (padding, y), (self.sidebar_width - padding, y), 1)
        y += 12

        counts = Counter(obj.category for obj in context.objects)
        for category in DebrisCategory:
            pygame.draw.circle(self._sidebar_surface, colors.DEBRIS_COLORS[category], (padding + 5, y + 6), 5)
            label = f"{category.name.replace('_', ' ').title()}: {counts.get(category, 0)}"
            self._sidebar_surface.blit(self.font_small.render(label, True, colors.TEXT_SECONDARY), (padding + 18, y))
            y += 20

        y = self.window_height - 5 * 18 - padding
        for hint in ("1-5: strategy", "R: new seed", "S: snagging", "N: normals", "ESC: quit"):
            self._sidebar_surface.blit(self.font_small.render(hint, True, colors.TEXT_SECONDARY), (padding, y))
            y += 18

    def tick(self) -> float:
        """
        Advance the renderer clock and return delta time.

        Returns:
            Time elapsed since last tick in seconds.
        """
        return self.clock.tick(self.config.target_fps) / 1000.0

    def cleanup(self) -> None:
        """Clean up Pygame resources."""
        pygame.quit()
