"""Main entry point for the debris field preview."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from dataclasses import replace

from .config import Config
from .generation import DebrisPlacementEngine, GenerationContext, Strategy


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scatter storm debris across a shoreline terrain.")
    parser.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in Strategy],
        default=Strategy.HYBRID.value,
        help="Placement strategy to start with (default: hybrid)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    parser.add_argument("--snag", action="store_true", help="Snag towels on large debris")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Generate once and print a summary instead of opening a window",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def summarize(context: GenerationContext, strategy: Strategy) -> None:
    """Print a per-category summary of the last generation pass."""
    counts = Counter(obj.category.name for obj in context.objects)
    print(f"Strategy: {strategy.value}")
    print(f"  Seed: {context.seed}")
    print(f"  Objects: {len(context.objects)}")
    for name, count in sorted(counts.items()):
        print(f"    {name}: {count}")
    if context.clusters:
        print(f"  Clusters: {len(context.clusters)} accepted of {context.stats.clusters_tried}")
    if context.config.snag.enabled:
        print(f"  Snagged: {context.stats.snagged}")


def main(argv: list[str] | None = None) -> None:
    """Run the debris field preview."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s - %(levelname)s - %(message)s")

    # Load configuration
    config = Config.default()
    if args.snag:
        config.snag = replace(config.snag, enabled=True)

    context = GenerationContext(config, seed=args.seed)
    engine = DebrisPlacementEngine(context)
    strategy = Strategy(args.strategy)
    engine.run(strategy)

    if args.headless:
        summarize(context, strategy)
        return

    # Imported here so headless runs never initialize a display
    from .renderer import PygameRenderer

    renderer = PygameRenderer(config.renderer, strategy)
    renderer.set_context(context)

    print("Starting debris field preview...")
    print(f"  Seed: {context.seed}")
    print(f"  Terrain: {config.terrain.size:.0f}x{config.terrain.size:.0f}, shoreline at y={config.terrain.shoreline_y:.0f}")
    print()
    print("Controls:")
    print("  - 1-5 select strategy (blue noise, power law, Matern, hybrid, category)")
    print("  - R regenerate with a new seed")
    print("  - S toggle towel snagging")
    print("  - N toggle surface normals")
    print("  - ESC to quit")
    print()

    # Main loop
    running = True
    while running:
        running = renderer.handle_events(context)

        if renderer.needs_regeneration:
            engine.run(renderer.strategy)
            renderer.needs_regeneration = False

        renderer.render(context)
        renderer.tick()

    renderer.cleanup()
    print("Preview ended.")


if __name__ == "__main__":
    main()
