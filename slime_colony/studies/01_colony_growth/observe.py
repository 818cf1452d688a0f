"""
Study 01: Colony Growth

Run: python -m slime_colony.studies.01_colony_growth.observe

A random colony on an empty trail. No decay, no diffusion:
every step is written down and never erased.
"""

import argparse
import logging
from typing import Optional, Sequence

import numpy as np

from slime_colony.core.trail import WrapMode
from slime_colony.environments.slime_field import FieldConfig, SlimeField
from slime_colony.observations.visualize import animate_study

logger = logging.getLogger(__name__)


def run_study(
    config: Optional[FieldConfig] = None,
    steps: int = 500,
    animate: bool = True,
    save_path: Optional[str] = None
) -> SlimeField:
    """
    Grow a colony and report what it left behind.

    Watch:
    - Peak intensity (no decay, so it only grows)
    - Share of cells ever visited
    """
    print("=" * 50)
    print("Study 01: Colony Growth")
    print("=" * 50)

    field = SlimeField(config)
    print(f"\nField created: {field}")
    print(f"\nRunning {steps} steps...")

    if animate:
        taken = animate_study(field, steps=steps, save_path=save_path)
    else:
        def report(f: SlimeField) -> bool:
            if f.time % 100 == 0:
                print(f"  Step {f.time}: total={f.trail.total():.0f}, "
                      f"peak={f.trail.max():.0f}")
            return False

        taken = field.run(steps, callback=report)

    # Analysis
    print("\n" + "=" * 50)
    print("Observations")
    print("=" * 50)

    cells = field.trail.cells
    visited = np.count_nonzero(cells)
    print(f"\nTicks run: {taken}")
    print(f"Total deposit: {field.trail.total():.0f}")
    print(f"Peak intensity: {field.trail.max():.0f}")
    print(f"Cells visited: {visited} / {cells.size} "
          f"({100 * visited / cells.size:.1f}%)")

    print("\n" + "=" * 50)
    print("Study complete. What did you observe?")
    print("=" * 50)

    return field


def build_config(args: argparse.Namespace) -> FieldConfig:
    """Start from --config (if any), then apply explicit flags on top."""
    config = FieldConfig.from_yaml(args.config) if args.config else FieldConfig()

    overrides = {
        "grid_size": args.grid_size,
        "population": args.population,
        "dt": args.dt,
        "seed": args.seed,
        "wrap_mode": WrapMode(args.wrap) if args.wrap else None,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)

    config.validate()
    return config


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Colony Growth Study")
    parser.add_argument("--steps", type=int, default=500, help="Simulation steps")
    parser.add_argument("--config", default=None, help="YAML field config")
    parser.add_argument("--grid-size", type=int, default=None, help="Trail width/height")
    parser.add_argument("--population", type=int, default=None, help="Number of agents")
    parser.add_argument("--dt", type=float, default=None, help="Time per tick")
    parser.add_argument("--seed", type=int, default=None, help="Spawn RNG seed")
    parser.add_argument(
        "--wrap",
        choices=[m.value for m in WrapMode],
        default=None,
        help="Edge wrapping mode"
    )
    parser.add_argument("--no-animate", action="store_true", help="Disable animation")
    parser.add_argument("--save", default=None, help="Save final frame to this path")
    parser.add_argument("--verbose", action="store_true", help="Log every tick")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    run_study(
        config=build_config(args),
        steps=args.steps,
        animate=not args.no_animate,
        save_path=args.save
    )


if __name__ == "__main__":
    main()
