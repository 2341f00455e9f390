#!/usr/bin/env python3
"""Print the positions of a projectile until it hits the ground.

Usage:
    python scripts/launch_projectile.py

Takes no arguments. Reads configs/render.v1.yaml for logging and the fuzzy
epsilon, then prints one position per tick to stdout.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.projectile import Environment, Projectile, trajectory
from src.ray_tracer.tuples import Point, Vector
from src.utils import fuzzy, logging_config, validators

CONFIG_PATH = Path(__file__).parent.parent / "configs" / "render.v1.yaml"


def _run(cfg: validators.RenderConfigV1) -> int:
    fuzzy.set_epsilon(cfg.fuzzy.epsilon)
    logger = logging_config.get_logger(__name__)

    projectile = Projectile(
        position=Point(0.0, 1.0, 0.0),
        velocity=Vector(1.0, 1.0, 0.0).normalize(),
    )
    environment = Environment(
        gravity=Vector(0.0, -0.1, 0.0),
        wind=Vector(-0.01, 0.0, 0.0),
    )

    ticks = 0
    for projectile in trajectory(environment, projectile):
        ticks += 1
        p = projectile.position
        print(f"Position:\tx: {p.x:12.4f}, \ty: {p.y:12.4f}, \tz: {p.z:12.4f}")

    logger.info(f"Projectile landed after {ticks} ticks")
    return 0


def main() -> int:
    cfg = validators.load_render_config(CONFIG_PATH)
    logging_config.setup_logging(**cfg.logging.setup_kwargs(), context={"app": "launch_projectile"})
    try:
        return _run(cfg)
    finally:
        logging_config.shutdown()


if __name__ == "__main__":
    sys.exit(main())
