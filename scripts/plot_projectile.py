#!/usr/bin/env python3
"""Plot a projectile's flight onto a canvas and save it as PNG.

Usage:
    python scripts/plot_projectile.py

Takes no arguments. Canvas size, output path, epsilon and logging come from
configs/render.v1.yaml (900x550, projectile.png by default). The output file
is overwritten on every run.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.projectile import Environment, Projectile, to_pixel, trajectory
from src.ray_tracer.canvas import Canvas, ImageWriteError
from src.ray_tracer.color import RED
from src.ray_tracer.tuples import Point, Vector
from src.utils import fuzzy, hashing, logging_config, validators

CONFIG_PATH = Path(__file__).parent.parent / "configs" / "render.v1.yaml"


def plot(canvas: Canvas, environment: Environment, projectile: Projectile) -> int:
    """Draw every position of the flight in red; return the number of ticks."""
    ticks = 0
    for projectile in trajectory(environment, projectile):
        x, y = to_pixel(projectile.position, canvas.height)
        canvas.write_pixel(x, y, RED)
        ticks += 1
    return ticks


def _run(cfg: validators.RenderConfigV1) -> int:
    fuzzy.set_epsilon(cfg.fuzzy.epsilon)
    logger = logging_config.get_logger(__name__)

    projectile = Projectile(
        position=Point(0.0, 1.0, 0.0),
        velocity=Vector(1.0, 1.8, 0.0).normalize() * 11.25,
    )
    environment = Environment(
        gravity=Vector(0.0, -0.1, 0.0),
        wind=Vector(-0.01, 0.0, 0.0),
    )

    canvas = Canvas(cfg.canvas.width, cfg.canvas.height)
    ticks = plot(canvas, environment, projectile)
    logger.info(f"Plotted {ticks} positions on {canvas}")

    try:
        path = canvas.write_to_path(cfg.output.path)
    except ImageWriteError as e:
        logger.error(f"Could not save {e.path}: {e.cause}")
        return 1

    logger.info(f"sha256 {hashing.sha256_file(path)}")
    return 0


def main() -> int:
    cfg = validators.load_render_config(CONFIG_PATH)
    logging_config.setup_logging(**cfg.logging.setup_kwargs(), context={"app": "plot_projectile"})
    try:
        return _run(cfg)
    finally:
        logging_config.shutdown()


if __name__ == "__main__":
    sys.exit(main())
