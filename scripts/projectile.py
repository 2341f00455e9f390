"""Ballistic projectile model shared by the demonstration drivers.

Provides:
    - Environment: gravity and wind vectors
    - Projectile: position point and velocity vector
    - tick(): one simulation step
    - trajectory(): successive states until the projectile lands
    - to_pixel(): position → canvas coordinate (y flipped, saturating)

Pure functions over immutable values; no shared state.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

from src.ray_tracer.tuples import Point, Vector


@dataclass(frozen=True, slots=True)
class Environment:
    """Constant forces applied every tick."""

    gravity: Vector
    wind: Vector


@dataclass(frozen=True, slots=True)
class Projectile:
    """Projectile state at one tick."""

    position: Point
    velocity: Vector


def tick(environment: Environment, projectile: Projectile) -> Projectile:
    """Advance one step: position += velocity, velocity += gravity + wind."""
    return Projectile(
        position=projectile.position + projectile.velocity,
        velocity=projectile.velocity + environment.gravity + environment.wind,
    )


def trajectory(environment: Environment, projectile: Projectile) -> Iterator[Projectile]:
    """Yield each state after a tick while the previous state is above ground.

    The last state yielded is the first one with y <= 0.
    """
    while projectile.position.y > 0.0:
        projectile = tick(environment, projectile)
        yield projectile


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def to_pixel(position: Point, height: int) -> Tuple[int, int]:
    """Map a world position onto canvas coordinates.

    x and y are rounded half away from zero; negative results saturate at 0
    so a projectile slightly below ground lands on the bottom row. y is
    flipped because canvas rows grow downward.
    """
    x = max(_round_half_away(position.x), 0)
    y = max(_round_half_away(position.y), 0)
    return x, height - y - 1
