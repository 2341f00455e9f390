"""RGB color algebra.

Colors are unbounded real triples: channels may exceed 1.0 or go negative while
light contributions accumulate. Clamping into a displayable range happens only
when a Canvas is encoded (see canvas.tone_map).

Operations (all always legal, all return a new Color):
    add, subtract, negate, multiply (scalar), divide (scalar),
    hadamard (component-wise product, e.g. light intensity × surface reflectance)

Operator sugar:
    c1 + c2, c1 - c2, -c, c * 2.0, 2.0 * c, c / 2.0, c1 * c2 (Hadamard)

Division by zero follows IEEE semantics (inf/NaN), like Vector.divide.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Iterator

import numpy as np

from src.utils import fuzzy


@dataclass(frozen=True, slots=True)
class Color:
    """Immutable (red, green, blue) triple."""

    red: float
    green: float
    blue: float

    def add(self, other: Color) -> Color:
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def subtract(self, other: Color) -> Color:
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def negate(self) -> Color:
        return Color(-self.red, -self.green, -self.blue)

    def multiply(self, scalar: float) -> Color:
        return Color(self.red * scalar, self.green * scalar, self.blue * scalar)

    def divide(self, scalar: float) -> Color:
        with np.errstate(divide='ignore', invalid='ignore'):
            r, g, b = np.divide((self.red, self.green, self.blue), scalar)
        return Color(float(r), float(g), float(b))

    def hadamard(self, other: Color) -> Color:
        """Component-wise (Hadamard) product of two colors."""
        return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)

    def fuzzy_eq(self, other: object) -> bool:
        if not isinstance(other, Color):
            return False
        return (
            fuzzy.fuzzy_eq(self.red, other.red)
            and fuzzy.fuzzy_eq(self.green, other.green)
            and fuzzy.fuzzy_eq(self.blue, other.blue)
        )

    def fuzzy_ne(self, other: object) -> bool:
        return not self.fuzzy_eq(other)

    def __iter__(self) -> Iterator[float]:
        yield self.red
        yield self.green
        yield self.blue

    def __add__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self):
        return self.negate()

    def __mul__(self, other):
        if isinstance(other, Color):
            return self.hadamard(other)
        if isinstance(other, Real):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self.multiply(other)
        return NotImplemented

    def __truediv__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        return self.divide(scalar)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
