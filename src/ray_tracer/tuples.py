"""Homogeneous-coordinate points and vectors.

Every spatial value is a 4-tuple (x, y, z, w) where w distinguishes points
(w=1.0) from vectors (w=0.0). Later affine transforms rely on that fourth
component, which is why a raw Tuple with arbitrary w still exists.

Variants
--------
Point(x, y, z)
    Location. Supports add (with a vector), subtract and negate only.
Vector(x, y, z)
    Direction/displacement. Additionally supports scalar multiply/divide,
    magnitude, normalize, dot and cross.
Tuple(x, y, z, w)
    Raw homogeneous tuple. Exposes every operation and checks legality at
    runtime from w, raising IllegalOperationError on a violation.

Arithmetic results are re-classified by their w: 1.0 → Point, 0.0 → Vector,
anything else → Tuple.

Legality:
    point + point   → IllegalOperationError (w would be 2)
    vector - point  → IllegalOperationError (w would be -1)
    vector-only ops on a point → IllegalOperationError (raw Tuple) or
    TypeError/AttributeError (Point has no such operation)

Numeric edge case:
    Normalizing the zero vector is NOT special-cased. Division follows IEEE
    semantics, so x, y, z become NaN; callers must guard beforehand.
    w stays exactly 0.0, so the result is still a Vector.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator

import numpy as np

from src.utils import fuzzy


class IllegalOperationError(TypeError):
    """Raised when an operation is applied to the wrong kind of tuple."""

    pass


def _make(x: float, y: float, z: float, w: float) -> HomogeneousTuple:
    if w == 1.0:
        return Point(x, y, z)
    if w == 0.0:
        return Vector(x, y, z)
    return Tuple(x, y, z, w)


# ---------------------------------------------------------------------------
# Shared base
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, repr=False)
class HomogeneousTuple:
    """Operations legal for every kind: add, subtract, negate, comparison."""

    x: float
    y: float
    z: float
    w: float

    def is_point(self) -> bool:
        return self.w == 1.0

    def is_vector(self) -> bool:
        return self.w == 0.0

    def add(self, other: HomogeneousTuple) -> HomogeneousTuple:
        """Component-wise sum; w sums too.

        Raises
        ------
        IllegalOperationError
            If both operands are points
        """
        if self.is_point() and other.is_point():
            raise IllegalOperationError("Cannot add two points.")
        return _make(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def subtract(self, other: HomogeneousTuple) -> HomogeneousTuple:
        """Component-wise difference.

        point - point → vector, point - vector → point, vector - vector → vector.

        Raises
        ------
        IllegalOperationError
            If a point is subtracted from a vector
        """
        if self.is_vector() and other.is_point():
            raise IllegalOperationError("Cannot subtract a point from a vector.")
        return _make(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def negate(self) -> HomogeneousTuple:
        """Negate x, y and z; w is unchanged so points stay points."""
        return _make(-self.x, -self.y, -self.z, self.w)

    def fuzzy_eq(self, other: object) -> bool:
        if not isinstance(other, HomogeneousTuple):
            return False
        return (
            fuzzy.fuzzy_eq(self.x, other.x)
            and fuzzy.fuzzy_eq(self.y, other.y)
            and fuzzy.fuzzy_eq(self.z, other.z)
            and fuzzy.fuzzy_eq(self.w, other.w)
        )

    def fuzzy_ne(self, other: object) -> bool:
        return not self.fuzzy_eq(other)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __add__(self, other):
        if not isinstance(other, HomogeneousTuple):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, HomogeneousTuple):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self):
        return self.negate()

    def __repr__(self):
        return f"{type(self).__name__}({self.x:.4f}, {self.y:.4f}, {self.z:.4f}, w={self.w:.4f})"


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class Point(HomogeneousTuple):
    """A location in space (w = 1.0)."""

    __slots__ = ()

    def __init__(self, x: float, y: float, z: float):
        HomogeneousTuple.__init__(self, x, y, z, 1.0)

    @classmethod
    def origin(cls) -> Point:
        return cls(0.0, 0.0, 0.0)

    def __repr__(self):
        return f"Point({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"


class Vector(HomogeneousTuple):
    """A displacement (w = 0.0). Owns every vector-only operation."""

    __slots__ = ()

    def __init__(self, x: float, y: float, z: float):
        HomogeneousTuple.__init__(self, x, y, z, 0.0)

    @classmethod
    def zero(cls) -> Vector:
        return cls(0.0, 0.0, 0.0)

    def multiply(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def divide(self, scalar: float) -> Vector:
        """Divide by scalar with IEEE semantics (0.0 yields inf/NaN, never raises)."""
        with np.errstate(divide='ignore', invalid='ignore'):
            x, y, z = np.divide((self.x, self.y, self.z), scalar)
        return Vector(float(x), float(y), float(z))

    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def normalize(self) -> Vector:
        """Unit vector in the same direction.

        The zero vector is not guarded: its components come back NaN.
        """
        return self.divide(self.magnitude())

    def dot(self, other: HomogeneousTuple) -> float:
        """Scalar product.

        Raises
        ------
        IllegalOperationError
            If other is not a vector
        """
        if not other.is_vector():
            raise IllegalOperationError("Can only compute the dot product of two vectors.")
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: HomogeneousTuple) -> Vector:
        """Vector product (anti-commutative).

        Raises
        ------
        IllegalOperationError
            If other is not a vector
        """
        if not other.is_vector():
            raise IllegalOperationError("Can only compute the cross product of two vectors.")
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def __mul__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        return self.divide(scalar)

    def __repr__(self):
        return f"Vector({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"


class Tuple(HomogeneousTuple):
    """Raw homogeneous tuple with arbitrary w.

    Vector-only operations are available but checked against w at runtime.
    """

    __slots__ = ()

    @staticmethod
    def point(x: float, y: float, z: float) -> Point:
        return Point(x, y, z)

    @staticmethod
    def vector(x: float, y: float, z: float) -> Vector:
        return Vector(x, y, z)

    def _require_vector(self, operation: str) -> Vector:
        if not self.is_vector():
            raise IllegalOperationError(
                f"Can only {operation} vectors, got a tuple with w={self.w}."
            )
        return Vector(self.x, self.y, self.z)

    def multiply(self, scalar: float) -> Vector:
        return self._require_vector("scale").multiply(scalar)

    def divide(self, scalar: float) -> Vector:
        return self._require_vector("scale").divide(scalar)

    def magnitude_squared(self) -> float:
        return self._require_vector("compute the magnitude of").magnitude_squared()

    def magnitude(self) -> float:
        return self._require_vector("compute the magnitude of").magnitude()

    def normalize(self) -> Vector:
        return self._require_vector("normalize").normalize()

    def dot(self, other: HomogeneousTuple) -> float:
        return self._require_vector("take the dot product of").dot(other)

    def cross(self, other: HomogeneousTuple) -> Vector:
        return self._require_vector("take the cross product of").cross(other)

    def __mul__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        return self.divide(scalar)
