"""Vector types, bounding boxes and the curve helpers used to shape roads."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, TypeVar, Union

SMALL_NUMBER = 1e-8

T = TypeVar("T", float, "Vector", "Vector2")


@dataclass(frozen=True, slots=True)
class Vector:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance(self, other: Vector) -> float:
        return (self - other).length()

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def normalized(self, tolerance: float = SMALL_NUMBER) -> Vector:
        """Unit vector in the same direction.

        A vector whose squared length does not exceed ``tolerance`` is
        returned unchanged.
        """
        square = self.dot(self)
        if square <= tolerance:
            return self
        return self / math.sqrt(square)


ZERO = Vector(0.0, 0.0, 0.0)
UP = Vector(0.0, 0.0, 1.0)


@dataclass(frozen=True, slots=True)
class Vector2:
    """An immutable 2D vector, used for texture coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Union[Vector2, float]) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x * other.x, self.y * other.y)
        return Vector2(self.x * other, self.y * other)

    __rmul__ = __mul__


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """An axis-aligned box."""

    min: Vector
    max: Vector

    @classmethod
    def from_points(cls, points: Iterable[Vector]) -> BoundingBox:
        points = list(points)
        if not points:
            raise ValueError("cannot bound an empty set of points")
        return cls(
            Vector(min(p.x for p in points), min(p.y for p in points), min(p.z for p in points)),
            Vector(max(p.x for p in points), max(p.y for p in points), max(p.z for p in points)),
        )

    def contains_xy(self, point: Vector) -> bool:
        """True if the point lies inside or on the box in the XY plane."""
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
        )


def lerp(a: T, b: T, t: float) -> T:
    """Linear interpolation between ``a`` and ``b``."""
    return a + (b - a) * t


def midpoint(x: float, y: float) -> float:
    """Value halfway between ``x`` and ``y``."""
    return lerp(x, y, 0.5)


def custom_ease_in_out_quad(start: float, end: float, t: float) -> float:
    """Quadratic ease in/out inside ``[start, end]``, linear ramps outside it."""
    normalized = (t - start) / (end - start)
    if start <= t <= end:
        if normalized < 0.5:
            return 0.5 * normalized * normalized
        return -0.5 * (normalized * (normalized - 2) - 1)
    if t < start:
        return t / start
    return 1 + (t - 1) / (1 - end)


def ease_in_out_quad(start: float, end: float, t: float) -> float:
    """Cubic ease in/out of ``t`` remapped from ``[start, end]`` to ``[0, 1]``."""
    t = (t - start) / (end - start)
    if t < 0.5:
        return 4 * t * t * t
    return 1 - math.pow(-2 * t + 2, 3) / 2


def bezier_curve_position(p0: Vector, p1: Vector, p2: Vector, t: float) -> Vector:
    """Point at ``t`` on the quadratic Bezier curve through control points p0, p1, p2."""
    inv_t = 1 - t
    return p0 * (inv_t ** 2) + p1 * (2 * inv_t * t) + p2 * (t ** 2)