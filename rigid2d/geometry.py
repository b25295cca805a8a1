"""Two-dimensional vectors, matrices, bounding boxes and rectangles."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, k: float) -> Vec2:
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> Vec2:
        return Vec2(self.x / k, self.y / k)

    def __iter__(self):
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; the zero vector stays zero."""
        n = self.length()
        return Vec2() if n == 0 else Vec2(self.x / n, self.y / n)

    def perp(self) -> Vec2:
        """The vector rotated a quarter turn counter-clockwise."""
        return Vec2(-self.y, self.x)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0


def dot(a: Vec2, b: Vec2) -> float:
    return a.x * b.x + a.y * b.y


def cross(a: Vec2, b: Vec2) -> float:
    return a.x * b.y - a.y * b.x


@dataclass(frozen=True)
class Mat2:
    """A 2x2 matrix [[a, b], [c, d]]."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0

    @classmethod
    def rotation(cls, radian: float) -> Mat2:
        cs, sn = math.cos(radian), math.sin(radian)
        return cls(cs, -sn, sn, cs)

    def det(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverse(self) -> Mat2:
        det = self.det()
        if det == 0:
            raise ZeroDivisionError("singular matrix")
        return Mat2(self.d / det, -self.b / det, -self.c / det, self.a / det)

    def abs(self) -> Mat2:
        return Mat2(abs(self.a), abs(self.b), abs(self.c), abs(self.d))

    def transform(self, v: Vec2) -> Vec2:
        return Vec2(self.a * v.x + self.b * v.y, self.c * v.x + self.d * v.y)

    def __mul__(self, other):
        if isinstance(other, Vec2):
            return self.transform(other)
        if isinstance(other, Mat2):
            return Mat2(
                self.a * other.a + self.b * other.c,
                self.a * other.b + self.b * other.d,
                self.c * other.a + self.d * other.c,
                self.c * other.b + self.d * other.d,
            )
        return NotImplemented


@dataclass(frozen=True)
class AABB:
    """Axis-aligned bounding box; the default box is empty."""

    x0: float = math.inf
    x1: float = -math.inf
    y0: float = math.inf
    y1: float = -math.inf

    def union(self, other: AABB) -> AABB:
        return AABB(
            min(self.x0, other.x0),
            max(self.x1, other.x1),
            min(self.y0, other.y0),
            max(self.y1, other.y1),
        )

    def expand(self, point: Vec2) -> AABB:
        return AABB(
            min(point.x, self.x0),
            max(point.x, self.x1),
            min(point.y, self.y0),
            max(point.y, self.y1),
        )

    def overlaps(self, other: AABB) -> bool:
        bx = max(self.x0, other.x0) <= min(self.x1, other.x1)
        by = max(self.y0, other.y0) <= min(self.y1, other.y1)
        return bx and by


def overlap(box0: AABB, box1: AABB) -> bool:
    return box0.overlaps(box1)


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its top-left corner and size."""

    x: float = 0
    y: float = 0
    w: float = 0
    h: float = 0

    @property
    def left(self):
        return self.x

    @property
    def top(self):
        return self.y

    @property
    def right(self):
        return self.x + self.w

    @property
    def bottom(self):
        return self.y + self.h

    def contains(self, p) -> bool:
        """True when p lies in the half-open rectangle."""
        px, py = p
        return self.left <= px < self.right and self.top <= py < self.bottom