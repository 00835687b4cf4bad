"""Small vector types and numeric helpers for the ray tracer."""

from __future__ import annotations

import enum
import math
import random
import sys
from typing import Iterator, Optional, Union

K_INFINITY = 3.4028234663852886e38
"""Largest finite single-precision float, used as "no hit yet"."""

_BAR_WIDTH = 70


class Vector3f:
    """A 3-component vector; a single argument fills all three components."""

    __slots__ = ("x", "y", "z")

    def __init__(
        self, x: float = 0.0, y: Optional[float] = None, z: Optional[float] = None
    ) -> None:
        if y is None and z is None:
            y = z = x
        elif y is None or z is None:
            raise TypeError("Vector3f takes one or three components")
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other: Vector3f) -> Vector3f:
        return Vector3f(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3f) -> Vector3f:
        return Vector3f(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union[Vector3f, float]) -> Vector3f:
        if isinstance(other, Vector3f):
            return Vector3f(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3f(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vector3f:
        return Vector3f(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, scalar: float) -> Vector3f:
        return Vector3f(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3f:
        return Vector3f(-self.x, -self.y, -self.z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3f):
            return NotImplemented
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vector3f({self.x!r}, {self.y!r}, {self.z!r})"

    def __str__(self) -> str:
        return f"{self.x:g}, {self.y:g}, {self.z:g}"


class Vector2f:
    """A 2-component vector; a single argument fills both components."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: Optional[float] = None) -> None:
        if y is None:
            y = x
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other: Vector2f) -> Vector2f:
        return Vector2f(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: float) -> Vector2f:
        return Vector2f(self.x * scalar, self.y * scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2f):
            return NotImplemented
        return (self.x, self.y) == (other.x, other.y)

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y))

    def __repr__(self) -> str:
        return f"Vector2f({self.x!r}, {self.y!r})"


class MaterialType(enum.Enum):
    """How a surface responds to light."""

    DIFFUSE_AND_GLOSSY = 0
    REFLECTION_AND_REFRACTION = 1
    REFLECTION = 2


def lerp(a: Vector3f, b: Vector3f, t: float) -> Vector3f:
    """Linear blend from ``a`` (t = 0) to ``b`` (t = 1)."""
    return a * (1 - t) + b * t


def normalize(v: Vector3f) -> Vector3f:
    """Unit vector in the direction of ``v``; a zero vector is returned as is."""
    mag2 = v.x * v.x + v.y * v.y + v.z * v.z
    if mag2 > 0:
        inv = 1 / math.sqrt(mag2)
        return Vector3f(v.x * inv, v.y * inv, v.z * inv)
    return v


def dot_product(a: Vector3f, b: Vector3f) -> float:
    """Dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross_product(a: Vector3f, b: Vector3f) -> Vector3f:
    """Cross product of two vectors."""
    return Vector3f(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def clamp(lo: float, hi: float, v: float) -> float:
    """``v`` limited to the range [lo, hi]."""
    return max(lo, min(hi, v))


def solve_quadratic(a: float, b: float, c: float) -> Optional[tuple[float, float]]:
    """Real roots of a*x^2 + b*x + c in ascending order, or None if there are none."""
    discr = b * b - 4 * a * c
    if discr < 0:
        return None
    if discr == 0:
        x0 = x1 = -0.5 * b / a
    else:
        root = math.sqrt(discr)
        q = -0.5 * (b + root) if b > 0 else -0.5 * (b - root)
        x0 = q / a
        x1 = c / q
    if x0 > x1:
        x0, x1 = x1, x0
    return x0, x1


def get_random_float() -> float:
    """A uniformly distributed float in [0, 1)."""
    return random.random()


def update_progress(progress: float) -> None:
    """Draw a one-line progress bar for ``progress`` in [0, 1] on standard output."""
    pos = int(_BAR_WIDTH * progress)
    cells = "".join(
        "=" if i < pos else ">" if i == pos else " " for i in range(_BAR_WIDTH)
    )
    sys.stdout.write(f"[{cells}] {int(progress * 100.0)} %\r")
    sys.stdout.flush()