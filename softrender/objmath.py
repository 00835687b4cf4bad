"""Geometry types, vector helpers and text utilities used by the OBJ loader."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Sequence, TypeVar

T = TypeVar("T")

_BLANKS = " \t"
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Vector2:
    """A 2D vector holding positional or texture data."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)


@dataclass(frozen=True)
class Vector3:
    """A 3D vector holding positional data."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vector3:
        return self * scalar

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)


@dataclass
class Vertex:
    """A model vertex: position, normal and texture coordinate."""

    position: Vector3 = field(default_factory=Vector3)
    normal: Vector3 = field(default_factory=Vector3)
    texture_coordinate: Vector2 = field(default_factory=Vector2)


@dataclass
class Material:
    """Material properties as read from an .mtl file."""

    name: str = ""
    ka: Vector3 = field(default_factory=Vector3)
    kd: Vector3 = field(default_factory=Vector3)
    ks: Vector3 = field(default_factory=Vector3)
    ns: float = 0.0
    ni: float = 0.0
    d: float = 0.0
    illum: int = 0
    map_ka: str = ""
    map_kd: str = ""
    map_ks: str = ""
    map_ns: str = ""
    map_d: str = ""
    map_bump: str = ""


@dataclass
class Mesh:
    """A named mesh with a vertex list, an index list and a material."""

    name: str = ""
    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    material: Material = field(default_factory=Material)


def cross_v3(a: Vector3, b: Vector3) -> Vector3:
    """Cross product of two vectors."""
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def magnitude_v3(v: Vector3) -> float:
    """Euclidean length of a vector."""
    return math.sqrt(v.x**2 + v.y**2 + v.z**2)


def dot_v3(a: Vector3, b: Vector3) -> float:
    """Dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def angle_between_v3(a: Vector3, b: Vector3) -> float:
    """Angle in radians between two vectors; NaN when it is undefined."""
    denom = magnitude_v3(a) * magnitude_v3(b)
    if denom == 0:
        return math.nan
    cosine = dot_v3(a, b) / denom
    if not -1.0 <= cosine <= 1.0:
        return math.nan
    return math.acos(cosine)


def proj_v3(a: Vector3, b: Vector3) -> Vector3:
    """Projection of ``a`` onto ``b``; a NaN vector when ``b`` is zero."""
    length = magnitude_v3(b)
    if length == 0:
        return Vector3(math.nan, math.nan, math.nan)
    bn = b / length
    return bn * dot_v3(a, bn)


def same_side(p1: Vector3, p2: Vector3, a: Vector3, b: Vector3) -> bool:
    """True when ``p1`` lies on the same side of segment ``ab`` as ``p2``."""
    cp1 = cross_v3(b - a, p1 - a)
    cp2 = cross_v3(b - a, p2 - a)
    return dot_v3(cp1, cp2) >= 0


def gen_tri_normal(t1: Vector3, t2: Vector3, t3: Vector3) -> Vector3:
    """Unnormalised cross-product normal of a triangle."""
    return cross_v3(t2 - t1, t3 - t1)


def in_triangle(point: Vector3, tri1: Vector3, tri2: Vector3, tri3: Vector3) -> bool:
    """True when ``point`` lies within the triangle ``tri1 tri2 tri3``."""
    within_prism = (
        same_side(point, tri1, tri2, tri3)
        and same_side(point, tri2, tri1, tri3)
        and same_side(point, tri3, tri1, tri2)
    )
    if not within_prism:
        return False
    normal = gen_tri_normal(tri1, tri2, tri3)
    return magnitude_v3(proj_v3(point, normal)) == 0


def split(text: str, token: str) -> list[str]:
    """Split ``text`` at ``token``; adjacent tokens yield empty fields."""
    out: list[str] = []
    width = len(token)
    current = ""
    i = 0
    while i < len(text):
        if text[i : i + width] == token:
            if current:
                out.append(current)
                current = ""
                i += width - 1
            else:
                out.append("")
        elif i + width >= len(text):
            current += text[i : i + width]
            out.append(current)
            break
        else:
            current += text[i]
        i += 1
    return out


def tail(text: str) -> str:
    """Everything after the first token, with surrounding blanks removed."""
    rest = text.lstrip(_BLANKS)
    gap = next((i for i, ch in enumerate(rest) if ch in _BLANKS), None)
    if gap is None:
        return ""
    return rest[gap:].strip(_BLANKS)


def first_token(text: str) -> str:
    """The first blank-delimited token of ``text``, or an empty string."""
    rest = text.lstrip(_BLANKS)
    end = next((i for i, ch in enumerate(rest) if ch in _BLANKS), len(rest))
    return rest[:end]


def get_element(elements: Sequence[T], index: str) -> T:
    """Element at an OBJ-style index: 1-based, or negative from the end."""
    match = _INT_PREFIX.match(index)
    if match is None:
        raise ValueError(f"invalid index: {index!r}")
    idx = int(match.group(1))
    idx = len(elements) + idx if idx < 0 else idx - 1
    if not 0 <= idx < len(elements):
        raise IndexError(f"index {index!r} out of range for {len(elements)} elements")
    return elements[idx]