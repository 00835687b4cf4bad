"""Scene objects for the ray tracer: spheres, triangle meshes and lights."""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from softrender.vector import (
    K_INFINITY,
    MaterialType,
    Vector2f,
    Vector3f,
    cross_product,
    dot_product,
    lerp,
    normalize,
    solve_quadratic,
)

Hit = tuple[float, int, Vector2f]
"""Distance along the ray, triangle index and barycentric (u, v) of a hit."""


@dataclass
class Light:
    """A point light."""

    position: Vector3f
    intensity: Vector3f = field(default_factory=lambda: Vector3f(1.0))


class SceneObject(abc.ABC):
    """Something a ray can hit, with its material properties."""

    def __init__(
        self,
        *,
        material_type: MaterialType = MaterialType.DIFFUSE_AND_GLOSSY,
        ior: float = 1.3,
        kd: float = 0.8,
        ks: float = 0.2,
        diffuse_color: Optional[Vector3f] = None,
        specular_exponent: float = 25.0,
    ) -> None:
        self.material_type = material_type
        self.ior = ior
        self.kd = kd
        self.ks = ks
        self.diffuse_color = diffuse_color if diffuse_color is not None else Vector3f(0.2)
        self.specular_exponent = specular_exponent

    @abc.abstractmethod
    def intersect(self, orig: Vector3f, direction: Vector3f) -> Optional[Hit]:
        """The nearest hit of the ray, or None if it misses."""

    @abc.abstractmethod
    def get_surface_properties(
        self, point: Vector3f, direction: Vector3f, index: int, uv: Vector2f
    ) -> tuple[Vector3f, Vector2f]:
        """Surface normal and texture coordinates at a hit."""

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        """Diffuse colour at texture coordinates ``st``."""
        return self.diffuse_color


class Sphere(SceneObject):
    """A sphere given by its centre and radius."""

    def __init__(self, center: Vector3f, radius: float, **material) -> None:
        super().__init__(**material)
        self.center = center
        self.radius = float(radius)
        self.radius2 = self.radius * self.radius

    def intersect(self, orig: Vector3f, direction: Vector3f) -> Optional[Hit]:
        """The nearest non-negative hit distance of the ray, analytically."""
        offset = orig - self.center
        a = dot_product(direction, direction)
        b = 2 * dot_product(direction, offset)
        c = dot_product(offset, offset) - self.radius2
        roots = solve_quadratic(a, b, c)
        if roots is None:
            return None
        t0, t1 = roots
        if t0 < 0:
            t0 = t1
        if t0 < 0:
            return None
        return t0, 0, Vector2f()

    def get_surface_properties(
        self, point: Vector3f, direction: Vector3f, index: int, uv: Vector2f
    ) -> tuple[Vector3f, Vector2f]:
        """Outward normal at ``point``; spheres carry no texture coordinates."""
        return normalize(point - self.center), Vector2f()


def ray_triangle_intersect(
    v0: Vector3f, v1: Vector3f, v2: Vector3f, orig: Vector3f, direction: Vector3f
) -> Optional[tuple[float, float, float]]:
    """Möller-Trumbore test: (t, u, v) of the hit, or None if the ray misses."""
    e1 = v1 - v0
    e2 = v2 - v0
    s = orig - v0
    s1 = cross_product(direction, e2)
    s2 = cross_product(s, e1)
    denom = dot_product(s1, e1)
    if denom == 0:
        return None
    coeff = 1.0 / denom
    t = coeff * dot_product(s2, e2)
    b1 = coeff * dot_product(s1, s)
    b2 = coeff * dot_product(s2, direction)
    if t >= 0 and b1 >= 0 and b2 >= 0 and (1 - b1 - b2) >= 0:
        return t, b1, b2
    return None


class MeshTriangle(SceneObject):
    """A mesh of triangles sharing a vertex list, with checkerboard shading."""

    def __init__(
        self,
        vertices: Sequence[Vector3f],
        vertex_index: Sequence[int],
        num_triangles: int,
        st_coordinates: Sequence[Vector2f],
        **material,
    ) -> None:
        super().__init__(**material)
        count = num_triangles * 3
        if len(vertex_index) < count:
            raise ValueError(
                f"{num_triangles} triangles need {count} indices, got {len(vertex_index)}"
            )
        indices = [int(i) for i in vertex_index[:count]]
        needed = max(indices, default=-1) + 1
        if len(vertices) < needed or len(st_coordinates) < needed:
            raise ValueError(f"indices refer to {needed} vertices, fewer were given")
        self.vertices = list(vertices[:needed])
        self.vertex_index = indices
        self.num_triangles = num_triangles
        self.st_coordinates = list(st_coordinates[:needed])

    def _corners(self, k: int) -> tuple[int, int, int]:
        return self.vertex_index[3 * k], self.vertex_index[3 * k + 1], self.vertex_index[3 * k + 2]

    def intersect(self, orig: Vector3f, direction: Vector3f) -> Optional[Hit]:
        """The nearest triangle the ray hits, with its barycentric coordinates."""
        best: Optional[Hit] = None
        t_near = K_INFINITY
        for k in range(self.num_triangles):
            i0, i1, i2 = self._corners(k)
            hit = ray_triangle_intersect(
                self.vertices[i0], self.vertices[i1], self.vertices[i2], orig, direction
            )
            if hit is not None and hit[0] < t_near:
                t_near, u, v = hit
                best = (t_near, k, Vector2f(u, v))
        return best

    def get_surface_properties(
        self, point: Vector3f, direction: Vector3f, index: int, uv: Vector2f
    ) -> tuple[Vector3f, Vector2f]:
        """Face normal of triangle ``index`` and interpolated texture coordinates."""
        i0, i1, i2 = self._corners(index)
        v0, v1, v2 = self.vertices[i0], self.vertices[i1], self.vertices[i2]
        e0 = normalize(v1 - v0)
        e1 = normalize(v2 - v1)
        normal = normalize(cross_product(e0, e1))
        st0, st1, st2 = self.st_coordinates[i0], self.st_coordinates[i1], self.st_coordinates[i2]
        st = st0 * (1 - uv.x - uv.y) + st1 * uv.x + st2 * uv.y
        return normal, st

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        """A checkerboard of orange and grey squares."""
        scale = 5
        pattern = (math.fmod(st.x * scale, 1) > 0.5) ^ (math.fmod(st.y * scale, 1) > 0.5)
        return lerp(Vector3f(0.815, 0.235, 0.031), Vector3f(0.5, 0.5, 0.5), float(pattern))