"""Triangles with per-vertex colour, normal and texture coordinates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from softrender.texture import Texture

MY_PI = 3.1415926
TWO_PI = 2.0 * MY_PI


def _three(*values: float) -> list[np.ndarray]:
    return [np.array(values, dtype=np.float64) for _ in range(3)]


@dataclass
class Triangle:
    """A triangle whose vertices v0, v1, v2 are in counter-clockwise order."""

    v: list[np.ndarray] = field(default_factory=lambda: _three(0.0, 0.0, 0.0, 1.0))
    color: list[np.ndarray] = field(default_factory=lambda: _three(0.0, 0.0, 0.0))
    tex_coords: list[np.ndarray] = field(default_factory=lambda: _three(0.0, 0.0))
    normal: list[np.ndarray] = field(default_factory=lambda: _three(0.0, 0.0, 0.0))
    tex: Optional[Texture] = None

    def set_vertex(self, ind: int, ver: Sequence[float]) -> None:
        """Set the homogeneous coordinates of vertex ``ind``."""
        self.v[ind] = np.array(ver, dtype=np.float64)

    def set_normal(self, ind: int, n: Sequence[float]) -> None:
        """Set the normal of vertex ``ind``."""
        self.normal[ind] = np.array(n, dtype=np.float64)

    def set_color(self, ind: int, r: float, g: float, b: float) -> None:
        """Set the colour of vertex ``ind`` from 0-255 channel values."""
        if any(not 0.0 <= c <= 255.0 for c in (r, g, b)):
            raise ValueError(f"invalid color values: {r}, {g}, {b}")
        self.color[ind] = np.array([r, g, b], dtype=np.float64) / 255.0

    def set_tex_coord(self, ind: int, uv: Sequence[float]) -> None:
        """Set the texture coordinate of vertex ``ind``."""
        self.tex_coords[ind] = np.array(uv, dtype=np.float64)

    def set_normals(self, normals: Sequence[Sequence[float]]) -> None:
        """Set all three vertex normals."""
        for ind, n in enumerate(normals[:3]):
            self.set_normal(ind, n)

    def set_colors(self, colors: Sequence[Sequence[float]]) -> None:
        """Set all three vertex colours from 0-255 channel values."""
        for ind, (r, g, b) in enumerate(colors[:3]):
            self.set_color(ind, r, g, b)

    def to_vector4(self) -> list[np.ndarray]:
        """The three vertices with their w component forced to 1."""
        return [np.array([p[0], p[1], p[2], 1.0]) for p in self.v]