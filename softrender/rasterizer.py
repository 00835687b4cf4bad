"""A software rasterizer with depth buffering and programmable shading."""

from __future__ import annotations

import copy
import enum
import math
from typing import Callable, Optional, Sequence

import numpy as np

from softrender.shader import FragmentShaderPayload, VertexShaderPayload
from softrender.texture import Texture
from softrender.triangle import Triangle

FragmentShader = Callable[[FragmentShaderPayload], np.ndarray]
VertexShader = Callable[[VertexShaderPayload], np.ndarray]

_Z_NEAR = 0.1
_Z_FAR = 50.0


class Buffers(enum.Flag):
    """Buffers that ``Rasterizer.clear`` can reset."""

    COLOR = 1
    DEPTH = 2


class Primitive(enum.Enum):
    """Primitive kinds."""

    LINE = enum.auto()
    TRIANGLE = enum.auto()


def _normalized(vec: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(vec))
    return vec / norm if norm > 0 else vec


def _div(num: float, den: float) -> float:
    return num / den if den != 0 else math.nan


def inside_triangle(x: float, y: float, v: Sequence[Sequence[float]]) -> bool:
    """True when (x, y) lies strictly inside the triangle's 2D projection."""
    pts = [np.array([p[0], p[1], 1.0]) for p in v]
    f0 = np.cross(pts[1], pts[0])
    f1 = np.cross(pts[2], pts[1])
    f2 = np.cross(pts[0], pts[2])
    p = np.array([x, y, 1.0])
    return bool(
        p @ f0 * (f0 @ pts[2]) > 0
        and p @ f1 * (f1 @ pts[0]) > 0
        and p @ f2 * (f2 @ pts[1]) > 0
    )


def compute_barycentric_2d(
    x: float, y: float, v: Sequence[Sequence[float]]
) -> tuple[float, float, float]:
    """Barycentric coordinates of (x, y) in the triangle's 2D projection."""
    (x0, y0), (x1, y1), (x2, y2) = ((float(p[0]), float(p[1])) for p in v)
    c1 = _div(
        x * (y1 - y2) + (x2 - x1) * y + x1 * y2 - x2 * y1,
        x0 * (y1 - y2) + (x2 - x1) * y0 + x1 * y2 - x2 * y1,
    )
    c2 = _div(
        x * (y2 - y0) + (x0 - x2) * y + x2 * y0 - x0 * y2,
        x1 * (y2 - y0) + (x0 - x2) * y1 + x2 * y0 - x0 * y2,
    )
    c3 = _div(
        x * (y0 - y1) + (x1 - x0) * y + x0 * y1 - x1 * y0,
        x2 * (y0 - y1) + (x1 - x0) * y2 + x0 * y1 - x1 * y0,
    )
    return c1, c2, c3


def interpolated(values: Sequence, alpha: float, beta: float, gamma: float):
    """Blend three per-vertex values with barycentric weights."""
    return values[0] * alpha + values[1] * beta + values[2] * gamma


class Rasterizer:
    """Draws triangles into a colour buffer through a fragment shader."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.model = np.eye(4)
        self.view = np.eye(4)
        self.projection = np.eye(4)
        self.texture: Optional[Texture] = None
        self.fragment_shader: Optional[FragmentShader] = None
        self.vertex_shader: Optional[VertexShader] = None
        self.frame_buffer = np.zeros((width * height, 3), dtype=np.float64)
        self.depth_buffer = np.zeros(width * height, dtype=np.float64)
        self.normal_id = -1
        self._pos_buf: dict[int, list] = {}
        self._ind_buf: dict[int, list] = {}
        self._col_buf: dict[int, list] = {}
        self._nor_buf: dict[int, list] = {}
        self._next_id = 0

    def _new_id(self) -> int:
        ident = self._next_id
        self._next_id += 1
        return ident

    def load_positions(self, positions) -> int:
        """Store a position buffer and return its id."""
        ident = self._new_id()
        self._pos_buf[ident] = [np.asarray(p, dtype=np.float64) for p in positions]
        return ident

    def load_indices(self, indices) -> int:
        """Store an index buffer and return its id."""
        ident = self._new_id()
        self._ind_buf[ident] = [np.asarray(i, dtype=np.int64) for i in indices]
        return ident

    def load_colors(self, colors) -> int:
        """Store a colour buffer and return its id."""
        ident = self._new_id()
        self._col_buf[ident] = [np.asarray(c, dtype=np.float64) for c in colors]
        return ident

    def load_normals(self, normals) -> int:
        """Store a normal buffer, make it the current one, and return its id."""
        ident = self._new_id()
        self._nor_buf[ident] = [np.asarray(n, dtype=np.float64) for n in normals]
        self.normal_id = ident
        return ident

    def _index(self, x: int, y: int) -> int:
        return (self.height - y) * self.width + x

    def _in_buffer(self, index: int) -> bool:
        return 0 <= index < self.width * self.height

    def set_pixel(self, point: Sequence[int], color: Sequence[float]) -> None:
        """Write a colour at screen point (x, y); y grows upwards."""
        index = self._index(int(point[0]), int(point[1]))
        if not self._in_buffer(index):
            raise IndexError(f"pixel {tuple(point)} is outside the frame buffer")
        self.frame_buffer[index] = np.asarray(color, dtype=np.float64)

    def _plot(self, x: int, y: int, color: np.ndarray) -> None:
        if self._in_buffer(self._index(x, y)):
            self.set_pixel((x, y), color)

    def clear(self, buffers: Buffers) -> None:
        """Reset colour to black and/or depth to infinity."""
        if Buffers.COLOR in buffers:
            self.frame_buffer.fill(0.0)
        if Buffers.DEPTH in buffers:
            self.depth_buffer.fill(math.inf)

    def draw_line(self, begin: Sequence[float], end: Sequence[float]) -> None:
        """Draw a white line with Bresenham's algorithm."""
        x1, y1 = float(begin[0]), float(begin[1])
        x2, y2 = float(end[0]), float(end[1])
        white = np.array([255.0, 255.0, 255.0])

        dx = int(x2 - x1)
        dy = int(y2 - y1)
        dx1, dy1 = abs(dx), abs(dy)
        px = 2 * dy1 - dx1
        py = 2 * dx1 - dy1
        same_sign = (dx < 0 and dy < 0) or (dx > 0 and dy > 0)

        if dy1 <= dx1:
            if dx >= 0:
                x, y, xe = int(x1), int(y1), int(x2)
            else:
                x, y, xe = int(x2), int(y2), int(x1)
            self._plot(x, y, white)
            while x < xe:
                x += 1
                if px < 0:
                    px += 2 * dy1
                else:
                    y += 1 if same_sign else -1
                    px += 2 * (dy1 - dx1)
                self._plot(x, y, white)
        else:
            if dy >= 0:
                x, y, ye = int(x1), int(y1), int(y2)
            else:
                x, y, ye = int(x2), int(y2), int(y1)
            self._plot(x, y, white)
            while y < ye:
                y += 1
                if py <= 0:
                    py += 2 * dx1
                else:
                    x += 1 if same_sign else -1
                    py += 2 * (dx1 - dy1)
                self._plot(x, y, white)

    def draw(self, triangles: Sequence[Triangle]) -> None:
        """Transform, shade and rasterize a list of triangles."""
        f1 = (_Z_FAR - _Z_NEAR) / 2.0
        f2 = (_Z_FAR + _Z_NEAR) / 2.0
        model_view = self.view @ self.model
        mvp = self.projection @ model_view
        inv_trans = np.linalg.inv(model_view).T

        for tri in triangles:
            screen = copy.deepcopy(tri)
            view_pos = [(model_view @ vert)[:3] for vert in tri.v]

            for i, vert in enumerate(tri.v):
                clip = mvp @ vert
                w = clip[3]
                ndc = np.array([clip[0] / w, clip[1] / w, clip[2] / w, w])
                ndc[0] = 0.5 * self.width * (ndc[0] + 1.0)
                ndc[1] = 0.5 * self.height * (ndc[1] + 1.0)
                ndc[2] = ndc[2] * f1 + f2
                screen.set_vertex(i, ndc)

            for i, n in enumerate(tri.normal):
                screen.set_normal(i, (inv_trans @ np.append(n, 0.0))[:3])

            for i in range(3):
                screen.set_color(i, 148, 121.0, 92.0)

            self.rasterize_triangle(screen, view_pos)

    def rasterize_triangle(
        self, triangle: Triangle, view_pos: Sequence[np.ndarray]
    ) -> None:
        """Fill a screen-space triangle, depth-testing and shading each pixel."""
        if self.fragment_shader is None:
            raise RuntimeError("no fragment shader set")
        v = triangle.to_vector4()
        min_x = min([1000000.0, *(float(p[0]) for p in v)])
        max_x = max([-1.0, *(float(p[0]) for p in v)])
        min_y = min([1000000.0, *(float(p[1]) for p in v)])
        max_y = max([-1.0, *(float(p[1]) for p in v)])

        for y in range(int(min_y), math.ceil(max_y + 1)):
            for x in range(int(min_x), math.ceil(max_x + 1)):
                index = self._index(x, y)
                if not self._in_buffer(index):
                    continue
                alpha, beta, gamma = compute_barycentric_2d(x + 0.5, y + 0.5, triangle.v)
                if not (alpha >= 0 and beta >= 0 and gamma >= 0):
                    continue

                w_reciprocal = 1.0 / (alpha / v[0][3] + beta / v[1][3] + gamma / v[2][3])
                z = (
                    alpha * v[0][2] / v[0][3]
                    + beta * v[1][2] / v[1][3]
                    + gamma * v[2][2] / v[2][3]
                ) * w_reciprocal
                if z > self.depth_buffer[index]:
                    continue
                self.depth_buffer[index] = z

                payload = FragmentShaderPayload(
                    color=interpolated(triangle.color, alpha, beta, gamma),
                    normal=_normalized(interpolated(triangle.normal, alpha, beta, gamma)),
                    tex_coords=interpolated(triangle.tex_coords, alpha, beta, gamma),
                    texture=self.texture,
                    view_pos=interpolated(view_pos, alpha, beta, gamma),
                )
                self.set_pixel((x, y), self.fragment_shader(payload))