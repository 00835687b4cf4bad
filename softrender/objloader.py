"""Wavefront OBJ and MTL loading with simple polygon triangulation."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, replace
from typing import Sequence

from softrender.objmath import (
    Material,
    Mesh,
    Vector2,
    Vector3,
    Vertex,
    cross_v3,
    first_token,
    get_element,
    in_triangle,
    split,
    tail,
)

logger = logging.getLogger(__name__)

_REPORT_EVERY = 1000

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class ObjLoadError(ValueError):
    """Raised when an OBJ or MTL file cannot be loaded."""


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ObjLoadError(f"invalid number: {text!r}")
    return float(match.group(1))


def _parse_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ObjLoadError(f"invalid integer: {text!r}")
    return int(match.group(1))


def _parse_floats(fields: Sequence[str], count: int) -> list[float]:
    if len(fields) < count:
        raise ObjLoadError(f"expected {count} values, got {len(fields)}")
    return [_parse_float(value) for value in fields[:count]]


def gen_vertices_from_raw_obj(
    line: str,
    positions: Sequence[Vector3],
    tcoords: Sequence[Vector2],
    normals: Sequence[Vector3],
) -> list[Vertex]:
    """Build the vertices of a face line from the positions, texture coordinates and normals."""
    vertices: list[Vertex] = []
    missing_normal = False

    for corner in split(tail(line), " "):
        parts = split(corner, "/")
        if len(parts) == 1:
            vertices.append(Vertex(position=get_element(positions, parts[0])))
            missing_normal = True
        elif len(parts) == 2:
            vertices.append(
                Vertex(
                    position=get_element(positions, parts[0]),
                    texture_coordinate=get_element(tcoords, parts[1]),
                )
            )
            missing_normal = True
        elif len(parts) == 3:
            texcoord = get_element(tcoords, parts[1]) if parts[1] else Vector2()
            vertices.append(
                Vertex(
                    position=get_element(positions, parts[0]),
                    normal=get_element(normals, parts[2]),
                    texture_coordinate=texcoord,
                )
            )

    if missing_normal:
        if len(vertices) < 3:
            raise ObjLoadError("a face without normals needs at least three vertices")
        a = vertices[0].position - vertices[1].position
        b = vertices[2].position - vertices[1].position
        normal = cross_v3(a, b)
        for vertex in vertices:
            vertex.normal = normal

    return vertices


def _indices_at(vertices: Sequence[Vertex], *targets: Vector3) -> list[int]:
    """For each vertex in order, the index once per target its position equals."""
    return [
        j
        for j, vertex in enumerate(vertices)
        for target in targets
        if vertex.position == target
    ]


def vertex_triangulation(vertices: Sequence[Vertex]) -> list[int]:
    """Triangulate a polygon by ear clipping; returns indices into ``vertices``."""
    if len(vertices) < 3:
        return []
    if len(vertices) == 3:
        return [0, 1, 2]

    indices: list[int] = []
    remaining = list(vertices)

    while remaining:
        progressed = False
        i = 0
        while i < len(remaining):
            prev = remaining[i - 1].position
            cur = remaining[i].position
            nxt = remaining[(i + 1) % len(remaining)].position

            if len(remaining) == 3:
                indices.extend(_indices_at(vertices[: len(remaining)], cur, prev, nxt))
                remaining.clear()
                progressed = True
                break

            if len(remaining) == 4:
                indices.extend(_indices_at(vertices, cur, prev, nxt))
                other = next(
                    (
                        v.position
                        for v in remaining
                        if v.position not in (cur, prev, nxt)
                    ),
                    Vector3(),
                )
                indices.extend(_indices_at(vertices, prev, nxt, other))
                remaining.clear()
                progressed = True
                break

            blocked = any(
                in_triangle(v.position, prev, cur, nxt)
                and v.position not in (prev, cur, nxt)
                for v in vertices
            )
            if blocked:
                i += 1
                continue

            indices.extend(_indices_at(vertices, cur, prev, nxt))
            for j, vertex in enumerate(remaining):
                if vertex.position == cur:
                    del remaining[j]
                    break
            progressed = True
            i = 0

        if not indices or not progressed:
            break

    return indices


@dataclass
class _ObjParse:
    """Running state while reading one OBJ file."""

    loader: Loader
    path: str
    positions: list[Vector3] = field(default_factory=list)
    tcoords: list[Vector2] = field(default_factory=list)
    normals: list[Vector3] = field(default_factory=list)
    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    material_names: list[str] = field(default_factory=list)
    listening: bool = False
    mesh_name: str = ""
    lines_since_report: int = 0

    def feed(self, line: str) -> None:
        self._report()
        keyword = first_token(line)

        if keyword in ("o", "g") or line.startswith("g"):
            self._start_group(line, keyword in ("o", "g"))

        if keyword == "v":
            self.positions.append(Vector3(*_parse_floats(split(tail(line), " "), 3)))
        elif keyword == "vt":
            self.tcoords.append(Vector2(*_parse_floats(split(tail(line), " "), 2)))
        elif keyword == "vn":
            self.normals.append(Vector3(*_parse_floats(split(tail(line), " "), 3)))
        elif keyword == "f":
            self._add_face(line)
        elif keyword == "usemtl":
            self.material_names.append(tail(line))
            if self.indices and self.vertices:
                self._emit(f"{self.mesh_name}_2")
            self.lines_since_report = 0
        elif keyword == "mtllib":
            self._load_library(line)

    def finish(self) -> None:
        if self.indices and self.vertices:
            self._emit(self.mesh_name)

        materials = self.loader.loaded_materials
        for mesh, name in zip(self.loader.loaded_meshes, self.material_names):
            found = next((m for m in materials if m.name == name), None)
            if found is not None:
                mesh.material = replace(found)

    def _report(self) -> None:
        self.lines_since_report += 1
        if self.lines_since_report % _REPORT_EVERY == 0 and self.mesh_name:
            logger.info(
                "%s | vertices > %d | texcoords > %d | normals > %d | triangles > %d%s",
                self.mesh_name,
                len(self.positions),
                len(self.tcoords),
                len(self.normals),
                len(self.vertices) // 3,
                f" | material: {self.material_names[-1]}" if self.material_names else "",
            )

    def _start_group(self, line: str, named: bool) -> None:
        if not self.listening:
            self.listening = True
            self.mesh_name = tail(line) if named else "unnamed"
        elif self.indices and self.vertices:
            self._emit(self.mesh_name)
            self.mesh_name = tail(line)
        else:
            self.mesh_name = tail(line) if named else "unnamed"
        self.lines_since_report = 0

    def _emit(self, name: str) -> None:
        self.loader.loaded_meshes.append(
            Mesh(name=name, vertices=list(self.vertices), indices=list(self.indices))
        )
        self.vertices.clear()
        self.indices.clear()

    def _add_face(self, line: str) -> None:
        face = gen_vertices_from_raw_obj(line, self.positions, self.tcoords, self.normals)
        self.vertices.extend(face)
        self.loader.loaded_vertices.extend(face)

        local = vertex_triangulation(face)
        mesh_base = len(self.vertices) - len(face)
        global_base = len(self.loader.loaded_vertices) - len(face)
        self.indices.extend(mesh_base + i for i in local)
        self.loader.loaded_indices.extend(global_base + i for i in local)

    def _load_library(self, line: str) -> None:
        parts = split(self.path, "/")
        directory = "".join(part + "/" for part in parts[:-1]) if len(parts) != 1 else ""
        material_path = directory + tail(line)
        logger.info("find materials in: %s", material_path)
        try:
            self.loader.load_materials(material_path)
        except ObjLoadError as exc:
            logger.warning("materials not loaded: %s", exc)


class Loader:
    """Loads meshes, vertices, indices and materials from OBJ files."""

    def __init__(self) -> None:
        self.loaded_meshes: list[Mesh] = []
        self.loaded_vertices: list[Vertex] = []
        self.loaded_indices: list[int] = []
        self.loaded_materials: list[Material] = []

    def load_file(self, path: str | os.PathLike[str]) -> list[Mesh]:
        """Load an .obj file, replacing the meshes of any previous load."""
        path = os.fspath(path)
        if not path.endswith(".obj"):
            raise ObjLoadError(f"not an .obj file: {path}")
        try:
            handle = open(path, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ObjLoadError(f"cannot open {path}: {exc}") from exc

        self.loaded_meshes.clear()
        self.loaded_vertices.clear()
        self.loaded_indices.clear()

        parse = _ObjParse(loader=self, path=path)
        with handle:
            for lineno, raw in enumerate(handle, start=1):
                try:
                    parse.feed(raw.rstrip("\n"))
                except (ValueError, IndexError) as exc:
                    raise ObjLoadError(f"{path}:{lineno}: {exc}") from exc
        parse.finish()

        if not (self.loaded_meshes or self.loaded_vertices or self.loaded_indices):
            raise ObjLoadError(f"no geometry found in {path}")
        return self.loaded_meshes

    def load_materials(self, path: str | os.PathLike[str]) -> list[Material]:
        """Read the materials of an .mtl file and add them to ``loaded_materials``."""
        path = os.fspath(path)
        if not path.endswith(".mtl"):
            raise ObjLoadError(f"not a .mtl file: {path}")
        try:
            handle = open(path, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ObjLoadError(f"cannot open {path}: {exc}") from exc

        found: list[Material] = []
        material = Material()
        listening = False

        with handle:
            for lineno, raw in enumerate(handle, start=1):
                line = raw.rstrip("\n")
                try:
                    keyword = first_token(line)
                    if keyword == "newmtl":
                        if listening:
                            found.append(material)
                            material = Material()
                        listening = True
                        material.name = tail(line) if len(line) > 7 else "none"
                    elif keyword in ("Ka", "Kd", "Ks"):
                        values = split(tail(line), " ")
                        if len(values) != 3:
                            continue
                        colour = Vector3(*(_parse_float(v) for v in values))
                        setattr(material, keyword.lower(), colour)
                    elif keyword == "Ns":
                        material.ns = _parse_float(tail(line))
                    elif keyword == "Ni":
                        material.ni = _parse_float(tail(line))
                    elif keyword == "d":
                        material.d = _parse_float(tail(line))
                    elif keyword == "illum":
                        material.illum = _parse_int(tail(line))
                    elif keyword == "map_Ka":
                        material.map_ka = tail(line)
                    elif keyword == "map_Kd":
                        material.map_kd = tail(line)
                    elif keyword == "map_Ks":
                        material.map_ks = tail(line)
                    elif keyword == "map_Ns":
                        material.map_ns = tail(line)
                    elif keyword == "map_d":
                        material.map_d = tail(line)
                    elif keyword in ("map_Bump", "map_bump", "bump"):
                        material.map_bump = tail(line)
                except ValueError as exc:
                    raise ObjLoadError(f"{path}:{lineno}: {exc}") from exc

        found.append(material)
        self.loaded_materials.extend(found)
        return found