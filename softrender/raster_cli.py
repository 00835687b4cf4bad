"""Command that renders an OBJ model through one of the fragment shaders."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

import numpy as np
from PIL import Image

from softrender.objloader import Loader, ObjLoadError
from softrender.objmath import Mesh
from softrender.rasterizer import Buffers, Rasterizer
from softrender.shader import FragmentShaderPayload
from softrender.shading import (
    EYE_POS,
    bump_fragment_shader,
    displacement_fragment_shader,
    get_model_matrix,
    get_projection_matrix,
    get_view_matrix,
    normal_fragment_shader,
    phong_fragment_shader,
    texture_fragment_shader,
    vertex_shader,
)
from softrender.texture import Texture
from softrender.triangle import Triangle

FragmentShader = Callable[[FragmentShaderPayload], np.ndarray]

MODEL_NAME = "spot_triangulated_good.obj"
HEIGHT_MAP = "hmap.jpg"
COLOR_MAP = "spot_texture.png"
IMAGE_SIZE = 700

_SHADERS: dict[str, FragmentShader] = {
    "texture": texture_fragment_shader,
    "normal": normal_fragment_shader,
    "phong": phong_fragment_shader,
    "bump": bump_fragment_shader,
    "displacement": displacement_fragment_shader,
}


def triangles_from_meshes(meshes: Iterable[Mesh]) -> list[Triangle]:
    """Turn each consecutive vertex triple of every mesh into a triangle."""
    triangles: list[Triangle] = []
    for mesh in meshes:
        corners = iter(mesh.vertices)
        for triple in zip(corners, corners, corners):
            tri = Triangle()
            for j, vert in enumerate(triple):
                p, n, uv = vert.position, vert.normal, vert.texture_coordinate
                tri.set_vertex(j, (p.x, p.y, p.z, 1.0))
                tri.set_normal(j, (n.x, n.y, n.z))
                tri.set_tex_coord(j, (uv.x, uv.y))
            triangles.append(tri)
    return triangles


def render(
    triangles: Sequence[Triangle],
    shader: FragmentShader,
    texture: Optional[Texture] = None,
    angle: float = 140.0,
    size: int = IMAGE_SIZE,
) -> np.ndarray:
    """Render triangles into a size x size RGB image of 8-bit channels."""
    raster = Rasterizer(size, size)
    raster.texture = texture
    raster.vertex_shader = vertex_shader
    raster.fragment_shader = shader
    raster.clear(Buffers.COLOR | Buffers.DEPTH)
    raster.model = get_model_matrix(angle)
    raster.view = get_view_matrix(EYE_POS)
    raster.projection = get_projection_matrix(45.0, 1.0, 0.1, 50.0)
    raster.draw(triangles)

    pixels = np.nan_to_num(raster.frame_buffer, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(np.rint(pixels), 0, 255).astype(np.uint8).reshape(size, size, 3)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render the model to an image file; returns the exit status."""
    parser = argparse.ArgumentParser(description="Rasterize an OBJ model with a shader.")
    parser.add_argument("output", nargs="?", default="output.png", help="image to write")
    parser.add_argument("shader", nargs="?", help=", ".join(_SHADERS))
    parser.add_argument("--model-dir", default="../models/spot/", help="model and texture folder")
    parser.add_argument("--angle", type=float, default=140.0, help="rotation in degrees")
    args = parser.parse_args(argv)

    shader: FragmentShader = displacement_fragment_shader
    texture_name = HEIGHT_MAP
    if args.shader in _SHADERS:
        print(f"Rasterizing using the {args.shader} shader")
        shader = _SHADERS[args.shader]
        if args.shader == "texture":
            texture_name = COLOR_MAP

    model_dir = Path(args.model_dir)
    try:
        meshes = Loader().load_file(model_dir / MODEL_NAME)
        texture = Texture.from_file(model_dir / texture_name)
    except (ObjLoadError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    image = render(triangles_from_meshes(meshes), shader, texture, args.angle, IMAGE_SIZE)
    Image.fromarray(image).save(args.output)
    return 0