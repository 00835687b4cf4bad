import numpy as np
import pytest
from PIL import Image

from softrender.objmath import Mesh, Vector2, Vector3, Vertex
from softrender.raster_cli import main, render, triangles_from_meshes
from softrender.shading import normal_fragment_shader
from softrender.triangle import Triangle

OBJ_TEXT = """v -0.1 -0.1 0
v 0.1 -0.1 0
v 0 0.1 0
vn 0 0 1
f 1//1 2//1 3//1
"""


def _vertex(x, y, z):
    return Vertex(position=Vector3(x, y, z), normal=Vector3(0.0, 0.0, 1.0),
                  texture_coordinate=Vector2(x, y))


def _big_triangle():
    tri = Triangle()
    for j, (x, y) in enumerate([(-0.5, -0.5), (0.5, -0.5), (0.0, 0.5)]):
        tri.set_vertex(j, (x, y, 0.0, 1.0))
        tri.set_normal(j, (0.0, 0.0, 1.0))
    return tri


@pytest.fixture
def model_dir(tmp_path):
    (tmp_path / "spot_triangulated_good.obj").write_text(OBJ_TEXT)
    Image.new("RGB", (8, 8), (90, 90, 90)).save(tmp_path / "hmap.jpg")
    Image.new("RGB", (8, 8), (200, 50, 50)).save(tmp_path / "spot_texture.png")
    return tmp_path


def test_triangles_from_meshes_copies_attributes():
    mesh = Mesh(vertices=[_vertex(1, 2, 3), _vertex(4, 5, 6), _vertex(7, 8, 9)])
    (tri,) = triangles_from_meshes([mesh])
    assert np.allclose(tri.v[1], [4, 5, 6, 1])
    assert np.allclose(tri.normal[2], [0, 0, 1])
    assert np.allclose(tri.tex_coords[0], [1, 2])


def test_triangles_from_meshes_counts_whole_triples():
    a = Mesh(vertices=[_vertex(i, 0, 0) for i in range(6)])
    b = Mesh(vertices=[_vertex(i, 1, 0) for i in range(4)])
    assert len(triangles_from_meshes([a, b])) == 3


def test_render_empty_scene_is_black():
    image = render([], normal_fragment_shader, None, 0.0, 16)
    assert image.shape == (16, 16, 3)
    assert image.dtype == np.uint8
    assert not image.any()


def test_render_normal_shader_fills_uniform_colour():
    image = render([_big_triangle()], normal_fragment_shader, None, 0.0, 100)
    lit = image[image.any(axis=2)]
    assert len(lit) > 0
    assert np.all(lit == lit[0])
    assert lit[0][2] == 255
    assert lit[0][0] == lit[0][1]


def test_main_writes_image(model_dir, tmp_path, capsys):
    out = tmp_path / "out.png"
    status = main([str(out), "normal", "--model-dir", str(model_dir)])
    assert status == 0
    assert "normal shader" in capsys.readouterr().out
    with Image.open(out) as img:
        assert img.size == (700, 700)
        assert np.asarray(img).any()


def test_main_unknown_shader_falls_back(model_dir, tmp_path, capsys):
    out = tmp_path / "fallback.png"
    assert main([str(out), "bogus", "--model-dir", str(model_dir)]) == 0
    assert "Rasterizing" not in capsys.readouterr().out
    assert out.exists()


def test_main_missing_model_fails(tmp_path, capsys):
    status = main([str(tmp_path / "x.png"), "normal", "--model-dir", str(tmp_path)])
    assert status == 1
    assert "error" in capsys.readouterr().err
    assert not (tmp_path / "x.png").exists()