import numpy as np
import pytest

from softrender.triangle import Triangle


def test_defaults():
    t = Triangle()
    for vert in t.v:
        assert np.array_equal(vert, [0, 0, 0, 1])
    for col in t.color:
        assert np.array_equal(col, [0, 0, 0])
    for uv in t.tex_coords:
        assert np.array_equal(uv, [0, 0])
    assert t.tex is None


def test_set_vertex_and_normal():
    t = Triangle()
    t.set_vertex(1, [1, 2, 3, 4])
    t.set_normal(2, [0, 1, 0])
    assert np.array_equal(t.v[1], [1, 2, 3, 4])
    assert np.array_equal(t.normal[2], [0, 1, 0])


def test_set_color_scales_to_unit():
    t = Triangle()
    t.set_color(0, 255, 0, 255)
    assert np.allclose(t.color[0], [1.0, 0.0, 1.0])


@pytest.mark.parametrize("rgb", [(-1, 0, 0), (0, 256, 0), (0, 0, 300)])
def test_set_color_rejects_out_of_range(rgb):
    with pytest.raises(ValueError):
        Triangle().set_color(0, *rgb)


def test_set_colors_and_normals():
    t = Triangle()
    t.set_colors([[255, 255, 255], [0, 0, 0], [255, 0, 0]])
    t.set_normals([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
    assert np.allclose(t.color[0], [1, 1, 1])
    assert np.allclose(t.color[2], [1, 0, 0])
    assert np.array_equal(t.normal[1], [0, 1, 0])


def test_set_colors_validates():
    with pytest.raises(ValueError):
        Triangle().set_colors([[0, 0, 0], [0, 0, 0], [0, 0, 999]])


def test_set_tex_coord():
    t = Triangle()
    t.set_tex_coord(0, [0.25, 0.75])
    assert np.array_equal(t.tex_coords[0], [0.25, 0.75])


def test_to_vector4_forces_w():
    t = Triangle()
    t.set_vertex(0, [1, 2, 3, 5])
    vecs = t.to_vector4()
    assert np.array_equal(vecs[0], [1, 2, 3, 1])
    assert all(vec[3] == 1 for vec in vecs)