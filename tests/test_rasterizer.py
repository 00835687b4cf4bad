import math

import numpy as np
import pytest

from softrender.rasterizer import (
    Buffers,
    Rasterizer,
    compute_barycentric_2d,
    inside_triangle,
    interpolated,
)
from softrender.triangle import Triangle

TRI_2D = [np.array([0.0, 0.0]), np.array([10.0, 0.0]), np.array([0.0, 10.0])]


def _ndc_triangle():
    t = Triangle()
    t.set_vertex(0, [-0.5, -0.5, 0.0, 1.0])
    t.set_vertex(1, [0.5, -0.5, 0.0, 1.0])
    t.set_vertex(2, [0.0, 0.5, 0.0, 1.0])
    return t


def test_barycentric_at_vertices():
    for i, p in enumerate(TRI_2D):
        coords = compute_barycentric_2d(p[0], p[1], TRI_2D)
        expected = [0.0, 0.0, 0.0]
        expected[i] = 1.0
        assert coords == pytest.approx(expected)


def test_barycentric_sums_to_one():
    assert sum(compute_barycentric_2d(3.0, 4.0, TRI_2D)) == pytest.approx(1.0)


def test_barycentric_degenerate_is_nan():
    flat = [np.array([0.0, 0.0]), np.array([1.0, 1.0]), np.array([2.0, 2.0])]
    coords = [float(c) for c in compute_barycentric_2d(0.5, 0.2, flat)]
    assert coords == pytest.approx([math.nan, math.nan, math.nan], nan_ok=True)


def test_inside_triangle():
    assert inside_triangle(2, 2, TRI_2D)
    assert not inside_triangle(20, 20, TRI_2D)


def test_interpolated_weights():
    vals = [np.array([1.0, 0.0]), np.array([0.0, 1.0]), np.array([1.0, 1.0])]
    assert np.allclose(interpolated(vals, 1.0, 0.0, 0.0), vals[0])
    assert np.allclose(interpolated(vals, 0.0, 0.0, 1.0), vals[2])


def test_buffer_ids_increase():
    r = Rasterizer(4, 4)
    a = r.load_positions([[0, 0, 0]])
    b = r.load_indices([[0, 1, 2]])
    c = r.load_colors([[1, 1, 1]])
    d = r.load_normals([[0, 0, 1]])
    assert [a, b, c, d] == [0, 1, 2, 3]
    assert r.normal_id == d


def test_clear_depth_and_color():
    r = Rasterizer(4, 4)
    r.frame_buffer[3] = [1, 2, 3]
    r.clear(Buffers.COLOR | Buffers.DEPTH)
    assert r.frame_buffer.tolist() == [[0.0, 0.0, 0.0]] * 16
    assert r.depth_buffer.tolist() == [math.inf] * 16


def test_clear_color_only_keeps_depth():
    r = Rasterizer(4, 4)
    r.clear(Buffers.COLOR)
    assert r.depth_buffer.tolist() == [0.0] * 16
    assert r.frame_buffer.tolist() == [[0.0, 0.0, 0.0]] * 16


def test_set_pixel_flips_rows():
    r = Rasterizer(5, 5)
    r.set_pixel((2, 5), [9, 8, 7])
    assert np.array_equal(r.frame_buffer[2], [9, 8, 7])


def test_set_pixel_out_of_range():
    r = Rasterizer(5, 5)
    with pytest.raises(IndexError):
        r.set_pixel((0, 0), [1, 1, 1])


def test_draw_line_horizontal():
    r = Rasterizer(10, 10)
    r.draw_line([1, 1, 0], [5, 1, 0])
    for x in range(1, 6):
        assert np.array_equal(r.frame_buffer[(10 - 1) * 10 + x], [255, 255, 255])
    assert np.array_equal(r.frame_buffer[(10 - 1) * 10 + 6], [0, 0, 0])


def test_draw_shades_covered_pixels():
    r = Rasterizer(20, 20)
    seen = []

    def shader(payload):
        seen.append(payload)
        return np.array([1.0, 2.0, 3.0])

    r.fragment_shader = shader
    r.clear(Buffers.COLOR | Buffers.DEPTH)
    r.draw([_ndc_triangle()])

    centre = (20 - 8) * 20 + 10
    corner = (20 - 1) * 20 + 1
    assert np.array_equal(r.frame_buffer[centre], [1, 2, 3])
    assert np.array_equal(r.frame_buffer[corner], [0, 0, 0])
    assert r.depth_buffer[centre] == pytest.approx((50 + 0.1) / 2.0)
    assert seen
    assert np.allclose(seen[0].color, np.array([148, 121, 92]) / 255.0)


def test_draw_without_depth_clear_draws_nothing():
    r = Rasterizer(20, 20)
    r.fragment_shader = lambda payload: np.array([1.0, 1.0, 1.0])
    r.draw([_ndc_triangle()])
    assert np.all(r.frame_buffer == 0)


def test_draw_needs_fragment_shader():
    r = Rasterizer(20, 20)
    r.clear(Buffers.DEPTH)
    with pytest.raises(RuntimeError):
        r.draw([_ndc_triangle()])