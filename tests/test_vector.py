import math

import pytest

from softrender.vector import (
    Vector2f,
    Vector3f,
    clamp,
    cross_product,
    dot_product,
    get_random_float,
    lerp,
    normalize,
    solve_quadratic,
    update_progress,
)


def test_single_argument_fills_all_components():
    assert tuple(Vector3f(2)) == (2.0, 2.0, 2.0)
    assert tuple(Vector2f(3)) == (3.0, 3.0)
    assert tuple(Vector3f()) == (0.0, 0.0, 0.0)


def test_two_components_rejected():
    with pytest.raises(TypeError):
        Vector3f(1, 2)


def test_arithmetic():
    a = Vector3f(1, 2, 3)
    b = Vector3f(4, 5, 6)
    assert a + b == Vector3f(5, 7, 9)
    assert b - a == Vector3f(3, 3, 3)
    assert a * b == Vector3f(4, 10, 18)
    assert a * 2 == Vector3f(2, 4, 6)
    assert 2 * a == a * 2
    assert a / 2 == Vector3f(0.5, 1, 1.5)
    assert -a == Vector3f(-1, -2, -3)


def test_in_place_add_gives_sum():
    a = Vector3f(1, 1, 1)
    a += Vector3f(1, 2, 3)
    assert a == Vector3f(2, 3, 4)


def test_vector2_ops():
    assert Vector2f(1, 2) + Vector2f(3, 4) == Vector2f(4, 6)
    assert Vector2f(1, 2) * 3 == Vector2f(3, 6)


def test_str_format():
    assert str(Vector3f(1, 2.5, 3)) == "1, 2.5, 3"


def test_normalize_unit_length():
    n = normalize(Vector3f(3, -4, 12))
    assert math.sqrt(dot_product(n, n)) == pytest.approx(1.0)
    assert n.x / n.y == pytest.approx(3 / -4)


def test_normalize_zero_unchanged():
    assert normalize(Vector3f(0)) == Vector3f(0)


def test_cross_product_orthogonal():
    a = Vector3f(1, 2, 3)
    b = Vector3f(-2, 0.5, 4)
    c = cross_product(a, b)
    assert dot_product(c, a) == pytest.approx(0.0)
    assert dot_product(c, b) == pytest.approx(0.0)
    assert cross_product(Vector3f(1, 0, 0), Vector3f(0, 1, 0)) == Vector3f(0, 0, 1)


def test_lerp_endpoints():
    a = Vector3f(0.815, 0.235, 0.031)
    b = Vector3f(0.5)
    assert lerp(a, b, 0) == a
    assert tuple(lerp(a, b, 1)) == pytest.approx(tuple(b))


def test_clamp():
    assert clamp(0, 1, 2) == 1
    assert clamp(0, 1, -2) == 0
    assert clamp(0, 1, 0.25) == 0.25


def test_solve_quadratic_two_roots_ordered():
    x0, x1 = solve_quadratic(1, -4, 3)
    assert x0 == pytest.approx(1.0)
    assert x1 == pytest.approx(3.0)
    y0, y1 = solve_quadratic(-1, 4, -3)
    assert y0 <= y1


def test_solve_quadratic_double_root_and_none():
    assert solve_quadratic(1, -2, 1) == (1.0, 1.0)
    assert solve_quadratic(1, 0, 1) is None


def test_random_float_range():
    values = [get_random_float() for _ in range(200)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_update_progress_output(capsys):
    update_progress(0.5)
    out = capsys.readouterr().out
    assert out == "[" + "=" * 35 + ">" + " " * 34 + "] 50 %\r"