import pytest

from softrender.objects import Light, Sphere
from softrender.scene import Scene
from softrender.vector import Vector3f


def test_defaults():
    scene = Scene(1280, 960)
    assert (scene.width, scene.height) == (1280, 960)
    assert scene.fov == 90
    assert scene.max_depth == 5
    assert scene.epsilon == pytest.approx(0.00001)
    assert tuple(scene.background_color) == pytest.approx((0.235294, 0.67451, 0.843137))
    assert scene.objects == () and scene.lights == ()


def test_add_routes_objects_and_lights_in_order():
    scene = Scene(4, 3)
    s1 = Sphere(Vector3f(-1, 0, -12), 2)
    s2 = Sphere(Vector3f(0.5, -0.5, -8), 1.5)
    light = Light(Vector3f(30, 50, -12), Vector3f(0.5))
    scene.add(s1)
    scene.add(light)
    scene.add(s2)
    assert scene.objects == (s1, s2)
    assert scene.lights == (light,)


def test_add_rejects_other_things():
    scene = Scene(4, 3)
    with pytest.raises(TypeError):
        scene.add(Vector3f(1))
    assert scene.objects == ()