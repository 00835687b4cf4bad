"""Camera matrices and fragment shaders for the rasterizer."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from softrender.shader import FragmentShaderPayload, VertexShaderPayload
from softrender.triangle import MY_PI


@dataclass
class PointLight:
    """A point light with a position and an intensity per channel."""

    position: np.ndarray
    intensity: np.ndarray


LIGHTS = (
    PointLight(np.array([20.0, 20.0, 20.0]), np.array([500.0, 500.0, 500.0])),
    PointLight(np.array([-20.0, 20.0, 0.0]), np.array([500.0, 500.0, 500.0])),
)
AMBIENT_INTENSITY = np.array([10.0, 10.0, 10.0])
EYE_POS = np.array([0.0, 0.0, 10.0])
KA = np.full(3, 0.005)
KS = np.full(3, 0.7937)
SHININESS = 150.0
KH = 0.2
KN = 0.1


def _normalized(vec: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(vec))
    return vec / norm if norm > 0 else vec


def get_view_matrix(eye_pos) -> np.ndarray:
    """Matrix that moves the camera at ``eye_pos`` to the origin."""
    eye = np.asarray(eye_pos, dtype=np.float64)
    view = np.eye(4)
    view[:3, 3] = -eye[:3]
    return view


def get_model_matrix(angle: float) -> np.ndarray:
    """Rotation by ``angle`` degrees about the y axis after a uniform 2.5 scale."""
    rad = angle * MY_PI / 180.0
    c, s = math.cos(rad), math.sin(rad)
    rotation = np.array(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    scale = np.diag([2.5, 2.5, 2.5, 1.0])
    return rotation @ scale


def get_projection_matrix(
    eye_fov: float, aspect_ratio: float, z_near: float, z_far: float
) -> np.ndarray:
    """Perspective projection for a vertical field of view in degrees."""
    fov = eye_fov / 180.0 * MY_PI
    half_tan = math.tan(fov / 2)
    elem00 = 1.0 / (aspect_ratio * half_tan)
    elem11 = 1.0 / half_tan
    elem22 = (-z_far - z_near) / (z_near - z_far)
    elem23 = (2 * z_near * z_far) / (z_near - z_far)
    return np.array(
        [
            [elem00, 0.0, 0.0, 0.0],
            [0.0, elem11, 0.0, 0.0],
            [0.0, 0.0, -elem22, elem23],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


def vertex_shader(payload: VertexShaderPayload) -> np.ndarray:
    """Pass the vertex position through unchanged."""
    return payload.position


def normal_fragment_shader(payload: FragmentShaderPayload) -> np.ndarray:
    """Colour a fragment by its normal direction, mapped to 0-255."""
    normal = _normalized(np.asarray(payload.normal, dtype=np.float64)[:3])
    return (normal + 1.0) / 2.0 * 255.0


def reflect(vec, axis) -> np.ndarray:
    """Unit reflection of ``vec`` about ``axis``."""
    vec = np.asarray(vec, dtype=np.float64)
    axis = np.asarray(axis, dtype=np.float64)
    costheta = float(vec @ axis)
    return _normalized(2 * costheta * axis - vec)


def _shade(kd: np.ndarray, point: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """Blinn-Phong lighting summed over the scene lights, scaled to 0-255."""
    result = np.zeros(3)
    with np.errstate(divide="ignore", invalid="ignore"):
        for light in LIGHTS:
            to_light = light.position - point
            dist2 = float(to_light @ to_light)
            l_dir = _normalized(to_light)
            v_dir = _normalized(EYE_POS - point)
            half = _normalized(l_dir + v_dir)

            diffuse = light.intensity / dist2 * max(0.0, float(l_dir @ normal))
            result += kd * diffuse

            specular = light.intensity / dist2 * max(0.0, float(half @ normal)) ** SHININESS
            result += KS * specular

            result += KA * AMBIENT_INTENSITY
    return result * 255.0


def _perturbed_normal(payload: FragmentShaderPayload) -> tuple[np.ndarray, np.ndarray, float]:
    """Normal bent by the texture's height map; also the original normal and height."""
    texture = payload.texture
    if texture is None:
        raise ValueError("this shader needs a texture")
    n = np.asarray(payload.normal, dtype=np.float64)[:3]
    x, y, z = (float(c) for c in n)
    with np.errstate(divide="ignore", invalid="ignore"):
        r = np.float64(math.sqrt(x * x + z * z))
        t = np.array([x * y, r, z * y]) / np.array([r, 1.0, r])
        b = np.cross(n, t)
        tbn = np.column_stack((t, b, n))

        u, v = (float(c) for c in payload.tex_coords[:2])
        w, h = float(texture.width), float(texture.height)
        base = float(np.linalg.norm(texture.get_color(u, v)))
        du = KH * KN * (float(np.linalg.norm(texture.get_color(u + 1 / w, v))) - base)
        dv = KH * KN * (float(np.linalg.norm(texture.get_color(u, v + 1 / h))) - base)
        ln = np.array([-du, -dv, 1.0])
        return _normalized(tbn @ ln), n, base


def texture_fragment_shader(payload: FragmentShaderPayload) -> np.ndarray:
    """Blinn-Phong shading with the diffuse colour taken from the texture."""
    if payload.texture is not None:
        u, v = (float(c) for c in payload.tex_coords[:2])
        texture_color = np.asarray(payload.texture.get_color(u, v), dtype=np.float64)
    else:
        texture_color = np.zeros(3)
    kd = texture_color / 255.0
    point = np.asarray(payload.view_pos, dtype=np.float64)
    normal = np.asarray(payload.normal, dtype=np.float64)[:3]
    return _shade(kd, point, normal)


def phong_fragment_shader(payload: FragmentShaderPayload) -> np.ndarray:
    """Blinn-Phong shading with the interpolated vertex colour as diffuse."""
    kd = np.asarray(payload.color, dtype=np.float64)
    point = np.asarray(payload.view_pos, dtype=np.float64)
    normal = np.asarray(payload.normal, dtype=np.float64)[:3]
    return _shade(kd, point, normal)


def displacement_fragment_shader(payload: FragmentShaderPayload) -> np.ndarray:
    """Shading with the surface displaced and its normal bent by a height map."""
    normal, original, height = _perturbed_normal(payload)
    point = np.asarray(payload.view_pos, dtype=np.float64) + KN * original * height
    kd = np.asarray(payload.color, dtype=np.float64)
    return _shade(kd, point, normal)


def bump_fragment_shader(payload: FragmentShaderPayload) -> np.ndarray:
    """Colour a fragment by its height-map-bent normal."""
    normal, _, _ = _perturbed_normal(payload)
    return normal * 255.0