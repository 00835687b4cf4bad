"""Payloads handed to vertex and fragment shaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from softrender.texture import Texture


def _zeros(n: int):
    return lambda: np.zeros(n, dtype=np.float64)


@dataclass
class FragmentShaderPayload:
    """Interpolated attributes of one fragment."""

    color: np.ndarray = field(default_factory=_zeros(3))
    normal: np.ndarray = field(default_factory=_zeros(3))
    tex_coords: np.ndarray = field(default_factory=_zeros(2))
    texture: Optional[Texture] = None
    view_pos: np.ndarray = field(default_factory=_zeros(3))


@dataclass
class VertexShaderPayload:
    """Position of one vertex."""

    position: np.ndarray = field(default_factory=_zeros(3))