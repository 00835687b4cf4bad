"""Image textures sampled by texture coordinates."""

from __future__ import annotations

import os

import numpy as np
from PIL import Image


class Texture:
    """An RGB image that can be sampled with (u, v) coordinates."""

    def __init__(self, image: np.ndarray) -> None:
        data = np.asarray(image)
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"expected an H x W x 3 image, got shape {data.shape}")
        if data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError("texture image is empty")
        self.image_data = data
        self.height, self.width = int(data.shape[0]), int(data.shape[1])

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Texture:
        """Load a texture from an image file, as RGB."""
        with Image.open(path) as img:
            return cls(np.array(img.convert("RGB")))

    def get_color(self, u: float, v: float) -> np.ndarray:
        """Colour at (u, v); v runs bottom to top, coordinates clamp to the image."""
        col = int(u * self.width)
        row = int((1 - v) * self.height)
        col = min(max(col, 0), self.width - 1)
        row = min(max(row, 0), self.height - 1)
        return self.image_data[row, col].astype(np.float64)