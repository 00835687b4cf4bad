"""Bezier curves drawn into an image by de Casteljau's algorithm."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

import numpy as np
from PIL import Image

IMAGE_SIZE = 700
OUTPUT_NAME = "my_bezier_curve.png"
_RED = 0


def _parameters(step: float) -> np.ndarray:
    """Curve parameters 0, step, 2*step, ... accumulated while not past 1."""
    values = []
    t = 0.0
    while t <= 1.0:
        values.append(t)
        t += step
    return np.array(values)


def _mark(image: np.ndarray, points: np.ndarray) -> None:
    """Set the red channel at each (x, y) point that falls inside the image."""
    cols = points[:, 0].astype(int)
    rows = points[:, 1].astype(int)
    inside = (rows >= 0) & (rows < image.shape[0]) & (cols >= 0) & (cols < image.shape[1])
    image[rows[inside], cols[inside], _RED] = 255


def naive_bezier(points: Sequence[Sequence[float]], image: np.ndarray) -> None:
    """Draw the cubic curve of the first four points with the Bernstein formula."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 4:
        raise ValueError("a cubic curve needs four control points")
    p0, p1, p2, p3 = pts[:4]
    t = _parameters(0.001)[:, None]
    curve = (
        (1 - t) ** 3 * p0
        + 3 * t * (1 - t) ** 2 * p1
        + 3 * t**2 * (1 - t) * p2
        + t**3 * p3
    )
    _mark(image, curve)


def recursive_bezier(control_points: Sequence[Sequence[float]], t: float) -> np.ndarray:
    """Point of the curve at ``t``, by repeated linear interpolation."""
    points = np.asarray(control_points, dtype=np.float64)
    if len(points) < 2:
        raise ValueError("a curve needs at least two control points")
    reduced = points[:-1] * (1 - t) + points[1:] * t
    if len(reduced) >= 2:
        return recursive_bezier(reduced, t)
    return reduced[0]


def _curve(control_points: np.ndarray, ts: np.ndarray) -> np.ndarray:
    """De Casteljau evaluation at many parameters at once."""
    level = np.broadcast_to(control_points, (len(ts), *control_points.shape))
    t = ts[:, None, None]
    while level.shape[1] > 1:
        level = level[:, :-1] * (1 - t) + level[:, 1:] * t
    return level[:, 0]


def bezier(control_points: Sequence[Sequence[float]], image: np.ndarray) -> None:
    """Draw the curve of any number of control points in red."""
    points = np.asarray(control_points, dtype=np.float64)
    if len(points) < 2:
        raise ValueError("a curve needs at least two control points")
    _mark(image, _curve(points, _parameters(0.00001)))


def _draw_circle(image: np.ndarray, center: Sequence[float], radius: float = 3, thickness: float = 3) -> None:
    rows, cols = np.ogrid[: image.shape[0], : image.shape[1]]
    dist = np.hypot(cols - center[0], rows - center[1])
    image[np.abs(dist - radius) <= thickness / 2] = 255


def _point(text: str) -> tuple[float, float]:
    try:
        x, y = (float(part) for part in text.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected X,Y, got {text!r}") from exc
    return x, y


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Draw the curve of four control points and save it as an image."""
    parser = argparse.ArgumentParser(description="Draw a cubic Bezier curve.")
    parser.add_argument("points", nargs=4, type=_point, metavar="X,Y", help="control point")
    parser.add_argument("-o", "--output", default=OUTPUT_NAME, help="image to write")
    parser.add_argument("--size", type=int, default=IMAGE_SIZE, help="image width and height")
    parser.add_argument("--naive", action="store_true", help="use the Bernstein formula")
    args = parser.parse_args(argv)

    image = np.zeros((args.size, args.size, 3), dtype=np.uint8)
    for point in args.points:
        _draw_circle(image, point)
    if args.naive:
        naive_bezier(args.points, image)
    else:
        bezier(args.points, image)
    Image.fromarray(image).save(args.output)
    return 0