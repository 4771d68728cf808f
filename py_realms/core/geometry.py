"""Polygon math shared by the partitioner, relaxation and attribute stages."""

import math
from typing import Sequence, Tuple

import numpy as np

from ..exceptions import DegeneratePolygonError

Point = Tuple[float, float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def signed_polygon_area(vertices: Sequence[Sequence[float]]) -> float:
    """
    Signed shoelace area of a polygon.

    Positive for counter-clockwise winding (y axis up). The last vertex is
    joined back to the first, so the input must not repeat the closing vertex.

    Raises:
        DegeneratePolygonError: if fewer than three vertices are given
    """
    n = len(vertices)
    if n < 3:
        raise DegeneratePolygonError(n)

    total = 0.0
    for i in range(n):
        j = (i + 1) % n
        total += vertices[i][0] * vertices[j][1]
        total -= vertices[j][0] * vertices[i][1]
    return total / 2


def polygon_area(vertices: Sequence[Sequence[float]]) -> float:
    """Absolute shoelace area of a polygon."""
    return abs(signed_polygon_area(vertices))


def vertex_mean(vertices: Sequence[Sequence[float]]) -> Point:
    """Mean of the polygon's vertices."""
    arr = np.asarray(vertices, dtype=float)
    mean = arr.mean(axis=0)
    return float(mean[0]), float(mean[1])


def polygon_centroid(vertices: Sequence[Sequence[float]]) -> Point:
    """Compute the area-weighted centroid of a polygon.

    Args:
        vertices: Sequence of [x, y] vertex coordinates

    Returns:
        (x, y) centroid; the vertex mean when the polygon has no area
    """
    n = len(vertices)
    if n < 3:
        return vertex_mean(vertices)

    area = 0.0
    cx = 0.0
    cy = 0.0

    for i in range(n):
        j = (i + 1) % n
        a = vertices[i][0] * vertices[j][1] - vertices[j][0] * vertices[i][1]
        area += a
        cx += (vertices[i][0] + vertices[j][0]) * a
        cy += (vertices[i][1] + vertices[j][1]) * a

    if abs(area) < 1e-10:
        return vertex_mean(vertices)

    area *= 0.5
    cx /= (6.0 * area)
    cy /= (6.0 * area)

    return float(cx), float(cy)
