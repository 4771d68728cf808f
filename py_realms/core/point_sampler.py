"""Seed point placement and Lloyd relaxation."""

from typing import Optional

import numpy as np
import structlog

from ..exceptions import InvalidMapConfigError
from .geometry import polygon_centroid, vertex_mean
from .partition import RegionPartitioner, VoronoiPartitioner
from .seeded_random import SeededRandom

logger = structlog.get_logger()

CENTROID_FUNCTIONS = {
    "vertex_mean": vertex_mean,
    "area": polygon_centroid,
}


def sample_points(
    count: int, width: float, height: float, seed: int, margin: float = 0.0
) -> np.ndarray:
    """
    Place ``count`` points uniformly at random inside the rectangle.

    Each point takes two consecutive draws (x, then y) from one generator
    seeded with ``seed``.

    Args:
        count: Number of points
        width: Map width
        height: Map height
        seed: Generator seed
        margin: Inward padding kept free on every side

    Returns:
        Array of shape (count, 2)
    """
    if margin < 0 or 2 * margin >= width or 2 * margin >= height:
        raise InvalidMapConfigError(
            f"Margin {margin} leaves no room inside a {width}x{height} map"
        )

    inner_width = width - 2 * margin
    inner_height = height - 2 * margin

    rng = SeededRandom(seed)
    points = np.empty((count, 2), dtype=float)
    for i in range(count):
        (rx, ry), rng = rng.take(2)
        points[i, 0] = margin + rx * inner_width
        points[i, 1] = margin + ry * inner_height

    return points


def relax_points(
    points: np.ndarray,
    width: float,
    height: float,
    n_iterations: int = 3,
    partitioner: Optional[RegionPartitioner] = None,
    centroid: str = "vertex_mean",
) -> np.ndarray:
    """Apply Lloyd's relaxation to improve point distribution.

    Moves each point to the centroid of its clipped Voronoi cell. A point
    without a cell keeps its position for that iteration. A few iterations
    even out the spacing without making cells equal in area.

    Args:
        points: Points to relax
        width: Map width
        height: Map height
        n_iterations: Number of relaxation iterations
        partitioner: Cell provider, VoronoiPartitioner by default
        centroid: ``"vertex_mean"`` or ``"area"`` (area-weighted)

    Returns:
        Relaxed point coordinates
    """
    if centroid not in CENTROID_FUNCTIONS:
        raise ValueError(f"Unknown centroid mode: {centroid}")
    centroid_of = CENTROID_FUNCTIONS[centroid]
    partitioner = partitioner or VoronoiPartitioner()

    logger.info("Starting Lloyd's relaxation", iterations=n_iterations, points=len(points))

    points = np.array(points, dtype=float)  # Don't modify the caller's array

    for iteration in range(n_iterations):
        cells = partitioner.partition(points, width, height)
        relaxed = points.copy()
        kept = 0

        for i, cell in enumerate(cells):
            if cell is None:
                kept += 1
                continue
            relaxed[i] = centroid_of(cell)

        points = relaxed
        logger.debug(
            "Relaxation iteration complete", iteration=iteration + 1, kept_in_place=kept
        )

    return points


def generate_relaxed_points(
    count: int,
    width: float,
    height: float,
    seed: int,
    n_iterations: int = 3,
    margin: float = 0.0,
    partitioner: Optional[RegionPartitioner] = None,
    centroid: str = "vertex_mean",
) -> np.ndarray:
    """Sample ``count`` points and relax them ``n_iterations`` times."""
    points = sample_points(count, width, height, seed, margin)
    return relax_points(points, width, height, n_iterations, partitioner, centroid)
