"""
Rectangle-bounded Voronoi partitioning.

Adapts scipy.spatial.Voronoi to a per-point interface: for every input point
return its Voronoi cell clipped to [0, width] x [0, height], or None when the
point has no usable cell.

Guard points are added far outside the map before the diagram is computed,
so every real site lies inside the convex hull and gets a bounded region.
They sit far enough away that they never claim any part of the rectangle.
"""

from typing import List, Optional, Protocol, Sequence, Tuple

import numpy as np
import structlog
from scipy.spatial import QhullError, Voronoi
from shapely.geometry import MultiPoint, Polygon, box
from shapely.geometry.polygon import orient

from ..exceptions import PartitionError

logger = structlog.get_logger()

Point = Tuple[float, float]
Cell = List[Point]

GUARD_DISTANCE_FACTOR = 3.0


class RegionPartitioner(Protocol):
    """Anything that turns points plus a rectangle into per-point polygons."""

    def partition(
        self, points: Sequence[Sequence[float]], width: float, height: float
    ) -> List[Optional[Cell]]:
        ...


def get_guard_points(width: float, height: float) -> np.ndarray:
    """
    Four far-away points forming a diamond around the map.

    The diamond's half-diagonal is several times the map's semi-perimeter, so
    every point of the rectangle is closer to any real site than to a guard.
    """
    cx = width / 2
    cy = height / 2
    reach = GUARD_DISTANCE_FACTOR * (width + height)
    return np.array([
        [cx - reach, cy],
        [cx + reach, cy],
        [cx, cy - reach],
        [cx, cy + reach],
    ])


class VoronoiPartitioner:
    """RegionPartitioner backed by scipy's Qhull Voronoi and shapely clipping."""

    def partition(
        self, points: Sequence[Sequence[float]], width: float, height: float
    ) -> List[Optional[Cell]]:
        """
        Compute the clipped Voronoi cell of every point.

        Args:
            points: Sequence of [x, y] sites
            width: Map width
            height: Map height

        Returns:
            One entry per input point: counter-clockwise vertex list without a
            closing vertex, or None for points outside the map, repeated points
            and cells that clip to nothing

        Raises:
            PartitionError: if Qhull cannot build the diagram
        """
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        cells: List[Optional[Cell]] = [None] * len(pts)

        site_indices = self._usable_sites(pts, width, height)
        if not site_indices:
            return cells

        sites = pts[site_indices]
        try:
            vor = Voronoi(np.vstack([sites, get_guard_points(width, height)]))
        except QhullError as exc:
            logger.error("Voronoi computation failed", sites=len(sites), error=str(exc))
            raise PartitionError(f"Voronoi computation failed for {len(sites)} sites") from exc

        bounds = box(0, 0, width, height)
        for site_idx, point_idx in enumerate(site_indices):
            region = vor.regions[vor.point_region[site_idx]]
            if not region or -1 in region:
                continue
            cells[point_idx] = self._clip_region(vor.vertices[region], bounds)

        return cells

    @staticmethod
    def _usable_sites(pts: np.ndarray, width: float, height: float) -> List[int]:
        """Indices of finite, in-bounds points, keeping only the first of any repeats."""
        seen = set()
        indices = []
        for i, (x, y) in enumerate(pts):
            if not (np.isfinite(x) and np.isfinite(y)):
                continue
            if not (0 <= x <= width and 0 <= y <= height):
                continue
            key = (float(x), float(y))
            if key in seen:
                continue
            seen.add(key)
            indices.append(i)

        if len(indices) < len(pts):
            logger.debug("Points without a usable site", skipped=len(pts) - len(indices))
        return indices

    @staticmethod
    def _clip_region(vertices: np.ndarray, bounds: Polygon) -> Optional[Cell]:
        # Voronoi regions are convex, so the hull recovers a valid ring
        cell = MultiPoint([tuple(v) for v in vertices]).convex_hull
        clipped = cell.intersection(bounds)
        if clipped.is_empty or not isinstance(clipped, Polygon) or clipped.area <= 0:
            return None

        coords = list(orient(clipped, sign=1.0).exterior.coords)[:-1]
        if len(coords) < 3:
            return None
        return [(float(x), float(y)) for x, y in coords]
