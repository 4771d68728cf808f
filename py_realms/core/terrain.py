"""
Terrain classification for territory seed points.

Terrain depends only on where the point sits in the rectangle and on a
single draw from the territory's generator:

- normalized center distance: distance to the map centre over the half-diagonal
- normalized edge distance: distance to the nearest edge over min(width, height)

The rules below are evaluated in order and the first match wins.
"""

import math
from enum import Enum
from typing import Callable, NamedTuple, Tuple

from .seeded_random import SeededRandom


class TerrainType(str, Enum):
    """Terrain categories a territory can take."""

    PLAINS = "plains"
    FOREST = "forest"
    MOUNTAINS = "mountains"
    DESERT = "desert"
    HILLS = "hills"
    COASTAL = "coastal"


class TerrainRule(NamedTuple):
    """One entry of the ordered classification chain."""

    terrain: TerrainType
    matches: Callable[[float, float, float], bool]  # (center_dist, edge_dist, r)


TERRAIN_RULES: Tuple[TerrainRule, ...] = (
    # Mountains ring the map edge
    TerrainRule(TerrainType.MOUNTAINS, lambda center, edge, r: edge < 0.15 and r < 0.6),
    # Coast near edges but away from the corners
    TerrainRule(
        TerrainType.COASTAL,
        lambda center, edge, r: edge < 0.20 and center < 0.70 and r < 0.7,
    ),
    TerrainRule(TerrainType.HILLS, lambda center, edge, r: edge < 0.30 and r < 0.5),
    TerrainRule(TerrainType.PLAINS, lambda center, edge, r: center < 0.50 and r < 0.6),
    TerrainRule(TerrainType.FOREST, lambda center, edge, r: r < 0.25),
    TerrainRule(TerrainType.DESERT, lambda center, edge, r: center > 0.60 and r < 0.3),
)

DEFAULT_TERRAIN = TerrainType.PLAINS


def normalized_center_distance(x: float, y: float, width: float, height: float) -> float:
    """Distance from the rectangle centre divided by the half-diagonal."""
    half_w = width / 2
    half_h = height / 2
    dist = math.sqrt((x - half_w) ** 2 + (y - half_h) ** 2)
    max_dist = math.sqrt(half_w ** 2 + half_h ** 2)
    return dist / max_dist


def normalized_edge_distance(x: float, y: float, width: float, height: float) -> float:
    """Distance to the nearest rectangle edge divided by min(width, height)."""
    return min(x, y, width - x, height - y) / min(width, height)


def classify_from_draw(center_dist: float, edge_dist: float, r: float) -> TerrainType:
    """Run the ordered rule chain for already-computed distances and draw."""
    for rule in TERRAIN_RULES:
        if rule.matches(center_dist, edge_dist, r):
            return rule.terrain
    return DEFAULT_TERRAIN


def classify_terrain(x: float, y: float, width: float, height: float, seed: int) -> TerrainType:
    """
    Classify the terrain of a territory whose seed point is (x, y).

    Args:
        x, y: Seed point coordinates
        width: Map width
        height: Map height
        seed: Per-territory seed; the first draw of its generator is ``r``

    Returns:
        TerrainType of the territory
    """
    r, _ = SeededRandom(seed).next()
    return classify_from_draw(
        normalized_center_distance(x, y, width, height),
        normalized_edge_distance(x, y, width, height),
        r,
    )
