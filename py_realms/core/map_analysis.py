"""Summary statistics and invariant checks for generated territory maps."""

from collections import Counter
from typing import Dict, List, Sequence

from pydantic import BaseModel, Field

from .attributes import calculate_development
from .geometry import polygon_area
from .models import Territory
from .terrain import TerrainType

AREA_TOLERANCE = 1e-6


class TerrainStatistics(BaseModel):
    """Per-terrain share of the map."""

    terrain: TerrainType
    territory_count: int
    percentage: float = Field(description="Share of territories, 0-100")
    total_area: float
    total_population: int


class MapStatistics(BaseModel):
    """Summary of a generated map."""

    territory_count: int
    map_area: float
    total_area: float
    coverage_ratio: float = Field(description="Sum of territory areas over map area")
    min_area: float
    max_area: float
    mean_area: float
    total_population: int
    mean_development: float
    terrain_distribution: List[TerrainStatistics]
    culture_distribution: Dict[str, int]


def analyze_territories(
    territories: Sequence[Territory], width: float, height: float
) -> MapStatistics:
    """
    Compute summary statistics for a territory list.

    Args:
        territories: Generated territories
        width: Map width
        height: Map height

    Returns:
        MapStatistics; area figures are zero for an empty list
    """
    map_area = width * height
    count = len(territories)
    areas = [t.area for t in territories]
    total_area = sum(areas)

    terrain_stats = []
    for terrain in TerrainType:
        members = [t for t in territories if t.metadata.terrain == terrain]
        if not members:
            continue
        terrain_stats.append(
            TerrainStatistics(
                terrain=terrain,
                territory_count=len(members),
                percentage=100.0 * len(members) / count,
                total_area=sum(t.area for t in members),
                total_population=sum(t.metadata.population for t in members),
            )
        )

    cultures = Counter(t.metadata.culture for t in territories)

    return MapStatistics(
        territory_count=count,
        map_area=map_area,
        total_area=total_area,
        coverage_ratio=total_area / map_area,
        min_area=min(areas) if areas else 0.0,
        max_area=max(areas) if areas else 0.0,
        mean_area=total_area / count if count else 0.0,
        total_population=sum(t.metadata.population for t in territories),
        mean_development=(
            sum(t.metadata.development for t in territories) / count if count else 0.0
        ),
        terrain_distribution=terrain_stats,
        culture_distribution=dict(sorted(cultures.items())),
    )


def find_invariant_violations(
    territories: Sequence[Territory], width: float, height: float
) -> List[str]:
    """
    List every broken output invariant, empty when the map is valid.

    Checked: unique ids and names, polygons of 3+ vertices inside the map,
    stored area matching the shoelace area, resource and development ranges,
    development derived from resources, positive population, and the areas
    summing to the map area.
    """
    problems = []

    ids = [t.id for t in territories]
    if len(set(ids)) != len(ids):
        problems.append("duplicate territory ids")
    names = [t.name for t in territories]
    if len(set(names)) != len(names):
        problems.append("duplicate territory names")

    for t in territories:
        if len(t.border_points) < 3:
            problems.append(f"{t.id}: polygon has {len(t.border_points)} vertices")
            continue
        if t.border_points[0] == t.border_points[-1]:
            problems.append(f"{t.id}: polygon repeats its closing vertex")
        for x, y in t.border_points:
            if not (-AREA_TOLERANCE <= x <= width + AREA_TOLERANCE
                    and -AREA_TOLERANCE <= y <= height + AREA_TOLERANCE):
                problems.append(f"{t.id}: vertex ({x}, {y}) outside the map")
                break
        if abs(polygon_area(t.border_points) - t.area) > AREA_TOLERANCE * max(1.0, t.area):
            problems.append(f"{t.id}: area does not match its polygon")

        meta = t.metadata
        for key in ("food", "gold", "military"):
            value = getattr(meta.resources, key)
            if not 1 <= value <= 100:
                problems.append(f"{t.id}: {key} {value} outside [1, 100]")
        if not 0 <= meta.development <= 100:
            problems.append(f"{t.id}: development {meta.development} outside [0, 100]")
        if meta.development != calculate_development(meta.resources):
            problems.append(f"{t.id}: development is not derived from resources")
        if meta.population <= 0:
            problems.append(f"{t.id}: population {meta.population} is not positive")

    map_area = width * height
    total_area = sum(t.area for t in territories)
    if territories and abs(total_area - map_area) > AREA_TOLERANCE * map_area:
        problems.append(f"territory areas sum to {total_area}, map area is {map_area}")

    return problems
