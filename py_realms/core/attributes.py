"""
Territory attribute generation: resources, population, culture, development.

Seeds per territory ``i`` with base seed ``s``:

- terrain draw:            SeededRandom(s + i), first value
- population, culture:     SeededRandom(s + i), first and second values
- food, gold, military:    SeededRandom(s + i + 1000)

The population generator is a fresh instance on the territory seed, so its
first draw coincides with the terrain draw. The offsets are part of the
reproducible output; changing them changes every generated map.
"""

import math
from typing import Dict, Optional, Tuple

from .geometry import round_half_up
from .models import Resources, TerritoryMetadata
from .seeded_random import SeededRandom
from .terrain import TerrainType, classify_terrain

RESOURCE_SEED_OFFSET = 1000

# Maps are normalised as if they held this many territories
AVERAGE_TERRITORY_DIVISOR = 30

CULTURES = (
    "Gothic",
    "Norman",
    "Saxon",
    "Celtic",
    "Frankish",
    "Byzantine",
    "Slavic",
    "Norse",
    "Iberian",
    "Lombard",
    "Moorish",
    "Venetian",
)

Range = Tuple[int, int]

# (food, gold, military)
RESOURCE_RANGES: Dict[TerrainType, Tuple[Range, Range, Range]] = {
    TerrainType.PLAINS: ((70, 95), (40, 60), (50, 70)),
    TerrainType.FOREST: ((60, 80), (30, 50), (40, 60)),
    TerrainType.MOUNTAINS: ((20, 40), (70, 95), (60, 85)),
    TerrainType.DESERT: ((15, 35), (50, 80), (30, 50)),
    TerrainType.HILLS: ((50, 70), (55, 75), (55, 75)),
    TerrainType.COASTAL: ((65, 85), (60, 85), (45, 65)),
}
DEFAULT_RESOURCE_VALUE = 50

POPULATION_RANGES: Dict[TerrainType, Range] = {
    TerrainType.PLAINS: (8000, 15000),
    TerrainType.FOREST: (5000, 10000),
    TerrainType.MOUNTAINS: (2000, 5000),
    TerrainType.DESERT: (1000, 4000),
    TerrainType.HILLS: (6000, 12000),
    TerrainType.COASTAL: (10000, 18000),
}
DEFAULT_BASE_POPULATION = 5000


def generate_resources(terrain: TerrainType, seed: int) -> Resources:
    """Draw food, gold and military (in that order) from ``SeededRandom(seed)``."""
    ranges = RESOURCE_RANGES.get(terrain)
    if ranges is None:
        return Resources(
            food=DEFAULT_RESOURCE_VALUE,
            gold=DEFAULT_RESOURCE_VALUE,
            military=DEFAULT_RESOURCE_VALUE,
        )

    rng = SeededRandom(seed)
    values = []
    for low, high in ranges:
        value, rng = rng.next_int(low, high)
        values.append(value)

    food, gold, military = values
    return Resources(food=food, gold=gold, military=military)


def calculate_development(resources: Resources) -> int:
    """Development score: gold weighs 0.4, food and military 0.3 each."""
    return round_half_up(
        resources.gold * 0.4 + resources.food * 0.3 + resources.military * 0.3
    )


def draw_base_population(
    terrain: TerrainType, rng: SeededRandom
) -> Tuple[int, SeededRandom]:
    """Draw the unscaled population for a terrain; unknown terrain takes no draw."""
    population_range = POPULATION_RANGES.get(terrain)
    if population_range is None:
        return DEFAULT_BASE_POPULATION, rng
    return rng.next_int(*population_range)


def scale_population(base: int, area: float, width: float, height: float) -> int:
    """
    Scale a base population by sqrt(area / average_area).

    The average area assumes a fixed number of territories regardless of how
    many were requested. The result is at least 1.
    """
    average_area = (width * height) / AVERAGE_TERRITORY_DIVISOR
    multiplier = math.sqrt(area / average_area)
    return max(1, round_half_up(base * multiplier))


def draw_culture(rng: SeededRandom) -> Tuple[str, SeededRandom]:
    index, rng = rng.next_int(0, len(CULTURES) - 1)
    return CULTURES[index], rng


def generate_metadata(
    x: float,
    y: float,
    width: float,
    height: float,
    area: float,
    seed: int,
    terrain: Optional[TerrainType] = None,
) -> TerritoryMetadata:
    """
    Generate the full metadata record for a territory.

    Args:
        x, y: Relaxed seed point of the territory
        width: Map width
        height: Map height
        area: Area of the territory polygon
        seed: Per-territory seed (base seed + territory index)
        terrain: Pre-computed terrain; classified from (x, y, seed) when omitted

    Returns:
        TerritoryMetadata with terrain, resources, population, culture and development
    """
    if terrain is None:
        terrain = classify_terrain(x, y, width, height, seed)

    resources = generate_resources(terrain, seed + RESOURCE_SEED_OFFSET)

    rng = SeededRandom(seed)
    base_population, rng = draw_base_population(terrain, rng)
    population = scale_population(base_population, area, width, height)
    culture, rng = draw_culture(rng)

    return TerritoryMetadata(
        population=population,
        terrain=terrain,
        resources=resources,
        culture=culture,
        development=calculate_development(resources),
    )
