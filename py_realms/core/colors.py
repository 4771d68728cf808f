"""
Territory colours.

Two modes:

- terrain colours: a hue band per terrain, varied by territory index and the
  map seed, so neighbouring forests stay green but distinguishable
- palette colours: golden-ratio hue spacing for maps without terrain data
"""

from typing import Dict, List, Tuple

from .geometry import round_half_up
from .terrain import TerrainType

GOLDEN_RATIO_CONJUGATE = 0.618033988749895


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """
    Convert HSL to a ``#rrggbb`` string.

    Args:
        hue: Degrees, 0-360
        saturation: Percent, 0-100
        lightness: Percent, 0-100
    """
    l = lightness / 100
    a = saturation * min(l, 1 - l) / 100

    def channel(n: int) -> str:
        k = (n + hue / 30) % 12
        value = l - a * max(min(k - 3, 9 - k, 1), -1)
        return f"{round_half_up(255 * value):02x}"

    return f"#{channel(0)}{channel(8)}{channel(4)}"


def terrain_hsl(terrain: TerrainType, index: int, seed: int = 0) -> Tuple[float, float, float]:
    """HSL components for a terrain-aware territory colour."""
    if terrain == TerrainType.PLAINS:
        # Yellow-green
        return 80 + (index * 15) % 40, 45 + seed % 15, 50 + (index * 5) % 15
    if terrain == TerrainType.FOREST:
        return 120 + (index * 10) % 30, 50 + seed % 20, 40 + (index * 5) % 15
    if terrain == TerrainType.MOUNTAINS:
        # Near grey
        return 0, 5 + seed % 10, 45 + (index * 10) % 25
    if terrain == TerrainType.DESERT:
        return 40 + (index * 10) % 30, 55 + seed % 15, 55 + (index * 5) % 15
    if terrain == TerrainType.HILLS:
        # Brown-orange
        return 25 + (index * 15) % 35, 40 + seed % 20, 45 + (index * 5) % 15
    if terrain == TerrainType.COASTAL:
        return 200 + (index * 10) % 40, 50 + seed % 20, 50 + (index * 5) % 15
    return (index * 50) % 360, 50, 50


def terrain_color(terrain: TerrainType, index: int, seed: int = 0) -> str:
    """Terrain-aware hex colour for territory ``index``."""
    return hsl_to_hex(*terrain_hsl(terrain, index, seed))


def territory_color(index: int, seed: int = 0) -> str:
    """Colour for territory ``index`` using golden-ratio hue spacing."""
    hue = ((index * GOLDEN_RATIO_CONJUGATE + seed * 0.1) % 1) * 360
    saturation = 50 + seed % 20
    lightness = 45 + (index * 7 + seed) % 20
    return hsl_to_hex(hue, saturation, lightness)


def color_palette(count: int, seed: int = 0) -> List[str]:
    """``count`` visually distinct colours, independent of terrain."""
    return [territory_color(i, seed) for i in range(count)]


def terrain_legend(seed: int = 0) -> Dict[TerrainType, str]:
    """Representative colour of each terrain (territory index 0)."""
    return {terrain: terrain_color(terrain, 0, seed) for terrain in TerrainType}
