"""
Procedural territory maps for strategy games.
"""

from .core import (
    GenerationOptions,
    MapConfig,
    Territory,
    TerrainType,
    build_map_config,
    generate_map,
)

__version__ = "0.1.0"

__all__ = ['GenerationOptions', 'MapConfig', 'Territory', 'TerrainType',
           'build_map_config', 'generate_map', '__version__']
