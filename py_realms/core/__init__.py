"""
Core territory map generation functionality.
"""

from .seeded_random import SeededRandom
from .terrain import TerrainType, classify_terrain
from .models import MapConfig, Resources, Territory, TerritoryMetadata, build_map_config
from .partition import RegionPartitioner, VoronoiPartitioner
from .map_generator import GenerationOptions, GenerationStage, TerritoryMapGenerator, generate_map
from .map_analysis import MapStatistics, analyze_territories, find_invariant_violations

__all__ = ['SeededRandom', 'TerrainType', 'classify_terrain',
           'MapConfig', 'Resources', 'Territory', 'TerritoryMetadata', 'build_map_config',
           'RegionPartitioner', 'VoronoiPartitioner',
           'GenerationOptions', 'GenerationStage', 'TerritoryMapGenerator', 'generate_map',
           'MapStatistics', 'analyze_territories', 'find_invariant_violations']
