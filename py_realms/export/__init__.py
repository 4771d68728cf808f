"""
JSON import/export of generated maps.
"""

from .json_export import (
    map_config_from_json,
    map_config_to_json,
    territories_from_json,
    territories_to_json,
)

__all__ = ['territories_to_json', 'territories_from_json',
           'map_config_to_json', 'map_config_from_json']
