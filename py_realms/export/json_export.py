"""
JSON serialization of generated maps.

Structural conversion only: records are dumped with camelCase keys and parsed
back into the same pydantic models, so per-field ranges (resources, development,
population, map size) are enforced on import. Nothing here checks map-level
invariants such as name uniqueness or area coverage; see ``core.map_analysis``
for that.
"""

from typing import List, Optional, Sequence

import structlog
from pydantic import TypeAdapter

from ..core.models import MapConfig, Territory

logger = structlog.get_logger()

_territory_list = TypeAdapter(List[Territory])


def territories_to_json(territories: Sequence[Territory], indent: Optional[int] = None) -> str:
    """Serialize territories to a JSON array string."""
    payload = _territory_list.dump_json(list(territories), by_alias=True, indent=indent)
    logger.debug("Territories serialized", territories=len(territories), size=len(payload))
    return payload.decode("utf-8")


def territories_from_json(text: str) -> List[Territory]:
    """
    Parse a JSON array of territories.

    Raises:
        pydantic.ValidationError: if the document does not have the territory shape
    """
    territories = _territory_list.validate_json(text)
    logger.debug("Territories parsed", territories=len(territories))
    return territories


def map_config_to_json(config: MapConfig) -> str:
    """Serialize a MapConfig with camelCase keys."""
    return config.model_dump_json(by_alias=True)


def map_config_from_json(text: str) -> MapConfig:
    """Parse a MapConfig from JSON (camelCase or snake_case keys)."""
    return MapConfig.model_validate_json(text)
