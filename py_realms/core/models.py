"""
Data records produced and consumed by the generation pipeline.

Output records are frozen pydantic models holding tuples, so a generated map
cannot be modified after assembly. Field names are snake_case in Python and
camelCase when serialized (``borderPoints``, ``territoryCount``).
"""

from __future__ import annotations

from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import InvalidMapConfigError
from .terrain import TerrainType

Point = Tuple[float, float]


class RecordModel(BaseModel):
    """Base for immutable, camelCase-serialized records."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MapConfig(RecordModel):
    """Map dimensions, territory count and the seed that fixes the output."""

    width: float = Field(gt=0, allow_inf_nan=False, description="Map width")
    height: float = Field(gt=0, allow_inf_nan=False, description="Map height")
    territory_count: int = Field(gt=0, description="Requested number of territories")
    seed: int = Field(description="Base seed for every derived generator")


class Resources(RecordModel):
    """Resource scores of a territory."""

    food: int = Field(ge=1, le=100)
    gold: int = Field(ge=1, le=100)
    military: int = Field(ge=1, le=100)


class TerritoryMetadata(RecordModel):
    """Classification results for a territory."""

    population: int = Field(ge=1)
    terrain: TerrainType
    resources: Resources
    culture: str
    development: int = Field(ge=0, le=100, description="Derived from resources")


class Territory(RecordModel):
    """One polygonal region of the generated map."""

    id: str
    name: str
    color: str = Field(description="Hex colour, #rrggbb")
    center: Point = Field(description="Relaxed seed point")
    border_points: Tuple[Point, ...] = Field(
        description="Polygon vertices, counter-clockwise, without the closing vertex"
    )
    area: float = Field(ge=0)
    metadata: TerritoryMetadata


def build_map_config(**values: Any) -> MapConfig:
    """
    Validate raw values into a MapConfig.

    Accepts snake_case or camelCase keys.

    Raises:
        InvalidMapConfigError: if any value is missing or out of range
    """
    try:
        return MapConfig(**values)
    except ValidationError as exc:
        raise InvalidMapConfigError(f"Invalid map configuration: {exc}") from exc
