"""
Territory map generation pipeline.

One forward pass per generator instance:

    CONFIGURED -> POINTS_SAMPLED -> PARTITION_COMPUTED -> CLASSIFIED
               -> NAMED -> COLORED -> ASSEMBLED

Any TerritoryGenerationError moves the generator to FAILED and is re-raised.
Territories whose point gets no cell in the final partition are dropped,
so the result may hold fewer territories than requested; ids keep the
original index either way.
"""

import math
from enum import Enum
from typing import Dict, List, Literal, Optional

import numpy as np
import structlog
from pydantic import BaseModel, Field

from ..config import Settings
from ..config import settings as default_settings
from ..exceptions import (
    GenerationStateError,
    InvalidMapConfigError,
    TerritoryGenerationError,
)
from .attributes import generate_metadata
from .colors import terrain_color, territory_color
from .geometry import polygon_area
from .models import MapConfig, Territory, TerritoryMetadata
from .name_generator import NameGenerator
from .partition import Cell, RegionPartitioner, VoronoiPartitioner
from .point_sampler import generate_relaxed_points
from .terrain import classify_terrain

logger = structlog.get_logger()


class GenerationStage(str, Enum):
    """Pipeline states."""

    CONFIGURED = "configured"
    POINTS_SAMPLED = "points_sampled"
    PARTITION_COMPUTED = "partition_computed"
    CLASSIFIED = "classified"
    NAMED = "named"
    COLORED = "colored"
    ASSEMBLED = "assembled"
    FAILED = "failed"


STAGE_ORDER = (
    GenerationStage.CONFIGURED,
    GenerationStage.POINTS_SAMPLED,
    GenerationStage.PARTITION_COMPUTED,
    GenerationStage.CLASSIFIED,
    GenerationStage.NAMED,
    GenerationStage.COLORED,
    GenerationStage.ASSEMBLED,
)


class GenerationOptions(BaseModel):
    """Tunables for one generation run; unset values come from settings."""

    relaxation_iterations: Optional[int] = Field(
        default=None, ge=0, description="Lloyd relaxation passes"
    )
    edge_margin: Optional[float] = Field(
        default=None, ge=0.0, description="Inward padding for initial points"
    )
    relaxation_centroid: Literal["vertex_mean", "area"] = Field(
        default="vertex_mean", description="Centroid used when relaxing"
    )
    color_mode: Literal["terrain", "palette"] = Field(
        default="terrain", description="Terrain-aware colours or golden-ratio palette"
    )
    name_attempts_per_territory: Optional[int] = Field(
        default=None, ge=1, description="Name attempts allowed per territory"
    )


class TerritoryMapGenerator:
    """Runs the generation pipeline for a single MapConfig."""

    def __init__(
        self,
        config: MapConfig,
        options: Optional[GenerationOptions] = None,
        partitioner: Optional[RegionPartitioner] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the generator.

        Args:
            config: Map dimensions, territory count and seed
            options: Per-run tunables
            partitioner: Voronoi provider, VoronoiPartitioner by default
            settings: Settings supplying defaults for unset options
        """
        self.config = config
        self.options = options or GenerationOptions()
        self.partitioner = partitioner or VoronoiPartitioner()
        self.settings = settings or default_settings
        self.stage = GenerationStage.CONFIGURED

        # Stage outputs
        self.points: Optional[np.ndarray] = None
        self.cells: List[Optional[Cell]] = []
        self.areas: Dict[int, float] = {}
        self.metadata: Dict[int, TerritoryMetadata] = {}
        self.names: List[str] = []
        self.colors: Dict[int, str] = {}
        self.dropped: List[int] = []

    @property
    def relaxation_iterations(self) -> int:
        if self.options.relaxation_iterations is not None:
            return self.options.relaxation_iterations
        return self.settings.relaxation_iterations

    @property
    def edge_margin(self) -> float:
        if self.options.edge_margin is not None:
            return self.options.edge_margin
        return self.settings.edge_margin

    @property
    def name_attempts_per_territory(self) -> int:
        if self.options.name_attempts_per_territory is not None:
            return self.options.name_attempts_per_territory
        return self.settings.name_attempts_per_territory

    def generate(self) -> List[Territory]:
        """
        Run every stage and return the territories in index order.

        Raises:
            GenerationStateError: if this generator already ran
            InvalidMapConfigError: if the configuration cannot be generated
            TerritoryGenerationError: for geometry or naming failures
        """
        if self.stage != GenerationStage.CONFIGURED:
            raise GenerationStateError(
                "Generator instances run once; create a new one to regenerate",
                stage=self.stage.value,
            )

        config = self.config
        logger.info(
            "Generating territory map",
            width=config.width,
            height=config.height,
            territory_count=config.territory_count,
            seed=config.seed,
        )

        try:
            self._validate()
            self._sample_points()
            self._compute_partition()
            self._classify()
            self._assign_names()
            self._assign_colors()
            territories = self._assemble()
        except TerritoryGenerationError as exc:
            logger.error("Territory generation failed", stage=self.stage.value, error=str(exc))
            self.stage = GenerationStage.FAILED
            raise

        logger.info(
            "Territory map generated",
            territories=len(territories),
            dropped=len(self.dropped),
        )
        return territories

    def _advance(self, stage: GenerationStage) -> None:
        expected = STAGE_ORDER[STAGE_ORDER.index(self.stage) + 1]
        if stage != expected:
            raise GenerationStateError(
                f"Cannot move from {self.stage.value} to {stage.value}",
                stage=self.stage.value,
            )
        self.stage = stage
        logger.debug("Generation stage reached", stage=stage.value)

    def _validate(self) -> None:
        """Reject malformed input before any generation work."""
        config = self.config
        if not (math.isfinite(config.width) and math.isfinite(config.height)):
            raise InvalidMapConfigError(
                f"Map size must be finite, got {config.width}x{config.height}"
            )
        if not config.width > 0 or not config.height > 0:
            raise InvalidMapConfigError(
                f"Map size must be positive, got {config.width}x{config.height}"
            )
        if config.territory_count <= 0:
            raise InvalidMapConfigError(
                f"Territory count must be positive, got {config.territory_count}"
            )
        if config.territory_count > self.settings.max_territory_count:
            raise InvalidMapConfigError(
                f"Territory count {config.territory_count} exceeds the limit of "
                f"{self.settings.max_territory_count}"
            )
        margin = self.edge_margin
        if 2 * margin >= config.width or 2 * margin >= config.height:
            raise InvalidMapConfigError(
                f"Edge margin {margin} leaves no room inside the map"
            )

    def _sample_points(self) -> None:
        config = self.config
        self.points = generate_relaxed_points(
            config.territory_count,
            config.width,
            config.height,
            config.seed,
            n_iterations=self.relaxation_iterations,
            margin=self.edge_margin,
            partitioner=self.partitioner,
            centroid=self.options.relaxation_centroid,
        )
        self._advance(GenerationStage.POINTS_SAMPLED)

    def _compute_partition(self) -> None:
        config = self.config
        self.cells = self.partitioner.partition(self.points, config.width, config.height)

        for i, cell in enumerate(self.cells):
            if cell is None:
                self.dropped.append(i)
            else:
                self.areas[i] = polygon_area(cell)

        if self.dropped:
            logger.warning(
                "Dropping territories without a cell",
                dropped=self.dropped,
                requested=config.territory_count,
            )
        self._advance(GenerationStage.PARTITION_COMPUTED)

    def _classify(self) -> None:
        config = self.config
        for i, area in self.areas.items():
            x, y = self.points[i]
            territory_seed = config.seed + i
            terrain = classify_terrain(x, y, config.width, config.height, territory_seed)
            self.metadata[i] = generate_metadata(
                x, y, config.width, config.height, area, territory_seed, terrain=terrain
            )
        self._advance(GenerationStage.CLASSIFIED)

    def _assign_names(self) -> None:
        count = self.config.territory_count
        self.names = NameGenerator().generate_unique_names(
            count,
            self.config.seed,
            max_attempts=count * self.name_attempts_per_territory,
        )
        self._advance(GenerationStage.NAMED)

    def _assign_colors(self) -> None:
        seed = self.config.seed
        for i, metadata in self.metadata.items():
            if self.options.color_mode == "palette":
                self.colors[i] = territory_color(i, seed)
            else:
                self.colors[i] = terrain_color(metadata.terrain, i, seed)
        self._advance(GenerationStage.COLORED)

    def _assemble(self) -> List[Territory]:
        territories = []
        for i, cell in enumerate(self.cells):
            if cell is None:
                continue
            x, y = self.points[i]
            territories.append(
                Territory(
                    id=f"territory-{i}",
                    name=self.names[i],
                    color=self.colors[i],
                    center=(float(x), float(y)),
                    border_points=tuple(cell),
                    area=self.areas[i],
                    metadata=self.metadata[i],
                )
            )
        self._advance(GenerationStage.ASSEMBLED)
        return territories


def generate_map(
    config: MapConfig,
    options: Optional[GenerationOptions] = None,
    partitioner: Optional[RegionPartitioner] = None,
    settings: Optional[Settings] = None,
) -> List[Territory]:
    """
    Generate the territories for a map.

    Args:
        config: Map dimensions, territory count and seed
        options: Per-run tunables
        partitioner: Voronoi provider, VoronoiPartitioner by default
        settings: Settings supplying defaults for unset options

    Returns:
        Territories in index order
    """
    return TerritoryMapGenerator(config, options, partitioner, settings).generate()
