"""Typed failures raised by territory map generation."""

from typing import Optional


class TerritoryGenerationError(Exception):
    """Base class for every error raised by the generation pipeline."""


class InvalidMapConfigError(TerritoryGenerationError, ValueError):
    """The map configuration cannot be generated (bad size, count or margin)."""


class GeometryError(TerritoryGenerationError):
    """A geometric computation could not be completed."""


class DegeneratePolygonError(GeometryError):
    """A polygon has fewer than three vertices."""

    def __init__(self, vertex_count: int):
        super().__init__(f"Polygon needs at least 3 vertices, got {vertex_count}")
        self.vertex_count = vertex_count


class PartitionError(GeometryError):
    """The Voronoi backend failed to partition the point set."""


class NameExhaustionError(TerritoryGenerationError):
    """Unique names ran out before the attempt limit was reached."""

    def __init__(self, requested: int, collected: int, attempts: int):
        super().__init__(
            f"Collected only {collected} of {requested} unique names in {attempts} attempts"
        )
        self.requested = requested
        self.collected = collected
        self.attempts = attempts


class GenerationStateError(TerritoryGenerationError):
    """A generator was driven outside its single forward pass."""

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage
