"""End-to-end tests for the territory generation pipeline."""

import math

import pytest
from pydantic import ValidationError

from py_realms.config import Settings
from py_realms.core import map_generator
from py_realms.core.attributes import calculate_development
from py_realms.core.colors import terrain_color, territory_color
from py_realms.core.geometry import polygon_area
from py_realms.core.map_analysis import find_invariant_violations
from py_realms.core.map_generator import (
    GenerationOptions,
    GenerationStage,
    TerritoryMapGenerator,
    generate_map,
)
from py_realms.core.models import MapConfig, build_map_config
from py_realms.core.name_generator import NameGenerator, generate_territory_names
from py_realms.core.partition import VoronoiPartitioner
from py_realms.core.point_sampler import sample_points
from py_realms.core.terrain import TerrainType
from py_realms.exceptions import (
    GenerationStateError,
    InvalidMapConfigError,
    NameExhaustionError,
    PartitionError,
)


class DroppingPartitioner:
    """Voronoi partitioner that never yields a cell for one index."""

    def __init__(self, dropped_index):
        self.dropped_index = dropped_index
        self.inner = VoronoiPartitioner()

    def partition(self, points, width, height):
        cells = self.inner.partition(points, width, height)
        cells[self.dropped_index] = None
        return cells


class FailingPartitioner:
    def partition(self, points, width, height):
        raise PartitionError("backend failure")


class TestStandardMap:
    """Test the 1200x800, 20 territory, seed 42 map."""

    def test_territory_count(self, standard_map):
        """Test that all 20 territories are produced in index order."""
        assert len(standard_map) == 20
        assert [t.id for t in standard_map] == [f"territory-{i}" for i in range(20)]

    def test_no_invariant_violations(self, standard_map):
        """Test every output invariant at once."""
        assert find_invariant_violations(standard_map, 1200, 800) == []

    def test_areas_cover_map(self, standard_map):
        """Test that territory areas sum to the map area."""
        total = sum(t.area for t in standard_map)
        assert total == pytest.approx(1200 * 800, rel=1e-9)

    def test_area_matches_polygon(self, standard_map):
        """Test the stored area against the shoelace formula."""
        for territory in standard_map:
            assert territory.area == pytest.approx(polygon_area(territory.border_points))

    def test_polygons(self, standard_map):
        """Test that polygons are non-empty and open."""
        for territory in standard_map:
            assert len(territory.border_points) >= 3
            assert territory.border_points[0] != territory.border_points[-1]
            assert territory.area > 0

    def test_names_unique(self, standard_map):
        """Test name uniqueness and alignment with the name stream."""
        names = [t.name for t in standard_map]

        assert len(set(names)) == 20
        assert names == generate_territory_names(20, 42)

    def test_metadata_ranges(self, standard_map):
        """Test resource, development and population ranges."""
        for territory in standard_map:
            meta = territory.metadata
            for value in (meta.resources.food, meta.resources.gold, meta.resources.military):
                assert 1 <= value <= 100
            assert 0 <= meta.development <= 100
            assert meta.development == calculate_development(meta.resources)
            assert meta.population > 0
            assert isinstance(meta.terrain, TerrainType)

    def test_terrain_colors(self, standard_map):
        """Test that colours follow terrain, index and map seed."""
        for i, territory in enumerate(standard_map):
            assert territory.color == terrain_color(territory.metadata.terrain, i, 42)

    def test_centers_inside_map(self, standard_map):
        """Test that relaxed centres stay inside the rectangle."""
        for territory in standard_map:
            x, y = territory.center
            assert 0 <= x <= 1200
            assert 0 <= y <= 800

    def test_records_are_frozen(self, standard_map):
        """Test that territories cannot be modified."""
        with pytest.raises(ValidationError):
            standard_map[0].name = "Renamed"


class TestDeterminism:
    """Test reproducibility."""

    def test_same_seed_same_map(self, standard_config, standard_map):
        """Test that regenerating gives field-for-field identical output."""
        again = generate_map(standard_config)

        assert again == standard_map
        assert [t.model_dump() for t in again] == [t.model_dump() for t in standard_map]

    def test_different_seed_different_map(self, standard_map):
        """Test that another seed changes the map."""
        other = generate_map(MapConfig(width=1200, height=800, territory_count=20, seed=43))

        assert [t.center for t in other] != [t.center for t in standard_map]

    def test_independent_generators(self):
        """Test that interleaved runs do not influence each other."""
        config_a = MapConfig(width=300, height=300, territory_count=8, seed=1)
        config_b = MapConfig(width=500, height=200, territory_count=12, seed=2)

        a1 = generate_map(config_a)
        generate_map(config_b)
        a2 = generate_map(config_a)

        assert a1 == a2


class TestOptions:
    """Test generation options."""

    def test_palette_mode(self):
        """Test golden-ratio colours in palette mode."""
        config = MapConfig(width=400, height=300, territory_count=10, seed=5)
        territories = generate_map(config, GenerationOptions(color_mode="palette"))

        assert [t.color for t in territories] == [territory_color(i, 5) for i in range(10)]

    def test_no_relaxation_keeps_sampled_points(self):
        """Test that zero iterations use the raw sample as centres."""
        config = MapConfig(width=400, height=300, territory_count=10, seed=5)
        territories = generate_map(config, GenerationOptions(relaxation_iterations=0))
        sampled = sample_points(10, 400, 300, seed=5)

        assert [t.center for t in territories] == [tuple(p) for p in sampled]

    def test_area_centroid_relaxation(self):
        """Test the alternative relaxation centroid."""
        config = MapConfig(width=400, height=300, territory_count=15, seed=5)
        territories = generate_map(config, GenerationOptions(relaxation_centroid="area"))

        assert len(territories) == 15
        assert find_invariant_violations(territories, 400, 300) == []

    def test_options_fall_back_to_settings(self):
        """Test that unset options come from settings."""
        config = MapConfig(width=400, height=300, territory_count=5, seed=5)
        generator = TerritoryMapGenerator(
            config, settings=Settings(relaxation_iterations=1, edge_margin=10.0)
        )

        assert generator.relaxation_iterations == 1
        assert generator.edge_margin == 10.0
        for territory in generator.generate():
            assert territory.area > 0

    def test_single_territory(self):
        """Test that one territory covers the whole map."""
        territories = generate_map(MapConfig(width=120, height=80, territory_count=1, seed=3))

        assert len(territories) == 1
        assert territories[0].area == pytest.approx(120 * 80)

    def test_many_territories(self):
        """Test a larger map."""
        config = MapConfig(width=2000, height=1500, territory_count=150, seed=2024)
        territories = generate_map(config)

        assert len(territories) == 150
        assert find_invariant_violations(territories, 2000, 1500) == []


class TestStateMachine:
    """Test pipeline stages and failures."""

    def test_reaches_assembled(self, standard_config):
        """Test the terminal success stage."""
        generator = TerritoryMapGenerator(standard_config)
        assert generator.stage == GenerationStage.CONFIGURED

        generator.generate()

        assert generator.stage == GenerationStage.ASSEMBLED

    def test_generator_runs_once(self, standard_config):
        """Test that a second run is refused."""
        generator = TerritoryMapGenerator(standard_config)
        generator.generate()

        with pytest.raises(GenerationStateError):
            generator.generate()

    def test_partition_failure(self):
        """Test that geometry errors end in the failed stage."""
        config = MapConfig(width=100, height=100, territory_count=5, seed=1)
        generator = TerritoryMapGenerator(config, partitioner=FailingPartitioner())

        with pytest.raises(PartitionError):
            generator.generate()

        assert generator.stage == GenerationStage.FAILED

    def test_name_exhaustion(self, monkeypatch):
        """Test that running out of names fails the run."""
        monkeypatch.setattr(
            map_generator,
            "NameGenerator",
            lambda: NameGenerator(prefixes=["A"], middles=["b"], suffixes=["c"]),
        )
        config = MapConfig(width=100, height=100, territory_count=5, seed=1)
        generator = TerritoryMapGenerator(config)

        with pytest.raises(NameExhaustionError):
            generator.generate()

        assert generator.stage == GenerationStage.FAILED

    def test_degenerate_cell_is_dropped(self):
        """Test that a point without a cell is left out of the output."""
        config = MapConfig(width=400, height=300, territory_count=10, seed=8)
        generator = TerritoryMapGenerator(config, partitioner=DroppingPartitioner(3))
        territories = generator.generate()
        names = generate_territory_names(10, 8)

        assert len(territories) == 9
        assert generator.dropped == [3]
        assert "territory-3" not in [t.id for t in territories]
        by_id = {t.id: t for t in territories}
        assert by_id["territory-4"].name == names[4]


class TestValidation:
    """Test malformed input."""

    @pytest.mark.parametrize("values", [
        dict(width=0, height=100, territory_count=5, seed=1),
        dict(width=100, height=-5, territory_count=5, seed=1),
        dict(width=100, height=100, territory_count=0, seed=1),
        dict(width=100, height=100, territory_count=-3, seed=1),
        dict(width=100, height=100, territory_count=5),
        dict(width=math.inf, height=800, territory_count=20, seed=42),
        dict(width=1200, height=math.nan, territory_count=20, seed=42),
    ])
    def test_build_map_config_rejects(self, values):
        """Test that invalid raw values raise the typed error."""
        with pytest.raises(InvalidMapConfigError):
            build_map_config(**values)

    def test_build_map_config_accepts_camel_case(self):
        """Test the serialized key spelling."""
        config = build_map_config(width=10, height=20, territoryCount=3, seed=4)
        assert config.territory_count == 3

    def test_unvalidated_config_fails_fast(self):
        """Test that the generator re-checks configs built without validation."""
        config = MapConfig.model_construct(width=100, height=100, territory_count=0, seed=1)
        generator = TerritoryMapGenerator(config)

        with pytest.raises(InvalidMapConfigError):
            generator.generate()

        assert generator.stage == GenerationStage.FAILED
        assert generator.points is None

    def test_unvalidated_infinite_size_fails_fast(self):
        """Test that an infinite size is refused instead of yielding an empty map."""
        config = MapConfig.model_construct(width=math.inf, height=800, territory_count=20, seed=42)
        generator = TerritoryMapGenerator(config)

        with pytest.raises(InvalidMapConfigError):
            generator.generate()

        assert generator.stage == GenerationStage.FAILED
        assert generator.points is None

    def test_count_limit(self):
        """Test the configured territory ceiling."""
        config = MapConfig(width=100, height=100, territory_count=10, seed=1)

        with pytest.raises(InvalidMapConfigError):
            generate_map(config, settings=Settings(max_territory_count=5))

    def test_margin_too_large(self):
        """Test that a margin must leave room for points."""
        config = MapConfig(width=100, height=100, territory_count=10, seed=1)

        with pytest.raises(InvalidMapConfigError):
            generate_map(config, GenerationOptions(edge_margin=50))
