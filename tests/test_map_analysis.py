"""Tests for map statistics and invariant checks."""

import pytest

from py_realms.core.map_analysis import analyze_territories, find_invariant_violations


class TestAnalyzeTerritories:
    """Test summary statistics."""

    def test_standard_map(self, standard_map):
        """Test the statistics of the seed 42 map."""
        stats = analyze_territories(standard_map, 1200, 800)

        assert stats.territory_count == 20
        assert stats.map_area == 960000
        assert stats.coverage_ratio == pytest.approx(1.0)
        assert stats.min_area <= stats.mean_area <= stats.max_area
        assert stats.mean_area == pytest.approx(48000)
        assert stats.total_population == sum(t.metadata.population for t in standard_map)

    def test_distributions(self, standard_map):
        """Test the terrain and culture breakdowns."""
        stats = analyze_territories(standard_map, 1200, 800)

        assert sum(s.percentage for s in stats.terrain_distribution) == pytest.approx(100.0)
        assert sum(s.territory_count for s in stats.terrain_distribution) == 20
        assert sum(stats.culture_distribution.values()) == 20

    def test_empty_map(self):
        """Test that an empty list yields zeros."""
        stats = analyze_territories([], 100, 100)

        assert stats.territory_count == 0
        assert stats.total_area == 0
        assert stats.mean_area == 0.0
        assert stats.coverage_ratio == 0.0
        assert stats.terrain_distribution == []
        assert stats.culture_distribution == {}


class TestInvariantViolations:
    """Test detection of broken maps."""

    def test_valid_map(self, standard_map):
        """Test that a generated map passes."""
        assert find_invariant_violations(standard_map, 1200, 800) == []

    def test_empty_map(self):
        """Test that an empty map has nothing to report."""
        assert find_invariant_violations([], 1200, 800) == []

    def test_tampered_area(self, standard_map):
        """Test that a stored area differing from the polygon is reported."""
        tampered = list(standard_map)
        tampered[0] = tampered[0].model_copy(update={"area": tampered[0].area + 500})

        problems = find_invariant_violations(tampered, 1200, 800)

        assert f"{tampered[0].id}: area does not match its polygon" in problems
        assert any(p.startswith("territory areas sum to") for p in problems)

    def test_duplicate_names(self, standard_map):
        """Test that repeated names are reported."""
        renamed = list(standard_map)
        renamed[1] = renamed[1].model_copy(update={"name": renamed[0].name})

        assert "duplicate territory names" in find_invariant_violations(renamed, 1200, 800)

    def test_missing_territory(self, standard_map):
        """Test that a gap in coverage is reported."""
        problems = find_invariant_violations(standard_map[1:], 1200, 800)

        assert len(problems) == 1
        assert problems[0].startswith("territory areas sum to")

    def test_development_not_derived(self, standard_map):
        """Test that an inconsistent development score is reported."""
        territory = standard_map[0]
        development = (territory.metadata.development + 10) % 100
        metadata = territory.metadata.model_copy(update={"development": development})
        broken = [territory.model_copy(update={"metadata": metadata})] + list(standard_map[1:])

        problems = find_invariant_violations(broken, 1200, 800)

        assert problems == [f"{territory.id}: development is not derived from resources"]
