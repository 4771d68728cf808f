"""Shared fixtures."""

import pytest

from py_realms.core.map_generator import generate_map
from py_realms.core.models import MapConfig


@pytest.fixture(scope="session")
def standard_config():
    """The 1200x800, 20 territory map with seed 42."""
    return MapConfig(width=1200, height=800, territory_count=20, seed=42)


@pytest.fixture(scope="session")
def standard_map(standard_config):
    return generate_map(standard_config)
