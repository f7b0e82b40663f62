"""
Pytest configuration and shared fixtures for wellstream tests.
"""

import pytest
from wellstream.config.schema import WellStreamConfig
from wellstream.generators import WELL607
from wellstream.streams.seeds import SeedRegistry, reset_default_seed_registries
from wellstream.streams.stream import RandomStream


@pytest.fixture(autouse=True)
def clean_default_registries():
    """Every test starts from fresh process-wide registries."""
    reset_default_seed_registries()
    yield
    reset_default_seed_registries()


@pytest.fixture
def package_seed():
    """Provide a simple legal seed (1..19)."""
    return list(range(1, 20))


@pytest.fixture
def other_seed():
    """Provide a legal seed differing from package_seed in every word."""
    return list(range(2, 21))


@pytest.fixture
def seed_registry(package_seed):
    """Provide a registry starting at package_seed."""
    return SeedRegistry(WELL607, package_seed)


@pytest.fixture
def stream(seed_registry):
    """Provide the first stream of seed_registry."""
    return RandomStream("test_stream", registry=seed_registry)


@pytest.fixture
def default_config():
    """Provide default WellStreamConfig."""
    return WellStreamConfig()


@pytest.fixture
def minimal_config():
    """Provide minimal WellStreamConfig for fast tests."""
    return WellStreamConfig.minimal()
