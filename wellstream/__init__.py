"""Public package surface for wellstream: reproducible WELL607 random streams."""

from .core import InvalidSeedError, StreamSnapshot, WellStreamError
from .generators import WELL607, GeneratorFamily, create_default_registry
from .streams import RandomStream, SeedRegistry, StreamSampler, default_seed_registry

__version__ = "0.1.0"

__all__ = [
    "InvalidSeedError",
    "WellStreamError",
    "StreamSnapshot",
    "GeneratorFamily",
    "WELL607",
    "create_default_registry",
    "RandomStream",
    "SeedRegistry",
    "StreamSampler",
    "default_seed_registry",
]
