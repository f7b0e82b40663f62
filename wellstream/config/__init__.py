"""
wellstream.config

Configuration management for wellstream.

Exports:
- Config schemas
- Loading/saving utilities
- Hashing for reproducibility
"""

from .schema import (
    WellStreamConfig,
    SeedConfig,
    StreamConfig,
)

from .load import (
    load_config,
    save_config,
    config_from_dict,
    config_to_dict,
)

from .hashing import (
    hash_config,
    hash_dict,
    seed_fingerprint,
    config_signature,
)

__all__ = [
    # Schemas
    "WellStreamConfig",
    "SeedConfig",
    "StreamConfig",
    # Load/save
    "load_config",
    "save_config",
    "config_from_dict",
    "config_to_dict",
    # Hashing
    "hash_config",
    "hash_dict",
    "seed_fingerprint",
    "config_signature",
]
