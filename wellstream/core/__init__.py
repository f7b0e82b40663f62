"""
wellstream.core

Core infrastructure for wellstream.

Exports:
- Exception classes
- Core data types
- Validation utilities
"""

from .exceptions import (
    WellStreamError,
    ValidationError,
    InvalidSeedError,
    ConfigError,
    RegistryError,
    CheckpointError,
)

from .types import (
    WORD_BITS,
    MASK32,
    SeedVector,
    StreamSnapshot,
)

from .validation import (
    validate_seed,
    validate_positive_int,
    validate_non_negative_int,
    validate_interval,
)

__all__ = [
    # Exceptions
    "WellStreamError",
    "ValidationError",
    "InvalidSeedError",
    "ConfigError",
    "RegistryError",
    "CheckpointError",
    # Types
    "WORD_BITS",
    "MASK32",
    "SeedVector",
    "StreamSnapshot",
    # Validation
    "validate_seed",
    "validate_positive_int",
    "validate_non_negative_int",
    "validate_interval",
]
