"""
wellstream.core.exceptions

All custom exceptions for wellstream.

Design: Fail fast and loud with informative errors.
"""


class WellStreamError(Exception):
    """Base exception for all wellstream errors."""
    pass


class ValidationError(WellStreamError):
    """Input validation failed.

    Raised when arguments fail boundary checks (bad intervals, sizes,
    mismatched snapshot families).
    """
    pass


class InvalidSeedError(ValidationError):
    """Seed vector rejected by the seed validator.

    Raised synchronously by stream construction, set_seed and
    set_package_seed. The target object is left unchanged.
    """
    pass


class ConfigError(WellStreamError):
    """Configuration invalid or missing.

    Raised when config files are malformed or required fields are absent.
    """
    pass


class RegistryError(WellStreamError):
    """Generator family registry error.

    Raised when family names are invalid, duplicated, or not found.
    """
    pass


class CheckpointError(WellStreamError):
    """Checkpoint loading/saving error.

    Raised when stream checkpoints are corrupted or incompatible.
    """
    pass
