"""
wellstream.generators

Generator cores and jump-ahead machinery.

This module provides:
- Abstract GeneratorCore capability interface
- GeneratorFamily descriptors binding a core to its jump tables
- The WELL607 family
- Registry for looking families up by name
"""

from .base import GeneratorCore, GeneratorFamily
from .jump import JumpTable, advance_seed
from .registry import FamilyRegistry
from .well607 import WELL607, Well607Core

__all__ = [
    # Core classes
    "GeneratorCore",
    "GeneratorFamily",
    "FamilyRegistry",
    # Jump-ahead
    "JumpTable",
    "advance_seed",
    # WELL607
    "WELL607",
    "Well607Core",
    "create_default_registry",
]


def create_default_registry() -> FamilyRegistry:
    """Create the registry of built-in generator families."""
    return FamilyRegistry((WELL607,))
