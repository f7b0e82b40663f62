"""
wellstream.generators.registry

Generator family registry management.

Design: Registry holds a finite, validated set of families keyed by name.
"""

from typing import Dict, Iterator, List, Tuple

from wellstream.core.exceptions import RegistryError
from .base import GeneratorFamily


class FamilyRegistry:
    """Manages a finite set of generator families.

    Validates:
    - At least one family
    - Unique family names

    Attributes:
        families: Tuple of GeneratorFamily objects, sorted by name.
    """

    def __init__(self, families: Tuple[GeneratorFamily, ...]):
        if len(families) == 0:
            raise RegistryError("Registry must have at least one generator family")

        names = [f.name for f in families]
        if len(names) != len(set(names)):
            duplicates = [n for n in names if names.count(n) > 1]
            raise RegistryError(f"Duplicate family names: {set(duplicates)}")

        self._families = tuple(sorted(families, key=lambda f: f.name))
        self._name_to_family: Dict[str, GeneratorFamily] = {f.name: f for f in self._families}

    @property
    def families(self) -> Tuple[GeneratorFamily, ...]:
        return self._families

    @property
    def names(self) -> List[str]:
        return [f.name for f in self._families]

    def __len__(self) -> int:
        return len(self._families)

    def get_by_name(self, name: str) -> GeneratorFamily:
        """Get family by name (case-insensitive)."""
        key = name.lower()
        if key not in self._name_to_family:
            raise RegistryError(f"Generator family '{name}' not found. Available: {self.names}")
        return self._name_to_family[key]

    def __getitem__(self, name: str) -> GeneratorFamily:
        return self.get_by_name(name)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._name_to_family

    def __iter__(self) -> Iterator[GeneratorFamily]:
        return iter(self._families)

    def __repr__(self) -> str:
        return f"FamilyRegistry(families={self.names})"
