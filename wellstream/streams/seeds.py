"""
wellstream.streams.seeds

Package seed registry - the source of stream starting points.

Design Principles:
- Explicit registry passing (a default per family exists for convenience)
- Successive streams are spaced Z = 2^stream_table.exponent steps apart
- Thread-safe hand-out of seeds
"""

import threading
from typing import Callable, Dict, Optional, Sequence

from wellstream.config.hashing import seed_fingerprint
from wellstream.config.schema import SeedConfig
from wellstream.core.types import SeedVector
from wellstream.generators import FamilyRegistry, GeneratorFamily, WELL607, create_default_registry


class SeedRegistry:
    """Holds the seed of the next stream to be created.

    Every stream constructed without an explicit seed takes the current
    package seed, and the registry advances it by one stream jump so the
    next stream starts Z steps further along the sequence.

    Usage:
        registry = SeedRegistry()
        a = RandomStream(registry=registry)   # starts at the package seed
        b = RandomStream(registry=registry)   # starts Z steps later
    """

    def __init__(
        self,
        family: GeneratorFamily = WELL607,
        package_seed: Optional[Sequence[int]] = None,
        streams_created: int = 0,
    ):
        self._family = family
        if package_seed is None:
            self._seed: SeedVector = tuple(family.default_seed)
        else:
            self._seed = family.validate_seed(package_seed, name="package_seed")
        self._streams_created = streams_created
        self._lock = threading.Lock()
        self._log_fn: Optional[Callable[[dict], None]] = None

    @classmethod
    def from_config(
        cls,
        seed_config: SeedConfig,
        families: Optional[FamilyRegistry] = None,
    ) -> "SeedRegistry":
        """Build a registry from a SeedConfig section."""
        families = families or create_default_registry()
        family = families.get_by_name(seed_config.family)
        return cls(family=family, package_seed=seed_config.package_seed)

    @property
    def family(self) -> GeneratorFamily:
        return self._family

    @property
    def package_seed(self) -> SeedVector:
        """Seed the next stream will start from."""
        with self._lock:
            return self._seed

    @property
    def streams_created(self) -> int:
        return self._streams_created

    def set_logger(self, log_fn: Optional[Callable[[dict], None]]) -> None:
        """Set event callback (None disables logging)."""
        self._log_fn = log_fn

    def _log(self, event: dict) -> None:
        if self._log_fn is not None:
            self._log_fn(event)

    def take_and_advance(self) -> SeedVector:
        """Return the current package seed, then advance it by one stream jump."""
        with self._lock:
            current = self._seed
            self._seed = self._family.jump_stream(current)
            index = self._streams_created
            self._streams_created += 1

        self._log({
            "event": "take",
            "family": self._family.name,
            "stream_index": index,
            "seed_hash": seed_fingerprint(current),
        })
        return current

    def set_package_seed(self, seed: Sequence[int]) -> None:
        """Validate and overwrite the package seed.

        Only streams created afterwards are affected.

        Raises:
            InvalidSeedError: If the seed is illegal (registry unchanged).
        """
        words = self._family.validate_seed(seed, name="package_seed")
        with self._lock:
            self._seed = words

        self._log({
            "event": "set_package_seed",
            "family": self._family.name,
            "seed_hash": seed_fingerprint(words),
        })

    def __repr__(self) -> str:
        return (
            f"SeedRegistry(family={self._family.name!r}, "
            f"streams_created={self._streams_created}, "
            f"next={seed_fingerprint(self._seed)})"
        )


_default_registries: Dict[str, SeedRegistry] = {}
_default_lock = threading.Lock()


def default_seed_registry(family: GeneratorFamily = WELL607) -> SeedRegistry:
    """Return the process-wide registry for ``family``, creating it on first use."""
    with _default_lock:
        registry = _default_registries.get(family.name)
        if registry is None:
            registry = SeedRegistry(family)
            _default_registries[family.name] = registry
        return registry


def reset_default_seed_registries() -> None:
    """Drop all process-wide registries; the next use starts from the default seed."""
    with _default_lock:
        _default_registries.clear()
