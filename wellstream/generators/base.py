"""
wellstream.generators.base

Generator core capability interface and generator family descriptor.

Design: A GeneratorCore only knows its recurrence (load / step_raw).
Everything about seeds and streams lives in GeneratorFamily and the
stream layer, so new recurrences only add a core and two jump tables.
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Type

from wellstream.core.types import WORD_BITS, SeedVector
from wellstream.core.validation import validate_seed
from .jump import JumpTable, advance_seed


class GeneratorCore(ABC):
    """Abstract linear-recurrence state engine.

    Holds a working buffer of BUFFER_SIZE 32-bit words and a rotating
    cursor. The visible state is the R-word window starting at the cursor.

    Subclasses define R, BUFFER_SIZE and step_raw().
    """

    R: int = 0
    W: int = WORD_BITS
    BUFFER_SIZE: int = 0

    def __init__(self):
        if self.BUFFER_SIZE < self.R or self.R <= 0:
            raise TypeError(f"{type(self).__name__} must define 0 < R <= BUFFER_SIZE")
        self._state: List[int] = [0] * self.BUFFER_SIZE
        self._state_i = 0

    @classmethod
    def num_bits(cls) -> int:
        """Number of bits in the seed vector (R * W)."""
        return cls.R * cls.W

    @property
    def cursor(self) -> int:
        return self._state_i

    def load(self, seed: Sequence[int]) -> None:
        """Reinitialize buffer and cursor from a (validated) seed."""
        self._state = [0] * self.BUFFER_SIZE
        self._state[:self.R] = [int(w) for w in seed]
        self._state_i = 0

    def get_state(self) -> SeedVector:
        """Return the current R-word state window."""
        n = self.BUFFER_SIZE
        i = self._state_i
        return tuple(self._state[(i + k) % n] for k in range(self.R))

    @abstractmethod
    def step_raw(self) -> int:
        """Advance one step and return one unsigned 32-bit word."""
        pass

    def copy(self) -> "GeneratorCore":
        """Return an independent deep copy."""
        clone = copy.copy(self)
        clone._state = list(self._state)
        return clone

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cursor={self._state_i})"


@dataclass(frozen=True)
class GeneratorFamily:
    """Everything needed to build and space streams for one recurrence.

    Attributes:
        name: Registry key (lowercase, e.g. "well607").
        display_name: Name used in state strings (e.g. "WELL607").
        core_cls: GeneratorCore subclass implementing the recurrence.
        substream_table: Jump polynomial for the substream spacing W.
        stream_table: Jump polynomial for the stream spacing Z.
        default_seed: Initial package seed.
        forbidden_last_words: Illegal values of a sole nonzero last word.
    """
    name: str
    display_name: str
    core_cls: Type[GeneratorCore]
    substream_table: JumpTable
    stream_table: JumpTable
    default_seed: Tuple[int, ...]
    forbidden_last_words: Tuple[int, ...] = ()

    def __post_init__(self):
        r = self.core_cls.R
        for table in (self.substream_table, self.stream_table):
            if len(table.words) != r:
                raise ValueError(
                    f"{self.name}: {table.name} table has {len(table.words)} words, expected {r}"
                )
        if self.substream_table.exponent >= self.stream_table.exponent:
            raise ValueError(f"{self.name}: substream spacing must be smaller than stream spacing")
        self.validate_seed(self.default_seed, name="default_seed")

    @property
    def r(self) -> int:
        """Seed length in 32-bit words."""
        return self.core_cls.R

    def validate_seed(self, seed: Sequence[int], name: str = "seed") -> SeedVector:
        """Check seed legality for this family and return it normalized."""
        return validate_seed(seed, self.r, self.forbidden_last_words, name=name)

    def new_core(self, seed: Optional[Sequence[int]] = None) -> GeneratorCore:
        """Create a core, loaded from ``seed`` (or the default seed)."""
        core = self.core_cls()
        core.load(self.default_seed if seed is None else seed)
        return core

    def jump_substream(self, seed: Sequence[int]) -> SeedVector:
        """Advance a seed by the substream spacing."""
        return advance_seed(seed, self.substream_table, self.core_cls)

    def jump_stream(self, seed: Sequence[int]) -> SeedVector:
        """Advance a seed by the stream spacing."""
        return advance_seed(seed, self.stream_table, self.core_cls)

    def __repr__(self) -> str:
        return (
            f"GeneratorFamily(name={self.name!r}, R={self.r}, "
            f"W=2^{self.substream_table.exponent}, Z=2^{self.stream_table.exponent})"
        )
