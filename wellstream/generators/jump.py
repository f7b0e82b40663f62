"""
wellstream.generators.jump

Jump-ahead over GF(2).

A JumpTable stores the coefficients of z^(2^k) mod P(z), where P(z) is the
characteristic polynomial of the generator's transition matrix A. Since
P(A) = 0, advancing a state by 2^k steps equals applying the reduced
polynomial to A:

    A^(2^k) s = sum_j c_j A^j s      (sums are XOR)

so the jump walks the generator forward once per coefficient and
XOR-accumulates the state window wherever c_j = 1. The cost is
R * W steps regardless of k.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Sequence, Tuple, Type

from wellstream.core.types import MASK32, WORD_BITS, SeedVector

if TYPE_CHECKING:
    from .base import GeneratorCore


@dataclass(frozen=True)
class JumpTable:
    """Precomputed jump polynomial for one fixed distance.

    Bit ``b`` of ``words[j]`` is the coefficient of z^(32*j + b).

    Attributes:
        name: Human-readable label ("substream", "stream").
        exponent: The table encodes a jump of 2^exponent steps.
        words: Coefficient words, one per state word.
    """
    name: str
    exponent: int
    words: Tuple[int, ...]

    def __post_init__(self):
        if self.exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {self.exponent}")
        if len(self.words) == 0:
            raise ValueError("JumpTable must have at least one word")
        for w in self.words:
            if not (0 <= w <= MASK32):
                raise ValueError(f"JumpTable word 0x{w:X} does not fit in 32 bits")
        # Normalize lists to tuples so the table stays hashable
        object.__setattr__(self, "words", tuple(self.words))

    @property
    def n_bits(self) -> int:
        return len(self.words) * WORD_BITS

    def coefficients(self) -> Iterator[int]:
        """Yield polynomial coefficients c_0, c_1, ... in ascending degree."""
        for word in self.words:
            for _ in range(WORD_BITS):
                yield word & 1
                word >>= 1

    def __repr__(self) -> str:
        return f"JumpTable(name={self.name!r}, distance=2^{self.exponent})"


def advance_seed(
    seed: Sequence[int],
    table: JumpTable,
    core_cls: Type["GeneratorCore"],
) -> SeedVector:
    """Return the seed reached 2^table.exponent steps after ``seed``.

    Pure function: a scratch core is loaded from ``seed`` and discarded.
    The input is assumed legal; legal inputs give legal outputs.

    Args:
        seed: Starting seed vector (length core_cls.R).
        table: Jump polynomial for the desired distance.
        core_cls: Generator whose recurrence the table was derived from.

    Returns:
        The advanced seed vector.
    """
    if len(table.words) != core_cls.R:
        raise ValueError(
            f"JumpTable {table.name!r} has {len(table.words)} words, "
            f"{core_cls.__name__} needs {core_cls.R}"
        )

    core = core_cls()
    core.load(seed)

    acc = [0] * core_cls.R
    for c in table.coefficients():
        if c:
            window = core.get_state()
            for i in range(core_cls.R):
                acc[i] ^= window[i]
        core.step_raw()

    return tuple(acc)
