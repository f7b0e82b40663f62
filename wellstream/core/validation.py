"""
wellstream.core.validation

Boundary validation functions.

Design: Validate at API boundaries, trust internally.
All validation functions raise ValidationError (or InvalidSeedError) on failure.
"""

import numpy as np
from typing import Any, Iterable, Tuple

from .exceptions import ValidationError, InvalidSeedError
from .types import MASK32, SeedVector


def _as_word(value: Any, index: int, name: str) -> int:
    """Normalize one seed word to an unsigned 32-bit int."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise InvalidSeedError(
            f"{name}[{index}] must be an integer, got {type(value).__name__}"
        )
    value = int(value)
    # Java-style signed words are accepted and reinterpreted as unsigned
    if not (-(1 << 31) <= value <= MASK32):
        raise InvalidSeedError(
            f"{name}[{index}] = {value} does not fit in 32 bits"
        )
    return value & MASK32


def validate_seed(
    seed: Iterable[int],
    r: int,
    forbidden_last_words: Tuple[int, ...] = (),
    name: str = "seed",
) -> SeedVector:
    """Validate a candidate seed vector and return it normalized.

    A seed is legal when it has exactly ``r`` words, not all words are
    zero, and it is not the case that only the last word is nonzero and
    equal to one of ``forbidden_last_words``.

    Args:
        seed: Sequence of integers (list, tuple, numpy array).
        r: Required number of 32-bit words.
        forbidden_last_words: Patterns illegal as the sole nonzero last word.
        name: Name for error messages.

    Returns:
        Tuple of ``r`` unsigned 32-bit ints.

    Raises:
        InvalidSeedError: If the seed is illegal.
    """
    if isinstance(seed, (str, bytes)):
        raise InvalidSeedError(f"{name} must be a sequence of integers")
    try:
        raw = list(seed)
    except TypeError:
        raise InvalidSeedError(f"{name} must be a sequence of integers")

    if len(raw) != r:
        raise InvalidSeedError(f"{name} must contain {r} values, got {len(raw)}")

    words = tuple(_as_word(v, i, name) for i, v in enumerate(raw))

    nonzero = [i for i, w in enumerate(words) if w != 0]
    if not nonzero:
        raise InvalidSeedError(f"At least one element of {name} must not be 0")
    if nonzero == [r - 1] and words[-1] in forbidden_last_words:
        raise InvalidSeedError(
            f"{name} with only the last word set must not equal 0x{words[-1]:08X}"
        )

    return words


def validate_positive_int(
    value: int,
    name: str = "value"
) -> None:
    """Validate value is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise ValidationError(f"{name} must be positive int, got {value}")


def validate_non_negative_int(
    value: int,
    name: str = "value"
) -> None:
    """Validate value is a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 0:
        raise ValidationError(f"{name} must be non-negative int, got {value}")


def validate_interval(
    low: int,
    high: int,
    name: str = "interval"
) -> None:
    """Validate closed integer interval [low, high] is non-empty."""
    if low > high:
        raise ValidationError(f"{name}: {low} is larger than {high}")
