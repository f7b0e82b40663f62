"""
wellstream.streams.tensors

Tensor and array sampling on top of a RandomStream.

Design Principles:
- Every value comes from the wrapped stream (no torch/numpy global RNG)
- Values are consumed in generation order, so draws are reproducible
- Resetting the stream reproduces the same tensors
"""

from typing import List, Optional, Tuple

import numpy as np
import torch

from wellstream.core.exceptions import ValidationError
from wellstream.core.validation import validate_non_negative_int, validate_positive_int
from .seeds import SeedRegistry
from .stream import RandomStream


class StreamSampler:
    """Draws torch tensors and numpy index arrays from one RandomStream.

    Usage:
        sampler = StreamSampler(RandomStream(registry=registry))
        x = sampler.rand(100, 10)
        child = sampler.spawn()  # Independent stream from the same registry
    """

    def __init__(self, stream: RandomStream):
        self._stream = stream

    @property
    def stream(self) -> RandomStream:
        """Access underlying stream (for resets and snapshots)."""
        return self._stream

    def rand(self, *shape: int, dtype: torch.dtype = torch.float32) -> torch.Tensor:
        """Sample from uniform [0, 1) distribution."""
        n = int(np.prod(shape)) if shape else 1
        values = self._stream.next_array_of_double(n)
        # float32 rounding can turn values just below 1 into 1.0
        if dtype != torch.float64:
            values = np.minimum(values, np.nextafter(np.float32(1.0), np.float32(0.0)))
        return torch.from_numpy(values).to(dtype).reshape(shape)

    def randint(self, low: int, high: int, shape: Tuple[int, ...]) -> torch.Tensor:
        """Sample integers from [low, high)."""
        if low >= high:
            raise ValidationError(f"randint: low ({low}) must be < high ({high})")
        n = int(np.prod(shape)) if shape else 1
        values = self._stream.next_array_of_int(low, high - 1, n)
        return torch.from_numpy(values).reshape(shape)

    def choice(self, n: int, size: int, replace: bool = False) -> np.ndarray:
        """Choose ``size`` indices from [0, n)."""
        validate_positive_int(n, "n")
        validate_non_negative_int(size, "size")
        if replace:
            return self._stream.next_array_of_int(0, n - 1, size)
        if size > n:
            raise ValidationError(f"Cannot choose {size} of {n} without replacement")
        return self.shuffle_indices(n)[:size]

    def shuffle_indices(self, n: int) -> np.ndarray:
        """Return shuffled indices [0, n) (Fisher-Yates)."""
        validate_non_negative_int(n, "n")
        indices = np.arange(n)
        for i in range(n - 1, 0, -1):
            j = self._stream.uniform_int(0, i)
            indices[i], indices[j] = indices[j], indices[i]
        return indices

    def spawn(self, registry: Optional[SeedRegistry] = None) -> "StreamSampler":
        """Create a sampler over a fresh, non-overlapping stream.

        The stream is taken from ``registry``, falling back to the registry
        the wrapped stream came from (or the family default).
        """
        registry = registry or self._stream.registry
        child = RandomStream(registry=registry, family=self._stream.family)
        return StreamSampler(child)

    def spawn_many(self, n: int, registry: Optional[SeedRegistry] = None) -> List["StreamSampler"]:
        """Create n independent child samplers."""
        return [self.spawn(registry) for _ in range(n)]

    def __repr__(self) -> str:
        return f"StreamSampler({self._stream!r})"
