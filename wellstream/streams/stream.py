"""
wellstream.streams.stream

RandomStream - the stream/substream manager.

A stream owns three positions in the generator's sequence:

    stream_seed      start of the stream
    substream_seed   start of the current substream
    core             live state, always reloaded from substream_seed on reset

Streams created from a SeedRegistry are Z steps apart; substreams inside a
stream are W steps apart (W << Z). Nothing is shared between streams, so
distinct streams may be used from different threads without coordination.
"""

from typing import List, Optional, Sequence

import numpy as np

from wellstream.config.schema import WellStreamConfig
from wellstream.core.exceptions import ValidationError
from wellstream.core.types import SeedVector, StreamSnapshot
from wellstream.core.validation import validate_interval, validate_non_negative_int
from wellstream.generators import GeneratorFamily, WELL607
from .seeds import SeedRegistry, default_seed_registry

# 1 / (2^32 + 1): maps raw words 1..2^32 into (0, 1)
NORM = 1.0 / 0x100000001
# 2^-24: weight of the second word in increased-precision doubles
FACT = 5.9604644775390625e-8


class RandomStream:
    """Reproducible stream of 32-bit pseudo-random words.

    Usage:
        registry = SeedRegistry()
        stream = RandomStream("arrivals", registry=registry)
        u = stream.next_double()
        stream.reset_next_substream()      # jump W steps from substream start
        stream.reset_start_stream()        # back to the very beginning

    Args:
        name: Optional display name.
        seed: Explicit starting seed. When omitted, the next seed is taken
            from ``registry``.
        registry: Seed registry to take from. Defaults to the process-wide
            registry of ``family``.
        family: Generator family; ignored when ``registry`` is given.

    Raises:
        InvalidSeedError: If an explicit seed is illegal.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        seed: Optional[Sequence[int]] = None,
        registry: Optional[SeedRegistry] = None,
        family: Optional[GeneratorFamily] = None,
    ):
        if registry is not None:
            family = registry.family
        elif family is None:
            family = WELL607

        # Validate before touching any registry
        if seed is not None:
            stream_seed = family.validate_seed(seed)
        else:
            if registry is None:
                registry = default_seed_registry(family)
            stream_seed = registry.take_and_advance()

        self.name = name
        self._family = family
        self._registry = registry
        self._antithetic = False
        self._increased_precision = False

        self._stream_seed: SeedVector = stream_seed
        self._substream_seed: SeedVector = stream_seed
        self._substream_index = 0
        self._core = family.core_cls()
        self._core.load(stream_seed)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def family(self) -> GeneratorFamily:
        return self._family

    @property
    def registry(self) -> Optional[SeedRegistry]:
        """Registry this stream was taken from (None for explicit seeds)."""
        return self._registry

    @property
    def stream_seed(self) -> SeedVector:
        return self._stream_seed

    @property
    def substream_seed(self) -> SeedVector:
        return self._substream_seed

    @property
    def substream_index(self) -> int:
        return self._substream_index

    @property
    def antithetic(self) -> bool:
        return self._antithetic

    @antithetic.setter
    def antithetic(self, value: bool) -> None:
        self._antithetic = bool(value)

    @property
    def increased_precision(self) -> bool:
        return self._increased_precision

    @increased_precision.setter
    def increased_precision(self, value: bool) -> None:
        self._increased_precision = bool(value)

    # ------------------------------------------------------------------
    # Stream / substream protocol
    # ------------------------------------------------------------------

    def reset_start_stream(self) -> None:
        """Go back to the start of the stream (substream 0)."""
        self._substream_seed = self._stream_seed
        self._substream_index = 0
        self._core.load(self._substream_seed)

    def reset_start_substream(self) -> None:
        """Go back to the start of the current substream."""
        self._core.load(self._substream_seed)

    def reset_next_substream(self) -> None:
        """Move to the start of the next substream, W steps after the current one."""
        self._substream_seed = self._family.jump_substream(self._substream_seed)
        self._substream_index += 1
        self._core.load(self._substream_seed)

    def set_seed(self, seed: Sequence[int]) -> None:
        """Restart this stream from an explicit seed.

        Only this stream is affected; it is no longer Z steps away from
        the streams handed out by its registry.

        Raises:
            InvalidSeedError: If the seed is illegal (stream unchanged).
        """
        self._stream_seed = self._family.validate_seed(seed)
        self.reset_start_stream()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def next_int(self) -> int:
        """Return the next raw unsigned 32-bit word."""
        return self._core.step_raw()

    def _next_value(self) -> float:
        x = self._core.step_raw()
        if x == 0:
            x = 0x100000000
        return x * NORM

    def next_double(self) -> float:
        """Return the next uniform value in [0, 1).

        Plain values lie in (0, 1); the increased-precision sum is taken
        modulo 1 and may hit 0.
        """
        u = self._next_value()
        if self._increased_precision:
            u = (u + self._next_value() * FACT) % 1.0
        if self._antithetic:
            return 1.0 - u
        return u

    def next_array_of_double(self, n: int) -> np.ndarray:
        """Return ``n`` consecutive next_double() values as float64 array."""
        validate_non_negative_int(n, "n")
        return np.fromiter((self.next_double() for _ in range(n)), dtype=np.float64, count=n)

    def uniform_int(self, i: int, j: int) -> int:
        """Return an int uniformly distributed over the closed interval [i, j]."""
        validate_interval(i, j, "uniform_int")
        # 1 - u may round up to 1.0 for antithetic 53-bit doubles
        return min(i + int(self.next_double() * (j - i + 1.0)), j)

    def next_array_of_int(self, i: int, j: int, n: int) -> np.ndarray:
        """Return ``n`` consecutive uniform_int(i, j) values as int64 array."""
        validate_interval(i, j, "next_array_of_int")
        validate_non_negative_int(n, "n")
        return np.fromiter((self.uniform_int(i, j) for _ in range(n)), dtype=np.int64, count=n)

    # ------------------------------------------------------------------
    # Introspection, snapshots and clones
    # ------------------------------------------------------------------

    def get_state(self) -> SeedVector:
        """Return the live state window (does not advance the stream)."""
        return self._core.get_state()

    def to_display_string(self) -> str:
        words = ", ".join(str(w) for w in self.get_state())
        if self.name is None:
            return f"The state of this {self._family.display_name} is : {{{words}}}"
        return f"The state of {self.name} is : {{{words}}}"

    def snapshot(self) -> StreamSnapshot:
        """Capture everything needed to resume this stream exactly."""
        return StreamSnapshot(
            family=self._family.name,
            stream_seed=self._stream_seed,
            substream_seed=self._substream_seed,
            state=self.get_state(),
            substream_index=self._substream_index,
            name=self.name,
            antithetic=self._antithetic,
            increased_precision=self._increased_precision,
        )

    def restore(self, snapshot: StreamSnapshot) -> None:
        """Overwrite this stream with a snapshot of the same family.

        All three vectors go through the seed validator first; on failure
        the stream is left unchanged.

        Raises:
            ValidationError: If the snapshot belongs to another family.
            InvalidSeedError: If a snapshot vector is not a legal seed.
        """
        if snapshot.family != self._family.name:
            raise ValidationError(
                f"Snapshot family {snapshot.family!r} does not match stream family "
                f"{self._family.name!r}"
            )
        if len(snapshot.state) != self._family.r:
            raise ValidationError(
                f"Snapshot vectors have {len(snapshot.state)} words, expected {self._family.r}"
            )
        stream_seed = self._family.validate_seed(snapshot.stream_seed, name="stream_seed")
        substream_seed = self._family.validate_seed(snapshot.substream_seed, name="substream_seed")
        state = self._family.validate_seed(snapshot.state, name="state")

        self.name = snapshot.name
        self._stream_seed = stream_seed
        self._substream_seed = substream_seed
        self._substream_index = snapshot.substream_index
        self._antithetic = snapshot.antithetic
        self._increased_precision = snapshot.increased_precision
        # The window alone determines every future output
        self._core.load(state)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: StreamSnapshot,
        family: GeneratorFamily = WELL607,
        registry: Optional[SeedRegistry] = None,
    ) -> "RandomStream":
        """Rebuild a stream from a snapshot without consuming any registry seed."""
        if registry is not None:
            family = registry.family
        # restore() validates every snapshot vector
        stream = cls(name=snapshot.name, seed=family.default_seed, family=family)
        stream._registry = registry
        stream.restore(snapshot)
        return stream

    def clone(self) -> "RandomStream":
        """Return a deep copy sharing no mutable state with this stream.

        Seeds are immutable tuples and the registry is not owned by the
        stream, so only the core needs copying.
        """
        twin = type(self).__new__(type(self))
        twin.__dict__.update(self.__dict__)
        twin._core = self._core.copy()
        return twin

    def __copy__(self) -> "RandomStream":
        return self.clone()

    def __deepcopy__(self, memo) -> "RandomStream":
        return self.clone()

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        return (
            f"RandomStream(name={self.name!r}, family={self._family.name!r}, "
            f"substream={self._substream_index})"
        )


def create_streams(
    config: WellStreamConfig,
    registry: SeedRegistry,
) -> List[RandomStream]:
    """Create the named streams described by ``config.streams``.

    Streams are taken from ``registry`` in name order, so the same config
    and package seed always give the same streams.
    """
    streams = []
    for name in config.streams.stream_names():
        stream = RandomStream(name=name, registry=registry)
        stream.antithetic = config.streams.antithetic
        stream.increased_precision = config.streams.increased_precision
        streams.append(stream)
    return streams
