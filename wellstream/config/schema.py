"""
wellstream.config.schema

Configuration schemas using dataclasses.

Design: All config fields have explicit types. Defaults only at top level.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SeedConfig:
    """Package seed configuration."""
    family: str = "well607"
    package_seed: Optional[List[int]] = None  # None = family default

    def __post_init__(self):
        if not self.family:
            raise ValueError("family must be a non-empty string")
        if self.package_seed is not None:
            if len(self.package_seed) == 0:
                raise ValueError("package_seed must be non-empty when given")
            self.package_seed = [int(w) for w in self.package_seed]


@dataclass
class StreamConfig:
    """Which streams to create and how they produce values."""
    n_streams: int = 1
    names: Optional[List[str]] = None
    substreams: int = 1
    values_per_substream: int = 5
    antithetic: bool = False
    increased_precision: bool = False

    def __post_init__(self):
        if self.n_streams <= 0:
            raise ValueError("n_streams must be positive")
        if self.substreams <= 0:
            raise ValueError("substreams must be positive")
        if self.values_per_substream < 0:
            raise ValueError("values_per_substream must be non-negative")
        if self.names is not None:
            if len(self.names) != self.n_streams:
                raise ValueError(
                    f"names has {len(self.names)} entries, n_streams is {self.n_streams}"
                )
            if len(set(self.names)) != len(self.names):
                raise ValueError("names must be unique")

    def stream_names(self) -> List[str]:
        """Return configured names, or stream_0..stream_{n-1}."""
        if self.names is not None:
            return list(self.names)
        return [f"stream_{i}" for i in range(self.n_streams)]


@dataclass
class WellStreamConfig:
    """Top-level configuration.

    This is the ONLY place defaults are specified.
    All sub-configs receive explicit values.
    """
    seed: SeedConfig = field(default_factory=SeedConfig)
    streams: StreamConfig = field(default_factory=StreamConfig)

    output_dir: str = "runs"
    log_events: bool = True

    @classmethod
    def minimal(cls) -> "WellStreamConfig":
        """Factory for minimal testing configuration."""
        return cls(
            seed=SeedConfig(),
            streams=StreamConfig(n_streams=2, substreams=2, values_per_substream=3),
        )
