"""
wellstream.core.types

Core data types for wellstream.

Seed vectors are plain tuples of unsigned 32-bit ints so they can be
copied, compared and hashed without aliasing.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

# Word size of every supported generator
WORD_BITS = 32
MASK32 = 0xFFFFFFFF

SeedVector = Tuple[int, ...]


@dataclass(frozen=True)
class StreamSnapshot:
    """Value copy of everything a RandomStream owns.

    Attributes:
        family: Generator family name (e.g. "well607").
        stream_seed: Seed at the start of the stream.
        substream_seed: Seed at the start of the current substream.
        state: Live state window (same length as the seeds).
        substream_index: Number of reset_next_substream calls since stream start.
        name: Optional display name.
        antithetic: Whether doubles are returned as 1 - u.
        increased_precision: Whether doubles use two raw words.
    """
    family: str
    stream_seed: Tuple[int, ...]
    substream_seed: Tuple[int, ...]
    state: Tuple[int, ...]
    substream_index: int = 0
    name: Optional[str] = None
    antithetic: bool = False
    increased_precision: bool = False

    def __post_init__(self):
        r = len(self.stream_seed)
        if len(self.substream_seed) != r or len(self.state) != r:
            raise ValueError(
                f"Snapshot vectors must share one length, got "
                f"{r}/{len(self.substream_seed)}/{len(self.state)}"
            )
        if self.substream_index < 0:
            raise ValueError(f"substream_index must be non-negative, got {self.substream_index}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "family": self.family,
            "stream_seed": list(self.stream_seed),
            "substream_seed": list(self.substream_seed),
            "state": list(self.state),
            "substream_index": self.substream_index,
            "name": self.name,
            "antithetic": self.antithetic,
            "increased_precision": self.increased_precision,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreamSnapshot":
        """Create from dictionary."""
        return cls(
            family=data["family"],
            stream_seed=tuple(int(w) for w in data["stream_seed"]),
            substream_seed=tuple(int(w) for w in data["substream_seed"]),
            state=tuple(int(w) for w in data["state"]),
            substream_index=int(data.get("substream_index", 0)),
            name=data.get("name"),
            antithetic=bool(data.get("antithetic", False)),
            increased_precision=bool(data.get("increased_precision", False)),
        )
