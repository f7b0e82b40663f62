"""
wellstream.streams.checkpoint

Saving and resuming simulation stream state.

Contents:
    - StreamCheckpoint: snapshots of named streams plus the package seed
    - capture_checkpoint, restore_streams, restore_registry: in-memory conversion
    - save_checkpoint, load_checkpoint: torch-serialized files
    - compute_checkpoint_hash: file fingerprint

A stream is fully described by three seed vectors, so a checkpoint stays
tiny no matter how far the simulation has run.

torch.load defaults to weights_only=True since PyTorch 2.6. Checkpoints are
only read back from files save_checkpoint wrote, so load_checkpoint passes
weights_only=False.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import torch

from wellstream.core.exceptions import CheckpointError, WellStreamError
from wellstream.core.types import StreamSnapshot
from wellstream.generators import FamilyRegistry, create_default_registry
from .seeds import SeedRegistry
from .stream import RandomStream

# Written into every checkpoint
__version__ = "0.1.0"


# =============================================================================
# StreamCheckpoint
# =============================================================================

@dataclass
class StreamCheckpoint:
    """
    Positions of a set of streams and of the registry they came from.

    Attributes:
        streams: Snapshot dicts in creation order.
        family: Generator family name shared by all streams.
        package_seed: Registry seed for the next stream (optional).
        streams_created: Registry counter at capture time.
        timestamp: ISO time of capture.
        wellstream_version: wellstream version string.

    Example:
        >>> checkpoint = capture_checkpoint(streams, registry)
        >>> save_checkpoint(checkpoint, "checkpoints/day5.pt")
    """

    streams: List[Dict[str, Any]]
    family: str = "well607"
    package_seed: Optional[List[int]] = None
    streams_created: int = 0

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    wellstream_version: str = __version__

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "streams": self.streams,
            "family": self.family,
            "package_seed": self.package_seed,
            "streams_created": self.streams_created,
            "timestamp": self.timestamp,
            "wellstream_version": self.wellstream_version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreamCheckpoint":
        """Create from dictionary."""
        return cls(
            streams=list(data["streams"]),
            family=data.get("family", "well607"),
            package_seed=data.get("package_seed"),
            streams_created=data.get("streams_created", 0),
            timestamp=data.get("timestamp", ""),
            wellstream_version=data.get("wellstream_version", "unknown"),
        )

    @property
    def stream_names(self) -> List[Optional[str]]:
        return [s.get("name") for s in self.streams]


# =============================================================================
# Capture and Restore
# =============================================================================

def capture_checkpoint(
    streams: Sequence[RandomStream],
    registry: Optional[SeedRegistry] = None,
) -> StreamCheckpoint:
    """
    Capture streams (and optionally their registry) into a checkpoint.

    Raises:
        CheckpointError: If streams belong to different families.
    """
    families = {s.family.name for s in streams}
    if registry is not None:
        families.add(registry.family.name)
    if len(families) > 1:
        raise CheckpointError(f"Cannot checkpoint mixed generator families: {sorted(families)}")

    family = families.pop() if families else "well607"

    return StreamCheckpoint(
        streams=[s.snapshot().to_dict() for s in streams],
        family=family,
        package_seed=list(registry.package_seed) if registry is not None else None,
        streams_created=registry.streams_created if registry is not None else 0,
    )


def restore_registry(
    checkpoint: StreamCheckpoint,
    families: Optional[FamilyRegistry] = None,
) -> SeedRegistry:
    """
    Rebuild the seed registry saved in a checkpoint.

    Raises:
        CheckpointError: If the checkpoint holds no package seed or it is invalid.
    """
    if checkpoint.package_seed is None:
        raise CheckpointError("Checkpoint does not contain a package seed")

    families = families or create_default_registry()
    try:
        family = families.get_by_name(checkpoint.family)
        registry = SeedRegistry(
            family=family,
            package_seed=checkpoint.package_seed,
            streams_created=checkpoint.streams_created,
        )
    except WellStreamError as e:
        raise CheckpointError(f"Invalid registry state in checkpoint: {e}")

    return registry


def restore_streams(
    checkpoint: StreamCheckpoint,
    registry: Optional[SeedRegistry] = None,
    families: Optional[FamilyRegistry] = None,
) -> List[RandomStream]:
    """
    Rebuild streams from a checkpoint, in the order they were captured.

    No registry seed is consumed; ``registry`` is only attached so that
    spawned children continue from it.

    Raises:
        CheckpointError: If a snapshot is malformed.
    """
    families = families or create_default_registry()
    streams = []
    for i, data in enumerate(checkpoint.streams):
        try:
            snapshot = StreamSnapshot.from_dict(data)
            family = families.get_by_name(snapshot.family)
            streams.append(RandomStream.from_snapshot(snapshot, family=family, registry=registry))
        except (KeyError, TypeError, ValueError, WellStreamError) as e:
            raise CheckpointError(f"Invalid stream snapshot #{i} in checkpoint: {e}")
    return streams


# =============================================================================
# Disk I/O
# =============================================================================

def save_checkpoint(
    checkpoint: StreamCheckpoint,
    path: Union[str, Path],
) -> Path:
    """
    Write a checkpoint with torch.save, creating parent directories.

    Returns:
        The path written.

    Raises:
        CheckpointError: If serialization or the write fails.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        torch.save(checkpoint.to_dict(), path, pickle_protocol=4)
    except Exception as e:
        raise CheckpointError(f"Failed to save checkpoint to {path}: {e}")

    return path


def load_checkpoint(path: Union[str, Path]) -> StreamCheckpoint:
    """
    Read a checkpoint written by save_checkpoint.

    Raises:
        CheckpointError: If the file is missing, unreadable, or has no streams.
    """
    path = Path(path)

    if not path.exists():
        raise CheckpointError(f"Checkpoint not found: {path}")

    try:
        data = torch.load(path, map_location="cpu", weights_only=False)
    except Exception as e:
        raise CheckpointError(f"Failed to load checkpoint from {path}: {e}")

    if not isinstance(data, dict) or "streams" not in data:
        raise CheckpointError("Invalid checkpoint: missing 'streams' key")

    return StreamCheckpoint.from_dict(data)


def compute_checkpoint_hash(path: Union[str, Path]) -> str:
    """
    SHA-256 of the checkpoint file, for comparing runs.

    Returns:
        64-character hex digest.
    """
    path = Path(path)

    if not path.exists():
        raise CheckpointError(f"Checkpoint not found: {path}")

    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            hasher.update(chunk)

    return hasher.hexdigest()
