"""
wellstream.streams

Streams, substreams and the package seed registry.

Exports:
- SeedRegistry and process-wide defaults
- RandomStream (stream/substream manager)
- StreamSampler (torch/numpy adapter)
- Checkpointing
- Event logging
"""

from .seeds import (
    SeedRegistry,
    default_seed_registry,
    reset_default_seed_registries,
)

from .stream import (
    RandomStream,
    create_streams,
)

from .tensors import StreamSampler

from .checkpoint import (
    StreamCheckpoint,
    capture_checkpoint,
    restore_streams,
    restore_registry,
    save_checkpoint,
    load_checkpoint,
    compute_checkpoint_hash,
)

from .logging import create_logger

__all__ = [
    # Registry
    "SeedRegistry",
    "default_seed_registry",
    "reset_default_seed_registries",
    # Streams
    "RandomStream",
    "create_streams",
    "StreamSampler",
    # Checkpoint
    "StreamCheckpoint",
    "capture_checkpoint",
    "restore_streams",
    "restore_registry",
    "save_checkpoint",
    "load_checkpoint",
    "compute_checkpoint_hash",
    # Logging
    "create_logger",
]
