"""
wellstream.config.hashing

Deterministic config and seed hashing for reproducibility tracking.
"""

import hashlib
import json
from typing import Any, Dict, Sequence

from .schema import WellStreamConfig
from .load import config_to_dict


def hash_config(config: WellStreamConfig) -> str:
    """Compute deterministic hash of configuration.

    Returns:
        16-character hex string.
    """
    d = config_to_dict(config)
    return hash_dict(d)


def hash_dict(d: Dict[str, Any]) -> str:
    """Compute deterministic hash of dictionary.

    Keys are sorted for determinism.
    """
    json_str = json.dumps(d, sort_keys=True, separators=(",", ":"))

    # SHA256 hash, truncated to 16 chars
    h = hashlib.sha256(json_str.encode()).hexdigest()[:16]
    return h


def seed_fingerprint(seed: Sequence[int]) -> str:
    """Short hex digest identifying a seed vector.

    Words are hashed as big-endian unsigned 32-bit values, so equal
    vectors always share a fingerprint across platforms.
    """
    payload = b"".join(int(w).to_bytes(4, "big") for w in seed)
    return hashlib.sha256(payload).hexdigest()[:16]


def config_signature(config: WellStreamConfig) -> str:
    """Generate human-readable signature for config.

    Format: {family}_{n_streams}S_{substreams}SS_{hash}

    Example: "well607_4S_2SS_a1b2c3d4e5f6a7b8"
    """
    h = hash_config(config)
    return (
        f"{config.seed.family}_"
        f"{config.streams.n_streams}S_"
        f"{config.streams.substreams}SS_"
        f"{h}"
    )
