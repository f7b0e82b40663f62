"""
wellstream.config.load

Config loading and validation.
"""

import yaml
from pathlib import Path
from typing import Union, Dict, Any

from .schema import WellStreamConfig, SeedConfig, StreamConfig
from ..core.exceptions import ConfigError


def load_config(path: Union[str, Path]) -> WellStreamConfig:
    """Load configuration from YAML file."""
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root in {path} must be a mapping, got {type(raw).__name__}")

    return config_from_dict(raw)


def config_from_dict(d: Dict[str, Any]) -> WellStreamConfig:
    """Create WellStreamConfig from dictionary."""
    try:
        seed = SeedConfig(**(d.get("seed") or {}))
        streams = StreamConfig(**(d.get("streams") or {}))

        return WellStreamConfig(
            seed=seed,
            streams=streams,
            output_dir=d.get("output_dir", "runs"),
            log_events=d.get("log_events", True),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config: {e}")


def save_config(config: WellStreamConfig, path: Union[str, Path]) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    d = config_to_dict(config)

    with open(path, "w") as f:
        yaml.dump(d, f, default_flow_style=False, sort_keys=False)


def config_to_dict(config: WellStreamConfig) -> Dict[str, Any]:
    """Convert WellStreamConfig to dictionary."""
    seed_dict: Dict[str, Any] = {"family": config.seed.family}

    # Only include an explicit package seed if one was configured
    if config.seed.package_seed is not None:
        seed_dict["package_seed"] = list(config.seed.package_seed)

    streams_dict: Dict[str, Any] = {
        "n_streams": config.streams.n_streams,
        "substreams": config.streams.substreams,
        "values_per_substream": config.streams.values_per_substream,
        "antithetic": config.streams.antithetic,
        "increased_precision": config.streams.increased_precision,
    }
    if config.streams.names is not None:
        streams_dict["names"] = list(config.streams.names)

    return {
        "seed": seed_dict,
        "streams": streams_dict,
        "output_dir": config.output_dir,
        "log_events": config.log_events,
    }
