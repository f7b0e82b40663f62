#!/usr/bin/env python3
"""
wellstream stream generation script

Usage:
    python scripts/generate_streams.py --config configs/default.yaml
    python scripts/generate_streams.py --config configs/default.yaml --values 10
    python scripts/generate_streams.py --config configs/default.yaml --dry-run
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

# Allow running from a source checkout
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wellstream.config.schema import WellStreamConfig
from wellstream.config.load import load_config, save_config
from wellstream.config.hashing import config_signature, seed_fingerprint
from wellstream.streams.seeds import SeedRegistry
from wellstream.streams.stream import create_streams
from wellstream.streams.checkpoint import capture_checkpoint, save_checkpoint
from wellstream.streams.logging import create_logger


def parse_args():
    parser = argparse.ArgumentParser(description="Generate reproducible WELL random streams")
    parser.add_argument("--config", type=str, required=True, help="Path to YAML config file")
    parser.add_argument("--values", type=int, default=None, help="Override values per substream")
    parser.add_argument("--output-dir", type=str, default=None, help="Override output directory")
    parser.add_argument("--dry-run", action="store_true", help="Validate config without generating")
    parser.add_argument("--name", type=str, default=None, help="Run name (default: timestamped)")
    return parser.parse_args()


def setup_experiment(config: WellStreamConfig, name: str = None) -> Path:
    """Create <output_dir>/<name> with checkpoints/ and logs/ inside."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    exp_name = name or f"wellstream_{timestamp}"

    output_dir = Path(config.output_dir) / exp_name
    output_dir.mkdir(parents=True, exist_ok=True)

    (output_dir / "checkpoints").mkdir(exist_ok=True)
    (output_dir / "logs").mkdir(exist_ok=True)

    return output_dir


def main():
    args = parse_args()

    print("=" * 60)
    print("WELLSTREAM GENERATION")
    print("=" * 60)

    # Load config
    print(f"\nLoading config: {args.config}")
    config = load_config(args.config)

    # Apply overrides
    if args.values is not None:
        config.streams.values_per_substream = args.values
    if args.output_dir:
        config.output_dir = args.output_dir

    # Build registry (validates the package seed)
    registry = SeedRegistry.from_config(config.seed)

    print(f"\nConfiguration:")
    print(f"  Signature: {config_signature(config)}")
    print(f"  Family: {registry.family.name}")
    print(f"  Package seed: {seed_fingerprint(registry.package_seed)}")
    print(f"  Streams: {config.streams.n_streams} x {config.streams.substreams} substreams")
    print(f"  Values per substream: {config.streams.values_per_substream}")
    print(f"  Antithetic: {config.streams.antithetic}, "
          f"increased precision: {config.streams.increased_precision}")

    if args.dry_run:
        print("\n[DRY RUN] Config and package seed are valid. No streams created.")
        return

    # Run directory
    exp_dir = setup_experiment(config, args.name)
    print(f"Run directory: {exp_dir}")
    save_config(config, exp_dir / "config.yaml")

    if config.log_events:
        registry.set_logger(create_logger(exp_dir))

    print("\nCreating streams...")
    streams = create_streams(config, registry)

    print("\n" + "=" * 60)
    print("VALUES")
    print("=" * 60)

    for stream in streams:
        print(f"\n{stream.name}")
        for _ in range(config.streams.substreams):
            values = stream.next_array_of_double(config.streams.values_per_substream)
            formatted = " ".join(f"{v:.10f}" for v in values)
            print(f"  [{stream.substream_index:3d}] {formatted}")
            stream.reset_next_substream()
        stream.reset_start_stream()

    # Checkpoint streams at their start plus the registry position
    checkpoint = capture_checkpoint(streams, registry)
    path = save_checkpoint(checkpoint, exp_dir / "checkpoints" / "streams.pt")

    print(f"\nCheckpoint saved to: {path}")
    print("\nDone!")


if __name__ == "__main__":
    main()
