"""
wellstream.streams.logging

Logging utilities for stream events.
"""

from pathlib import Path
from typing import Callable


def create_logger(output_dir: Path) -> Callable[[dict], None]:
    """Create logging function for registry and stream events.

    Args:
        output_dir: Experiment output directory ('logs' is created inside it).

    Returns:
        Logging callback function that accepts an event dict.
    """
    log_file = Path(output_dir) / "logs" / "streams.log"

    def log(event: dict):
        kind = event.get("event", "?")

        if kind == "take":
            index = event.get("stream_index", "?")
            index_str = f"{index:4d}" if isinstance(index, int) else str(index)
            print(f"  Stream {index_str} | "
                  f"family: {event.get('family', '?')} | "
                  f"seed: {event.get('seed_hash', '?')}")
        elif kind == "set_package_seed":
            print(f"  Package seed set | "
                  f"family: {event.get('family', '?')} | "
                  f"seed: {event.get('seed_hash', '?')}")

        # Write all events to log file
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with open(log_file, "a") as f:
            f.write(f"{event}\n")

    return log
