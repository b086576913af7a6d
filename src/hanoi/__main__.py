"""Runs the game in the Sidekick panel.

Usage:
    python -m hanoi [--disks N] [--interval SECONDS] [--log-level LEVEL]

Requires the `sidekick` extra and a running Sidekick panel (for example the
VS Code extension). Stop with Ctrl+C.
"""
import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_DISK_COUNT, DEFAULT_MOVE_INTERVAL, GameConfig
from .orchestrator import GameOrchestrator

logger = logging.getLogger("hanoi.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m hanoi", description="Play the Tower of Hanoi in the Sidekick panel.")
    parser.add_argument("--disks", default=str(DEFAULT_DISK_COUNT),
                        help="Number of disks, clamped to 1..15 (default: %(default)s).")
    parser.add_argument("--interval", type=float, default=DEFAULT_MOVE_INTERVAL,
                        help="Seconds between auto-solver moves (default: %(default)s).")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: %(default)s).")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] - %(message)s",
    )

    try:
        config = GameConfig(disk_count=args.disks, move_interval=args.interval)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    import sidekick
    from .sidekick_view import SidekickView

    view = SidekickView()
    orchestrator = GameOrchestrator(view, config)
    view.bind(orchestrator)
    orchestrator.setup()
    sidekick.run_forever()
    return 0


if __name__ == "__main__":
    sys.exit(main())
