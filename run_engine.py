from __future__ import annotations

import argparse
import sys

from config import get_engine_settings, setup_logging
from draughts.engine import AI
from draughts.protocol import run_protocol


def parse_args() -> argparse.Namespace:
    settings = get_engine_settings()
    ap = argparse.ArgumentParser(description="Answer board positions on stdin with engine moves on stdout")
    ap.add_argument("--depth", type=int, default=settings.search_depth, help="Search depth below each root move")
    ap.add_argument("--serial", action="store_true", help="Search root moves in-process instead of a pool")
    ap.add_argument("--workers", type=int, default=settings.max_workers, help="Number of worker processes")
    ap.add_argument("--seed", type=int, default=settings.seed, help="Seed for root move shuffling")
    return ap.parse_args()


def main() -> None:
    setup_logging()
    args = parse_args()

    ai = AI(
        depth=args.depth,
        parallel=False if args.serial else None,
        max_workers=args.workers,
        seed=args.seed,
    )
    run_protocol(sys.stdin, sys.stdout, ai)


if __name__ == "__main__":
    main()
