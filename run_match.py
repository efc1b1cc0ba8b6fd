from __future__ import annotations

import argparse

from config import get_engine_settings, get_match_settings, setup_logging
from draughts.engine import AI
from draughts.match import MatchRunner


def parse_args() -> argparse.Namespace:
    engine = get_engine_settings()
    match = get_match_settings()
    ap = argparse.ArgumentParser(description="Play two engine configurations against each other")
    ap.add_argument("--games", type=int, default=match.games, help="Number of games to play")
    ap.add_argument("--max-moves", type=int, default=match.max_moves, help="Plies before a game is a tie")
    ap.add_argument("--depth1", type=int, default=engine.search_depth, help="Search depth of engine 1")
    ap.add_argument("--depth2", type=int, default=engine.search_depth, help="Search depth of engine 2")
    ap.add_argument("--serial", action="store_true", help="Disable the root search pool")
    return ap.parse_args()


def main() -> None:
    setup_logging()
    args = parse_args()

    parallel = False if args.serial else None
    runner = MatchRunner(
        AI(depth=args.depth1, parallel=parallel),
        AI(depth=args.depth2, parallel=parallel),
        max_moves=args.max_moves,
    )
    result = runner.run(args.games)
    print(sorted(result.evals))
    print(result.summary())


if __name__ == "__main__":
    main()
