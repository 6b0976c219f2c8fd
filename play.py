from __future__ import annotations

import argparse
import logging

from discriminant.config import MatchSettings, get_match_settings, setup_logging
from discriminant import MatchRunner

logger = logging.getLogger("play")


def parse_args() -> argparse.Namespace:
    settings = get_match_settings()
    ap = argparse.ArgumentParser(description="Run a computer-versus-computer match")
    ap.add_argument("--games", type=int, default=10, help="Number of games to play")
    ap.add_argument("--max-moves", type=int, default=settings.max_moves, help="Moves before a game is drawn")
    ap.add_argument("--epsilon", type=float, default=settings.epsilon, help="Random move probability")
    ap.add_argument("--depths", default=",".join(str(d) for d in settings.depths),
                    help="Comma-separated search depths to vary between games")
    ap.add_argument("--seed", type=int, default=None, help="Random seed")
    return ap.parse_args()


def main() -> None:
    setup_logging()
    args = parse_args()

    settings = MatchSettings(max_moves=args.max_moves, epsilon=args.epsilon, depths=args.depths)

    runner = MatchRunner(settings=settings, seed=args.seed)
    stats = runner.run(args.games)

    summary = stats.summary()
    logger.info("MATCH STATISTICS:")
    for key, value in summary.items():
        logger.info("  %s: %s", key, f"{value:.2f}" if isinstance(value, float) else value)


if __name__ == "__main__":
    main()
