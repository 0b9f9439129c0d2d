"""
Command line entry point

    python -m rocket_shooter                     # play in a window
    python -m rocket_shooter --headless -n 5     # random-policy episodes, no window
"""

import argparse
import logging
import random
from dataclasses import asdict

from .config import GameConfig, load_config
from .persistence import JsonHighScoreStore
from .world import World


def main(argv=None):
    parser = argparse.ArgumentParser(description="Side-scrolling rocket shooter")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run random-policy episodes through the gym environment instead of opening a window",
    )
    parser.add_argument(
        "-n", "--episodes",
        type=int,
        default=1,
        help="Number of headless episodes (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for spawn positions",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file with GameConfig overrides",
    )
    parser.add_argument(
        "--high-score-file",
        type=str,
        default=None,
        help="Where to keep the high score (default: ~/.rocket_shooter/highscore.json)",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable sounds",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)
    if args.headless and args.high_score_file:
        parser.error("--high-score-file has no effect with --headless")
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    config = load_config(args.config) if args.config else GameConfig()

    if args.headless:
        from .shooter_env import run_random_episode

        overrides = asdict(config)
        for episode in range(args.episodes):
            seed = None if args.seed is None else args.seed + episode
            info = run_random_episode(render=False, seed=seed, game_config=overrides)
            print(f"Episode {episode + 1}/{args.episodes}: "
                  f"score = {info['score']}, kills = {info['kills']}, "
                  f"steps = {info['step']}, return = {info['return']:.2f}")
        return

    world = World(
        config,
        store=JsonHighScoreStore(args.high_score_file),
        rng=random.Random(args.seed),
    )

    from .window import play
    play(world, mute=args.mute, rng=random.Random(args.seed))


if __name__ == "__main__":
    main()
