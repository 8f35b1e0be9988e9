#!/usr/bin/env python
"""
Main entry point: play episodes of a TD player against the random environment.
"""

import logging
import sys

from tqdm import tqdm

from .agents.ntuple_network import NTupleNetwork, WeightFileError
from .agents.td_agent import TDPlayer
from .config import set_seeds
from .environment.random_env import RandomEnvironment
from .training.episode import run_episode
from .utils.cli import parse_args, setup_logging
from .utils.statistics import EpisodeStatistics


def main(argv=None):
    """Run the training/evaluation loop described by the command line."""
    args = parse_args(argv)
    setup_logging(args.log_file)
    set_seeds(args.seed)

    try:
        network = NTupleNetwork.from_file(args.load) if args.load else None
        play = TDPlayer(args.play, network=network)
    except WeightFileError as e:
        logging.error(str(e))
        return 1
    if args.save:
        play.config.save = args.save
    evil = RandomEnvironment(args.evil)

    logging.info(f"Player: {play.name} (alpha={play.alpha})")
    logging.info(f"Environment: {evil.name} (seed={evil.config.seed})")
    logging.info(f"Episodes: {args.total}, block: {args.block or args.total}")

    stats = EpisodeStatistics(args.total, args.block, args.limit)
    with tqdm(total=args.total, desc="Episodes", disable=not args.progress) as bar:
        while not stats.is_finished():
            stats.add(run_episode(play, evil))
            bar.update(1)

    if args.plot:
        stats.plot_progress(args.plot)

    try:
        play.close()
    except WeightFileError as e:
        logging.error(str(e))
        return 1

    logging.info("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
