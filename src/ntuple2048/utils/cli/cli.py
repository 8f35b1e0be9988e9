import argparse
import logging
import sys

from ...config import HYPERPARAMS


def setup_logging(log_file=None, level=logging.INFO):
    """
    Set up logging configuration.

    Args:
        log_file: Optional path to a log file, in addition to stdout
        level: Root logger level
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_args(args=None):
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Train and evaluate an n-tuple TD(0) player for 2048"
    )

    # Episode options
    parser.add_argument("--total", type=int, default=HYPERPARAMS["total_episodes"],
                        help="Number of episodes to play (default: %(default)s)")
    parser.add_argument("--block", type=int, default=0,
                        help="Print a summary every N episodes (default: once at the end)")
    parser.add_argument("--limit", type=int, default=0,
                        help="Number of finished episodes kept in memory (default: all)")

    # Agent options
    parser.add_argument("--play", type=str, default=HYPERPARAMS["player_args"],
                        help="Player construction string, e.g. \"alpha=0.1 load=weights.bin\"")
    parser.add_argument("--evil", type=str, default=HYPERPARAMS["environment_args"],
                        help="Environment construction string, e.g. \"seed=7\"")
    parser.add_argument("--load", type=str, default=None,
                        help="Load player weights from this file")
    parser.add_argument("--save", type=str, default=None,
                        help="Save player weights to this file after the last episode")

    # General options
    parser.add_argument("--seed", type=int, default=HYPERPARAMS["seed"],
                        help="Global random seed (default: %(default)s)")
    parser.add_argument("--log-file", type=str, default=None,
                        help="Also write the log to this file")
    parser.add_argument("--plot", type=str, default=None,
                        help="Save a training progress chart to this path")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar")

    return parser.parse_args(args)
