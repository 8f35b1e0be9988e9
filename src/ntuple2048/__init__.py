"""N-tuple network TD(0) learning for 2048-like games."""

__version__ = "0.1.0"

# Import key components for convenient access
from .environment.board import Board, DIRECTIONS, ILLEGAL_MOVE
from .environment.action import Action
from .environment.random_env import RandomEnvironment
from .agents.ntuple_network import NTupleNetwork, FeatureIndexError, WeightFileError
from .agents.td_agent import TDPlayer, RandomPlayer
from .training.episode import Episode, run_episode
from .config import set_seeds, parse_agent_args, PlayerConfig, EnvironmentConfig
