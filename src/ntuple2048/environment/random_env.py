import numpy as np

from ..agents.base_agent import Agent
from ..config import EnvironmentConfig, make_rng
from .action import Action
from .board import NUM_CELLS


class RandomEnvironment(Agent):
    """
    Add a random tile (2 or 4) to an empty cell.

    2-tile: 90%
    4-tile: 10%
    """

    def __init__(self, args: str = ""):
        config = EnvironmentConfig.from_args(args)
        super().__init__(config.name, config.role)
        self.config = config
        self.rng = make_rng(config.seed)
        self.space = np.arange(NUM_CELLS)

    def take_action(self, after) -> Action:
        self.rng.shuffle(self.space)
        for pos in self.space:
            if after[int(pos)] != 0:
                continue
            # Convert value to rank (2 -> 1, 4 -> 2)
            tile = 1 if self.rng.integers(0, 10) else 2
            return Action.place(int(pos), tile)
        return Action.none()
