import logging
from typing import NamedTuple

from ..config import PlayerConfig, make_rng
from ..environment.action import Action
from ..environment.board import DIRECTIONS, ILLEGAL_MOVE, Board
from .base_agent import Agent
from .ntuple_network import NTupleNetwork


class Step(NamedTuple):
    reward: int
    after: Board


class TDPlayer(Agent):
    """
    Greedy player whose value function is an n-tuple network trained with
    backward TD(0) updates at the end of every episode.

    Recognised construction options: ``init``, ``load``, ``alpha``, ``save``.
    With ``alpha`` at 0 (the default) the weights are never modified.
    """

    def __init__(self, args: str = "", network: NTupleNetwork = None):
        self.config = PlayerConfig.from_args(args)
        super().__init__(self.config.name, self.config.role)
        self.alpha = self.config.alpha

        if network is not None:
            self.network = network
        elif self.config.load is not None:
            logging.info(f"Loading weights from {self.config.load}")
            self.network = NTupleNetwork.from_file(self.config.load)
        else:
            if self.config.init is not None:
                logging.info(f"Initializing fresh weight tables ({self.config.init})")
            self.network = NTupleNetwork()

        self.history = []

    def estimate_value(self, after: Board) -> float:
        return self.network.estimate(after)

    def take_action(self, before: Board) -> Action:
        best_op = None
        best_score = 0.0
        best_step = None
        for op in DIRECTIONS:
            after, reward = before.slide(op)
            if reward == ILLEGAL_MOVE:
                continue
            score = reward + self.estimate_value(after)
            # Strict comparison keeps the earliest direction on ties
            if best_op is None or score > best_score:
                best_op = op
                best_score = score
                best_step = Step(reward, after)
        if best_op is None:
            return Action.none()
        self.history.append(best_step)
        return Action.slide(best_op)

    def open_episode(self, flag: str = "") -> None:
        self.history.clear()

    def close_episode(self, flag: str = "") -> None:
        if not self.history or self.alpha == 0:
            return
        # Terminal afterstate has no future value
        self.adjust_value(self.history[-1].after, 0)
        for t in range(len(self.history) - 2, -1, -1):
            following = self.history[t + 1]
            target = following.reward + self.estimate_value(following.after)
            self.adjust_value(self.history[t].after, target)

    def adjust_value(self, after: Board, target: float) -> None:
        """Move every contributing weight by alpha * (target - V(after))."""
        error = target - self.estimate_value(after)
        self.network.adjust(after, self.alpha * error)

    def save_weights(self, path=None) -> None:
        path = path or self.config.save
        logging.info(f"Saving weights to {path}")
        self.network.save(path)

    def close(self) -> None:
        """Persist the weights if a ``save`` path was configured."""
        if self.config.save is not None:
            self.save_weights()


class RandomPlayer(Agent):
    """Plays a uniformly random legal slide."""

    def __init__(self, args: str = ""):
        config = PlayerConfig.from_args(args, name="dummy")
        super().__init__(config.name, config.role)
        self.rng = make_rng(config.seed)

    def take_action(self, before: Board) -> Action:
        for op in self.rng.permutation(len(DIRECTIONS)):
            if before.slide(int(op))[1] != ILLEGAL_MOVE:
                return Action.slide(int(op))
        return Action.none()
