import logging
import time
from typing import NamedTuple

from ..environment.action import Action
from ..environment.board import ILLEGAL_MOVE, Board


class Move(NamedTuple):
    action: Action
    reward: int
    elapsed: float


class Episode:
    """
    Record of a single game: the current board, the accumulated score and
    every accepted move.
    """

    def __init__(self, board: Board = None):
        self.board = board if board is not None else Board()
        self.score = 0
        self.moves = []
        self.start_time = time.time()
        self.end_time = None
        self._last_tick = self.start_time

    def step_count(self) -> int:
        return len(self.moves)

    def take_turns(self, play, evil):
        """The environment places the first two tiles, then turns alternate."""
        return play if max(self.step_count() + 1, 2) % 2 else evil

    def last_turns(self, play, evil):
        """The agent that made the final accepted move."""
        return evil if self.take_turns(play, evil) is play else play

    def apply_action(self, action: Action) -> bool:
        after, reward = action.apply(self.board)
        if reward == ILLEGAL_MOVE:
            return False
        now = time.time()
        self.moves.append(Move(action, reward, now - self._last_tick))
        self._last_tick = now
        self.board = after
        self.score += reward
        return True

    def close(self) -> None:
        self.end_time = time.time()

    def max_tile(self) -> int:
        rank = self.board.max_rank()
        return 0 if rank == 0 else 1 << rank

    def duration(self) -> float:
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time


def run_episode(play, evil) -> Episode:
    """
    Alternate ``evil`` (tile placement) and ``play`` (slides) until one of
    them has no acceptable action left.
    """
    game = Episode()
    play.open_episode(f"{play.name}:{evil.name}")
    evil.open_episode(f"{play.name}:{evil.name}")
    while True:
        who = game.take_turns(play, evil)
        action = who.take_action(game.board)
        if not game.apply_action(action):
            break
    game.close()
    winner = game.last_turns(play, evil)
    play.close_episode(winner.name)
    evil.close_episode(winner.name)
    logging.debug(
        f"Episode finished: score={game.score}, max_tile={game.max_tile()}, steps={game.step_count()}"
    )
    return game
