from ..environment.action import Action


class Agent:
    """
    Common interface of everything that takes turns in an episode.

    Concrete agents are TDPlayer, RandomPlayer and RandomEnvironment.
    """

    def __init__(self, name: str, role: str):
        self.name = name
        self.role = role

    def open_episode(self, flag: str = "") -> None:
        pass

    def close_episode(self, flag: str = "") -> None:
        pass

    def take_action(self, board) -> Action:
        return Action.none()

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r}, role={self.role!r})"
