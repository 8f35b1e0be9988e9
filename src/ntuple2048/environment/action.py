from typing import NamedTuple, Optional

from .board import DIRECTIONS, ILLEGAL_MOVE, NUM_CELLS

SLIDE = "slide"
PLACE = "place"
NONE = "none"

_SLIDE_NAMES = ("#U", "#R", "#D", "#L")
_HEX = "0123456789ABCDEF"


class Action(NamedTuple):
    """An immutable agent decision: slide a direction, place a tile, or nothing."""

    kind: str = NONE
    direction: Optional[int] = None
    position: Optional[int] = None
    tile: Optional[int] = None

    @classmethod
    def slide(cls, direction: int) -> "Action":
        if direction not in DIRECTIONS:
            raise ValueError(f"Direction must be one of {DIRECTIONS}, got {direction}")
        return cls(SLIDE, direction=direction)

    @classmethod
    def place(cls, position: int, tile: int) -> "Action":
        if not 0 <= position < NUM_CELLS:
            raise ValueError(f"Position must be in [0, {NUM_CELLS - 1}], got {position}")
        if tile not in (1, 2):
            raise ValueError(f"Placed tile rank must be 1 or 2, got {tile}")
        return cls(PLACE, position=position, tile=tile)

    @classmethod
    def none(cls) -> "Action":
        return cls(NONE)

    def is_none(self) -> bool:
        return self.kind == NONE

    def apply(self, board):
        """
        Apply this action to ``board``.

        Returns (new_board, reward); reward is ILLEGAL_MOVE when the action
        is rejected (an illegal slide or no action at all).
        """
        if self.kind == SLIDE:
            return board.slide(self.direction)
        if self.kind == PLACE:
            return board.place(self.position, self.tile), 0
        return board, ILLEGAL_MOVE

    def __str__(self):
        if self.kind == SLIDE:
            return _SLIDE_NAMES[self.direction]
        if self.kind == PLACE:
            return _HEX[self.position] + _HEX[self.tile]
        return "??"
