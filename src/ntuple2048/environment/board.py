import numpy as np

# Direction codes (0: up, 1: right, 2: down, 3: left)
UP, RIGHT, DOWN, LEFT = 0, 1, 2, 3
DIRECTIONS = (UP, RIGHT, DOWN, LEFT)

ILLEGAL_MOVE = -1

BOARD_SIZE = 4
NUM_CELLS = BOARD_SIZE * BOARD_SIZE
MAX_RANK = 0xF


def unpack_row(row):
    """Extract four 4-bit ranks from a 16-bit row integer."""
    return [(row >> (4 * i)) & 0xF for i in range(4)]


def pack_row(tiles):
    """Pack a list of 4 ranks into a 16-bit integer."""
    result = 0
    for i, tile in enumerate(tiles):
        result |= (tile & 0xF) << (4 * i)
    return result


def reverse_row(row):
    """Mirror the nibbles of a 16-bit row."""
    return pack_row(unpack_row(row)[::-1])


def slide_row_left(row):
    """
    Slide a 16-bit row toward index 0, merging equal neighbours once.

    Ranks are exponents (0 means empty, 1 means 2, 2 means 4, etc.). Every
    direction is routed through this function, either directly or by
    reflecting/transposing the board before and after.

    Two MAX_RANK (32768) tiles are left unmerged: their rank-16 result does
    not fit in a 4-bit cell.

    Returns (new_row, reward), where reward is the sum of merged tile values.
    """
    # Compress
    tiles = [tile for tile in unpack_row(row) if tile != 0]
    merged = []
    reward = 0
    i = 0
    while i < len(tiles):
        # A 4-bit cell cannot hold the result of merging two MAX_RANK tiles
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1] and tiles[i] < MAX_RANK:
            rank = tiles[i] + 1
            merged.append(rank)
            reward += 1 << rank
            i += 2  # the merged tile is not considered again in this pass
        else:
            merged.append(tiles[i])
            i += 1
    # Compress again to close the gaps left by merges
    merged += [0] * (BOARD_SIZE - len(merged))
    return pack_row(merged), reward


def _build_lookup_tables():
    left = [slide_row_left(row) for row in range(1 << 16)]
    right = []
    for row in range(1 << 16):
        new_row, reward = left[reverse_row(row)]
        right.append((reverse_row(new_row), reward))
    return left, right


# Precompute lookup tables for all 16-bit rows.
ROW_LEFT, ROW_RIGHT = _build_lookup_tables()


def _check_position(pos):
    if not 0 <= pos < NUM_CELLS:
        raise ValueError(f"Cell position must be in [0, {NUM_CELLS - 1}], got {pos}")


class Board:
    """
    Packed representation of a 4x4 board.

    The board is stored as a single 64-bit integer; each cell holds a 4-bit
    rank and each row occupies 16 bits. Cell ``i`` (row-major, row 0 on top)
    lives at bits ``4*i .. 4*i+3``.

    Boards are immutable values: every operation that changes a cell returns
    a new Board.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: int = 0):
        if not 0 <= raw < (1 << (4 * NUM_CELLS)):
            raise ValueError(f"Packed board out of range: {raw:#x}")
        self._raw = int(raw)

    @classmethod
    def from_ranks(cls, ranks) -> "Board":
        """Build a board from 16 ranks in row-major order."""
        ranks = list(ranks)
        if len(ranks) != NUM_CELLS:
            raise ValueError(f"Expected {NUM_CELLS} ranks, got {len(ranks)}")
        raw = 0
        for pos, rank in enumerate(ranks):
            if not 0 <= rank <= MAX_RANK:
                raise ValueError(f"Rank must be in [0, {MAX_RANK}], got {rank}")
            raw |= int(rank) << (4 * pos)
        return cls(raw)

    @classmethod
    def from_values(cls, values) -> "Board":
        """Build a board from a 4x4 grid of tile values (0, 2, 4, 8, ...)."""
        ranks = []
        for value in np.asarray(values, dtype=np.int64).flatten():
            value = int(value)
            if value != 0 and value & (value - 1):
                raise ValueError(f"Tile value must be a power of two, got {value}")
            # Convert value to exponent (2 -> 1, 4 -> 2)
            ranks.append(value.bit_length() - 1 if value else 0)
        return cls.from_ranks(ranks)

    @property
    def raw(self) -> int:
        return self._raw

    def __getitem__(self, pos: int) -> int:
        _check_position(pos)
        return (self._raw >> (4 * pos)) & 0xF

    def set(self, pos: int, rank: int) -> "Board":
        """Return a copy of this board with cell ``pos`` set to ``rank``."""
        _check_position(pos)
        if not 0 <= rank <= MAX_RANK:
            raise ValueError(f"Rank must be in [0, {MAX_RANK}], got {rank}")
        mask = 0xF << (4 * pos)
        return Board((self._raw & ~mask) | (rank << (4 * pos)))

    def place(self, pos: int, tile: int) -> "Board":
        """Place a new 2-tile (rank 1) or 4-tile (rank 2)."""
        if tile not in (1, 2):
            raise ValueError(f"Placed tile rank must be 1 or 2, got {tile}")
        return self.set(pos, tile)

    def get_row(self, r: int) -> int:
        """Extract row r as a 16-bit integer."""
        return (self._raw >> (16 * r)) & 0xFFFF

    def ranks(self):
        return [(self._raw >> (4 * pos)) & 0xF for pos in range(NUM_CELLS)]

    def empty_cells(self):
        return [pos for pos, rank in enumerate(self.ranks()) if rank == 0]

    def max_rank(self) -> int:
        return max(self.ranks())

    # --- symmetry helpers ---

    def transpose(self) -> "Board":
        ranks = self.ranks()
        return Board.from_ranks(
            ranks[c * BOARD_SIZE + r] for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)
        )

    def reflect_horizontal(self) -> "Board":
        """Mirror left and right."""
        raw = 0
        for r in range(BOARD_SIZE):
            raw |= reverse_row(self.get_row(r)) << (16 * r)
        return Board(raw)

    def reflect_vertical(self) -> "Board":
        """Mirror top and bottom."""
        raw = 0
        for r in range(BOARD_SIZE):
            raw |= self.get_row(r) << (16 * (BOARD_SIZE - 1 - r))
        return Board(raw)

    # --- moves ---

    def _slide_rows(self, table):
        new_raw = 0
        total_reward = 0
        for r in range(BOARD_SIZE):
            new_row, reward = table[self.get_row(r)]
            new_raw |= new_row << (16 * r)
            total_reward += reward
        return Board(new_raw), total_reward

    def slide(self, direction: int):
        """
        Slide all tiles in ``direction``.

        Returns (new_board, reward). If the move changes nothing the board
        itself is returned together with ILLEGAL_MOVE as the reward.
        """
        if direction == LEFT:
            moved, reward = self._slide_rows(ROW_LEFT)
        elif direction == RIGHT:
            moved, reward = self._slide_rows(ROW_RIGHT)
        elif direction == UP:
            moved, reward = self.transpose()._slide_rows(ROW_LEFT)
            moved = moved.transpose()
        elif direction == DOWN:
            moved, reward = self.transpose()._slide_rows(ROW_RIGHT)
            moved = moved.transpose()
        else:
            raise ValueError(f"Direction must be one of {DIRECTIONS}, got {direction}")
        if moved == self:
            return self, ILLEGAL_MOVE
        return moved, reward

    def legal_moves(self):
        return [d for d in DIRECTIONS if self.slide(d)[1] != ILLEGAL_MOVE]

    def to_numpy(self) -> np.ndarray:
        """
        Convert the board to a 4x4 numpy array of actual tile values.
        Tiles are reconstructed from the exponent: tile = 2^(exponent), with 0 representing empty.
        """
        arr = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
        for pos, rank in enumerate(self.ranks()):
            arr[pos // BOARD_SIZE, pos % BOARD_SIZE] = 0 if rank == 0 else (1 << rank)
        return arr

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self):
        return hash(self._raw)

    def __repr__(self):
        return f"Board({self._raw:#018x})"

    def __str__(self):
        border = "+" + "-" * 24 + "+"
        lines = [border]
        for row in self.to_numpy():
            lines.append("|" + "".join(f"{v:6}" for v in row) + "|")
        lines.append(border)
        return "\n".join(lines)
