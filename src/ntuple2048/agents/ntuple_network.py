"""
N-tuple network value function.

Each tuple pattern samples 4 cells of the board; their ranks are packed into
a base-25 feature index that addresses one weight table. The value of a
board is the sum of the indexed weights across all tables.
"""
import logging

import numpy as np
import torch

FEATURE_BASE = 25
TUPLE_LENGTH = 4
TABLE_SIZE = FEATURE_BASE ** TUPLE_LENGTH

# 4 rows followed by 4 columns
ROW_COLUMN_TUPLES = (
    (0, 1, 2, 3),
    (4, 5, 6, 7),
    (8, 9, 10, 11),
    (12, 13, 14, 15),
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
)

_COUNT_DTYPE = np.dtype("<u4")
_WEIGHT_DTYPE = np.dtype("<f4")


class FeatureIndexError(IndexError):
    """A cell rank does not fit in a base-25 feature digit."""


class WeightFileError(OSError):
    """A weight file could not be read or written."""


def extract_feature(board, pattern) -> int:
    """
    Pack the ranks of the cells in ``pattern`` into a base-25 integer.

    Args:
        board: Anything indexable by cell position (a Board or 16 ranks)
        pattern: Cell positions, most significant digit first

    Returns:
        Feature index in [0, 25**len(pattern))
    """
    feature = 0
    for pos in pattern:
        rank = board[pos]
        if not 0 <= rank < FEATURE_BASE:
            raise FeatureIndexError(
                f"Rank {rank} at cell {pos} does not fit in a base-{FEATURE_BASE} feature"
            )
        feature = feature * FEATURE_BASE + rank
    return feature


class NTupleNetwork:
    def __init__(self, patterns=ROW_COLUMN_TUPLES):
        for pattern in patterns:
            if len(pattern) != TUPLE_LENGTH:
                raise ValueError(f"Tuple patterns must have {TUPLE_LENGTH} cells, got {pattern}")
        self.patterns = tuple(tuple(p) for p in patterns)
        # Fixed footprint: one dense float32 table of 25**4 entries per pattern
        self.weights = torch.zeros((len(self.patterns), TABLE_SIZE), dtype=torch.float32)
        self._tables = torch.arange(len(self.patterns))

    @property
    def num_tables(self) -> int:
        return len(self.patterns)

    def features(self, board):
        return [extract_feature(board, pattern) for pattern in self.patterns]

    def _index(self, board):
        return self._tables, torch.tensor(self.features(board), dtype=torch.long)

    def estimate(self, board) -> float:
        """Sum of the weights indexed by every tuple pattern."""
        return self.weights[self._index(board)].sum().item()

    def adjust(self, board, delta: float) -> None:
        """Add the same ``delta`` to every weight that contributes to ``board``."""
        self.weights[self._index(board)] += delta

    def save(self, path) -> None:
        """
        Write all tables as: uint32 table count, then per table uint32 entry
        count followed by that many float32 values (little-endian).
        """
        try:
            with open(path, "wb") as f:
                f.write(np.array([self.num_tables], dtype=_COUNT_DTYPE).tobytes())
                for table in self.weights:
                    f.write(np.array([table.numel()], dtype=_COUNT_DTYPE).tobytes())
                    f.write(table.numpy().astype(_WEIGHT_DTYPE).tobytes())
        except OSError as e:
            raise WeightFileError(f"Cannot save weights to {path}: {e}") from e
        logging.info(f"Saved {self.num_tables} weight tables to {path}")

    def load(self, path) -> None:
        """Read tables written by ``save`` into this network."""
        try:
            with open(path, "rb") as f:
                num_tables = _read_count(f, path)
                if num_tables != self.num_tables:
                    raise WeightFileError(
                        f"{path} holds {num_tables} tables, expected {self.num_tables}"
                    )
                tables = []
                for _ in range(num_tables):
                    size = _read_count(f, path)
                    if size != TABLE_SIZE:
                        raise WeightFileError(
                            f"{path} holds a table of {size} entries, expected {TABLE_SIZE}"
                        )
                    data = f.read(size * _WEIGHT_DTYPE.itemsize)
                    if len(data) != size * _WEIGHT_DTYPE.itemsize:
                        raise WeightFileError(f"{path} is truncated")
                    tables.append(np.frombuffer(data, dtype=_WEIGHT_DTYPE).astype(np.float32))
        except WeightFileError:
            raise
        except OSError as e:
            raise WeightFileError(f"Cannot load weights from {path}: {e}") from e
        self.weights = torch.from_numpy(np.stack(tables))
        logging.info(f"Loaded {num_tables} weight tables from {path}")

    @classmethod
    def from_file(cls, path, patterns=ROW_COLUMN_TUPLES) -> "NTupleNetwork":
        network = cls(patterns)
        network.load(path)
        return network


def _read_count(f, path) -> int:
    data = f.read(_COUNT_DTYPE.itemsize)
    if len(data) != _COUNT_DTYPE.itemsize:
        raise WeightFileError(f"{path} is truncated")
    return int(np.frombuffer(data, dtype=_COUNT_DTYPE)[0])
