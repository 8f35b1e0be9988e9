import numpy as np
import pytest
import torch

from ntuple2048.agents.ntuple_network import (
    ROW_COLUMN_TUPLES, TABLE_SIZE, FeatureIndexError, NTupleNetwork, WeightFileError,
    extract_feature,
)
from ntuple2048.environment.board import Board


def test_extract_feature_packs_base_25():
    board = Board.from_ranks([1, 2, 3, 4] + [0] * 12)
    assert extract_feature(board, (0, 1, 2, 3)) == 1 * 25 ** 3 + 2 * 25 ** 2 + 3 * 25 + 4
    assert extract_feature(board, (3, 2, 1, 0)) == 4 * 25 ** 3 + 3 * 25 ** 2 + 2 * 25 + 1
    assert extract_feature(board, (4, 5, 6, 7)) == 0


def test_extract_feature_rejects_large_ranks():
    ranks = [0] * 16
    ranks[2] = 25
    with pytest.raises(FeatureIndexError):
        extract_feature(ranks, (0, 1, 2, 3))


def test_patterns_are_rows_then_columns():
    assert len(ROW_COLUMN_TUPLES) == 8
    assert ROW_COLUMN_TUPLES[1] == (4, 5, 6, 7)
    assert ROW_COLUMN_TUPLES[5] == (1, 5, 9, 13)


def test_fresh_network_is_zero():
    network = NTupleNetwork()
    assert network.weights.shape == (8, TABLE_SIZE)
    assert network.weights.dtype == torch.float32
    assert network.estimate(Board.from_ranks(range(16))) == 0.0


def test_adjust_adds_same_delta_to_every_table():
    network = NTupleNetwork()
    board = Board.from_ranks([1, 0, 2, 0] * 4)
    network.adjust(board, 0.5)
    assert network.estimate(board) == 4.0
    for table, feature in enumerate(network.features(board)):
        assert network.weights[table, feature].item() == 0.5
    assert network.weights.sum().item() == 4.0


def test_patterns_must_have_four_cells():
    with pytest.raises(ValueError):
        NTupleNetwork(patterns=[(0, 1, 2)])


def test_save_load_round_trip(tmp_path):
    torch.manual_seed(0)
    network = NTupleNetwork()
    network.weights = torch.randn(network.weights.shape)
    path = tmp_path / "weights.bin"
    network.save(path)

    restored = NTupleNetwork.from_file(path)
    assert torch.equal(restored.weights, network.weights)


def test_save_layout(tmp_path):
    network = NTupleNetwork()
    network.weights[3, 7] = 1.5
    path = tmp_path / "weights.bin"
    network.save(path)

    data = path.read_bytes()
    assert len(data) == 4 + 8 * (4 + TABLE_SIZE * 4)
    assert np.frombuffer(data[:8], dtype="<u4").tolist() == [8, TABLE_SIZE]
    offset = 4 + 3 * (4 + TABLE_SIZE * 4) + 4 + 7 * 4
    assert np.frombuffer(data[offset:offset + 4], dtype="<f4")[0] == 1.5


def test_load_missing_file(tmp_path):
    with pytest.raises(WeightFileError):
        NTupleNetwork.from_file(tmp_path / "missing.bin")


def test_load_truncated_file(tmp_path):
    path = tmp_path / "weights.bin"
    NTupleNetwork().save(path)
    path.write_bytes(path.read_bytes()[:1000])
    with pytest.raises(WeightFileError):
        NTupleNetwork.from_file(path)


def test_load_wrong_table_count(tmp_path):
    path = tmp_path / "weights.bin"
    path.write_bytes(np.array([3], dtype="<u4").tobytes())
    with pytest.raises(WeightFileError):
        NTupleNetwork.from_file(path)


def test_save_to_unwritable_path(tmp_path):
    with pytest.raises(WeightFileError):
        NTupleNetwork().save(tmp_path / "missing-dir" / "weights.bin")
