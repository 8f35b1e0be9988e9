import torch

from ntuple2048.agents.ntuple_network import NTupleNetwork
from ntuple2048.main import main
from ntuple2048.utils.cli import parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.total == 1000
    assert args.block == 0
    assert args.play == "alpha=0.1"
    assert args.load is None and args.save is None


def test_parse_args_equals_syntax():
    args = parse_args(["--total=5", "--block=2", "--evil=seed=3", "--play=alpha=0.05 name=me"])
    assert args.total == 5
    assert args.block == 2
    assert args.evil == "seed=3"
    assert args.play == "alpha=0.05 name=me"


def test_train_save_then_evaluate(tmp_path):
    path = tmp_path / "weights.bin"
    assert main(["--total=2", "--evil=seed=4", f"--save={path}"]) == 0
    trained = NTupleNetwork.from_file(path)
    assert trained.weights.abs().sum().item() > 0

    again = tmp_path / "again.bin"
    assert main(["--total=1", "--play=alpha=0", f"--load={path}", f"--save={again}"]) == 0
    assert torch.equal(NTupleNetwork.from_file(again).weights, trained.weights)


def test_missing_weight_file_fails(tmp_path):
    assert main(["--total=1", f"--load={tmp_path / 'missing.bin'}"]) == 1


def test_unwritable_save_path_fails(tmp_path):
    assert main(["--total=1", f"--save={tmp_path / 'no-dir' / 'weights.bin'}"]) == 1
