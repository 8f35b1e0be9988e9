import random
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np
import torch


def set_seeds(seed: int = 42) -> None:
    torch.manual_seed(seed)
    np.random.seed(seed)
    random.seed(seed)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Random generator for an agent. Without an explicit seed it is drawn from
    the global numpy state, so ``set_seeds`` makes whole runs reproducible.
    """
    if seed is None:
        seed = int(np.random.randint(0, 2 ** 31 - 1))
    return np.random.default_rng(seed)


def parse_agent_args(args: str = "") -> Dict[str, str]:
    """
    Parse an agent construction string such as ``"alpha=0.1 load=weights.bin"``.

    Tokens are split on whitespace and then at the first ``=``. A token
    without ``=`` maps to itself. Later keys override earlier ones, and keys
    nobody consults are kept without complaint.
    """
    meta = {}
    for pair in args.split():
        key, sep, value = pair.partition("=")
        meta[key] = value if sep else pair
    return meta


def _to_float(meta, key, default):
    if key not in meta:
        return default
    try:
        return float(meta[key])
    except ValueError:
        raise ValueError(f"Agent option '{key}' expects a number, got '{meta[key]}'") from None


def _to_int(meta, key, default):
    if key not in meta:
        return default
    try:
        return int(float(meta[key]))
    except ValueError:
        raise ValueError(f"Agent option '{key}' expects an integer, got '{meta[key]}'") from None


@dataclass
class PlayerConfig:
    name: str = "td"
    role: str = "player"
    alpha: float = 0.0
    init: Optional[str] = None
    load: Optional[str] = None
    save: Optional[str] = None
    seed: Optional[int] = None
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_args(cls, args: str = "", name: str = "td") -> "PlayerConfig":
        meta = parse_agent_args(f"name={name} role=player " + args)
        return cls(
            name=meta.pop("name"),
            role=meta.pop("role"),
            alpha=_to_float(meta, "alpha", 0.0),
            init=meta.pop("init", None),
            load=meta.pop("load", None),
            save=meta.pop("save", None),
            seed=_to_int(meta, "seed", None),
            extra={k: v for k, v in meta.items() if k not in ("alpha", "seed")},
        )


@dataclass
class EnvironmentConfig:
    name: str = "random"
    role: str = "environment"
    seed: Optional[int] = None
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_args(cls, args: str = "") -> "EnvironmentConfig":
        meta = parse_agent_args("name=random role=environment " + args)
        return cls(
            name=meta.pop("name"),
            role=meta.pop("role"),
            seed=_to_int(meta, "seed", None),
            extra={k: v for k, v in meta.items() if k != "seed"},
        )


# Default hyperparameters for the command-line driver.
HYPERPARAMS = {
    "total_episodes": 1000,
    "player_args": "alpha=0.1",
    "environment_args": "",
    "seed": 42,
}
