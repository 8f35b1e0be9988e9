import torch

from ntuple2048.agents.td_agent import RandomPlayer, TDPlayer
from ntuple2048.config import set_seeds
from ntuple2048.environment.action import PLACE, SLIDE
from ntuple2048.environment.board import DIRECTIONS, NUM_CELLS
from ntuple2048.environment.random_env import RandomEnvironment
from ntuple2048.training.episode import Episode, run_episode


def check_finished_episode(game):
    kinds = [move.action.kind for move in game.moves]
    assert kinds[:2] == [PLACE, PLACE]
    # Player and environment alternate after the opening placements
    assert kinds[2::2] == [SLIDE] * len(kinds[2::2])
    assert kinds[3::2] == [PLACE] * len(kinds[3::2])
    for move in game.moves:
        if move.action.kind == SLIDE:
            assert move.action.direction in DIRECTIONS
        else:
            assert 0 <= move.action.position < NUM_CELLS
    assert game.score == sum(move.reward for move in game.moves)
    assert game.board.legal_moves() == [] or kinds[-1] == SLIDE


def test_td_player_episode_terminates():
    play = TDPlayer()
    evil = RandomEnvironment("seed=1")
    game = run_episode(play, evil)
    check_finished_episode(game)
    assert game.board.legal_moves() == []
    assert game.max_tile() >= 4
    assert game.duration() >= 0
    assert len(play.history) == len([m for m in game.moves if m.action.kind == SLIDE])


def test_random_player_episode_terminates():
    game = run_episode(RandomPlayer("seed=5"), RandomEnvironment("seed=5"))
    check_finished_episode(game)
    assert game.board.legal_moves() == []


def test_training_episode_updates_weights():
    play = TDPlayer("alpha=0.1")
    before = play.network.weights.clone()
    run_episode(play, RandomEnvironment("seed=2"))
    assert not torch.equal(play.network.weights, before)


def test_turn_order():
    play, evil = object(), object()
    game = Episode()
    assert game.take_turns(play, evil) is evil
    game.moves = [None]
    assert game.take_turns(play, evil) is evil
    game.moves = [None] * 2
    assert game.take_turns(play, evil) is play
    assert game.last_turns(play, evil) is evil
    game.moves = [None] * 3
    assert game.take_turns(play, evil) is evil
    assert game.last_turns(play, evil) is play


def test_global_seed_makes_games_reproducible():
    games = []
    for _ in range(2):
        set_seeds(42)
        game = run_episode(TDPlayer(), RandomEnvironment())
        games.append([str(move.action) for move in game.moves])
    assert games[0] == games[1]

    set_seeds(42)
    first = run_episode(RandomPlayer(), RandomEnvironment())
    set_seeds(42)
    second = run_episode(RandomPlayer(), RandomEnvironment())
    assert (first.score, first.step_count()) == (second.score, second.step_count())
