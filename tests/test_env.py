import numpy as np
import pytest

from ataxx import AtaxxEnv
from ataxx.core import ACTION_VECTOR_SIZE, PASS_INDEX, Move, PieceColor, encode_move, legal_moves


def test_reset_returns_valid_observation():
    env = AtaxxEnv()
    obs, info = env.reset()

    assert obs.shape == (3, 7, 7)
    assert obs.dtype == np.float32
    assert obs[0].sum() == 2
    assert obs[1].sum() == 2
    assert obs[2].sum() == 0
    assert info["legal_action_mask"].shape == (ACTION_VECTOR_SIZE,)
    assert info["to_move"] == int(PieceColor.RED)


def test_reset_with_blocks():
    env = AtaxxEnv()
    obs, _ = env.reset(options={"blocks": ["c3"]})
    assert obs[2].sum() == 4


def test_legal_mask_matches_enumeration():
    env = AtaxxEnv()
    env.reset()
    mask = env.legal_action_mask()
    legal = legal_moves(env.board)
    assert np.count_nonzero(mask) == len(legal)
    for move in legal:
        assert mask[encode_move(move)] == 1
    assert mask[PASS_INDEX] == 0


def test_step_advances_state_and_returns_reward():
    env = AtaxxEnv()
    obs, info = env.reset()
    action = encode_move(Move.parse("a1-b2"))

    next_obs, reward, terminated, truncated, next_info = env.step(action)

    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert next_obs[0].sum() == 3
    assert np.any(next_obs != obs)
    assert next_info["to_move"] == int(PieceColor.BLUE)


def test_illegal_action_rejected():
    env = AtaxxEnv()
    env.reset()
    with pytest.raises(ValueError):
        env.step(PASS_INDEX)
    with pytest.raises(ValueError):
        env.step(ACTION_VECTOR_SIZE)


def test_random_episode_terminates_with_signed_reward():
    env = AtaxxEnv()
    _, info = env.reset(seed=0)
    rng = np.random.default_rng(0)
    terminated = False
    reward = 0.0
    steps = 0
    while not terminated:
        choices = np.flatnonzero(info["legal_action_mask"])
        _, reward, terminated, _, info = env.step(int(rng.choice(choices)))
        steps += 1
    assert reward in (-1.0, 0.0, 1.0)
    assert steps > 0
    assert env.board.game_over()


def test_render_ansi():
    env = AtaxxEnv(render_mode="ansi")
    env.reset()
    text = env.render()
    assert text.splitlines()[0] == "   a b c d e f g"
    with pytest.raises(NotImplementedError):
        AtaxxEnv().render()


def test_mask_is_empty_once_jump_limit_ends_the_game():
    env = AtaxxEnv()
    env.reset()
    shuffle = [Move.parse(text) for text in ("a1-a3", "g1-g3", "a3-a1", "g3-g1")]
    terminated = False
    for ply in range(25):
        assert not terminated
        _, _, terminated, _, info = env.step(encode_move(shuffle[ply % 4]))

    assert terminated
    assert env.board.jumps == 25
    assert legal_moves(env.board)
    assert np.count_nonzero(info["legal_action_mask"]) == 0
    assert np.count_nonzero(env.legal_action_mask()) == 0
