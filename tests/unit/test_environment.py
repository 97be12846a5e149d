"""
Unit tests for the Gymnasium environment.

Tests reset, stepping, rewards and the action mask on dealt boards.
"""
import numpy as np
import pytest
from ngmines.game import BoardConfig, MinesweeperEnv


@pytest.fixture
def env() -> MinesweeperEnv:
    """Small no-guess environment."""
    return MinesweeperEnv(BoardConfig(6, 5, 4), render_mode="ansi")


def safe_start_action(env: MinesweeperEnv) -> int:
    row, col = env.board.safe_start
    return row * env.config.width + col


# ============================================================================
# Reset Tests
# ============================================================================

class TestReset:
    """Test environment reset."""

    def test_observation_shape_and_dtype(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=0)
        assert obs.shape == (5, 6)
        assert obs.dtype == np.int8
        assert env.observation_space.contains(obs)
        assert info["game_state"] == "PLAYING"

    def test_safe_start_visible(self, env: MinesweeperEnv) -> None:
        """The only non-hidden value on a fresh board is the safe start."""
        obs, info = env.reset(seed=1)
        row, col = info["safe_start"]
        assert obs[row, col] == -3
        assert np.count_nonzero(obs == -3) == 1
        assert np.count_nonzero(obs == -1) == obs.size - 1

    def test_seeded_reset_is_reproducible(self) -> None:
        first = MinesweeperEnv(BoardConfig(6, 5, 4))
        second = MinesweeperEnv(BoardConfig(6, 5, 4))
        first.reset(seed=7)
        second.reset(seed=7)
        assert first.board.mine_positions() == second.board.mine_positions()
        assert first.board.safe_start == second.board.safe_start

    def test_plain_boards_have_no_safe_start(self) -> None:
        env = MinesweeperEnv(BoardConfig(6, 5, 4), no_guess=False)
        obs, info = env.reset(seed=0)
        assert info["safe_start"] is None
        assert np.all(obs == -1)

    def test_step_before_reset_raises(self, env: MinesweeperEnv) -> None:
        with pytest.raises(RuntimeError, match="reset"):
            env.step(0)


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test actions and rewards."""

    def test_safe_start_is_rewarded(self, env: MinesweeperEnv) -> None:
        env.reset(seed=2)
        _, reward, terminated, truncated, info = env.step(safe_start_action(env))

        assert reward in (1.0, 10.0)
        assert info["game_state"] != "LOST"
        assert truncated is False
        assert terminated is (info["game_state"] == "WON")

    def test_repeat_action_is_penalised(self, env: MinesweeperEnv) -> None:
        env.reset(seed=3)
        action = safe_start_action(env)
        env.step(action)
        _, reward, _, _, _ = env.step(action)
        assert reward == -0.1

    def test_mine_ends_episode(self, env: MinesweeperEnv) -> None:
        env.reset(seed=4)
        row, col = env.board.mine_positions()[0]

        _, reward, terminated, _, info = env.step(row * env.config.width + col)

        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"


# ============================================================================
# Mask and Render Tests
# ============================================================================

class TestMaskAndRender:
    """Test the action mask and text rendering."""

    def test_action_mask_excludes_revealed(self, env: MinesweeperEnv) -> None:
        env.reset(seed=5)
        assert env.get_action_mask().all()

        action = safe_start_action(env)
        env.step(action)
        mask = env.get_action_mask()

        assert mask.shape == (30,)
        assert mask[action] == False  # noqa: E712
        assert mask.sum() == 30 - env.board.revealed_count

    def test_ansi_render(self, env: MinesweeperEnv) -> None:
        env.reset(seed=6)
        text = env.render()
        lines = text.splitlines()
        assert len(lines) == 5
        assert "X" in text

    def test_action_mask_before_reset_raises(self, env: MinesweeperEnv) -> None:
        with pytest.raises(RuntimeError, match="reset"):
            env.get_action_mask()
