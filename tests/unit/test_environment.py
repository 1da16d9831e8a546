"""
Unit tests for the Gymnasium environment.

Tests spaces, reset, reveal and flag actions, rewards and action masks.
"""
import pytest
import numpy as np
from minesweeper import BoardConfig, MinesweeperEnv


def rig_corner_mines(env: MinesweeperEnv):
    """Fix mines along the top edge plus (0, 1), keeping (8, 8) safe."""
    mines = [(col, 0) for col in range(9)] + [(0, 1)]
    env.board.place_mines(8, 8, positions=mines)


# ============================================================================
# Spaces and Reset Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_reveal_and_flag(self) -> None:
        """Two actions per cell."""
        env = MinesweeperEnv(BoardConfig(5, 4, 3))
        assert env.action_space.n == 40

    def test_observation_space_shape(self) -> None:
        """Observations are (height, width) int8."""
        env = MinesweeperEnv(BoardConfig(5, 4, 3))
        assert env.observation_space.shape == (4, 5)
        assert env.observation_space.dtype == np.int8

    def test_reset_observation_all_hidden(self, env: MinesweeperEnv) -> None:
        """Reset starts a fresh game."""
        obs, info = env.reset(seed=1)
        assert np.all(obs == -1)
        assert env.observation_space.contains(obs)
        assert info["game_state"] == "IN_PROGRESS"
        assert info["revealed"] == 0
        assert info["total_safe"] == 71

    def test_action_round_trip(self, env: MinesweeperEnv) -> None:
        """encode_action and decode_action agree."""
        action = env.encode_action(3, 7, flag=True)
        assert action == 81 + 7 * 9 + 3
        assert env.decode_action(action) == (True, (3, 7))


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test stepping through reveals and flags."""

    def test_safe_reveal_reward(self, env: MinesweeperEnv) -> None:
        """First reveal is always safe."""
        obs, reward, terminated, truncated, info = env.step(
            env.encode_action(4, 4)
        )
        assert reward in (1.0, 10.0)
        assert obs[4, 4] >= 0
        assert truncated is False
        assert info["revealed"] >= 1

    def test_reveal_mine_terminates(self, env: MinesweeperEnv) -> None:
        """Hitting a mine ends the episode with a penalty."""
        rig_corner_mines(env)

        obs, reward, terminated, _, info = env.step(env.encode_action(3, 0))
        assert reward == -10.0
        assert terminated is True
        assert obs[0, 3] == 9
        assert info["game_state"] == "LOST"

    def test_winning_reveal_reward(self) -> None:
        """A one-safe-cell board is won on the first reveal."""
        env = MinesweeperEnv(BoardConfig(3, 3, 8))
        env.reset(seed=0)
        _, reward, terminated, _, info = env.step(env.encode_action(1, 1))
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_flag_action(self, env: MinesweeperEnv) -> None:
        """Upper half of the action space toggles flags."""
        obs, reward, terminated, _, info = env.step(
            env.encode_action(0, 0, flag=True)
        )
        assert reward == 0.0
        assert obs[0, 0] == -2
        assert info["flags"] == 1
        assert terminated is False

    def test_ignored_reveal_penalty(self, env: MinesweeperEnv) -> None:
        """Revealing a flagged cell is ignored and penalised."""
        env.step(env.encode_action(0, 0, flag=True))
        _, reward, _, _, _ = env.step(env.encode_action(0, 0))
        assert reward == pytest.approx(-0.1)

    def test_invalid_action_raises(self, env: MinesweeperEnv) -> None:
        """Actions outside the space are rejected."""
        with pytest.raises(ValueError, match="Invalid action"):
            env.step(env.action_space.n)

    def test_seeded_reset_is_reproducible(self) -> None:
        """Same seed, same moves, same observations."""
        first = MinesweeperEnv()
        second = MinesweeperEnv()
        first.reset(seed=11)
        second.reset(seed=11)
        obs_a, *_ = first.step(first.encode_action(2, 6))
        obs_b, *_ = second.step(second.encode_action(2, 6))
        np.testing.assert_array_equal(obs_a, obs_b)

    def test_step_count_in_info(self, env: MinesweeperEnv) -> None:
        """Every step is counted, ignored ones included."""
        env.step(env.encode_action(0, 0, flag=True))
        _, _, _, _, info = env.step(env.encode_action(0, 0))
        assert info["steps"] == 2


# ============================================================================
# Action Mask Tests
# ============================================================================

class TestActionMask:
    """Test valid action masks."""

    def test_new_game_mask(self, env: MinesweeperEnv) -> None:
        """Every cell can be revealed or flagged."""
        mask = env.get_action_mask()
        assert mask.shape == (162,)
        assert mask.all()

    def test_flagged_cell_can_only_be_unflagged(
        self, env: MinesweeperEnv
    ) -> None:
        """Flagged cells drop out of the reveal half only."""
        env.step(env.encode_action(0, 0, flag=True))
        mask = env.get_action_mask()
        assert not mask[env.encode_action(0, 0)]
        assert mask[env.encode_action(0, 0, flag=True)]

    def test_revealed_cell_masked_out(self, env: MinesweeperEnv) -> None:
        """Revealed cells allow no action."""
        env.step(env.encode_action(4, 4))
        mask = env.get_action_mask()
        assert not mask[env.encode_action(4, 4)]
        assert not mask[env.encode_action(4, 4, flag=True)]

    def test_mask_empty_after_game_over(self, env: MinesweeperEnv) -> None:
        """Nothing is valid once the game has ended."""
        rig_corner_mines(env)
        env.step(env.encode_action(0, 1))
        assert not env.get_action_mask().any()
