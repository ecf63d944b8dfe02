"""
Tests for the corridor environment.

These tests verify:
    - State readings
    - Movement, rewards and termination
    - Action validation
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scalardqn.env import BaseEnvironment, CorridorEnv, StepResult, get_environment, list_environments


@pytest.fixture
def env():
    return CorridorEnv(length=5, sensor_range=3, max_steps=50)


class TestCorridorInterface:
    """Test the environment contract."""

    def test_is_base_environment(self, env):
        assert isinstance(env, BaseEnvironment)

    def test_sizes(self, env):
        assert env.state_size == 3
        assert env.action_size == 3

    def test_reset_returns_state_vector(self, env):
        state = env.reset()
        assert len(state) == env.state_size

    def test_step_returns_step_result(self, env):
        env.reset()
        result = env.step(1)
        assert isinstance(result, StepResult)
        state, reward, done = result
        assert len(state) == 3

    def test_registry(self):
        assert 'corridor' in list_environments()
        assert isinstance(get_environment('corridor', length=4), CorridorEnv)
        with pytest.raises(ValueError):
            get_environment('racetrack')


class TestCorridorState:
    """Test sensor readings."""

    def test_middle_readings(self, env):
        state = env.reset()
        assert env.position == 2
        assert state[0] == pytest.approx(1 - 2 / 3)
        assert state[1] == pytest.approx(1 / 5)
        assert state[2] == pytest.approx(1 - 2 / 3)

    def test_wall_adjacent_and_out_of_range(self):
        env = CorridorEnv(length=5, sensor_range=3, start=0)
        state = env.reset()
        assert state[0] == 1.0
        assert state[2] == 0.0


class TestCorridorDynamics:
    """Test movement and rewards."""

    def test_new_cell_reward(self, env):
        env.reset()
        _, reward, done = env.step(2)
        assert env.position == 3
        assert reward == CorridorEnv.REWARD_NEW_CELL
        assert not done

    def test_revisit_reward(self, env):
        env.reset()
        env.step(2)
        _, reward, _ = env.step(0)
        assert env.position == 2
        assert reward == CorridorEnv.REWARD_STEP

    def test_stay_reward(self, env):
        env.reset()
        _, reward, _ = env.step(1)
        assert env.position == 2
        assert reward == CorridorEnv.REWARD_STEP

    def test_crash_ends_episode(self):
        env = CorridorEnv(length=5, start=0)
        _, reward, done = env.step(0)
        assert reward == CorridorEnv.REWARD_CRASH
        assert done
        assert env.position == 0

    def test_all_visited_ends_episode(self):
        env = CorridorEnv(length=2, start=0)
        _, reward, done = env.step(2)
        assert reward == CorridorEnv.REWARD_NEW_CELL
        assert done
        assert env.all_visited

    def test_max_steps_ends_episode(self):
        env = CorridorEnv(length=5, max_steps=3)
        dones = [env.step(1).done for _ in range(3)]
        assert dones == [False, False, True]

    def test_reset_clears_progress(self, env):
        env.step(2)
        env.reset()
        assert env.position == 2
        assert env.visited == {2}
        assert env.steps == 0


class TestCorridorValidation:
    """Test error handling."""

    def test_invalid_action(self, env):
        with pytest.raises(ValueError):
            env.step(3)

    def test_step_after_done(self):
        env = CorridorEnv(length=5, start=0)
        env.step(0)
        with pytest.raises(RuntimeError):
            env.step(1)

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            CorridorEnv(length=1)

    def test_invalid_start(self):
        with pytest.raises(ValueError):
            CorridorEnv(length=4, start=4)
