"""
Tests for Config validation.

These tests verify that invalid configurations are caught early
rather than causing cryptic runtime errors during training.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import Config


class TestConfigValidation:
    """Test Config.__post_init__ validation."""

    def test_valid_config_passes(self):
        """Default config should validate without errors."""
        cfg = Config()
        assert cfg is not None

    def test_invalid_learning_rate_zero(self):
        """LEARNING_RATE=0 should fail validation."""
        cfg = Config()
        cfg.LEARNING_RATE = 0
        with pytest.raises(AssertionError):
            cfg.__post_init__()

    def test_invalid_gamma_zero(self):
        """GAMMA=0 should fail validation (must be > 0)."""
        cfg = Config()
        cfg.GAMMA = 0
        with pytest.raises(AssertionError):
            cfg.__post_init__()

    def test_invalid_gamma_exceeds_one(self):
        """GAMMA > 1 should fail validation."""
        with pytest.raises(AssertionError):
            Config(GAMMA=1.5)

    def test_valid_gamma_exactly_one(self):
        """GAMMA=1.0 should be valid (no discounting)."""
        Config(GAMMA=1.0)

    def test_batch_size_exceeds_memory(self):
        """BATCH_SIZE > MEMORY_SIZE should fail validation."""
        with pytest.raises(AssertionError):
            Config(BATCH_SIZE=200, MEMORY_SIZE=100, MEMORY_MIN=10)

    def test_memory_min_exceeds_memory(self):
        """MEMORY_MIN > MEMORY_SIZE should fail validation."""
        with pytest.raises(AssertionError):
            Config(MEMORY_SIZE=100, MEMORY_MIN=101, BATCH_SIZE=10)

    def test_epsilon_start_below_end(self):
        with pytest.raises(AssertionError):
            Config(EPSILON_START=0.01, EPSILON_END=0.1)

    def test_non_positive_epsilon_decay(self):
        with pytest.raises(AssertionError):
            Config(EPSILON_DECAY=0)

    def test_rmsprop_beta_one(self):
        with pytest.raises(AssertionError):
            Config(RMSPROP_BETA=1.0)

    def test_zero_epochs(self):
        with pytest.raises(AssertionError):
            Config(EPOCHS=0)

    def test_zero_width_hidden_layer(self):
        with pytest.raises(AssertionError):
            Config(HIDDEN_LAYERS=[5, 0])

    def test_unlimited_episodes_warns(self):
        with pytest.warns(UserWarning, match="MAX_EPISODES is 0"):
            Config(MAX_EPISODES=0)


class TestConfigDefaults:
    """Test documented default values."""

    def test_training_defaults(self):
        cfg = Config()
        assert cfg.LEARNING_RATE == 0.01
        assert cfg.GAMMA == 0.98
        assert cfg.BATCH_SIZE == 64
        assert cfg.EPOCHS == 20
        assert cfg.MEMORY_MIN == 1000
        assert cfg.TARGET_SYNC_EVERY == 10

    def test_exploration_defaults(self):
        cfg = Config()
        assert cfg.EPSILON_START == 0.2
        assert cfg.EPSILON_END == 0.001
        assert cfg.EPSILON_DECAY == 200.0

    def test_sizes_match_corridor(self):
        cfg = Config()
        assert (cfg.STATE_SIZE, cfg.ACTION_SIZE) == (3, 3)

    def test_non_positive_action_size(self):
        with pytest.raises(AssertionError):
            Config(ACTION_SIZE=0)

    def test_hidden_layers_not_shared(self):
        a, b = Config(), Config()
        a.HIDDEN_LAYERS.append(9)
        assert b.HIDDEN_LAYERS == [5, 5]
