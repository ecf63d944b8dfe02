"""
Configuration file for Scalar DQN
=================================

All hyperparameters, environment settings and logging options are centralized here.
Modify these values to experiment with different training configurations.

Usage:
    from config import Config
    cfg = Config()
    print(cfg.LEARNING_RATE)
"""

import warnings
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Config:
    """
    Central configuration for the entire project.

    Sections:
    1. Environment - Reference corridor environment
    2. Neural Network - Architecture configuration
    3. Training - Learning hyperparameters
    4. Exploration - Epsilon-greedy settings
    5. Training Control - Episode limits and reporting
    6. System - Paths, logging and seeding
    """

    # =========================================================================
    # ENVIRONMENT SETTINGS
    # =========================================================================

    # Number of cells in the reference corridor track
    CORRIDOR_LENGTH: int = 12

    # Sensor readings in the state vector (left wall, visited fraction, right wall).
    # The trainer rejects environments whose sizes differ from these.
    STATE_SIZE: int = 3

    # Action space
    ACTION_SIZE: int = 3      # LEFT, STAY, RIGHT

    # =========================================================================
    # NEURAL NETWORK ARCHITECTURE
    # =========================================================================

    # Hidden layer widths. Every node is a Python object, so keep these small.
    HIDDEN_LAYERS: List[int] = field(default_factory=lambda: [5, 5])

    # Activation applied after every layer (output included): 'sigmoid', 'identity'
    ACTIVATION: str = 'sigmoid'

    # Gaussian weight initialization
    INIT_MEAN: float = 0.0
    INIT_STD: float = 1.0

    # =========================================================================
    # TRAINING HYPERPARAMETERS
    # =========================================================================

    # RMSProp step size
    LEARNING_RATE: float = 0.01

    # RMSProp squared-gradient decay and denominator stabilizer
    RMSPROP_BETA: float = 0.9
    RMSPROP_EPSILON: float = 1e-8

    # Discount factor (gamma) - How much to value future rewards
    GAMMA: float = 0.98

    # Transitions sampled (with replacement) per gradient step
    BATCH_SIZE: int = 64

    # Gradient steps per learn() call (one call per finished episode)
    EPOCHS: int = 20

    # Replay buffer capacity (oldest transition evicted beyond this)
    MEMORY_SIZE: int = 10_000

    # Minimum transitions in memory before learning starts
    MEMORY_MIN: int = 1000

    # Copy online weights into the target network every N episodes
    TARGET_SYNC_EVERY: int = 10

    # Number of recent losses kept for averaging
    LOSS_HISTORY: int = 10_000

    # =========================================================================
    # EXPLORATION SETTINGS (Epsilon-Greedy)
    # =========================================================================

    # eps(episode) = END + (START - END) * exp(-episode / DECAY)
    EPSILON_START: float = 0.2
    EPSILON_END: float = 0.001

    # Episodes per e-fold of the decay (higher = slower decay)
    EPSILON_DECAY: float = 200.0

    # =========================================================================
    # TRAINING CONTROL
    # =========================================================================

    # Total episodes to train (0 = unlimited, train until manually stopped)
    MAX_EPISODES: int = 0

    # Maximum steps per episode (prevents infinite episodes)
    MAX_STEPS_PER_EPISODE: int = 2000

    # Log stats every N episodes
    LOG_EVERY: int = 10

    # Number of episodes kept in TrainingMetrics
    PLOT_HISTORY_LENGTH: int = 100

    # =========================================================================
    # SYSTEM SETTINGS
    # =========================================================================

    # Paths
    LOG_DIR: str = 'logs'

    # Console verbosity: 'DEBUG', 'INFO', 'WARNING', 'ERROR'
    LOG_LEVEL: str = 'INFO'

    # Random seed for reproducibility (None for random)
    SEED: Optional[int] = None

    def __post_init__(self):
        """Validation and derived calculations."""
        assert self.LEARNING_RATE > 0, "Learning rate must be positive"
        assert 0 < self.GAMMA <= 1, "Gamma must be in (0, 1]"
        assert self.BATCH_SIZE > 0, "Batch size must be positive"
        assert self.BATCH_SIZE <= self.MEMORY_SIZE, "Batch size must not exceed memory size"
        assert self.MEMORY_MIN <= self.MEMORY_SIZE, "Memory minimum must not exceed memory size"
        assert self.EPSILON_START >= self.EPSILON_END, "Epsilon start must be >= end"
        assert self.EPSILON_DECAY > 0, "Epsilon decay must be positive"
        assert 0 <= self.RMSPROP_BETA < 1, "RMSProp beta must be in [0, 1)"
        assert self.TARGET_SYNC_EVERY > 0, "Target sync interval must be positive"
        assert self.EPOCHS > 0, "Epochs must be positive"
        assert self.STATE_SIZE > 0 and self.ACTION_SIZE > 0, "State and action sizes must be positive"
        assert all(w > 0 for w in self.HIDDEN_LAYERS), "Hidden layer widths must be positive"

        if self.MAX_EPISODES == 0:
            warnings.warn(
                "MAX_EPISODES is 0: training will run until interrupted",
                UserWarning,
                stacklevel=2
            )


# Global config instance for easy importing
config = Config()


if __name__ == "__main__":
    # Print configuration summary
    cfg = Config()
    print("=" * 60)
    print("Scalar DQN - Configuration Summary")
    print("=" * 60)
    print(f"\nEnvironment: corridor of {cfg.CORRIDOR_LENGTH} cells")
    print(f"\nNeural Network:")
    print(f"   Shape: {[cfg.STATE_SIZE, *cfg.HIDDEN_LAYERS, cfg.ACTION_SIZE]}")
    print(f"   Activation: {cfg.ACTIVATION}")
    print(f"\nTraining:")
    print(f"   Learning rate: {cfg.LEARNING_RATE}")
    print(f"   Batch size: {cfg.BATCH_SIZE} x {cfg.EPOCHS} epochs")
    print(f"   Gamma: {cfg.GAMMA}")
    print(f"\nExploration:")
    print(f"   Epsilon: {cfg.EPSILON_START} -> {cfg.EPSILON_END}")
    print(f"   Decay: {cfg.EPSILON_DECAY}")
    print("=" * 60)
