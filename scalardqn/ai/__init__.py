"""
AI Module
=========

Deep Reinforcement Learning components built on the scalar autodiff engine.

Classes:
    Agent        - DQN agent with epsilon-greedy exploration
    ReplayBuffer - Experience replay memory
    Transition   - One stored environment step
    Trainer      - Training loop orchestration
"""

from .agent import Agent
from .replay_buffer import ReplayBuffer, Transition
from .trainer import Trainer

__all__ = ['Agent', 'ReplayBuffer', 'Transition', 'Trainer']
