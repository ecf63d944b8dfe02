"""
Base Environment Interface
==========================

Abstract base class that defines the interface all environments must implement.
This allows the agent and trainer to work with any environment that follows it.

To add a new environment:
1. Create a new file in scalardqn/env/
2. Inherit from BaseEnvironment
3. Implement all abstract methods
4. Register in __init__.py
"""

from abc import ABC, abstractmethod
from typing import List, NamedTuple


class StepResult(NamedTuple):
    """Outcome of one environment step."""
    state: List[float]
    reward: float
    done: bool


class BaseEnvironment(ABC):
    """
    Abstract base class for environments.

    Properties:
        state_size: int - Length of every state vector
        action_size: int - Number of discrete actions

    Methods:
        reset() -> List[float]
            Start a new episode, return the initial state

        step(action: int) -> StepResult
            Apply an action, return (next_state, reward, done)
    """

    @property
    @abstractmethod
    def state_size(self) -> int:
        """Return the dimension of the state vector."""
        pass

    @property
    @abstractmethod
    def action_size(self) -> int:
        """Return the number of possible actions."""
        pass

    @abstractmethod
    def reset(self) -> List[float]:
        """
        Reset the environment to its initial state.

        Returns:
            Initial state vector
        """
        pass

    @abstractmethod
    def step(self, action: int) -> StepResult:
        """
        Execute one step with the given action.

        Args:
            action: Integer in [0, action_size)

        Returns:
            StepResult(state, reward, done)
        """
        pass

    def close(self) -> None:
        """Clean up resources. Override if needed."""
        pass

    def seed(self, seed: int) -> None:
        """Set random seed for reproducibility. Override if the environment has randomness."""
        pass
