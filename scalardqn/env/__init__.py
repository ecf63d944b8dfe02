"""
Environment Module
==================

Environments the agent can train on.

Available environments:
    corridor - 1-D track with novelty rewards and wall crashes
"""

from typing import Dict, List, Type

from .base_env import BaseEnvironment, StepResult
from .corridor import CorridorEnv

ENVIRONMENTS: Dict[str, Type[BaseEnvironment]] = {
    'corridor': CorridorEnv,
}


def list_environments() -> List[str]:
    """Names of all registered environments."""
    return list(ENVIRONMENTS.keys())


def get_environment(name: str, **kwargs) -> BaseEnvironment:
    """
    Instantiate a registered environment.

    Raises:
        ValueError: For unknown names
    """
    if name not in ENVIRONMENTS:
        raise ValueError(f"Unknown environment '{name}'. Available: {list_environments()}")
    return ENVIRONMENTS[name](**kwargs)


__all__ = ['BaseEnvironment', 'StepResult', 'CorridorEnv', 'get_environment', 'list_environments']
