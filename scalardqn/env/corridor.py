"""
Corridor Environment
====================

A small deterministic stand-in for a steering task, used by the CLI and the
integration tests.

The agent sits on a 1-D track of `length` cells bounded by walls:

    |  .  .  .  A  .  .  .  |
       0  1  2  3  4  5  6

Actions:
    0 = LEFT, 1 = STAY, 2 = RIGHT

State (3 readings in [0, 1]):
    - left wall proximity   (1 when adjacent, 0 when out of sensor range)
    - fraction of cells visited this episode
    - right wall proximity

Rewards:
    +1.0   entering a cell for the first time this episode
    +0.01  any other survived step
    -10.0  moving into a wall (episode ends)

The episode also ends once every cell has been visited or after
`max_steps` steps.
"""

from typing import List, Optional, Set

from .base_env import BaseEnvironment, StepResult


class CorridorEnv(BaseEnvironment):
    """
    1-D corridor with novelty rewards and wall crashes.

    Example:
        >>> env = CorridorEnv(length=8)
        >>> state = env.reset()
        >>> state, reward, done = env.step(2)
    """

    ACTIONS = ('LEFT', 'STAY', 'RIGHT')

    REWARD_NEW_CELL = 1.0
    REWARD_STEP = 0.01
    REWARD_CRASH = -10.0

    def __init__(
        self,
        length: int = 12,
        sensor_range: int = 3,
        max_steps: int = 200,
        start: Optional[int] = None
    ):
        """
        Args:
            length: Number of cells in the track
            sensor_range: Distance (in cells) at which walls become visible
            max_steps: Step limit per episode
            start: Starting cell (middle of the track if None)
        """
        if length < 2:
            raise ValueError(f"Corridor length must be at least 2, got {length}")
        if start is not None and not 0 <= start < length:
            raise ValueError(f"Start cell must be in [0, {length}), got {start}")
        self.length = length
        self.sensor_range = sensor_range
        self.max_steps = max_steps
        self.start = length // 2 if start is None else start

        self.position = self.start
        self.visited: Set[int] = set()
        self.steps = 0
        self.done = False
        self.reset()

    @property
    def state_size(self) -> int:
        return 3

    @property
    def action_size(self) -> int:
        return len(self.ACTIONS)

    def reset(self) -> List[float]:
        self.position = self.start
        self.visited = {self.start}
        self.steps = 0
        self.done = False
        return self.get_state()

    def _proximity(self, distance: int) -> float:
        if distance > self.sensor_range:
            return 0.0
        return 1.0 - (distance - 1) / self.sensor_range

    def get_state(self) -> List[float]:
        """Current sensor readings."""
        left_distance = self.position + 1
        right_distance = self.length - self.position
        return [
            self._proximity(left_distance),
            len(self.visited) / self.length,
            self._proximity(right_distance),
        ]

    def step(self, action: int) -> StepResult:
        """
        Move one cell left/right or stay.

        Raises:
            ValueError: For actions outside [0, 3)
            RuntimeError: When stepping a finished episode without reset()
        """
        if not 0 <= action < self.action_size:
            raise ValueError(f"Action must be in [0, {self.action_size}), got {action}")
        if self.done:
            raise RuntimeError("Episode is over; call reset() first")

        self.steps += 1
        target = self.position + (action - 1)

        if target < 0 or target >= self.length:
            reward = self.REWARD_CRASH
            self.done = True
        else:
            self.position = target
            if target in self.visited:
                reward = self.REWARD_STEP
            else:
                self.visited.add(target)
                reward = self.REWARD_NEW_CELL
            self.done = self.all_visited or self.steps >= self.max_steps

        return StepResult(self.get_state(), reward, self.done)

    @property
    def all_visited(self) -> bool:
        return len(self.visited) == self.length
