"""
Experience Replay Buffer
========================

A memory buffer that stores transitions for training the DQN.

Why Experience Replay?
    1. Breaks correlation between consecutive experiences
       (Neural networks learn poorly from correlated data)

    2. Improves sample efficiency
       (Each experience can be used for multiple training steps)

    3. Stabilizes training
       (Random sampling provides more diverse gradients)

How it works:
    1. Agent interacts with the environment, stores (state, action, reward, next_state, done)
    2. After each episode, we sample random batches from the buffer
    3. Old experiences are discarded when buffer is full (FIFO)

References:
    Mnih et al., 2015 - "Human-level control through deep reinforcement learning"
"""

from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np


class Transition(NamedTuple):
    """One immutable environment step."""
    state: Tuple[float, ...]
    action: int
    reward: float
    next_state: Tuple[float, ...]
    done: bool


class ReplayBuffer:
    """
    Fixed-size FIFO of transitions with contiguous numpy storage.

    Storage is a circular buffer: once full, each push overwrites the oldest
    slot. Indexing is logical, so buffer[0] is always the oldest transition
    and buffer[-1] the newest.

    Example:
        >>> buffer = ReplayBuffer(capacity=10000, rng=np.random.default_rng(0))
        >>> buffer.push(state, action, reward, next_state, done)
        >>> batch = buffer.sample(batch_size=64)   # List[Transition]
    """

    def __init__(
        self,
        capacity: int,
        state_size: int = 0,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the replay buffer.

        Args:
            capacity: Maximum number of transitions to store
            state_size: Size of state vector (auto-detected on first push if 0)
            rng: Random source for sampling
        """
        if capacity < 1:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.rng = rng if rng is not None else np.random.default_rng()
        self._state_size = state_size
        self._size = 0  # Current number of transitions stored
        self._position = 0  # Next write slot
        self._initialized = False

        if state_size > 0:
            self._init_arrays(state_size)

    def _init_arrays(self, state_size: int) -> None:
        """Initialize contiguous storage arrays."""
        self._state_size = state_size
        self.states = np.empty((self.capacity, state_size), dtype=np.float64)
        self.actions = np.empty(self.capacity, dtype=np.int64)
        self.rewards = np.empty(self.capacity, dtype=np.float64)
        self.next_states = np.empty((self.capacity, state_size), dtype=np.float64)
        self.dones = np.empty(self.capacity, dtype=np.bool_)
        self._initialized = True

    @property
    def state_size(self) -> int:
        return self._state_size

    def push(
        self,
        state: Sequence[float],
        action: int,
        reward: float,
        next_state: Sequence[float],
        done: bool
    ) -> None:
        """
        Append a transition, evicting the oldest one when full.

        Raises:
            ValueError: If state/next_state width differs from the stored width
        """
        if not self._initialized:
            self._init_arrays(len(state))

        if len(state) != self._state_size or len(next_state) != self._state_size:
            raise ValueError(
                f"Expected states of width {self._state_size}, "
                f"got {len(state)} and {len(next_state)}"
            )

        self.states[self._position] = state
        self.actions[self._position] = action
        self.rewards[self._position] = reward
        self.next_states[self._position] = next_state
        self.dones[self._position] = bool(done)

        self._position = (self._position + 1) % self.capacity
        self._size = min(self._size + 1, self.capacity)

    def _slot(self, index: int) -> int:
        """Map a logical index (0 = oldest) to a storage slot."""
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError(f"Replay index {index} out of range for size {self._size}")
        start = (self._position - self._size) % self.capacity
        return (start + index) % self.capacity

    def _transition_at(self, slot: int) -> Transition:
        return Transition(
            state=tuple(float(v) for v in self.states[slot]),
            action=int(self.actions[slot]),
            reward=float(self.rewards[slot]),
            next_state=tuple(float(v) for v in self.next_states[slot]),
            done=bool(self.dones[slot]),
        )

    def __getitem__(self, index: int) -> Transition:
        return self._transition_at(self._slot(index))

    def __iter__(self) -> Iterator[Transition]:
        for i in range(self._size):
            yield self[i]

    def sample(self, batch_size: int) -> List[Transition]:
        """
        Sample transitions uniformly at random, with replacement.

        Args:
            batch_size: Number of transitions to draw

        Returns:
            List of Transition tuples (duplicates possible)

        Raises:
            RuntimeError: If the buffer is empty
        """
        if self._size == 0:
            raise RuntimeError("Cannot sample from an empty replay buffer. Call push() first.")

        start = (self._position - self._size) % self.capacity
        indices = self.rng.integers(0, self._size, size=batch_size)
        return [self._transition_at((start + int(i)) % self.capacity) for i in indices]

    def __len__(self) -> int:
        return self._size

    def is_ready(self, min_size: int) -> bool:
        """Check if buffer holds at least min_size transitions."""
        return self._size >= min_size
