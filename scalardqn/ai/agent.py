"""
DQN Agent
=========

The agent that learns a discrete control policy with Deep Q-Learning, on top
of the scalar autodiff network.

Key Components:
    1. Policy Network  - Used for action selection, trained by RMSProp
    2. Target Network  - Frozen copy used for bootstrapped targets
    3. Replay Buffer   - Stores transitions for training
    4. Epsilon-Greedy  - Balances exploration vs exploitation

Training Algorithm (DQN):
    1. Observe state s
    2. Choose action a (epsilon-greedy, epsilon decays with the episode index)
    3. Execute action, observe reward r and next state s'
    4. Store (s, a, r, s', done) in replay buffer
    5. After each episode, for EPOCHS rounds:
         sample a mini-batch (uniform, with replacement)
         y = r + γ * max_a' Q_target(s', a')   (y = r on terminal steps)
         minimize mean smooth-L1(Q(s, a), y)
    6. Every TARGET_SYNC_EVERY episodes copy policy weights into the target

All randomness (weight init, exploration, sampling) flows from one injectable
numpy Generator.

References:
    Mnih et al., 2015 - "Human-level control through deep reinforcement learning"
"""

import math
from collections import deque
from typing import Deque, List, Optional, Sequence

import numpy as np

from config import Config

from ..autograd import Network, RMSProp, ScalarNode, get_activation, normal_initializer, sum_nodes
from ..utils.logger import get_logger
from .losses import smooth_l1
from .replay_buffer import ReplayBuffer, Transition

logger = get_logger(__name__)


def epsilon_threshold(step: int, start: float, end: float, decay: float) -> float:
    """
    Exploration probability after `step` decay ticks.

        eps(step) = end + (start - end) * exp(-step / decay)

    Monotonically decreasing from `start` toward `end`.
    """
    return end + (start - end) * math.exp(-step / decay)


def argmax(values: Sequence[float]) -> int:
    """Index of the largest value; ties go to the first occurrence."""
    best = 0
    for i in range(1, len(values)):
        if values[i] > values[best]:
            best = i
    return best


class Agent:
    """
    DQN Agent for reinforcement learning.

    The agent maintains two networks of identical shape:
        - policy_net: Updated by every learn() call
        - target_net: Updated only by update_target_network()

    Action Selection:
        - Draw u ~ U[0, 1)
        - u > epsilon: best Q-value action (exploitation)
        - otherwise:   uniformly random action (exploration)

    Attributes:
        policy_net: Network used for action selection
        target_net: Network used for computing targets
        optimizer: RMSProp bound to policy_net.parameters()
        memory: Experience replay buffer
        epsilon: Exploration threshold from the last select_action() call

    Example:
        >>> agent = Agent(state_size=3, action_size=3, rng=np.random.default_rng(0))
        >>> action = agent.select_action(state, episode=0)
        >>> agent.remember(state, action, reward, next_state, done)
        >>> loss = agent.learn()
    """

    def __init__(
        self,
        state_size: int,
        action_size: int,
        config: Optional[Config] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the DQN agent.

        Args:
            state_size: Dimension of state vector
            action_size: Number of possible actions
            config: Configuration object
            rng: Random source (seeded from config.SEED if None)
        """
        self.config = config or Config()
        self.state_size = state_size
        self.action_size = action_size
        self.rng = rng if rng is not None else np.random.default_rng(self.config.SEED)

        shape = [state_size] + list(self.config.HIDDEN_LAYERS) + [action_size]
        initializer = normal_initializer(self.rng, self.config.INIT_MEAN, self.config.INIT_STD)
        activation = get_activation(self.config.ACTIVATION)

        # Networks
        self.policy_net = Network(shape, initializer, activation)
        self.target_net = Network(shape, initializer, activation)
        self.target_net.load_state_values(self.policy_net.state_values())

        # Optimizer (bound once; accumulators follow policy_net.parameters() order)
        self.optimizer = RMSProp(
            self.policy_net.parameters(),
            learning_rate=self.config.LEARNING_RATE,
            beta=self.config.RMSPROP_BETA,
            epsilon=self.config.RMSPROP_EPSILON
        )

        self.memory = ReplayBuffer(
            capacity=self.config.MEMORY_SIZE,
            state_size=state_size,
            rng=self.rng
        )

        # Exploration
        self.epsilon = self.config.EPSILON_START
        self._last_action_explored = False

        # Gradient steps performed and target copies made
        self.steps = 0
        self.target_syncs = 0

        # Training metrics (bounded to prevent memory growth during long training)
        self.losses: Deque[float] = deque(maxlen=self.config.LOSS_HISTORY)

        logger.debug(
            f"Agent created: shape={shape}, parameters={self.policy_net.num_parameters}"
        )

    # =========================================================================
    # ACTING
    # =========================================================================

    def epsilon_at(self, episode: int) -> float:
        """Exploration threshold for a given episode index."""
        return epsilon_threshold(
            episode,
            self.config.EPSILON_START,
            self.config.EPSILON_END,
            self.config.EPSILON_DECAY
        )

    def select_action(self, state: Sequence[float], episode: int = 0, training: bool = True) -> int:
        """
        Select an action using the epsilon-greedy policy.

        Args:
            state: Current environment state
            episode: Decay counter for the exploration schedule
            training: If True, use exploration; if False, always greedy

        Returns:
            Selected action index

        Raises:
            ValueError: If len(state) differs from the network input width
        """
        if not training:
            self._last_action_explored = False
            return argmax(self.get_q_values(state))

        self.epsilon = self.epsilon_at(episode)
        if self.rng.random() > self.epsilon:
            self._last_action_explored = False
            return argmax(self.get_q_values(state))

        self._last_action_explored = True
        return int(self.rng.integers(self.action_size))

    def get_q_values(self, state: Sequence[float]) -> List[float]:
        """
        Get Q-values for all actions (useful for display).

        Args:
            state: Current environment state

        Returns:
            Q-value for each action
        """
        return [q.value for q in self.policy_net.forward(state)]

    def remember(
        self,
        state: Sequence[float],
        action: int,
        reward: float,
        next_state: Sequence[float],
        done: bool
    ) -> None:
        """
        Store a transition in replay memory.

        Raises:
            ValueError: If action is outside [0, action_size)
        """
        if not 0 <= action < self.action_size:
            raise ValueError(f"Action must be in [0, {self.action_size}), got {action}")
        self.memory.push(state, action, reward, next_state, done)

    # =========================================================================
    # LEARNING
    # =========================================================================

    def td_target(self, transition: Transition) -> float:
        """
        Bootstrapped target r + γ * max_a' Q_target(s', a').

        Terminal transitions use the immediate reward only. The result is a
        plain float, so no gradient flows into the target network.
        """
        if transition.done:
            return transition.reward
        next_q = [q.value for q in self.target_net.forward(transition.next_state)]
        return transition.reward + self.config.GAMMA * max(next_q)

    def compute_loss(self, batch: Sequence[Transition]) -> ScalarNode:
        """
        Mean smooth-L1 loss of the policy network over a mini-batch.

        Returns:
            Loss node whose graph reaches every policy parameter
        """
        per_example = []
        for transition in batch:
            prediction = self.policy_net.forward(transition.state)[transition.action]
            per_example.append(smooth_l1(prediction, self.td_target(transition)))
        return sum_nodes(per_example) / len(per_example)

    def learn(self) -> float:
        """
        Run EPOCHS gradient steps on random mini-batches.

        Returns:
            Mean loss across the epochs

        Raises:
            RuntimeError: If replay memory is empty
        """
        total_loss = 0.0
        for _ in range(self.config.EPOCHS):
            total_loss += self._learn_step_internal()
        return total_loss / self.config.EPOCHS

    def _learn_step_internal(self) -> float:
        """Single sample -> loss -> zero_grad -> backward -> step cycle."""
        batch = self.memory.sample(self.config.BATCH_SIZE)
        loss = self.compute_loss(batch)

        self.policy_net.zero_grad()
        loss.backward()
        self.optimizer.step()

        self.steps += 1
        loss_value = loss.value
        if not math.isfinite(loss_value):
            logger.warning(f"Non-finite loss at gradient step {self.steps}: {loss_value}")
        self.losses.append(loss_value)
        return loss_value

    def update_target_network(self) -> None:
        """Hard update: copy policy network values into the target network."""
        self.target_net.load_state_values(self.policy_net.state_values())
        self.target_syncs += 1
        logger.debug(f"Target network synced (#{self.target_syncs}, step {self.steps})")

    def get_average_loss(self, n: int = 100) -> Optional[float]:
        """Average of the last n recorded losses, None before any training."""
        if not self.losses:
            return None
        recent = list(self.losses)[-n:]
        return sum(recent) / len(recent)
