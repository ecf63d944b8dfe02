"""
Training Loop
=============

Orchestrates the training process:
    1. Run episodes in the environment
    2. Collect transitions
    3. Train the agent once per finished episode
    4. Sync the target network on a fixed episode cadence
    5. Track metrics

This module ties together the environment and the agent. Rendering and
display pacing belong to the caller; status_line() gives it text to show.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from config import Config

from ..env.base_env import BaseEnvironment
from ..utils.logger import get_logger, log_training_metrics
from .agent import Agent

logger = get_logger(__name__)


@dataclass
class EpisodeStats:
    """Statistics for a single episode."""
    episode: int
    score: float
    steps: int
    epsilon: float
    avg_loss: Optional[float]
    duration: float
    trained: bool = False
    target_synced: bool = False


class TrainingMetrics:
    """
    Tracks and stores training metrics over time.

    Metrics tracked:
        - Episode scores (total reward)
        - Steps per episode
        - Loss values (None for episodes without training)
        - Epsilon values
        - Episode durations
    """

    def __init__(self, history_length: int = 1000):
        """
        Initialize metrics tracker.

        Args:
            history_length: Maximum history to store
        """
        self.history_length = history_length

        self.scores: List[float] = []
        self.steps: List[int] = []
        self.losses: List[Optional[float]] = []
        self.epsilons: List[float] = []
        self.durations: List[float] = []

    def add(self, stats: EpisodeStats) -> None:
        """Add episode statistics."""
        self.scores.append(stats.score)
        self.steps.append(stats.steps)
        self.losses.append(stats.avg_loss)
        self.epsilons.append(stats.epsilon)
        self.durations.append(stats.duration)

        # Trim to history length
        if len(self.scores) > self.history_length:
            for attr in ['scores', 'steps', 'losses', 'epsilons', 'durations']:
                setattr(self, attr, getattr(self, attr)[-self.history_length:])

    def get_recent_average(self, metric: str, n: int = 100) -> Optional[float]:
        """Average of the last n recorded values of a metric (None if there are none)."""
        values = [v for v in getattr(self, metric, [])[-n:] if v is not None]
        if not values:
            return None
        return sum(values) / len(values)

    def get_best_score(self) -> Optional[float]:
        """Get the highest score achieved."""
        return max(self.scores) if self.scores else None


class Trainer:
    """
    Manages the training loop for the DQN agent.

    Per episode:
        - act/step/remember until done (or MAX_STEPS_PER_EPISODE)
        - learn() once if memory holds at least MEMORY_MIN transitions
        - sync the target network when episode % TARGET_SYNC_EVERY == 0

    Example:
        >>> env = CorridorEnv()
        >>> agent = Agent(env.state_size, env.action_size)
        >>> trainer = Trainer(env, agent)
        >>> trainer.train(num_episodes=500)
    """

    def __init__(
        self,
        env: BaseEnvironment,
        agent: Agent,
        config: Optional[Config] = None
    ):
        """
        Initialize the trainer.

        Args:
            env: Environment instance (implements BaseEnvironment)
            agent: DQN agent instance
            config: Configuration object (defaults to the agent's)

        Raises:
            ValueError: If env and agent disagree on state/action sizes,
                        or env sizes differ from config STATE_SIZE/ACTION_SIZE
        """
        if env.state_size != agent.state_size:
            raise ValueError(
                f"Environment state size {env.state_size} != agent state size {agent.state_size}"
            )
        if env.action_size != agent.action_size:
            raise ValueError(
                f"Environment action size {env.action_size} != agent action size {agent.action_size}"
            )
        self.env = env
        self.agent = agent
        self.config = config or agent.config
        if (env.state_size, env.action_size) != (self.config.STATE_SIZE, self.config.ACTION_SIZE):
            raise ValueError(
                f"Config expects state size {self.config.STATE_SIZE} and action size "
                f"{self.config.ACTION_SIZE}, environment has {env.state_size} and {env.action_size}"
            )

        self.metrics = TrainingMetrics(self.config.PLOT_HISTORY_LENGTH)
        self.current_episode = 0
        self.current_score = 0.0
        self.total_steps = 0

    def run_episode(self, episode: int) -> EpisodeStats:
        """
        Run a single episode and the per-episode training/sync work.

        Args:
            episode: Episode index (also the exploration decay counter)

        Returns:
            Episode statistics
        """
        start_time = time.time()
        self.current_episode = episode
        self.current_score = 0.0

        state = self.env.reset()
        steps = 0
        done = False

        while not done and steps < self.config.MAX_STEPS_PER_EPISODE:
            action = self.agent.select_action(state, episode=episode, training=True)
            next_state, reward, done = self.env.step(action)

            self.agent.remember(state, action, reward, next_state, done)

            state = next_state
            self.current_score += reward
            steps += 1
            self.total_steps += 1

        avg_loss = None
        if self.agent.memory.is_ready(self.config.MEMORY_MIN):
            avg_loss = self.agent.learn()

        synced = episode % self.config.TARGET_SYNC_EVERY == 0
        if synced:
            self.agent.update_target_network()

        return EpisodeStats(
            episode=episode,
            score=self.current_score,
            steps=steps,
            epsilon=self.agent.epsilon,
            avg_loss=avg_loss,
            duration=time.time() - start_time,
            trained=avg_loss is not None,
            target_synced=synced
        )

    def train(
        self,
        num_episodes: Optional[int] = None,
        progress_callback: Optional[Callable[[EpisodeStats], None]] = None
    ) -> TrainingMetrics:
        """
        Run the training loop.

        Args:
            num_episodes: Number of episodes (default from config; 0 = unlimited)
            progress_callback: Called with the stats of every finished episode

        Returns:
            Training metrics
        """
        num_episodes = self.config.MAX_EPISODES if num_episodes is None else num_episodes

        logger.info(
            f"Starting DQN training | episodes={num_episodes or 'unlimited'} | "
            f"shape={self.agent.policy_net.shape} | "
            f"parameters={self.agent.policy_net.num_parameters}"
        )

        episode = 0
        while num_episodes == 0 or episode < num_episodes:
            stats = self.run_episode(episode)
            self.metrics.add(stats)

            if episode % self.config.LOG_EVERY == 0:
                log_training_metrics(
                    episode=episode,
                    score=stats.score,
                    epsilon=stats.epsilon,
                    loss=stats.avg_loss,
                    steps=stats.steps,
                    buffer_size=len(self.agent.memory),
                )

            if progress_callback:
                progress_callback(stats)
            episode += 1

        best = self.metrics.get_best_score()
        logger.info(
            f"Training complete | episodes={episode} | total_steps={self.total_steps} | "
            f"gradient_steps={self.agent.steps} | best_score={best if best is None else round(best, 2)}"
        )
        return self.metrics

    def evaluate(self, num_episodes: int = 10) -> Dict[str, float]:
        """
        Evaluate the agent greedily, without exploration or learning.

        Args:
            num_episodes: Number of evaluation episodes

        Returns:
            Evaluation statistics

        Raises:
            ValueError: If num_episodes < 1
        """
        if num_episodes < 1:
            raise ValueError(f"Need at least one evaluation episode, got {num_episodes}")

        scores = []
        for _ in range(num_episodes):
            state = self.env.reset()
            score = 0.0
            done = False
            steps = 0
            while not done and steps < self.config.MAX_STEPS_PER_EPISODE:
                action = self.agent.select_action(state, training=False)
                state, reward, done = self.env.step(action)
                score += reward
                steps += 1
            scores.append(score)

        return {
            'mean_score': sum(scores) / len(scores),
            'max_score': max(scores),
            'min_score': min(scores),
        }

    def status_line(self) -> str:
        """Short textual status for an outer display loop."""
        return (
            f"Episode: {self.current_episode}, Score: {self.current_score:.2f}, "
            f"Epsilon: {self.agent.epsilon:.4f}"
        )
