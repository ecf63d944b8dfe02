#!/usr/bin/env python3
"""
Scalar DQN - Main Entry Point
=============================

Headless DQN training on the reference corridor environment.

Usage:
    # Train with defaults (500 episodes)
    python main.py

    # Reproducible run with a seed
    python main.py --episodes 300 --seed 42

    # Smaller batches and more verbose logs
    python main.py --batch-size 16 --epochs 5 --log-level DEBUG

    # Play 5 greedy episodes after training
    python main.py --episodes 200 --evaluate 5

Press Ctrl+C to stop training early; a summary is still logged.
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

import numpy as np

from config import Config
from scalardqn.ai.agent import Agent
from scalardqn.ai.trainer import Trainer
from scalardqn.env import CorridorEnv
from scalardqn.utils.logger import LogLevel, get_log_path, get_logger, setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Scalar DQN - Deep Q-Learning on a hand-rolled autodiff engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES
========
    python main.py --episodes 300 --seed 42
    python main.py --corridor-length 8 --evaluate 5
    python main.py --log-level DEBUG --no-file-log
        """
    )

    parser.add_argument(
        '--episodes', type=int, default=500,
        help='Number of training episodes (0 = run until interrupted)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for weight init, exploration and replay sampling'
    )
    parser.add_argument(
        '--lr', type=float, default=None,
        help='RMSProp learning rate'
    )
    parser.add_argument(
        '--batch-size', type=int, default=None,
        help='Transitions per gradient step'
    )
    parser.add_argument(
        '--epochs', type=int, default=None,
        help='Gradient steps per finished episode'
    )
    parser.add_argument(
        '--memory-min', type=int, default=None,
        help='Transitions required before learning starts'
    )
    parser.add_argument(
        '--corridor-length', type=int, default=None,
        help='Number of cells in the corridor'
    )
    parser.add_argument(
        '--evaluate', type=int, default=0, metavar='K',
        help='Play K greedy episodes after training and report scores'
    )
    parser.add_argument(
        '--log-level', type=str, default=None,
        choices=[level.name for level in LogLevel],
        help='Console log level'
    )
    parser.add_argument(
        '--no-file-log', action='store_true',
        help='Do not write a log file'
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Apply CLI overrides on top of the defaults."""
    overrides: Dict[str, Any] = {'MAX_EPISODES': args.episodes, 'SEED': args.seed}
    if args.lr is not None:
        overrides['LEARNING_RATE'] = args.lr
    if args.batch_size is not None:
        overrides['BATCH_SIZE'] = args.batch_size
    if args.epochs is not None:
        overrides['EPOCHS'] = args.epochs
    if args.memory_min is not None:
        overrides['MEMORY_MIN'] = args.memory_min
    if args.corridor_length is not None:
        overrides['CORRIDOR_LENGTH'] = args.corridor_length
    if args.log_level is not None:
        overrides['LOG_LEVEL'] = args.log_level
    return Config(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)

    setup_logging(
        log_dir=config.LOG_DIR,
        level=LogLevel[config.LOG_LEVEL],
        file_output=not args.no_file_log,
        force=True,
    )
    logger = get_logger('main')

    rng = np.random.default_rng(config.SEED)
    env = CorridorEnv(length=config.CORRIDOR_LENGTH)
    agent = Agent(env.state_size, env.action_size, config, rng=rng)
    trainer = Trainer(env, agent, config)

    logger.info(
        f"Corridor length={config.CORRIDOR_LENGTH} | lr={config.LEARNING_RATE} | "
        f"batch={config.BATCH_SIZE}x{config.EPOCHS} | gamma={config.GAMMA} | seed={config.SEED}"
    )

    try:
        trainer.train(config.MAX_EPISODES)
    except KeyboardInterrupt:
        logger.warning(f"Training interrupted by user | {trainer.status_line()}")

    if args.evaluate > 0:
        results = trainer.evaluate(args.evaluate)
        logger.info(
            f"Evaluation over {args.evaluate} episodes | "
            f"mean={results['mean_score']:.2f} | max={results['max_score']:.2f} | "
            f"min={results['min_score']:.2f}"
        )

    log_path = get_log_path()
    if log_path is not None:
        logger.info(f"Log written to {log_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
