"""Utility modules for the scalar DQN project."""

from .logger import get_logger, setup_logging, reset_logging, LogLevel

__all__ = ['get_logger', 'setup_logging', 'reset_logging', 'LogLevel']
