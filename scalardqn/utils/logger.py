"""
Centralized logging infrastructure for the scalar DQN project.

Usage:
    from scalardqn.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Training started")
    logger.debug("Epsilon: 0.19")
    logger.warning("Loss is not finite")

Configuration:
    Set LOG_LEVEL in config.py (or --log-level on the CLI) to control verbosity:
    - DEBUG: All messages including target syncs
    - INFO: Normal operation messages (default)
    - WARNING: Warnings and errors only
    - ERROR: Errors only
"""

import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = 'scalardqn'


class LogLevel(Enum):
    """Log levels for configuration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


# Module-level state
_initialized = False
_log_dir: Optional[Path] = None
_file_handler: Optional[logging.FileHandler] = None


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m',
    }

    def __init__(self, fmt: str, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors:
            # Color a copy so the file handler still sees the plain level name
            record = logging.makeLogRecord(record.__dict__)
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            record.levelname = f"{color}{record.levelname}{self.COLORS['RESET']}"
        return super().format(record)


def setup_logging(
    log_dir: str = 'logs',
    level: LogLevel = LogLevel.INFO,
    console_output: bool = True,
    file_output: bool = True,
    log_filename: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initialize the logging system. Later calls are no-ops unless force is set.

    Args:
        log_dir: Directory for log files
        level: Minimum log level shown on the console
        console_output: Whether to output to console
        file_output: Whether to output to file
        log_filename: Custom log filename (default: training_YYYYMMDD_HHMMSS.log)
        force: Replace an earlier (e.g. auto-initialized) configuration
    """
    global _initialized, _log_dir, _file_handler

    if _initialized:
        if not force:
            return
        reset_logging()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG if file_output else level.value)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            use_colors=True
        ))
        root_logger.addHandler(console_handler)

    if file_output:
        _log_dir = Path(log_dir)
        _log_dir.mkdir(parents=True, exist_ok=True)
        if log_filename is None:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            log_filename = f'training_{timestamp}.log'

        _file_handler = logging.FileHandler(_log_dir / log_filename, mode='a', encoding='utf-8')
        _file_handler.setLevel(logging.DEBUG)  # Capture everything in file
        _file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        ))
        root_logger.addHandler(_file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    _initialized = True
    root_logger.debug(f"Logging initialized (level={level.name}, file={file_output})")


def reset_logging() -> None:
    """Detach all handlers so setup_logging() can be called again."""
    global _initialized, _log_dir, _file_handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    _initialized = False
    _log_dir = None
    _file_handler = None


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger under the 'scalardqn' namespace

    Example:
        logger = get_logger(__name__)
        logger.info("Message")
    """
    # Auto-initialize console-only; the CLI enables file output explicitly
    if not _initialized:
        setup_logging(file_output=False)

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def get_log_path() -> Optional[Path]:
    """Get the current log file path."""
    if _file_handler is not None:
        return Path(_file_handler.baseFilename)
    return None


def log_training_metrics(
    episode: int,
    score: float,
    epsilon: float,
    loss: Optional[float] = None,
    steps: Optional[int] = None,
    buffer_size: Optional[int] = None,
) -> None:
    """
    Log training metrics in a consistent format.

    Args:
        episode: Current episode number
        score: Episode total reward
        epsilon: Exploration threshold used for the episode
        loss: Mean training loss (if training ran)
        steps: Steps in episode (if available)
        buffer_size: Transitions currently in replay memory
    """
    logger = get_logger('training')

    metrics = [
        f"ep={episode}",
        f"score={score:.2f}",
        f"eps={epsilon:.4f}",
    ]

    if loss is not None:
        metrics.append(f"loss={loss:.6f}")
    if steps is not None:
        metrics.append(f"steps={steps}")
    if buffer_size is not None:
        metrics.append(f"memory={buffer_size}")

    logger.info(" | ".join(metrics))
