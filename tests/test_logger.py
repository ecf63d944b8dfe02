"""
Tests for the logging utilities.
"""

import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scalardqn.utils.logger import (
    ROOT_LOGGER_NAME, LogLevel, get_log_path, get_logger, log_training_metrics,
    reset_logging, setup_logging,
)


class TestGetLogger:
    """Test logger naming."""

    def test_prefixes_namespace(self):
        assert get_logger('training').name == 'scalardqn.training'

    def test_keeps_package_names(self):
        assert get_logger('scalardqn.ai.agent').name == 'scalardqn.ai.agent'
        assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME


class TestTrainingMetrics:
    """Test the metrics line format."""

    def test_full_line(self, caplog):
        with caplog.at_level(logging.INFO, logger=ROOT_LOGGER_NAME):
            log_training_metrics(3, 1.5, 0.1, loss=0.25, steps=7, buffer_size=12)
        assert "ep=3 | score=1.50 | eps=0.1000 | loss=0.250000 | steps=7 | memory=12" in caplog.text

    def test_optional_fields_omitted(self, caplog):
        with caplog.at_level(logging.INFO, logger=ROOT_LOGGER_NAME):
            log_training_metrics(0, -10.0, 0.2)
        assert "ep=0 | score=-10.00 | eps=0.2000" in caplog.text
        assert "loss=" not in caplog.text


class TestSetupLogging:
    """Test handler configuration."""

    def test_file_output(self, tmp_path):
        try:
            setup_logging(
                log_dir=str(tmp_path), level=LogLevel.WARNING, console_output=False,
                log_filename='run.log', force=True
            )
            get_logger('test').debug("written at debug")
            path = get_log_path()
            assert path == tmp_path / 'run.log'
            for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
                handler.flush()
            assert "written at debug" in path.read_text(encoding='utf-8')
        finally:
            reset_logging()

    def test_second_call_is_noop(self):
        try:
            setup_logging(file_output=False, force=True)
            handlers = list(logging.getLogger(ROOT_LOGGER_NAME).handlers)
            setup_logging(file_output=False, console_output=False)
            assert logging.getLogger(ROOT_LOGGER_NAME).handlers == handlers
        finally:
            reset_logging()

    def test_reset_removes_handlers(self):
        setup_logging(file_output=False, force=True)
        reset_logging()
        assert logging.getLogger(ROOT_LOGGER_NAME).handlers == []
        assert get_log_path() is None

    def test_no_output_gets_null_handler(self):
        try:
            setup_logging(console_output=False, file_output=False, force=True)
            handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
            assert len(handlers) == 1
            assert isinstance(handlers[0], logging.NullHandler)
        finally:
            reset_logging()
