"""
Logging setup tests.
"""
import sys
import os
import logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from rich.logging import RichHandler
from crtsim.log_setup import setup_logging


@pytest.fixture
def fresh_logger_name(request):
    name = f"crtsim_test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetupLogging:
    def test_rich_console_handler(self, fresh_logger_name):
        logger = setup_logging(fresh_logger_name)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.handlers[0].level == logging.WARNING

    def test_plain_console_handler(self, fresh_logger_name):
        logger = setup_logging(fresh_logger_name, rich_console=False)
        handler = logger.handlers[0]
        assert type(handler) is logging.StreamHandler

    def test_idempotent(self, fresh_logger_name):
        first = setup_logging(fresh_logger_name)
        second = setup_logging(fresh_logger_name, console_level=logging.DEBUG)
        assert first is second
        assert len(second.handlers) == 1

    def test_log_file(self, fresh_logger_name, tmp_path):
        logger = setup_logging(fresh_logger_name, log_dir=tmp_path / "logs")
        logger.debug("tick %d", 7)
        for handler in logger.handlers:
            handler.flush()
        files = list((tmp_path / "logs").glob(f"{fresh_logger_name}_*.log"))
        assert len(files) == 1
        text = files[0].read_text(encoding="utf-8")
        assert "tick 7" in text
        assert "| DEBUG   |" in text

    def test_machine_cycles_are_logged(self, caplog):
        from crtsim.instructions import Addx
        from crtsim.machine import VirtualMachine
        with caplog.at_level(logging.DEBUG, logger="crtsim.machine"):
            VirtualMachine([Addx(4)]).run()
        messages = [r.getMessage() for r in caplog.records]
        assert "tick 1: addx 4 in flight (X=1)" in messages
        assert "tick 2: addx 4 retired (X=5)" in messages


class TestTeardownLogging:
    def test_removes_handlers(self, fresh_logger_name, tmp_path):
        from crtsim.log_setup import teardown_logging
        logger = setup_logging(fresh_logger_name, log_dir=tmp_path)
        assert len(logger.handlers) == 2
        teardown_logging(logger)
        assert logger.handlers == []
        # A fresh setup now builds new handlers with the new level
        logger = setup_logging(fresh_logger_name, console_level=logging.DEBUG)
        assert logger.handlers[0].level == logging.DEBUG

    def test_keep(self, fresh_logger_name):
        from crtsim.log_setup import teardown_logging
        logger = setup_logging(fresh_logger_name)
        kept = logger.handlers[0]
        extra = logging.NullHandler()
        logger.addHandler(extra)
        teardown_logging(logger, keep=[kept])
        assert logger.handlers == [kept]
