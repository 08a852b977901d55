# tests/test_logging.py
from __future__ import annotations

import logging

from rich.logging import RichHandler

from tetris_arcade.utils.logging import setup_logger


def test_setup_logger_installs_single_rich_handler() -> None:
    log = setup_logger(name="tetris_arcade.test_a", level="debug")
    log = setup_logger(name="tetris_arcade.test_a", level="warning")
    assert len(log.handlers) == 1
    assert isinstance(log.handlers[0], RichHandler)
    assert log.level == logging.WARNING
    assert log.propagate is False


def test_setup_logger_plain_handler_and_unknown_level() -> None:
    log = setup_logger(name="tetris_arcade.test_b", use_rich=False, level="nonsense")
    assert len(log.handlers) == 1
    assert type(log.handlers[0]) is logging.StreamHandler
    assert log.level == logging.INFO
