"""Tests for the console logger."""

import io

import pytest

from chix8 import execute
from chix8.logging import ConsoleLogger


def make_logger(level="INFO"):
    stream = io.StringIO()
    return ConsoleLogger(log_level=level, show_timestamps=False, stream=stream), stream


def test_levels_filtered():
    logger, stream = make_logger("ERROR")
    logger.info("hidden")
    logger.debug("also hidden")
    logger.error("shown")
    output = stream.getvalue()
    assert "hidden" not in output
    assert "[   ERROR][chix8] shown" in output


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        ConsoleLogger(log_level="CRITICAL")


def test_debug_level_shows_everything():
    logger, stream = make_logger("debug")
    logger.debug("detail")
    assert "[   DEBUG][chix8] detail" in stream.getvalue()


def test_no_colors_when_not_a_tty():
    logger, stream = make_logger()
    logger.info("plain")
    assert "\033[" not in stream.getvalue()


def test_log_config_formats_colors():
    logger, stream = make_logger()
    logger.log_config({"fg_color": 0xFF, "scale": 20})
    output = stream.getvalue()
    assert "fg_color: 0x000000FF" in output
    assert "scale: 20" in output


def test_log_machine(fresh_state):
    logger, stream = make_logger("DEBUG")
    state = execute(fresh_state, 0x6A42)
    logger.log_machine(state)
    output = stream.getvalue()
    assert "PC=0x200" in output
    assert "VA=42" in output
