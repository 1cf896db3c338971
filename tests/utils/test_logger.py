"""Tests for the Rich component logger."""

import logging

import pytest

from wren.utils.logger import ComponentLogger, get_logger


class TestComponentLogger:
    def test_component_logger_creation(self):
        logger = get_logger("commands")

        assert isinstance(logger, ComponentLogger)
        assert logger.component_name == "commands"
        assert logger.name == "wren.commands"

    def test_component_color_from_config(self):
        assert get_logger("autocomplete").color == "magenta"

    def test_unknown_component_defaults_to_white(self):
        assert get_logger("unlisted").color == "white"

    def test_custom_logger(self):
        logger = get_logger(name="custom_logger", color="blue")

        assert logger.component_name == "custom_logger"
        assert logger.color == "blue"
        assert logger.name == "custom_logger"

    def test_name_required(self):
        with pytest.raises(ValueError, match="Component name is required"):
            get_logger()

    def test_logging_methods(self):
        logger = get_logger("commands")

        logger.info("Info message")
        logger.debug("Debug message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.success("Success message")
        logger.key_info("Key info message")
        logger.timing("Timing message")
        logger.critical("Critical message")
        logger.log(logging.INFO, "Plain %s", "message")

    def test_messages_reach_base_logger(self, caplog):
        logger = get_logger("history")

        with caplog.at_level(logging.INFO, logger="wren.history"):
            logger.success("Saved")
            logger.warning("Almost full")

        messages = [record.getMessage() for record in caplog.records]
        assert any("History: Saved" in m for m in messages)
        assert any("Almost full" in m for m in messages)

    def test_level_passthrough(self):
        logger = get_logger("composer")
        logger.setLevel(logging.DEBUG)

        assert logger.level == logging.DEBUG
        assert logger.isEnabledFor(logging.DEBUG)
