"""Logging configuration for commandtree."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from commandtree.utils.config import Config


def setup_logging(config: Config, console_output: bool = False) -> None:
    """
    Set up logging for commandtree.

    Calling this again for the same log file or console adds no handlers.

    Args:
        config: Application configuration
        console_output: Whether to output logs to console (default: False)
    """
    format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(format_str)

    # Console format is simpler (no timestamp)
    console_format = "%(levelname)s - %(name)s - %(message)s"
    console_formatter = logging.Formatter(console_format)

    root_logger = logging.getLogger("commandtree")
    root_logger.setLevel(logging.DEBUG)

    log_file = os.path.abspath(config.logging_path / f"{config.name}.log")
    has_file = any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == log_file
        for h in root_logger.handlers
    )
    if not has_file:
        config.logging_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=10000, backupCount=3)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(config.log_level)
        root_logger.addHandler(file_handler)

    has_console = any(
        type(h) is logging.StreamHandler and h.stream is sys.stdout
        for h in root_logger.handlers
    )
    if console_output and not has_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(config.log_level)
        root_logger.addHandler(console_handler)
