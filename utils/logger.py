"""Logging utilities for Chemion glasses SDK"""
import os
import logging
import re
from rich.console import Console
from rich.logging import RichHandler
from typing import Optional

from utils.config import Config
from utils.constants import LOGGER_NAME

# Global console instance
_console: Optional[Console] = None

_MARKUP = re.compile(r"\[/?[a-z_ ]+\]")


def get_console() -> Console:
    """Get or create global console instance"""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_logger() -> logging.Logger:
    """SDK logger, configured or not"""
    return logging.getLogger(LOGGER_NAME)


def setup_logger(config: Optional[Config] = None) -> logging.Logger:
    """Set up logger with rich handler"""
    logger = get_logger()

    if not logger.handlers:  # Only add handlers if none exist
        # Base level DEBUG, handlers filter
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        # File handler - logs everything with detailed formatting
        if config and config.log_file:
            os.makedirs(os.path.dirname(os.path.abspath(config.log_file)), exist_ok=True)
            mode = 'w' if config.reset_logs else 'a'
            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
            )
            file_handler = logging.FileHandler(config.log_file, mode=mode)
            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)

        # Console handler with rich formatting
        if config is None or config.console_log:
            console_handler = RichHandler(
                rich_tracebacks=True,
                markup=True,
                show_time=False,  # Time shown in file logs only
                show_path=False,
                console=get_console(),
            )
            level = config.log_level if config else logging.INFO
            console_handler.setLevel(level)
            logger.addHandler(console_handler)

        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

    return logger


def strip_markup(message: str) -> str:
    """Remove rich markup tags"""
    return _MARKUP.sub("", message)


def user_guidance(logger: logging.Logger, message: str):
    """Log user guidance messages without duplication"""
    logger.info(message, extra={"markup": True})

    # File gets plain text
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        logger.debug(strip_markup(message), extra={"markup": False})
