"""
Logging configuration for the PC Build Validator.

Everything logs under the ``pc_build_validator`` logger. Library use stays
silent until an application calls setup_logging(); the CLI does so from the
``logging`` section of the configuration file, with command-line flags taking
precedence.
"""

import logging
import os
import sys
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import LoggingConfig

ROOT_LOGGER_NAME = 'pc_build_validator'

SIMPLE_FORMAT = '%(levelname)s - %(message)s'
DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log levels."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def format(self, record):
        # Other handlers share the record; restore the plain level name
        original_levelname = record.levelname
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


def _stream_supports_color(stream) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    return hasattr(stream, 'isatty') and stream.isatty()


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Set up logging for the application.

    Console output goes to stderr so reports printed on stdout stay
    machine-readable. Calling this again replaces the previous handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file that receives every record
        verbose: Use the detailed format (timestamp, logger, source line) on the console

    Returns:
        Configured package logger
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_format = DETAILED_FORMAT if verbose else SIMPLE_FORMAT
    if _stream_supports_color(sys.stderr):
        console_handler.setFormatter(ColoredFormatter(console_format))
    else:
        console_handler.setFormatter(logging.Formatter(console_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        logger.addHandler(file_handler)
        # The file gets debug records even when the console is quieter
        logger.setLevel(min(numeric_level, logging.DEBUG))

    return logger


def setup_logging_from_config(logging_config: 'LoggingConfig', level: Optional[str] = None,
                              log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Set up logging from the configuration file's logging section.

    Args:
        logging_config: LoggingConfig loaded from YAML (or defaults)
        level: Command-line level, overriding the configured one
        log_file: Command-line log file, overriding the configured one
        verbose: Command-line verbose flag, combined with the configured one

    Returns:
        Configured package logger
    """
    return setup_logging(
        level=level or logging_config.level,
        log_file=log_file or logging_config.log_file,
        verbose=verbose or logging_config.verbose,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Name of the module/logger

    Returns:
        Logger instance
    """
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
