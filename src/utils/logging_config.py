"""
Logging Configuration Module for the Medical Code Extraction Pipeline

Configures loguru for console and external file logging to the logs/
directory with rotation, retention, and consistent formatting across all
pipeline stages.

Console output is split by severity: progress messages go to stdout,
warnings (such as skipped PDF lines) and errors go to stderr.
"""

import sys
from datetime import datetime
from typing import Any
from loguru import logger as _logger

from src.config import (
    LOG_LEVEL,
    LOGS_DIR,
)


# File format: Full timestamp with source location
FILE_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

# Console format: Short timestamp without source location
CONSOLE_LOG_FORMAT = "{time:HH:mm:ss} | {level: <8} | {message}"

WARNING_LEVEL_NO = _logger.level("WARNING").no


def _below_warning(record: dict) -> bool:
    return record["level"].no < WARNING_LEVEL_NO


def setup_logger() -> Any:
    """
    Configure loguru logger with split console output and dual file outputs.

    Console:
    - stdout: messages below WARNING (progress, statistics)
    - stderr: WARNING and above (skipped lines, failures)

    Creates two log files:
    1. extraction_{timestamp}.log - All log messages (10MB rotation, keep 10 files)
    2. errors_{timestamp}.log - Error/Critical only (5MB rotation, keep 20 files)

    Returns:
        Configured loguru logger instance

    Example:
        >>> from src.utils.logging_config import setup_logger
        >>> logger = setup_logger()
        >>> logger.info("Starting extraction")
    """
    # Remove default handler to avoid duplicate logs
    _logger.remove()

    # Create logs directory if it doesn't exist
    LOGS_DIR.mkdir(parents=True, exist_ok=True)

    # Generate timestamp for log filenames
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    _logger.add(
        sys.stdout,
        format=CONSOLE_LOG_FORMAT,
        level=LOG_LEVEL,
        filter=_below_warning,
        colorize=True,
    )
    _logger.add(
        sys.stderr,
        format=CONSOLE_LOG_FORMAT,
        level="WARNING",
        colorize=True,
    )

    # Add main log file handler (all messages)
    extraction_log = LOGS_DIR / f"extraction_{timestamp}.log"
    _logger.add(
        extraction_log,
        format=FILE_LOG_FORMAT,
        level=LOG_LEVEL,
        rotation="10 MB",  # Rotate when file reaches 10MB
        retention=10,  # Keep 10 log files
        compression="zip",  # Compress old log files
    )

    # Add error log file handler (errors and critical only)
    error_log = LOGS_DIR / f"errors_{timestamp}.log"
    _logger.add(
        error_log,
        format=FILE_LOG_FORMAT,
        level="ERROR",  # Only ERROR and CRITICAL messages
        rotation="5 MB",
        retention=20,
        compression="zip",
    )

    _logger.debug(f"Logging configured: {extraction_log}")
    _logger.debug(f"Error logging configured: {error_log}")

    return _logger


def get_logger(name: str) -> Any:
    """
    Get a logger instance with context binding for a specific module.

    Args:
        name: Name identifier for the logger context (typically module name)

    Returns:
        Logger instance bound to the given name

    Example:
        >>> logger = get_logger("icdo3_extraction")
        >>> logger.info("Line stream recovered")
    """
    return _logger.bind(name=name)


def log_step_start(step_name: str) -> None:
    """
    Log the start of a pipeline stage with consistent formatting.

    Args:
        step_name: Name of the pipeline stage (e.g., "ICD-O-3 Extraction")
    """
    _logger.info("=" * 80)
    _logger.info(f"STARTING: {step_name}")
    _logger.info("=" * 80)


def log_step_complete(step_name: str, duration: float) -> None:
    """
    Log the completion of a pipeline stage with duration.

    Args:
        step_name: Name of the pipeline stage
        duration: Duration in seconds (use time.time() difference)
    """
    _logger.success(f"COMPLETED: {step_name}")
    _logger.info(f"Duration: {duration:.2f} seconds")
    _logger.info("=" * 80)


# Export the logger instance for direct use
logger = _logger


__all__ = [
    "setup_logger",
    "get_logger",
    "log_step_start",
    "log_step_complete",
    "logger",
]
