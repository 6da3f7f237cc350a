"""Logging configuration for run0-sudo.

Diagnostics that end a run are printed by the CLI itself; logging only
carries debug detail, so the default level keeps successful runs silent.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    console_output: bool = True,
    format_string: Optional[str] = None
) -> None:
    """Configure logging for run0-sudo.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to write logs to file.
        console_output: Whether to output logs to stderr.
        format_string: Custom format string (uses default if None).
    """
    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(file_handler)


def parse_level(level: Union[int, str]) -> int:
    """Turn 'debug', 'INFO', 10 ... into a logging level, WARNING if unknown."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_cli_logging(level: Union[int, str] = logging.WARNING, log_file: Optional[Path] = None) -> None:
    """Convenience function for CLI logging setup.

    Args:
        level: Level name or number; unknown names fall back to WARNING.
        log_file: Optional extra log file.
    """
    # Use simpler format for CLI
    format_string = '%(levelname)s: %(message)s'

    setup_logging(
        level=parse_level(level),
        log_file=log_file,
        console_output=True,
        format_string=format_string
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__ from calling module).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
