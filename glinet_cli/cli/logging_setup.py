"""
Logging Configuration Module

This module provides logging setup for the glinet CLI. Log records go to
stderr so command output on stdout stays clean.

License: MIT
"""

import logging
import sys
from typing import Optional

_logging_configured = False


def setup_logging(debug: bool = False, quiet: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the CLI application.

    Args:
        debug: If True, enable debug-level logging
        quiet: If True, only show warnings and errors
        log_file: Optional path to log file for output
    """
    global _logging_configured

    # Only configure logging once
    if _logging_configured:
        return

    _logging_configured = True

    if debug:
        level = logging.DEBUG
        formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        level = logging.WARNING if quiet else logging.INFO
        formatter = logging.Formatter("%(levelname)s - %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Replace any existing handlers
    logging.basicConfig(level=level, handlers=handlers, force=True)

    # Keep HTTP libraries quiet unless debugging
    if not debug:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)
    else:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
        logging.getLogger("requests").setLevel(logging.DEBUG)
        logging.getLogger("glinet-cli").setLevel(logging.DEBUG)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured: level={logging.getLevelName(level)}, debug={debug}")
    if log_file:
        logger.debug(f"Logging to file: {log_file}")


def reset_logging() -> None:
    """Allow setup_logging to run again (used between CLI invocations in tests)."""
    global _logging_configured
    _logging_configured = False

