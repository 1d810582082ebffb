"""Logging configuration for the network status widget."""

import logging
import os
import sys


def configure_logging() -> None:
    """Configure process-wide logging.

    Respects NETSTATUS_LOG_LEVEL (default: WARNING). Logs go to stderr only;
    stdout is reserved for the single JSON line read by the status bar.

    Examples:
        # Trace every bus read and counter sample
        $ NETSTATUS_LOG_LEVEL=DEBUG netstatus
    """
    log_level_str = os.environ.get("NETSTATUS_LOG_LEVEL", "WARNING").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    log_level = log_level_map.get(log_level_str, logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    logging.getLogger(__name__).debug("Logging configured: level=%s", logging.getLevelName(log_level))
