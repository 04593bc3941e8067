"""
Initialization - Logging Module.

Configures loguru logger for a sync process.
Sets up log rotation and retention policies.
"""

import sys
from pathlib import Path

from loguru import logger


def setup_logging(flavor: str, level: str = "INFO", log_dir: str = "logs") -> Path:
    """
    Configure stderr and rotating file sinks.

    Args:
        flavor: Network flavor, used in the log file name
        level: Minimum log level
        log_dir: Directory of the log files

    Returns:
        Path of the log file
    """
    log_file = Path(log_dir) / f"sync-{flavor}.log"

    logger.remove()
    logger.add(sys.stderr, level=level, colorize=True)
    logger.add(
        str(log_file),
        rotation="1 day",
        retention="7 days",
        level=level,
        encoding="utf-8",
    )

    logger.info(f"Starting {flavor} chain sync...")
    return log_file
