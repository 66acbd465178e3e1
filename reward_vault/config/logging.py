"""
Logging configuration.

Configures loguru logger for the reward vault.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger

from reward_vault.config.settings import Settings


def setup_logging(config: Settings) -> None:
    """Configure logger with stderr output and optional file rotation."""
    logger.remove()
    logger.add(sys.stderr, level=config.log_level)

    if config.log_file:
        logger.add(
            config.log_file,
            rotation="1 day",
            retention="7 days",
            level=config.log_level,
            encoding="utf-8",
        )

    logger.info(f"Starting reward vault ({config.environment})...")
