"""Loguru setup for the Guardian client."""

from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from .settings import GuardianConfig, get_current_config

CONSOLE_FORMAT = "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} | {level: <8} | {name}:{line} | {thread.name} - {message}"


def setup_logging(config: Optional[GuardianConfig] = None) -> None:
    """Replace loguru's default handler with the configured sinks.

    Console output goes to stderr; a rotating, gzip-compressed file sink is
    added when `config.log_file` is set.
    """
    config = config or get_current_config() or GuardianConfig()

    logger.remove()

    if config.log_to_console:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=config.log_level, colorize=True)

    if config.log_file is None:
        return

    logger.add(
        str(config.log_file),
        format=FILE_FORMAT,
        level=config.log_level,
        rotation=config.log_rotation,
        retention=config.log_retention,
        compression="gz",
        enqueue=True,
    )
    logger.debug(f"Logging to {config.log_file} at level {config.log_level}")
