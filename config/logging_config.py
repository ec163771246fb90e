"""Logging configuration using loguru."""

import sys

from loguru import logger

from config.settings import settings


def setup_logging(level: str | None = None, log_to_file: bool = True) -> None:
    """Configure loguru logger."""
    level = level or settings.log_level

    # Remove default handler
    logger.remove()

    # Console handler with colored output
    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=log_format,
        level=level,
        colorize=True,
    )

    if log_to_file:
        log_file = settings.resolve_path(settings.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )

    logger.info(f"Logging initialized at level {level}")
