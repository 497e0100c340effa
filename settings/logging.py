"""Logging configuration."""

import logging
import sys

from loguru import logger

from settings import LOG_DIR

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <cyan>{extra[job]}</cyan> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {extra[job]} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = "INFO", to_file: bool = True, job: str = "sync"):
    """Configure console and optional per-job file output.

    Every record carries a ``job`` extra so interleaved runs (ballots vs.
    death dates) stay distinguishable in a shared log.
    """
    logger.remove()
    logger.configure(extra={"job": job})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if to_file:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(
            LOG_DIR / f"{job}_{{time:YYYY-MM-DD}}.log",
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            compression="gz",
        )
        logger.info("Logging to {}", LOG_DIR)

    # httpx logs every request at INFO through the stdlib
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger
