"""
Logging for audiolake.

Every module logs through one named logger, "audiolake". Normalization and
materialization report per-dataset totals at INFO, cache hits and writes at
DEBUG, and skipped rows at WARNING. The CLI reconfigures the logger from the
"logging" section of audiolake.yaml before each command.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "audiolake"


def setup_logger(
    name: str = LOGGER_NAME,
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console_output: bool = True,
) -> logging.Logger:
    """
    Build a logger that writes to stdout and, optionally, appends to a file.

    Handlers from an earlier call are closed and replaced, so commands can
    reconfigure the same logger repeatedly. Unknown level names fall back to
    INFO.

    Args:
        name: Logger name (default: "audiolake")
        level: Level name such as "DEBUG" or "WARNING"
        log_file: File that records are appended to; parent directories are created
        console_output: Whether records also go to stdout

    Returns:
        The configured logger, which does not propagate to the root logger

    Example:
        >>> logger = setup_logger(level="DEBUG", log_file=Path("logs/materialize.log"))
        >>> logger.debug("Wrote 32044 bytes to cache/train.parquet/0.wav")
    """
    logger = logging.getLogger(name)

    # Reconfiguring must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Look up a logger by name without touching its handlers."""
    return logging.getLogger(name)


_default_logger: Optional[logging.Logger] = None


def get_default_logger() -> logging.Logger:
    """
    Return the shared "audiolake" logger, creating it at INFO on first use.

    Modules call this at import time and keep the result as their
    module-level logger.
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = setup_logger()
    return _default_logger


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console_output: bool = True,
) -> None:
    """
    Apply logging settings to the shared "audiolake" logger.

    Module-level loggers are the same object, so the new level and handlers
    take effect everywhere without re-importing.

    Args:
        level: Level name, usually logging.level from the config
        log_file: Optional file to append records to (logging.log_file)
        console_output: Whether records go to stdout
    """
    global _default_logger
    _default_logger = setup_logger(
        name=LOGGER_NAME,
        level=level,
        log_file=log_file,
        console_output=console_output,
    )
