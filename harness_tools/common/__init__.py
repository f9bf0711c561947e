"""
================================================================================
Harness Tools Common Utilities
================================================================================

Process-level logging bootstrap for the harness.

The sink (stderr, optional file) is configured once per process here. Level
filtering for framework components is done by the injected HarnessLogger, so
the sink itself accepts everything from DEBUG up.

Exports:
    - init_logger: Configure the loguru sink once per process
    - reset_logger: Forget the initialization (tests only)

================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "{message}"
)

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the global Loguru sink with consistent configuration.

    Should be called once at process (or xdist worker) start. Later calls
    are ignored until reset_logger() is called.

    Args:
        level: Sink level. Defaults to SINK_LOG_LEVEL env var or DEBUG.
        format_str: Custom log format string.
        log_file: Optional file path for an additional file sink.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    sink_level = (level or os.getenv("SINK_LOG_LEVEL", "DEBUG")).upper()
    if sink_level == "WARN":
        sink_level = "WARNING"
    log_format = format_str or DEFAULT_LOG_FORMAT

    logger.remove()
    logger.add(
        sys.stderr,
        level=sink_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = log_file or os.getenv("LOG_FILE")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=sink_level,
            format=log_format.replace("{level: <8}", "{level}"),
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger sink initialized with level: {sink_level}")


def reset_logger() -> None:
    """Allow init_logger() to run again."""
    global _logger_initialized
    _logger_initialized = False


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "init_logger",
    "reset_logger",
]
