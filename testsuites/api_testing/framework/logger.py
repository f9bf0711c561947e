"""
================================================================================
Harness Logger
================================================================================

Structured logging context for the harness, built on loguru.

One HarnessLogger is constructed per worker (see the api_testing conftest) and
passed into the client, services, batch executor and operations. Components
take a ScopedLogger from it, which prefixes messages with the component name
and can time a unit of work.

Structured context is attached through loguru's ``bind`` so that sinks which
serialize records (``serialize=True``) keep it as fields.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger


# Harness level names -> loguru level names
LEVEL_ALIASES = {
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "WARN": "WARNING",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
}


def _normalize_level(level: str) -> str:
    try:
        return LEVEL_ALIASES[level.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown log level '{level}'. Expected one of: DEBUG, INFO, WARN, ERROR"
        ) from None


@dataclass
class Timer:
    """Monotonic stopwatch started by ScopedLogger.start_timer()."""

    started_at: float = field(default_factory=time.perf_counter)

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started_at) * 1000, 2)


class HarnessLogger:
    """
    Logging context with a minimum level, injected into harness components.

    Usage:
        >>> log = HarnessLogger(level="DEBUG")
        >>> scoped = log.scoped("PostsOperations")
        >>> timer = scoped.start_timer()
        >>> scoped.log_with_timing("INFO", "Posts retrieved", timer, count=100)
    """

    def __init__(self, level: str = "INFO", sink_logger: Any = None) -> None:
        self._level = _normalize_level(level)
        self._logger = sink_logger or logger

    @property
    def level(self) -> str:
        return self._level

    def set_level(self, level: str) -> None:
        self._level = _normalize_level(level)

    def is_enabled(self, level: str) -> bool:
        wanted = self._logger.level(_normalize_level(level)).no
        return wanted >= self._logger.level(self._level).no

    def log(self, level: str, message: str, **context: Any) -> None:
        level = _normalize_level(level)
        if not self.is_enabled(level):
            return
        # depth=2 reports the caller of debug()/info()/... rather than this method
        self._logger.bind(**context).opt(depth=2).log(level, message)

    def debug(self, message: str, **context: Any) -> None:
        self.log("DEBUG", message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log("INFO", message, **context)

    def warn(self, message: str, **context: Any) -> None:
        self.log("WARN", message, **context)

    warning = warn

    def error(self, message: str, **context: Any) -> None:
        self.log("ERROR", message, **context)

    def scoped(self, component: str) -> "ScopedLogger":
        """Create a child logger prefixed with the component name."""
        return ScopedLogger(self, component)

    # ------------------------------------------------------------------
    # Test lifecycle helpers
    # ------------------------------------------------------------------

    def log_test_start(self, test_name: str, description: Optional[str] = None) -> None:
        self.info(f"🚀 Test started: {test_name}", test_name=test_name, description=description)

    def log_test_end(self, test_name: str, status: str, duration_ms: Optional[float] = None) -> None:
        emoji = {"PASSED": "✅", "FAILED": "❌"}.get(status, "⏭️")
        suffix = f" ({duration_ms}ms)" if duration_ms is not None else ""
        self.info(
            f"{emoji} Test finished: {test_name} - {status}{suffix}",
            test_name=test_name, status=status, duration_ms=duration_ms,
        )


class ScopedLogger:
    """Child logger that prefixes every message with ``[component]``."""

    def __init__(self, parent: HarnessLogger, component: str) -> None:
        self._parent = parent
        self.component = component

    def _emit(self, level: str, message: str, context: dict) -> None:
        if not self._parent.is_enabled(level):
            return
        self._parent._logger.bind(component=self.component, **context).opt(depth=2).log(
            _normalize_level(level), f"[{self.component}] {message}"
        )

    def debug(self, message: str, **context: Any) -> None:
        self._emit("DEBUG", message, context)

    def info(self, message: str, **context: Any) -> None:
        self._emit("INFO", message, context)

    def warn(self, message: str, **context: Any) -> None:
        self._emit("WARN", message, context)

    warning = warn

    def error(self, message: str, **context: Any) -> None:
        self._emit("ERROR", message, context)

    def start_timer(self) -> Timer:
        return Timer()

    def log_with_timing(self, level: str, message: str, timer: Timer, **context: Any) -> None:
        """Log with the timer's elapsed milliseconds attached as ``duration_ms``."""
        elapsed = timer.elapsed_ms
        self._emit(level, f"{message} ({elapsed}ms)", dict(context, duration_ms=elapsed))


__all__ = [
    "HarnessLogger",
    "ScopedLogger",
    "Timer",
]
