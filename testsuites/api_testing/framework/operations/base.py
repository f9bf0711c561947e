"""
================================================================================
Base Operations
================================================================================

Operations compose one Domain API Service call with its validators and hand a
simplified result back to the test. They are the unit the test suites call.

Each operation logs its start, its success with the elapsed time, and on
failure the error message before re-raising it unchanged.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, TypeVar

from ..http_client import ApiResponse
from ..logger import HarnessLogger


R = TypeVar("R")


@dataclass(frozen=True)
class ListResult:
    """Validated list response together with its item count."""

    response: ApiResponse[List[Dict[str, Any]]]
    count: int

    @property
    def items(self) -> List[Dict[str, Any]]:
        return self.response.data


class BaseOperations:
    """Shared logging around a validated service call."""

    def __init__(self, log: HarnessLogger) -> None:
        self._log = log.scoped(type(self).__name__)

    async def _logged(self, action: str, call: Callable[[], Awaitable[R]], **context: Any) -> R:
        timer = self._log.start_timer()
        self._log.info(f"▶️ {action}", **context)
        try:
            result = await call()
        except Exception as e:
            self._log.error(f"❌ {action} failed: {e}", error=str(e), **context)
            raise
        self._log.log_with_timing("INFO", f"✅ {action} succeeded", timer, **context)
        return result


__all__ = ["BaseOperations", "ListResult"]
