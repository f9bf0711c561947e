"""
================================================================================
Batch Executor
================================================================================

Creates many resources without overwhelming the fixture API.

Payloads are split into contiguous groups of ``batch_size``. Each group is
launched at once and awaited as a whole (a full barrier, not a sliding
window); groups run strictly one after another with a cooldown between them.
A failed item is logged as a warning and dropped; it never aborts the batch.

Usage:
    executor = BatchExecutor(posts_service.create, batch_size=5, delay_ms=100, log=log)
    responses = await executor.run(payloads)          # successes only
    report = await executor.run_detailed(payloads)    # one result per input

================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, TypeVar

from .http_client import ApiResponse
from .logger import HarnessLogger


T = TypeVar("T")

CreateFn = Callable[[Mapping[str, Any]], Awaitable[ApiResponse[Any]]]
SleepFn = Callable[[float], Awaitable[Any]]


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield contiguous slices of at most ``size`` items."""
    if size < 1:
        raise ValueError(f"Batch size must be >= 1, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


@dataclass
class BatchItemResult:
    """Outcome of one payload: exactly one of ``response`` / ``error`` is set."""

    index: int
    group: int
    payload: Mapping[str, Any]
    response: Optional[ApiResponse[Any]] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """Per-input results of a batch run, in input order."""

    items: List[BatchItemResult] = field(default_factory=list)
    groups: int = 0

    @property
    def succeeded(self) -> List[ApiResponse[Any]]:
        return [item.response for item in self.items if item.succeeded and item.response is not None]

    @property
    def failed(self) -> List[BatchItemResult]:
        return [item for item in self.items if not item.succeeded]

    def summary(self) -> Dict[str, int]:
        return {
            "total": len(self.items),
            "succeeded": len(self.items) - len(self.failed),
            "failed": len(self.failed),
            "groups": self.groups,
        }


class BatchExecutor:
    """
    Grouped concurrent executor for create operations.

    Args:
        create: Coroutine function creating one resource from a payload
        batch_size: Maximum concurrent requests per group
        delay_ms: Cooldown between groups (not applied after the last one)
        log: Injected logging context
        sleep: Awaitable sleep, replaceable in tests
    """

    def __init__(
        self,
        create: CreateFn,
        batch_size: int,
        delay_ms: float,
        log: HarnessLogger,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"Batch size must be >= 1, got {batch_size}")
        if delay_ms < 0:
            raise ValueError(f"Delay must be >= 0 ms, got {delay_ms}")
        self._create = create
        self.batch_size = batch_size
        self.delay_ms = delay_ms
        self._sleep = sleep
        self._log = log.scoped("BatchExecutor")

    async def run(self, payloads: Sequence[Mapping[str, Any]]) -> List[ApiResponse[Any]]:
        """Create every payload; return the successful responses only."""
        report = await self.run_detailed(payloads)
        return report.succeeded

    async def run_detailed(self, payloads: Sequence[Mapping[str, Any]]) -> BatchReport:
        """Create every payload; return one BatchItemResult per input."""
        report = BatchReport()
        if not payloads:
            self._log.debug("Empty batch, nothing to create")
            return report

        groups = list(chunked(list(payloads), self.batch_size))
        report.groups = len(groups)
        timer = self._log.start_timer()
        self._log.info(
            f"Creating {len(payloads)} items in {len(groups)} groups of <= {self.batch_size}",
            total=len(payloads), groups=len(groups),
        )

        offset = 0
        for group_no, group in enumerate(groups, start=1):
            outcomes = await asyncio.gather(
                *(self._create(payload) for payload in group),
                return_exceptions=True,
            )
            for position, (payload, outcome) in enumerate(zip(group, outcomes)):
                index = offset + position
                if isinstance(outcome, BaseException):
                    if not isinstance(outcome, Exception):
                        # Cancellation and interpreter exits are not item failures
                        raise outcome
                    self._log.warn(
                        f"Item {index} in group {group_no} failed and was dropped: "
                        f"{type(outcome).__name__}: {outcome}",
                        index=index, group=group_no, reason=str(outcome),
                    )
                    report.items.append(BatchItemResult(index, group_no, payload, error=outcome))
                else:
                    report.items.append(BatchItemResult(index, group_no, payload, response=outcome))
            offset += len(group)

            if group_no < len(groups) and self.delay_ms > 0:
                await self._sleep(self.delay_ms / 1000.0)

        summary = report.summary()
        self._log.log_with_timing(
            "INFO",
            f"Batch finished: {summary['succeeded']}/{summary['total']} created",
            timer,
            **summary,
        )
        return report


__all__ = [
    "BatchExecutor",
    "BatchItemResult",
    "BatchReport",
    "chunked",
]
