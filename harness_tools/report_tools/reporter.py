"""
================================================================================
Test Reporter Capability
================================================================================

Structured-attachment interface forwarding test metadata to the external
test-management system (Allure).

Two variants are available and one is picked at configuration time through
build_reporter():

    - AllureReporter: forwards every attachment with ``allure.attach``
    - NullReporter:   accepts every call and does nothing

================================================================================
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional

from loguru import logger

from .allure_utils import (
    TestSummary,
    attach_json,
    attach_text,
    build_curl_command,
    redact_body,
    redact_headers,
)


PERFORMANCE_THRESHOLDS_MS = (
    (200, "excellent"),
    (500, "good"),
    (1000, "acceptable"),
    (3000, "slow"),
)


def classify_performance(duration_ms: float) -> str:
    """Bucket a request duration into a speed classification."""
    for limit, label in PERFORMANCE_THRESHOLDS_MS:
        if duration_ms < limit:
            return label
    return "critical"


class Reporter(ABC):
    """Narrow reporting interface used by the harness."""

    @abstractmethod
    def attach_test_context(self, context: Mapping[str, Any]) -> None:
        ...

    @abstractmethod
    def attach_test_summary(self, summary: TestSummary) -> None:
        ...

    @abstractmethod
    def attach_validation_results(self, results: Iterable[Mapping[str, Any]]) -> None:
        ...

    @abstractmethod
    def attach_performance_metrics(
        self,
        duration_ms: float,
        context: Optional[str] = None,
        request_size: Optional[int] = None,
        response_size: Optional[int] = None,
    ) -> None:
        ...

    @abstractmethod
    def attach_api_call(
        self,
        method: str,
        url: str,
        request_headers: Mapping[str, str],
        request_body: Any,
        status: int,
        response_body: Any,
        duration_ms: float,
        request_id: str,
    ) -> None:
        ...


class NullReporter(Reporter):
    """Reporter used when no test-management system is configured."""

    def attach_test_context(self, context):
        pass

    def attach_test_summary(self, summary):
        pass

    def attach_validation_results(self, results):
        pass

    def attach_performance_metrics(self, duration_ms, context=None, request_size=None, response_size=None):
        pass

    def attach_api_call(self, method, url, request_headers, request_body, status,
                        response_body, duration_ms, request_id):
        pass


class AllureReporter(Reporter):
    """
    Reporter forwarding structured attachments to Allure.

    Attachments are plain ``allure.attach`` calls rather than nested steps,
    so concurrent requests of one batch group do not interleave step trees.
    """

    def attach_test_context(self, context: Mapping[str, Any]) -> None:
        payload = dict(context)
        payload.setdefault("timestamp", datetime.now().isoformat())
        attach_json(payload, name="🧭 Test Context")

    def attach_test_summary(self, summary: TestSummary) -> None:
        attach_json(summary.to_dict(), name=f"📊 Summary - {summary.name}")

    def attach_validation_results(self, results: Iterable[Mapping[str, Any]]) -> None:
        results = [dict(r) for r in results]
        passed = sum(1 for r in results if r.get("passed"))
        lines = [
            f"Total Checks: {len(results)}",
            f"Passed: {passed}",
            f"Failed: {len(results) - passed}",
            "",
            "Details:",
            "-" * 40,
        ]
        for result in results:
            status = "✅ PASS" if result.get("passed") else "❌ FAIL"
            line = f"{status} | {result.get('field', '?')}"
            if not result.get("passed") and result.get("message"):
                line += f" | {result['message']}"
            lines.append(line)
        attach_text("\n".join(lines), name="🔍 Validation Results")

    def attach_performance_metrics(
        self,
        duration_ms: float,
        context: Optional[str] = None,
        request_size: Optional[int] = None,
        response_size: Optional[int] = None,
    ) -> None:
        report: Dict[str, Any] = {
            "context": context or "API Performance Metrics",
            "timestamp": datetime.now().isoformat(),
            "metrics": {
                "duration": f"{duration_ms}ms",
                "request_size": f"{request_size} bytes" if request_size is not None else "N/A",
                "response_size": f"{response_size} bytes" if response_size is not None else "N/A",
            },
            "speed_classification": classify_performance(duration_ms),
        }
        attach_json(report, name="⏱️ Performance Metrics")

    def attach_api_call(
        self,
        method: str,
        url: str,
        request_headers: Mapping[str, str],
        request_body: Any,
        status: int,
        response_body: Any,
        duration_ms: float,
        request_id: str,
    ) -> None:
        safe_headers = redact_headers(dict(request_headers))
        safe_body = redact_body(request_body)
        status_emoji = "✅" if status < 400 else "❌"
        attach_json(
            {
                "request": {
                    "method": method,
                    "url": url,
                    "headers": safe_headers,
                    "body": safe_body,
                    "request_id": request_id,
                },
                "response": {
                    "status": status,
                    "body": response_body,
                    "duration_ms": duration_ms,
                },
            },
            name=f"{status_emoji} {method} {url} → {status} ({duration_ms}ms)",
        )
        attach_text(
            build_curl_command(method, url, safe_headers, safe_body),
            name=f"🔧 cURL {method} {url}",
        )


def build_reporter(enabled: bool) -> Reporter:
    """Select the reporter variant for this run."""
    if enabled:
        logger.debug("Allure reporting enabled")
        return AllureReporter()
    logger.debug("Allure reporting disabled, using NullReporter")
    return NullReporter()


__all__ = [
    "AllureReporter",
    "NullReporter",
    "Reporter",
    "build_reporter",
    "classify_performance",
]
