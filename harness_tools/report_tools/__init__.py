"""Reporting capability for the harness (Allure or no-op)."""

from .allure_utils import TestSummary, build_curl_command, redact_body, redact_headers
from .reporter import (
    AllureReporter,
    NullReporter,
    Reporter,
    build_reporter,
    classify_performance,
)

__all__ = [
    "AllureReporter",
    "NullReporter",
    "Reporter",
    "TestSummary",
    "build_curl_command",
    "build_reporter",
    "classify_performance",
    "redact_body",
    "redact_headers",
]
