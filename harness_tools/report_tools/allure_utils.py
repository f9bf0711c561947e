"""
================================================================================
Allure Report Utilities
================================================================================

Low-level attachment helpers used by the AllureReporter.

Features:
- JSON / text attachment helpers
- Header and body masking
- cURL command generation for request reproduction
- Test summary container

================================================================================
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

import allure


MASK = "***MASKED***"
SENSITIVE_HEADERS = {"authorization", "x-api-key", "x-app-auth", "cookie", "set-cookie"}
SENSITIVE_BODY_TOKENS = ("password", "secret", "token", "api_key", "authorization", "session")

# Maximum body length included in an attachment
MAX_ATTACHMENT_LENGTH = 3000


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    allure.attach(
        truncate(json_str),
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        truncate(text),
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def truncate(content: str, limit: int = MAX_ATTACHMENT_LENGTH) -> str:
    if len(content) <= limit:
        return content
    return (
        f"{content[:limit]}\n\n"
        f"... [Truncated, full length: {len(content)} chars] ..."
    )


# ================================================================================
# Masking and Reproduction
# ================================================================================

def redact_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    """Mask sensitive header values before they leave the process."""
    return {
        key: MASK if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def redact_body(payload: Any) -> Any:
    """Recursively mask sensitive fields in request bodies."""
    if isinstance(payload, dict):
        redacted = {}
        for key, value in payload.items():
            if any(token in str(key).lower() for token in SENSITIVE_BODY_TOKENS):
                redacted[key] = MASK
            else:
                redacted[key] = redact_body(value)
        return redacted
    if isinstance(payload, list):
        return [redact_body(item) for item in payload]
    return payload


def build_curl_command(
    method: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    body: Optional[Any] = None,
) -> str:
    """
    Build a copy-paste ready cURL command.

    Headers are expected to be masked already.
    """
    parts = [f"curl -X {method.upper()}"]

    for key, value in (headers or {}).items():
        parts.append(f"-H '{key}: {value}'")

    if body is not None:
        body_str = json.dumps(body, ensure_ascii=False) if isinstance(body, (dict, list)) else str(body)
        parts.append(f"-d '{body_str}'")

    parts.append(f"'{url}'")

    return " \\\n  ".join(parts)


# ================================================================================
# Summary
# ================================================================================

@dataclass
class TestSummary:
    """Summary of a test or scenario run, attached by the reporter."""
    __test__ = False

    name: str
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    duration_ms: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }
