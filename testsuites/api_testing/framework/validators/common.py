"""
================================================================================
Common Response Assertions
================================================================================

Stateless assertion helpers shared by the resource validators.

Every helper either returns None or raises ResponseAssertionError (an
AssertionError, so pytest reports it as a test failure) carrying the field
checked together with the expected and actual values. Helpers never log and
never mutate their inputs; callers chain as many as a scenario needs.

Payloads may be plain JSON mappings or the resource dataclasses from
``framework.models``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import dataclasses
import re
from typing import Any, Iterable, Mapping, Optional, Pattern, Sequence, Union

from ..http_client import ApiResponse


_MISSING = object()


class ResponseAssertionError(AssertionError):
    """Mismatch between expected and actual response content."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.actual = actual


def get_field(payload: Any, name: str, default: Any = _MISSING) -> Any:
    """Read ``name`` from a mapping or a dataclass; ``_MISSING`` if absent."""
    if isinstance(payload, Mapping):
        return payload.get(name, default)
    if dataclasses.is_dataclass(payload):
        return getattr(payload, name, default)
    return default


def has_field(payload: Any, name: str) -> bool:
    return get_field(payload, name) is not _MISSING


# ================================================================================
# Status
# ================================================================================

def assert_status(response: ApiResponse[Any], expected: int) -> None:
    """Exact-match the HTTP status code."""
    if response.status != expected:
        raise ResponseAssertionError(
            f"Expected status {expected}, got {response.status} {response.status_text}".rstrip(),
            field="status", expected=expected, actual=response.status,
        )


def assert_success(response: ApiResponse[Any]) -> None:
    assert_status(response, 200)


def assert_created(response: ApiResponse[Any]) -> None:
    assert_status(response, 201)


def assert_not_found(response: ApiResponse[Any]) -> None:
    assert_status(response, 404)


def assert_list_response(response: ApiResponse[Any]) -> None:
    """200 with a non-empty JSON array body."""
    assert_success(response)
    if not isinstance(response.data, list):
        raise ResponseAssertionError(
            f"Expected a JSON array, got {type(response.data).__name__}",
            field="data", expected="list", actual=type(response.data).__name__,
        )
    if not response.data:
        raise ResponseAssertionError(
            "Expected a non-empty list", field="data", expected="> 0 items", actual=0,
        )


def assert_count_between(count: int, minimum: int, maximum: int, inclusive_min: bool = False) -> None:
    """``minimum < count <= maximum`` (``>=`` on the lower bound when inclusive)."""
    low_ok = count >= minimum if inclusive_min else count > minimum
    if not low_ok or count > maximum:
        bracket = "[" if inclusive_min else "("
        raise ResponseAssertionError(
            f"Expected count in {bracket}{minimum}, {maximum}], got {count}",
            field="count", expected=(minimum, maximum), actual=count,
        )


# ================================================================================
# Structure
# ================================================================================

def assert_required_fields(payload: Any, fields: Iterable[str], context: str = "payload") -> None:
    """Fail on the first field of ``fields`` that is absent from ``payload``."""
    if not isinstance(payload, Mapping) and not dataclasses.is_dataclass(payload):
        raise ResponseAssertionError(
            f"{context} must be an object, got {type(payload).__name__}",
            field=context, expected="object", actual=type(payload).__name__,
        )
    for name in fields:
        if not has_field(payload, name):
            raise ResponseAssertionError(
                f"{context} is missing required field '{name}'",
                field=name, expected="present", actual="missing",
            )


def assert_field_equals(payload: Any, name: str, expected: Any) -> None:
    actual = get_field(payload, name)
    if actual is _MISSING:
        raise ResponseAssertionError(
            f"Field '{name}' is missing", field=name, expected=expected, actual="missing",
        )
    if actual != expected:
        raise ResponseAssertionError(
            f"Field '{name}': expected {expected!r}, got {actual!r}",
            field=name, expected=expected, actual=actual,
        )


def assert_all_items_field_equals(items: Sequence[Any], name: str, expected: Any) -> None:
    """Every item of a list body has ``name == expected``."""
    for position, item in enumerate(items):
        actual = get_field(item, name)
        if actual != expected:
            raise ResponseAssertionError(
                f"Item {position}: field '{name}' expected {expected!r}, got "
                f"{'missing' if actual is _MISSING else repr(actual)}",
                field=name, expected=expected, actual=actual,
            )


# ================================================================================
# Format
# ================================================================================

def assert_matches(value: Any, pattern: Union[str, Pattern[str]], name: str) -> None:
    """``value`` is a string matching ``pattern`` in its entirety."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    regex = compiled.pattern
    if not isinstance(value, str):
        raise ResponseAssertionError(
            f"Field '{name}' must be a string, got {type(value).__name__}",
            field=name, expected=regex, actual=value,
        )
    if not compiled.fullmatch(value):
        raise ResponseAssertionError(
            f"Field '{name}' value {value!r} does not match {regex}",
            field=name, expected=regex, actual=value,
        )


def assert_in_range(value: Any, minimum: float, maximum: float, name: str) -> float:
    """
    Parse ``value`` as a float and check ``minimum <= value <= maximum``.

    Returns the parsed value. Unparsable values fail.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ResponseAssertionError(
            f"Field '{name}' is not numeric: {value!r}",
            field=name, expected=f"[{minimum}, {maximum}]", actual=value,
        ) from None
    # float("nan") parses but compares false against both bounds
    if not minimum <= number <= maximum:
        raise ResponseAssertionError(
            f"Field '{name}' value {number} is outside [{minimum}, {maximum}]",
            field=name, expected=f"[{minimum}, {maximum}]", actual=value,
        )
    return number


# ================================================================================
# Echo
# ================================================================================

def assert_echoed(payload: Any, data: Any, prefix: str = "") -> None:
    """
    Every field of ``payload`` appears in ``data`` with an equal value.

    Nested mappings are compared field by field so a mismatch names the full
    path (e.g. ``address.geo.lat``). Extra fields in ``data`` (such as the
    server-assigned id) are ignored.
    """
    if dataclasses.is_dataclass(payload):
        payload = {k: v for k, v in dataclasses.asdict(payload).items() if not (k == "id" and v is None)}
    if dataclasses.is_dataclass(data):
        data = dataclasses.asdict(data)

    for name, expected in payload.items():
        path = f"{prefix}{name}"
        actual = get_field(data, name)
        if actual is _MISSING:
            raise ResponseAssertionError(
                f"Field '{path}' was not echoed back", field=path, expected=expected, actual="missing",
            )
        if isinstance(expected, Mapping) and isinstance(actual, Mapping):
            assert_echoed(expected, actual, prefix=f"{path}.")
        elif actual != expected:
            raise ResponseAssertionError(
                f"Field '{path}': sent {expected!r}, received {actual!r}",
                field=path, expected=expected, actual=actual,
            )


__all__ = [
    "ResponseAssertionError",
    "assert_all_items_field_equals",
    "assert_count_between",
    "assert_created",
    "assert_echoed",
    "assert_field_equals",
    "assert_in_range",
    "assert_list_response",
    "assert_matches",
    "assert_not_found",
    "assert_required_fields",
    "assert_status",
    "assert_success",
    "get_field",
    "has_field",
]
