"""
================================================================================
Async API Client with Allure Integration
================================================================================

Thin wrapper around ``httpx.AsyncClient`` for the fixture API:
    - Base URL resolution and query-parameter encoding
    - Default headers merged with per-call overrides (per-call wins)
    - Request correlation ids (X-Request-ID)
    - Wall-clock duration of every call
    - Uniform ApiResponse envelope regardless of HTTP status
    - Transport failures mapped to NetworkError / RequestTimeoutError
    - Every completed call forwarded to the Reporter

4xx/5xx responses are data for the validators, not errors. There is no
retry at this layer.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import json
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, Mapping, Optional, Type, TypeVar
from uuid import uuid4

import httpx

from harness_tools.report_tools import NullReporter, Reporter

from .config_loader import ApiSettings
from .logger import HarnessLogger


T = TypeVar("T")

REQUEST_ID_HEADER = "X-Request-ID"


class HttpClientError(Exception):
    """Base exception for API client errors."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        elapsed_ms: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.elapsed_ms = elapsed_ms


class NetworkError(HttpClientError):
    """Connection refused, DNS failure or any other transport-level failure."""
    pass


class RequestTimeoutError(HttpClientError, TimeoutError):
    """No complete response within the configured timeout."""
    pass


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """
    Response envelope produced once per request.

    Attributes:
        status: HTTP status code
        data: Decoded JSON body, or None when the body is empty / not JSON
        duration_ms: Milliseconds from send to full response receipt
        headers: Response headers (lower-cased names)
        status_text: HTTP reason phrase
        request_id: Correlation id sent as X-Request-ID
    """

    status: int
    data: T
    duration_ms: float
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    status_text: str = ""
    request_id: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def as_model(self, model: Type[Any]) -> Any:
        """Parse ``data`` into a resource dataclass (or a list of them)."""
        if isinstance(self.data, list):
            return [model.from_dict(item) for item in self.data]
        return model.from_dict(self.data)


class ApiClient:
    """
    Async HTTP client for the fixture API.

    Usage:
        >>> settings = ApiSettings.from_config()
        >>> async with ApiClient(settings, HarnessLogger()) as client:
        ...     response = await client.get("/posts", params={"userId": 1})
        ...     print(response.status, len(response.data))
    """

    def __init__(
        self,
        settings: ApiSettings,
        log: HarnessLogger,
        reporter: Optional[Reporter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            settings: Configuration snapshot (base URL, headers, timeout)
            log: Injected logging context
            reporter: Reporting capability. NullReporter if None.
            transport: Optional httpx transport (MockTransport in unit tests)
        """
        self.settings = settings
        self.reporter = reporter or NullReporter()
        self._log = log.scoped("ApiClient")
        self._transport = transport
        self.session: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ApiClient":
        """Open the underlying connection pool."""
        self.session = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.timeout_seconds),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the connection pool."""
        if self.session is not None:
            await self.session.aclose()
            self.session = None

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Join base URL and path and append query-encoded parameters."""
        if path.startswith(("http://", "https://")):
            full_url = path
        else:
            full_url = f"{self.settings.base_url.rstrip('/')}/{path.lstrip('/')}"

        if params:
            query = {k: str(v) for k, v in params.items() if v is not None}
            return str(httpx.URL(full_url, params=query))
        return full_url

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse[Any]:
        """
        Execute one HTTP request and wrap the result.

        Raises:
            NetworkError: On connection-level failures
            RequestTimeoutError: When the configured timeout is exceeded
            HttpClientError: When used outside ``async with``
        """
        if self.session is None:
            raise HttpClientError(
                "ApiClient must be used within an async context manager. "
                "Use 'async with ApiClient(settings, log) as client:'"
            )

        method = method.upper()
        url = self.build_url(path, params)
        request_id = uuid4().hex
        merged_headers = {**self.settings.headers, REQUEST_ID_HEADER: request_id}
        if headers:
            merged_headers.update(headers)

        kwargs: dict = {"headers": merged_headers}
        if body is not None:
            kwargs["content"] = json.dumps(body).encode("utf-8")

        self._log.debug(f"🌐 {method} {url}", request_id=request_id, request_body=body)
        started = time.perf_counter()

        try:
            # httpx timeouts apply per read; wait_for bounds the whole exchange
            response = await asyncio.wait_for(
                self.session.request(method, url, **kwargs),
                self.settings.timeout_seconds,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            elapsed = _elapsed_ms(started)
            self._log.error(
                f"⏱️ {method} {url} timed out after {elapsed}ms",
                request_id=request_id, duration_ms=elapsed,
            )
            raise RequestTimeoutError(
                f"{method} {url} timed out after {elapsed}ms: {e}", method, url, elapsed
            ) from e
        except httpx.TransportError as e:
            elapsed = _elapsed_ms(started)
            self._log.error(
                f"🔌 {method} {url} failed: {e}",
                request_id=request_id, duration_ms=elapsed,
            )
            raise NetworkError(
                f"{method} {url} failed: {e}", method, url, elapsed
            ) from e

        duration = _elapsed_ms(started)
        api_response: ApiResponse[Any] = ApiResponse(
            status=response.status_code,
            data=_decode_body(response),
            duration_ms=duration,
            headers=dict(response.headers),
            status_text=response.reason_phrase,
            request_id=request_id,
        )

        self._log.info(
            f"{'✅' if response.status_code < 400 else '❌'} {method} {url} "
            f"-> {response.status_code} ({duration}ms)",
            status=response.status_code, duration_ms=duration, request_id=request_id,
        )
        self.reporter.attach_api_call(
            method=method,
            url=url,
            request_headers=merged_headers,
            request_body=body,
            status=api_response.status,
            response_body=api_response.data,
            duration_ms=duration,
            request_id=request_id,
        )
        return api_response

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse[Any]:
        """Execute GET request."""
        return await self.request("GET", path, params=params, headers=headers)

    async def post(self, path: str, body: Any, headers: Optional[Mapping[str, str]] = None) -> ApiResponse[Any]:
        """Execute POST request."""
        return await self.request("POST", path, body=body, headers=headers)

    async def put(self, path: str, body: Any, headers: Optional[Mapping[str, str]] = None) -> ApiResponse[Any]:
        """Execute PUT request."""
        return await self.request("PUT", path, body=body, headers=headers)

    async def patch(self, path: str, body: Any, headers: Optional[Mapping[str, str]] = None) -> ApiResponse[Any]:
        """Execute PATCH request."""
        return await self.request("PATCH", path, body=body, headers=headers)

    async def delete(self, path: str, headers: Optional[Mapping[str, str]] = None) -> ApiResponse[Any]:
        """Execute DELETE request."""
        return await self.request("DELETE", path, headers=headers)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, ValueError):
        return None


__all__ = [
    "ApiClient",
    "ApiResponse",
    "HttpClientError",
    "NetworkError",
    "RequestTimeoutError",
    "REQUEST_ID_HEADER",
]
