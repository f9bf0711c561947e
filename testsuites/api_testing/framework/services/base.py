"""
================================================================================
Base API Service
================================================================================

Repository-style access to one fixture API resource.

Every method is a pass-through: it validates local preconditions (ids must
be positive integers), issues exactly one request through the ApiClient and
returns the ApiResponse untouched. Relation filters are always sent as query
parameters (``/comments?postId=1``), never as path segments.

================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from ..config_loader import ApiSettings
from ..http_client import ApiClient, ApiResponse, NetworkError, RequestTimeoutError
from ..logger import HarnessLogger


class ValidationError(ValueError):
    """Local precondition failure, raised before any network call."""
    pass


def ensure_positive_id(value: Any, name: str = "id") -> int:
    """Return ``value`` if it is a positive int, else raise ValidationError."""
    # bool is an int subclass; True must not pass as id 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")
    if value <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {value}")
    return value


class BaseApiService:
    """
    CRUD operations for one resource.

    Subclasses set:
        resource: Endpoint path (e.g. "/posts")
        relation_field: Query parameter used by get_by_relation, or None
    """

    resource: str = ""
    relation_field: Optional[str] = None

    def __init__(self, client: ApiClient, log: HarnessLogger) -> None:
        self.client = client
        self.settings: ApiSettings = client.settings
        self.log = log
        self._log = log.scoped(type(self).__name__)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_all(self) -> ApiResponse[List[Dict[str, Any]]]:
        """Retrieve every item of the resource."""
        return await self._get("get_all", self.resource)

    async def get_by_id(self, resource_id: int) -> ApiResponse[Dict[str, Any]]:
        """Retrieve one item by id."""
        ensure_positive_id(resource_id)
        return await self._get("get_by_id", self._item_path(resource_id), id=resource_id)

    async def get_by_relation(self, parent_id: int) -> ApiResponse[List[Dict[str, Any]]]:
        """Retrieve the items whose relation field equals ``parent_id``."""
        if self.relation_field is None:
            raise ValidationError(f"{self.resource} has no relation filter")
        ensure_positive_id(parent_id, self.relation_field)
        return await self._get(
            "get_by_relation",
            self.resource,
            params={self.relation_field: parent_id},
            **{self.relation_field: parent_id},
        )

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, payload: Optional[Mapping[str, Any]] = None) -> ApiResponse[Dict[str, Any]]:
        """
        Create an item. A generated payload is used when none is given; a
        client-supplied ``id`` is dropped because the server assigns it.
        """
        body = dict(payload) if payload is not None else self.default_payload()
        body.pop("id", None)
        timer = self._log.start_timer()
        response = await self.client.post(self.resource, body)
        self._log.log_with_timing(
            "INFO", "create", timer, status=response.status,
            id=_data_field(response, "id"),
        )
        return response

    async def update(self, resource_id: int, payload: Mapping[str, Any]) -> ApiResponse[Dict[str, Any]]:
        """Replace an item (PUT)."""
        ensure_positive_id(resource_id)
        timer = self._log.start_timer()
        response = await self.client.put(self._item_path(resource_id), dict(payload))
        self._log.log_with_timing("INFO", "update", timer, id=resource_id, status=response.status)
        return response

    async def partial_update(self, resource_id: int, payload: Mapping[str, Any]) -> ApiResponse[Dict[str, Any]]:
        """Merge fields into an item (PATCH)."""
        ensure_positive_id(resource_id)
        timer = self._log.start_timer()
        response = await self.client.patch(self._item_path(resource_id), dict(payload))
        self._log.log_with_timing(
            "INFO", "partial_update", timer, id=resource_id, status=response.status,
            fields=sorted(payload),
        )
        return response

    async def delete(self, resource_id: int) -> ApiResponse[None]:
        """Delete an item."""
        ensure_positive_id(resource_id)
        timer = self._log.start_timer()
        response = await self.client.delete(self._item_path(resource_id))
        self._log.log_with_timing("INFO", "delete", timer, id=resource_id, status=response.status)
        return response

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def default_payload(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _item_path(self, resource_id: int) -> str:
        return f"{self.resource}/{resource_id}"

    async def _get(
        self,
        operation: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **context: Any,
    ) -> ApiResponse[Any]:
        timer = self._log.start_timer()
        response = await self._with_get_retry(lambda: self.client.get(path, params=params))
        self._log.log_with_timing("INFO", operation, timer, status=response.status, **context)
        return response

    async def _with_get_retry(self, call: Callable[[], Awaitable[ApiResponse[Any]]]) -> ApiResponse[Any]:
        """
        Run an idempotent GET, retrying transport failures only when
        ``retry_idempotent_gets`` is enabled.
        """
        if not self.settings.retry_idempotent_gets:
            return await call()

        attempts = self.settings.max_retry_attempts
        for attempt in range(attempts - 1):
            try:
                return await call()
            except (NetworkError, RequestTimeoutError) as e:
                wait_time = _calculate_backoff(attempt)
                self._log.warn(
                    f"GET failed: {e}. Retrying in {wait_time}s. Attempt {attempt + 1}/{attempts}"
                )
                await asyncio.sleep(wait_time)

        try:
            return await call()
        except (NetworkError, RequestTimeoutError) as e:
            self._log.error(f"All {attempts} GET attempts failed: {e}")
            raise


# Default retry settings
DEFAULT_RETRY_BACKOFF = 0.5
DEFAULT_RETRY_MAX_WAIT = 5.0


def _calculate_backoff(attempt: int) -> float:
    """Exponential backoff: base * (2 ^ attempt), capped at max wait."""
    return min(DEFAULT_RETRY_BACKOFF * (2 ** attempt), DEFAULT_RETRY_MAX_WAIT)


def _data_field(response: ApiResponse[Any], name: str) -> Any:
    if isinstance(response.data, dict):
        return response.data.get(name)
    return None


__all__ = [
    "BaseApiService",
    "ValidationError",
    "ensure_positive_id",
]
