"""
Offline fixtures for the harness unit tests.

FakeFixtureApi is an in-process stand-in for the fixture API served through
``httpx.MockTransport``, so services and operations run end to end without
network access.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from loguru import logger

from testsuites.api_testing.framework.config_loader import ApiSettings, ConfigLoader
from testsuites.api_testing.framework.http_client import ApiClient
from testsuites.api_testing.framework.logger import HarnessLogger


FAKE_BASE_URL = "https://fixture.test"


def make_user(user_id: int) -> Dict[str, Any]:
    return {
        "id": user_id,
        "name": f"Leanne Graham {user_id}",
        "username": f"Bret{user_id}",
        "email": f"Sincere{user_id}@april.biz",
        "address": {
            "street": "Kulas Light",
            "suite": "Apt. 556",
            "city": "Gwenborough",
            "zipcode": "92998-3874",
            "geo": {"lat": "-37.3159", "lng": "81.1496"},
        },
        "phone": "1-770-736-8031 x56442",
        "website": "hildegard.org",
        "company": {
            "name": "Romaguera-Crona",
            "catchPhrase": "Multi-layered client-server neural-net",
            "bs": "harness real-time e-markets",
        },
    }


def make_post(post_id: int, user_id: int) -> Dict[str, Any]:
    return {
        "userId": user_id,
        "id": post_id,
        "title": f"post title {post_id}",
        "body": f"post body {post_id}",
    }


def make_comment(comment_id: int, post_id: int) -> Dict[str, Any]:
    return {
        "postId": post_id,
        "id": comment_id,
        "name": f"comment {comment_id}",
        "email": f"Eliseo{comment_id}@gardner.biz",
        "body": f"comment body {comment_id}",
    }


class FakeFixtureApi:
    """
    Minimal JSONPlaceholder look-alike.

    3 users, 10 posts (userId alternating 1/2), 20 comments (2 per post).
    Writes are echoed but not persisted, like the real service.

    ``fail_when`` may be set to a predicate over the incoming request; matching
    requests raise ``httpx.ConnectError`` instead of being answered.
    """

    def __init__(self) -> None:
        self.resources: Dict[str, List[Dict[str, Any]]] = {
            "users": [make_user(i) for i in range(1, 4)],
            "posts": [make_post(i, 1 if i % 2 else 2) for i in range(1, 11)],
            "comments": [make_comment(i, (i + 1) // 2) for i in range(1, 21)],
        }
        self.requests: List[httpx.Request] = []
        self.fail_when: Optional[Callable[[httpx.Request], bool]] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_when is not None and self.fail_when(request):
            raise httpx.ConnectError("connection refused", request=request)

        parts = [p for p in request.url.path.split("/") if p]
        if not parts or parts[0] not in self.resources:
            return httpx.Response(404, json={})
        items = self.resources[parts[0]]
        body = json.loads(request.content) if request.content else None

        if len(parts) == 1:
            if request.method == "GET":
                filtered = [
                    item for item in items
                    if all(str(item.get(k)) == v for k, v in request.url.params.items())
                ]
                return httpx.Response(200, json=filtered)
            if request.method == "POST":
                return httpx.Response(201, json={**body, "id": len(items) + 1})
            return httpx.Response(404, json={})

        item_id = int(parts[1])
        existing = next((item for item in items if item["id"] == item_id), None)
        if request.method == "GET":
            if existing is None:
                return httpx.Response(404, json={})
            return httpx.Response(200, json=existing)
        if request.method == "PUT":
            return httpx.Response(200, json={**body, "id": item_id})
        if request.method == "PATCH":
            return httpx.Response(200, json={**(existing or {}), **body, "id": item_id})
        if request.method == "DELETE":
            return httpx.Response(200, json={})
        return httpx.Response(405, json={})

    def requests_to(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def api_settings() -> ApiSettings:
    return ApiSettings(
        base_url=FAKE_BASE_URL,
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        timeout_ms=2000,
        batch_size=5,
        rate_limit_delay_ms=0,
    )


@pytest.fixture
def harness_log() -> HarnessLogger:
    return HarnessLogger(level="DEBUG")


@pytest.fixture
def fake_api() -> FakeFixtureApi:
    return FakeFixtureApi()


@pytest_asyncio.fixture
async def api_client(api_settings, harness_log, fake_api):
    async with ApiClient(api_settings, harness_log, transport=httpx.MockTransport(fake_api)) as client:
        yield client


@pytest.fixture
def log_records():
    """Capture loguru records emitted during the test."""
    records: List[Dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)
