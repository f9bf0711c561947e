"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for the live fixture API suites.

The tests here talk to the real fixture API and are skipped unless
RUN_LIVE_API_TESTS is set to a truthy value.

Fixtures:
    - config / api_settings: Configuration loader and its frozen snapshot
    - harness_log: Injected logging context
    - reporter: Allure or no-op reporter, chosen from configuration
    - api_client: Open async API client
    - *_service / *_operations: Domain services and validated operations
    - test_data: Seeded payload factory

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio

from harness_tools.report_tools import Reporter, build_reporter

from ..framework import (
    ApiClient,
    ApiSettings,
    CommentsApiService,
    CommentsOperations,
    ConfigLoader,
    HarnessLogger,
    PostsApiService,
    PostsOperations,
    UsersApiService,
    UsersOperations,
)
from ..framework.test_data_factory import TestDataFactory


LIVE_TESTS_ENV = "RUN_LIVE_API_TESTS"


def _live_tests_enabled() -> bool:
    return os.getenv(LIVE_TESTS_ENV, "").lower() in ("1", "true", "yes", "on")


# =============================================================================
# Hooks
# =============================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item for the test-end log."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# =============================================================================
# Session-Scoped Fixtures (Shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """
    Provide configuration loader instance.

    Session-scoped to ensure configuration is loaded only once.
    """
    return ConfigLoader()


@pytest.fixture(scope="session")
def api_settings(config: ConfigLoader) -> ApiSettings:
    """Frozen API configuration for this worker."""
    return ApiSettings.from_config(config)


@pytest.fixture(scope="session")
def harness_log(api_settings: ApiSettings) -> HarnessLogger:
    """One logging context per worker, injected into every component."""
    return HarnessLogger(level=api_settings.log_level)


@pytest.fixture(scope="session")
def reporter(config: ConfigLoader) -> Reporter:
    return build_reporter(config.get("reporting.allure_enabled", True))


# =============================================================================
# Function-Scoped Fixtures (Fresh for each test)
# =============================================================================

@pytest.fixture(autouse=True)
def _require_live_api() -> None:
    if not _live_tests_enabled():
        pytest.skip(f"Live fixture API tests disabled; set {LIVE_TESTS_ENV}=1 to run them")


@pytest.fixture(autouse=True)
def _log_test_lifecycle(
    request,
    harness_log: HarnessLogger,
    reporter: Reporter,
    api_settings: ApiSettings,
) -> Generator[None, None, None]:
    """Log the start and the outcome of every test."""
    harness_log.log_test_start(request.node.name, request.node.function.__doc__)
    reporter.attach_test_context(
        {
            "test": request.node.nodeid,
            "environment": api_settings.environment,
            "base_url": api_settings.base_url,
        }
    )
    yield
    report = getattr(request.node, "rep_call", None)
    status = report.outcome.upper() if report is not None else "SKIPPED"
    duration = round(report.duration * 1000, 2) if report is not None else None
    harness_log.log_test_end(request.node.name, status, duration)


@pytest_asyncio.fixture
async def api_client(
    api_settings: ApiSettings,
    harness_log: HarnessLogger,
    reporter: Reporter,
) -> AsyncGenerator[ApiClient, None]:
    """
    Provide an open API client.

    Usage:
        async def test_example(api_client):
            response = await api_client.get("/posts/1")
            assert response.status == 200
    """
    async with ApiClient(api_settings, harness_log, reporter=reporter) as client:
        yield client


@pytest.fixture
def test_data() -> TestDataFactory:
    """Seeded payload factory; fresh per test so data is reproducible."""
    return TestDataFactory()


@pytest.fixture
def users_service(api_client: ApiClient, harness_log: HarnessLogger, test_data: TestDataFactory) -> UsersApiService:
    return UsersApiService(api_client, harness_log, factory=test_data.user)


@pytest.fixture
def posts_service(api_client: ApiClient, harness_log: HarnessLogger, test_data: TestDataFactory) -> PostsApiService:
    return PostsApiService(api_client, harness_log, factory=test_data.post)


@pytest.fixture
def comments_service(
    api_client: ApiClient, harness_log: HarnessLogger, test_data: TestDataFactory
) -> CommentsApiService:
    return CommentsApiService(api_client, harness_log, factory=test_data.comment)


@pytest.fixture
def users_operations(
    users_service: UsersApiService, harness_log: HarnessLogger, test_data: TestDataFactory
) -> UsersOperations:
    return UsersOperations(users_service, harness_log, factory=test_data.user)


@pytest.fixture
def posts_operations(
    posts_service: PostsApiService, harness_log: HarnessLogger, test_data: TestDataFactory
) -> PostsOperations:
    return PostsOperations(posts_service, harness_log, factory=test_data.post)


@pytest.fixture
def comments_operations(
    comments_service: CommentsApiService, harness_log: HarnessLogger, test_data: TestDataFactory
) -> CommentsOperations:
    return CommentsOperations(comments_service, harness_log, factory=test_data.comment)
