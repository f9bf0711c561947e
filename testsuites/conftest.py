"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the project-wide markers and tags collected tests by location.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and negative paths"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "crud: Create/read/update/delete scenarios"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the harness itself"
    )
    config.addinivalue_line(
        "markers", "api: Tests against the fixture API"
    )
    config.addinivalue_line(
        "markers", "requires_external: Needs network access to the live fixture API"
    )

    # Resource markers
    config.addinivalue_line(
        "markers", "users: Tests related to /users"
    )
    config.addinivalue_line(
        "markers", "posts: Tests related to /posts"
    )
    config.addinivalue_line(
        "markers", "comments: Tests related to /comments"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests with 'api' / 'unit' according to the directory they live in."""
    for item in items:
        path = str(item.fspath)
        if "api_testing" in path:
            item.add_marker(pytest.mark.api)
            item.add_marker(pytest.mark.requires_external)

        if "unit" in path.replace("\\", "/").split("/"):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Fixture API Automation Harness",
        "=" * 60,
        "",
    ]
