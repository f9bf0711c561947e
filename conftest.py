"""
Repository-level pytest configuration.

Provides safe defaults so a fresh clone runs without any environment set up:
the fixture API is public and needs no credentials. Values already provided
by the user or CI are left untouched.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from harness_tools.common import init_logger


ENV_DEFAULTS = {
    "API_BASE_URL": "https://jsonplaceholder.typicode.com",
    "WEB_BASE_URL": "https://jsonplaceholder.typicode.com",
    "TEST_ENV": "development",
    "LOG_LEVEL": "INFO",
}


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _safe_env_defaults() -> Generator[None, None, None]:
    """Set environment defaults if not already provided by the user/CI."""
    for k, v in ENV_DEFAULTS.items():
        os.environ.setdefault(k, v)

    init_logger()
    yield
