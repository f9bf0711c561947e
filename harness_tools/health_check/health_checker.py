"""
================================================================================
Health Check Tool
================================================================================

Verifies that the harness can run before any test is launched.

Checks:
- Python runtime version
- Required configuration keys (API_BASE_URL, WEB_BASE_URL, TEST_ENV, LOG_LEVEL)
- Expected project directory structure
- Reachability of the configured API base URL

Each check reports PASS or FAIL with its duration; the process exits with 0
when every check passed and 1 otherwise.

================================================================================
"""

import argparse
import asyncio
import inspect
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence, Tuple, Union

import httpx
from loguru import logger

from testsuites.api_testing.framework.config_loader import (
    DEFAULT_BASE_URL,
    ConfigLoader,
    missing_required_keys,
)


PROJECT_ROOT = Path(__file__).resolve().parents[2]

MIN_PYTHON_VERSION = (3, 9)

REQUIRED_DIRECTORIES = (
    "testsuites/api_testing/framework",
    "testsuites/api_testing/tests",
    "testsuites/unit",
    "config",
)

REACHABILITY_TIMEOUT_SECONDS = 10.0


class HealthCheckError(Exception):
    """Raised by a check function to mark the check as failed."""
    pass


# ================================================================================
# Result Models
# ================================================================================

@dataclass
class CheckResult:
    """
    Outcome of a single health check.

    Attributes:
        name: Check name
        passed: Whether the check passed
        duration_ms: Time the check took
        error: Failure reason, None when passed
    """
    name: str
    passed: bool
    duration_ms: float
    error: Optional[str] = None

    @property
    def status(self) -> str:
        return "PASS" if self.passed else "FAIL"


CheckFn = Callable[[], Union[None, Awaitable[None]]]


# ================================================================================
# Runner
# ================================================================================

class HealthChecker:
    """
    Ordered collection of named checks.

    A check is a plain or async callable that returns normally on success and
    raises on failure.
    """

    def __init__(self) -> None:
        self.checks: List[Tuple[str, CheckFn]] = []
        self.results: List[CheckResult] = []

    def add_check(self, name: str, check: CheckFn) -> None:
        self.checks.append((name, check))

    async def run_checks(self) -> List[CheckResult]:
        """Run every check in order; one failure never stops the others."""
        logger.info("🏥 Fixture API Harness Health Check")
        logger.info("=" * 50)
        self.results = []

        for name, check in self.checks:
            logger.info(f"⏳ Checking: {name}...")
            started = time.perf_counter()
            try:
                outcome = check()
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                duration = _elapsed_ms(started)
                logger.error(f"❌ {name} - FAILED ({duration}ms)")
                logger.error(f"   Error: {e}")
                self.results.append(CheckResult(name, False, duration, str(e)))
            else:
                duration = _elapsed_ms(started)
                logger.info(f"✅ {name} - OK ({duration}ms)")
                self.results.append(CheckResult(name, True, duration))

        self.log_summary()
        return self.results

    @property
    def healthy(self) -> bool:
        return all(result.passed for result in self.results)

    @property
    def exit_code(self) -> int:
        return 0 if self.healthy else 1

    def log_summary(self) -> None:
        failed = [r for r in self.results if not r.passed]
        total_duration = round(sum(r.duration_ms for r in self.results), 2)

        logger.info("=" * 50)
        logger.info("📊 Health Check Summary")
        logger.info("=" * 50)
        logger.info(f"Total Checks: {len(self.results)}")
        logger.info(f"Passed: {len(self.results) - len(failed)}")
        logger.info(f"Failed: {len(failed)}")
        logger.info(f"Total Duration: {total_duration}ms")
        logger.info(f"Status: {'✅ HEALTHY' if not failed else '❌ UNHEALTHY'}")

        if failed:
            logger.error("🚨 Failed Checks:")
            for result in failed:
                logger.error(f"  - {result.name}: {result.error}")


# ================================================================================
# Checks
# ================================================================================

def check_python_version(
    minimum: Tuple[int, int] = MIN_PYTHON_VERSION,
    current: Optional[Sequence[int]] = None,
) -> None:
    current = tuple(current if current is not None else sys.version_info[:2])
    if current[:2] < minimum:
        raise HealthCheckError(
            f"Python {minimum[0]}.{minimum[1]}+ required, found {current[0]}.{current[1]}"
        )


def check_configuration(environ: Optional[Mapping[str, str]] = None) -> None:
    missing = missing_required_keys(environ)
    if missing:
        raise HealthCheckError(f"Missing environment variables: {', '.join(missing)}")


def check_project_structure(
    root: Path = PROJECT_ROOT,
    directories: Sequence[str] = REQUIRED_DIRECTORIES,
) -> None:
    missing = [d for d in directories if not (root / d).is_dir()]
    if missing:
        raise HealthCheckError(f"Missing directories: {', '.join(missing)}")


async def check_api_reachability(
    base_url: str,
    timeout: float = REACHABILITY_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """GET the base URL; any 2xx or 3xx answer counts as reachable."""
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            response = await client.get(base_url)
        except httpx.TimeoutException:
            raise HealthCheckError(f"API connection timeout after {timeout}s: {base_url}") from None
        except httpx.TransportError as e:
            raise HealthCheckError(f"API unreachable: {base_url} ({e})") from e

    if not 200 <= response.status_code < 400:
        raise HealthCheckError(f"API returned status {response.status_code}")


def resolve_api_base_url(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return environ.get("API_BASE_URL") or ConfigLoader().get("api.base_url", DEFAULT_BASE_URL)


# ================================================================================
# Convenience Functions
# ================================================================================

def build_default_checker(
    project_root: Path = PROJECT_ROOT,
    environ: Optional[Mapping[str, str]] = None,
    skip_network: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> HealthChecker:
    """Assemble the standard set of checks."""
    checker = HealthChecker()
    checker.add_check("Python Version", check_python_version)
    checker.add_check("Environment Configuration", lambda: check_configuration(environ))
    checker.add_check("Project Structure", lambda: check_project_structure(project_root))
    if not skip_network:
        async def reachability() -> None:
            # Config errors surface as a FAIL result, not while building
            await check_api_reachability(resolve_api_base_url(environ), transport=transport)

        checker.add_check("API Reachability", reachability)
    return checker


async def run_health_check(**kwargs: Any) -> int:
    """Run the standard checks and return the process exit code."""
    checker = build_default_checker(**kwargs)
    await checker.run_checks()
    return checker.exit_code


# ================================================================================
# CLI Entry Point
# ================================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for the health check."""
    parser = argparse.ArgumentParser(description="Fixture API harness health check")
    parser.add_argument(
        "--skip-network",
        action="store_true",
        help="Skip the API reachability check",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=PROJECT_ROOT,
        help="Repository root holding testsuites/ and config/",
    )
    args = parser.parse_args(argv)

    return asyncio.run(
        run_health_check(project_root=args.project_root, skip_network=args.skip_network)
    )


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


__all__ = [
    "CheckResult",
    "HealthCheckError",
    "HealthChecker",
    "build_default_checker",
    "check_api_reachability",
    "check_configuration",
    "check_project_structure",
    "check_python_version",
    "main",
    "run_health_check",
]
