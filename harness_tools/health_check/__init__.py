"""Pre-run health check for the harness."""

from .health_checker import (
    CheckResult,
    HealthChecker,
    HealthCheckError,
    build_default_checker,
    main,
    run_health_check,
)

__all__ = [
    "CheckResult",
    "HealthCheckError",
    "HealthChecker",
    "build_default_checker",
    "main",
    "run_health_check",
]
