"""
================================================================================
Harness Tools
================================================================================

Supporting utilities for the fixture API test harness.

Modules:
    - common: Logging bootstrap shared by the framework and the CLIs
    - report_tools: Reporting capability (Allure or no-op)
    - health_check: Environment health-check CLI

Example:
    from harness_tools.common import init_logger
    from harness_tools.report_tools import build_reporter

    init_logger("DEBUG")
    reporter = build_reporter(enabled=True)

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
    "health_check",
]
