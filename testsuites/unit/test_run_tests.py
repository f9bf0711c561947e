import sys

import pytest

from run_tests import SUITE_PATHS, TestRunner, build_parser


def test_unit_suite_command():
    cmd = TestRunner(suite="unit", allure_report=False).build_pytest_command()

    assert cmd[:3] == [sys.executable, "-m", "pytest"]
    assert "testsuites/unit" in cmd
    assert "testsuites/api_testing/tests" not in cmd
    assert "--alluredir" not in cmd
    assert cmd[-1] == "-q"


def test_tags_parallel_and_allure():
    runner = TestRunner(suite="all", tags=["P0", "smoke"], parallel=4, verbose=True)
    cmd = runner.build_pytest_command()

    assert cmd[cmd.index("-m") + 1] == "P0 or smoke"
    assert cmd[cmd.index("-n") + 1] == "4"
    assert cmd[cmd.index("--alluredir") + 1] == str(runner.allure_results)
    assert all(path in cmd for path in SUITE_PATHS["all"])
    assert cmd[-1] == "-v"


def test_live_flag_enables_live_tests(monkeypatch):
    monkeypatch.delenv("RUN_LIVE_API_TESTS", raising=False)

    assert "RUN_LIVE_API_TESTS" not in TestRunner(suite="api").build_environment()
    assert TestRunner(suite="api", live=True).build_environment()["RUN_LIVE_API_TESTS"] == "1"


def test_unknown_suite_rejected():
    with pytest.raises(ValueError):
        TestRunner(suite="ui")


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.suite == "all"
    assert args.parallel == 1
    assert not args.live and not args.no_allure
