import httpx
import pytest

from harness_tools.health_check import HealthChecker, HealthCheckError, build_default_checker, main
from harness_tools.health_check.health_checker import (
    REQUIRED_DIRECTORIES,
    check_api_reachability,
    check_configuration,
    check_project_structure,
    check_python_version,
)
from testsuites.api_testing.framework import config_loader


FULL_ENV = {
    "API_BASE_URL": "https://fixture.test",
    "WEB_BASE_URL": "https://fixture.test",
    "TEST_ENV": "ci",
    "LOG_LEVEL": "INFO",
}


@pytest.fixture
def project_tree(tmp_path):
    for directory in REQUIRED_DIRECTORIES:
        (tmp_path / directory).mkdir(parents=True)
    return tmp_path


def _transport(status):
    return httpx.MockTransport(lambda request: httpx.Response(status))


def test_python_version_check():
    check_python_version(minimum=(3, 9), current=(3, 12))
    with pytest.raises(HealthCheckError):
        check_python_version(minimum=(3, 9), current=(3, 8))


def test_configuration_check_names_missing_keys():
    check_configuration(FULL_ENV)
    with pytest.raises(HealthCheckError, match="WEB_BASE_URL"):
        check_configuration({k: v for k, v in FULL_ENV.items() if k != "WEB_BASE_URL"})


def test_project_structure_check(project_tree, tmp_path):
    check_project_structure(project_tree)
    with pytest.raises(HealthCheckError, match="config"):
        check_project_structure(tmp_path / "empty")


@pytest.mark.parametrize("status", [200, 301])
async def test_reachability_accepts_2xx_and_3xx(status):
    await check_api_reachability("https://fixture.test", transport=_transport(status))


async def test_reachability_rejects_5xx():
    with pytest.raises(HealthCheckError, match="503"):
        await check_api_reachability("https://fixture.test", transport=_transport(503))


async def test_reachability_reports_connection_failure():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(HealthCheckError, match="unreachable"):
        await check_api_reachability("https://fixture.test", transport=httpx.MockTransport(refuse))


async def test_checker_runs_every_check_even_after_failure():
    checker = HealthChecker()
    ran = []

    def failing():
        ran.append("first")
        raise HealthCheckError("boom")

    async def passing():
        ran.append("second")

    checker.add_check("Failing", failing)
    checker.add_check("Passing", passing)
    results = await checker.run_checks()

    assert ran == ["first", "second"]
    assert [r.status for r in results] == ["FAIL", "PASS"]
    assert results[0].error == "boom"
    assert checker.exit_code == 1


async def test_default_checker_healthy(project_tree):
    checker = build_default_checker(project_root=project_tree, environ=FULL_ENV, transport=_transport(200))
    await checker.run_checks()

    assert [r.name for r in checker.results] == [
        "Python Version",
        "Environment Configuration",
        "Project Structure",
        "API Reachability",
    ]
    assert checker.healthy
    assert checker.exit_code == 0


async def test_default_checker_unhealthy_without_configuration(project_tree):
    checker = build_default_checker(project_root=project_tree, environ={}, skip_network=True)
    await checker.run_checks()

    assert checker.exit_code == 1
    assert len(checker.results) == 3


async def test_invalid_config_file_fails_reachability_check(project_tree, tmp_path, monkeypatch):
    broken = tmp_path / "config.yaml"
    broken.write_text("api: [unclosed\n", encoding="utf-8")
    monkeypatch.setattr(config_loader, "DEFAULT_CONFIG_PATH", broken)
    environ = {key: value for key, value in FULL_ENV.items() if key != "API_BASE_URL"}

    checker = build_default_checker(project_root=project_tree, environ=environ, transport=_transport(200))
    await checker.run_checks()

    reachability = checker.results[-1]
    assert reachability.name == "API Reachability"
    assert reachability.status == "FAIL"
    assert "Invalid YAML" in reachability.error
    assert checker.exit_code == 1


def test_main_exit_codes(project_tree, tmp_path, monkeypatch):
    for key, value in FULL_ENV.items():
        monkeypatch.setenv(key, value)

    assert main(["--skip-network", "--project-root", str(project_tree)]) == 0
    assert main(["--skip-network", "--project-root", str(tmp_path / "missing")]) == 1
