import dataclasses

import pytest
import yaml

from testsuites.api_testing.framework.config_loader import (
    ApiSettings,
    ConfigLoader,
    ConfigurationError,
    missing_required_keys,
)


def _write_config(tmp_path, data):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data), encoding="utf-8")
    return config_path


def test_env_override_and_defaults(monkeypatch, tmp_path):
    monkeypatch.delenv("API_BASE_URL", raising=False)
    config_path = _write_config(tmp_path, {"api": {"base_url": "http://example.com", "timeout": 10}})

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.base_url") == "http://example.com"
    assert loader.get("api.retry_attempts", 3) == 3

    ConfigLoader.reset()
    monkeypatch.setenv("API_BASE_URL", "http://env.example.com")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.base_url") == "http://env.example.com"


def test_reload_updates_values(tmp_path):
    config_path = _write_config(tmp_path, {"api": {"timeout": 5}})

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.timeout") == 5

    config_path.write_text(yaml.dump({"api": {"timeout": 15}}), encoding="utf-8")
    loader.reload()
    assert loader.get("api.timeout") == 15


def test_loader_is_a_singleton(tmp_path):
    config_path = _write_config(tmp_path, {"environment": "staging"})
    assert ConfigLoader(config_path=config_path) is ConfigLoader()


def test_env_values_are_converted_to_the_default_type(monkeypatch, tmp_path):
    config_path = _write_config(tmp_path, {})
    monkeypatch.setenv("API_BATCH_SIZE", "8")
    monkeypatch.setenv("API_RETRY_IDEMPOTENT_GETS", "yes")

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.batch_size", 5) == 8
    assert loader.get("api.retry_idempotent_gets", False) is True


def test_conventional_aliases(monkeypatch, tmp_path):
    config_path = _write_config(tmp_path, {"logging": {"level": "INFO"}})
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("TEST_ENV", "ci")

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("logging.level") == "DEBUG"
    assert loader.get("environment") == "ci"


def test_missing_file_falls_back_to_defaults(tmp_path):
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")
    assert loader.get("api.batch_size", 5) == 5
    assert loader.get_section("api") == {}


def test_invalid_yaml_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("api: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_non_mapping_root_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_api_settings_from_config(monkeypatch, tmp_path):
    for key in ("API_BASE_URL", "API_KEY", "API_API_KEY", "LOG_LEVEL", "TEST_ENV"):
        monkeypatch.delenv(key, raising=False)
    config_path = _write_config(
        tmp_path,
        {
            "environment": "staging",
            "api": {
                "base_url": "https://fixture.test",
                "timeout": 1500,
                "batch_size": 3,
                "rate_limit_delay_ms": 50,
                "api_key": "secret",
            },
            "logging": {"level": "warn"},
        },
    )

    settings = ApiSettings.from_config(ConfigLoader(config_path=config_path))

    assert settings.base_url == "https://fixture.test"
    assert settings.timeout_seconds == 1.5
    assert settings.batch_size == 3
    assert settings.rate_limit_delay_ms == 50
    assert settings.environment == "staging"
    assert settings.log_level == "WARN"
    assert settings.headers["Authorization"] == "Bearer secret"
    assert settings.headers["Content-Type"] == "application/json"
    assert settings.retry_idempotent_gets is False


def test_api_settings_are_read_only():
    settings = ApiSettings(headers={"Accept": "application/json"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.batch_size = 10
    with pytest.raises(TypeError):
        settings.headers["Accept"] = "text/plain"


@pytest.mark.parametrize(
    "overrides",
    [
        {"base_url": ""},
        {"timeout_ms": 0},
        {"batch_size": 0},
        {"rate_limit_delay_ms": -1},
        {"max_retry_attempts": 0},
    ],
)
def test_api_settings_reject_invalid_values(overrides):
    with pytest.raises(ConfigurationError):
        ApiSettings(**overrides)


def test_missing_required_keys():
    environ = {"API_BASE_URL": "https://fixture.test", "TEST_ENV": "", "LOG_LEVEL": "INFO"}
    assert missing_required_keys(environ) == ("WEB_BASE_URL", "TEST_ENV")
