"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support,
plus the immutable ApiSettings snapshot every harness component reads from.

Features:
    - Hierarchical YAML configuration loading
    - Environment variable override (API_BASE_URL overrides api.base_url)
    - Conventional aliases (LOG_LEVEL, TEST_ENV, WEB_BASE_URL, API_KEY)
    - Dot notation path access with default values
    - Frozen per-worker settings snapshot

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from loguru import logger


# Default configuration file path (repository root /config/config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "config.yaml"

DEFAULT_BASE_URL = "https://jsonplaceholder.typicode.com"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_BATCH_SIZE = 5
DEFAULT_RATE_LIMIT_DELAY_MS = 100
DEFAULT_USER_AGENT = "FixtureApiAutotest/1.0.0"

# Environment keys that must be present at startup (checked by the health check)
REQUIRED_ENV_KEYS: Tuple[str, ...] = ("API_BASE_URL", "WEB_BASE_URL", "TEST_ENV", "LOG_LEVEL")

# Dot paths whose environment variable does not follow the KEY_PATH convention
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "logging.level": ("LOG_LEVEL",),
    "environment": ("TEST_ENV",),
    "web.base_url": ("WEB_BASE_URL",),
    "api.api_key": ("API_KEY",),
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (API_BASE_URL, or an alias such as LOG_LEVEL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("api.base_url", "https://jsonplaceholder.typicode.com")
        'https://jsonplaceholder.typicode.com'

        >>> config.get("api.batch_size", 5)
        5
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton pattern - configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping, got {type(loaded).__name__}"
            )
        self._config = loaded
        logger.debug(f"Loaded configuration from: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "api.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_value = self._lookup_env(key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section, or an empty dict."""
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _lookup_env(self, key: str) -> Optional[str]:
        env_keys = (key.upper().replace(".", "_"),) + ENV_ALIASES.get(key, ())
        for env_key in env_keys:
            env_value = os.environ.get(env_key)
            if env_value is not None:
                return env_value
        return None

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


def missing_required_keys(environ: Optional[Mapping[str, str]] = None) -> Tuple[str, ...]:
    """Return the REQUIRED_ENV_KEYS absent (or empty) in the environment."""
    environ = os.environ if environ is None else environ
    return tuple(key for key in REQUIRED_ENV_KEYS if not environ.get(key))


@dataclass(frozen=True)
class ApiSettings:
    """
    Read-only configuration snapshot shared by every component of a worker.

    Built once with ApiSettings.from_config() and never mutated afterwards.
    """

    base_url: str = DEFAULT_BASE_URL
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    batch_size: int = DEFAULT_BATCH_SIZE
    rate_limit_delay_ms: int = DEFAULT_RATE_LIMIT_DELAY_MS
    retry_idempotent_gets: bool = False
    environment: str = "development"
    web_base_url: str = DEFAULT_BASE_URL
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ConfigurationError("api.base_url must not be empty")
        if self.timeout_ms <= 0:
            raise ConfigurationError(f"api.timeout must be positive, got {self.timeout_ms}")
        if self.batch_size < 1:
            raise ConfigurationError(f"api.batch_size must be >= 1, got {self.batch_size}")
        if self.rate_limit_delay_ms < 0:
            raise ConfigurationError(
                f"api.rate_limit_delay_ms must be >= 0, got {self.rate_limit_delay_ms}"
            )
        if self.max_retry_attempts < 1:
            raise ConfigurationError(
                f"api.retry_attempts must be >= 1, got {self.max_retry_attempts}"
            )
        # Freeze whatever mapping the caller handed in
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "ApiSettings":
        """Build the snapshot from a ConfigLoader (env overrides included)."""
        if config is None:
            config = ConfigLoader()

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": config.get("api.user_agent", DEFAULT_USER_AGENT),
        }
        api_key = config.get("api.api_key")
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        try:
            settings = cls(
                base_url=str(config.get("api.base_url", DEFAULT_BASE_URL)),
                headers=headers,
                timeout_ms=int(config.get("api.timeout", DEFAULT_TIMEOUT_MS)),
                max_retry_attempts=int(config.get("api.retry_attempts", DEFAULT_RETRY_ATTEMPTS)),
                batch_size=int(config.get("api.batch_size", DEFAULT_BATCH_SIZE)),
                rate_limit_delay_ms=int(
                    config.get("api.rate_limit_delay_ms", DEFAULT_RATE_LIMIT_DELAY_MS)
                ),
                retry_idempotent_gets=bool(config.get("api.retry_idempotent_gets", False)),
                environment=str(config.get("environment", "development")),
                web_base_url=str(config.get("web.base_url", DEFAULT_BASE_URL)),
                log_level=str(config.get("logging.level", "INFO")).upper(),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid API configuration value: {e}") from e

        logger.debug(
            f"API settings: base_url={settings.base_url} env={settings.environment} "
            f"timeout={settings.timeout_ms}ms batch_size={settings.batch_size}"
        )
        return settings


__all__ = [
    "ApiSettings",
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "REQUIRED_ENV_KEYS",
    "missing_required_keys",
]
