"""
Centralized configuration management for the silence manager.

This module provides a single source of truth for all configuration values,
supporting:
- JSON configuration file (config.json)
- Environment variable overrides
- Programmatic defaults

Configuration is loaded in priority order:
1. Environment variables (highest priority)
2. JSON config file
3. Dataclass defaults (lowest priority)

Command line flags are applied on top by the entry points via ``with_overrides``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from silence_manager.core.constants import (
    DEFAULT_LABEL_SELECTOR,
    DEFAULT_LABELS,
    DEFAULT_SEARCH_DISTANCE,
    DEFAULT_SEARCH_THRESHOLD,
)

logger = logging.getLogger(__name__)

# Default config file locations (searched in order)
CONFIG_FILE_PATHS = [
    Path("config.json"),  # Current directory
    Path("./config/config.json"),  # Config subdirectory
    Path.home() / ".silence-manager" / "config.json",  # User home
    Path("/etc/silence-manager/config.json"),  # System-wide
]


def _load_config_file() -> dict[str, Any]:
    """Load configuration from JSON file.

    Searches for config file in standard locations, or uses
    CONFIG_FILE environment variable if set.

    Returns:
        Dictionary of configuration values, or empty dict if no file found.
    """
    env_config_path = os.getenv("CONFIG_FILE")
    if env_config_path:
        config_path = Path(env_config_path)
        if config_path.exists():
            with config_path.open() as f:
                return json.load(f)
        else:
            logger.warning(f"CONFIG_FILE specified but not found: {env_config_path}")

    for path in CONFIG_FILE_PATHS:
        if path.exists():
            with path.open() as f:
                return json.load(f)

    return {}


def _get_env_or_config(
    env_key: str,
    config_dict: dict[str, Any],
    config_key: str,
    default: Any,
    type_cast: type | None = None
) -> Any:
    """Get value from environment, config file, or default (in priority order).

    Args:
        env_key: Environment variable name
        config_dict: Config dictionary section
        config_key: Key within config dictionary
        default: Default value if not found
        type_cast: Optional type to cast the value to

    Returns:
        Configuration value from highest priority source
    """
    env_value = os.getenv(env_key)
    if env_value is not None:
        if type_cast is bool:
            return env_value.lower() in ("true", "1", "yes")
        return type_cast(env_value) if type_cast else env_value

    if config_key in config_dict:
        return config_dict[config_key]

    return default


def parse_label_selector(selector: str | None) -> tuple[str, ...]:
    """Split a comma-separated label selector into ordered, distinct names.

    Blank entries and repeats are dropped; the first occurrence wins.
    """
    if not selector:
        return ()
    names: list[str] = []
    for part in selector.split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return tuple(names)


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the panel HTTP server."""

    host: str = "0.0.0.0"
    port: int = 9193
    access_log: bool = True

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> ServerConfig:
        """Create configuration from config dict with environment overrides."""
        server_config = config.get("server", {})
        return cls(
            host=_get_env_or_config("HOST", server_config, "host", cls.host),
            port=_get_env_or_config("PORT", server_config, "port", cls.port, int),
            access_log=_get_env_or_config("ACCESS_LOG", server_config, "access_log", cls.access_log, bool),
        )


@dataclass(frozen=True)
class PrometheusConfig:
    """Configuration for the Prometheus client."""

    endpoint: str = "http://prometheus.foo.bar"
    timeout_seconds: int = 10
    max_retries: int = 2
    pool_connections: int = 10
    pool_maxsize: int = 10
    retry_backoff_factor: float = 0.3
    retry_status_forcelist: tuple[int, ...] = (500, 502, 503, 504)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> PrometheusConfig:
        """Create configuration from config dict with environment overrides."""
        prom_config = config.get("prometheus", {})
        return cls(
            endpoint=_get_env_or_config("PROMETHEUS_URL", prom_config, "endpoint", cls.endpoint),
            timeout_seconds=_get_env_or_config(
                "PROMETHEUS_TIMEOUT", prom_config, "timeout_seconds", cls.timeout_seconds, int
            ),
            max_retries=prom_config.get("max_retries", cls.max_retries),
            pool_connections=prom_config.get("pool_connections", cls.pool_connections),
            pool_maxsize=prom_config.get("pool_maxsize", cls.pool_maxsize),
            retry_backoff_factor=prom_config.get("retry_backoff_factor", cls.retry_backoff_factor),
            retry_status_forcelist=tuple(prom_config.get("retry_status_forcelist", cls.retry_status_forcelist)),
        )


@dataclass(frozen=True)
class AlertmanagerConfig:
    """Configuration for the Alertmanager client.

    Silence creation is attempted once; there is no retry setting.
    """

    endpoint: str = "http://alertmanager.foo.bar"
    timeout_seconds: int = 10

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> AlertmanagerConfig:
        """Create configuration from config dict with environment overrides."""
        am_config = config.get("alertmanager", {})
        return cls(
            endpoint=_get_env_or_config("ALERTMANAGER_URL", am_config, "endpoint", cls.endpoint),
            timeout_seconds=_get_env_or_config(
                "ALERTMANAGER_TIMEOUT", am_config, "timeout_seconds", cls.timeout_seconds, int
            ),
        )


@dataclass(frozen=True)
class LabelConfig:
    """Configuration for the labels offered in the panel."""

    label_selector: str = DEFAULT_LABEL_SELECTOR

    @property
    def labels(self) -> tuple[str, ...]:
        """Ordered label names, falling back to the defaults when empty."""
        return parse_label_selector(self.label_selector) or DEFAULT_LABELS

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> LabelConfig:
        """Create configuration from config dict with environment overrides."""
        label_config = config.get("labels", {})
        selector = _get_env_or_config("LABEL_SELECTOR", label_config, "label_selector", cls.label_selector)
        if isinstance(selector, list):
            selector = ",".join(str(name) for name in selector)
        return cls(label_selector=selector)


@dataclass(frozen=True)
class SearchConfig:
    """Tolerance settings for the per-label fuzzy index."""

    threshold: float = DEFAULT_SEARCH_THRESHOLD
    distance: int = DEFAULT_SEARCH_DISTANCE

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> SearchConfig:
        """Create configuration from config dict with environment overrides."""
        search_config = config.get("search", {})
        return cls(
            threshold=_get_env_or_config("SEARCH_THRESHOLD", search_config, "threshold", cls.threshold, float),
            distance=search_config.get("distance", cls.distance),
        )


@dataclass(frozen=True)
class PanelConfig:
    """Behaviour of the operator panel."""

    default_duration: str = "2h"
    notification_history: int = 50

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> PanelConfig:
        """Create configuration from config dict."""
        panel_config = config.get("panel", {})
        return cls(
            default_duration=panel_config.get("default_duration", cls.default_duration),
            notification_history=panel_config.get("notification_history", cls.notification_history),
        )


@dataclass
class AppConfig:
    """Root configuration aggregating all sub-configurations."""

    server: ServerConfig = field(default_factory=ServerConfig)
    prometheus: PrometheusConfig = field(default_factory=PrometheusConfig)
    alertmanager: AlertmanagerConfig = field(default_factory=AlertmanagerConfig)
    labels: LabelConfig = field(default_factory=LabelConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    panel: PanelConfig = field(default_factory=PanelConfig)

    # Track which config file was loaded (if any)
    config_file_path: str | None = None

    @classmethod
    def from_file(cls, file_path: str | Path) -> AppConfig:
        """Load configuration from a specific JSON file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            json.JSONDecodeError: If the file contains invalid JSON.
        """
        path = Path(file_path)
        with path.open() as f:
            config_dict = json.load(f)
        return cls.from_config(config_dict, config_file_path=str(path))

    @classmethod
    def from_config(cls, config: dict[str, Any], config_file_path: str | None = None) -> AppConfig:
        """Create full configuration from config dictionary."""
        return cls(
            server=ServerConfig.from_config(config),
            prometheus=PrometheusConfig.from_config(config),
            alertmanager=AlertmanagerConfig.from_config(config),
            labels=LabelConfig.from_config(config),
            search=SearchConfig.from_config(config),
            panel=PanelConfig.from_config(config),
            config_file_path=config_file_path,
        )

    @classmethod
    def from_env(cls) -> AppConfig:
        """Create full configuration from config file and environment variables.

        Searches for config file in standard locations, then applies
        environment variable overrides.
        """
        config_dict = _load_config_file()

        config_path = None
        env_config = os.getenv("CONFIG_FILE")
        if env_config and Path(env_config).exists():
            config_path = env_config
        else:
            for path in CONFIG_FILE_PATHS:
                if path.exists():
                    config_path = str(path)
                    break

        return cls.from_config(config_dict, config_file_path=config_path)

    @classmethod
    def default(cls) -> AppConfig:
        """Create configuration with all defaults (no file loading)."""
        return cls()

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        prometheus_url: str | None = None,
        alertmanager_url: str | None = None,
        label_selector: str | None = None,
        access_log: bool | None = None,
    ) -> AppConfig:
        """Return a copy with command line flags applied (flags win over env and file)."""
        server = self.server
        if host is not None:
            server = replace(server, host=host)
        if port is not None:
            server = replace(server, port=port)
        if access_log is not None:
            server = replace(server, access_log=access_log)
        prometheus = self.prometheus
        if prometheus_url is not None:
            prometheus = replace(prometheus, endpoint=prometheus_url)
        alertmanager = self.alertmanager
        if alertmanager_url is not None:
            alertmanager = replace(alertmanager, endpoint=alertmanager_url)
        labels = self.labels
        if label_selector is not None:
            labels = LabelConfig(label_selector=label_selector)
        return replace(
            self,
            server=server,
            prometheus=prometheus,
            alertmanager=alertmanager,
            labels=labels,
        )


# Global configuration instance - can be overridden for testing
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset configuration to be reloaded on next access."""
    global _config
    _config = None
