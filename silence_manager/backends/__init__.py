"""
Backends module - clients for Prometheus, Alertmanager and config sources.
"""

from silence_manager.backends.alertmanager import AlertmanagerClient
from silence_manager.backends.config_source import (
    RemoteConfigSource,
    StaticConfigSource,
    resolve_label_names,
)
from silence_manager.backends.prometheus import PrometheusClient

__all__ = [
    "PrometheusClient",
    "AlertmanagerClient",
    "StaticConfigSource",
    "RemoteConfigSource",
    "resolve_label_names",
]
