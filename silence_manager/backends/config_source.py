"""
Configuration sources for the label registry.

A source yields the comma-separated label selector. Any failure is
recovered here with the default labels and only logged.
"""

from __future__ import annotations

import logging

import requests

from silence_manager.core.config import LabelConfig, parse_label_selector
from silence_manager.core.constants import DEFAULT_LABELS
from silence_manager.core.exceptions import ConfigFetchError
from silence_manager.core.logging import EventType, get_logger, log_event
from silence_manager.core.protocols import ConfigSource

logger = get_logger(__name__)


class StaticConfigSource(ConfigSource):
    """Label selector taken from the local configuration."""

    def __init__(self, label_config: LabelConfig) -> None:
        self._label_config = label_config

    def fetch_label_selector(self) -> str | None:
        return self._label_config.label_selector


class RemoteConfigSource(ConfigSource):
    """Label selector read from a running panel server's ``/api/config``."""

    def __init__(self, base_url: str, timeout_seconds: int = 5, session: requests.Session | None = None) -> None:
        self._url = f"{base_url.rstrip('/')}/api/config"
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    def fetch_label_selector(self) -> str | None:
        try:
            response = self._session.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise ConfigFetchError(self._url, reason=str(e), cause=e) from e
        except ValueError as e:
            raise ConfigFetchError(self._url, reason="response is not JSON", cause=e) from e

        if not isinstance(data, dict):
            raise ConfigFetchError(self._url, reason="expected a JSON object")
        labels = data.get("labels")
        if labels is None:
            return None
        if not isinstance(labels, str):
            raise ConfigFetchError(self._url, reason="labels must be a comma-separated string")
        return labels


def resolve_label_names(source: ConfigSource) -> tuple[str, ...]:
    """Ordered label names from ``source``, or the defaults on absence or error."""
    try:
        selector = source.fetch_label_selector()
    except ConfigFetchError as e:
        log_event(
            logger,
            logging.WARNING,
            EventType.CONFIG_FALLBACK,
            "labels",
            f"using default labels due to error: {e}",
            labels=",".join(DEFAULT_LABELS),
        )
        return DEFAULT_LABELS

    names = parse_label_selector(selector)
    if not names:
        log_event(logger, logging.INFO, EventType.CONFIG_FALLBACK, "labels", "using default labels", labels=",".join(DEFAULT_LABELS))
        return DEFAULT_LABELS

    log_event(logger, logging.INFO, EventType.CONFIG_LOADED, "labels", "labels loaded from config", labels=",".join(names))
    return names
