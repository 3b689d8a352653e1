"""
Pytest configuration and shared fixtures.

This module provides reusable fixtures for testing the silence_manager package.
"""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime, timezone

import pytest

from silence_manager.api.models import Matcher
from silence_manager.backends.config_source import StaticConfigSource
from silence_manager.core import (
    AlertmanagerConfig,
    AppConfig,
    LabelConfig,
    PrometheusConfig,
    reset_config,
    set_config,
)
from silence_manager.panel import NotificationFeed, SilencePanel

from fakes import FakeSubmitter, FakeValuesSource

# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def test_config() -> Generator[AppConfig, None, None]:
    """Provide a test configuration."""
    config = AppConfig(
        prometheus=PrometheusConfig(endpoint="http://localhost:9090", timeout_seconds=5, max_retries=2),
        alertmanager=AlertmanagerConfig(endpoint="http://localhost:9093", timeout_seconds=5),
        labels=LabelConfig(label_selector="instance,job"),
    )
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed creation instant."""
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def label_values() -> dict[str, list[str]]:
    """Values as Prometheus would return them (unsorted, with a duplicate)."""
    return {
        "instance": ["node2:9100", "node1:9100", "db-primary:9100", "node1:9100"],
        "job": ["node", "api", "prometheus", "alertmanager"],
    }


@pytest.fixture
def values_source(label_values: dict[str, list[str]]) -> FakeValuesSource:
    return FakeValuesSource(label_values)


@pytest.fixture
def submitter() -> FakeSubmitter:
    return FakeSubmitter()


@pytest.fixture
def notifier() -> NotificationFeed:
    return NotificationFeed(max_items=20)


@pytest.fixture
def panel(
    values_source: FakeValuesSource,
    submitter: FakeSubmitter,
    notifier: NotificationFeed,
) -> SilencePanel:
    """Panel wired to fake backends with labels instance and job."""
    return SilencePanel(
        values_source,
        submitter,
        StaticConfigSource(LabelConfig(label_selector="instance,job")),
        notifier=notifier,
    )


@pytest.fixture
def sample_matchers() -> list[Matcher]:
    return [
        Matcher(name="instance", value="node1"),
        Matcher(name="job", value="api"),
    ]
