"""
Prometheus client for discovering label values.

This module provides a client for the Prometheus HTTP API (v1) with
connection pooling, transport-level retries for idempotent reads and
error handling that maps every failure onto LabelFetchError.
"""

from __future__ import annotations

import asyncio
import time
from types import TracebackType
from typing import Any
from urllib.parse import quote

import pydantic
import requests
import urllib3

from silence_manager.api.models import LabelValuesResponse
from silence_manager.core.config import PrometheusConfig, get_config
from silence_manager.core.exceptions import LabelFetchError
from silence_manager.core.logging import get_logger
from silence_manager.core.protocols import LabelValuesSource

logger = get_logger(__name__)


class PrometheusClient(LabelValuesSource):
    """Prometheus label-values client.

    Implements the LabelValuesSource interface; the blocking HTTP call is
    run on a worker thread so the event loop stays responsive.

    Example:
        >>> with PrometheusClient("http://prometheus:9090") as client:
        ...     client.label_values("job")
        ['alertmanager', 'node', 'prometheus']
    """

    def __init__(
        self,
        endpoint: str | None = None,
        config: PrometheusConfig | None = None,
    ) -> None:
        """Initialize the Prometheus client."""
        self._config = config or get_config().prometheus
        self._endpoint = (endpoint or self._config.endpoint).rstrip("/")
        self._session = self._create_session()

    @property
    def endpoint(self) -> str:
        """Get the configured endpoint."""
        return self._endpoint

    def _create_session(self) -> requests.Session:
        """Create a configured requests session with connection pooling."""
        session = requests.Session()

        adapter = requests.adapters.HTTPAdapter(
            pool_connections=self._config.pool_connections,
            pool_maxsize=self._config.pool_maxsize,
            max_retries=urllib3.util.retry.Retry(
                total=self._config.max_retries,
                backoff_factor=self._config.retry_backoff_factor,
                status_forcelist=list(self._config.retry_status_forcelist),
                allowed_methods=frozenset({"GET"}),
            ),
            pool_block=False,
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Accept": "application/json"})

        return session

    def label_values_url(self, label: str) -> str:
        return f"{self._endpoint}/api/v1/label/{quote(label, safe='')}/values"

    def label_values(self, label: str) -> list[str]:
        """Fetch all values of a label.

        Raises:
            LabelFetchError: On network errors, non-2xx status, a non-success
                envelope or a malformed body.
        """
        try:
            response = self._session.get(
                self.label_values_url(label),
                timeout=self._config.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request for {label} values failed: {e}")
            raise LabelFetchError(label, reason=str(e), cause=e) from e

        if not response.ok:
            raise LabelFetchError(
                label,
                reason=f"HTTP error! Status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = LabelValuesResponse.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as e:
            raise LabelFetchError(label, reason="Invalid response format from Prometheus", cause=e) from e

        if not payload.is_success:
            reason = payload.error or "Invalid response format from Prometheus"
            raise LabelFetchError(label, reason=reason, status_code=response.status_code)

        return list(payload.data or [])

    async def fetch_label_values(self, label: str) -> list[str]:
        """Async wrapper around :meth:`label_values`."""
        return await asyncio.to_thread(self.label_values, label)

    def health_check(self) -> tuple[bool, dict[str, Any]]:
        """Check whether Prometheus answers its readiness endpoint.

        Returns:
            Tuple of (is_healthy, details_dict) with latency_ms,
            status_code and error.
        """
        details: dict[str, Any] = {
            "healthy": False,
            "latency_ms": None,
            "status_code": None,
            "error": None,
        }

        try:
            start_time = time.time()
            response = self._session.get(
                f"{self._endpoint}/-/healthy",
                timeout=self._config.timeout_seconds,
            )
            details["latency_ms"] = round((time.time() - start_time) * 1000, 2)
            details["status_code"] = response.status_code

            if response.status_code != 200:
                details["error"] = f"Unhealthy status code: {response.status_code}"
                return False, details

            details["healthy"] = True
            return True, details

        except requests.exceptions.Timeout:
            details["error"] = f"Request timed out after {self._config.timeout_seconds}s"
            return False, details
        except requests.exceptions.ConnectionError as e:
            details["error"] = f"Connection failed: {e}"
            return False, details
        except requests.RequestException as e:
            details["error"] = f"Request failed: {e}"
            return False, details

    def close(self) -> None:
        """Close the session and clean up resources."""
        self._session.close()

    def __enter__(self) -> PrometheusClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
