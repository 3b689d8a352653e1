"""
Alertmanager client for creating silences.

Silences are posted exactly once: the transport adapter is mounted with
retries disabled and nothing here loops on failure. The operator retries
by submitting again.
"""

from __future__ import annotations

import asyncio
import time
from types import TracebackType
from typing import Any

import pydantic
import requests

from silence_manager.api.models import SilenceCreatedResponse, SilenceRecord
from silence_manager.core.config import AlertmanagerConfig, get_config
from silence_manager.core.exceptions import SubmissionError
from silence_manager.core.logging import get_logger
from silence_manager.core.protocols import SilenceSubmitter

logger = get_logger(__name__)


class AlertmanagerClient(SilenceSubmitter):
    """Alertmanager API v2 client."""

    def __init__(
        self,
        endpoint: str | None = None,
        config: AlertmanagerConfig | None = None,
    ) -> None:
        self._config = config or get_config().alertmanager
        self._endpoint = (endpoint or self._config.endpoint).rstrip("/")
        self._session = self._create_session()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def silences_url(self) -> str:
        return f"{self._endpoint}/api/v2/silences"

    def _create_session(self) -> requests.Session:
        """Create a session whose adapter never retries."""
        session = requests.Session()
        adapter = requests.adapters.HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Accept": "application/json"})
        return session

    def create_silence(self, record: SilenceRecord) -> str:
        """Post a silence and return its ID.

        Raises:
            SubmissionError: On network failure, any non-2xx status (body kept
                verbatim) or a response without a silence ID.
        """
        try:
            response = self._session.post(
                self.silences_url,
                json=record.to_payload(),
                timeout=self._config.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Silence submission to {self.silences_url} failed: {e}")
            raise SubmissionError(self.silences_url, reason=str(e), cause=e) from e

        if not response.ok:
            raise SubmissionError(
                self.silences_url,
                status_code=response.status_code,
                body=response.text.strip() or None,
            )

        try:
            created = SilenceCreatedResponse.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as e:
            raise SubmissionError(
                self.silences_url,
                reason="Alertmanager response did not include a silenceID",
                cause=e,
            ) from e

        return created.silence_id

    async def submit_silence(self, record: SilenceRecord) -> str:
        """Async wrapper around :meth:`create_silence`."""
        return await asyncio.to_thread(self.create_silence, record)

    def health_check(self) -> tuple[bool, dict[str, Any]]:
        """Check whether Alertmanager answers its health endpoint."""
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
        except requests.RequestException as e:
            details["error"] = f"Request failed: {e}"
            return False, details

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> AlertmanagerClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
