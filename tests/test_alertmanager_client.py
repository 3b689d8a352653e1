"""
Tests for the Alertmanager silence client.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from silence_manager.backends import AlertmanagerClient
from silence_manager.core import AlertmanagerConfig, SubmissionError
from silence_manager.silences import compose_silence


@pytest.fixture
def client() -> AlertmanagerClient:
    client = AlertmanagerClient(config=AlertmanagerConfig(endpoint="http://alertmanager:9093", timeout_seconds=7))
    client._session = MagicMock()
    return client


@pytest.fixture
def record(sample_matchers, fixed_now):
    return compose_silence(sample_matchers, "1h", "kernel upgrade", "alice", now=fixed_now)


def _response(status_code: int, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


class TestAlertmanagerClient:
    """Tests for AlertmanagerClient.create_silence."""

    def test_silences_url(self, client):
        assert client.silences_url == "http://alertmanager:9093/api/v2/silences"

    def test_no_transport_retries(self):
        """Test the mounted adapter never retries a submission."""
        with AlertmanagerClient(config=AlertmanagerConfig(endpoint="http://am:9093")) as client:
            adapter = client._session.get_adapter("http://am:9093")
            assert adapter.max_retries.total == 0

    def test_success(self, client, record):
        client._session.post.return_value = _response(200, {"silenceID": "4fe0a1c2"})

        assert client.create_silence(record) == "4fe0a1c2"
        client._session.post.assert_called_once_with(
            "http://alertmanager:9093/api/v2/silences",
            json=record.to_payload(),
            timeout=7,
        )

    def test_rejected_silence(self, client, record):
        """Test a non-2xx status keeps the body and is not retried."""
        client._session.post.return_value = _response(400, text="bad matcher format\n")

        with pytest.raises(SubmissionError) as exc_info:
            client.create_silence(record)

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == "bad matcher format"
        assert exc_info.value.message == "Error creating silence: HTTP error! Status: 400: bad matcher format"
        assert client._session.post.call_count == 1

    def test_network_error(self, client, record):
        client._session.post.side_effect = requests.exceptions.ConnectionError("connection refused")

        with pytest.raises(SubmissionError) as exc_info:
            client.create_silence(record)

        assert exc_info.value.status_code is None
        assert exc_info.value.message == "Error creating silence: connection refused"
        assert client._session.post.call_count == 1

    def test_missing_silence_id(self, client, record):
        client._session.post.return_value = _response(200, {"status": "ok"})

        with pytest.raises(SubmissionError) as exc_info:
            client.create_silence(record)
        assert "silenceID" in exc_info.value.message

    def test_non_json_body(self, client, record):
        client._session.post.return_value = _response(200, ValueError("not json"))

        with pytest.raises(SubmissionError):
            client.create_silence(record)

    @pytest.mark.asyncio
    async def test_submit_silence_async(self, client, record):
        client._session.post.return_value = _response(200, {"silenceID": "abc"})
        assert await client.submit_silence(record) == "abc"

    def test_health_check(self, client):
        client._session.get.return_value = _response(200)
        healthy, details = client.health_check()
        assert healthy
        assert details["error"] is None
