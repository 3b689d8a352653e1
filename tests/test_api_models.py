"""
Tests for pydantic API models.
"""

from __future__ import annotations

import pydantic
import pytest

from silence_manager.api.models import (
    CreateSilenceRequest,
    LabelValuesResponse,
    Matcher,
    SelectionRequest,
    SilenceCreatedResponse,
    SilenceRecord,
)
from silence_manager.core import SilenceState


class TestMatcher:
    """Tests for Matcher."""

    def test_defaults(self):
        matcher = Matcher(name="job", value="api")
        assert not matcher.is_regex
        assert matcher.is_equal

    def test_wire_names(self):
        matcher = Matcher.model_validate({"name": "job", "value": "api", "isRegex": False, "isEqual": True})
        assert matcher.model_dump(by_alias=True) == {
            "name": "job",
            "value": "api",
            "isRegex": False,
            "isEqual": True,
        }

    def test_selector(self):
        assert Matcher(name="instance", value="node1:9100").to_selector() == 'instance="node1:9100"'

    def test_name_required(self):
        with pytest.raises(pydantic.ValidationError):
            Matcher(name="", value="api")


class TestSilenceRecord:
    """Tests for SilenceRecord."""

    def test_requires_matchers(self, fixed_now):
        with pytest.raises(pydantic.ValidationError):
            SilenceRecord(matchers=(), starts_at=fixed_now, ends_at=fixed_now, created_by="a", comment="c")

    def test_defaults_to_active(self, sample_matchers, fixed_now):
        record = SilenceRecord(
            matchers=tuple(sample_matchers),
            starts_at=fixed_now,
            ends_at=fixed_now,
            created_by="alice",
            comment="c",
        )
        assert record.state == SilenceState.ACTIVE
        assert record.duration_ms == 0


class TestBackendResponses:
    """Tests for backend response envelopes."""

    def test_label_values_success(self):
        response = LabelValuesResponse.model_validate({"status": "success", "data": ["a", "b"]})
        assert response.is_success

    def test_label_values_error(self):
        response = LabelValuesResponse.model_validate(
            {"status": "error", "errorType": "bad_data", "error": "invalid label"}
        )
        assert not response.is_success
        assert response.error_type == "bad_data"

    def test_silence_created(self):
        assert SilenceCreatedResponse.model_validate({"silenceID": "abc"}).silence_id == "abc"


class TestPanelRequests:
    """Tests for panel API request bodies."""

    def test_blank_selection_clears(self):
        assert SelectionRequest(value="").value is None
        assert SelectionRequest().value is None
        assert SelectionRequest(value="api").value == "api"

    def test_create_request_alias(self):
        request = CreateSilenceRequest.model_validate({"comment": "c", "createdBy": "alice"})
        assert request.created_by == "alice"
        assert request.duration is None
