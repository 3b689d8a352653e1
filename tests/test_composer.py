"""
Tests for silence composition.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from silence_manager.core import (
    EmptyCommentError,
    EmptyCreatorError,
    InvalidDurationError,
    NoMatchersError,
    SilenceState,
)
from silence_manager.silences import compose_silence


class TestComposeValidation:
    """Tests for the ordered precondition checks."""

    def test_no_matchers_checked_first(self):
        """Test an empty matcher list wins over every other problem."""
        with pytest.raises(NoMatchersError) as exc_info:
            compose_silence([], "nonsense", "", "")
        assert exc_info.value.message == "Please select at least one label value."

    def test_comment_checked_before_creator(self, sample_matchers):
        with pytest.raises(EmptyCommentError) as exc_info:
            compose_silence(sample_matchers, "nonsense", "   ", "")
        assert exc_info.value.message == "Please provide a comment for the silence."

    def test_creator_checked_before_duration(self, sample_matchers):
        with pytest.raises(EmptyCreatorError) as exc_info:
            compose_silence(sample_matchers, "nonsense", "maintenance", " ")
        assert exc_info.value.message == "Please provide your name as the creator."
        assert exc_info.value.field == "createdBy"

    def test_invalid_duration(self, sample_matchers):
        with pytest.raises(InvalidDurationError):
            compose_silence(sample_matchers, "soon", "maintenance", "alice")


class TestComposeRecord:
    """Tests for the composed SilenceRecord."""

    def test_one_hour_silence(self, sample_matchers, fixed_now):
        """Test instance=node1, job=api for 1h."""
        record = compose_silence(sample_matchers, "1h", "kernel upgrade", "alice", now=fixed_now)

        assert record.starts_at == fixed_now
        assert record.ends_at == fixed_now + timedelta(hours=1)
        assert record.duration_ms == 3_600_000
        assert record.state == SilenceState.ACTIVE
        assert [m.to_selector() for m in record.matchers] == ['instance="node1"', 'job="api"']

    def test_payload_uses_alertmanager_names(self, sample_matchers, fixed_now):
        """Test the wire payload carries the Alertmanager field names."""
        payload = compose_silence(sample_matchers, "2d", "maintenance", "alice", now=fixed_now).to_payload()

        assert payload["matchers"] == [
            {"name": "instance", "value": "node1", "isRegex": False, "isEqual": True},
            {"name": "job", "value": "api", "isRegex": False, "isEqual": True},
        ]
        assert payload["startsAt"].startswith("2024-05-01T12:00:00")
        assert payload["endsAt"].startswith("2024-05-03T12:00:00")
        assert payload["createdBy"] == "alice"
        assert payload["comment"] == "maintenance"
        assert payload["status"] == {"state": "active"}

    def test_comment_and_creator_trimmed(self, sample_matchers, fixed_now):
        record = compose_silence(sample_matchers, "1h", "  disk swap ", " bob ", now=fixed_now)
        assert record.comment == "disk swap"
        assert record.created_by == "bob"

    def test_naive_now_is_utc(self, sample_matchers):
        record = compose_silence(sample_matchers, "1h", "c", "alice", now=datetime(2024, 5, 1, 12, 0))
        assert record.starts_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def test_aware_now_converted_to_utc(self, sample_matchers):
        local = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        record = compose_silence(sample_matchers, "1h", "c", "alice", now=local)
        assert record.starts_at.utcoffset() == timedelta(0)
        assert record.starts_at == local

    def test_default_now(self, sample_matchers):
        """Test the creation instant defaults to the current time."""
        before = datetime.now(timezone.utc)
        record = compose_silence(sample_matchers, "1w", "c", "alice")
        after = datetime.now(timezone.utc)
        assert before <= record.starts_at <= after
        assert record.ends_at - record.starts_at == timedelta(weeks=1)

    def test_non_positive_window_passes_through(self, sample_matchers, fixed_now, caplog):
        """Test zero and negative durations are composed with a warning."""
        with caplog.at_level(logging.WARNING):
            zero = compose_silence(sample_matchers, "0h", "c", "alice", now=fixed_now)
            negative = compose_silence(sample_matchers, "-1h", "c", "alice", now=fixed_now)

        assert zero.ends_at == zero.starts_at
        assert negative.ends_at < negative.starts_at
        assert "non-positive window" in caplog.text

    def test_record_is_immutable(self, sample_matchers, fixed_now):
        record = compose_silence(sample_matchers, "1h", "c", "alice", now=fixed_now)
        with pytest.raises(Exception):  # pydantic frozen instance
            record.comment = "changed"
