"""
Tests for the notification feed.
"""

from __future__ import annotations

import logging

from silence_manager.core import NotificationSeverity, NotificationSink
from silence_manager.panel import NotificationFeed


class TestNotificationFeed:
    """Tests for NotificationFeed."""

    def test_is_notification_sink(self):
        assert isinstance(NotificationFeed(), NotificationSink)

    def test_records_in_order(self):
        feed = NotificationFeed()
        feed.notify("first")
        feed.notify("second", NotificationSeverity.SUCCESS)

        first, second = feed.recent()
        assert first.message == "first"
        assert first.severity == NotificationSeverity.INFO
        assert second.severity == NotificationSeverity.SUCCESS

    def test_bounded_history(self):
        """Test only the newest max_items messages are kept."""
        feed = NotificationFeed(max_items=3)
        for i in range(5):
            feed.notify(f"message {i}")
        assert len(feed) == 3
        assert [n.message for n in feed.recent()] == ["message 2", "message 3", "message 4"]

    def test_recent_limit(self):
        feed = NotificationFeed()
        for i in range(4):
            feed.notify(f"message {i}")
        assert [n.message for n in feed.recent(2)] == ["message 2", "message 3"]
        assert feed.recent(0) == []

    def test_string_severity_accepted(self):
        feed = NotificationFeed()
        feed.notify("oops", "error")
        assert feed.recent()[0].severity == NotificationSeverity.ERROR

    def test_errors_logged_as_warnings(self, caplog):
        feed = NotificationFeed()
        with caplog.at_level(logging.INFO):
            feed.notify("Error fetching job values", NotificationSeverity.ERROR)
        [record] = [r for r in caplog.records if "NOTIFICATION" in r.getMessage()]
        assert record.levelno == logging.WARNING

    def test_clear(self):
        feed = NotificationFeed()
        feed.notify("x")
        feed.clear()
        assert len(feed) == 0


class TestNotificationSeverity:
    """Tests for NotificationSeverity.from_string."""

    def test_from_string(self):
        assert NotificationSeverity.from_string("ERROR") == NotificationSeverity.ERROR
        assert NotificationSeverity.from_string("success") == NotificationSeverity.SUCCESS
        assert NotificationSeverity.from_string("bogus") == NotificationSeverity.INFO
        assert NotificationSeverity.from_string(None) == NotificationSeverity.INFO
