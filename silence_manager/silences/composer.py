"""
Silence composition from matchers, a relative duration and operator metadata.

The composer is pure: it validates input, resolves the time window and
returns an immutable SilenceRecord. Submission belongs to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from silence_manager.api.models import Matcher, SilenceRecord, SilenceStatus
from silence_manager.core.constants import SilenceState
from silence_manager.core.exceptions import (
    EmptyCommentError,
    EmptyCreatorError,
    NoMatchersError,
)
from silence_manager.core.logging import EventType, get_logger, log_event
from silence_manager.silences.duration import duration_to_timedelta

logger = get_logger(__name__)


def _utc(moment: datetime) -> datetime:
    """Normalise to an aware UTC datetime; naive values are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def compose_silence(
    matchers: Sequence[Matcher],
    duration: str,
    comment: str,
    created_by: str,
    now: datetime | None = None,
) -> SilenceRecord:
    """Build a silence record, validating preconditions in a fixed order.

    Args:
        matchers: Equality matchers in label order.
        duration: Relative duration such as ``"2h"``, ``"1d"`` or ``"1w"``.
        comment: Reason for the silence.
        created_by: Name of the operator.
        now: Creation instant; defaults to the current UTC time.

    Returns:
        A SilenceRecord with ``startsAt = now`` and ``endsAt = now + duration``.

    Raises:
        NoMatchersError: If ``matchers`` is empty (checked first).
        EmptyCommentError: If ``comment`` is blank.
        EmptyCreatorError: If ``created_by`` is blank.
        InvalidDurationError: If ``duration`` has no integer magnitude.
    """
    if not matchers:
        raise NoMatchersError()

    comment = (comment or "").strip()
    if not comment:
        raise EmptyCommentError()

    created_by = (created_by or "").strip()
    if not created_by:
        raise EmptyCreatorError()

    window = duration_to_timedelta(duration)
    duration_ms = window // timedelta(milliseconds=1)
    starts_at = _utc(now or datetime.now(timezone.utc))
    ends_at = starts_at + window

    if duration_ms <= 0:
        # Accepted as-is; Alertmanager decides what to do with an empty window
        logger.warning(f"Silence duration {duration!r} gives a non-positive window of {duration_ms}ms")

    record = SilenceRecord(
        matchers=tuple(matchers),
        starts_at=starts_at,
        ends_at=ends_at,
        created_by=created_by,
        comment=comment,
        status=SilenceStatus(state=SilenceState.ACTIVE),
    )
    log_event(
        logger,
        logging.DEBUG,
        EventType.SILENCE_COMPOSED,
        created_by,
        "silence composed",
        matchers=len(record.matchers),
        duration_ms=duration_ms,
    )
    return record
