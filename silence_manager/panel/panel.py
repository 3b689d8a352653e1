"""
Silence panel: the session context tying the core components together.

The panel owns the label registry, the selection state, the notification
feed and the backend collaborators. The HTTP API and the command line both
drive the same operations through it:

    start -> configure labels from the config source, refresh all labels
    search / select -> per-label filtering and choice
    submit -> build matchers, compose the silence, post it once
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from silence_manager.api.models import LabelView, Matcher, SilenceRecord
from silence_manager.backends.alertmanager import AlertmanagerClient
from silence_manager.backends.config_source import StaticConfigSource, resolve_label_names
from silence_manager.backends.prometheus import PrometheusClient
from silence_manager.core.config import AppConfig
from silence_manager.core.constants import NotificationSeverity
from silence_manager.core.exceptions import (
    LabelFetchError,
    SubmissionError,
    UnknownLabelValueError,
    ValidationError,
)
from silence_manager.core.logging import EventType, get_logger, log_event
from silence_manager.core.protocols import (
    ConfigSource,
    LabelValuesSource,
    NotificationSink,
    SilenceSubmitter,
)
from silence_manager.labels.registry import LabelRegistry, RefreshOutcome
from silence_manager.labels.selection import SelectionState, build_matchers, format_matchers_preview
from silence_manager.panel.notifications import NotificationFeed
from silence_manager.silences.composer import compose_silence

logger = get_logger(__name__)


def label_title(label: str) -> str:
    """Display title for a label: first letter upper-cased."""
    return label[:1].upper() + label[1:]


class SilencePanel:
    """Operator session for building and submitting silences."""

    def __init__(
        self,
        values_source: LabelValuesSource,
        submitter: SilenceSubmitter,
        config_source: ConfigSource,
        *,
        notifier: NotificationSink | None = None,
        default_duration: str = "2h",
        search_threshold: float | None = None,
        search_distance: int | None = None,
    ) -> None:
        registry_kwargs: dict[str, Any] = {}
        if search_threshold is not None:
            registry_kwargs["threshold"] = search_threshold
        if search_distance is not None:
            registry_kwargs["distance"] = search_distance

        self.registry = LabelRegistry(values_source, **registry_kwargs)
        self.selection = SelectionState()
        self.submitter = submitter
        self.config_source = config_source
        self.notifier: NotificationSink = notifier if notifier is not None else NotificationFeed()
        self.default_duration = default_duration
        self._queries: dict[str, str] = {}

    @classmethod
    def from_config(cls, config: AppConfig) -> SilencePanel:
        """Wire a panel to real Prometheus and Alertmanager clients."""
        return cls(
            PrometheusClient(config=config.prometheus),
            AlertmanagerClient(config=config.alertmanager),
            StaticConfigSource(config.labels),
            notifier=NotificationFeed(config.panel.notification_history),
            default_duration=config.panel.default_duration,
            search_threshold=config.search.threshold,
            search_distance=config.search.distance,
        )

    # -------------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------------

    @property
    def labels(self) -> tuple[str, ...]:
        return self.registry.labels

    def configure(self) -> tuple[str, ...]:
        """Load label names from the config source and reset the registry."""
        names = self.registry.configure(resolve_label_names(self.config_source))
        self.selection.retain(names)
        self._queries = {label: query for label, query in self._queries.items() if label in names}
        return names

    async def start(self) -> dict[str, RefreshOutcome]:
        """Configure labels, then fetch every label's values concurrently."""
        self.configure()
        return await self.refresh_all()

    async def refresh_all(self) -> dict[str, RefreshOutcome]:
        outcomes = await self.registry.refresh_all()
        for outcome in outcomes.values():
            if outcome.error is not None:
                self.notifier.notify(outcome.error.diagnostic, NotificationSeverity.ERROR)
        return outcomes

    async def refresh(self, label: str) -> RefreshOutcome:
        """Refresh one label, reporting a failure to the operator before re-raising."""
        try:
            return await self.registry.refresh(label)
        except LabelFetchError as e:
            self.notifier.notify(e.diagnostic, NotificationSeverity.ERROR)
            raise

    def search(self, label: str, query: str | None) -> list[str]:
        """Filter a label's values and remember the query for its view."""
        results = self.registry.search(label, query)
        self._queries[label] = (query or "").strip()
        return results

    def select(self, label: str, value: str | None) -> bool:
        """Choose a value for a label, or clear it with None.

        Raises:
            UnknownLabelError: If the label is not configured.
            UnknownLabelValueError: If the value is not in the label's cache.
        """
        if value is not None and not self.registry.has_value(label, value):
            raise UnknownLabelValueError(label, value)
        if value is None:
            # Validates the label name
            self.registry.values(label)

        changed = self.selection.set_selection(label, value)
        if changed:
            log_event(logger, logging.DEBUG, EventType.SELECTION_CHANGED, label, "selection changed", value=value)
        return changed

    def clear_selections(self) -> None:
        self.selection.clear()

    def label_views(self) -> list[LabelView]:
        """View models for every label, in configured order."""
        views: list[LabelView] = []
        for label in self.registry.labels:
            error = self.registry.last_error(label)
            query = self._queries.get(label, "")
            views.append(
                LabelView(
                    name=label,
                    title=label_title(label),
                    values=self.registry.search(label, query),
                    query=query,
                    selected=self.selection.get_selection(label),
                    loading=self.registry.is_loading(label),
                    error=error.diagnostic if error else None,
                )
            )
        return views

    # -------------------------------------------------------------------------
    # Silences
    # -------------------------------------------------------------------------

    def matchers(self) -> list[Matcher]:
        return build_matchers(self.registry.labels, self.selection)

    def matchers_preview(self) -> str:
        return format_matchers_preview(self.matchers())

    def compose(
        self,
        duration: str | None,
        comment: str,
        created_by: str,
        now: datetime | None = None,
    ) -> SilenceRecord:
        """Compose a silence from the current selections.

        Raises:
            ValidationError: The first failed precondition, already reported
                to the notification surface.
        """
        try:
            return compose_silence(
                self.matchers(),
                self.default_duration if duration is None else duration,
                comment,
                created_by,
                now=now,
            )
        except ValidationError as e:
            self.notifier.notify(e.message, NotificationSeverity.ERROR)
            raise

    async def submit(
        self,
        duration: str | None,
        comment: str,
        created_by: str,
        now: datetime | None = None,
    ) -> tuple[str, SilenceRecord]:
        """Compose and post a silence once.

        Returns:
            Tuple of (silence_id, record).

        Raises:
            ValidationError: If composition fails; nothing is sent.
            SubmissionError: If Alertmanager rejects the silence or cannot be
                reached; the record is discarded.
        """
        record = self.compose(duration, comment, created_by, now=now)
        try:
            silence_id = await self.submitter.submit_silence(record)
        except SubmissionError as e:
            log_event(logger, logging.ERROR, EventType.SILENCE_FAILED, record.created_by, e.message)
            self.notifier.notify(e.message, NotificationSeverity.ERROR)
            raise

        log_event(
            logger,
            logging.INFO,
            EventType.SILENCE_CREATED,
            record.created_by,
            "silence created",
            silence_id=silence_id,
            matchers=";".join(m.to_selector() for m in record.matchers),
        )
        self.notifier.notify("Silence created successfully!", NotificationSeverity.SUCCESS)
        return silence_id, record

    def close(self) -> None:
        """Close backend sessions that support it."""
        for collaborator in (self.registry.source, self.submitter):
            close = getattr(collaborator, "close", None)
            if callable(close):
                close()
