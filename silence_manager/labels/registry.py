"""
Label registry: configured label names, cached values and search indexes.

The registry is the single owner of every label's value list. Refreshes
run as asyncio tasks; state is only ever written on the event loop thread
after the backend call returns, and each refresh carries a per-label
request token so a slow, older response can never overwrite a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from silence_manager.core.constants import DEFAULT_SEARCH_DISTANCE, DEFAULT_SEARCH_THRESHOLD
from silence_manager.core.exceptions import ConfigurationError, LabelFetchError, UnknownLabelError
from silence_manager.core.logging import EventType, get_logger, log_event
from silence_manager.core.protocols import LabelValuesSource
from silence_manager.labels.fuzzy import FuzzyIndex, search_values

logger = get_logger(__name__)


@dataclass
class LabelState:
    """Everything the registry tracks for one label."""

    values: tuple[str, ...] = ()
    index: FuzzyIndex | None = None
    issued_token: int = 0
    applied_token: int = 0
    in_flight: int = 0
    last_error: LabelFetchError | None = None

    @property
    def loading(self) -> bool:
        return self.in_flight > 0


@dataclass
class RefreshOutcome:
    """Result of refreshing one label."""

    label: str
    values: tuple[str, ...] = ()
    applied: bool = False
    error: LabelFetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LabelRegistry:
    """Ordered label names with their cached, sorted value lists.

    Example:
        >>> registry = LabelRegistry(source)
        >>> registry.configure(["instance", "job"])
        >>> await registry.refresh_all()
        >>> registry.search("job", "api")
    """

    source: LabelValuesSource
    threshold: float = DEFAULT_SEARCH_THRESHOLD
    distance: int = DEFAULT_SEARCH_DISTANCE
    _states: dict[str, LabelState] = field(default_factory=dict, init=False, repr=False)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def configure(self, label_names: Iterable[str]) -> tuple[str, ...]:
        """Reset the registry to one empty value set per label name.

        Blank and repeated names are dropped, first occurrence wins.

        Raises:
            ConfigurationError: If no usable label name remains.
        """
        names: list[str] = []
        for raw in label_names:
            name = raw.strip()
            if name and name not in names:
                names.append(name)
        if not names:
            raise ConfigurationError("labels", reason="at least one label name is required")

        self._states = {name: LabelState() for name in names}
        log_event(logger, logging.INFO, EventType.CONFIG_LOADED, "registry", "labels configured", labels=",".join(names))
        return tuple(names)

    @property
    def labels(self) -> tuple[str, ...]:
        """Configured label names in display order."""
        return tuple(self._states)

    def _state(self, label: str) -> LabelState:
        try:
            return self._states[label]
        except KeyError:
            raise UnknownLabelError(label, configured=list(self._states)) from None

    def __contains__(self, label: object) -> bool:
        return label in self._states

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def values(self, label: str) -> tuple[str, ...]:
        """Cached values for a label, sorted ascending."""
        return self._state(label).values

    def index(self, label: str) -> FuzzyIndex | None:
        """Search index for a label, or None before its first successful refresh."""
        return self._state(label).index

    def is_loading(self, label: str) -> bool:
        return self._state(label).loading

    def last_error(self, label: str) -> LabelFetchError | None:
        """Error from the most recent failed refresh, cleared by the next success."""
        return self._state(label).last_error

    def has_value(self, label: str, value: str) -> bool:
        return value in self._state(label).values

    def search(self, label: str, query: str | None) -> list[str]:
        """Fuzzy-filter a label's values; an empty query returns them all."""
        state = self._state(label)
        return search_values(state.values, state.index, query)

    # -------------------------------------------------------------------------
    # Refresh
    # -------------------------------------------------------------------------

    def _replace_values(self, state: LabelState, values: Iterable[str]) -> tuple[str, ...]:
        ordered = tuple(sorted(set(values)))
        # Index is rebuilt before the values become visible
        index = FuzzyIndex.build(ordered, threshold=self.threshold, distance=self.distance)
        state.values = ordered
        state.index = index
        return ordered

    async def refresh(self, label: str) -> RefreshOutcome:
        """Fetch a label's values and replace its cache.

        Returns an outcome with ``applied=False`` when a response from a newer
        request for the same label has already been applied (this one is stale).

        Raises:
            UnknownLabelError: If the label is not configured.
            LabelFetchError: If the backend call fails; the cache is left untouched.
        """
        state = self._state(label)
        state.issued_token += 1
        token = state.issued_token
        state.in_flight += 1

        try:
            fetched = await self.source.fetch_label_values(label)
        except LabelFetchError as e:
            if token == state.issued_token:
                state.last_error = e
            log_event(logger, logging.WARNING, EventType.LABEL_REFRESH_FAILED, label, e.message, token=token)
            raise
        finally:
            state.in_flight -= 1

        # The registry may have been reconfigured while the request was out
        if self._states.get(label) is not state or token < state.applied_token:
            log_event(
                logger,
                logging.INFO,
                EventType.STALE_RESPONSE_DISCARDED,
                label,
                "discarding response from an older request",
                token=token,
                applied=state.applied_token,
            )
            return RefreshOutcome(label=label, values=state.values, applied=False)

        values = self._replace_values(state, fetched)
        state.applied_token = token
        state.last_error = None
        log_event(logger, logging.INFO, EventType.LABEL_REFRESHED, label, "values cached", count=len(values))
        return RefreshOutcome(label=label, values=values, applied=True)

    async def refresh_all(self) -> dict[str, RefreshOutcome]:
        """Refresh every label concurrently.

        A failure for one label is reported in its outcome and never
        affects the others.
        """
        labels = self.labels

        async def _one(label: str) -> RefreshOutcome:
            try:
                return await self.refresh(label)
            except LabelFetchError as e:
                state = self._states.get(label)
                return RefreshOutcome(label=label, values=state.values if state else (), error=e)

        outcomes = await asyncio.gather(*(_one(label) for label in labels))
        return {outcome.label: outcome for outcome in outcomes}
