"""
Protocol definitions and abstract base classes for the silence manager.

This module defines the collaborator interfaces of the core:
- where label names come from (configuration source)
- where label values come from (metrics backend)
- where silences go (alerting backend)
- where operator messages go (notification surface)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from silence_manager.api.models import SilenceRecord
    from silence_manager.core.constants import NotificationSeverity


# =============================================================================
# Configuration Source Interface
# =============================================================================


class ConfigSource(ABC):
    """Supplies the comma-separated label selector for the registry."""

    @abstractmethod
    def fetch_label_selector(self) -> str | None:
        """Return the label selector, or None if the source has none.

        Raises:
            ConfigFetchError: If the source is unreachable or malformed.
        """
        ...


# =============================================================================
# Metrics Backend Interface
# =============================================================================


class LabelValuesSource(ABC):
    """Asynchronous supplier of the authoritative values for a label."""

    @abstractmethod
    async def fetch_label_values(self, label: str) -> list[str]:
        """Fetch every known value of a label.

        Raises:
            LabelFetchError: On network errors, non-success status or malformed body.
        """
        ...


# =============================================================================
# Alerting Backend Interface
# =============================================================================


class SilenceSubmitter(ABC):
    """Asynchronous sink for composed silences."""

    @abstractmethod
    async def submit_silence(self, record: SilenceRecord) -> str:
        """Submit a silence once and return the backend's silence ID.

        Raises:
            SubmissionError: If the backend rejects the silence or is unreachable.
        """
        ...


# =============================================================================
# Notification Interface
# =============================================================================


@runtime_checkable
class NotificationSink(Protocol):
    """Receives (message, severity) pairs for the operator."""

    def notify(self, message: str, severity: NotificationSeverity) -> None:
        """Deliver a message."""
        ...
