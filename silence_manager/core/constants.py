"""
Constants and enumerations shared across the silence manager.

Values here mirror the wire formats of the Prometheus and Alertmanager
APIs and the defaults used when configuration is missing.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

# =============================================================================
# Labels
# =============================================================================

DEFAULT_LABELS: Final[tuple[str, ...]] = ("instance", "job")
DEFAULT_LABEL_SELECTOR: Final[str] = ",".join(DEFAULT_LABELS)

# =============================================================================
# Durations (milliseconds)
# =============================================================================

MS_PER_HOUR: Final[int] = 60 * 60 * 1000
MS_PER_DAY: Final[int] = 24 * MS_PER_HOUR
MS_PER_WEEK: Final[int] = 7 * MS_PER_DAY

DURATION_UNITS: Final[dict[str, int]] = {
    "h": MS_PER_HOUR,
    "d": MS_PER_DAY,
    "w": MS_PER_WEEK,
}

# =============================================================================
# Fuzzy search defaults
# =============================================================================

DEFAULT_SEARCH_THRESHOLD: Final[float] = 0.3
DEFAULT_SEARCH_DISTANCE: Final[int] = 100

# =============================================================================
# Messages
# =============================================================================

CORS_HINT: Final[str] = (
    "If you're seeing CORS errors, make sure the panel is served by the "
    "silence manager server, which proxies and handles CORS for the backends."
)
NO_MATCHERS_PREVIEW: Final[str] = "No matchers selected. Please select at least one label value."


class SilenceState(str, Enum):
    """Silence lifecycle state as reported by Alertmanager."""

    ACTIVE = "active"
    PENDING = "pending"
    EXPIRED = "expired"


class NotificationSeverity(str, Enum):
    """Severity of a message sent to the notification surface."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"

    @classmethod
    def from_string(cls, value: str | None) -> NotificationSeverity:
        """Convert a string to a severity, defaulting to INFO."""
        if not value:
            return cls.INFO
        try:
            return cls(value.lower())
        except ValueError:
            return cls.INFO


class PrometheusStatus(str, Enum):
    """Status field of a Prometheus API response envelope."""

    SUCCESS = "success"
    ERROR = "error"
