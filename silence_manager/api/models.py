"""
Pydantic data models for the silence manager.

This module defines the data contracts for:
- Alertmanager silence payloads (matchers, silence records)
- Prometheus label-values responses
- Panel API request/response payloads

Field aliases follow the Alertmanager v2 wire names (``startsAt``,
``isRegex``...) while Python code uses snake_case attributes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from silence_manager.core.constants import (
    NotificationSeverity,
    PrometheusStatus,
    SilenceState,
)

# =============================================================================
# Silence Models
# =============================================================================


class Matcher(BaseModel):
    """Single label-equality criterion of a silence.

    Only exact, non-negated matching is supported.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., min_length=1, description="Label name")
    value: str = Field(..., description="Exact label value")
    is_regex: bool = Field(False, alias="isRegex", description="Always false")
    is_equal: bool = Field(True, alias="isEqual", description="Always true")

    def to_selector(self) -> str:
        """Render as a PromQL-style ``name="value"`` selector."""
        return f'{self.name}="{self.value}"'


class SilenceStatus(BaseModel):
    """Status block sent along with a new silence."""

    model_config = ConfigDict(frozen=True)

    state: SilenceState = SilenceState.ACTIVE


class SilenceRecord(BaseModel):
    """Complete silence ready for submission to Alertmanager.

    Built fresh per submission and never mutated afterwards.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    matchers: tuple[Matcher, ...] = Field(..., min_length=1, description="Matchers in label order")
    starts_at: datetime = Field(..., alias="startsAt", description="Creation instant")
    ends_at: datetime = Field(..., alias="endsAt", description="startsAt plus duration")
    created_by: str = Field(..., alias="createdBy", min_length=1)
    comment: str = Field(..., min_length=1)
    status: SilenceStatus = Field(default_factory=SilenceStatus)

    @property
    def state(self) -> SilenceState:
        """Lifecycle state of the record."""
        return self.status.state

    @property
    def duration_ms(self) -> int:
        """Window length in milliseconds."""
        return round((self.ends_at - self.starts_at).total_seconds() * 1000)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using Alertmanager field names."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Backend Response Models
# =============================================================================


class LabelValuesResponse(BaseModel):
    """Envelope returned by ``GET /api/v1/label/{label}/values``."""

    status: str
    data: list[str] | None = None
    error_type: str | None = Field(None, alias="errorType")
    error: str | None = None

    @property
    def is_success(self) -> bool:
        """True when the backend reported success and sent a value list."""
        return self.status == PrometheusStatus.SUCCESS.value and self.data is not None


class SilenceCreatedResponse(BaseModel):
    """Body returned by ``POST /api/v2/silences``."""

    model_config = ConfigDict(populate_by_name=True)

    silence_id: str = Field(..., alias="silenceID")


# =============================================================================
# Panel API Models
# =============================================================================


class ConfigPayload(BaseModel):
    """Configuration handed to the rendering layer."""

    labels: str = Field(..., description="Comma-separated label names")
    alertmanager_url: str = Field(..., description="Alertmanager base URL")


class Notification(BaseModel):
    """Message for the notification surface."""

    message: str
    severity: NotificationSeverity = NotificationSeverity.INFO
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class LabelView(BaseModel):
    """View model for one label's search box and value list."""

    name: str
    title: str
    values: list[str] = Field(default_factory=list)
    query: str = ""
    selected: str | None = None
    loading: bool = False
    error: str | None = None


class SelectionRequest(BaseModel):
    """Body of ``PUT /api/selections/{label}``; ``null`` clears the selection."""

    value: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def blank_means_none(cls, v: Any) -> Any:
        """Treat an empty string like no selection."""
        if isinstance(v, str) and v == "":
            return None
        return v


class MatchersResponse(BaseModel):
    """Current matchers plus their preview text."""

    matchers: list[Matcher]
    preview: str


class CreateSilenceRequest(BaseModel):
    """Body of ``POST /api/silences``.

    Blank strings are accepted here so the composer reports them in order.
    """

    model_config = ConfigDict(populate_by_name=True)

    duration: str | None = Field(None, description="Relative duration such as 2h, 1d or 1w")
    comment: str = ""
    created_by: str = Field("", alias="createdBy")


class CreateSilenceResponse(BaseModel):
    """Result of a successful silence submission."""

    model_config = ConfigDict(populate_by_name=True)

    silence_id: str = Field(..., alias="silenceID")
    silence: SilenceRecord


class ErrorResponse(BaseModel):
    """Error body returned by the panel API."""

    error: str
    detail: str
    field: str | None = None
    status_code: int | None = None
