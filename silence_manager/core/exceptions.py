"""
Custom exception hierarchy for the silence manager.

This module provides a structured exception hierarchy that enables:
- Specific error handling at different layers
- Rich error context for diagnostics shown to the operator
- Consistent error messages across the codebase
"""

from __future__ import annotations

from typing import Any

from silence_manager.core.constants import CORS_HINT


class SilenceManagerError(Exception):
    """Base exception for all silence manager errors.

    All custom exceptions inherit from this class, enabling catching all
    silence-manager errors with a single except clause.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.cause = cause
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message including context."""
        parts = [self.message]
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"[{context_str}]")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " ".join(parts)


# =============================================================================
# Configuration-Related Exceptions
# =============================================================================


class ConfigurationError(SilenceManagerError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        parameter: str,
        *,
        reason: str,
        value: Any = None,
    ) -> None:
        context = {"parameter": parameter}
        if value is not None:
            context["value"] = value
        super().__init__(f"Configuration error for {parameter}: {reason}", context=context)
        self.parameter = parameter


class ConfigFetchError(SilenceManagerError):
    """Raised when the configuration source is unreachable or malformed.

    Callers recover with the default label set; this never reaches the operator.
    """

    def __init__(
        self,
        source: str,
        *,
        reason: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        message = f"Failed to fetch configuration from {source}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, context={"source": source}, cause=cause)
        self.source = source


# =============================================================================
# Label-Related Exceptions
# =============================================================================


class LabelError(SilenceManagerError):
    """Base exception for label registry errors."""

    pass


class UnknownLabelError(LabelError):
    """Raised when an operation names a label that is not configured."""

    def __init__(self, label: str, *, configured: list[str] | None = None) -> None:
        context: dict[str, Any] = {"label": label}
        if configured:
            context["configured"] = configured
        super().__init__(f"Unknown label: {label}", context=context)
        self.label = label


class LabelFetchError(LabelError):
    """Raised when label values cannot be fetched from the metrics backend.

    Examples:
        - Prometheus unreachable or timing out
        - Non-success status in the response envelope
        - Malformed JSON payload
    """

    def __init__(
        self,
        label: str,
        *,
        reason: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        context: dict[str, Any] = {"label": label}
        if status_code is not None:
            context["status_code"] = status_code
        message = f"Error fetching {label} values"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, context=context, cause=cause)
        self.label = label
        self.reason = reason
        self.status_code = status_code

    @property
    def diagnostic(self) -> str:
        """Operator-facing message including the proxy/CORS hint."""
        return f"{self.message}\n\n{CORS_HINT}"


# =============================================================================
# Validation Exceptions
# =============================================================================


class ValidationError(SilenceManagerError):
    """Base exception for operator input that fails validation.

    The message is suitable for showing directly to the operator.
    """

    def __init__(self, message: str, *, field: str, value: Any = None) -> None:
        context: dict[str, Any] = {"field": field}
        if value is not None:
            context["value"] = value
        super().__init__(message, context=context)
        self.field = field
        self.value = value


class NoMatchersError(ValidationError):
    """Raised when no label value is selected."""

    def __init__(self) -> None:
        super().__init__("Please select at least one label value.", field="matchers")


class EmptyCommentError(ValidationError):
    """Raised when the silence comment is blank."""

    def __init__(self) -> None:
        super().__init__("Please provide a comment for the silence.", field="comment")


class EmptyCreatorError(ValidationError):
    """Raised when the silence creator is blank."""

    def __init__(self) -> None:
        super().__init__("Please provide your name as the creator.", field="createdBy")


class InvalidDurationError(ValidationError):
    """Raised when a duration has no leading integer magnitude."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid duration {value!r}: expected a number optionally followed by h, d or w.",
            field="duration",
            value=value,
        )


class UnknownLabelValueError(ValidationError):
    """Raised when a selection names a value absent from the label's cache."""

    def __init__(self, label: str, value: str) -> None:
        super().__init__(
            f"{value!r} is not a known value of label {label}.",
            field=label,
            value=value,
        )
        self.label = label


# =============================================================================
# Submission Exceptions
# =============================================================================


class SubmissionError(SilenceManagerError):
    """Raised when the alerting backend rejects or never receives a silence.

    The backend status and body are kept verbatim for the operator.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
        reason: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        context: dict[str, Any] = {"endpoint": endpoint}
        if status_code is not None:
            context["status_code"] = status_code
        message = "Error creating silence"
        if status_code is not None:
            message = f"{message}: HTTP error! Status: {status_code}"
        elif reason:
            message = f"{message}: {reason}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message, context=context, cause=cause)
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
