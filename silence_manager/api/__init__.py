"""
API module - data models and the panel HTTP server.

This module contains:
    - models: Pydantic data models for silences and API payloads
    - app: FastAPI application factory (import ``silence_manager.api.app``)
"""

from silence_manager.api.models import (
    ConfigPayload,
    CreateSilenceRequest,
    CreateSilenceResponse,
    ErrorResponse,
    LabelValuesResponse,
    LabelView,
    Matcher,
    MatchersResponse,
    Notification,
    SelectionRequest,
    SilenceCreatedResponse,
    SilenceRecord,
    SilenceStatus,
)

__all__ = [
    # Silence models
    "Matcher",
    "SilenceRecord",
    "SilenceStatus",
    # Backend responses
    "LabelValuesResponse",
    "SilenceCreatedResponse",
    # Panel API
    "ConfigPayload",
    "CreateSilenceRequest",
    "CreateSilenceResponse",
    "ErrorResponse",
    "LabelView",
    "MatchersResponse",
    "Notification",
    "SelectionRequest",
]
