"""
FastAPI application serving the silence panel API.

Routes:
    GET    /api/config                      labels + alertmanager URL
    GET    /api/labels                      view model per label
    GET    /api/labels/{label}/values?q=    fuzzy-filtered values
    POST   /api/labels/refresh              refresh every label
    POST   /api/labels/{label}/refresh      refresh one label
    GET    /api/selections                  chosen value per label
    PUT    /api/selections/{label}          choose or clear a value
    DELETE /api/selections                  clear all selections
    GET    /api/matchers                    current matchers + preview
    POST   /api/silences                    compose and submit a silence
    GET    /api/notifications               recent operator messages
    GET    /api/health                      backend health
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from silence_manager import __version__
from silence_manager.api.models import (
    ConfigPayload,
    CreateSilenceRequest,
    CreateSilenceResponse,
    ErrorResponse,
    LabelView,
    MatchersResponse,
    Notification,
    SelectionRequest,
)
from silence_manager.core.config import AppConfig, get_config
from silence_manager.core.exceptions import (
    LabelFetchError,
    SubmissionError,
    UnknownLabelError,
    ValidationError,
)
from silence_manager.core.logging import get_logger
from silence_manager.panel.notifications import NotificationFeed
from silence_manager.panel.panel import SilencePanel

logger = get_logger(__name__)


# =============================================================================
# Request Logging Middleware (nginx combined log format)
# =============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request logging middleware using nginx combined log format."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_secs = time.perf_counter() - start_time

        client_host = request.client.host if request.client else "-"
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        http_version = request.scope.get("http_version", "1.1")
        content_length = response.headers.get("content-length", "-")
        referer = request.headers.get("referer", "-")
        user_agent = request.headers.get("user-agent", "-")
        timestamp = datetime.now().astimezone().strftime("[%d/%b/%Y:%H:%M:%S %z]")

        logger.info(
            f'{client_host} - - {timestamp} '
            f'"{request.method} {path} HTTP/{http_version}" '
            f'{response.status_code} {content_length} '
            f'"{referer}" "{user_agent}" '
            f'{duration_secs:.3f}'
        )
        return response


# =============================================================================
# Error Handlers
# =============================================================================


def _error(http_status: int, error: str, detail: str, **extra: Any) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, **extra)
    return JSONResponse(status_code=http_status, content=body.model_dump(exclude_none=True))


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(422, "validation_error", exc.message, field=exc.field)

    @app.exception_handler(UnknownLabelError)
    async def unknown_label(request: Request, exc: UnknownLabelError) -> JSONResponse:
        return _error(404, "unknown_label", exc.message)

    @app.exception_handler(LabelFetchError)
    async def label_fetch_error(request: Request, exc: LabelFetchError) -> JSONResponse:
        return _error(
            502,
            "label_fetch_error",
            exc.diagnostic,
            status_code=exc.status_code,
        )

    @app.exception_handler(SubmissionError)
    async def submission_error(request: Request, exc: SubmissionError) -> JSONResponse:
        return _error(
            502,
            "submission_error",
            exc.message,
            status_code=exc.status_code,
        )


# =============================================================================
# Application Factory
# =============================================================================


def create_app(
    config: AppConfig | None = None,
    panel: SilencePanel | None = None,
    *,
    access_log: bool | None = None,
) -> FastAPI:
    """Build the panel API.

    Args:
        config: Application configuration; defaults to the global config.
        panel: Pre-built panel (tests inject fakes); defaults to one wired
            to the configured Prometheus and Alertmanager.
        access_log: Override ``config.server.access_log``.
    """
    config = config or get_config()
    panel = panel or SilencePanel.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        outcomes = await panel.start()
        failed = [label for label, outcome in outcomes.items() if not outcome.ok]
        logger.info(f"Panel started with labels {','.join(panel.labels)}; failed refreshes: {failed or 'none'}")
        try:
            yield
        finally:
            panel.close()

    app = FastAPI(title="Silence Manager", version=__version__, lifespan=lifespan)
    app.state.panel = panel
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    if config.server.access_log if access_log is None else access_log:
        app.add_middleware(RequestLoggingMiddleware)

    _register_error_handlers(app)

    @app.get("/api/config", response_model=ConfigPayload)
    async def get_panel_config() -> ConfigPayload:
        """Labels offered by the panel and the Alertmanager URL."""
        return ConfigPayload(
            labels=",".join(panel.labels),
            alertmanager_url=config.alertmanager.endpoint,
        )

    @app.get("/api/labels", response_model=list[LabelView])
    async def list_labels() -> list[LabelView]:
        return panel.label_views()

    @app.get("/api/labels/{label}/values", response_model=list[str])
    async def label_values(label: str, q: str | None = Query(None, description="Fuzzy search query")) -> list[str]:
        """Values of a label filtered by ``q``; no query returns them all."""
        return panel.search(label, q)

    @app.post("/api/labels/refresh")
    async def refresh_labels() -> dict[str, Any]:
        outcomes = await panel.refresh_all()
        return {
            label: {
                "ok": outcome.ok,
                "count": len(outcome.values),
                "error": outcome.error.diagnostic if outcome.error else None,
            }
            for label, outcome in outcomes.items()
        }

    @app.post("/api/labels/{label}/refresh")
    async def refresh_label(label: str) -> dict[str, Any]:
        outcome = await panel.refresh(label)
        return {"label": label, "applied": outcome.applied, "values": list(outcome.values)}

    @app.get("/api/selections", response_model=dict[str, str])
    async def get_selections() -> dict[str, str]:
        return panel.selection.as_dict()

    @app.put("/api/selections/{label}", response_model=MatchersResponse)
    async def set_selection(label: str, body: SelectionRequest) -> MatchersResponse:
        panel.select(label, body.value)
        return MatchersResponse(matchers=panel.matchers(), preview=panel.matchers_preview())

    @app.delete("/api/selections", response_model=MatchersResponse)
    async def clear_selections() -> MatchersResponse:
        panel.clear_selections()
        return MatchersResponse(matchers=panel.matchers(), preview=panel.matchers_preview())

    @app.get("/api/matchers", response_model=MatchersResponse)
    async def get_matchers() -> MatchersResponse:
        return MatchersResponse(matchers=panel.matchers(), preview=panel.matchers_preview())

    @app.post(
        "/api/silences",
        response_model=CreateSilenceResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_silence(body: CreateSilenceRequest) -> CreateSilenceResponse:
        """Compose a silence from the current selections and post it once."""
        silence_id, record = await panel.submit(body.duration, body.comment, body.created_by)
        return CreateSilenceResponse(silence_id=silence_id, silence=record)

    @app.get("/api/notifications", response_model=list[Notification])
    async def notifications(limit: int = Query(20, ge=0, le=500)) -> list[Notification]:
        if isinstance(panel.notifier, NotificationFeed):
            return panel.notifier.recent(limit)
        return []

    @app.get("/api/health")
    async def health() -> dict[str, Any]:
        """Reachability of the backends."""
        checks: dict[str, Any] = {}
        for name, collaborator in (("prometheus", panel.registry.source), ("alertmanager", panel.submitter)):
            check = getattr(collaborator, "health_check", None)
            if callable(check):
                healthy, details = await asyncio.to_thread(check)
                checks[name] = details
        healthy = all(details.get("healthy") for details in checks.values())
        return {
            "status": "healthy" if healthy else "degraded",
            "labels": list(panel.labels),
            "backends": checks,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app
