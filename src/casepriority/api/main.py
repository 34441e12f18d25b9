"""
casepriority FastAPI Service

REST API for missing-persons case prioritization.

Endpoints:
    GET  /health                      - Liveness probe
    POST /assessments                 - Score a case
    POST /escalations/check           - Time-based escalation check
    GET  /priority-levels             - Display metadata for all levels
    GET  /priority-levels/{level}     - Display metadata for one level
    GET  /jurisdictions               - List profiles
    GET  /jurisdictions/select        - Pick a profile from location/address
    POST /jurisdictions/validate      - Validate a candidate profile
    GET  /jurisdictions/{id}          - Resolve a profile (with fallback)
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from casepriority import __version__
from casepriority.api.routes import assessments, escalations, jurisdictions, priority_levels
from casepriority.api.schemas.responses import ErrorResponse, HealthResponse
from casepriority.config import load_settings
from casepriority.engine import PriorityEngine
from casepriority.exceptions import (
    CasePriorityError,
    FallbackProfileMissingError,
    ProfileLoadError,
    ProfileValidationError,
    ProfileVersionMismatch,
)
from casepriority.profiles import get_default_registry

settings = load_settings()


# =============================================================================
# Logging
# =============================================================================

class JSONFormatter(logging.Formatter):
    """One JSON object per log line, with known extra fields lifted to the top level."""

    EXTRA_FIELDS = (
        "request_id",
        "jurisdiction",
        "level",
        "score",
        "fallback_used",
        "duration_ms",
    )

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # extra={...} fields from call sites
        for name in self.EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


# Package logger; uvicorn keeps its own handlers
logger = logging.getLogger("casepriority")
logger.setLevel(getattr(logging, settings.log_level, logging.INFO))
if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)


# =============================================================================
# Lifecycle
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the profile registry on startup and share it with the routes."""
    registry = get_default_registry()
    logger.info(
        f"Loaded {len(registry)} jurisdiction profiles: {', '.join(registry.ids())}",
        extra={"request_id": "startup"},
    )

    assessments.set_engine(
        PriorityEngine(registry=registry, default_jurisdiction=settings.default_jurisdiction)
    )
    jurisdictions.set_registry(registry)

    yield

    logger.info("Shutting down", extra={"request_id": "shutdown"})


app = FastAPI(
    title="casepriority API",
    description="""
**Priority scoring for missing-persons cases.**

Risk factors captured at intake are scored against a jurisdiction profile
and mapped to a priority level, P0 (critical) through P4 (minimal).

## Quick Start

1. `GET /jurisdictions` - See available jurisdiction profiles
2. `POST /assessments` - Score a case
3. `POST /escalations/check` - Check whether an unresolved case moves up a level
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
)

app.include_router(assessments.router)
app.include_router(escalations.router)
app.include_router(priority_levels.router)
app.include_router(jurisdictions.router)


# =============================================================================
# Middleware
# =============================================================================

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag each request with a short ID and echo it back in X-Request-ID."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id
    start = time.time()

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.debug(
        f"{request.method} {request.url.path} -> {response.status_code}",
        extra={
            "request_id": request_id,
            "duration_ms": round((time.time() - start) * 1000, 2),
        },
    )
    return response


# =============================================================================
# Error Handling
# =============================================================================

_ERROR_STATUS = {
    ProfileValidationError: 422,
    ProfileVersionMismatch: 422,
    ProfileLoadError: 500,
    FallbackProfileMissingError: 500,
}


def _status_for(exc: CasePriorityError) -> int:
    for exc_type, status in _ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return status
    return 400


@app.exception_handler(CasePriorityError)
async def casepriority_error_handler(request: Request, exc: CasePriorityError):
    """Map library errors to the structured error body."""
    request_id = getattr(request.state, "request_id", "unknown")
    status = _status_for(exc)
    logger.error(
        f"Request failed: {exc}",
        extra={"request_id": request_id},
    )
    body = exc.to_dict()
    error = ErrorResponse(
        error=body["message"],
        code=body["code"],
        details=body.get("details"),
        request_id=request_id,
    )
    return JSONResponse(status_code=status, content=error.model_dump())


# =============================================================================
# Health Endpoints
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Liveness probe - checks if process is alive and profiles are loaded."""
    registry = jurisdictions.get_registry()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        profiles_loaded=len(registry),
        default_jurisdiction=settings.default_jurisdiction,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
