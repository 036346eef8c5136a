# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .routes import admin, applications, health, webhooks
from .schemas.error import ErrorResponse
from .services.los_bridge import LOSBridge

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the LOS bridge and its HTTP client; close the client on shutdown."""
    async with httpx.AsyncClient(timeout=settings.LOS_WEBHOOK_TIMEOUT) as client:
        app.state.los_bridge = LOSBridge(settings.ZAPIER_WEBHOOK_URL, client)
        if app.state.los_bridge.enabled:
            logger.info("LOS push enabled")
        else:
            logger.warning("ZAPIER_WEBHOOK_URL not set -- LOS pushes will be recorded as failed")
        yield


app = FastAPI(
    title="Lumina Portal API",
    description="Mortgage broker portal backend: applications and LOS integration",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    502: "Bad Gateway",
}


def _build_error(request: Request, status_code: int, detail: str) -> ErrorResponse:
    return ErrorResponse(
        type="about:blank",
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        request_id=request.headers.get("x-request-id", str(uuid.uuid4())),
        instance=request.url.path,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    body = _build_error(request, exc.status_code, str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    body = _build_error(request, 422, str(exc.errors()))
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    body = _build_error(request, 500, "An unexpected error occurred.")
    logger.exception(
        "Unhandled exception on %s (request_id=%s)", request.url.path, body.request_id
    )
    return JSONResponse(status_code=500, content=body.model_dump())


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(webhooks.router, prefix="/api/webhooks", tags=["webhooks"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the Lumina Portal API"}
