"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.middleware.sessions import SessionMiddleware

from api.routers import bookmarks, health, import_export, labels, lists, users
from core.config import get_settings
from core.errors import ApiError
from core.redis import RedisClient
from schemas.errors import ErrorDetail, ErrorResponse
from tasks.enrichment import EnrichmentQueue

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()

    # Startup: Connect to Redis, which backs the enrichment queue
    redis_client = RedisClient(
        url=app_settings.redis_url,
        enabled=app_settings.redis_enabled,
        pool_size=app_settings.redis_pool_size,
    )
    await redis_client.connect()
    app.state.redis = redis_client
    app.state.enrichment_queue = EnrichmentQueue(
        redis_client,
        max_attempts=app_settings.enrichment_max_attempts,
        failed_retention=app_settings.enrichment_failed_retention,
    )

    yield

    # Shutdown: Close Redis
    await redis_client.close()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


def error_response(status_code: int, error_type: str, message: str) -> JSONResponse:
    """Render the shared {"error": {"type", "message"}} envelope."""
    body = ErrorResponse(error=ErrorDetail(type=error_type, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="A personal bookmark manager with labels, lists, and import/export.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ApiError)
async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    """Render errors raised by handlers and dependencies."""
    return error_response(exc.status_code, exc.error_type, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed bodies, query strings and path ids as 400 invalid-request."""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return error_response(400, "invalid-request", message)


# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    SessionMiddleware,
    secret_key=app_settings.session_secret,
    max_age=app_settings.session_max_age,
    same_site="lax",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(bookmarks.router)
app.include_router(labels.router)
app.include_router(lists.router)
app.include_router(import_export.router)
