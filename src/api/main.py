"""FastAPI application entry point."""
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks, health
from core.config import get_settings
from core.errors import ApiError
from db.session import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()
    logging.basicConfig(
        level=app_settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Bookmarks API (environment=%s)", app_settings.environment)

    yield

    await dispose_engine()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Time the request and log the outcome."""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


SECURITY_HEADERS = {
    # HSTS: enforce HTTPS for 1 year, including subdomains
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


def error_body(message: str) -> dict:
    """Body shape shared by every error response."""
    return {"error": {"message": message}}


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="CRUD API for saved bookmarks.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ApiError)
async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    """Render errors raised by routers and dependencies."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies and parameters as 400."""
    messages = []
    for err in exc.errors():
        loc = err.get("loc", ())
        field = loc[-1] if loc else "request"
        messages.append(f"{field}: {err.get('msg', 'invalid')}")
    return JSONResponse(
        status_code=400,
        content=error_body("; ".join(messages) or "Invalid request"),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Return a 500, hiding the exception text in production.

    This handler runs in the outermost server-error middleware, outside the
    security-header and CORS middleware, so it adds those headers itself.
    """
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = "server error" if get_settings().is_production else str(exc)
    headers = dict(SECURITY_HEADERS)
    origin = request.headers.get("origin")
    allowed = app_settings.cors_origins
    if origin and ("*" in allowed or origin in allowed):
        headers["Access-Control-Allow-Origin"] = "*" if "*" in allowed else origin
        if "*" not in allowed:
            headers["Vary"] = "Origin"
    return JSONResponse(status_code=500, content=error_body(message), headers=headers)


app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(health.router)
app.include_router(bookmarks.router, prefix="/api")
