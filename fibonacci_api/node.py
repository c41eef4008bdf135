"""
Fibonacci API - Node Server

Single-endpoint HTTP service returning the Nth Fibonacci number as JSON.

- Any GET/POST path resolves to an index (see resolver.py) and is answered
- OPTIONS answers CORS preflight
- /health reports liveness and the configured ceiling
"""

import logging
import time
from typing import Optional, Tuple

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .config import Settings
from .payload import CORS_HEADERS, handle_request
from .resolver import InputResolver

logger = logging.getLogger("fibonacci_api")

# ========================
# Logging Configuration
# ========================

class EndpointFilter(logging.Filter):
    """Filter to suppress access logs for internal endpoints."""
    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return not any(endpoint in msg for endpoint in ["GET /health"])

# Apply filter to uvicorn access logger
logging.getLogger("uvicorn.access").addFilter(EndpointFilter())


def configure_logging(settings: Settings) -> None:
    """
    Apply the configured level to the service logger.

    Worker processes started from an import string never run the CLI's
    basicConfig, so the app sets its own level and, when nothing upstream
    handles records, its own handler.
    """
    logger.setLevel(settings.log_level)
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        logger.addHandler(handler)


def raw_target(request: Request) -> Tuple[str, str]:
    """
    Path and full URI exactly as sent, without percent-decoding.

    Starlette's url.path is decoded while url.query is not; resolving on the
    raw path keeps both under the same rules.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1").split("?", 1)[0]
    else:
        path = request.url.path
    query = request.url.query
    full_uri = str(request.base_url).rstrip("/") + path
    if query:
        full_uri += "?" + query
    return path, full_uri


def error_response(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": str(exc),
            "status": "error"
        },
        headers=CORS_HEADERS,
    )


# ========================
# FastAPI App
# ========================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an app bound to the given settings (environment by default)."""
    settings = settings or Settings.from_env()
    configure_logging(settings)
    resolver = InputResolver(
        order=settings.resolver_order,
        default_n=settings.default_n,
        structural_tokens=settings.structural_tokens,
    )

    app = FastAPI(title="Fibonacci API")
    app.state.settings = settings

    @app.middleware("http")
    async def latency_middleware(request: Request, call_next):
        """Stamp every response with its handling latency."""
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(f"Failed to handle {request.method} {request.url.path}")
            response = error_response(exc)
        latency_ms = (time.time() - start_time) * 1000
        response.headers["X-Latency-Ms"] = f"{latency_ms:.2f}"
        return response

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception(f"Failed to handle {request.method} {request.url.path}")
        return error_response(exc)

    # ========================
    # API Endpoints
    # ========================

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok", "service": "fibonacci-api", "max_n": settings.max_n}

    @app.options("/{full_path:path}")
    def preflight(full_path: str):
        """CORS preflight."""
        return Response(status_code=200, headers=CORS_HEADERS)

    @app.api_route("/{full_path:path}", methods=["GET", "POST"])
    def fibonacci_endpoint(full_path: str, request: Request):
        """Compute F(n) for the index found in the path or query string."""
        path, full_uri = raw_target(request)
        result = handle_request(
            path=path,
            query=request.url.query,
            full_uri=full_uri,
            settings=settings,
            resolver=resolver,
        )
        return Response(
            content=result.body,
            status_code=result.status_code,
            headers=result.headers,
        )

    return app


app = create_app()
