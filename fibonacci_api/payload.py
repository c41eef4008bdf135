"""
Fibonacci API - Response Payload

Pydantic models for the JSON body and the pure request -> response pipeline
that the HTTP layer hands its parsed request to.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict

from .config import Settings
from .engine import compute
from .resolver import InputResolver, Resolution

logger = logging.getLogger("fibonacci_api")

USAGE_HINT = (
    "To calculate Fibonacci of a different number, use: /api/20 "
    "(replace 20 with your desired number(integer))"
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

JSON_HEADERS = {"Content-Type": "application/json", **CORS_HEADERS}


# ========================
# Pydantic Models
# ========================

class DebugInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    query: str
    full_uri: str
    extraction_method: str


class FibonacciResponse(BaseModel):
    """Body of a successful response. `fibonacci` is a decimal string."""
    model_config = ConfigDict(frozen=True)

    fibonacci: str
    n: int
    timestamp: str
    status: str = "success"
    debug: Optional[DebugInfo] = None
    usage: Optional[str] = None


class HandlerResult(NamedTuple):
    status_code: int
    headers: Dict[str, str]
    body: str


# ========================
# Pipeline
# ========================

def utc_timestamp() -> str:
    """RFC3339 generation time, e.g. 2026-10-19T12:00:00.123456+00:00"""
    return datetime.now(timezone.utc).isoformat()


def build_payload(resolution: Resolution, n: int, value: str,
                  path: str, query: str, full_uri: str,
                  settings: Settings) -> FibonacciResponse:
    """Assemble the response record. `value` is the decimal form of F(n)."""
    debug = None
    usage = None
    if settings.debug:
        debug = DebugInfo(
            path=path,
            query=query,
            full_uri=full_uri,
            extraction_method=resolution.method,
        )
        usage = USAGE_HINT

    return FibonacciResponse(
        fibonacci=value,
        n=n,
        timestamp=utc_timestamp(),
        debug=debug,
        usage=usage,
    )


def handle_request(path: str, query: str = "", full_uri: Optional[str] = None,
                   settings: Optional[Settings] = None,
                   resolver: Optional[InputResolver] = None) -> HandlerResult:
    """
    Run the full pipeline: request -> N -> F(N) -> JSON body.

    Framework agnostic; the caller transmits status, headers and body.
    """
    settings = settings or Settings()
    query = query or ""
    if full_uri is None:
        full_uri = f"{path}?{query}" if query else path
    if resolver is None:
        resolver = InputResolver(
            order=settings.resolver_order,
            default_n=settings.default_n,
            structural_tokens=settings.structural_tokens,
        )

    resolution = resolver.resolve(path, query)
    n, value = compute(resolution.n, settings.max_n)

    if n != resolution.n:
        logger.info(f"Clamped n={resolution.n} to max_n={settings.max_n}")
    digits = str(value)
    logger.info(f"fib({n}) via {resolution.method}: {len(digits)} digits")

    payload = build_payload(resolution, n, digits, path, query, full_uri, settings)
    body = payload.model_dump_json(exclude_none=True)
    return HandlerResult(200, dict(JSON_HEADERS), body)
