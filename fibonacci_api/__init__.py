"""
Fibonacci API

HTTP service that returns the Nth Fibonacci number as JSON.

- InputResolver: finds N in the query string or path, falling back to a default
- fibonacci / compute: iterative big-integer engine with a clamp on N
- handle_request: framework agnostic request -> (status, headers, body) pipeline
- node.create_app: FastAPI application serving the pipeline
"""

from .config import Settings, MAX_N, DEFAULT_N
from .engine import clamp, compute, fibonacci
from .resolver import InputResolver, Resolution, parse_unsigned, resolve
from .payload import FibonacciResponse, HandlerResult, handle_request

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "MAX_N",
    "DEFAULT_N",
    "clamp",
    "compute",
    "fibonacci",
    "InputResolver",
    "Resolution",
    "parse_unsigned",
    "resolve",
    "FibonacciResponse",
    "HandlerResult",
    "handle_request",
]
