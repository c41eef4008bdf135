"""
Fibonacci API - Configuration

All knobs come from environment variables so that uvicorn worker processes
(started with --workers) see the same values as the CLI that launched them.
"""

import os
from dataclasses import dataclass
from typing import Tuple

# ========================
# Defaults
# ========================

# Clamp ceiling for the requested index. Keeps worst-case latency small.
MAX_N = 1000
DEFAULT_N = 10

# F(20000) has 4180 digits, inside the interpreter's int -> str conversion limit
MAX_N_CEILING = 20000

DEFAULT_RESOLVER_ORDER = ("query", "path_scan", "trailing")

# Path segments that belong to routing, never to the caller's input
DEFAULT_STRUCTURAL_TOKENS = ("api", "main", "main.py")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration for one app instance."""

    max_n: int = MAX_N
    default_n: int = DEFAULT_N
    debug: bool = True
    resolver_order: Tuple[str, ...] = DEFAULT_RESOLVER_ORDER
    structural_tokens: Tuple[str, ...] = DEFAULT_STRUCTURAL_TOKENS
    log_level: str = "INFO"

    def __post_init__(self):
        if not 0 <= self.max_n <= MAX_N_CEILING:
            raise ValueError(f"max_n must be between 0 and {MAX_N_CEILING}, got {self.max_n}")
        if self.default_n < 0:
            raise ValueError(f"default_n must be non-negative, got {self.default_n}")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from FIB_* environment variables."""
        return cls(
            max_n=_env_int("FIB_MAX_N", MAX_N),
            default_n=_env_int("FIB_DEFAULT_N", DEFAULT_N),
            debug=_env_bool("FIB_DEBUG", True),
            resolver_order=_env_list("FIB_RESOLVER_ORDER", DEFAULT_RESOLVER_ORDER),
            structural_tokens=_env_list("FIB_STRUCTURAL_TOKENS", DEFAULT_STRUCTURAL_TOKENS),
            log_level=os.environ.get("FIB_LOG_LEVEL", "INFO").upper(),
        )
