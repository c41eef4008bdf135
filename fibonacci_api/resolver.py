"""
Fibonacci API - Input Resolver

Maps an ambiguous request (path + query string) onto a single index N.

Hosting platforms disagree about where the number ends up: sometimes it is a
path segment (/api/20), sometimes a query parameter (?n=20), and the literal
path may still contain routing tokens. Instead of demanding one strict
contract, the resolver tries a chain of extraction strategies in a fixed
order and falls back to a default. It never fails.

Strategies:
- query: the first `n=<int>` parameter in the query string
- path_scan: path segments scanned from the end, skipping structural tokens
- trailing: exactly the last path segment, unfiltered
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Iterable, NamedTuple, Optional, Sequence

from .config import DEFAULT_N, DEFAULT_RESOLVER_ORDER, DEFAULT_STRUCTURAL_TOKENS

logger = logging.getLogger("fibonacci_api.resolver")

# Largest index the original 64-bit deployment could accept
U64_MAX = 2 ** 64 - 1

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


class Resolution(NamedTuple):
    """The resolved index and the strategy that produced it."""
    n: int
    method: str


def parse_unsigned(token: str) -> Optional[int]:
    """
    Parse a token as an unsigned 64-bit integer.

    Returns None for anything else: negatives, fractions, blanks, padded
    whitespace, non-ASCII digits and values beyond the 64-bit range.
    """
    if not _UNSIGNED_RE.fullmatch(token):
        return None
    digits = token.lstrip("+").lstrip("0") or "0"
    # Too many digits to fit, and int() of huge strings is capped anyway
    if len(digits) > 20:
        return None
    value = int(digits)
    if value > U64_MAX:
        return None
    return value


# ========================
# Extraction Strategies
# ========================

class ExtractionStrategy(ABC):
    """Abstract base class for index extraction strategies."""

    def __init__(self, structural_tokens: Iterable[str] = DEFAULT_STRUCTURAL_TOKENS):
        self.structural_tokens = frozenset(structural_tokens)

    @abstractmethod
    def extract(self, path: str, query: str) -> Optional[int]:
        """Return the index found in the request, or None to fall through."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Label reported as `extraction_method`."""
        pass


class QueryParamStrategy(ExtractionStrategy):
    """First `n=` parameter in the query string that parses."""

    def get_name(self) -> str:
        return "query_parameter"

    def extract(self, path: str, query: str) -> Optional[int]:
        if not query:
            return None
        for param in query.split("&"):
            if param.startswith("n="):
                num = parse_unsigned(param[2:])
                if num is not None:
                    logger.debug(f"Found number in query: {num}")
                    return num
        return None


class PathScanStrategy(ExtractionStrategy):
    """
    Scan path segments from the end toward the start.

    Empty segments (from leading, trailing or doubled slashes) and structural
    tokens such as `api` are skipped. The first numeric segment wins.
    """

    def get_name(self) -> str:
        return "path_segment"

    def extract(self, path: str, query: str) -> Optional[int]:
        segments = path.split("/")
        logger.debug(f"Path segments: {segments}")

        for segment in reversed(segments):
            if not segment or segment in self.structural_tokens:
                continue
            num = parse_unsigned(segment)
            if num is not None:
                logger.debug(f"Found number in path: {num}")
                return num
        return None


class TrailingSegmentStrategy(ExtractionStrategy):
    """Exactly the last `/`-delimited segment, with no filtering."""

    def get_name(self) -> str:
        return "trailing_segment"

    def extract(self, path: str, query: str) -> Optional[int]:
        num = parse_unsigned(path.split("/")[-1])
        if num is not None:
            logger.debug(f"Found number at end of path: {num}")
        return num


# ========================
# Resolver
# ========================

class InputResolver:
    """
    Runs extraction strategies in precedence order.

    Usage:
        resolver = InputResolver(order=("query", "path_scan", "trailing"))
        resolution = resolver.resolve("/api/7", "n=42")   # Resolution(n=42, method="query_parameter")
    """

    STRATEGIES = {
        "query": QueryParamStrategy,
        "path_scan": PathScanStrategy,
        "trailing": TrailingSegmentStrategy,
    }

    def __init__(self, order: Sequence[str] = DEFAULT_RESOLVER_ORDER,
                 default_n: int = DEFAULT_N,
                 structural_tokens: Iterable[str] = DEFAULT_STRUCTURAL_TOKENS):
        self.default_n = default_n
        self.structural_tokens = tuple(structural_tokens)
        self.strategies = [self._create_strategy(name) for name in order]

    def _create_strategy(self, strategy_name: str) -> ExtractionStrategy:
        """Create a strategy instance by name."""
        if strategy_name not in self.STRATEGIES:
            raise ValueError(f"Unknown extraction strategy: {strategy_name}. "
                             f"Available: {list(self.STRATEGIES.keys())}")
        return self.STRATEGIES[strategy_name](structural_tokens=self.structural_tokens)

    def resolve(self, path: str, query: str = "") -> Resolution:
        """Resolve the request to an index. Always returns a value."""
        for strategy in self.strategies:
            num = strategy.extract(path, query or "")
            if num is not None:
                return Resolution(num, strategy.get_name())

        logger.debug(f"No number found, using default: {self.default_n}")
        return Resolution(self.default_n, "default")


def resolve(path: str, query: str = "") -> int:
    """Resolve with the default precedence and default N."""
    return InputResolver().resolve(path, query).n