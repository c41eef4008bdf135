import pytest

from fibonacci_api.resolver import (
    InputResolver,
    PathScanStrategy,
    QueryParamStrategy,
    Resolution,
    TrailingSegmentStrategy,
    U64_MAX,
    parse_unsigned,
    resolve,
)


# ========================
# Unsigned parsing
# ========================

@pytest.mark.parametrize("token, expected", [
    ("0", 0),
    ("7", 7),
    ("007", 7),
    ("+7", 7),
    ("18446744073709551615", U64_MAX),
])
def test_parse_unsigned_accepts(token, expected):
    assert parse_unsigned(token) == expected


@pytest.mark.parametrize("token", [
    "", "-4", "3.5", " 7", "7 ", "abc", "1_000", "+", "++7", "٧",
    "18446744073709551616",
    "9" * 5000,
])
def test_parse_unsigned_rejects(token):
    assert parse_unsigned(token) is None


# ========================
# Precedence
# ========================

def test_query_wins_over_path():
    assert resolve("/api/7", "n=42") == 42


def test_path_fallback():
    assert resolve("/api/7", "") == 7


def test_structural_tokens_only_gives_default():
    assert resolve("/api/main", "") == 10


def test_root_gives_default():
    assert resolve("/", "") == 10


def test_empty_path_gives_default():
    assert resolve("", "") == 10


def test_resolution_reports_method():
    resolver = InputResolver()
    assert resolver.resolve("/api/7", "n=42") == Resolution(42, "query_parameter")
    assert resolver.resolve("/api/7") == Resolution(7, "path_segment")
    assert resolver.resolve("/api") == Resolution(10, "default")


def test_idempotent():
    resolver = InputResolver()
    assert resolver.resolve("/api/13", "x=1") == resolver.resolve("/api/13", "x=1")


# ========================
# Query strategy
# ========================

def test_query_skips_unparsable_n():
    assert QueryParamStrategy().extract("/", "n=abc&n=5") == 5


def test_query_ignores_other_params():
    strategy = QueryParamStrategy()
    assert strategy.extract("/", "nn=3&m=4") is None
    assert strategy.extract("/", "x=1&n=9") == 9


@pytest.mark.parametrize("query", ["n=", "n=-4", "n=3.5", "n", ""])
def test_bad_query_falls_through_to_path(query):
    assert resolve("/api/12", query) == 12


def test_query_overflow_falls_through():
    assert resolve("/api/12", "n=18446744073709551616") == 12


# ========================
# Path strategies
# ========================

def test_path_scan_from_the_end():
    assert PathScanStrategy().extract("/api/3/8", "") == 8


def test_path_scan_skips_empty_and_tokens():
    strategy = PathScanStrategy()
    assert strategy.extract("/api/21/", "") == 21
    assert strategy.extract("//api//21//main", "") == 21
    assert strategy.extract("/21/main.py", "") == 21


def test_path_scan_custom_tokens():
    strategy = PathScanStrategy(structural_tokens=("fib",))
    assert strategy.extract("/fib", "") is None
    assert strategy.extract("/5/fib", "") == 5


def test_path_scan_skips_non_numeric_segments():
    assert PathScanStrategy().extract("/api/4/hello", "") == 4


def test_trailing_segment_is_unfiltered_and_exact():
    strategy = TrailingSegmentStrategy()
    assert strategy.extract("/api/33", "") == 33
    assert strategy.extract("/api/33/", "") is None
    assert strategy.extract("/33/hello", "") is None


def test_negative_and_fractional_segments_fall_back():
    assert resolve("/api/-5", "") == 10
    assert resolve("/api/2.5", "") == 10


# ========================
# Configurable order
# ========================

def test_custom_order_prefers_path():
    resolver = InputResolver(order=("path_scan", "query"))
    assert resolver.resolve("/api/7", "n=42") == Resolution(7, "path_segment")


def test_trailing_only_order():
    resolver = InputResolver(order=("trailing",))
    assert resolver.resolve("/api/7/", "n=42") == Resolution(10, "default")
    assert resolver.resolve("/api/7", "") == Resolution(7, "trailing_segment")


def test_custom_default():
    assert InputResolver(default_n=3).resolve("/", "") == Resolution(3, "default")


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError, match=r"Unknown extraction strategy: header.*path_scan"):
        InputResolver(order=("query", "header"))


def test_resolver_passes_tokens_to_every_strategy():
    resolver = InputResolver(structural_tokens=("fib",))
    assert all(s.structural_tokens == frozenset({"fib"}) for s in resolver.strategies)
    assert resolver.resolve("/5/fib") == Resolution(5, "path_segment")
    assert resolver.resolve("/api") == Resolution(10, "default")
