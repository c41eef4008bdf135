"""
Fibonacci API - Engine

Iterative big-integer Fibonacci with an enforced ceiling on the index.

Python ints are arbitrary precision, so there is no overflow to guard against.
The ceiling exists only to bound the work done per request: each step is one
big-integer addition whose cost grows with the digit count.
"""

from typing import Tuple

from .config import MAX_N


def clamp(n: int, max_n: int = MAX_N) -> int:
    """Reduce n to the configured maximum."""
    return min(n, max_n)


def fibonacci(n: int) -> int:
    """
    Compute F(n) with F(0) = 0, F(1) = 1.

    Pair accumulation: (a, b) slides along the sequence, so only two values
    are alive at any time and there is no recursion depth to worry about.
    """
    if n == 0:
        return 0
    if n == 1:
        return 1

    a, b = 0, 1
    for _ in range(2, n + 1):
        a, b = b, a + b
    return b


def compute(n: int, max_n: int = MAX_N) -> Tuple[int, int]:
    """Clamp n and compute its Fibonacci value. Returns (clamped_n, value)."""
    n = clamp(n, max_n)
    return n, fibonacci(n)
