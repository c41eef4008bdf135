"""
Fibonacci API - Client

    python -m fibonacci_api.client --url http://127.0.0.1:3000 --n 20 --via query
"""

import argparse
import asyncio
import time
from typing import Optional

import httpx


class FibonacciClient:
    """
    Thin async wrapper around the endpoint.

    Usage:
        async with FibonacciClient("http://127.0.0.1:3000") as client:
            data = await client.get_fibonacci(20)
    """

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: float = 10.0):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def get_fibonacci(self, n: Optional[int] = None, via: str = "path") -> dict:
        """
        Request F(n). `via` selects /api/{n} ("path") or /api?n={n} ("query");
        with n=None the server falls back to its default index.
        """
        if via not in ("path", "query"):
            raise ValueError(f"via must be 'path' or 'query', got {via!r}")

        if n is None:
            resp = await self._client.get("/api")
        elif via == "path":
            resp = await self._client.get(f"/api/{n}")
        else:
            resp = await self._client.get("/api", params={"n": n})
        resp.raise_for_status()
        return resp.json()

    async def health(self) -> dict:
        resp = await self._client.get("/health")
        resp.raise_for_status()
        return resp.json()


async def main(argv=None):
    parser = argparse.ArgumentParser(description="Fibonacci API client")
    parser.add_argument("--url", default="http://127.0.0.1:3000", help="Server URL")
    parser.add_argument("--n", type=int, default=None, help="Index to request")
    parser.add_argument("--via", choices=["path", "query"], default="path",
                        help="Send the index as a path segment or query parameter")
    args = parser.parse_args(argv)

    async with FibonacciClient(args.url) as client:
        start = time.time()
        data = await client.get_fibonacci(args.n, via=args.via)
        print(f"GET fib({data['n']}): Time: {time.time() - start:.4f}s")
        print(f"Result: {data['fibonacci']}")


if __name__ == "__main__":
    asyncio.run(main())
