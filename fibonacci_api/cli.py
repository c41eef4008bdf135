"""
Fibonacci API - Entry Point

    python -m fibonacci_api --port 3000 --max-n 1000
"""

import argparse
import logging
import os

import uvicorn

from .config import DEFAULT_N, MAX_N, Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fibonacci API - Node Server")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Interface to bind")
    parser.add_argument("--port", type=int, default=3000, help="Port to run the server on")
    parser.add_argument("--workers", type=int, default=1, help="Number of Uvicorn worker processes")
    parser.add_argument("--max-n", type=int, default=None,
                        help=f"Clamp ceiling for the index (default: {MAX_N})")
    parser.add_argument("--default-n", type=int, default=None,
                        help=f"Index used when the request has none (default: {DEFAULT_N})")
    parser.add_argument("--no-debug", action="store_true",
                        help="Omit the debug block and usage hint from responses")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default: INFO)")
    return parser


def export_settings(args: argparse.Namespace) -> None:
    """Set environment variables so worker processes build identical settings."""
    if args.max_n is not None:
        os.environ["FIB_MAX_N"] = str(args.max_n)
    if args.default_n is not None:
        os.environ["FIB_DEFAULT_N"] = str(args.default_n)
    if args.no_debug:
        os.environ["FIB_DEBUG"] = "false"
    if args.log_level:
        os.environ["FIB_LOG_LEVEL"] = args.log_level.upper()


def main(argv=None):
    args = build_parser().parse_args(argv)
    export_settings(args)

    settings = Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    print(f"🚀 Starting Fibonacci API on port {args.port}")
    print(f"   Max N: {settings.max_n}")
    print(f"   Default N: {settings.default_n}")
    print(f"   Resolver order: {', '.join(settings.resolver_order)}")
    print(f"   Workers: {args.workers}")

    if args.workers > 1:
        uvicorn.run("fibonacci_api.node:app", host=args.host, port=args.port, workers=args.workers)
    else:
        # node builds a module-level app from the environment on import
        from .node import create_app
        uvicorn.run(create_app(settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
