"""Web server entrypoint for the code variants API."""

from __future__ import annotations

import argparse
import os

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code-variants-web",
        description="Run the local HTTP API for the code variants service.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind.")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload.")
    parser.add_argument("--env-file", default=".env", help="Path to dotenv file.")
    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    os.environ["CV_ENV_FILE"] = args.env_file

    uvicorn.run(
        "code_variants.web.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
