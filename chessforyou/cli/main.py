from __future__ import annotations

import argparse
import os
from typing import List, Optional

import uvicorn


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9090


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the chessforyou HTTP server")
    parser.add_argument(
        "--host",
        type=str,
        default=os.environ.get("CHESSFORYOU_HOST", DEFAULT_HOST),
        help=f"Bind address (env CHESSFORYOU_HOST, default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("CHESSFORYOU_PORT", DEFAULT_PORT)),
        help=f"Bind port (env CHESSFORYOU_PORT, default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--log-level",
        type=str.lower,
        choices=["critical", "error", "warning", "info", "debug"],
        default=os.environ.get("CHESSFORYOU_LOG_LEVEL", "info").lower(),
        help="Log level (env CHESSFORYOU_LOG_LEVEL, default: info)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    uvicorn.run(
        "chessforyou.protocol.http.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
