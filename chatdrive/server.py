"""
Command-line entry point that serves the chatdrive API with uvicorn.
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from chatdrive.app import create_app
from chatdrive.config import get_settings
from chatdrive.dependencies import get_db_client
from chatdrive.network import describe_addresses

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="chatdrive API server")
    parser.add_argument(
        "--host",
        type=str,
        default=settings.host,
        help="Interface to bind (default: all interfaces)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help="Port to listen on (env: PORT)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help="Logging level (env: LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(db=get_db_client())
    logger.info("Server running at:")
    for line in describe_addresses(args.port):
        logger.info(line)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
