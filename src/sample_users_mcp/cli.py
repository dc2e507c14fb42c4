"""CLI entrypoint for the sample users MCP server."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .config import SERVER_NAME, ServerConfig
from .core.exceptions import ConfigError, DatasetLoadError
from .core.logger import get_logger, setup_logging
from .mcp_server import run_server

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=SERVER_NAME, description="Serve the sample users/orders tools over MCP")
    parser.add_argument("--transport", help="stdio or streamable-http (env MCP_TRANSPORT)")
    parser.add_argument("--host", help="Interface to bind the HTTP transport to (env HOST)")
    parser.add_argument("--port", type=int, help="Port of the HTTP transport (env PORT)")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR (env LOG_LEVEL)")
    parser.add_argument("--data-file", help="JSON dataset replacing the built-in sample data (env DATA_FILE)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ServerConfig.from_env(
            transport=args.transport,
            host=args.host,
            port=args.port,
            log_level=args.log_level,
            data_file=args.data_file,
        )
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 2

    setup_logging(config.log_level)

    try:
        run_server(config)
    except DatasetLoadError as e:
        logger.error("Cannot start: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
