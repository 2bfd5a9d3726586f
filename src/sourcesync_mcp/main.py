# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

import argparse
import asyncio
import sys
from typing import List, Optional

from sourcesync_mcp.authentication import validate_api_key
from sourcesync_mcp.clients.sourcesync import SourceSyncClient
from sourcesync_mcp.config import ConfigKind, get_settings
from sourcesync_mcp.exceptions import SourceSyncError
from sourcesync_mcp.schemas import ValidateApiKeyParams
from sourcesync_mcp.server import mcp
from sourcesync_mcp.utils.logger import configure_logging, logger

TRANSPORTS = ["stdio", "streamable-http", "sse"]


async def check_api_key() -> bool:
    """Validates the configured API key against the SourceSync API.

    The namespace and organization defaults are resolved too when configured,
    so the log shows which ones tools will fall back to.
    """
    async with SourceSyncClient(get_settings()) as client:
        configured = [kind for kind in ConfigKind if client.settings.default_for(kind)]
        defaults = client.defaults(kinds=configured)
        logger.info(
            f"Checking API key (namespace={defaults.namespace_id or '-'}, "
            f"organization={defaults.organization_id or '-'})"
        )
        return await validate_api_key(client, ValidateApiKeyParams())


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="SourceSync.ai MCP server")
    parser.add_argument("--transport", choices=TRANSPORTS, default="stdio", help="MCP transport to serve")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for HTTP transports")
    parser.add_argument("--port", type=int, default=8000, help="Port for HTTP transports")
    parser.add_argument("--log-level", default=None, help="Log level (defaults to SOURCESYNC_LOG_LEVEL or INFO)")
    parser.add_argument("--check", action="store_true", help="Validate the configured API key and exit")

    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(args.log_level or settings.log_level)

    if args.check:
        try:
            valid = asyncio.run(check_api_key())
        except SourceSyncError as e:
            logger.error(f"API key check failed: {e.message}")
            sys.exit(1)
        if not valid:
            logger.error("API key was rejected by SourceSync")
            sys.exit(1)
        logger.info("API key is valid.")
        return

    logger.info(f"Starting SourceSync MCP server ({args.transport})")
    if args.transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport=args.transport, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
