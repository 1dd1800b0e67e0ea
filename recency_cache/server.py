"""
MCP Server for the Recency Cache
Copyright 2025 Jurden Bruce

Serves a memoised prime factoriser over stdio. Configure with
RC_CACHE_CAPACITY, RC_FACTORISE_DELAY_MS and RC_LOG_LEVEL.

Usage:
    recency-cache-mcp
    python -m recency_cache.server
"""

import asyncio
import logging
import sys
import traceback
from typing import Optional

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from pydantic import ValidationError

from . import __version__
from .config import get_config
from .factorisers import CachedFactoriser, SimpleFactoriser
from .mcp_tools import get_tool_definitions, handle_tool_call

logger = logging.getLogger("recency-cache")

app = Server("recency-cache")
factoriser: Optional[CachedFactoriser] = None


@app.list_tools()
async def handle_list_tools() -> list[Tool]:
    """List available cache tools"""
    return get_tool_definitions()


@app.call_tool()
async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
    return await handle_tool_call(name, arguments, factoriser)


async def main():
    """Main entry point"""
    global factoriser

    try:
        config = get_config()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR, stream=sys.stderr)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=config.log_level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )

    try:
        logger.info(f"Initializing cache with capacity {config.cache_capacity}")
        factoriser = CachedFactoriser(
            config.cache_capacity,
            factoriser=SimpleFactoriser(delay_ms=config.factorise_delay_ms),
            thread_safe=True,
        )

        logger.info("Starting MCP server...")
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="recency-cache",
                    server_version=__version__,
                    capabilities=app.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        logger.error(traceback.format_exc())
        sys.exit(1)
    finally:
        if factoriser:
            factoriser.cache.log_stats()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
