#!/usr/bin/env python3
"""
Flux Image MCP Server

Exposes one tool and the results it produces:
- generate_image: Text-to-image generation with OhMyGPT Flux 1.1 Pro Ultra
- ohmygpt://images/{index}: The most recent generations (0 = newest)

API Reference: https://www.ohmygpt.com
"""

import asyncio
import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolRequest, Resource, ResourceTemplate, ServerResult, Tool
from pydantic import AnyUrl

from . import __version__
from .cache import RecentGenerations
from .client import OhMyGPTClient
from .config import Settings, get_settings
from .handlers import (
    dispatch_tool,
    handle_list_resource_templates,
    handle_list_resources,
    handle_read_resource,
)
from .tools import get_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "flux-image-server"


def create_server(
    client: OhMyGPTClient, cache: RecentGenerations, allow_b64_json: bool = False
) -> Server:
    """Build an MCP server bound to a client and a generations cache.

    Args:
        client: OhMyGPT API client shared by all tool calls
        cache: Recent generations exposed as resources
        allow_b64_json: Advertise "b64_json" as a response_format

    Returns:
        Server with tool and resource handlers registered
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return get_tools(allow_b64_json)

    # Not @server.call_tool(): McpError and unexpected errors must leave this
    # handler as raised, not as an isError result.
    async def call_tool(request: CallToolRequest) -> ServerResult:
        result = await dispatch_tool(
            client, cache, request.params.name, request.params.arguments
        )
        return ServerResult(result)

    server.request_handlers[CallToolRequest] = call_tool

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return handle_list_resources(cache)

    @server.list_resource_templates()
    async def list_resource_templates() -> list[ResourceTemplate]:
        return handle_list_resource_templates()

    @server.read_resource()
    async def read_resource(uri: AnyUrl):
        return handle_read_resource(cache, str(uri))

    return server


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout carries the protocol."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def main():
    """Run the MCP server."""
    configure_logging()
    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(_run_server(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Server terminated by an unexpected error")
        sys.exit(1)


async def _run_server(settings: Settings):
    """Async server runner."""
    cache = RecentGenerations(settings.max_cached_generations)
    async with OhMyGPTClient(settings) as client:
        server = create_server(client, cache, allow_b64_json=settings.allow_b64_json)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Flux Image MCP server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    main()
