"""Tool and resource handler implementations for Flux Image MCP."""

import logging
import re
from typing import Any

from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.shared.exceptions import McpError
from mcp.types import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    CallToolResult,
    ErrorData,
    Resource,
    ResourceTemplate,
    TextContent,
)

from .cache import RecentGenerations
from .client import FluxAPIError, OhMyGPTClient
from .models import InvalidArguments, parse_generation_args
from .tools import GENERATE_IMAGE_TOOL
from .utils import build_form_fields, format_error_response, format_json, truncate_prompt

logger = logging.getLogger(__name__)

RESOURCE_URI_PREFIX = "ohmygpt://images/"
RESOURCE_URI_TEMPLATE = RESOURCE_URI_PREFIX + "{index}"
RESOURCE_MIME_TYPE = "application/json"

_RESOURCE_URI_PATTERN = re.compile(r"^ohmygpt://images/(\d+)$")


async def handle_generate_image(
    client: OhMyGPTClient, cache: RecentGenerations, args: Any
) -> CallToolResult:
    """Handle generate_image tool.

    Args:
        client: OhMyGPT API client
        cache: Recent generations to record the result in
        args: Tool arguments

    Returns:
        The upstream payload as JSON text, or a tool-level error result

    Raises:
        McpError: INVALID_PARAMS if the arguments fail validation
    """
    request = parse_generation_args(args)
    if isinstance(request, InvalidArguments):
        raise McpError(ErrorData(code=INVALID_PARAMS, message=request.message))

    fields = build_form_fields(request, client.model)

    try:
        payload = await client.generate_image(fields)
    except FluxAPIError as e:
        logger.warning("Image generation failed (status %s): %s", e.status_code, e.message)
        return CallToolResult(content=[format_error_response(e.message)], isError=True)

    cache.record(request.prompt, payload)
    prompt_display, suffix = truncate_prompt(request.prompt, 60)
    logger.info("Generated image for prompt %r%s", prompt_display, suffix)

    return CallToolResult(content=[TextContent(type="text", text=format_json(payload))])


async def dispatch_tool(
    client: OhMyGPTClient, cache: RecentGenerations, name: str, arguments: Any
) -> CallToolResult:
    """Route a tool call to its handler.

    Raises:
        McpError: METHOD_NOT_FOUND for unknown tool names
    """
    if name == GENERATE_IMAGE_TOOL:
        return await handle_generate_image(client, cache, arguments)
    raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))


def resource_uri(index: int) -> str:
    """URI of the cached generation currently at ``index``."""
    return f"{RESOURCE_URI_PREFIX}{index}"


def handle_list_resources(cache: RecentGenerations) -> list[Resource]:
    """List cached generations as resources, newest first."""
    resources = []
    for index, generation in enumerate(cache.records()):
        prompt_display, suffix = truncate_prompt(generation.prompt, 30)
        resources.append(
            Resource(
                uri=resource_uri(index),
                name=f"Recent image: {prompt_display}{suffix}",
                mimeType=RESOURCE_MIME_TYPE,
                description=(
                    f"Image generation for: {generation.prompt} "
                    f"({generation.timestamp.isoformat()})"
                ),
            )
        )
    return resources


def handle_list_resource_templates() -> list[ResourceTemplate]:
    """Describe the positional URI scheme for cached generations."""
    return [
        ResourceTemplate(
            uriTemplate=RESOURCE_URI_TEMPLATE,
            name="Recent image",
            description="Upstream response for a recent generation (0 = most recent)",
            mimeType=RESOURCE_MIME_TYPE,
        )
    ]


def handle_read_resource(cache: RecentGenerations, uri: str) -> list[ReadResourceContents]:
    """Read a cached generation by its positional URI.

    Raises:
        McpError: INVALID_REQUEST for unknown URIs or indexes out of range
    """
    match = _RESOURCE_URI_PATTERN.match(uri)
    if not match:
        raise McpError(ErrorData(code=INVALID_REQUEST, message=f"Unknown resource: {uri}"))

    index = int(match.group(1))
    generation = cache.get(index)
    if generation is None:
        raise McpError(
            ErrorData(code=INVALID_REQUEST, message=f"Image generation not found: {index}")
        )

    return [
        ReadResourceContents(
            content=format_json(generation.response), mime_type=RESOURCE_MIME_TYPE
        )
    ]
