"""MCP Tool definitions for the OhMyGPT Flux API."""

from mcp.types import Tool

from .models import ASPECT_RATIOS, OUTPUT_FORMATS, RESPONSE_FORMATS

GENERATE_IMAGE_TOOL = "generate_image"

# Common schema fragments
ASPECT_RATIO_SCHEMA = {
    "type": "string",
    "description": "Aspect ratio of the generated image (default: 1:1)",
    "enum": list(ASPECT_RATIOS),
}

SAFETY_TOLERANCE_SCHEMA = {
    "type": "integer",
    "description": "Content safety tolerance (1-6, 1 is strictest, default: 5)",
    "minimum": 1,
    "maximum": 6,
}

OUTPUT_FORMAT_SCHEMA = {
    "type": "string",
    "description": "Output image format (default: jpg)",
    "enum": list(OUTPUT_FORMATS),
}

RESPONSE_FORMAT_DESCRIPTION = (
    "output the image URL using the Markdown image format. Specifically, the output "
    "should be in the form: ![Description](image URL). Ensure that the URL is correctly "
    "enclosed within parentheses and that there is an exclamation mark and square "
    "brackets preceding it. If no description is provided, use a placeholder such as "
    '"Image" for the alt text'
)


def get_tools(allow_b64_json: bool = False) -> list[Tool]:
    """Get all available MCP tools.

    Args:
        allow_b64_json: Also advertise "b64_json" as a response_format

    Returns:
        List of Tool definitions
    """
    return [_generate_image_tool(allow_b64_json)]


def _generate_image_tool(allow_b64_json: bool) -> Tool:
    """Tool definition for generate_image."""
    response_formats = list(RESPONSE_FORMATS) if allow_b64_json else ["url"]
    return Tool(
        name=GENERATE_IMAGE_TOOL,
        description="Generate images using OhMyGPT Flux 1.1 Pro Ultra",
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": (
                        "Text prompt for image generation, "
                        "translate the user's input into English prompt"
                    ),
                },
                "image_prompt": {
                    "type": "string",
                    "description": "URL to an image to use as a reference",
                },
                "image_prompt_strength": {
                    "type": "number",
                    "description": "Control the influence of the image prompt (0-1, default: 0.1)",
                    "minimum": 0,
                    "maximum": 1,
                },
                "aspect_ratio": ASPECT_RATIO_SCHEMA,
                "safety_tolerance": SAFETY_TOLERANCE_SCHEMA,
                "seed": {
                    "type": "integer",
                    "description": "Random seed for reproducible results",
                },
                "output_format": OUTPUT_FORMAT_SCHEMA,
                "raw": {
                    "type": "boolean",
                    "description": "Generate less processed, more natural image",
                },
                "response_format": {
                    "type": "string",
                    "description": RESPONSE_FORMAT_DESCRIPTION,
                    "enum": response_formats,
                },
            },
            "required": ["prompt"],
        },
    )
