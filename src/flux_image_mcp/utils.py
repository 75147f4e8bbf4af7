"""Utility functions for request building and response formatting."""

import json
from decimal import Decimal
from typing import Any

from mcp.types import TextContent

from .models import GenerationRequest


def format_number(value: float) -> str:
    """Render a number in plain positional notation (``1``, ``0.3``, ``0.00001``).

    Uses the shortest repr digits, so no binary rounding noise is added.
    """
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def build_form_fields(request: GenerationRequest, model: str) -> dict[str, str]:
    """Map a validated request to the upstream form fields.

    Optional fields that were not supplied are left out entirely so the
    upstream service applies its own defaults.

    Args:
        request: Validated generation request
        model: Upstream model identifier

    Returns:
        Ordered mapping of form field names to string values
    """
    fields = {"model": model, "prompt": request.prompt}

    if request.image_prompt:
        fields["image_prompt"] = request.image_prompt
    if request.image_prompt_strength is not None:
        fields["image_prompt_strength"] = format_number(request.image_prompt_strength)
    if request.aspect_ratio is not None:
        fields["aspect_ratio"] = request.aspect_ratio
    if request.safety_tolerance is not None:
        fields["safety_tolerance"] = str(request.safety_tolerance)
    if request.seed is not None:
        fields["seed"] = str(request.seed)
    if request.output_format is not None:
        fields["output_format"] = request.output_format
    if request.raw is not None:
        fields["raw"] = "true" if request.raw else "false"
    if request.response_format is not None:
        fields["response_format"] = request.response_format

    return fields


def format_json(payload: Any) -> str:
    """Pretty-print an upstream payload for display."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def truncate_prompt(prompt: str, max_length: int = 100) -> tuple[str, str]:
    """Truncate a prompt for display.

    Args:
        prompt: The prompt text
        max_length: Maximum length before truncation

    Returns:
        Tuple of (truncated_prompt, suffix) where suffix is "..." if truncated
    """
    if len(prompt) > max_length:
        return prompt[:max_length], "..."
    return prompt, ""


def format_error_response(message: str) -> TextContent:
    """Format an upstream error for the caller."""
    return TextContent(type="text", text=f"OhMyGPT API error: {message}")
