"""Flux Image MCP Server - OhMyGPT Flux 1.1 Pro Ultra image generation over MCP."""

__version__ = "0.1.0"

from .cache import RecentGenerations  # noqa: E402
from .client import FluxAPIError, OhMyGPTClient, get_client  # noqa: E402
from .config import Settings, get_settings  # noqa: E402
from .server import create_server, main  # noqa: E402

__all__ = [
    "FluxAPIError",
    "OhMyGPTClient",
    "RecentGenerations",
    "Settings",
    "create_server",
    "get_client",
    "get_settings",
    "main",
]
