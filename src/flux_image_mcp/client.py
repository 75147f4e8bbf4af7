"""Async HTTP client for the OhMyGPT Flux API."""

import logging
from typing import Any

import httpx

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


class FluxAPIError(Exception):
    """The upstream call failed at the transport or HTTP layer."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def describe_http_error(error: httpx.HTTPError) -> str:
    """Pick the most useful message for a failed request.

    Prefers the ``message`` field of a JSON error body, falling back to the
    exception's own text.
    """
    if isinstance(error, httpx.HTTPStatusError):
        try:
            body = error.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message") is not None:
            return str(body["message"])
    return str(error)


class OhMyGPTClient:
    """Async client for the OhMyGPT Flux image endpoint."""

    def __init__(self, settings_or_api_key: Settings | str | None = None):
        """Initialize client with settings or API key.

        Args:
            settings_or_api_key: Settings instance, API key string, or None to load from env.
        """
        if isinstance(settings_or_api_key, str):
            settings = Settings(api_key=settings_or_api_key)
        else:
            settings = settings_or_api_key or get_settings()

        self._api_key = settings.api_key
        self._endpoint = settings.flux_endpoint
        self.model = settings.model

        self.client = httpx.AsyncClient(
            base_url=settings.api_base_url,
            headers={
                "accept": "application/json",
                "content-type": "application/x-www-form-urlencoded",
                "Authorization": f"Bearer {self._api_key}",
            },
            timeout=settings.timeout,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    async def generate_image(self, fields: dict[str, str]) -> Any:
        """Submit a generation request.

        Args:
            fields: Form fields, already stringified

        Returns:
            The decoded JSON response, passed through as-is

        Raises:
            FluxAPIError: On transport errors, timeouts or non-2xx responses
        """
        logger.debug("POST %s (fields: %s)", self._endpoint, ", ".join(fields))
        try:
            response = await self.client.post(self._endpoint, data=fields)
            response.raise_for_status()
        except httpx.HTTPError as e:
            status_code = None
            if isinstance(e, httpx.HTTPStatusError):
                status_code = e.response.status_code
            raise FluxAPIError(describe_http_error(e), status_code=status_code) from e
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "OhMyGPTClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def get_client() -> OhMyGPTClient:
    """Get a new OhMyGPT client instance.

    Raises:
        ValueError: If OHMYGPT_API_KEY is not set
    """
    return OhMyGPTClient()
