"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Flux Image MCP Server settings.

    All settings can be configured via environment variables with OHMYGPT_ prefix.
    Example: OHMYGPT_API_KEY, OHMYGPT_TIMEOUT, etc.
    """

    model_config = SettingsConfigDict(
        env_prefix="OHMYGPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required
    api_key: str

    # API Configuration
    api_base_url: str = "https://api.ohmygpt.com"
    flux_endpoint: str = "/api/v1/ai/draw/flux/pro-ultra-11"
    model: str = "flux-1.1-pro-ultra"

    # HTTP Client Configuration
    timeout: float = 120.0  # seconds

    # Cache Configuration
    max_cached_generations: int = 5

    # Advertise b64_json as a response_format in the tool schema
    allow_b64_json: bool = False

    log_level: str = "INFO"


def get_settings() -> Settings:
    """Get settings instance, raising helpful error if API key is missing."""
    try:
        return Settings()  # type: ignore[call-arg]
    except Exception as e:
        if "api_key" in str(e).lower():
            raise ValueError(
                "OHMYGPT_API_KEY environment variable is required. "
                "Get your key at https://www.ohmygpt.com"
            ) from e
        raise
