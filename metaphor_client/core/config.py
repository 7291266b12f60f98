"""
metaphor-client - Configuration

Default request values, endpoint paths and environment-driven settings.

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix METAPHOR_ (e.g. METAPHOR_API_KEY)
- Module constants instead of duplicated literals
"""

from typing import Final

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# Default Request Values
# =============================================================================

DEFAULT_NUM_RESULTS: Final[int] = 10
DEFAULT_AUTOPROMPT: Final[bool] = False
DEFAULT_SEARCH_TYPE: Final[str] = "neural"

# =============================================================================
# Endpoint Defaults
# =============================================================================

DEFAULT_BASE_URL: Final[str] = "https://api.metaphor.systems"
DEFAULT_TIMEOUT: Final[float] = 30.0

SEARCH_PATH: Final[str] = "/search"
FIND_SIMILAR_PATH: Final[str] = "/findSimilar"
CONTENTS_PATH: Final[str] = "/contents"

SUCCESS_STATUS: Final[int] = 200


class EndpointConfig(BaseModel):
    """Where and how a client talks to the service. Fixed per client instance."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


class MetaphorSettings(BaseSettings):
    """Client settings loaded from environment variables.

    All settings can be overridden via environment variables with METAPHOR_ prefix.
    Example: METAPHOR_API_KEY=..., METAPHOR_BASE_URL=http://localhost:8080
    """

    # Endpoint configuration
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Tracing configuration
    tracing_enabled: bool = False
    tracing_console_export: bool = False

    model_config = SettingsConfigDict(
        env_prefix="METAPHOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> MetaphorSettings:
    """Get client settings instance.

    Returns:
        MetaphorSettings instance with values from environment
    """
    return MetaphorSettings()
