"""
metaphor-client - Settings-driven observability setup

Applications that configure the client through METAPHOR_* environment
variables call configure_observability() once at startup instead of wiring
configure_logging() and configure_tracing() by hand.
"""

from metaphor_client.core.config import MetaphorSettings
from metaphor_client.core.logging import SERVICE_NAME, configure_logging
from metaphor_client.core.tracing import configure_tracing


def configure_observability(settings: MetaphorSettings | None = None) -> None:
    """Configure logging, and tracing when enabled, from settings.

    Both underlying configurations are one-time, so repeated calls are
    ignored.

    Args:
        settings: Settings to read; loaded from the environment when omitted
    """
    settings = settings or MetaphorSettings()

    configure_logging(log_level=settings.log_level, json_output=settings.log_json)

    if settings.tracing_enabled:
        configure_tracing(
            service_name=SERVICE_NAME,
            console_export=settings.tracing_console_export,
        )
