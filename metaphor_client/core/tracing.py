"""
metaphor-client - OpenTelemetry Tracing Module

Each public client operation runs inside a span named ``metaphor.<operation>``.
Until configure_tracing() (or the host application) installs a provider the
spans are no-ops.
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

# Module-level flag for one-time configuration
_configured: bool = False

SERVICE_NAME = "metaphor-client"


def configure_tracing(
    service_name: str = SERVICE_NAME,
    console_export: bool = True,
) -> None:
    """Configure OpenTelemetry tracing.

    Must be called at most once; later calls are ignored.

    Args:
        service_name: Name of the service for trace attribution
        console_export: Whether to export spans to console (for development)
    """
    global _configured

    if _configured:
        return

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": "0.1.0",
        }
    )

    provider = TracerProvider(resource=resource)

    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    _configured = True


def get_tracer(name: str) -> Any:
    """Get a tracer instance for creating spans.

    Args:
        name: Tracer name (typically module name)

    Returns:
        OpenTelemetry Tracer instance
    """
    return trace.get_tracer(name)


def reset_tracing() -> None:
    """Reset tracing configuration for testing."""
    global _configured
    _configured = False
