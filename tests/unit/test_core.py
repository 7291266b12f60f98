"""
Core Module Tests

Settings, exception hierarchy, one-time logging and tracing configuration,
and the settings-driven observability setup.
"""

from unittest.mock import patch

import pytest
import structlog

from metaphor_client.core import logging as log_module
from metaphor_client.core import observability as observability_module
from metaphor_client.core import tracing as tracing_module
from metaphor_client.core.config import MetaphorSettings, get_settings
from metaphor_client.core.exceptions import (
    ConfigurationError,
    DecodeError,
    EmptyResultError,
    EmptyResultKind,
    MalformedErrorResponse,
    MetaphorError,
    RequestBuildError,
    ServerError,
    TransportError,
)

# =============================================================================
# Settings
# =============================================================================


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("METAPHOR_API_KEY", "METAPHOR_BASE_URL", "METAPHOR_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        settings = MetaphorSettings(_env_file=None)

        assert settings.api_key == ""
        assert settings.base_url == "https://api.metaphor.systems"
        assert settings.timeout == 30.0
        assert settings.log_level == "INFO"

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("METAPHOR_API_KEY", "from-env")
        monkeypatch.setenv("METAPHOR_TIMEOUT", "4.5")

        settings = get_settings()

        assert settings.api_key == "from-env"
        assert settings.timeout == 4.5


# =============================================================================
# Exceptions
# =============================================================================


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "error_type",
        [
            ConfigurationError,
            RequestBuildError,
            TransportError,
            ServerError,
            MalformedErrorResponse,
            DecodeError,
            EmptyResultError,
        ],
    )
    def test_all_errors_share_base(self, error_type: type) -> None:
        assert issubclass(error_type, MetaphorError)

    def test_server_error_carries_message(self) -> None:
        error = ServerError("rate limited", 429)

        assert error.message == "rate limited"
        assert error.status_code == 429
        assert "rate limited" in str(error)

    def test_empty_result_error_message(self) -> None:
        error = EmptyResultError(EmptyResultKind.NO_CONTENTS)

        assert str(error) == "no content was extracted"
        assert error.response is None


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def clean_logging():
    log_module.reset_logging()
    yield
    log_module.reset_logging()


class TestLogging:
    def test_configure_is_idempotent(self, clean_logging) -> None:
        log_module.configure_logging(log_level="DEBUG", json_output=False)
        assert log_module._configured is True

        log_module.configure_logging(log_level="ERROR")

        assert structlog.is_configured()

    def test_reset_clears_flag(self, clean_logging) -> None:
        log_module.configure_logging()

        log_module.reset_logging()

        assert log_module._configured is False

    def test_add_service_info(self) -> None:
        event = log_module.add_service_info(None, "info", {"event": "x"})  # type: ignore[arg-type]

        assert event["service"] == "metaphor-client"

    def test_get_logger_returns_bindable_logger(self) -> None:
        logger = log_module.get_logger("tests")

        assert hasattr(logger, "bind")


# =============================================================================
# Tracing
# =============================================================================


class TestTracing:
    def test_configure_is_one_time(self) -> None:
        tracing_module.reset_tracing()
        try:
            tracing_module.configure_tracing(console_export=False)
            assert tracing_module._configured is True

            tracing_module.configure_tracing(console_export=False)
            assert tracing_module._configured is True
        finally:
            tracing_module.reset_tracing()

    def test_get_tracer_starts_spans(self) -> None:
        tracer = tracing_module.get_tracer("tests")

        with tracer.start_as_current_span("metaphor.search") as span:
            assert span is not None


# =============================================================================
# Settings-driven observability
# =============================================================================


class TestConfigureObservability:
    def test_logging_follows_settings(self) -> None:
        settings = MetaphorSettings(api_key="k", log_level="DEBUG", log_json=False)

        with (
            patch.object(observability_module, "configure_logging") as configure_logging,
            patch.object(observability_module, "configure_tracing") as configure_tracing,
        ):
            observability_module.configure_observability(settings)

        configure_logging.assert_called_once_with(log_level="DEBUG", json_output=False)
        configure_tracing.assert_not_called()

    def test_tracing_only_when_enabled(self) -> None:
        settings = MetaphorSettings(
            api_key="k",
            tracing_enabled=True,
            tracing_console_export=True,
        )

        with (
            patch.object(observability_module, "configure_logging"),
            patch.object(observability_module, "configure_tracing") as configure_tracing,
        ):
            observability_module.configure_observability(settings)

        configure_tracing.assert_called_once_with(
            service_name="metaphor-client",
            console_export=True,
        )

    def test_reads_environment_when_no_settings_given(
        self, monkeypatch: pytest.MonkeyPatch, clean_logging
    ) -> None:
        monkeypatch.setenv("METAPHOR_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("METAPHOR_TRACING_ENABLED", "false")

        observability_module.configure_observability()

        assert log_module._configured is True
        assert tracing_module._configured is False
