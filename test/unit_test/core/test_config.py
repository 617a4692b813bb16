"""Unit tests for the runtime settings model.

Tests verify that PtcSettings binds its PTC_* environment variables and that
the grouped views (host connection, executor options) reflect them.
"""

import pytest

from ptc_runtime.core.config import HostConfig, PtcSettings
from ptc_runtime.schemas.execution import ExecutorOptions


class TestSettingsDefaults:
    """Test defaults when no environment variables are set."""

    def test_execution_defaults(self):
        settings = PtcSettings(_env_file=None)

        assert settings.execution_timeout_ms == 300000
        assert settings.max_tool_calls == 100
        assert settings.cancel_on_timeout is False

    def test_host_defaults(self):
        host = PtcSettings(_env_file=None).host

        assert isinstance(host, HostConfig)
        assert host.base_url == "http://localhost:4096"
        assert host.auth_token is None
        assert host.request_timeout_seconds == 30.0


class TestSettingsBinding:
    """Test environment variable binding."""

    def test_execution_policy_binding(self, monkeypatch):
        monkeypatch.setenv("PTC_EXECUTION_TIMEOUT_MS", "1500")
        monkeypatch.setenv("PTC_MAX_TOOL_CALLS", "7")
        monkeypatch.setenv("PTC_CANCEL_ON_TIMEOUT", "true")

        settings = PtcSettings(_env_file=None)

        assert settings.execution_timeout_ms == 1500
        assert settings.max_tool_calls == 7
        assert settings.cancel_on_timeout is True

    def test_host_binding(self, monkeypatch):
        monkeypatch.setenv("PTC_HOST_BASE_URL", "http://127.0.0.1:5000")
        monkeypatch.setenv("PTC_HOST_AUTH_TOKEN", "s3cret")
        monkeypatch.setenv("PTC_HOST_REQUEST_TIMEOUT_SECONDS", "2.5")

        host = PtcSettings(_env_file=None).host

        assert host.base_url == "http://127.0.0.1:5000"
        assert host.auth_token == "s3cret"
        assert host.request_timeout_seconds == 2.5

    def test_logging_binding(self, monkeypatch):
        monkeypatch.setenv("PTC_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PTC_LOG_FORMAT", "json")
        monkeypatch.setenv("PTC_ENABLE_FILE_LOGGING", "1")

        settings = PtcSettings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.enable_file_logging is True

    def test_env_names_are_case_sensitive(self, monkeypatch):
        monkeypatch.setenv("ptc_max_tool_calls", "3")
        assert PtcSettings(_env_file=None).max_tool_calls == 100

    def test_invalid_timeout_is_rejected(self, monkeypatch):
        monkeypatch.setenv("PTC_EXECUTION_TIMEOUT_MS", "0")
        with pytest.raises(ValueError):
            PtcSettings(_env_file=None)


class TestExecutorOptions:
    """Test building executor options from settings."""

    def test_uses_configured_values(self):
        settings = PtcSettings(_env_file=None, execution_timeout_ms=2000, max_tool_calls=5, cancel_on_timeout=True)

        options = settings.executor_options()

        assert options == ExecutorOptions(timeout_ms=2000, max_tool_calls=5, cancel_on_timeout=True)

    def test_per_request_overrides(self):
        settings = PtcSettings(_env_file=None, execution_timeout_ms=2000, max_tool_calls=5)

        options = settings.executor_options(timeout_ms=10, max_tool_calls=0)

        assert options.timeout_ms == 10
        assert options.max_tool_calls == 0
        assert options.cancel_on_timeout is False
