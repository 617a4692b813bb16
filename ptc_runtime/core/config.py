"""
Configuration Settings.

This module defines the runtime configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ptc_runtime.schemas.execution import ExecutorOptions

# =====================================================================
# Host Connection Configuration Models
# =====================================================================


class HostConfig(BaseModel):
    """Host session API configuration."""

    base_url: str = Field(
        default="http://localhost:4096", alias="PTC_HOST_BASE_URL", description="Base URL of the host session API"
    )
    auth_token: Optional[str] = Field(
        default=None, alias="PTC_HOST_AUTH_TOKEN", description="Optional bearer token sent to the host API"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        alias="PTC_HOST_REQUEST_TIMEOUT_SECONDS",
        description="Per-request timeout in seconds for host API calls",
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class PtcSettings(BaseSettings):
    """
    Runtime settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Execution Policy
    # =====================================================================
    execution_timeout_ms: int = Field(
        default=300000,
        ge=1,
        description="Wall-clock budget for one code execution, in milliseconds",
        alias="PTC_EXECUTION_TIMEOUT_MS",
    )
    max_tool_calls: int = Field(
        default=100,
        ge=0,
        description="Maximum number of capability invocations allowed per execution",
        alias="PTC_MAX_TOOL_CALLS",
    )
    cancel_on_timeout: bool = Field(
        default=False,
        description="Cancel the running snippet when the deadline expires instead of leaving it in the background",
        alias="PTC_CANCEL_ON_TIMEOUT",
    )

    # =====================================================================
    # Host Connection
    # =====================================================================
    host_base_url: str = Field(
        default="http://localhost:4096",
        description="Base URL of the host session API",
        alias="PTC_HOST_BASE_URL",
    )
    host_auth_token: Optional[str] = Field(
        default=None,
        description="Optional bearer token sent to the host API",
        alias="PTC_HOST_AUTH_TOKEN",
    )
    host_request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds for host API calls",
        alias="PTC_HOST_REQUEST_TIMEOUT_SECONDS",
    )

    # =====================================================================
    # Logging
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="PTC_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log line format (simple, detailed, json)",
        alias="PTC_LOG_FORMAT",
    )
    enable_file_logging: bool = Field(
        default=False,
        description="Whether to also write logs to a file under log_file_dir",
        alias="PTC_ENABLE_FILE_LOGGING",
    )
    log_file_dir: str = Field(
        default="logs",
        description="Directory for the log file when file logging is enabled",
        alias="PTC_LOG_FILE_DIR",
    )

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def host(self) -> HostConfig:
        """Get host connection configuration from environment variables."""
        return HostConfig.model_validate(self.model_dump(by_alias=True))

    def executor_options(
        self,
        *,
        timeout_ms: Optional[int] = None,
        max_tool_calls: Optional[int] = None,
    ) -> ExecutorOptions:
        """Build executor options, letting per-request values override the configured ones."""
        return ExecutorOptions(
            timeout_ms=timeout_ms if timeout_ms is not None else self.execution_timeout_ms,
            max_tool_calls=max_tool_calls if max_tool_calls is not None else self.max_tool_calls,
            cancel_on_timeout=self.cancel_on_timeout,
        )


settings = PtcSettings()
