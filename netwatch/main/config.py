"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from netwatch.shared import EnumEnvironment, EnumLogLevel
from netwatch.shared.env import load_secret_file_variables  # noqa: F401


class ApiSettings(BaseSettings):
    """HTTP API configuration settings."""

    title: str = Field(default="Netwatch Predictor", description="API title")
    description: str = Field(
        default="Instability prediction for hosts monitored by Zabbix",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("API_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("API_BUILD_TIME", "BUILD_TIME"),
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="API_", case_sensitive=False, extra="ignore"
    )


class ZabbixSettings(BaseSettings):
    """Zabbix API configuration settings."""

    url: str = Field(
        default="http://localhost/zabbix/", description="Zabbix frontend base URL"
    )
    token: str = Field(default="", description="Zabbix API token")
    timeout: float = Field(
        default=30.0, gt=0, description="Timeout in seconds for Zabbix API calls"
    )
    history_limit: int = Field(
        default=1000, ge=1, description="Maximum history rows fetched per item"
    )
    alerts_limit: int = Field(
        default=50, ge=1, description="Maximum active alerts returned"
    )
    metrics_host_limit: int = Field(
        default=10,
        ge=1,
        description="Hosts read for latest metrics when none are named",
    )

    model_config = SettingsConfigDict(
        env_prefix="ZABBIX_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    api: ApiSettings = Field(default_factory=ApiSettings)
    zabbix: ZabbixSettings = Field(default_factory=ZabbixSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
