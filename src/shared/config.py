"""Configuration management for the PayPal MCP Server.

Settings come from environment variables (or a .env file), optionally
seeded from a YAML file. Configuration is loaded once and cached.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.errors import ConfigError
from shared.logging import LOG_LEVELS, get_logger

logger = get_logger(__name__)

API_BASE_URLS = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}


class PayPalSettings(BaseSettings):
    """PayPal REST API credentials and environment."""
    client_id: str = Field(..., min_length=1, description="REST app client ID")
    client_secret: str = Field(..., min_length=1, description="REST app client secret")
    environment: str = Field(default="sandbox", description="sandbox or live")
    token_cache_seconds: int = Field(
        default=3500,
        gt=0,
        description="Upper bound on how long an access token is cached",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAYPAL_",
        env_file=".env",
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def _check_environment(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in API_BASE_URLS:
            raise ValueError(
                f"Invalid PayPal environment: {value}. Must be 'sandbox' or 'live'."
            )
        return value

    @property
    def api_base_url(self) -> str:
        """Base URL of the REST API for the configured environment."""
        return API_BASE_URLS[self.environment]


class ServerSettings(BaseSettings):
    """Server, logging and outbound request configuration."""
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8001)
    log_level: str = Field(default="info")
    log_json: bool = Field(default=False)

    # Milliseconds
    request_timeout: int = Field(default=30000, gt=0)
    max_retries: int = Field(default=3, ge=0)
    retry_delay: int = Field(default=1000, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.strip().lower()
        if value == "warning":
            return "warn"
        if value not in LOG_LEVELS:
            logger.warning("Invalid log level, defaulting to 'info'", log_level=value)
            return "info"
        return value

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout / 1000

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay / 1000


class Settings(BaseSettings):
    """Main application settings."""
    paypal: PayPalSettings = Field(default_factory=PayPalSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """
        Load settings from a YAML file.

        Environment variables still apply; values in the file take precedence.
        A missing file or an empty section yields environment-only settings.

        Raises:
            ConfigError: If the file is not valid YAML or a section is not a mapping
        """
        data = load_yaml_config(path)
        return cls(
            paypal=PayPalSettings(**_section(data, "paypal", path)),
            server=ServerSettings(**_section(data, "server", path)),
        )


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file."""
    path = Path(path)
    if not path.exists():
        return {}

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def _section(data: dict[str, Any], name: str, path: str | Path) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' in {path} must be a mapping")
    return section


_ENV_PREFIXES = {
    "PayPalSettings": "PAYPAL_",
    "ServerSettings": "",
}


def _describe_errors(exc: ValidationError) -> str:
    """Render pydantic errors using environment variable names."""
    prefix = _ENV_PREFIXES.get(exc.title, "")
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        if error["type"] == "missing":
            messages.append(f"Missing required environment variable: {prefix}{field.upper()}")
        else:
            messages.append(f"{prefix}{field.upper()}: {error['msg']}")
    return "; ".join(messages)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """
    Build settings, converting validation failures into ConfigError.

    Raises:
        ConfigError: If required values are missing or invalid
    """
    if config_path is None:
        config_path = os.environ.get("PAYPAL_MCP_CONFIG_PATH", "config/settings.yaml")
    try:
        return Settings.from_yaml(config_path)
    except ValidationError as e:
        raise ConfigError(_describe_errors(e)) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return load_settings()
