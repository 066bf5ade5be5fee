"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (optionally seeded
from a .env file) with validation, type coercion, and sensible defaults.
"""

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, *, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class SteamAPIConfig(BaseSettings):
    """Steam API specific configuration."""

    model_config = SettingsConfigDict(env_prefix="STEAM_", populate_by_name=True)

    api_key: SecretStr = Field(
        default=...,
        validation_alias=AliasChoices("STEAM_API_KEY", "API_KEY"),
        description="Steam Web API key from https://steamcommunity.com/dev/apikey",
    )
    steam_id: str = Field(
        default=...,
        validation_alias=AliasChoices("STEAM_ID_64", "STEAM_ACCOUNT_ID"),
        description="64-bit Steam account ID whose library is scanned",
    )
    base_url: str = Field(
        default="https://api.steampowered.com",
        description="Base URL for Steam Web API",
    )
    store_url: str = Field(
        default="https://store.steampowered.com/api",
        description="Base URL for Steam Store API",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="HTTP request timeout in seconds (None waits indefinitely)",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: SecretStr) -> SecretStr:
        """Reject blank API keys."""
        if not v.get_secret_value().strip():
            raise ValueError("API key must not be empty")
        return v

    @field_validator("steam_id")
    @classmethod
    def validate_steam_id(cls, v: str) -> str:
        """Reject blank account IDs."""
        v = v.strip()
        if not v:
            raise ValueError("Steam ID must not be empty")
        return v

    @field_validator("base_url", "store_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class ProbeConfig(BaseSettings):
    """Platform probe configuration."""

    model_config = SettingsConfigDict(env_prefix="PROBE_")

    platform: Literal["mac", "linux", "windows"] = Field(
        default="mac",
        description="Operating system whose support is checked",
    )
    max_in_flight: int | None = Field(
        default=None,
        ge=1,
        description="Maximum concurrent store lookups (None is unbounded)",
    )


class OutputConfig(BaseSettings):
    """Output file configuration."""

    model_config = SettingsConfigDict(env_prefix="OUTPUT_")

    dir: Path = Field(
        default=Path("."),
        description="Directory receiving the two game lists",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections. Built once at startup
    and handed to the components that need it.
    """

    model_config = SettingsConfigDict(extra="ignore")

    steam: SteamAPIConfig = Field(default_factory=SteamAPIConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(env_file: Path | str | None = ".env") -> Settings:
    """
    Load application settings from the environment.

    Variables already present in the environment take precedence
    over those read from ``env_file``.

    Args:
        env_file: Optional dotenv file to seed the environment from

    Returns:
        Settings: Validated configuration

    Raises:
        ConfigurationError: If required values are missing or invalid
    """
    if env_file is not None:
        load_dotenv(env_file)

    try:
        return Settings()
    except ValidationError as e:
        fields = [str(err["loc"][-1]) for err in e.errors() if err["loc"]]
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields) or e}",
            fields=fields,
        ) from e
