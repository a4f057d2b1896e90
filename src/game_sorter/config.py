"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation,
type coercion, and sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigMissingError(Exception):
    """Raised when credentials required by an upstream are not configured."""

    def __init__(self, message: str, *, variables: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.variables = variables


class RawgAPIConfig(BaseSettings):
    """RAWG catalog configuration (reached through the RapidAPI gateway)."""

    model_config = SettingsConfigDict(env_prefix="RAPIDAPI_", env_file=".env", extra="ignore")

    key: SecretStr | None = Field(
        default=None,
        description="RapidAPI key subscribed to the RAWG API",
    )
    host: str | None = Field(
        default=None,
        description="RapidAPI host header value for the RAWG API",
    )
    base_url: str = Field(
        default="https://rawg-video-games-database.p.rapidapi.com",
        description="Base URL of the RAWG gateway",
    )
    timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        le=60.0,
        description="HTTP request timeout in seconds",
    )

    @field_validator("host", mode="before")
    @classmethod
    def blank_host_is_missing(cls, v: str | None) -> str | None:
        """Treat an empty host variable as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def require_credentials(self) -> tuple[str, str]:
        """
        Return (key, host), failing if either is missing.

        Raises:
            ConfigMissingError: If RAPIDAPI_KEY or RAPIDAPI_HOST is absent
        """
        key = self.key.get_secret_value() if self.key else ""
        if not key or not self.host:
            raise ConfigMissingError(
                "The game API key or host is not configured on the server.",
                variables=("RAPIDAPI_KEY", "RAPIDAPI_HOST"),
            )
        return key, self.host


class GiantBombAPIConfig(BaseSettings):
    """Giant Bomb catalog configuration."""

    model_config = SettingsConfigDict(env_prefix="GIANTBOMB_", env_file=".env", extra="ignore")

    api_key: SecretStr | None = Field(
        default=None,
        description="Giant Bomb API key from https://www.giantbomb.com/api/",
    )
    base_url: str = Field(
        default="https://www.giantbomb.com/api",
        description="Base URL for the Giant Bomb API",
    )
    timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        le=60.0,
        description="HTTP request timeout in seconds",
    )
    min_request_interval_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Minimum spacing between requests (velocity limit)",
    )

    def require_credentials(self) -> str:
        """
        Return the API key, failing if it is missing.

        Raises:
            ConfigMissingError: If GIANTBOMB_API_KEY is absent
        """
        key = self.api_key.get_secret_value() if self.api_key else ""
        if not key:
            raise ConfigMissingError(
                "The Giant Bomb API key is not configured on the server.",
                variables=("GIANTBOMB_API_KEY",),
            )
        return key


class SamplerConfig(BaseSettings):
    """Random game sampling configuration."""

    model_config = SettingsConfigDict(env_prefix="SAMPLER_", env_file=".env", extra="ignore")

    retry_budget: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum sampling attempts per request",
    )
    attempt_timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="Upper bound for a single page+detail attempt",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides
    a single entry point for configuration access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )

    # Sub-configurations
    rawg: RawgAPIConfig = Field(default_factory=RawgAPIConfig)
    giantbomb: GiantBombAPIConfig = Field(default_factory=GiantBombAPIConfig)
    sampler: SamplerConfig = Field(default_factory=SamplerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once per process (one warm serverless
    container) and reused across invocations.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
