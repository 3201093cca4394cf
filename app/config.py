"""Application configuration using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoConfig(BaseSettings):
    """MongoDB configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    uri: str = Field(..., description="MongoDB connection URI")
    db_name: str = Field(default="advice", description="Database name")

    # Collection names
    credentials_collection: str = Field(
        default="authentication",
        description="Collection for user credentials keyed by email",
    )
    user_requests_collection: str = Field(
        default="UserRequests",
        description="Collection for per-user request counters",
    )
    endpoint_stats_collection: str = Field(
        default="EndpointStats",
        description="Collection for per-endpoint request counters",
    )


class AuthConfig(BaseSettings):
    """Token signing and password hashing settings."""

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    secret: str = Field(..., description="Shared secret used to sign tokens")
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    expiry_minutes: int = Field(
        default=60,
        description="Token lifetime in minutes",
    )
    bcrypt_rounds: int = Field(
        default=10,
        description="bcrypt work factor for password hashes",
    )


class ServicesConfig(BaseSettings):
    """Outbound inference service settings."""

    model_config = SettingsConfigDict(
        env_prefix="SERVICES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    advice_url: str = Field(
        default="https://isa-project-flask.onrender.com/getAdvice",
        description="Advice service endpoint",
    )
    translate_url: str = Field(..., description="Translation service endpoint")
    timeout_seconds: float = Field(
        default=30,
        description="Timeout for outbound service requests",
    )


class AppConfig(BaseSettings):
    """General application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    free_request_limit: int = Field(
        default=20,
        description="Request count at which users are warned about the free tier",
    )
    cors_origins: list[str] = Field(
        default=["https://advice-generator-frontend-vp3q.vercel.app"],
        description="Origins allowed to call the API from a browser",
    )


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    # Load from .env
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    mongo: MongoConfig = Field(default_factory=MongoConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    services: ServicesConfig = Field(default_factory=ServicesConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    def configure_logging(self) -> None:
        """Configure application logging based on settings."""
        numeric_level = getattr(logging, self.app.log_level.upper(), None)
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO

        logging.basicConfig(
            level=numeric_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Quiet noisy third-party loggers
        for noisy_logger in (
            "pymongo",
            "pymongo.ocsp_support",
            "pymongo.pool",
            "pymongo.topology",
            "urllib3",
        ):
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance.

    Returns:
        Settings instance with loaded configuration.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
