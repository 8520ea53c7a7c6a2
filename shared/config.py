"""
Shared configuration management for the document submission client.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEMO_ENV = "https://markirovka.demo.crpt.tech"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOCS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")


class DocumentsSettings(BaseConfig):
    """Settings for the document submission client."""

    # Remote API
    base_url: str = Field(default=DEMO_ENV)
    http_timeout_seconds: float = Field(default=30.0)

    # Quota: at most request_limit calls per request_interval_seconds
    request_limit: int = Field(default=5)
    request_interval_seconds: float = Field(default=1.0)

    # Bearer token lifetime, chosen client-side
    token_ttl_seconds: float = Field(default=10 * 60 * 60)

    # Demo
    product_group: str = Field(default="electronics")


def get_settings(**overrides) -> DocumentsSettings:
    """Get client settings from the environment, with optional overrides."""
    return DocumentsSettings(**overrides)
