"""Application settings and configuration.

This module defines all configuration options for the Subsocial reader.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Subsocial Reader", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Chain struct gateway (JSON read API in front of the Subsocial node)
    chain_gateway_url: str = Field(default="http://localhost:3011", alias="CHAIN_GATEWAY_URL")

    # Content store: direct IPFS gateway, or the offchain server when configured
    ipfs_gateway_url: str = Field(default="https://ipfs.subsocial.network", alias="IPFS_GATEWAY_URL")
    offchain_url: str | None = Field(default=None, alias="OFFCHAIN_URL")
    content_http_method: Literal["get", "post"] = Field(default="get", alias="CONTENT_HTTP_METHOD")

    http_timeout_seconds: float = Field(default=10.0, alias="HTTP_TIMEOUT_SECONDS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_methods: list[str] = Field(
        default=["GET", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def uses_offchain(self) -> bool:
        """Return True when content should be fetched through the offchain server."""
        return bool(self.offchain_url)


settings = Settings()
