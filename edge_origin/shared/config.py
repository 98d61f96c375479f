"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EDGE_ORIGIN_",
        case_sensitive=False,
        extra="ignore",
    )

    origin: str = Field(
        default="",
        description="Upstream: http(s)://host[:port], a base directory, or empty for no-op",
    )
    host: str = Field(default="127.0.0.1", description="Bind address for the edge service")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port for the edge service")
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """Get the application settings instance."""
    return Settings()
