"""Client configuration loaded from the environment."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REDIS_SERVER = "localhost:6379"


def parse_redis_server(value: str) -> tuple[str, int]:
    """Split a host:port address, rejecting malformed ones with ValueError."""
    host, sep, port = value.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"redis_server must be in host:port form, got {value!r}")
    if not 0 < int(port) < 65536:
        raise ValueError("redis_server port must be between 1 and 65535")
    return host, int(port)


class ClientSettings(BaseSettings):
    """Producer client configuration.

    Every field can be set through a ``KIQFORGE_``-prefixed environment
    variable (e.g. ``KIQFORGE_REDIS_NAMESPACE=staging``). Settings are read
    once, before connect().
    """

    model_config = SettingsConfigDict(
        env_prefix="KIQFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis connection
    redis_server: str = Field(
        default=DEFAULT_REDIS_SERVER,
        description="Redis server address as host:port",
    )

    redis_namespace: str = Field(
        default="",
        description="Key prefix shared with compatible consumers (empty = none)",
    )

    redis_max_idle: int = Field(
        default=1,
        ge=1,
        le=1000,
        description="Maximum pooled connections kept for reuse",
    )

    redis_db: int = Field(default=0, ge=0, description="Redis logical database")

    redis_password: str | None = Field(default=None, description="Redis AUTH password")

    socket_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Socket timeout for Redis commands (None = block)",
    )

    pool_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Seconds to wait for a free pooled connection",
    )

    # Registration defaults
    default_queue: str = Field(
        default="default",
        min_length=1,
        description="Queue used when a worker is registered without one",
    )

    default_max_retries: int = Field(
        default=25,
        ge=0,
        description="Retry budget used when a worker is registered without one",
    )

    # Environment
    environment: Literal["development", "production", "test"] = Field(
        default="development",
        description="Runtime environment",
    )

    @field_validator("redis_server")
    @classmethod
    def validate_redis_server(cls, v: str) -> str:
        """Ensure redis_server is host:port with a numeric port."""
        parse_redis_server(v)
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def redis_host(self) -> str:
        """Host part of redis_server."""
        return parse_redis_server(self.redis_server)[0]

    @property
    def redis_port(self) -> int:
        """Port part of redis_server."""
        return parse_redis_server(self.redis_server)[1]


@lru_cache
def get_settings() -> ClientSettings:
    """Get cached settings instance loaded from the environment."""
    return ClientSettings()
