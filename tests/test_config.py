"""Tests for client settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kiqforge.config import ClientSettings, get_settings, parse_redis_server


def test_defaults() -> None:
    """Test default configuration."""
    with patch.dict(os.environ, {}, clear=True):
        settings = ClientSettings(_env_file=None)  # type: ignore[call-arg]

    assert settings.redis_server == "localhost:6379"
    assert settings.redis_namespace == ""
    assert settings.redis_max_idle == 1
    assert settings.default_queue == "default"
    assert settings.environment == "development"


def test_settings_from_env() -> None:
    """Test that prefixed environment variables are read."""
    env_vars = {
        "KIQFORGE_REDIS_SERVER": "redis.internal:6380",
        "KIQFORGE_REDIS_NAMESPACE": "staging",
        "KIQFORGE_REDIS_MAX_IDLE": "4",
        "KIQFORGE_ENVIRONMENT": "production",
    }
    with patch.dict(os.environ, env_vars, clear=True):
        settings = ClientSettings(_env_file=None)  # type: ignore[call-arg]

    assert settings.redis_host == "redis.internal"
    assert settings.redis_port == 6380
    assert settings.redis_namespace == "staging"
    assert settings.redis_max_idle == 4
    assert settings.is_production


def test_invalid_redis_server() -> None:
    """Test redis_server format validation."""
    for invalid in ["localhost", ":6379", "localhost:port", "localhost:70000"]:
        with pytest.raises(ValidationError):
            ClientSettings(_env_file=None, redis_server=invalid)  # type: ignore[call-arg]


def test_max_idle_bounds() -> None:
    with pytest.raises(ValidationError):
        ClientSettings(_env_file=None, redis_max_idle=0)  # type: ignore[call-arg]


def test_get_settings_cached() -> None:
    """Test that get_settings returns cached instance."""
    get_settings.cache_clear()
    with patch.dict(os.environ, {}, clear=True):
        first = get_settings()
        second = get_settings()

    assert first is second
    get_settings.cache_clear()


def test_parse_redis_server() -> None:
    assert parse_redis_server("cache.local:6380") == ("cache.local", 6380)

    with pytest.raises(ValueError):
        parse_redis_server("cache.local")
